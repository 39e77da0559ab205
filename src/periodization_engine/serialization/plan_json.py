"""JSON document export and import for engine state.

Converts a Plan, its AdaptationJournal and the decision sensitivity to a
plain JSON-compatible dict and back. Enums are written by name and dates
in ISO 8601. Import validates every field and the plan's week invariants
and raises PlanImportError on the first problem, naming the offending
path.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import IntEnum
from typing import Any, TypeVar

from periodization_engine.errors import PlanImportError
from periodization_engine.models.athlete import AthleteProfile
from periodization_engine.models.catalog import PhaseTemplate
from periodization_engine.models.enums import (
    EXPORT_FORMAT_VERSION,
    AdaptationType,
    CompetitionImportance,
    CompetitionType,
    ExperienceLevel,
    ModelKey,
    PhaseFocus,
    RecommendationPriority,
    RecoveryCapacity,
    Severity,
    TimeConstraint,
    TrainingType,
)
from periodization_engine.models.journal import AdaptationJournal, AdaptationJournalEntry
from periodization_engine.models.plan import (
    AdaptationMarkers,
    CompetitionPrep,
    Macrocycle,
    Mesocycle,
    Microcycle,
    ModelSelection,
    PeakingProtocol,
    Plan,
)
from periodization_engine.models.recommendation import AdaptationRecommendation

E = TypeVar("E", bound=IntEnum)


@dataclass(frozen=True)
class ImportedState:
    """Validated contents of an engine state document."""

    athlete_id: str
    plan: Plan
    journal: AdaptationJournal
    sensitivity: float
    exported_at: datetime
    profile: AthleteProfile | None = None


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


def to_document(
    plan: Plan,
    journal: AdaptationJournal,
    sensitivity: float,
    exported_at: datetime,
    profile: AthleteProfile | None = None,
) -> dict:
    """Build the versioned state document."""
    document = {
        "version": EXPORT_FORMAT_VERSION,
        "exported_at": exported_at.isoformat(),
        "athlete_id": plan.athlete_id,
        "plan": plan_to_dict(plan),
        "journal": [_entry_to_dict(e) for e in journal.entries],
        "sensitivity": sensitivity,
    }
    if profile is not None:
        document["profile"] = _profile_to_dict(profile)
    return document


def to_json_string(
    plan: Plan,
    journal: AdaptationJournal,
    sensitivity: float,
    exported_at: datetime,
    profile: AthleteProfile | None = None,
    indent: int = 2,
) -> str:
    """Serialize the state document to a JSON string."""
    return json.dumps(
        to_document(plan, journal, sensitivity, exported_at, profile), indent=indent
    )


def plan_to_dict(plan: Plan) -> dict:
    macro = plan.macrocycle
    return {
        "athlete_id": plan.athlete_id,
        "revision": plan.revision,
        "created_at": plan.created_at.isoformat(),
        "selection": {
            "key": plan.selection.key.name,
            "name": plan.selection.name,
            "score": plan.selection.score,
            "rationale": plan.selection.rationale,
        },
        "macrocycle": {
            "name": macro.name,
            "model_key": macro.model_key.name,
            "total_weeks": macro.total_weeks,
            "start_date": macro.start_date.isoformat(),
            "end_date": macro.end_date.isoformat(),
            "primary_goal": macro.primary_goal,
            "phases": [_phase_to_dict(p) for p in macro.phases],
            "deload_weeks": list(macro.deload_weeks),
            "testing_weeks": list(macro.testing_weeks),
            "adaptation_strategy": macro.adaptation_strategy,
            "considerations": list(macro.considerations),
        },
        "mesocycles": [_mesocycle_to_dict(m) for m in plan.mesocycles],
        "microcycles": [_microcycle_to_dict(m) for m in plan.microcycles],
    }


def _phase_to_dict(phase: PhaseTemplate) -> dict:
    return {
        "name": phase.name,
        "weeks": phase.weeks,
        "volume": phase.volume,
        "intensity": phase.intensity,
        "focus": _name(phase.focus),
    }


def _mesocycle_to_dict(meso: Mesocycle) -> dict:
    return {
        "mesocycle_id": meso.mesocycle_id,
        "phase": meso.phase,
        "focus": _name(meso.focus),
        "start_week": meso.start_week,
        "end_week": meso.end_week,
        "volume_progression": meso.volume_progression,
        "intensity_progression": meso.intensity_progression,
        "focus_areas": list(meso.focus_areas),
        "markers": {
            "volume_tolerance_test": meso.markers.volume_tolerance_test,
            "strength_test": meso.markers.strength_test,
            "recovery_assessment": meso.markers.recovery_assessment,
            "rpe_analysis": meso.markers.rpe_analysis,
        },
        "phase_intensity": meso.phase_intensity,
    }


def _microcycle_to_dict(micro: Microcycle) -> dict:
    prep = micro.competition_prep
    return {
        "week": micro.week,
        "mesocycle_id": micro.mesocycle_id,
        "phase": micro.phase,
        "volume_multiplier": micro.volume_multiplier,
        "intensity_multiplier": micro.intensity_multiplier,
        "is_deload_week": micro.is_deload_week,
        "is_taper_week": micro.is_taper_week,
        "is_competition_week": micro.is_competition_week,
        "is_recovery_week": micro.is_recovery_week,
        "is_testing_week": micro.is_testing_week,
        "focus_areas": list(micro.focus_areas),
        "recovery_protocols": list(micro.recovery_protocols),
        "sessions_per_week": micro.sessions_per_week,
        "session_duration_min": micro.session_duration_min,
        "target_rpe": micro.target_rpe,
        "adaptation_tests": list(micro.adaptation_tests),
        "competition_prep": _prep_to_dict(prep) if prep is not None else None,
        "taper_week": micro.taper_week,
        "adjustments": list(micro.adjustments),
    }


def _prep_to_dict(prep: CompetitionPrep) -> dict:
    protocol = prep.peaking_protocol
    return {
        "competition_name": prep.competition_name,
        "importance": prep.importance.name,
        "competition_type": prep.competition_type.name,
        "weeks_out": prep.weeks_out,
        "taper_focus": prep.taper_focus,
        "techniques": list(prep.techniques),
        "peaking_protocol": (
            {
                "duration_days": protocol.duration_days,
                "focus": protocol.focus,
                "activities": list(protocol.activities),
            }
            if protocol is not None
            else None
        ),
    }


def _recommendation_to_dict(rec: AdaptationRecommendation) -> dict:
    return {
        "type": rec.type.name,
        "priority": rec.priority.name,
        "severity": rec.severity.name,
        "rationale": rec.rationale,
        "actions": list(rec.actions),
        "confidence": rec.confidence,
        "volume_adjustment": rec.volume_adjustment,
        "intensity_adjustment": rec.intensity_adjustment,
        "duration_weeks": rec.duration_weeks,
        "source": rec.source,
    }


def _entry_to_dict(entry: AdaptationJournalEntry) -> dict:
    return {
        "week": entry.week,
        "timestamp": entry.timestamp.isoformat(),
        "recommendations": [_recommendation_to_dict(r) for r in entry.recommendations],
        "confidence": entry.confidence,
        "description": entry.description,
        "system_wide": entry.system_wide,
        "plan_revision": entry.plan_revision,
    }


def _profile_to_dict(profile: AthleteProfile) -> dict:
    return {
        "athlete_id": profile.athlete_id,
        "experience": profile.experience.name,
        "training_type": profile.training_type.name,
        "time_constraint": profile.time_constraint.name,
        "recovery_capacity": profile.recovery_capacity.name,
        "specialization": profile.specialization,
        "weaknesses": list(profile.weaknesses),
    }


def _name(value: IntEnum | None) -> str | None:
    return value.name if value is not None else None


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


def from_json_string(text: str) -> ImportedState:
    """Parse and validate a JSON state document."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PlanImportError(f"Invalid JSON: {exc}") from exc
    return from_document(document)


def from_document(document: Any) -> ImportedState:
    """Validate a state document and rebuild the domain objects.

    Raises:
        PlanImportError: On a missing or mistyped field, an unsupported
            version, or a plan that breaks the week invariants.
    """
    root = _Reader(document, "$")
    version = root.string("version")
    if version != EXPORT_FORMAT_VERSION:
        raise PlanImportError(
            f"Unsupported format version {version!r}", path="$.version"
        )

    athlete_id = root.string("athlete_id")
    plan = _plan_from(root.child("plan"))
    if plan.athlete_id != athlete_id:
        raise PlanImportError(
            f"Plan belongs to {plan.athlete_id!r}, document to {athlete_id!r}",
            path="$.plan.athlete_id",
        )

    sensitivity = root.number("sensitivity")
    if sensitivity <= 0:
        raise PlanImportError("Sensitivity must be positive", path="$.sensitivity")

    journal = AdaptationJournal(
        entries=tuple(_entry_from(r) for r in root.children("journal"))
    )
    profile = _profile_from(root.child("profile")) if root.has("profile") else None

    return ImportedState(
        athlete_id=athlete_id,
        plan=plan,
        journal=journal,
        sensitivity=sensitivity,
        exported_at=root.iso_datetime("exported_at"),
        profile=profile,
    )


def _plan_from(r: _Reader) -> Plan:
    sel = r.child("selection")
    macro = r.child("macrocycle")
    macrocycle = Macrocycle(
        name=macro.string("name"),
        model_key=macro.enum("model_key", ModelKey),
        total_weeks=macro.integer("total_weeks"),
        start_date=macro.iso_date("start_date"),
        end_date=macro.iso_date("end_date"),
        primary_goal=macro.string("primary_goal"),
        phases=tuple(_phase_from(p) for p in macro.children("phases")),
        deload_weeks=tuple(macro.ints("deload_weeks")),
        testing_weeks=tuple(macro.ints("testing_weeks")),
        adaptation_strategy=macro.string("adaptation_strategy"),
        considerations=tuple(macro.strs("considerations")),
    )
    plan = Plan(
        athlete_id=r.string("athlete_id"),
        selection=ModelSelection(
            key=sel.enum("key", ModelKey),
            name=sel.string("name"),
            score=sel.number("score"),
            rationale=sel.string("rationale"),
        ),
        macrocycle=macrocycle,
        mesocycles=tuple(_mesocycle_from(m) for m in r.children("mesocycles")),
        microcycles=tuple(_microcycle_from(m) for m in r.children("microcycles")),
        created_at=r.iso_datetime("created_at"),
        revision=r.integer("revision"),
    )
    _check_plan(plan, r.path)
    return plan


def _check_plan(plan: Plan, path: str) -> None:
    weeks = [m.week for m in plan.microcycles]
    if weeks != list(range(1, plan.total_weeks + 1)):
        raise PlanImportError(
            f"Expected one microcycle per week 1..{plan.total_weeks}",
            path=f"{path}.microcycles",
        )
    for i, micro in enumerate(plan.microcycles):
        where = f"{path}.microcycles[{i}]"
        if micro.volume_multiplier <= 0 or micro.intensity_multiplier <= 0:
            raise PlanImportError("Multipliers must be positive", path=where)
        if micro.is_deload_week and micro.is_taper_week:
            raise PlanImportError("A week cannot be both deload and taper", path=where)
    if plan.revision < 1:
        raise PlanImportError("Revision must be >= 1", path=f"{path}.revision")


def _phase_from(r: _Reader) -> PhaseTemplate:
    return PhaseTemplate(
        name=r.string("name"),
        weeks=r.integer("weeks"),
        volume=r.number("volume"),
        intensity=r.number("intensity"),
        focus=r.optional_enum("focus", PhaseFocus),
    )


def _mesocycle_from(r: _Reader) -> Mesocycle:
    markers = r.child("markers")
    return Mesocycle(
        mesocycle_id=r.string("mesocycle_id"),
        phase=r.string("phase"),
        focus=r.optional_enum("focus", PhaseFocus),
        start_week=r.integer("start_week"),
        end_week=r.integer("end_week"),
        volume_progression=r.number("volume_progression"),
        intensity_progression=r.number("intensity_progression"),
        focus_areas=tuple(r.strs("focus_areas")),
        markers=AdaptationMarkers(
            volume_tolerance_test=markers.flag("volume_tolerance_test"),
            strength_test=markers.flag("strength_test"),
            recovery_assessment=markers.flag("recovery_assessment"),
            rpe_analysis=markers.flag("rpe_analysis"),
        ),
        phase_intensity=r.number("phase_intensity"),
    )


def _microcycle_from(r: _Reader) -> Microcycle:
    return Microcycle(
        week=r.integer("week"),
        mesocycle_id=r.string("mesocycle_id"),
        phase=r.string("phase"),
        volume_multiplier=r.number("volume_multiplier"),
        intensity_multiplier=r.number("intensity_multiplier"),
        is_deload_week=r.flag("is_deload_week"),
        is_taper_week=r.flag("is_taper_week"),
        is_competition_week=r.flag("is_competition_week"),
        is_recovery_week=r.flag("is_recovery_week"),
        is_testing_week=r.flag("is_testing_week"),
        focus_areas=tuple(r.strs("focus_areas")),
        recovery_protocols=tuple(r.strs("recovery_protocols")),
        sessions_per_week=r.integer("sessions_per_week"),
        session_duration_min=r.integer("session_duration_min"),
        target_rpe=r.number("target_rpe"),
        adaptation_tests=tuple(r.strs("adaptation_tests")),
        competition_prep=(
            _prep_from(r.child("competition_prep"))
            if r.has("competition_prep")
            else None
        ),
        taper_week=r.integer("taper_week") if r.has("taper_week") else None,
        adjustments=tuple(r.strs("adjustments")),
    )


def _prep_from(r: _Reader) -> CompetitionPrep:
    protocol: PeakingProtocol | None = None
    if r.has("peaking_protocol"):
        p = r.child("peaking_protocol")
        protocol = PeakingProtocol(
            duration_days=p.integer("duration_days"),
            focus=p.string("focus"),
            activities=tuple(p.strs("activities")),
        )
    return CompetitionPrep(
        competition_name=r.string("competition_name"),
        importance=r.enum("importance", CompetitionImportance),
        competition_type=r.enum("competition_type", CompetitionType),
        weeks_out=r.integer("weeks_out"),
        taper_focus=r.string("taper_focus"),
        techniques=tuple(r.strs("techniques")),
        peaking_protocol=protocol,
    )


def _recommendation_from(r: _Reader) -> AdaptationRecommendation:
    confidence = r.number("confidence")
    if not 0.0 <= confidence <= 1.0:
        raise PlanImportError("Confidence must be in [0, 1]", path=f"{r.path}.confidence")
    return AdaptationRecommendation(
        type=r.enum("type", AdaptationType),
        priority=r.enum("priority", RecommendationPriority),
        severity=r.enum("severity", Severity),
        rationale=r.string("rationale"),
        actions=tuple(r.strs("actions")),
        confidence=confidence,
        volume_adjustment=r.number("volume_adjustment"),
        intensity_adjustment=r.number("intensity_adjustment"),
        duration_weeks=r.integer("duration_weeks"),
        source=r.string("source"),
    )


def _entry_from(r: _Reader) -> AdaptationJournalEntry:
    return AdaptationJournalEntry(
        week=r.integer("week"),
        timestamp=r.iso_datetime("timestamp"),
        recommendations=tuple(
            _recommendation_from(c) for c in r.children("recommendations")
        ),
        confidence=r.number("confidence"),
        description=r.string("description"),
        system_wide=r.flag("system_wide"),
        plan_revision=r.integer("plan_revision"),
    )


def _profile_from(r: _Reader) -> AthleteProfile:
    return AthleteProfile(
        athlete_id=r.string("athlete_id"),
        experience=r.enum("experience", ExperienceLevel),
        training_type=r.enum("training_type", TrainingType),
        time_constraint=r.enum("time_constraint", TimeConstraint),
        recovery_capacity=r.enum("recovery_capacity", RecoveryCapacity),
        specialization=r.string("specialization") if r.has("specialization") else None,
        weaknesses=tuple(r.strs("weaknesses")),
    )


class _Reader:
    """Typed accessor over one JSON object that reports failures by path."""

    def __init__(self, data: Any, path: str) -> None:
        if not isinstance(data, dict):
            raise PlanImportError("Expected an object", path=path)
        self.data = data
        self.path = path

    def _get(self, key: str) -> Any:
        if key not in self.data:
            raise PlanImportError("Missing field", path=f"{self.path}.{key}")
        return self.data[key]

    def _fail(self, key: str, expected: str) -> PlanImportError:
        return PlanImportError(f"Expected {expected}", path=f"{self.path}.{key}")

    def has(self, key: str) -> bool:
        """Whether ``key`` is present and not null."""
        return self.data.get(key) is not None

    def child(self, key: str) -> _Reader:
        return _Reader(self._get(key), f"{self.path}.{key}")

    def children(self, key: str) -> list[_Reader]:
        items = self._get(key)
        if not isinstance(items, list):
            raise self._fail(key, "a list")
        return [_Reader(item, f"{self.path}.{key}[{i}]") for i, item in enumerate(items)]

    def string(self, key: str) -> str:
        value = self._get(key)
        if not isinstance(value, str):
            raise self._fail(key, "a string")
        return value

    def integer(self, key: str) -> int:
        value = self._get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._fail(key, "an integer")
        return value

    def number(self, key: str) -> float:
        value = self._get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._fail(key, "a number")
        if not math.isfinite(value):
            raise self._fail(key, "a finite number")
        return float(value)

    def flag(self, key: str) -> bool:
        value = self._get(key)
        if not isinstance(value, bool):
            raise self._fail(key, "a boolean")
        return value

    def strs(self, key: str) -> list[str]:
        values = self._get(key)
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise self._fail(key, "a list of strings")
        return values

    def ints(self, key: str) -> list[int]:
        values = self._get(key)
        if not isinstance(values, list) or not all(
            isinstance(v, int) and not isinstance(v, bool) for v in values
        ):
            raise self._fail(key, "a list of integers")
        return values

    def enum(self, key: str, enum_cls: type[E]) -> E:
        name = self.string(key)
        try:
            return enum_cls[name]
        except KeyError:
            raise self._fail(key, f"one of {[m.name for m in enum_cls]}") from None

    def optional_enum(self, key: str, enum_cls: type[E]) -> E | None:
        return self.enum(key, enum_cls) if self.has(key) else None

    def iso_date(self, key: str) -> date:
        try:
            return date.fromisoformat(self.string(key))
        except ValueError:
            raise self._fail(key, "an ISO date") from None

    def iso_datetime(self, key: str) -> datetime:
        try:
            return datetime.fromisoformat(self.string(key))
        except ValueError:
            raise self._fail(key, "an ISO datetime") from None
