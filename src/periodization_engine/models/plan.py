"""Plan hierarchy: Macrocycle -> Mesocycles -> Microcycles.

A Plan is frozen. Adaptations derive a new revision through
``Plan.with_microcycle()`` instead of editing weeks in place, so readers
holding an older revision never observe a half-applied change.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime

from periodization_engine.errors import NotFoundError
from periodization_engine.models.catalog import PhaseTemplate
from periodization_engine.models.enums import (
    CompetitionImportance,
    CompetitionType,
    ModelKey,
    PhaseFocus,
)


@dataclass(frozen=True)
class ModelSelection:
    """The periodization model chosen for a plan and why."""

    key: ModelKey
    name: str
    score: float
    rationale: str


@dataclass(frozen=True)
class Macrocycle:
    """The full training horizon, scaled from a catalog model."""

    name: str
    model_key: ModelKey
    total_weeks: int
    start_date: date
    end_date: date
    primary_goal: str
    phases: tuple[PhaseTemplate, ...]
    deload_weeks: tuple[int, ...] = field(default_factory=tuple)
    testing_weeks: tuple[int, ...] = field(default_factory=tuple)
    adaptation_strategy: str = ""
    considerations: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AdaptationMarkers:
    """Which checks a mesocycle schedules to confirm the athlete is adapting."""

    volume_tolerance_test: bool = False
    strength_test: bool = False
    recovery_assessment: bool = True
    rpe_analysis: bool = True


@dataclass(frozen=True)
class Mesocycle:
    """A multi-week block inside one macrocycle phase."""

    mesocycle_id: str
    phase: str
    focus: PhaseFocus | None
    start_week: int  # 1-indexed
    end_week: int  # inclusive
    volume_progression: float
    intensity_progression: float
    focus_areas: tuple[str, ...] = field(default_factory=tuple)
    markers: AdaptationMarkers = field(default_factory=AdaptationMarkers)
    phase_intensity: float = 0.0  # base intensity of the owning phase

    @property
    def weeks(self) -> int:
        return self.end_week - self.start_week + 1


@dataclass(frozen=True)
class PeakingProtocol:
    """Competition-week emphasis for a discipline."""

    duration_days: int
    focus: str
    activities: tuple[str, ...]


@dataclass(frozen=True)
class CompetitionPrep:
    """Competition payload attached to taper and competition weeks."""

    competition_name: str
    importance: CompetitionImportance
    competition_type: CompetitionType
    weeks_out: int = 0  # 0 = the competition week itself
    taper_focus: str = ""
    techniques: tuple[str, ...] = field(default_factory=tuple)
    peaking_protocol: PeakingProtocol | None = None


@dataclass(frozen=True)
class Microcycle:
    """One training week with its concrete load adjustment.

    Deload and taper are mutually exclusive; every other flag may combine.
    ``adjustments`` records each post-creation mutation by tag.
    """

    week: int  # 1-indexed, unique within a plan
    mesocycle_id: str
    phase: str
    volume_multiplier: float
    intensity_multiplier: float
    is_deload_week: bool = False
    is_taper_week: bool = False
    is_competition_week: bool = False
    is_recovery_week: bool = False
    is_testing_week: bool = False
    focus_areas: tuple[str, ...] = field(default_factory=tuple)
    recovery_protocols: tuple[str, ...] = field(default_factory=tuple)
    sessions_per_week: int = 3
    session_duration_min: int = 60
    target_rpe: float = 7.5
    adaptation_tests: tuple[str, ...] = field(default_factory=tuple)
    competition_prep: CompetitionPrep | None = None
    taper_week: int | None = None  # weeks out from the competition
    adjustments: tuple[str, ...] = field(default_factory=tuple)

    def adjusted(self, tag: str, **changes: object) -> Microcycle:
        """Return a copy with ``changes`` applied and ``tag`` recorded."""
        return dataclasses.replace(
            self, adjustments=self.adjustments + (tag,), **changes
        )


@dataclass(frozen=True)
class Plan:
    """The unit of ownership: one athlete's complete periodized plan."""

    athlete_id: str
    selection: ModelSelection
    macrocycle: Macrocycle
    mesocycles: tuple[Mesocycle, ...]
    microcycles: tuple[Microcycle, ...]
    created_at: datetime
    revision: int = 1

    @property
    def total_weeks(self) -> int:
        return self.macrocycle.total_weeks

    def microcycle_for_week(self, week: int) -> Microcycle | None:
        """Return the microcycle for ``week``, or None if out of range."""
        if 1 <= week <= len(self.microcycles):
            micro = self.microcycles[week - 1]
            if micro.week == week:
                return micro
        for micro in self.microcycles:
            if micro.week == week:
                return micro
        return None

    def mesocycle_by_id(self, mesocycle_id: str) -> Mesocycle | None:
        for meso in self.mesocycles:
            if meso.mesocycle_id == mesocycle_id:
                return meso
        return None

    def with_microcycle(self, microcycle: Microcycle) -> Plan:
        """Derive the next plan revision with one week replaced.

        Raises:
            NotFoundError: If the plan has no week ``microcycle.week``.
        """
        if self.microcycle_for_week(microcycle.week) is None:
            raise NotFoundError(
                f"Plan has no week {microcycle.week}", week=microcycle.week
            )
        weeks = tuple(
            microcycle if m.week == microcycle.week else m for m in self.microcycles
        )
        return dataclasses.replace(self, microcycles=weeks, revision=self.revision + 1)
