"""Focus rule sets applied by the workout adapter, keyed by focus tag.

Each rule takes an exercise and returns the modified exercise plus the
audit records for every field it changed. Tags without a rule set (for
example "volume" or "aerobic_base") leave the workout untouched.
"""

from __future__ import annotations

import dataclasses
from typing import Callable

from periodization_engine.models.enums import (
    ENDURANCE_MAX_REST_S,
    HYPERTROPHY_MAX_REST_S,
    POWER_MIN_REST_S,
    RECOVERY_FOCUS_WEIGHT_FACTOR,
    STRENGTH_MIN_REST_S,
    TECHNIQUE_FOCUS_WEIGHT_FACTOR,
    ModificationType,
)
from periodization_engine.models.workout import Exercise, Modification

FocusRule = Callable[[Exercise], tuple[Exercise, list[Modification]]]

POWER_NOTE = "[POWER PHASE: Explosive intent, full recovery]"
RECOVERY_NOTE = "[RECOVERY PHASE: Focus on movement quality]"
TECHNIQUE_NOTE = "[TECHNIQUE FOCUS: Controlled tempo, consistent positions]"

# Rest assumed when the skeleton leaves it unset
_DEFAULT_HEAVY_REST_S = 120
_DEFAULT_HYPERTROPHY_REST_S = 90


class _Edit:
    """Accumulates field changes on one exercise with their audit records."""

    def __init__(self, exercise: Exercise, rule: str) -> None:
        self.exercise = exercise
        self.rule = rule
        self.modifications: list[Modification] = []

    def set(self, field: str, value: object, reason: str) -> None:
        original = getattr(self.exercise, field)
        if value == original:
            return
        self.exercise = dataclasses.replace(self.exercise, **{field: value})
        self.modifications.append(
            Modification(
                type=ModificationType.FOCUS,
                exercise=self.exercise.name,
                field=field,
                original=original,
                adapted=value,  # type: ignore[arg-type]
                reason=reason,
                rule=self.rule,
            )
        )

    def note(self, text: str, reason: str) -> None:
        if text in self.exercise.notes:
            return
        notes = f"{self.exercise.notes} {text}".strip()
        self.set("notes", notes, reason)

    def scale_load(self, factor: float, reason: str) -> None:
        if self.exercise.weight is not None:
            self.set("weight", round(self.exercise.weight * factor, 1), reason)
        if self.exercise.percentage is not None:
            self.set("percentage", round(self.exercise.percentage * factor, 1), reason)

    def result(self) -> tuple[Exercise, list[Modification]]:
        return self.exercise, self.modifications


def _clamp_reps(edit: _Edit, low: int, high: int, reason: str) -> None:
    reps = edit.exercise.reps
    if reps is not None:
        edit.set("reps", max(low, min(high, reps)), reason)


def strength_rule(exercise: Exercise) -> tuple[Exercise, list[Modification]]:
    edit = _Edit(exercise, "strength")
    if exercise.is_main_lift:
        _clamp_reps(edit, 1, 5, "Strength focus: heavy main lifts in 1-5 rep range")
    rest = exercise.rest_seconds or _DEFAULT_HEAVY_REST_S
    edit.set("rest_seconds", max(rest, STRENGTH_MIN_REST_S), "Strength focus: full recovery between sets")
    return edit.result()


def hypertrophy_rule(exercise: Exercise) -> tuple[Exercise, list[Modification]]:
    edit = _Edit(exercise, "hypertrophy")
    _clamp_reps(edit, 6, 12, "Hypertrophy focus: 6-12 rep range")
    rest = exercise.rest_seconds or _DEFAULT_HYPERTROPHY_REST_S
    edit.set(
        "rest_seconds",
        min(rest, HYPERTROPHY_MAX_REST_S),
        "Hypertrophy focus: shorter rest for metabolic stress",
    )
    return edit.result()


def power_rule(exercise: Exercise) -> tuple[Exercise, list[Modification]]:
    edit = _Edit(exercise, "power")
    if exercise.is_main_lift:
        _clamp_reps(edit, 1, 3, "Power focus: low reps for maximal velocity")
    rest = exercise.rest_seconds or _DEFAULT_HEAVY_REST_S
    edit.set("rest_seconds", max(rest, POWER_MIN_REST_S), "Power focus: full recovery between sets")
    edit.note(POWER_NOTE, "Power focus: explosive intent")
    return edit.result()


def recovery_rule(exercise: Exercise) -> tuple[Exercise, list[Modification]]:
    edit = _Edit(exercise, "recovery")
    edit.scale_load(RECOVERY_FOCUS_WEIGHT_FACTOR, "Recovery focus: reduced load")
    edit.note(RECOVERY_NOTE, "Recovery focus: movement quality")
    return edit.result()


def technique_rule(exercise: Exercise) -> tuple[Exercise, list[Modification]]:
    edit = _Edit(exercise, "technique")
    if exercise.is_main_lift:
        edit.scale_load(TECHNIQUE_FOCUS_WEIGHT_FACTOR, "Technique focus: submaximal main lifts")
        edit.note(TECHNIQUE_NOTE, "Technique focus: movement consistency")
    return edit.result()


def endurance_rule(exercise: Exercise) -> tuple[Exercise, list[Modification]]:
    edit = _Edit(exercise, "endurance")
    _clamp_reps(edit, 12, 20, "Endurance focus: 12-20 rep range")
    rest = exercise.rest_seconds or ENDURANCE_MAX_REST_S
    edit.set(
        "rest_seconds",
        min(rest, ENDURANCE_MAX_REST_S),
        "Endurance focus: short rest for muscular endurance",
    )
    return edit.result()


FOCUS_RULES: dict[str, FocusRule] = {
    "strength": strength_rule,
    "hypertrophy": hypertrophy_rule,
    "power": power_rule,
    "recovery": recovery_rule,
    "technique": technique_rule,
    "endurance": endurance_rule,
}


def get_focus_rule(tag: str) -> FocusRule | None:
    """Rule set for a focus tag, or None when the tag has none."""
    return FOCUS_RULES.get(tag.lower())
