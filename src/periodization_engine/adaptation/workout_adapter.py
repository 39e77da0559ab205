"""Workout adapter: applies a plan week to a concrete workout skeleton.

The adapter is a pure function of (plan, week, workout): the input
workout is never modified and the same arguments always produce the same
AdaptedWorkout.
"""

from __future__ import annotations

import dataclasses

from periodization_engine.adaptation.focus_rules import get_focus_rule
from periodization_engine.math.periodization import round_half_up
from periodization_engine.models.enums import (
    MAX_PERCENTAGE,
    AdaptationStatus,
    ModificationType,
)
from periodization_engine.models.plan import Microcycle, Plan
from periodization_engine.models.workout import (
    AdaptedWorkout,
    Exercise,
    Modification,
    PeriodizationContext,
    Workout,
)


def _week_reason(micro: Microcycle, kind: str) -> str:
    if micro.is_taper_week:
        return f"Taper week {micro.taper_week} {kind} reduction"
    if micro.is_deload_week:
        return f"Deload week {kind} reduction"
    if micro.is_recovery_week:
        return f"Post-competition recovery {kind}"
    return f"Week {micro.week} {micro.phase} {kind} progression"


class WorkoutAdapter:
    """Scales sets and loads by the week's multipliers, then applies focus rules.

    Usage:
        adapter = WorkoutAdapter()
        adapted = adapter.adapt(plan, week=5, workout=base_workout)
    """

    def adapt(self, plan: Plan | None, week: int, workout: Workout) -> AdaptedWorkout:
        """Adapt ``workout`` to plan week ``week``.

        Args:
            plan: Active plan, or None when no plan has been built.
            week: 1-indexed plan week.
            workout: Caller-supplied workout skeleton.

        Returns:
            AdaptedWorkout. With no plan or no such week the status is
            NO_PLAN / NOT_FOUND and the workout is returned unchanged.
        """
        if plan is None:
            return AdaptedWorkout(
                status=AdaptationStatus.NO_PLAN,
                workout=workout,
                original=workout,
                message="No active plan",
            )
        micro = plan.microcycle_for_week(week)
        if micro is None:
            return AdaptedWorkout(
                status=AdaptationStatus.NOT_FOUND,
                workout=workout,
                original=workout,
                message=f"No microcycle for week {week}",
            )

        modifications: list[Modification] = []
        exercises: list[Exercise] = []
        for exercise in workout.exercises:
            adapted = self._apply_volume(exercise, micro, modifications)
            adapted = self._apply_intensity(adapted, micro, modifications)
            for tag in micro.focus_areas:
                rule = get_focus_rule(tag)
                if rule is not None:
                    adapted, changes = rule(adapted)
                    modifications.extend(changes)
            exercises.append(adapted)

        return AdaptedWorkout(
            status=AdaptationStatus.ADAPTED,
            workout=dataclasses.replace(workout, exercises=tuple(exercises)),
            original=workout,
            modifications=tuple(modifications),
            context=self.context_for(plan, micro),
        )

    @staticmethod
    def context_for(plan: Plan, micro: Microcycle) -> PeriodizationContext:
        return PeriodizationContext(
            week=micro.week,
            phase=micro.phase,
            mesocycle_id=micro.mesocycle_id,
            is_deload_week=micro.is_deload_week,
            is_taper_week=micro.is_taper_week,
            is_competition_week=micro.is_competition_week,
            is_recovery_week=micro.is_recovery_week,
            volume_multiplier=micro.volume_multiplier,
            intensity_multiplier=micro.intensity_multiplier,
            focus_areas=micro.focus_areas,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _apply_volume(
        exercise: Exercise, micro: Microcycle, modifications: list[Modification]
    ) -> Exercise:
        multiplier = micro.volume_multiplier
        sets = max(1, round_half_up(exercise.sets * multiplier))
        if sets == exercise.sets:
            return exercise
        modifications.append(
            Modification(
                type=ModificationType.VOLUME,
                exercise=exercise.name,
                field="sets",
                original=exercise.sets,
                adapted=sets,
                reason=_week_reason(micro, "volume"),
                multiplier=multiplier,
            )
        )
        return dataclasses.replace(exercise, sets=sets)

    @staticmethod
    def _apply_intensity(
        exercise: Exercise, micro: Microcycle, modifications: list[Modification]
    ) -> Exercise:
        multiplier = micro.intensity_multiplier
        reason = _week_reason(micro, "intensity")
        changes: dict[str, float] = {}
        if exercise.weight is not None:
            changes["weight"] = round(exercise.weight * multiplier, 1)
        if exercise.percentage is not None:
            changes["percentage"] = min(
                MAX_PERCENTAGE, round(exercise.percentage * multiplier, 1)
            )
        for field, value in changes.items():
            original = getattr(exercise, field)
            if value != original:
                modifications.append(
                    Modification(
                        type=ModificationType.INTENSITY,
                        exercise=exercise.name,
                        field=field,
                        original=original,
                        adapted=value,
                        reason=reason,
                        multiplier=multiplier,
                    )
                )
        return dataclasses.replace(exercise, **changes) if changes else exercise
