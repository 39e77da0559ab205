"""Workout skeletons and the adapter's output."""

from __future__ import annotations

from dataclasses import dataclass, field

from periodization_engine.models.enums import AdaptationStatus, ModificationType


@dataclass(frozen=True)
class Exercise:
    """One prescribed exercise in a caller-supplied workout."""

    name: str
    sets: int
    reps: int | None = None
    weight: float | None = None
    percentage: float | None = None  # % of max, alternative to weight
    rest_seconds: int | None = None
    is_main_lift: bool = False
    notes: str = ""


@dataclass(frozen=True)
class Workout:
    """A workout skeleton: ordered exercises with their prescriptions."""

    name: str
    exercises: tuple[Exercise, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Modification:
    """Audit record of one change made by the workout adapter.

    ``multiplier`` is set for volume/intensity scaling, ``rule`` for focus
    rules; ``original`` and ``adapted`` are the field values before and
    after.
    """

    type: ModificationType
    exercise: str
    field: str
    original: float | int | str | None
    adapted: float | int | str | None
    reason: str
    multiplier: float | None = None
    rule: str | None = None


@dataclass(frozen=True)
class PeriodizationContext:
    """Where in the plan an adapted workout sits."""

    week: int
    phase: str
    mesocycle_id: str
    is_deload_week: bool
    is_taper_week: bool
    is_competition_week: bool
    is_recovery_week: bool
    volume_multiplier: float
    intensity_multiplier: float
    focus_areas: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AdaptedWorkout:
    """Adapter output: the adapted copy, the untouched original and the audit trail."""

    status: AdaptationStatus
    workout: Workout
    original: Workout
    modifications: tuple[Modification, ...] = field(default_factory=tuple)
    context: PeriodizationContext | None = None
    message: str = ""

    @property
    def was_adapted(self) -> bool:
        return self.status == AdaptationStatus.ADAPTED
