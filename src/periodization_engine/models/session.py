"""Logged training sessions and their derived metrics.

Only raw inputs are stored. Volume, RPE, estimated max, adherence and the
recovery score are recomputed from the sets and wellness scores on access.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from periodization_engine.errors import ValidationError
from periodization_engine.math.session_metrics import (
    calculate_recovery_score,
    estimate_one_rep_max,
)


@dataclass(frozen=True)
class SetRecord:
    """One performed (or planned but skipped) set."""

    weight: float
    reps: int
    rpe: float | None = None  # 1-10, None when not rated
    completed: bool = True

    def __post_init__(self) -> None:
        if self.rpe is not None and not 1.0 <= self.rpe <= 10.0:
            raise ValidationError(f"RPE must be between 1 and 10, got {self.rpe}")
        if self.reps < 0 or self.weight < 0:
            raise ValidationError("Set weight and reps must be non-negative")

    @property
    def volume(self) -> float:
        return self.weight * self.reps if self.completed else 0.0

    @property
    def estimated_max(self) -> float:
        if not self.completed or self.reps <= 0 or self.weight <= 0:
            return 0.0
        return estimate_one_rep_max(self.weight, self.reps, self.rpe)


@dataclass(frozen=True)
class ExerciseEntry:
    """An exercise within a session and its ordered sets."""

    name: str
    sets: tuple[SetRecord, ...] = field(default_factory=tuple)
    is_main_lift: bool = False

    @property
    def total_volume(self) -> float:
        return sum(s.volume for s in self.sets)

    @property
    def estimated_max(self) -> float:
        return max((s.estimated_max for s in self.sets), default=0.0)


@dataclass(frozen=True)
class WellnessScores:
    """Subjective pre-session wellness, each on a 1-10 scale."""

    energy: float = 5.0
    sleep_quality: float = 5.0
    stress: float = 5.0
    soreness: float = 5.0
    motivation: float = 5.0

    def __post_init__(self) -> None:
        for name in ("energy", "sleep_quality", "stress", "soreness", "motivation"):
            value = getattr(self, name)
            if not 1.0 <= value <= 10.0:
                raise ValidationError(f"{name} must be between 1 and 10, got {value}")


@dataclass(frozen=True)
class SessionRecord:
    """A completed training session as supplied by the logging collaborator."""

    session_date: date
    exercises: tuple[ExerciseEntry, ...] = field(default_factory=tuple)
    wellness: WellnessScores = field(default_factory=WellnessScores)

    @property
    def total_volume(self) -> float:
        """Completed load x reps across all exercises."""
        return sum(e.total_volume for e in self.exercises)

    @property
    def average_rpe(self) -> float:
        """Volume-weighted mean RPE of completed, rated sets.

        Falls back to the plain mean when every rated set has zero volume
        (e.g. bodyweight work logged at 0 kg). Returns 0.0 when nothing
        was rated.
        """
        rated = [
            s for e in self.exercises for s in e.sets
            if s.completed and s.rpe is not None
        ]
        if not rated:
            return 0.0
        total_volume = sum(s.volume for s in rated)
        if total_volume <= 0:
            return sum(s.rpe for s in rated) / len(rated)  # type: ignore[misc]
        return sum(s.rpe * s.volume for s in rated) / total_volume  # type: ignore[operator]

    @property
    def estimated_max(self) -> float:
        """Best estimated max across main lifts, or all lifts if none flagged."""
        main = [e for e in self.exercises if e.is_main_lift]
        pool = main or list(self.exercises)
        return max((e.estimated_max for e in pool), default=0.0)

    @property
    def adherence(self) -> float:
        """Completed sets / logged sets (1.0 for an empty session)."""
        all_sets = [s for e in self.exercises for s in e.sets]
        if not all_sets:
            return 1.0
        return sum(1 for s in all_sets if s.completed) / len(all_sets)

    @property
    def recovery_score(self) -> float:
        w = self.wellness
        return calculate_recovery_score(
            w.energy, w.sleep_quality, w.stress, w.soreness, w.motivation
        )
