"""Athlete profile and goal parameters: the inputs to plan building."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from periodization_engine.errors import ValidationError
from periodization_engine.models.enums import (
    CompetitionImportance,
    CompetitionType,
    ExperienceLevel,
    RecoveryCapacity,
    TimeConstraint,
    TrainingType,
)


@dataclass(frozen=True)
class AthleteProfile:
    """Static description of an athlete.

    A plan is built from exactly one profile; a changed profile needs a
    new plan.
    """

    athlete_id: str
    experience: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    training_type: TrainingType = TrainingType.GENERAL
    time_constraint: TimeConstraint = TimeConstraint.MODERATE
    recovery_capacity: RecoveryCapacity = RecoveryCapacity.MODERATE
    specialization: str | None = None  # e.g. "powerlifting"
    weaknesses: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Competition:
    """A single competition on the athlete's calendar."""

    name: str
    competition_date: date
    importance: CompetitionImportance = CompetitionImportance.SECONDARY
    competition_type: CompetitionType = CompetitionType.POWERLIFTING

    @property
    def is_major(self) -> bool:
        return self.importance == CompetitionImportance.MAJOR


@dataclass(frozen=True)
class GoalParameters:
    """Horizon, goal tag and calendar for one plan.

    Competitions are stored sorted chronologically. Use
    ``from_competitions()`` to build from unsorted input.
    """

    horizon_weeks: int
    primary_goal: str
    start_date: date
    competitions: tuple[Competition, ...] = field(default_factory=tuple)

    @classmethod
    def from_competitions(
        cls,
        horizon_weeks: int,
        primary_goal: str,
        start_date: date,
        *competitions: Competition,
    ) -> GoalParameters:
        """Create GoalParameters with competitions sorted by date."""
        ordered = tuple(sorted(competitions, key=lambda c: c.competition_date))
        return cls(horizon_weeks, primary_goal, start_date, ordered)

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(weeks=self.horizon_weeks)

    def validate(self) -> None:
        """Check the horizon and that every competition falls inside it.

        Raises:
            ValidationError: If horizon < 1 or a competition is outside
                [start_date, start_date + horizon weeks].
        """
        if self.horizon_weeks < 1:
            raise ValidationError(
                f"Horizon must be at least 1 week, got {self.horizon_weeks}"
            )
        for competition in self.competitions:
            if not self.start_date <= competition.competition_date <= self.end_date:
                raise ValidationError(
                    f"Competition {competition.name!r} on "
                    f"{competition.competition_date.isoformat()} is outside the plan "
                    f"({self.start_date.isoformat()} to {self.end_date.isoformat()})"
                )
