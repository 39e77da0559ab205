"""Shared test fixtures: athlete profiles, goals, session logs and workouts."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Callable

import pytest

from periodization_engine.models.athlete import AthleteProfile, Competition, GoalParameters
from periodization_engine.models.enums import (
    CompetitionImportance,
    CompetitionType,
    ExperienceLevel,
    RecoveryCapacity,
    TimeConstraint,
    TrainingType,
)
from periodization_engine.models.plan import Plan
from periodization_engine.models.session import (
    ExerciseEntry,
    SessionRecord,
    SetRecord,
    WellnessScores,
)
from periodization_engine.models.workout import Exercise, Workout
from periodization_engine.planning.builder import PlanBuilder

PLAN_START = date(2026, 1, 5)  # a Monday
PLAN_CREATED = datetime(2026, 1, 4, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
def plan_start() -> date:
    return PLAN_START


@pytest.fixture
def advanced_powerlifter() -> AthleteProfile:
    """Advanced strength athlete specialising in powerlifting."""
    return AthleteProfile(
        athlete_id="lifter-1",
        experience=ExperienceLevel.ADVANCED,
        training_type=TrainingType.STRENGTH,
        time_constraint=TimeConstraint.HIGH,
        recovery_capacity=RecoveryCapacity.HIGH,
        specialization="powerlifting",
        weaknesses=("Lockout", "bench_press"),
    )


@pytest.fixture
def beginner_athlete() -> AthleteProfile:
    """Beginner with limited time and low recovery capacity."""
    return AthleteProfile(
        athlete_id="novice-1",
        experience=ExperienceLevel.BEGINNER,
        training_type=TrainingType.GENERAL,
        time_constraint=TimeConstraint.LIMITED,
        recovery_capacity=RecoveryCapacity.LOW,
    )


@pytest.fixture
def hypertrophy_athlete() -> AthleteProfile:
    return AthleteProfile(
        athlete_id="builder-1",
        experience=ExperienceLevel.INTERMEDIATE,
        training_type=TrainingType.HYPERTROPHY,
    )


@pytest.fixture
def sixteen_week_goal() -> GoalParameters:
    return GoalParameters(horizon_weeks=16, primary_goal="strength", start_date=PLAN_START)


@pytest.fixture
def major_meet() -> Competition:
    """Major powerlifting meet on day 80 of the plan (week 12)."""
    return Competition(
        name="National Championships",
        competition_date=PLAN_START + timedelta(days=80),
        importance=CompetitionImportance.MAJOR,
        competition_type=CompetitionType.POWERLIFTING,
    )


@pytest.fixture
def meet_goal(major_meet: Competition) -> GoalParameters:
    return GoalParameters.from_competitions(16, "peak_strength", PLAN_START, major_meet)


@pytest.fixture
def session_factory() -> Callable[..., SessionRecord]:
    """Factory fixture for single-exercise squat sessions.

    Usage:
        session = session_factory(day=2, rpe=8.5, weight=140.0)
    """

    def factory(
        day: int = 0,
        rpe: float | None = 8.0,
        weight: float = 100.0,
        reps: int = 5,
        sets: int = 3,
        completed_sets: int | None = None,
        wellness: WellnessScores | None = None,
    ) -> SessionRecord:
        done = sets if completed_sets is None else completed_sets
        records = tuple(
            SetRecord(weight=weight, reps=reps, rpe=rpe, completed=i < done)
            for i in range(sets)
        )
        return SessionRecord(
            session_date=PLAN_START + timedelta(days=day),
            exercises=(ExerciseEntry(name="squat", sets=records, is_main_lift=True),),
            wellness=wellness or WellnessScores(),
        )

    return factory


@pytest.fixture
def fatigued_sessions(session_factory: Callable[..., SessionRecord]) -> list[SessionRecord]:
    """Four sessions at RPE 9.5+ with a falling load."""
    rpes = (9.5, 9.8, 9.7, 9.6)
    weights = (140.0, 137.5, 135.0, 132.5)
    return [
        session_factory(day=2 * i, rpe=rpe, weight=w)
        for i, (rpe, w) in enumerate(zip(rpes, weights))
    ]


@pytest.fixture
def fresh_sessions(session_factory: Callable[..., SessionRecord]) -> list[SessionRecord]:
    """Four easy sessions (RPE < 7) with rising loads."""
    rpes = (6.5, 6.8, 6.7, 6.9)
    weights = (100.0, 102.5, 105.0, 107.5)
    return [
        session_factory(day=2 * i, rpe=rpe, weight=w)
        for i, (rpe, w) in enumerate(zip(rpes, weights))
    ]


@pytest.fixture
def base_workout() -> Workout:
    return Workout(
        name="Lower A",
        exercises=(
            Exercise(name="squat", sets=5, reps=5, weight=140.0, rest_seconds=150, is_main_lift=True),
            Exercise(name="romanian_deadlift", sets=3, reps=8, percentage=70.0, rest_seconds=120),
            Exercise(name="plank", sets=3),
        ),
    )


@pytest.fixture
def block_plan(
    advanced_powerlifter: AthleteProfile, sixteen_week_goal: GoalParameters
) -> Plan:
    """16-week block plan without competitions."""
    return PlanBuilder().build(advanced_powerlifter, sixteen_week_goal, PLAN_CREATED)


@pytest.fixture
def meet_plan(advanced_powerlifter: AthleteProfile, meet_goal: GoalParameters) -> Plan:
    """16-week block plan peaking for the major meet in week 12."""
    return PlanBuilder().build(advanced_powerlifter, meet_goal, PLAN_CREATED)
