"""Macrocycle builder: scales a catalog model onto the plan horizon."""

from __future__ import annotations

from periodization_engine.config import EngineConfig
from periodization_engine.math.periodization import (
    deload_weeks,
    scale_phases,
    testing_weeks,
)
from periodization_engine.models.athlete import AthleteProfile, GoalParameters
from periodization_engine.models.catalog import PeriodizationModel
from periodization_engine.models.enums import (
    ExperienceLevel,
    RecoveryCapacity,
    TimeConstraint,
)
from periodization_engine.models.plan import Macrocycle

_EXPERIENCE_CONSIDERATIONS: dict[ExperienceLevel, tuple[str, ...]] = {
    ExperienceLevel.BEGINNER: ("technique_mastery", "gradual_load_progression"),
    ExperienceLevel.INTERMEDIATE: ("balanced_progression",),
    ExperienceLevel.ADVANCED: ("advanced_overload_methods", "individualized_adjustments"),
}

_RECOVERY_CONSIDERATIONS: dict[RecoveryCapacity, tuple[str, ...]] = {
    RecoveryCapacity.LOW: ("extended_recovery_periods", "reduced_training_density"),
    RecoveryCapacity.MODERATE: (),
    RecoveryCapacity.HIGH: ("higher_training_density",),
}

_TIME_CONSIDERATIONS: dict[TimeConstraint, tuple[str, ...]] = {
    TimeConstraint.LIMITED: ("high_efficiency_sessions", "compound_movement_priority"),
    TimeConstraint.MODERATE: (),
    TimeConstraint.HIGH: ("accessory_volume_allowance",),
}


def adaptation_considerations(profile: AthleteProfile) -> tuple[str, ...]:
    """Strategy considerations derived from experience, recovery and time tiers."""
    return (
        _EXPERIENCE_CONSIDERATIONS[profile.experience]
        + _RECOVERY_CONSIDERATIONS[profile.recovery_capacity]
        + _TIME_CONSIDERATIONS[profile.time_constraint]
    )


def build_macrocycle(
    model: PeriodizationModel,
    profile: AthleteProfile,
    goal: GoalParameters,
    config: EngineConfig | None = None,
) -> Macrocycle:
    """Scale ``model`` to ``goal.horizon_weeks`` and lay out cadences.

    Args:
        model: Selected catalog model.
        profile: Athlete profile (for strategy considerations).
        goal: Horizon, goal tag and start date.
        config: Cadence settings; defaults to EngineConfig().

    Returns:
        A Macrocycle with scaled phases, deload weeks and testing weeks.
    """
    config = config or EngineConfig()
    horizon = goal.horizon_weeks
    return Macrocycle(
        name=f"{model.name} - {goal.primary_goal}",
        model_key=model.key,
        total_weeks=horizon,
        start_date=goal.start_date,
        end_date=goal.end_date,
        primary_goal=goal.primary_goal,
        phases=scale_phases(model.phases, horizon),
        deload_weeks=deload_weeks(horizon, config.deload_frequency),
        testing_weeks=testing_weeks(
            horizon, config.testing_first_week, config.testing_interval
        ),
        adaptation_strategy=model.adaptation_strategy,
        considerations=adaptation_considerations(profile),
    )
