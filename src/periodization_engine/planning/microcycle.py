"""Microcycle generator: one concrete week per plan week."""

from __future__ import annotations

import math

from periodization_engine.config import EngineConfig
from periodization_engine.math.periodization import (
    is_deload_week,
    weekly_intensity_multiplier,
    weekly_volume_multiplier,
)
from periodization_engine.models.athlete import AthleteProfile
from periodization_engine.models.enums import (
    DEFAULT_TARGET_RPE,
    DELOAD_SESSION_FRACTION,
    HIGH_INTENSITY_PHASE_THRESHOLD,
    MIN_DELOAD_SESSIONS,
    SESSION_DURATION_MIN,
    SESSIONS_PER_WEEK,
    TARGET_RPE_BY_PHASE,
)
from periodization_engine.models.plan import Macrocycle, Mesocycle, Microcycle

BASE_RECOVERY_PROTOCOLS = ("sleep_optimization", "stress_management")
DELOAD_RECOVERY_PROTOCOLS = ("active_recovery", "mobility_work")
HIGH_INTENSITY_RECOVERY_PROTOCOLS = ("hrv_monitoring", "recovery_modalities")


def recovery_protocols(deload: bool, phase_intensity: float) -> tuple[str, ...]:
    """Recovery tags: sleep/stress always, deload and high-intensity extras."""
    tags = BASE_RECOVERY_PROTOCOLS
    if deload:
        tags += DELOAD_RECOVERY_PROTOCOLS
    if phase_intensity >= HIGH_INTENSITY_PHASE_THRESHOLD:
        tags += HIGH_INTENSITY_RECOVERY_PROTOCOLS
    return tags


def sessions_for_week(profile: AthleteProfile, deload: bool) -> int:
    frequency = SESSIONS_PER_WEEK[profile.training_type]
    if deload:
        return max(MIN_DELOAD_SESSIONS, math.floor(frequency * DELOAD_SESSION_FRACTION))
    return frequency


def adaptation_tests(week: int) -> tuple[str, ...]:
    """Strength testing every 4th week, volume tolerance every 2nd."""
    tests: list[str] = []
    if week % 4 == 0:
        tests.extend(("strength_test", "1rm_estimation"))
    if week % 2 == 0:
        tests.append("volume_tolerance")
    return tuple(tests)


def _week(
    meso: Mesocycle,
    week: int,
    index: int,
    macrocycle: Macrocycle,
    profile: AthleteProfile,
    config: EngineConfig,
) -> Microcycle:
    deload = is_deload_week(week, config.deload_frequency)
    return Microcycle(
        week=week,
        mesocycle_id=meso.mesocycle_id,
        phase=meso.phase,
        volume_multiplier=weekly_volume_multiplier(meso.volume_progression, index, deload),
        intensity_multiplier=weekly_intensity_multiplier(
            meso.intensity_progression, index, deload
        ),
        is_deload_week=deload,
        is_testing_week=week in macrocycle.testing_weeks,
        focus_areas=meso.focus_areas,
        recovery_protocols=recovery_protocols(deload, meso.phase_intensity),
        sessions_per_week=sessions_for_week(profile, deload),
        session_duration_min=SESSION_DURATION_MIN[profile.time_constraint],
        target_rpe=TARGET_RPE_BY_PHASE.get(meso.phase, DEFAULT_TARGET_RPE),
        adaptation_tests=adaptation_tests(week),
    )


def generate_microcycles(
    mesocycles: tuple[Mesocycle, ...],
    macrocycle: Macrocycle,
    profile: AthleteProfile,
    config: EngineConfig | None = None,
) -> tuple[Microcycle, ...]:
    """Expand mesocycles into one Microcycle per week.

    Args:
        mesocycles: Blocks tiling weeks 1..horizon.
        macrocycle: Owning macrocycle (testing weeks).
        profile: Athlete profile (session count and duration).
        config: Deload cadence; defaults to EngineConfig().

    Returns:
        Microcycles ordered by week number.
    """
    config = config or EngineConfig()
    weeks: list[Microcycle] = []
    for meso in mesocycles:
        for index, week in enumerate(range(meso.start_week, meso.end_week + 1)):
            weeks.append(_week(meso, week, index, macrocycle, profile, config))
    return tuple(weeks)
