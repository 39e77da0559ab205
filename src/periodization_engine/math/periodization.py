"""Periodization math: phase scaling, cadences, progression curves, taper.

Pure functions shared by the macrocycle, mesocycle, microcycle and
competition builders.

References:
    Bompa & Haff (2009), Periodization: Theory and Methodology of Training.
    Issurin (2010), New horizons for the methodology and physiology of training
        periodization.
    Bosquet et al. (2007), Effects of tapering on performance: a meta-analysis.
    Mujika & Padilla (2003), Scientific bases for precompetition tapering.
"""

from __future__ import annotations

import dataclasses
import math
from datetime import date

from periodization_engine.models.catalog import PhaseTemplate
from periodization_engine.models.enums import (
    DELOAD_INTENSITY_MULTIPLIER,
    DELOAD_VOLUME_MULTIPLIER,
    INTENSITY_FOCUS_INTENSITY_RAMP,
    INTENSITY_FOCUS_VOLUME_RAMP,
    MAJOR_TAPER_WEEKS,
    MAX_INTENSITY_MULTIPLIER,
    MAX_VOLUME_MULTIPLIER,
    MINOR_TAPER_WEEKS,
    PEAK_FOCUS_INTENSITY_RAMP,
    PEAK_FOCUS_VOLUME_RAMP,
    TAPER_MAX_INTENSITY_INCREASE,
    TAPER_MAX_VOLUME_REDUCTION,
    VOLUME_FOCUS_VOLUME_RAMP,
    WEEKLY_INTENSITY_STEP,
    WEEKLY_VOLUME_STEP,
    CompetitionImportance,
    PhaseFocus,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def scale_phases(
    phases: tuple[PhaseTemplate, ...], horizon: int
) -> tuple[PhaseTemplate, ...]:
    """Scale relative phase weeks to an absolute horizon.

    Each phase gets ``max(1, round(weeks * horizon / total))`` weeks.
    Rounding drift is kept: the scaled total may differ from ``horizon``
    by up to the number of phases.

    Raises:
        ValueError: If horizon < 1 or the model has no phases.
    """
    if horizon < 1:
        raise ValueError(f"Horizon must be at least 1 week, got {horizon}")
    total = sum(p.weeks for p in phases)
    if total <= 0:
        raise ValueError("Model must define at least one phase with weeks > 0")
    factor = horizon / total
    return tuple(
        dataclasses.replace(p, weeks=max(1, round_half_up(p.weeks * factor)))
        for p in phases
    )


def reconcile_phase_weeks(phase_weeks: list[int], horizon: int) -> list[int]:
    """Fit scaled phase lengths onto exactly ``horizon`` weeks.

    Phases are laid out in order and clipped at the horizon (phases that
    start after it get 0 weeks). A shortfall is added to the last phase.
    """
    fitted: list[int] = []
    used = 0
    for weeks in phase_weeks:
        take = max(0, min(weeks, horizon - used))
        fitted.append(take)
        used += take
    if fitted and used < horizon:
        fitted[-1] += horizon - used
    return fitted


def is_deload_week(week: int, frequency: int) -> bool:
    """Every ``frequency``-th week is a planned deload."""
    return frequency > 0 and week % frequency == 0


def deload_weeks(horizon: int, frequency: int) -> tuple[int, ...]:
    return tuple(range(frequency, horizon + 1, frequency)) if frequency > 0 else ()


def testing_weeks(horizon: int, first_week: int, interval: int) -> tuple[int, ...]:
    """Testing weeks from ``first_week`` every ``interval`` weeks, plus the final week."""
    weeks = set(range(first_week, horizon + 1, interval)) if first_week >= 1 else set()
    weeks.add(horizon)
    return tuple(sorted(weeks))


def block_count(phase_weeks: int, mesocycle_length: int) -> int:
    """Number of mesocycle blocks for a phase (last block may be partial)."""
    if phase_weeks <= 0:
        return 0
    return math.ceil(phase_weeks / mesocycle_length)


def _ramp(bounds: tuple[float, float], progress: float) -> float:
    start, end = bounds
    return start + (end - start) * progress


def volume_progression(
    base_volume: float, focus: PhaseFocus | None, progress: float
) -> float:
    """Block volume for a phase focus at ``progress`` in (0, 1].

    Volume-focused phases ramp 0.8 -> 1.2x, intensity-focused 1.2 -> 0.8x,
    peak-focused 0.8 -> 0.5x; other phases hold the base volume.
    """
    if focus == PhaseFocus.VOLUME:
        return base_volume * _ramp(VOLUME_FOCUS_VOLUME_RAMP, progress)
    if focus == PhaseFocus.INTENSITY:
        return base_volume * _ramp(INTENSITY_FOCUS_VOLUME_RAMP, progress)
    if focus == PhaseFocus.PEAK:
        return base_volume * _ramp(PEAK_FOCUS_VOLUME_RAMP, progress)
    return base_volume


def intensity_progression(
    base_intensity: float, focus: PhaseFocus | None, progress: float
) -> float:
    """Block intensity: a smaller-amplitude counterpart of volume_progression."""
    if focus == PhaseFocus.INTENSITY:
        return base_intensity * _ramp(INTENSITY_FOCUS_INTENSITY_RAMP, progress)
    if focus == PhaseFocus.PEAK:
        return base_intensity * _ramp(PEAK_FOCUS_INTENSITY_RAMP, progress)
    return base_intensity


def weekly_volume_multiplier(
    block_volume: float, week_index: int, deload: bool
) -> float:
    """Volume multiplier for the ``week_index``-th week (0-based) of a block.

    Deload weeks use the fixed deload fraction, scaled down further when the
    block itself is a low-volume block so the deload always sits below the
    block's loading weeks.
    """
    if deload:
        return DELOAD_VOLUME_MULTIPLIER * min(1.0, block_volume)
    return min(MAX_VOLUME_MULTIPLIER, block_volume * (1 + WEEKLY_VOLUME_STEP * week_index))


def weekly_intensity_multiplier(
    block_intensity: float, week_index: int, deload: bool
) -> float:
    if deload:
        return DELOAD_INTENSITY_MULTIPLIER
    return min(
        MAX_INTENSITY_MULTIPLIER,
        block_intensity * (1 + WEEKLY_INTENSITY_STEP * week_index),
    )


def taper_length(importance: CompetitionImportance) -> int:
    """Three-week taper for major competitions, two weeks otherwise."""
    return MAJOR_TAPER_WEEKS if importance == CompetitionImportance.MAJOR else MINOR_TAPER_WEEKS


def taper_factors(weeks_out: int, length: int) -> tuple[float, float]:
    """Volume and intensity factors for a taper week.

    ``weeks_out`` is 1 for the week immediately before the competition.
    Taper progress grows as the competition approaches, so the nearest
    week gets the full 60% volume cut and the +5% intensity hold.

    Raises:
        ValueError: If weeks_out is outside 1..length.
    """
    if not 1 <= weeks_out <= length:
        raise ValueError(f"weeks_out must be in 1..{length}, got {weeks_out}")
    progress = (length - weeks_out + 1) / length
    return (
        1 - progress * TAPER_MAX_VOLUME_REDUCTION,
        1 + progress * TAPER_MAX_INTENSITY_INCREASE,
    )


def week_for_date(start_date: date, target: date, horizon: int) -> int | None:
    """Plan week (1-indexed) that contains ``target``.

    Week w covers [start + 7(w-1) days, start + 7w days). The plan end date
    itself maps to the final week. Returns None outside the plan.
    """
    days = (target - start_date).days
    if days < 0 or days > horizon * 7:
        return None
    return min(days // 7 + 1, horizon)
