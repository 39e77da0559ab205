"""Mesocycle generator: splits macrocycle phases into fixed-length blocks."""

from __future__ import annotations

from periodization_engine.config import EngineConfig
from periodization_engine.math.periodization import (
    block_count,
    intensity_progression,
    reconcile_phase_weeks,
    volume_progression,
)
from periodization_engine.models.athlete import AthleteProfile
from periodization_engine.models.catalog import PhaseTemplate
from periodization_engine.models.enums import MAX_WEAKNESS_FOCUS_AREAS, PhaseFocus
from periodization_engine.models.plan import AdaptationMarkers, Macrocycle, Mesocycle


def focus_tag(focus: PhaseFocus | None) -> str | None:
    """Lowercase tag used in focus-area lists, e.g. PhaseFocus.STRENGTH -> "strength"."""
    return focus.name.lower() if focus is not None else None


def focus_areas_for(
    focus: PhaseFocus | None, weaknesses: tuple[str, ...]
) -> tuple[str, ...]:
    """Phase focus first, then up to two weakness tags that differ from it."""
    tag = focus_tag(focus)
    extras: list[str] = []
    for weakness in weaknesses:
        normalized = weakness.lower()
        if normalized != tag and normalized not in extras:
            extras.append(normalized)
    head = [tag] if tag else []
    return tuple(head + extras[:MAX_WEAKNESS_FOCUS_AREAS])


def markers_for(focus: PhaseFocus | None) -> AdaptationMarkers:
    return AdaptationMarkers(
        volume_tolerance_test=focus == PhaseFocus.VOLUME,
        strength_test=focus in (PhaseFocus.STRENGTH, PhaseFocus.INTENSITY),
    )


def _phase_blocks(
    phase: PhaseTemplate,
    phase_index: int,
    start_week: int,
    weeks: int,
    weaknesses: tuple[str, ...],
    mesocycle_length: int,
) -> list[Mesocycle]:
    n = block_count(weeks, mesocycle_length)
    areas = focus_areas_for(phase.focus, weaknesses)
    blocks: list[Mesocycle] = []
    week = start_week
    remaining = weeks
    for i in range(n):
        length = min(mesocycle_length, remaining)
        progress = (i + 1) / n
        blocks.append(
            Mesocycle(
                mesocycle_id=f"meso_{phase_index + 1}_{i + 1}",
                phase=phase.name,
                focus=phase.focus,
                start_week=week,
                end_week=week + length - 1,
                volume_progression=volume_progression(phase.volume, phase.focus, progress),
                intensity_progression=intensity_progression(
                    phase.intensity, phase.focus, progress
                ),
                focus_areas=areas,
                markers=markers_for(phase.focus),
                phase_intensity=phase.intensity,
            )
        )
        week += length
        remaining -= length
    return blocks


def generate_mesocycles(
    macrocycle: Macrocycle,
    profile: AthleteProfile,
    config: EngineConfig | None = None,
) -> tuple[Mesocycle, ...]:
    """Split every macrocycle phase into mesocycle blocks.

    Phase lengths are first fitted onto exactly the plan horizon so the
    blocks tile weeks 1..horizon with no gaps or overlap.

    Args:
        macrocycle: Scaled macrocycle.
        profile: Athlete profile (weakness tags feed the focus areas).
        config: Mesocycle length; defaults to EngineConfig().

    Returns:
        Mesocycles in chronological order.
    """
    config = config or EngineConfig()
    fitted = reconcile_phase_weeks(
        [p.weeks for p in macrocycle.phases], macrocycle.total_weeks
    )
    mesocycles: list[Mesocycle] = []
    week = 1
    for index, (phase, weeks) in enumerate(zip(macrocycle.phases, fitted)):
        if weeks <= 0:
            continue
        mesocycles.extend(
            _phase_blocks(
                phase, index, week, weeks, profile.weaknesses, config.mesocycle_length
            )
        )
        week += weeks
    return tuple(mesocycles)
