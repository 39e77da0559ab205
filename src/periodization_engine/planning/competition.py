"""Competition timing integrator: taper, competition week and recovery week.

Reference:
    Bosquet et al. (2007). Effects of tapering on performance: a
    meta-analysis. Med Sci Sports Exerc 39(8):1358-1365.
    Pritchard et al. (2015). Tapering practices of strength athletes.
    J Strength Cond Res 29(6):1540-1547.
"""

from __future__ import annotations

import logging
from datetime import date

from periodization_engine.math.periodization import (
    taper_factors,
    taper_length,
    week_for_date,
)
from periodization_engine.models.athlete import Competition
from periodization_engine.models.enums import (
    POST_COMPETITION_INTENSITY_MULTIPLIER,
    POST_COMPETITION_VOLUME_MULTIPLIER,
    CompetitionType,
)
from periodization_engine.models.plan import CompetitionPrep, Microcycle, PeakingProtocol

logger = logging.getLogger(__name__)

POST_COMPETITION_TAG = "post_competition_recovery"

# Taper focus by weeks out from the competition
_TAPER_FOCUS: dict[int, str] = {
    1: "volume_reduction",
    2: "intensity_maintenance",
    3: "technique_refinement",
}

_TAPER_TECHNIQUES: dict[CompetitionType, tuple[str, ...]] = {
    CompetitionType.POWERLIFTING: ("opener_practice", "timing_work", "mental_preparation"),
    CompetitionType.WEIGHTLIFTING: (
        "technique_refinement",
        "speed_work",
        "competition_simulation",
    ),
    CompetitionType.ENDURANCE: ("race_pace_work", "strategy_practice", "equipment_testing"),
}

_PEAKING_PROTOCOLS: dict[CompetitionType, PeakingProtocol] = {
    CompetitionType.POWERLIFTING: PeakingProtocol(
        1, "strength_expression", ("opener_confirmation", "timing_practice")
    ),
    CompetitionType.WEIGHTLIFTING: PeakingProtocol(
        1, "technical_precision", ("competition_timing", "movement_quality")
    ),
    CompetitionType.ENDURANCE: PeakingProtocol(
        3, "aerobic_power", ("race_simulation", "pacing_strategy")
    ),
}


def taper_focus(weeks_out: int) -> str:
    return _TAPER_FOCUS.get(weeks_out, "preparation")


def taper_techniques(competition_type: CompetitionType) -> tuple[str, ...]:
    """Techniques for the taper; disciplines without a list use powerlifting's."""
    return _TAPER_TECHNIQUES.get(
        competition_type, _TAPER_TECHNIQUES[CompetitionType.POWERLIFTING]
    )


def peaking_protocol(competition_type: CompetitionType) -> PeakingProtocol:
    return _PEAKING_PROTOCOLS.get(
        competition_type, _PEAKING_PROTOCOLS[CompetitionType.POWERLIFTING]
    )


def _apply_taper(
    weeks: list[Microcycle], competition: Competition, competition_week: int
) -> None:
    length = taper_length(competition.importance)
    taper_weeks = [
        (weeks_out, competition_week - weeks_out)
        for weeks_out in range(1, length + 1)
        if competition_week - weeks_out >= 1
    ]
    if not taper_weeks:
        return

    # Common reference so volume falls monotonically toward the competition
    reference_volume = max(weeks[w - 1].volume_multiplier for _, w in taper_weeks)
    reference_intensity = max(weeks[w - 1].intensity_multiplier for _, w in taper_weeks)

    for weeks_out, week in taper_weeks:
        volume_factor, intensity_factor = taper_factors(weeks_out, length)
        prep = CompetitionPrep(
            competition_name=competition.name,
            importance=competition.importance,
            competition_type=competition.competition_type,
            weeks_out=weeks_out,
            taper_focus=taper_focus(weeks_out),
            techniques=taper_techniques(competition.competition_type),
        )
        weeks[week - 1] = weeks[week - 1].adjusted(
            "taper",
            volume_multiplier=reference_volume * volume_factor,
            intensity_multiplier=reference_intensity * intensity_factor,
            is_taper_week=True,
            is_deload_week=False,
            taper_week=weeks_out,
            competition_prep=prep,
        )


def integrate_competitions(
    microcycles: tuple[Microcycle, ...],
    competitions: tuple[Competition, ...],
    start_date: date,
    horizon: int,
) -> tuple[Microcycle, ...]:
    """Overlay taper, competition and recovery weeks for each competition.

    Competitions whose date falls outside the plan are logged and skipped.

    Args:
        microcycles: Weeks 1..horizon in order.
        competitions: Competitions, processed in the given order.
        start_date: Plan start date.
        horizon: Plan length in weeks.

    Returns:
        New microcycle tuple with the overlays applied.
    """
    weeks = list(microcycles)
    for competition in competitions:
        competition_week = week_for_date(start_date, competition.competition_date, horizon)
        if competition_week is None or competition_week > len(weeks):
            logger.warning(
                "Competition %r on %s is outside the plan horizon; skipping",
                competition.name,
                competition.competition_date.isoformat(),
            )
            continue

        _apply_taper(weeks, competition, competition_week)

        weeks[competition_week - 1] = weeks[competition_week - 1].adjusted(
            "competition",
            is_competition_week=True,
            competition_prep=CompetitionPrep(
                competition_name=competition.name,
                importance=competition.importance,
                competition_type=competition.competition_type,
                peaking_protocol=peaking_protocol(competition.competition_type),
            ),
        )

        if competition_week < len(weeks):
            after = weeks[competition_week]
            weeks[competition_week] = after.adjusted(
                POST_COMPETITION_TAG,
                is_recovery_week=True,
                volume_multiplier=after.volume_multiplier * POST_COMPETITION_VOLUME_MULTIPLIER,
                intensity_multiplier=(
                    after.intensity_multiplier * POST_COMPETITION_INTENSITY_MULTIPLIER
                ),
                recovery_protocols=after.recovery_protocols + (POST_COMPETITION_TAG,),
            )

        logger.info(
            "Integrated competition %r at week %d", competition.name, competition_week
        )
    return tuple(weeks)
