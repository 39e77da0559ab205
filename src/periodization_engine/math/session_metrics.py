"""Per-session metric formulas and the windowed session frame.

References:
    - Epley (1985): one-repetition maximum estimate w x (1 + r/30)
    - Helms et al. (2016): RPE / reps-in-reserve adjustment of e1RM
    - Hooper & Mackinnon (1995): wellness questionnaire recovery monitoring
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np
import pandas as pd

from periodization_engine.errors import InsufficientDataError
from periodization_engine.models.enums import (
    RECOVERY_WEIGHT_ENERGY,
    RECOVERY_WEIGHT_MOTIVATION,
    RECOVERY_WEIGHT_SLEEP,
    RECOVERY_WEIGHT_SORENESS,
    RECOVERY_WEIGHT_STRESS,
    RPE_E1RM_ADJUSTMENT,
    Metric,
)

if TYPE_CHECKING:
    from periodization_engine.models.session import SessionRecord

_RPE_POINTS = np.array(sorted(RPE_E1RM_ADJUSTMENT))
_RPE_FACTORS = np.array([RPE_E1RM_ADJUSTMENT[k] for k in sorted(RPE_E1RM_ADJUSTMENT)])

# Column name per tracked metric in the session frame
METRIC_COLUMNS: dict[Metric, str] = {
    Metric.RPE: "rpe",
    Metric.VOLUME: "volume",
    Metric.ESTIMATED_MAX: "estimated_max",
    Metric.RECOVERY: "recovery",
    Metric.ADHERENCE: "adherence",
}


def rpe_adjustment(rpe: float | None) -> float:
    """Multiplier that credits reps left in reserve at a given RPE.

    Interpolates linearly between the half-point table entries and clamps
    outside RPE 6-10. Unrated sets get no adjustment.
    """
    if rpe is None:
        return 1.0
    return float(np.interp(rpe, _RPE_POINTS, _RPE_FACTORS))


def estimate_one_rep_max(weight: float, reps: int, rpe: float | None = None) -> float:
    """Estimate a one-rep max from a submaximal set.

    e1RM = weight x (1 + reps / 30) x rpe_adjustment(rpe)

    Args:
        weight: Load lifted.
        reps: Repetitions completed.
        rpe: Rating of perceived exertion for the set (1-10), optional.

    Returns:
        Estimated max rounded to 0.1, or 0.0 for an empty set.
    """
    if weight <= 0 or reps <= 0:
        return 0.0
    return round(weight * (1 + reps / 30) * rpe_adjustment(rpe), 1)


def calculate_recovery_score(
    energy: float,
    sleep_quality: float,
    stress: float,
    soreness: float,
    motivation: float,
) -> float:
    """Weighted 0-10 recovery score from wellness answers.

    Stress and soreness are inverted (10 - value) so higher is always
    better.
    """
    score = (
        energy * RECOVERY_WEIGHT_ENERGY
        + sleep_quality * RECOVERY_WEIGHT_SLEEP
        + (10 - stress) * RECOVERY_WEIGHT_STRESS
        + (10 - soreness) * RECOVERY_WEIGHT_SORENESS
        + motivation * RECOVERY_WEIGHT_MOTIVATION
    )
    return round(score, 1)


def build_session_frame(
    sessions: Sequence[SessionRecord],
    window: int,
    min_sessions: int,
) -> pd.DataFrame:
    """Tabulate the most recent ``window`` sessions, oldest first.

    Args:
        sessions: Time-ordered session history (oldest first).
        window: Number of most recent sessions to keep.
        min_sessions: Minimum sessions required for analysis.

    Returns:
        DataFrame with one row per session and a column per tracked metric.

    Raises:
        InsufficientDataError: If fewer than ``min_sessions`` are available.
    """
    recent = list(sessions)[-window:]
    if len(recent) < min_sessions:
        raise InsufficientDataError(
            f"Need at least {min_sessions} sessions for analysis, got {len(recent)}",
            sessions_available=len(recent),
        )
    frame = pd.DataFrame(
        {
            "session_date": [s.session_date for s in recent],
            "rpe": [s.average_rpe for s in recent],
            "volume": [s.total_volume for s in recent],
            "estimated_max": [s.estimated_max for s in recent],
            "recovery": [s.recovery_score for s in recent],
            "adherence": [s.adherence for s in recent],
        }
    )
    return frame.reset_index(drop=True)


def relative_drop(series: pd.Series, recent: int = 2) -> float:
    """Fractional drop of the last ``recent`` values against the earlier mean.

    Returns 0.0 when there is no earlier baseline or the baseline is zero.
    Positive values mean the recent values are lower.
    """
    if len(series) <= recent:
        return 0.0
    baseline = float(series.iloc[:-recent].mean())
    if baseline <= 0:
        return 0.0
    current = float(series.iloc[-recent:].mean())
    return (baseline - current) / baseline


def coefficient_of_variation(series: pd.Series) -> float:
    """Population coefficient of variation; 0.0 for a zero-mean series."""
    mean = float(series.mean())
    if mean == 0:
        return 0.0
    return float(series.std(ddof=0)) / mean
