"""Linear trend fitting over time-ordered samples.

Samples are indexed 0..n-1 (session order), so the slope is change per
session. Used by the performance monitor for RPE, volume, estimated max,
recovery and adherence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

from periodization_engine.models.enums import TREND_THRESHOLD, TrendDirection


@dataclass(frozen=True)
class TrendResult:
    """Least-squares fit of value against sample index.

    Attributes:
        slope: Change per sample.
        intercept: Fitted value at index 0.
        direction: Thresholded sign of the slope.
        r_squared: Coefficient of determination (0.0 for a flat series).
        samples: Number of points fitted.
    """

    slope: float
    intercept: float
    direction: TrendDirection
    r_squared: float
    samples: int

    @property
    def magnitude(self) -> float:
        return abs(self.slope)


def classify_slope(slope: float, threshold: float = TREND_THRESHOLD) -> TrendDirection:
    """Map a slope to INCREASING / DECREASING / STABLE using ``threshold``."""
    if slope > threshold:
        return TrendDirection.INCREASING
    if slope < -threshold:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def count_trailing(values: Sequence[float], predicate: Callable[[float], bool]) -> int:
    """Number of consecutive values, counted back from the most recent, that satisfy ``predicate``."""
    count = 0
    for value in reversed(values):
        if not predicate(value):
            break
        count += 1
    return count


def calculate_trend(
    values: Sequence[float] | np.ndarray,
    threshold: float = TREND_THRESHOLD,
) -> TrendResult:
    """Fit a straight line to ``values`` with numpy.polyfit.

    Fewer than two samples, or a constant series, yield a slope of exactly
    0.0 and direction STABLE.

    Args:
        values: Samples in time order (oldest first).
        threshold: Slope magnitude below which the trend is STABLE.

    Returns:
        TrendResult for the fit.
    """
    y = np.asarray(values, dtype=float)
    n = len(y)
    if n == 0:
        return TrendResult(0.0, 0.0, TrendDirection.STABLE, 0.0, 0)
    if n < 2 or np.ptp(y) == 0:
        return TrendResult(0.0, float(y[0]), TrendDirection.STABLE, 0.0, n)

    x = np.arange(n, dtype=float)
    slope, intercept = np.polyfit(x, y, 1)

    predicted = slope * x + intercept
    ss_res = float(np.sum((y - predicted) ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))
    r_squared = 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0

    return TrendResult(
        slope=float(slope),
        intercept=float(intercept),
        direction=classify_slope(float(slope), threshold),
        r_squared=r_squared,
        samples=n,
    )
