"""Performance monitor output: per-metric summaries, alerts and predictions."""

from __future__ import annotations

from dataclasses import dataclass, field

from periodization_engine.math.trend import TrendResult
from periodization_engine.models.enums import (
    AdaptationQuality,
    AnalysisStatus,
    Metric,
    RecommendationPriority,
    TrendDirection,
)


@dataclass(frozen=True)
class MetricSummary:
    """Current value, window average and fitted trend for one metric."""

    metric: Metric
    current: float
    average: float
    trend: TrendResult

    @property
    def slope(self) -> float:
        return self.trend.slope

    @property
    def direction(self) -> TrendDirection:
        return self.trend.direction


@dataclass(frozen=True)
class PerformanceAlert:
    """A threshold breach on the most recent session."""

    metric: Metric
    priority: RecommendationPriority
    value: float
    threshold: float
    message: str


@dataclass(frozen=True)
class MetricPrediction:
    """Linear extrapolation of a metric ``days_ahead`` days out."""

    metric: Metric
    days_ahead: int
    predicted: float


@dataclass(frozen=True)
class PhaseAdaptationAssessment:
    """How well the athlete is adapting to the current phase (scores 0-1)."""

    volume_score: float
    strength_score: float
    recovery_score: float
    overall: float
    quality: AdaptationQuality


@dataclass(frozen=True)
class PerformanceReport:
    """Everything the monitor derived from the recent session window."""

    status: AnalysisStatus
    sessions_analyzed: int
    metrics: tuple[MetricSummary, ...] = field(default_factory=tuple)
    rpe_values: tuple[float, ...] = field(default_factory=tuple)
    volume_drop: float = 0.0  # fractional drop of last 2 vs earlier mean
    performance_drop: float = 0.0
    consistency: float = 1.0  # 1 - coefficient of variation of volume
    intensity_score: float = 0.0  # 0-100
    overall_trend: TrendDirection = TrendDirection.STABLE
    alerts: tuple[PerformanceAlert, ...] = field(default_factory=tuple)
    predictions: tuple[MetricPrediction, ...] = field(default_factory=tuple)
    rpe_benchmark: str = ""
    adherence_benchmark: str = ""

    @property
    def has_sufficient_data(self) -> bool:
        return self.status == AnalysisStatus.OK

    def metric(self, metric: Metric) -> MetricSummary | None:
        for summary in self.metrics:
            if summary.metric == metric:
                return summary
        return None

    def slope(self, metric: Metric) -> float:
        summary = self.metric(metric)
        return summary.slope if summary is not None else 0.0

    def current(self, metric: Metric) -> float:
        summary = self.metric(metric)
        return summary.current if summary is not None else 0.0

    def average(self, metric: Metric) -> float:
        summary = self.metric(metric)
        return summary.average if summary is not None else 0.0
