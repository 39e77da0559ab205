"""Performance/fatigue monitor: trend analysis over the recent session window.

References:
    - Foster et al. (2001): session-RPE monitoring of training load
    - Zourdos et al. (2016): RIR-based RPE scale for resistance training
    - Halson (2014): monitoring training load to understand fatigue
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Sequence

import pandas as pd

from periodization_engine.config import EngineConfig
from periodization_engine.errors import InsufficientDataError
from periodization_engine.math.session_metrics import (
    METRIC_COLUMNS,
    build_session_frame,
    coefficient_of_variation,
    relative_drop,
)
from periodization_engine.math.trend import calculate_trend
from periodization_engine.models.analysis import (
    MetricPrediction,
    MetricSummary,
    PerformanceAlert,
    PerformanceReport,
    PhaseAdaptationAssessment,
)
from periodization_engine.models.enums import (
    ADHERENCE_BENCHMARKS,
    ALERT_ADHERENCE_THRESHOLD,
    ALERT_RECOVERY_THRESHOLD,
    ALERT_RPE_THRESHOLD,
    MIN_SESSIONS_FOR_DROP_DETECTION,
    MIN_SESSIONS_FOR_PREDICTION,
    RECOVERY_MIN_SCORE,
    RECOVERY_TARGET_SCORE,
    RPE_CRITICAL_RANGE,
    RPE_OPTIMAL_RANGE,
    RPE_WARNING_RANGE,
    STRENGTH_ADAPTATION_RANGE,
    VOLUME_ADAPTATION_RANGE,
    AdaptationQuality,
    AnalysisStatus,
    Metric,
    RecommendationPriority,
    TrendDirection,
)
from periodization_engine.models.session import SessionRecord

logger = logging.getLogger(__name__)

PREDICTION_HORIZONS_DAYS = (7, 14, 28)


def classify_rpe(average_rpe: float) -> str:
    """Benchmark band for a window's average RPE."""
    if average_rpe >= RPE_CRITICAL_RANGE[0]:
        return "critical"
    if average_rpe >= RPE_WARNING_RANGE[0]:
        return "warning"
    if average_rpe >= RPE_OPTIMAL_RANGE[0]:
        return "optimal"
    return "low"


def classify_adherence(adherence: float) -> str:
    for label, floor in ADHERENCE_BENCHMARKS.items():
        if adherence >= floor:
            return label
    return "critical"


def intensity_score(average_rpe: float) -> float:
    """Map average RPE 6-10 onto 0-100."""
    return max(0.0, min(100.0, (average_rpe - 6.0) * 25.0))


def predict_metric(summary: MetricSummary, days_ahead: int) -> MetricPrediction:
    """Extrapolate a metric ``days_ahead`` days out from its fitted slope.

    Raises:
        InsufficientDataError: If the trend was fitted on fewer than five sessions.
    """
    if summary.trend.samples < MIN_SESSIONS_FOR_PREDICTION:
        raise InsufficientDataError(
            f"Predictions need {MIN_SESSIONS_FOR_PREDICTION} sessions, "
            f"got {summary.trend.samples}",
            sessions_available=summary.trend.samples,
        )
    predicted = summary.current + summary.slope * days_ahead / 7
    return MetricPrediction(summary.metric, days_ahead, round(predicted, 1))


def _range_score(change: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    if low <= change <= high:
        return 1.0
    if change > high:
        return 0.7  # progressing faster than sustainable
    if change > 0:
        return 0.5
    return 0.2


def fractional_change(summary: MetricSummary | None) -> float:
    """Fitted change across the window as a fraction of the window average."""
    if summary is None or summary.average <= 0 or summary.trend.samples < 2:
        return 0.0
    return summary.slope * (summary.trend.samples - 1) / summary.average


def assess_phase_adaptation(report: PerformanceReport) -> PhaseAdaptationAssessment:
    """Score volume, strength and recovery adaptation against phase criteria."""
    volume_score = _range_score(
        fractional_change(report.metric(Metric.VOLUME)), VOLUME_ADAPTATION_RANGE
    )
    strength_score = _range_score(
        fractional_change(report.metric(Metric.ESTIMATED_MAX)), STRENGTH_ADAPTATION_RANGE
    )
    recovery = report.average(Metric.RECOVERY)
    if recovery >= RECOVERY_TARGET_SCORE:
        recovery_score = 1.0
    elif recovery >= RECOVERY_MIN_SCORE:
        recovery_score = 0.7
    else:
        recovery_score = 0.3

    overall = (volume_score + strength_score + recovery_score) / 3
    if overall >= 0.8:
        quality = AdaptationQuality.EXCELLENT
    elif overall >= 0.6:
        quality = AdaptationQuality.GOOD
    elif overall >= 0.4:
        quality = AdaptationQuality.FAIR
    else:
        quality = AdaptationQuality.POOR
    return PhaseAdaptationAssessment(
        volume_score=volume_score,
        strength_score=strength_score,
        recovery_score=recovery_score,
        overall=round(overall, 3),
        quality=quality,
    )


class PerformanceMonitor:
    """Summarizes a session window into a PerformanceReport.

    Usage:
        monitor = PerformanceMonitor()
        report = monitor.analyze(sessions)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def analyze(
        self, sessions: Sequence[SessionRecord], window: int | None = None
    ) -> PerformanceReport:
        """Analyze the most recent ``window`` sessions.

        Args:
            sessions: Session history, oldest first.
            window: Sessions to analyze; defaults to config.analysis_window.

        Returns:
            PerformanceReport. With fewer than config.min_sessions sessions
            the status is INSUFFICIENT_DATA and no metrics are computed.
        """
        try:
            frame = build_session_frame(
                sessions, window or self.config.analysis_window, self.config.min_sessions
            )
        except InsufficientDataError as exc:
            logger.debug("Skipping analysis: %s", exc)
            return PerformanceReport(
                status=AnalysisStatus.INSUFFICIENT_DATA,
                sessions_analyzed=exc.sessions_available,
            )

        metrics = tuple(
            self._summarize(metric, frame[column])
            for metric, column in METRIC_COLUMNS.items()
        )
        n = len(frame)
        detect_drops = n >= MIN_SESSIONS_FOR_DROP_DETECTION
        average_rpe = float(frame["rpe"].mean())

        report = PerformanceReport(
            status=AnalysisStatus.OK,
            sessions_analyzed=n,
            metrics=metrics,
            rpe_values=tuple(float(v) for v in frame["rpe"]),
            volume_drop=relative_drop(frame["volume"]) if detect_drops else 0.0,
            performance_drop=(
                relative_drop(frame["estimated_max"]) if detect_drops else 0.0
            ),
            consistency=round(max(0.0, 1.0 - coefficient_of_variation(frame["volume"])), 3),
            intensity_score=intensity_score(average_rpe),
            rpe_benchmark=classify_rpe(average_rpe),
            adherence_benchmark=classify_adherence(float(frame["adherence"].mean())),
        )
        return _with_derived(report, frame)

    @staticmethod
    def _summarize(metric: Metric, series: pd.Series) -> MetricSummary:
        return MetricSummary(
            metric=metric,
            current=float(series.iloc[-1]),
            average=float(series.mean()),
            trend=calculate_trend(series.to_numpy()),
        )


def _overall_trend(report: PerformanceReport) -> TrendDirection:
    """Positive when strength/volume rise without rising effort or falling recovery."""
    score = 0
    score += int(report.metric(Metric.ESTIMATED_MAX).direction)  # type: ignore[union-attr]
    score += int(report.metric(Metric.VOLUME).direction)  # type: ignore[union-attr]
    score -= int(report.metric(Metric.RPE).direction)  # type: ignore[union-attr]
    score += int(report.metric(Metric.RECOVERY).direction)  # type: ignore[union-attr]
    if score > 0:
        return TrendDirection.INCREASING
    if score < 0:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def _alerts(frame: pd.DataFrame) -> tuple[PerformanceAlert, ...]:
    latest = frame.iloc[-1]
    alerts: list[PerformanceAlert] = []
    if latest["rpe"] > ALERT_RPE_THRESHOLD:
        alerts.append(
            PerformanceAlert(
                Metric.RPE,
                RecommendationPriority.HIGH,
                float(latest["rpe"]),
                ALERT_RPE_THRESHOLD,
                "Very high session RPE - monitor for overreaching",
            )
        )
    if latest["adherence"] < ALERT_ADHERENCE_THRESHOLD:
        alerts.append(
            PerformanceAlert(
                Metric.ADHERENCE,
                RecommendationPriority.MEDIUM,
                float(latest["adherence"]),
                ALERT_ADHERENCE_THRESHOLD,
                "Low set completion - review program difficulty",
            )
        )
    if latest["recovery"] < ALERT_RECOVERY_THRESHOLD:
        alerts.append(
            PerformanceAlert(
                Metric.RECOVERY,
                RecommendationPriority.HIGH,
                float(latest["recovery"]),
                ALERT_RECOVERY_THRESHOLD,
                "Poor recovery score - consider a lighter session",
            )
        )
    return tuple(alerts)


def _with_derived(report: PerformanceReport, frame: pd.DataFrame) -> PerformanceReport:
    predictions: list[MetricPrediction] = []
    if report.sessions_analyzed >= MIN_SESSIONS_FOR_PREDICTION:
        for metric in (Metric.ESTIMATED_MAX, Metric.VOLUME):
            summary = report.metric(metric)
            if summary is not None:
                predictions.extend(
                    predict_metric(summary, days) for days in PREDICTION_HORIZONS_DAYS
                )
    return dataclasses.replace(
        report,
        overall_trend=_overall_trend(report),
        alerts=_alerts(frame),
        predictions=tuple(predictions),
    )
