"""Performance trend analyzer: alerts and overall trend over the analysis window."""

from __future__ import annotations

from periodization_engine.analyzers.base import AnalysisContext, SessionAnalyzer
from periodization_engine.models.enums import (
    AdaptationType,
    Metric,
    RecommendationPriority,
    Severity,
    TrendDirection,
)
from periodization_engine.models.recommendation import (
    AdaptationRecommendation,
    AnalysisResult,
)

# Progression score by overall trend direction
_PROGRESSION_SCORES: dict[TrendDirection, float] = {
    TrendDirection.INCREASING: 0.8,
    TrendDirection.STABLE: 0.6,
    TrendDirection.DECREASING: 0.3,
}

# Alerts on these metrics indicate accumulated fatigue
_FATIGUE_ALERT_METRICS = frozenset({Metric.RPE, Metric.RECOVERY})


class PerformanceTrendAnalyzer(SessionAnalyzer):
    """Turns monitor alerts and the overall trend into a recommendation."""

    analyzer_id = "performance_trend"
    version = "1.0"
    priority = 2
    required_data = ["report"]

    def evaluate(self, context: AnalysisContext) -> AnalysisResult | None:
        report = context.report
        if report is None or not report.has_sufficient_data:
            return None

        coverage = min(1.0, report.sessions_analyzed / 5)
        fatigue_alerts = [
            a for a in report.alerts
            if a.metric in _FATIGUE_ALERT_METRICS
            and a.priority <= RecommendationPriority.HIGH
        ]

        recommendation: AdaptationRecommendation | None = None
        if fatigue_alerts:
            recommendation = AdaptationRecommendation(
                type=AdaptationType.DELOAD,
                priority=RecommendationPriority.HIGH,
                severity=Severity.MODERATE,
                rationale="; ".join(a.message for a in fatigue_alerts),
                actions=("reduce_volume_40_percent", "prioritize_recovery"),
                confidence=round(0.8 * coverage, 3),
                volume_adjustment=-0.4,
                intensity_adjustment=-0.15,
                duration_weeks=1,
                source=self.analyzer_id,
            )
        elif report.overall_trend == TrendDirection.DECREASING:
            recommendation = AdaptationRecommendation(
                type=AdaptationType.MODIFY,
                priority=RecommendationPriority.MEDIUM,
                severity=Severity.MODERATE,
                rationale="Performance trending down across the analysis window",
                actions=("reduce_volume_10_percent", "reduce_intensity_5_percent"),
                confidence=round(0.7 * coverage, 3),
                volume_adjustment=-0.1,
                intensity_adjustment=-0.05,
                duration_weeks=1,
                source=self.analyzer_id,
            )
        elif (
            report.overall_trend == TrendDirection.INCREASING
            and report.rpe_benchmark == "low"
        ):
            recommendation = AdaptationRecommendation(
                type=AdaptationType.INTENSIFY,
                priority=RecommendationPriority.MEDIUM,
                severity=Severity.CONSERVATIVE,
                rationale="Performance improving at low effort",
                actions=("increase_load_5_percent",),
                confidence=round(0.7 * coverage, 3),
                intensity_adjustment=0.05,
                duration_weeks=1,
                source=self.analyzer_id,
            )

        return self.result(
            adaptation_needed=recommendation is not None,
            confidence=recommendation.confidence if recommendation else 0.7 * coverage,
            recommendation=recommendation,
            fatigue_score=round(report.intensity_score / 100.0, 3),
            readiness_score=round(report.average(Metric.RECOVERY) / 10.0, 3),
            progression_score=_PROGRESSION_SCORES[report.overall_trend],
            notes=f"Overall trend {report.overall_trend.name.lower()}",
        )
