"""Phase adaptation analyzer: is the athlete responding to the current phase?

Compares session RPE against the phase's target RPE and scores volume,
strength and recovery adaptation against phase criteria.

Reference:
    Kiely (2012). Periodization paradigms in the 21st century: evidence-led
    or tradition-driven? IJSPP 7(3):242-250.
"""

from __future__ import annotations

from periodization_engine.analyzers.base import AnalysisContext, SessionAnalyzer
from periodization_engine.models.enums import (
    AdaptationQuality,
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
from periodization_engine.monitoring.monitor import assess_phase_adaptation

# RPE this far below the phase target counts as under-stimulated
_UNDERLOAD_RPE_MARGIN = 1.0


class PhaseAdaptationAnalyzer(SessionAnalyzer):
    """Flags a phase whose effort is drifting away from its target RPE."""

    analyzer_id = "phase_adaptation"
    version = "1.0"
    priority = 1
    required_data = ["report", "microcycle"]

    def evaluate(self, context: AnalysisContext) -> AnalysisResult | None:
        report = context.report
        micro = context.microcycle
        if report is None or micro is None or not report.has_sufficient_data:
            return None

        assessment = assess_phase_adaptation(report)
        rpe = report.metric(Metric.RPE)
        current_rpe = report.current(Metric.RPE)
        direction = rpe.direction if rpe is not None else TrendDirection.STABLE
        coverage = min(1.0, report.sessions_analyzed / 5)

        recommendation: AdaptationRecommendation | None = None
        if direction == TrendDirection.INCREASING and current_rpe > micro.target_rpe:
            recommendation = AdaptationRecommendation(
                type=AdaptationType.DELOAD,
                priority=RecommendationPriority.HIGH,
                severity=Severity.MODERATE,
                rationale=(
                    f"RPE rising above the {micro.phase} target of {micro.target_rpe:.1f}"
                ),
                actions=("reduce_volume_40_percent", "reduce_intensity_15_percent"),
                confidence=round(0.75 * coverage, 3),
                volume_adjustment=-0.4,
                intensity_adjustment=-0.15,
                duration_weeks=1,
                source=self.analyzer_id,
            )
        elif (
            direction == TrendDirection.DECREASING
            and current_rpe < micro.target_rpe - _UNDERLOAD_RPE_MARGIN
        ):
            recommendation = AdaptationRecommendation(
                type=AdaptationType.INTENSIFY,
                priority=RecommendationPriority.MEDIUM,
                severity=Severity.CONSERVATIVE,
                rationale=(
                    f"RPE falling well below the {micro.phase} target of "
                    f"{micro.target_rpe:.1f}"
                ),
                actions=("increase_load_5_percent",),
                confidence=round(0.7 * coverage, 3),
                intensity_adjustment=0.05,
                duration_weeks=1,
                source=self.analyzer_id,
            )
        elif assessment.quality == AdaptationQuality.POOR:
            recommendation = AdaptationRecommendation(
                type=AdaptationType.MODIFY,
                priority=RecommendationPriority.MEDIUM,
                severity=Severity.MODERATE,
                rationale=f"Poor adaptation to {micro.phase} phase",
                actions=("reduce_volume_10_percent", "review_exercise_selection"),
                confidence=round(0.6 * coverage, 3),
                volume_adjustment=-0.1,
                duration_weeks=1,
                source=self.analyzer_id,
            )

        return self.result(
            adaptation_needed=recommendation is not None,
            confidence=recommendation.confidence if recommendation else 0.7 * coverage,
            recommendation=recommendation,
            readiness_score=assessment.recovery_score,
            progression_score=assessment.overall,
            notes=f"Phase adaptation {assessment.quality.name.lower()}",
        )
