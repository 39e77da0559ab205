"""Fatigue trend analyzer: wraps the adaptation decision engine."""

from __future__ import annotations

from periodization_engine.analyzers.base import AnalysisContext, SessionAnalyzer
from periodization_engine.models.enums import AnalysisStatus, Metric
from periodization_engine.models.recommendation import AnalysisResult


def rpe_fatigue(average_rpe: float) -> float:
    """Normalize a window's average RPE (6-10) to a 0-1 fatigue score."""
    return max(0.0, min(1.0, (average_rpe - 6.0) / 4.0))


class FatigueAnalyzer(SessionAnalyzer):
    """Reports the decision engine's verdict as an AnalysisResult.

    Flags adaptation whenever the decision engine recommends anything
    other than NONE.
    """

    analyzer_id = "fatigue_trend"
    version = "1.0"
    priority = 0
    required_data = ["decision"]

    def evaluate(self, context: AnalysisContext) -> AnalysisResult | None:
        decision = context.decision
        if decision is None or decision.status != AnalysisStatus.OK:
            return None

        recommendation = decision.recommendation
        report = decision.report
        return self.result(
            adaptation_needed=recommendation.requires_adaptation,
            confidence=recommendation.confidence,
            recommendation=recommendation,
            fatigue_score=round(rpe_fatigue(report.average(Metric.RPE)), 3),
            readiness_score=round(report.average(Metric.RECOVERY) / 10.0, 3),
            notes=recommendation.rationale,
        )
