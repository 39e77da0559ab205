"""Adaptation decision engine: maps monitor output to a typed recommendation.

Thresholds are tier-specific: strength athletes tolerate sustained high
RPE longer than endurance athletes before a deload is warranted.

References:
    - Helms et al. (2016): RPE-based autoregulation for strength athletes
    - Meeusen et al. (2013): prevention, diagnosis and treatment of the
      overtraining syndrome (ECSS/ACSM consensus)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from periodization_engine.config import EngineConfig
from periodization_engine.math.trend import count_trailing
from periodization_engine.models.analysis import PerformanceReport
from periodization_engine.models.enums import (
    AGGRESSIVE_PROGRESSION_SLOPE,
    DEFAULT_SENSITIVITY,
    MODERATE_PROGRESSION_SLOPE,
    RPE_SLOPE_MODIFY_THRESHOLD,
    SENSITIVITY_RPE_SHIFT,
    VOLUME_SLOPE_MODIFY_THRESHOLD,
    AdaptationType,
    AnalysisStatus,
    Metric,
    RecommendationPriority,
    Severity,
    TrainingType,
)
from periodization_engine.models.recommendation import AdaptationRecommendation
from periodization_engine.models.session import SessionRecord
from periodization_engine.monitoring.monitor import PerformanceMonitor

logger = logging.getLogger(__name__)

SOURCE = "decision_engine"


@dataclass(frozen=True)
class DecisionThresholds:
    """Tier-specific trigger levels.

    Attributes:
        deload_rpe: Session RPE above which a session counts as high-effort.
        deload_sessions: Consecutive high-effort sessions that trigger a deload.
        volume_drop: Fractional volume drop counted as a fatigue marker.
        performance_drop: Fractional estimated-max drop counted as a marker.
        intensify_rpe: Session RPE below which a session counts as easy.
        intensify_sessions: Consecutive easy sessions needed to intensify.
    """

    deload_rpe: float
    deload_sessions: int
    volume_drop: float
    performance_drop: float
    intensify_rpe: float
    intensify_sessions: int


TIER_THRESHOLDS: dict[TrainingType, DecisionThresholds] = {
    TrainingType.STRENGTH: DecisionThresholds(9.5, 3, 0.15, 0.05, 7.0, 2),
    TrainingType.HYPERTROPHY: DecisionThresholds(9.0, 4, 0.20, 0.05, 7.5, 3),
    TrainingType.ENDURANCE: DecisionThresholds(8.5, 5, 0.15, 0.10, 6.5, 4),
    TrainingType.GENERAL: DecisionThresholds(9.5, 3, 0.15, 0.05, 7.0, 2),
}

DELOAD_ACTIONS = (
    "reduce_volume_40_percent",
    "reduce_intensity_15_percent",
    "prioritize_sleep_and_nutrition",
    "maintain_movement_patterns",
)
INTENSIFY_ACTIONS = (
    "increase_load_5_percent",
    "add_volume_progressively",
    "monitor_rpe_response",
)


@dataclass(frozen=True)
class AdaptationDecision:
    """Decision engine output: status, recommendation and the analysis behind it."""

    status: AnalysisStatus
    recommendation: AdaptationRecommendation
    report: PerformanceReport


class AdaptationDecisionEngine:
    """Decides deload / intensify / modify / none from recent sessions.

    ``sensitivity`` starts at 1.0 and is raised by the orchestrator after
    a system-wide adjustment; higher sensitivity lowers the RPE level that
    counts toward a deload.
    """

    def __init__(
        self,
        training_type: TrainingType = TrainingType.STRENGTH,
        config: EngineConfig | None = None,
        sensitivity: float = DEFAULT_SENSITIVITY,
        monitor: PerformanceMonitor | None = None,
    ) -> None:
        self.training_type = training_type
        self.config = config or EngineConfig()
        self.sensitivity = sensitivity
        self.monitor = monitor or PerformanceMonitor(self.config)

    @property
    def thresholds(self) -> DecisionThresholds:
        return TIER_THRESHOLDS[self.training_type]

    @property
    def deload_rpe_threshold(self) -> float:
        shift = SENSITIVITY_RPE_SHIFT * max(0.0, self.sensitivity - DEFAULT_SENSITIVITY)
        return self.thresholds.deload_rpe - shift

    def adjust_sensitivity(self, factor: float) -> float:
        """Scale sensitivity by ``factor``, capped at config.max_sensitivity."""
        self.sensitivity = min(self.config.max_sensitivity, self.sensitivity * factor)
        logger.info("Decision sensitivity now %.2f", self.sensitivity)
        return self.sensitivity

    def decide(self, sessions: Sequence[SessionRecord]) -> AdaptationDecision:
        """Analyze the decision window and recommend an adaptation.

        Args:
            sessions: Session history, oldest first.

        Returns:
            AdaptationDecision. With too few sessions the status is
            INSUFFICIENT_DATA and the recommendation type is NONE.
        """
        report = self.monitor.analyze(sessions, window=self.config.decision_window)
        if not report.has_sufficient_data:
            return AdaptationDecision(
                status=AnalysisStatus.INSUFFICIENT_DATA,
                recommendation=AdaptationRecommendation(
                    type=AdaptationType.NONE,
                    rationale=(
                        f"Insufficient data: {report.sessions_analyzed} of "
                        f"{self.config.min_sessions} sessions logged"
                    ),
                    source=SOURCE,
                ),
                report=report,
            )
        return AdaptationDecision(
            status=AnalysisStatus.OK,
            recommendation=self.evaluate(report),
            report=report,
        )

    def evaluate(self, report: PerformanceReport) -> AdaptationRecommendation:
        """Apply the deload, intensify and modify checks in that order."""
        t = self.thresholds
        deload_rpe = self.deload_rpe_threshold
        high_streak = count_trailing(report.rpe_values, lambda v: v > deload_rpe)
        if high_streak >= t.deload_sessions:
            return self._deload(report, high_streak, deload_rpe)

        low_streak = count_trailing(report.rpe_values, lambda v: 0 < v < t.intensify_rpe)
        strength_slope = report.slope(Metric.ESTIMATED_MAX)
        if low_streak >= t.intensify_sessions and strength_slope > 0:
            return self._intensify(report, low_streak, strength_slope)

        rpe_slope = report.slope(Metric.RPE)
        volume_slope = report.slope(Metric.VOLUME)
        if (
            abs(rpe_slope) > RPE_SLOPE_MODIFY_THRESHOLD
            or abs(volume_slope) > VOLUME_SLOPE_MODIFY_THRESHOLD
        ):
            return self._modify(report, rpe_slope, volume_slope)

        return AdaptationRecommendation(
            type=AdaptationType.NONE,
            rationale="Training response within expected range",
            confidence=self._confidence(report, 0.6),
            source=SOURCE,
        )

    # ------------------------------------------------------------------
    # Recommendation builders
    # ------------------------------------------------------------------

    def _confidence(self, report: PerformanceReport, base: float) -> float:
        coverage = min(1.0, report.sessions_analyzed / self.config.decision_window)
        return round(base * coverage, 3)

    def _deload(
        self, report: PerformanceReport, streak: int, threshold: float
    ) -> AdaptationRecommendation:
        t = self.thresholds
        volume_drop = report.volume_drop > t.volume_drop
        performance_drop = report.performance_drop > t.performance_drop
        markers = 1 + int(volume_drop) + int(performance_drop)

        if markers == 3 or streak >= 5:
            severity = Severity.SEVERE
        elif markers == 2:
            severity = Severity.SIGNIFICANT
        else:
            severity = Severity.MODERATE

        reasons = [f"RPE above {threshold:.1f} for {streak} consecutive sessions"]
        if volume_drop:
            reasons.append(f"volume down {report.volume_drop:.0%}")
        if performance_drop:
            reasons.append(f"estimated max down {report.performance_drop:.0%}")

        return AdaptationRecommendation(
            type=AdaptationType.DELOAD,
            priority=(
                RecommendationPriority.IMMEDIATE
                if severity == Severity.SEVERE
                else RecommendationPriority.HIGH
            ),
            severity=severity,
            rationale="; ".join(reasons),
            actions=DELOAD_ACTIONS,
            confidence=self._confidence(report, 0.9),
            volume_adjustment=-0.4,
            intensity_adjustment=-0.15,
            duration_weeks=1,
            source=SOURCE,
        )

    def _intensify(
        self, report: PerformanceReport, streak: int, strength_slope: float
    ) -> AdaptationRecommendation:
        if strength_slope > AGGRESSIVE_PROGRESSION_SLOPE:
            severity = Severity.AGGRESSIVE
        elif strength_slope > MODERATE_PROGRESSION_SLOPE:
            severity = Severity.MODERATE
        else:
            severity = Severity.CONSERVATIVE
        return AdaptationRecommendation(
            type=AdaptationType.INTENSIFY,
            priority=RecommendationPriority.MEDIUM,
            severity=severity,
            rationale=(
                f"RPE below {self.thresholds.intensify_rpe:.1f} for {streak} "
                f"consecutive sessions with estimated max rising "
                f"{strength_slope:.2f} per session"
            ),
            actions=INTENSIFY_ACTIONS,
            confidence=self._confidence(report, 0.8),
            volume_adjustment=0.15,
            intensity_adjustment=0.05,
            duration_weeks=1,
            source=SOURCE,
        )

    def _modify(
        self, report: PerformanceReport, rpe_slope: float, volume_slope: float
    ) -> AdaptationRecommendation:
        if rpe_slope > RPE_SLOPE_MODIFY_THRESHOLD:
            volume, intensity = -0.1, -0.05
            rationale = f"RPE rising {rpe_slope:.2f} per session"
            actions = ("reduce_volume_10_percent", "reduce_intensity_5_percent")
        elif rpe_slope < -RPE_SLOPE_MODIFY_THRESHOLD:
            volume, intensity = 0.1, 0.025
            rationale = f"RPE falling {abs(rpe_slope):.2f} per session"
            actions = ("increase_volume_10_percent", "increase_intensity_2_5_percent")
        elif volume_slope < 0:
            volume, intensity = -0.05, 0.0
            rationale = f"Volume falling {abs(volume_slope):.0f} per session"
            actions = ("reduce_volume_5_percent",)
        else:
            volume, intensity = 0.05, 0.0
            rationale = f"Volume rising {volume_slope:.0f} per session"
            actions = ("increase_volume_5_percent",)
        return AdaptationRecommendation(
            type=AdaptationType.MODIFY,
            priority=RecommendationPriority.MEDIUM,
            severity=Severity.MODERATE,
            rationale=rationale,
            actions=actions,
            confidence=self._confidence(report, 0.7),
            volume_adjustment=volume,
            intensity_adjustment=intensity,
            duration_weeks=1,
            source=SOURCE,
        )
