"""Merge strategies for combining analyzer results into one assessment."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from periodization_engine.models.enums import (
    DEFAULT_CONFIDENCE,
    DEFAULT_READINESS,
    HIGH_FATIGUE_THRESHOLD,
    LOW_CONFIDENCE_THRESHOLD,
    LOW_PROGRESSION_THRESHOLD,
    LOW_READINESS_THRESHOLD,
    MODERATE_FATIGUE_THRESHOLD,
    VERY_HIGH_FATIGUE_THRESHOLD,
    AdaptationType,
    FatigueLevel,
    RecommendationPriority,
    Severity,
)
from periodization_engine.models.recommendation import (
    AdaptationRecommendation,
    AnalysisResult,
    IntegratedAssessment,
)

SOURCE = "integrated"

_DEFAULT_PROGRESSION = 0.6


class MergeStrategy(ABC):
    """Base class for analyzer merge strategies."""

    @abstractmethod
    def merge(self, results: Sequence[AnalysisResult]) -> IntegratedAssessment:
        """Reduce analyzer results to a single IntegratedAssessment.

        Implementations must be pure: the same results in the same order
        always give the same assessment.
        """
        ...


def classify_fatigue(score: float) -> FatigueLevel:
    if score > VERY_HIGH_FATIGUE_THRESHOLD:
        return FatigueLevel.VERY_HIGH
    if score > HIGH_FATIGUE_THRESHOLD:
        return FatigueLevel.HIGH
    if score > MODERATE_FATIGUE_THRESHOLD:
        return FatigueLevel.MODERATE
    return FatigueLevel.LOW


def weighted_mean(pairs: Sequence[tuple[float, float]], default: float) -> float:
    """Mean of (value, weight) pairs; plain mean when all weights are zero."""
    if not pairs:
        return default
    total_weight = sum(w for _, w in pairs)
    if total_weight <= 0:
        return sum(v for v, _ in pairs) / len(pairs)
    return sum(v * w for v, w in pairs) / total_weight


def pick_unified(
    candidates: Sequence[AdaptationRecommendation],
) -> AdaptationRecommendation:
    """Most urgent recommendation wins; equal urgency goes to higher confidence."""
    if not candidates:
        return AdaptationRecommendation(
            type=AdaptationType.NONE,
            rationale="No analyzer flagged a need to adapt",
            source=SOURCE,
        )
    # min() keeps the first of equal keys, so analyzer order breaks full ties
    return min(candidates, key=lambda r: (r.priority, -r.confidence))


class WeightedAverageMerge(MergeStrategy):
    """Confidence-weighted averaging of analyzer scores.

    Fatigue, readiness and progression are averaged over the analyzers
    that reported them, weighted by each analyzer's confidence. The
    unified recommendation is the most urgent one among analyzers that
    flagged adaptation.
    """

    def merge(self, results: Sequence[AnalysisResult]) -> IntegratedAssessment:
        fatigue = weighted_mean(
            [(r.fatigue_score, r.confidence) for r in results if r.fatigue_score is not None],
            0.0,
        )
        readiness = weighted_mean(
            [(r.readiness_score, r.confidence) for r in results if r.readiness_score is not None],
            DEFAULT_READINESS,
        )
        progression = weighted_mean(
            [
                (r.progression_score, r.confidence)
                for r in results
                if r.progression_score is not None
            ],
            _DEFAULT_PROGRESSION,
        )
        confidence = (
            sum(r.confidence for r in results) / len(results)
            if results
            else DEFAULT_CONFIDENCE
        )

        agreeing = [r for r in results if r.adaptation_needed]
        unified = pick_unified(
            [r.recommendation for r in agreeing if r.recommendation is not None]
        )
        fatigue_level = classify_fatigue(fatigue)

        priority, secondary, long_term = self._bucket(
            unified, agreeing, fatigue, fatigue_level, readiness, progression, confidence
        )
        return IntegratedAssessment(
            fatigue_score=round(fatigue, 3),
            fatigue_level=fatigue_level,
            readiness_score=round(readiness, 3),
            progression_score=round(progression, 3),
            confidence=round(confidence, 3),
            agreeing_sources=tuple(r.source for r in agreeing),
            unified=unified,
            priority_recommendations=priority,
            secondary_recommendations=secondary,
            long_term_recommendations=long_term,
            sources=tuple(r.source for r in results),
        )

    @staticmethod
    def _bucket(
        unified: AdaptationRecommendation,
        agreeing: Sequence[AnalysisResult],
        fatigue: float,
        fatigue_level: FatigueLevel,
        readiness: float,
        progression: float,
        confidence: float,
    ) -> tuple[
        tuple[AdaptationRecommendation, ...],
        tuple[AdaptationRecommendation, ...],
        tuple[AdaptationRecommendation, ...],
    ]:
        priority: list[AdaptationRecommendation] = []
        secondary: list[AdaptationRecommendation] = []
        long_term: list[AdaptationRecommendation] = []

        if unified.requires_adaptation:
            priority.append(unified)

        if fatigue_level >= FatigueLevel.HIGH and unified.type != AdaptationType.DELOAD:
            priority.append(
                AdaptationRecommendation(
                    type=AdaptationType.DELOAD,
                    priority=RecommendationPriority.HIGH,
                    severity=Severity.MODERATE,
                    rationale=f"Integrated fatigue {fatigue:.2f} is high",
                    actions=("reduce_volume_40_percent", "reduce_intensity_15_percent"),
                    confidence=round(confidence, 3),
                    volume_adjustment=-0.4,
                    intensity_adjustment=-0.15,
                    duration_weeks=1,
                    source=SOURCE,
                )
            )
        if readiness < LOW_READINESS_THRESHOLD:
            priority.append(
                AdaptationRecommendation(
                    type=AdaptationType.MODIFY,
                    priority=RecommendationPriority.HIGH,
                    severity=Severity.MODERATE,
                    rationale=f"Readiness {readiness:.2f} is low; focus on recovery",
                    actions=("recovery_focus", "reduce_volume_10_percent"),
                    confidence=round(confidence, 3),
                    volume_adjustment=-0.1,
                    source=SOURCE,
                )
            )

        for result in agreeing:
            rec = result.recommendation
            if rec is not None and rec is not unified:
                secondary.append(rec)
        if progression < LOW_PROGRESSION_THRESHOLD:
            secondary.append(
                AdaptationRecommendation(
                    type=AdaptationType.MODIFY,
                    priority=RecommendationPriority.MEDIUM,
                    severity=Severity.CONSERVATIVE,
                    rationale=f"Progression efficiency {progression:.2f} is below target",
                    actions=("program_modification",),
                    confidence=round(confidence, 3),
                    source=SOURCE,
                )
            )

        if confidence < LOW_CONFIDENCE_THRESHOLD:
            long_term.append(
                AdaptationRecommendation(
                    type=AdaptationType.NONE,
                    priority=RecommendationPriority.LOW,
                    rationale="Log RPE and wellness every session to improve analysis confidence",
                    actions=("data_quality_improvement",),
                    confidence=round(confidence, 3),
                    source=SOURCE,
                )
            )
        return tuple(priority), tuple(secondary), tuple(long_term)


def merge_analyses(results: Sequence[AnalysisResult]) -> IntegratedAssessment:
    """Default reducer: WeightedAverageMerge over ``results``."""
    return WeightedAverageMerge().merge(results)
