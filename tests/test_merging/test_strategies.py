"""Tests for merging analyzer results into an integrated assessment."""

from __future__ import annotations

import pytest

from periodization_engine.merging.merger import AnalysisMerger, ConsensusPolicy
from periodization_engine.merging.strategies import (
    SOURCE,
    classify_fatigue,
    merge_analyses,
    pick_unified,
    weighted_mean,
)
from periodization_engine.models.enums import (
    AdaptationType,
    FatigueLevel,
    RecommendationPriority,
)
from periodization_engine.models.recommendation import (
    AdaptationRecommendation,
    AnalysisResult,
)


def _rec(
    kind: AdaptationType,
    priority: RecommendationPriority = RecommendationPriority.MEDIUM,
    confidence: float = 0.8,
    source: str = "a",
) -> AdaptationRecommendation:
    return AdaptationRecommendation(
        type=kind, priority=priority, confidence=confidence, source=source
    )


def _result(
    source: str,
    confidence: float = 0.9,
    recommendation: AdaptationRecommendation | None = None,
    **scores: float,
) -> AnalysisResult:
    return AnalysisResult(
        source=source,
        adaptation_needed=recommendation is not None,
        confidence=confidence,
        recommendation=recommendation,
        **scores,
    )


class TestHelpers:
    def test_classify_fatigue(self) -> None:
        assert classify_fatigue(0.95) == FatigueLevel.VERY_HIGH
        assert classify_fatigue(0.85) == FatigueLevel.HIGH
        assert classify_fatigue(0.8) == FatigueLevel.MODERATE
        assert classify_fatigue(0.6) == FatigueLevel.LOW

    def test_weighted_mean(self) -> None:
        assert weighted_mean([(1.0, 3.0), (0.0, 1.0)], 0.5) == pytest.approx(0.75)
        assert weighted_mean([], 0.5) == 0.5
        assert weighted_mean([(0.2, 0.0), (0.4, 0.0)], 0.5) == pytest.approx(0.3)

    def test_pick_unified_most_urgent(self) -> None:
        urgent = _rec(AdaptationType.DELOAD, RecommendationPriority.HIGH, 0.5)
        mild = _rec(AdaptationType.INTENSIFY, RecommendationPriority.MEDIUM, 0.9)
        assert pick_unified([mild, urgent]) is urgent

    def test_pick_unified_confidence_breaks_ties(self) -> None:
        low = _rec(AdaptationType.MODIFY, confidence=0.6)
        high = _rec(AdaptationType.INTENSIFY, confidence=0.7)
        assert pick_unified([low, high]) is high

    def test_pick_unified_without_candidates(self) -> None:
        unified = pick_unified([])
        assert unified.type == AdaptationType.NONE
        assert unified.source == SOURCE


class TestWeightedAverageMerge:
    def test_no_results_uses_defaults(self) -> None:
        assessment = merge_analyses([])
        assert assessment.fatigue_level == FatigueLevel.LOW
        assert assessment.readiness_score == 0.7
        assert assessment.progression_score == 0.6
        assert assessment.confidence == 0.7
        assert assessment.unified.type == AdaptationType.NONE
        assert assessment.priority_recommendations == ()
        assert [r.actions for r in assessment.secondary_recommendations] == [
            ("program_modification",)
        ]
        assert [r.actions for r in assessment.long_term_recommendations] == [
            ("data_quality_improvement",)
        ]

    def test_confidence_weighted_scores(self) -> None:
        assessment = merge_analyses(
            [
                _result("a", 0.9, fatigue_score=0.5, readiness_score=0.9),
                _result("b", 0.3, fatigue_score=0.9, progression_score=0.8),
            ]
        )
        assert assessment.fatigue_score == pytest.approx(0.6)
        assert assessment.readiness_score == pytest.approx(0.9)
        assert assessment.progression_score == pytest.approx(0.8)
        assert assessment.confidence == pytest.approx(0.6)
        assert assessment.sources == ("a", "b")

    def test_unified_and_agreement(self) -> None:
        deload = _rec(AdaptationType.DELOAD, RecommendationPriority.HIGH, source="fatigue")
        modify = _rec(AdaptationType.MODIFY, source="phase")
        assessment = merge_analyses(
            [
                _result("fatigue", recommendation=deload, progression_score=0.8),
                _result("phase", recommendation=modify),
                _result("trend"),
            ]
        )
        assert assessment.unified is deload
        assert assessment.agreeing_sources == ("fatigue", "phase")
        assert assessment.agreement_count == 2
        assert assessment.priority_recommendations == (deload,)
        assert assessment.secondary_recommendations == (modify,)
        assert assessment.long_term_recommendations == ()

    def test_high_fatigue_synthesizes_deload(self) -> None:
        assessment = merge_analyses(
            [_result("a", fatigue_score=0.85, progression_score=0.9)]
        )
        assert assessment.fatigue_level == FatigueLevel.HIGH
        assert assessment.unified.type == AdaptationType.NONE
        synthesized = assessment.priority_recommendations[0]
        assert synthesized.type == AdaptationType.DELOAD
        assert synthesized.source == SOURCE
        assert synthesized.volume_adjustment == -0.4

    def test_low_readiness_adds_recovery_focus(self) -> None:
        assessment = merge_analyses(
            [_result("a", readiness_score=0.4, progression_score=0.9)]
        )
        assert [r.actions[0] for r in assessment.priority_recommendations] == [
            "recovery_focus"
        ]

    def test_pure(self) -> None:
        results = [
            _result("a", 0.8, _rec(AdaptationType.DELOAD), fatigue_score=0.95),
            _result("b", 0.6, readiness_score=0.5),
        ]
        assert merge_analyses(results) == merge_analyses(results)
        assert merge_analyses(results).all_recommendations


class TestConsensus:
    def _assessment(self, agreeing: int):
        results = [
            _result(f"s{i}", recommendation=_rec(AdaptationType.DELOAD)) for i in range(agreeing)
        ]
        return merge_analyses(results)

    def test_default_threshold_two(self) -> None:
        merger = AnalysisMerger()
        assert not merger.requires_system_wide_adjustment(self._assessment(1))
        assert merger.requires_system_wide_adjustment(self._assessment(2))

    def test_custom_threshold(self) -> None:
        merger = AnalysisMerger(policy=ConsensusPolicy(threshold=3))
        assert not merger.requires_system_wide_adjustment(self._assessment(2))
        assert merger.requires_system_wide_adjustment(self._assessment(3))

    def test_no_adaptation_never_meets_consensus(self) -> None:
        assessment = merge_analyses([_result("a"), _result("b")])
        assert not ConsensusPolicy(threshold=0).is_met(assessment)
