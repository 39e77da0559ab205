"""Tests for the adaptation decision engine."""

from __future__ import annotations

from typing import Callable

import pytest

from periodization_engine.config import EngineConfig
from periodization_engine.models.enums import (
    AdaptationType,
    AnalysisStatus,
    RecommendationPriority,
    Severity,
    TrainingType,
)
from periodization_engine.models.session import SessionRecord
from periodization_engine.monitoring.decision import AdaptationDecisionEngine


class TestDecide:
    def setup_method(self) -> None:
        self.engine = AdaptationDecisionEngine(TrainingType.STRENGTH)

    def test_insufficient_data(self, session_factory: Callable[..., SessionRecord]) -> None:
        decision = self.engine.decide([session_factory(day=0), session_factory(day=1)])
        assert decision.status == AnalysisStatus.INSUFFICIENT_DATA
        assert decision.recommendation.type == AdaptationType.NONE
        assert "2 of 3" in decision.recommendation.rationale

    def test_deload_after_sustained_high_rpe(
        self, fatigued_sessions: list[SessionRecord]
    ) -> None:
        decision = self.engine.decide(fatigued_sessions)
        rec = decision.recommendation
        assert decision.status == AnalysisStatus.OK
        assert rec.type == AdaptationType.DELOAD
        assert rec.severity == Severity.MODERATE
        assert rec.priority == RecommendationPriority.HIGH
        assert rec.volume_adjustment == -0.4
        assert rec.intensity_adjustment == -0.15
        assert rec.confidence == pytest.approx(0.72)
        assert "3 consecutive sessions" in rec.rationale

    def test_intensify_when_easy_and_progressing(
        self, fresh_sessions: list[SessionRecord]
    ) -> None:
        rec = self.engine.decide(fresh_sessions).recommendation
        assert rec.type == AdaptationType.INTENSIFY
        assert rec.severity == Severity.AGGRESSIVE
        assert rec.intensity_adjustment == 0.05
        assert rec.confidence == pytest.approx(0.64)

    def test_modify_on_rising_rpe(self, session_factory: Callable[..., SessionRecord]) -> None:
        sessions = [session_factory(day=d, rpe=r) for d, r in enumerate((8.0, 8.3, 8.6, 8.9))]
        rec = self.engine.decide(sessions).recommendation
        assert rec.type == AdaptationType.MODIFY
        assert rec.volume_adjustment == -0.1
        assert rec.actions == ("reduce_volume_10_percent", "reduce_intensity_5_percent")

    def test_none_when_stable(self, session_factory: Callable[..., SessionRecord]) -> None:
        sessions = [session_factory(day=d) for d in range(5)]
        rec = self.engine.decide(sessions).recommendation
        assert rec.type == AdaptationType.NONE
        assert rec.confidence == pytest.approx(0.6)
        assert not rec.requires_adaptation

    def test_broken_streak_does_not_deload(
        self, session_factory: Callable[..., SessionRecord]
    ) -> None:
        sessions = [
            session_factory(day=d, rpe=r) for d, r in enumerate((9.8, 9.8, 9.8, 8.0))
        ]
        assert self.engine.decide(sessions).recommendation.type != AdaptationType.DELOAD

    def test_endurance_tier_needs_longer_streak(
        self, fatigued_sessions: list[SessionRecord]
    ) -> None:
        engine = AdaptationDecisionEngine(TrainingType.ENDURANCE)
        assert engine.decide(fatigued_sessions).recommendation.type != AdaptationType.DELOAD


class TestSensitivity:
    def test_sensitivity_lowers_deload_threshold(self) -> None:
        engine = AdaptationDecisionEngine(TrainingType.STRENGTH, sensitivity=1.2)
        assert engine.deload_rpe_threshold == pytest.approx(9.0)

    def test_adjust_sensitivity_capped(self) -> None:
        engine = AdaptationDecisionEngine(config=EngineConfig(max_sensitivity=1.5))
        assert engine.adjust_sensitivity(1.2) == pytest.approx(1.2)
        assert engine.adjust_sensitivity(1.2) == pytest.approx(1.44)
        assert engine.adjust_sensitivity(1.2) == pytest.approx(1.5)

    def test_higher_sensitivity_catches_earlier_fatigue(
        self, session_factory: Callable[..., SessionRecord]
    ) -> None:
        sessions = [session_factory(day=d, rpe=9.2) for d in range(4)]
        baseline = AdaptationDecisionEngine(TrainingType.STRENGTH)
        sensitive = AdaptationDecisionEngine(TrainingType.STRENGTH, sensitivity=1.2)
        assert baseline.decide(sessions).recommendation.type == AdaptationType.NONE
        assert sensitive.decide(sessions).recommendation.type == AdaptationType.DELOAD
