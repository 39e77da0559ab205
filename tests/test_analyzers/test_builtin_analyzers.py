"""Tests for the fatigue, phase adaptation and performance trend analyzers."""

from __future__ import annotations

from typing import Callable

import pytest

from periodization_engine.analyzers.base import AnalysisContext
from periodization_engine.analyzers.fatigue import FatigueAnalyzer, rpe_fatigue
from periodization_engine.analyzers.performance import PerformanceTrendAnalyzer
from periodization_engine.analyzers.phase_adaptation import PhaseAdaptationAnalyzer
from periodization_engine.models.enums import AdaptationType, TrainingType
from periodization_engine.models.plan import Plan
from periodization_engine.models.session import SessionRecord
from periodization_engine.monitoring.decision import AdaptationDecisionEngine
from periodization_engine.monitoring.monitor import PerformanceMonitor


def _context(sessions: list[SessionRecord], plan: Plan, week: int = 1) -> AnalysisContext:
    decision = AdaptationDecisionEngine(TrainingType.STRENGTH).decide(sessions)
    return AnalysisContext(
        sessions=tuple(sessions),
        report=PerformanceMonitor().analyze(sessions),
        decision=decision,
        microcycle=plan.microcycle_for_week(week),
        training_type=TrainingType.STRENGTH,
    )


class TestRequiredData:
    def test_missing_fields(self) -> None:
        empty = AnalysisContext()
        assert not FatigueAnalyzer().has_required_data(empty)
        assert not PhaseAdaptationAnalyzer().has_required_data(empty)
        assert not PerformanceTrendAnalyzer().has_required_data(empty)

    def test_present_fields(
        self, fatigued_sessions: list[SessionRecord], block_plan: Plan
    ) -> None:
        context = _context(fatigued_sessions, block_plan)
        assert PhaseAdaptationAnalyzer().has_required_data(context)


class TestFatigueAnalyzer:
    def test_rpe_fatigue_scale(self) -> None:
        assert rpe_fatigue(6.0) == 0.0
        assert rpe_fatigue(8.0) == 0.5
        assert rpe_fatigue(11.0) == 1.0

    def test_reports_decision_engine_deload(
        self, fatigued_sessions: list[SessionRecord], block_plan: Plan
    ) -> None:
        result = FatigueAnalyzer().evaluate(_context(fatigued_sessions, block_plan))
        assert result.source == "fatigue_trend"
        assert result.adaptation_needed
        assert result.recommendation.type == AdaptationType.DELOAD
        assert result.fatigue_score == pytest.approx(0.9125, abs=0.001)
        assert result.readiness_score == 0.5
        assert result.confidence == pytest.approx(0.72)

    def test_no_opinion_without_ok_decision(self) -> None:
        assert FatigueAnalyzer().evaluate(AnalysisContext()) is None


class TestPhaseAdaptationAnalyzer:
    def test_poor_adaptation_modifies(
        self, fatigued_sessions: list[SessionRecord], block_plan: Plan
    ) -> None:
        result = PhaseAdaptationAnalyzer().evaluate(_context(fatigued_sessions, block_plan))
        assert result.adaptation_needed
        assert result.recommendation.type == AdaptationType.MODIFY
        assert result.progression_score == pytest.approx(0.233)
        assert result.notes == "Phase adaptation poor"

    def test_rising_rpe_above_target_deloads(
        self, session_factory: Callable[..., SessionRecord], block_plan: Plan
    ) -> None:
        sessions = [session_factory(day=d, rpe=r) for d, r in enumerate((7.0, 7.6, 8.2, 8.8))]
        result = PhaseAdaptationAnalyzer().evaluate(_context(sessions, block_plan, week=1))
        assert result.recommendation.type == AdaptationType.DELOAD
        assert "accumulation target of 7.0" in result.recommendation.rationale

    def test_no_microcycle(self, fatigued_sessions: list[SessionRecord], block_plan: Plan) -> None:
        context = _context(fatigued_sessions, block_plan, week=99)
        assert PhaseAdaptationAnalyzer().evaluate(context) is None


class TestPerformanceTrendAnalyzer:
    def test_fatigue_alert_deloads(
        self, fatigued_sessions: list[SessionRecord], block_plan: Plan
    ) -> None:
        result = PerformanceTrendAnalyzer().evaluate(_context(fatigued_sessions, block_plan))
        assert result.recommendation.type == AdaptationType.DELOAD
        assert result.progression_score == 0.3
        assert result.confidence == pytest.approx(0.64)

    def test_easy_progress_intensifies(
        self, fresh_sessions: list[SessionRecord], block_plan: Plan
    ) -> None:
        result = PerformanceTrendAnalyzer().evaluate(_context(fresh_sessions, block_plan))
        assert result.recommendation.type == AdaptationType.INTENSIFY
        assert result.progression_score == 0.8

    def test_stable_training_needs_nothing(
        self, session_factory: Callable[..., SessionRecord], block_plan: Plan
    ) -> None:
        sessions = [session_factory(day=d) for d in range(5)]
        result = PerformanceTrendAnalyzer().evaluate(_context(sessions, block_plan))
        assert not result.adaptation_needed
        assert result.recommendation is None
        assert result.confidence == pytest.approx(0.7)
