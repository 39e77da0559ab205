"""Tests for e1RM, recovery score and the windowed session frame."""

from __future__ import annotations

from typing import Callable

import pandas as pd
import pytest

from periodization_engine.errors import InsufficientDataError
from periodization_engine.math.session_metrics import (
    build_session_frame,
    calculate_recovery_score,
    coefficient_of_variation,
    estimate_one_rep_max,
    relative_drop,
    rpe_adjustment,
)
from periodization_engine.models.session import SessionRecord


class TestEstimateOneRepMax:
    def test_epley_without_rpe(self) -> None:
        # 100 x (1 + 5/30) = 116.67
        assert estimate_one_rep_max(100.0, 5) == 116.7

    def test_rpe_10_has_no_reserve_credit(self) -> None:
        assert estimate_one_rep_max(100.0, 5, rpe=10.0) == 116.7

    def test_rpe_8_credits_reserve(self) -> None:
        assert estimate_one_rep_max(100.0, 5, rpe=8.0) == 128.3

    def test_empty_set_is_zero(self) -> None:
        assert estimate_one_rep_max(0.0, 5) == 0.0
        assert estimate_one_rep_max(100.0, 0) == 0.0


class TestRpeAdjustment:
    def test_interpolates_between_table_points(self) -> None:
        assert rpe_adjustment(8.25) == pytest.approx(1.0875)

    def test_clamps_below_table(self) -> None:
        assert rpe_adjustment(4.0) == pytest.approx(1.2)

    def test_unrated_set(self) -> None:
        assert rpe_adjustment(None) == 1.0


class TestRecoveryScore:
    def test_neutral_answers(self) -> None:
        assert calculate_recovery_score(5, 5, 5, 5, 5) == 5.0

    def test_stress_and_soreness_are_inverted(self) -> None:
        assert calculate_recovery_score(10, 10, 1, 1, 10) == 9.7

    def test_poor_answers_score_low(self) -> None:
        assert calculate_recovery_score(2, 2, 9, 9, 2) < 3.0


class TestBuildSessionFrame:
    def test_insufficient_sessions_raise(
        self, session_factory: Callable[..., SessionRecord]
    ) -> None:
        sessions = [session_factory(day=0), session_factory(day=2)]
        with pytest.raises(InsufficientDataError) as exc_info:
            build_session_frame(sessions, window=10, min_sessions=3)
        assert exc_info.value.sessions_available == 2

    def test_keeps_most_recent_window(
        self, session_factory: Callable[..., SessionRecord]
    ) -> None:
        sessions = [session_factory(day=i, weight=100.0 + i) for i in range(8)]
        frame = build_session_frame(sessions, window=5, min_sessions=3)
        assert len(frame) == 5
        assert list(frame["volume"]) == [(100.0 + i) * 15 for i in range(3, 8)]

    def test_columns(self, session_factory: Callable[..., SessionRecord]) -> None:
        frame = build_session_frame(
            [session_factory(day=i) for i in range(3)], window=10, min_sessions=3
        )
        for column in ("rpe", "volume", "estimated_max", "recovery", "adherence"):
            assert column in frame.columns


class TestRelativeDrop:
    def test_drop_of_recent_values(self) -> None:
        assert relative_drop(pd.Series([100.0, 100.0, 80.0, 80.0])) == pytest.approx(0.2)

    def test_no_baseline(self) -> None:
        assert relative_drop(pd.Series([100.0, 80.0])) == 0.0

    def test_increase_is_negative(self) -> None:
        assert relative_drop(pd.Series([100.0, 100.0, 110.0, 110.0])) < 0


class TestCoefficientOfVariation:
    def test_constant_series(self) -> None:
        assert coefficient_of_variation(pd.Series([5.0, 5.0, 5.0])) == 0.0

    def test_zero_mean(self) -> None:
        assert coefficient_of_variation(pd.Series([0.0, 0.0])) == 0.0

    def test_population_std(self) -> None:
        # mean 10, population std 2
        assert coefficient_of_variation(pd.Series([8.0, 12.0])) == pytest.approx(0.2)
