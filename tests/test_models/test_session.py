"""Tests for session records and their derived metrics."""

from __future__ import annotations

from datetime import date

import pytest

from periodization_engine.errors import ValidationError
from periodization_engine.models.session import (
    ExerciseEntry,
    SessionRecord,
    SetRecord,
    WellnessScores,
)


class TestSetRecord:
    def test_rpe_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SetRecord(weight=100.0, reps=5, rpe=11.0)
        with pytest.raises(ValidationError):
            SetRecord(weight=100.0, reps=5, rpe=0.5)

    def test_negative_load_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SetRecord(weight=-5.0, reps=5)

    def test_skipped_set_has_no_volume(self) -> None:
        assert SetRecord(weight=100.0, reps=5, completed=False).volume == 0.0
        assert SetRecord(weight=100.0, reps=5, completed=False).estimated_max == 0.0


class TestWellnessScores:
    def test_defaults_are_neutral(self) -> None:
        w = WellnessScores()
        assert w.energy == 5.0
        assert w.motivation == 5.0

    def test_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            WellnessScores(sleep_quality=0.0)


class TestSessionRecord:
    def setup_method(self) -> None:
        self.session = SessionRecord(
            session_date=date(2026, 1, 5),
            exercises=(
                ExerciseEntry(
                    name="squat",
                    is_main_lift=True,
                    sets=(
                        SetRecord(weight=100.0, reps=5, rpe=8.0),
                        SetRecord(weight=100.0, reps=5, rpe=9.0),
                    ),
                ),
                ExerciseEntry(
                    name="leg_press",
                    sets=(
                        SetRecord(weight=200.0, reps=10, rpe=7.0),
                        SetRecord(weight=200.0, reps=10, rpe=None, completed=False),
                    ),
                ),
            ),
        )

    def test_total_volume_counts_completed_sets(self) -> None:
        assert self.session.total_volume == pytest.approx(500 + 500 + 2000)

    def test_average_rpe_is_volume_weighted(self) -> None:
        expected = (8.0 * 500 + 9.0 * 500 + 7.0 * 2000) / 3000
        assert self.session.average_rpe == pytest.approx(expected)

    def test_estimated_max_uses_main_lifts(self) -> None:
        # Best main-lift set: 100 x 5 @ RPE 8 -> 128.3
        assert self.session.estimated_max == 128.3

    def test_adherence(self) -> None:
        assert self.session.adherence == pytest.approx(0.75)

    def test_recovery_score_from_wellness(self) -> None:
        assert self.session.recovery_score == 5.0

    def test_unrated_session(self) -> None:
        session = SessionRecord(
            session_date=date(2026, 1, 5),
            exercises=(ExerciseEntry(name="row", sets=(SetRecord(60.0, 10),)),),
        )
        assert session.average_rpe == 0.0

    def test_empty_session(self) -> None:
        session = SessionRecord(session_date=date(2026, 1, 5))
        assert session.total_volume == 0.0
        assert session.adherence == 1.0
        assert session.estimated_max == 0.0
