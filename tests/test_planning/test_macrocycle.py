"""Tests for macrocycle scaling and mesocycle generation."""

from __future__ import annotations

from datetime import date

import pytest

from periodization_engine.config import EngineConfig
from periodization_engine.models.athlete import AthleteProfile, GoalParameters
from periodization_engine.models.enums import ModelKey, PhaseFocus
from periodization_engine.planning.catalog import all_models, get_model
from periodization_engine.planning.macrocycle import build_macrocycle
from periodization_engine.planning.mesocycle import focus_areas_for, generate_mesocycles


class TestBuildMacrocycle:
    def test_block_model_scaled_to_sixteen_weeks(
        self, advanced_powerlifter: AthleteProfile, sixteen_week_goal: GoalParameters
    ) -> None:
        macro = build_macrocycle(
            get_model(ModelKey.BLOCK), advanced_powerlifter, sixteen_week_goal
        )
        assert [p.weeks for p in macro.phases] == [7, 5, 2, 2]
        assert macro.total_weeks == 16
        assert macro.end_date == date(2026, 4, 27)
        assert macro.deload_weeks == (4, 8, 12, 16)
        assert macro.testing_weeks == (4, 10, 16)
        assert macro.adaptation_strategy == "concentrated_loading"

    def test_phase_sum_within_phase_count_of_horizon(
        self, beginner_athlete: AthleteProfile
    ) -> None:
        for model in all_models():
            for horizon in (1, 5, 9, 13, 26, 52):
                goal = GoalParameters(horizon, "general", date(2026, 1, 5))
                macro = build_macrocycle(model, beginner_athlete, goal)
                total = sum(p.weeks for p in macro.phases)
                assert abs(total - horizon) <= len(macro.phases)

    def test_considerations_follow_profile(
        self, beginner_athlete: AthleteProfile, sixteen_week_goal: GoalParameters
    ) -> None:
        macro = build_macrocycle(
            get_model(ModelKey.LINEAR), beginner_athlete, sixteen_week_goal
        )
        assert "technique_mastery" in macro.considerations
        assert "extended_recovery_periods" in macro.considerations
        assert "high_efficiency_sessions" in macro.considerations

    def test_custom_deload_frequency(
        self, beginner_athlete: AthleteProfile, sixteen_week_goal: GoalParameters
    ) -> None:
        macro = build_macrocycle(
            get_model(ModelKey.LINEAR),
            beginner_athlete,
            sixteen_week_goal,
            EngineConfig(deload_frequency=5),
        )
        assert macro.deload_weeks == (5, 10, 15)


class TestGenerateMesocycles:
    def setup_method(self) -> None:
        self.goal = GoalParameters(16, "strength", date(2026, 1, 5))

    def _block_mesocycles(self, profile: AthleteProfile):
        macro = build_macrocycle(get_model(ModelKey.BLOCK), profile, self.goal)
        return generate_mesocycles(macro, profile)

    def test_block_ids_and_ranges(self, advanced_powerlifter: AthleteProfile) -> None:
        mesos = self._block_mesocycles(advanced_powerlifter)
        assert [(m.mesocycle_id, m.start_week, m.end_week) for m in mesos] == [
            ("meso_1_1", 1, 4),
            ("meso_1_2", 5, 7),
            ("meso_2_1", 8, 11),
            ("meso_2_2", 12, 12),
            ("meso_3_1", 13, 14),
            ("meso_4_1", 15, 16),
        ]

    def test_blocks_tile_the_horizon(self, beginner_athlete: AthleteProfile) -> None:
        for model in all_models():
            for horizon in (1, 3, 7, 16, 30):
                goal = GoalParameters(horizon, "general", date(2026, 1, 5))
                macro = build_macrocycle(model, beginner_athlete, goal)
                mesos = generate_mesocycles(macro, beginner_athlete)
                covered = [w for m in mesos for w in range(m.start_week, m.end_week + 1)]
                assert covered == list(range(1, horizon + 1))

    def test_volume_focus_progression(self, advanced_powerlifter: AthleteProfile) -> None:
        mesos = self._block_mesocycles(advanced_powerlifter)
        assert mesos[0].volume_progression == pytest.approx(1.3)
        assert mesos[1].volume_progression == pytest.approx(1.56)
        assert mesos[0].markers.volume_tolerance_test

    def test_intensity_focus_progression(self, advanced_powerlifter: AthleteProfile) -> None:
        mesos = self._block_mesocycles(advanced_powerlifter)
        assert mesos[2].volume_progression == pytest.approx(0.9)
        assert mesos[2].intensity_progression == pytest.approx(0.8775)
        assert mesos[2].markers.strength_test

    def test_focus_areas_include_weaknesses(
        self, advanced_powerlifter: AthleteProfile
    ) -> None:
        mesos = self._block_mesocycles(advanced_powerlifter)
        assert mesos[0].focus_areas == ("volume", "lockout", "bench_press")


class TestFocusAreasFor:
    def test_weakness_matching_focus_not_duplicated(self) -> None:
        assert focus_areas_for(PhaseFocus.STRENGTH, ("Strength", "speed")) == (
            "strength",
            "speed",
        )

    def test_at_most_two_weaknesses(self) -> None:
        assert focus_areas_for(None, ("a", "b", "c")) == ("a", "b")
