"""Tests for the frozen plan hierarchy and revision handling."""

from __future__ import annotations

import dataclasses

import pytest

from periodization_engine.errors import NotFoundError
from periodization_engine.models.plan import Microcycle, Plan


class TestMicrocycle:
    def test_adjusted_records_tag(self) -> None:
        week = Microcycle(week=3, mesocycle_id="meso_1_1", phase="p", volume_multiplier=1.0,
                          intensity_multiplier=0.8)
        changed = week.adjusted("volume_adjustment", volume_multiplier=0.9)
        assert changed.volume_multiplier == 0.9
        assert changed.adjustments == ("volume_adjustment",)
        assert week.adjustments == ()

    def test_frozen(self) -> None:
        week = Microcycle(week=1, mesocycle_id="m", phase="p", volume_multiplier=1.0,
                          intensity_multiplier=0.8)
        with pytest.raises(dataclasses.FrozenInstanceError):
            week.volume_multiplier = 2.0  # type: ignore[misc]


class TestPlan:
    def test_microcycle_for_week(self, block_plan: Plan) -> None:
        assert block_plan.microcycle_for_week(1).week == 1
        assert block_plan.microcycle_for_week(16).week == 16
        assert block_plan.microcycle_for_week(0) is None
        assert block_plan.microcycle_for_week(17) is None

    def test_mesocycle_by_id(self, block_plan: Plan) -> None:
        assert block_plan.mesocycle_by_id("meso_2_1").start_week == 8
        assert block_plan.mesocycle_by_id("meso_9_9") is None

    def test_with_microcycle_derives_new_revision(self, block_plan: Plan) -> None:
        week = block_plan.microcycle_for_week(5)
        updated = block_plan.with_microcycle(week.adjusted("x", volume_multiplier=0.5))
        assert updated.revision == block_plan.revision + 1
        assert updated.microcycle_for_week(5).volume_multiplier == 0.5
        assert block_plan.microcycle_for_week(5).volume_multiplier == week.volume_multiplier

    def test_with_microcycle_unknown_week(self, block_plan: Plan) -> None:
        stray = dataclasses.replace(block_plan.microcycle_for_week(1), week=40)
        with pytest.raises(NotFoundError) as exc_info:
            block_plan.with_microcycle(stray)
        assert exc_info.value.week == 40

    def test_total_weeks(self, block_plan: Plan) -> None:
        assert block_plan.total_weeks == 16
        assert len(block_plan.microcycles) == 16
