"""Tests for goal parameters and competition ordering."""

from datetime import date, timedelta

import pytest

from periodization_engine.errors import ValidationError
from periodization_engine.models.athlete import Competition, GoalParameters
from periodization_engine.models.enums import CompetitionImportance


class TestGoalParameters:
    def test_from_competitions_sorts_by_date(self) -> None:
        start = date(2026, 1, 5)
        late = Competition("Late", start + timedelta(days=70))
        early = Competition("Early", start + timedelta(days=20))
        goal = GoalParameters.from_competitions(12, "strength", start, late, early)
        assert [c.name for c in goal.competitions] == ["Early", "Late"]

    def test_end_date(self) -> None:
        goal = GoalParameters(4, "strength", date(2026, 1, 5))
        assert goal.end_date == date(2026, 2, 2)

    def test_zero_horizon_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GoalParameters(0, "strength", date(2026, 1, 5)).validate()

    def test_competition_outside_plan_rejected(self) -> None:
        start = date(2026, 1, 5)
        goal = GoalParameters.from_competitions(
            4, "strength", start, Competition("Too late", start + timedelta(weeks=6))
        )
        with pytest.raises(ValidationError):
            goal.validate()

    def test_competition_on_end_date_accepted(self) -> None:
        start = date(2026, 1, 5)
        goal = GoalParameters.from_competitions(
            4, "strength", start, Competition("Final day", start + timedelta(weeks=4))
        )
        goal.validate()


class TestCompetition:
    def test_is_major(self) -> None:
        meet = Competition("Nationals", date(2026, 3, 1), CompetitionImportance.MAJOR)
        assert meet.is_major
        assert not Competition("Local", date(2026, 3, 1)).is_major
