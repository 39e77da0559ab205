"""PlanBuilder: runs the profile + goal -> Plan pipeline."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from periodization_engine.config import EngineConfig
from periodization_engine.errors import ValidationError
from periodization_engine.models.athlete import AthleteProfile, GoalParameters
from periodization_engine.models.plan import Plan
from periodization_engine.planning.competition import integrate_competitions
from periodization_engine.planning.macrocycle import build_macrocycle
from periodization_engine.planning.mesocycle import generate_mesocycles
from periodization_engine.planning.microcycle import generate_microcycles
from periodization_engine.planning.model_selector import select_model

logger = logging.getLogger(__name__)


class PlanBuilder:
    """Builds a complete Plan from an athlete profile and goal.

    Usage:
        builder = PlanBuilder()
        plan = builder.build(profile, goal)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def build(
        self,
        profile: AthleteProfile | None,
        goal: GoalParameters | None,
        created_at: datetime | None = None,
    ) -> Plan:
        """Select a model and generate the macro/meso/micro hierarchy.

        Args:
            profile: Athlete profile.
            goal: Goal parameters.
            created_at: Plan timestamp; defaults to now (UTC).

        Returns:
            A new Plan at revision 1.

        Raises:
            ValidationError: If the profile or goal is missing or invalid.
        """
        if profile is None or goal is None:
            raise ValidationError("Athlete profile and goal parameters are required")
        model, selection = select_model(profile, goal)

        macrocycle = build_macrocycle(model, profile, goal, self.config)
        mesocycles = generate_mesocycles(macrocycle, profile, self.config)
        microcycles = generate_microcycles(mesocycles, macrocycle, profile, self.config)
        if goal.competitions:
            microcycles = integrate_competitions(
                microcycles, goal.competitions, goal.start_date, goal.horizon_weeks
            )

        logger.info(
            "Built %d-week %s plan for athlete %s (score %.2f)",
            goal.horizon_weeks,
            model.key.name,
            profile.athlete_id,
            selection.score,
        )
        return Plan(
            athlete_id=profile.athlete_id,
            selection=selection,
            macrocycle=macrocycle,
            mesocycles=mesocycles,
            microcycles=microcycles,
            created_at=created_at or datetime.now(timezone.utc),
        )
