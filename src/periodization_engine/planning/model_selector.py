"""Model selector: scores every catalog model against profile and goal."""

from __future__ import annotations

import logging

from periodization_engine.errors import ValidationError
from periodization_engine.models.athlete import AthleteProfile, GoalParameters
from periodization_engine.models.catalog import PeriodizationModel
from periodization_engine.models.enums import (
    BASE_MODEL_SCORE,
    COMPETITION_PEAK_BONUS,
    EXPERIENCE_MATCH_BONUS,
    LIMITED_TIME_PENALTY,
    LOW_RECOVERY_PENALTY,
    SPECIALIZATION_MATCH_BONUS,
    TRAINING_TYPE_MATCH_BONUS,
    ExperienceLevel,
    RecoveryCapacity,
    TimeConstraint,
    TrainingType,
)
from periodization_engine.models.plan import ModelSelection
from periodization_engine.planning.catalog import all_models

logger = logging.getLogger(__name__)

# Suitability tag that a training type matches
_TRAINING_TYPE_TAGS: dict[TrainingType, str] = {
    TrainingType.STRENGTH: "powerlifting",
    TrainingType.HYPERTROPHY: "bodybuilding",
    TrainingType.ENDURANCE: "endurance_sports",
}

_EXPERIENCE_TAGS: dict[ExperienceLevel, str] = {
    ExperienceLevel.BEGINNER: "beginner_athletes",
    ExperienceLevel.INTERMEDIATE: "intermediate_athletes",
    ExperienceLevel.ADVANCED: "advanced_athletes",
}


def validate_inputs(
    profile: AthleteProfile | None, goal: GoalParameters | None
) -> None:
    """Raise ValidationError unless both inputs are present and the goal is valid."""
    if profile is None:
        raise ValidationError("Athlete profile is required")
    if goal is None:
        raise ValidationError("Goal parameters are required")
    if not profile.athlete_id:
        raise ValidationError("Athlete profile must have an athlete_id")
    goal.validate()


def score_model(
    model: PeriodizationModel,
    profile: AthleteProfile,
    goal: GoalParameters,
) -> tuple[float, list[str]]:
    """Score one model for an athlete.

    Args:
        model: Catalog entry to score.
        profile: Athlete profile.
        goal: Goal parameters (only the competition list is consulted).

    Returns:
        (score clamped to [0, 1], list of human-readable reasons).
    """
    score = BASE_MODEL_SCORE
    reasons: list[str] = []

    type_tag = _TRAINING_TYPE_TAGS.get(profile.training_type)
    if type_tag is not None and type_tag in model.suitability:
        score += TRAINING_TYPE_MATCH_BONUS
        reasons.append(f"Optimal for {profile.training_type.name.lower()} training")

    if (
        profile.specialization
        and profile.specialization.lower() in model.specializations
    ):
        score += SPECIALIZATION_MATCH_BONUS
        reasons.append(f"Built for {profile.specialization.lower()} specialization")

    if _EXPERIENCE_TAGS[profile.experience] in model.suitability:
        score += EXPERIENCE_MATCH_BONUS
        reasons.append(
            f"Suitable for {profile.experience.name.lower()} training experience"
        )

    if goal.competitions and model.has_peak_phase:
        score += COMPETITION_PEAK_BONUS
        reasons.append("Includes a peaking phase for scheduled competitions")

    if profile.time_constraint == TimeConstraint.LIMITED and model.time_demanding:
        score -= LIMITED_TIME_PENALTY
        reasons.append("Demanding schedule for limited training time")

    if profile.recovery_capacity == RecoveryCapacity.LOW and model.recovery_demanding:
        score -= LOW_RECOVERY_PENALTY
        reasons.append("Concentrated loading is hard to recover from")

    return max(0.0, min(1.0, score)), reasons


def select_model(
    profile: AthleteProfile | None, goal: GoalParameters | None
) -> tuple[PeriodizationModel, ModelSelection]:
    """Pick the highest-scoring catalog model.

    Ties go to the model that comes first in catalog order.

    Args:
        profile: Athlete profile.
        goal: Goal parameters.

    Returns:
        The winning catalog model and a ModelSelection summary.

    Raises:
        ValidationError: If either input is missing or the horizon is < 1.
    """
    validate_inputs(profile, goal)

    scored = []
    for model in all_models():
        score, reasons = score_model(model, profile, goal)  # type: ignore[arg-type]
        logger.debug("Model %s scored %.2f", model.key.name, score)
        scored.append((model, score, reasons))

    # max() keeps the first of equal maxima, i.e. catalog order
    model, score, reasons = max(scored, key=lambda item: item[1])
    rationale_parts = reasons + [f"Evidence-based: {model.research}"]
    selection = ModelSelection(
        key=model.key,
        name=model.name,
        score=round(score, 4),
        rationale="; ".join(rationale_parts),
    )
    return model, selection
