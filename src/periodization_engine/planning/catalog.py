"""Model catalog: the five periodization models and their phase templates.

Keyed by ModelKey; iteration order of ``MODEL_CATALOG`` is the selector's
tie-break order.

References:
    Bompa & Haff (2009), Periodization: Theory and Methodology of Training.
    Issurin (2010), New horizons for the methodology and physiology of
        training periodization. Sports Med 40(3):189-206.
    Simmons (2007), Westside Barbell Book of Methods.
    Rhea et al. (2002), A comparison of linear and daily undulating
        periodized programs. J Strength Cond Res 16(2):250-255.
    Seiler (2010), What is best practice for training intensity and
        duration distribution in endurance athletes? IJSPP 5(3):276-291.
"""

from __future__ import annotations

from periodization_engine.models.catalog import PeriodizationModel, PhaseTemplate
from periodization_engine.models.enums import ModelKey, PhaseFocus

MODEL_CATALOG: dict[ModelKey, PeriodizationModel] = {
    ModelKey.LINEAR: PeriodizationModel(
        key=ModelKey.LINEAR,
        name="Linear Periodization",
        phases=(
            PhaseTemplate("anatomical_adaptation", 4, 1.0, 0.65),
            PhaseTemplate("hypertrophy", 4, 1.2, 0.75),
            PhaseTemplate("strength", 4, 0.8, 0.85),
            PhaseTemplate("power_peak", 4, 0.6, 0.95),
        ),
        suitability=frozenset({"powerlifting", "weightlifting", "track_field", "beginner_athletes"}),
        research="Bompa & Haff (2009)",
        adaptation_strategy="progressive_overload",
    ),
    ModelKey.BLOCK: PeriodizationModel(
        key=ModelKey.BLOCK,
        name="Block Periodization",
        phases=(
            PhaseTemplate("accumulation", 3, 1.3, 0.70, PhaseFocus.VOLUME),
            PhaseTemplate("intensification", 2, 0.9, 0.90, PhaseFocus.INTENSITY),
            PhaseTemplate("realization", 1, 0.5, 0.95, PhaseFocus.PEAK),
            PhaseTemplate("restoration", 1, 0.4, 0.60, PhaseFocus.RECOVERY),
        ),
        suitability=frozenset({"powerlifting", "strength_sports", "advanced_athletes"}),
        recovery_demanding=True,
        research="Issurin (2010)",
        adaptation_strategy="concentrated_loading",
    ),
    ModelKey.CONJUGATE: PeriodizationModel(
        key=ModelKey.CONJUGATE,
        name="Conjugate Method",
        phases=(
            PhaseTemplate("max_effort", 16, 0.8, 0.90, PhaseFocus.STRENGTH),
            PhaseTemplate("dynamic_effort", 16, 1.0, 0.60, PhaseFocus.SPEED),
            PhaseTemplate("repetition_effort", 16, 1.2, 0.75, PhaseFocus.HYPERTROPHY),
        ),
        suitability=frozenset({"powerlifting", "strength_power_sports"}),
        specializations=frozenset({"powerlifting"}),
        time_demanding=True,
        research="Simmons (2007)",
        adaptation_strategy="concurrent_development",
    ),
    ModelKey.UNDULATING: PeriodizationModel(
        key=ModelKey.UNDULATING,
        name="Daily Undulating Periodization",
        phases=(
            PhaseTemplate("strength_day", 16, 0.7, 0.85, PhaseFocus.STRENGTH),
            PhaseTemplate("hypertrophy_day", 16, 1.2, 0.70, PhaseFocus.HYPERTROPHY),
            PhaseTemplate("power_day", 16, 0.6, 0.55, PhaseFocus.POWER),
        ),
        suitability=frozenset({"bodybuilding", "general_strength", "intermediate_athletes"}),
        research="Rhea et al. (2002)",
        adaptation_strategy="daily_variation",
    ),
    ModelKey.POLARIZED: PeriodizationModel(
        key=ModelKey.POLARIZED,
        name="Polarized Training",
        phases=(
            PhaseTemplate("base_building", 8, 1.2, 0.65, PhaseFocus.AEROBIC_BASE),
            PhaseTemplate("build", 4, 1.0, 0.75, PhaseFocus.THRESHOLD),
            PhaseTemplate("peak", 3, 0.7, 0.85, PhaseFocus.VO2MAX),
            PhaseTemplate("taper", 1, 0.4, 0.60, PhaseFocus.RECOVERY),
        ),
        suitability=frozenset({"endurance_sports", "cycling", "running", "triathlon"}),
        research="Seiler (2010)",
        adaptation_strategy="intensity_distribution",
    ),
}


def get_model(key: ModelKey) -> PeriodizationModel:
    """Look up a catalog model; every ModelKey member has an entry."""
    return MODEL_CATALOG[key]


def all_models() -> tuple[PeriodizationModel, ...]:
    """Catalog models in tie-break order."""
    return tuple(MODEL_CATALOG[key] for key in ModelKey)
