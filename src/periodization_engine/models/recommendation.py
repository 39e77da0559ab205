"""Adaptation recommendations and the fixed-shape analyzer result."""

from __future__ import annotations

from dataclasses import dataclass, field

from periodization_engine.models.enums import (
    AdaptationType,
    FatigueLevel,
    RecommendationPriority,
    Severity,
)


@dataclass(frozen=True)
class AdaptationRecommendation:
    """What the plan should do next and why.

    ``volume_adjustment`` / ``intensity_adjustment`` are signed fractions
    (-0.4 = reduce by 40%).
    """

    type: AdaptationType
    priority: RecommendationPriority = RecommendationPriority.LOW
    severity: Severity = Severity.NONE
    rationale: str = ""
    actions: tuple[str, ...] = field(default_factory=tuple)
    confidence: float = 0.0  # 0.0-1.0
    volume_adjustment: float = 0.0
    intensity_adjustment: float = 0.0
    duration_weeks: int = 0
    source: str = ""

    @property
    def requires_adaptation(self) -> bool:
        return self.type != AdaptationType.NONE


@dataclass(frozen=True)
class AnalysisResult:
    """Output of one analyzer, in the shape the merge reducer expects.

    Scores are in [0, 1]; None means the analyzer has no opinion on that
    dimension.
    """

    source: str
    adaptation_needed: bool
    confidence: float
    recommendation: AdaptationRecommendation | None = None
    fatigue_score: float | None = None
    readiness_score: float | None = None
    progression_score: float | None = None
    notes: str = ""


@dataclass(frozen=True)
class IntegratedAssessment:
    """Merged view over every analyzer's AnalysisResult.

    ``unified`` is the single recommendation the orchestrator acts on;
    the three buckets hold the full recommendation list for display.
    """

    fatigue_score: float
    fatigue_level: FatigueLevel
    readiness_score: float
    progression_score: float
    confidence: float
    agreeing_sources: tuple[str, ...]
    unified: AdaptationRecommendation
    priority_recommendations: tuple[AdaptationRecommendation, ...] = field(
        default_factory=tuple
    )
    secondary_recommendations: tuple[AdaptationRecommendation, ...] = field(
        default_factory=tuple
    )
    long_term_recommendations: tuple[AdaptationRecommendation, ...] = field(
        default_factory=tuple
    )
    sources: tuple[str, ...] = field(default_factory=tuple)

    @property
    def agreement_count(self) -> int:
        return len(self.agreeing_sources)

    @property
    def all_recommendations(self) -> tuple[AdaptationRecommendation, ...]:
        return (
            self.priority_recommendations
            + self.secondary_recommendations
            + self.long_term_recommendations
        )
