"""Analysis merger: combines analyzer results and applies the consensus policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from periodization_engine.merging.strategies import MergeStrategy, WeightedAverageMerge
from periodization_engine.models.enums import DEFAULT_CONSENSUS_THRESHOLD
from periodization_engine.models.recommendation import (
    AnalysisResult,
    IntegratedAssessment,
)


@dataclass(frozen=True)
class ConsensusPolicy:
    """How many analyzers must flag adaptation before a system-wide change.

    The default of two is a heuristic; hosts can raise or lower it.
    """

    threshold: int = DEFAULT_CONSENSUS_THRESHOLD

    def is_met(self, assessment: IntegratedAssessment) -> bool:
        return (
            assessment.agreement_count >= self.threshold
            and assessment.unified.requires_adaptation
        )


class AnalysisMerger:
    """Merges analyzer results with a pluggable strategy.

    Default strategy is WeightedAverageMerge with a two-analyzer
    consensus policy.
    """

    def __init__(
        self,
        strategy: MergeStrategy | None = None,
        policy: ConsensusPolicy | None = None,
    ) -> None:
        self.strategy = strategy or WeightedAverageMerge()
        self.policy = policy or ConsensusPolicy()

    def merge(self, results: Sequence[AnalysisResult]) -> IntegratedAssessment:
        return self.strategy.merge(results)

    def requires_system_wide_adjustment(self, assessment: IntegratedAssessment) -> bool:
        return self.policy.is_met(assessment)
