"""Merging of analyzer results into an integrated assessment."""

from periodization_engine.merging.merger import AnalysisMerger, ConsensusPolicy
from periodization_engine.merging.strategies import (
    MergeStrategy,
    WeightedAverageMerge,
    merge_analyses,
)

__all__ = [
    "AnalysisMerger",
    "ConsensusPolicy",
    "MergeStrategy",
    "WeightedAverageMerge",
    "merge_analyses",
]
