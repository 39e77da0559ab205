"""Abstract base class for session analyzers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from periodization_engine.models.analysis import PerformanceReport
from periodization_engine.models.enums import DEFAULT_SENSITIVITY, TrainingType
from periodization_engine.models.plan import Microcycle
from periodization_engine.models.recommendation import AnalysisResult
from periodization_engine.models.session import SessionRecord
from periodization_engine.monitoring.decision import AdaptationDecision


@dataclass(frozen=True)
class AnalysisContext:
    """Frozen snapshot handed to every analyzer in one monitoring pass."""

    sessions: tuple[SessionRecord, ...] = field(default_factory=tuple)
    report: PerformanceReport | None = None
    decision: AdaptationDecision | None = None
    microcycle: Microcycle | None = None
    training_type: TrainingType = TrainingType.GENERAL
    sensitivity: float = DEFAULT_SENSITIVITY


class SessionAnalyzer(ABC):
    """Base class for all analyzers consulted by the orchestrator.

    Each analyzer looks at the recent sessions from one angle and reports
    whether the plan needs adapting. Analyzers are discovered automatically
    by the AnalyzerRegistry.

    Subclasses must define:
        analyzer_id: unique identifier (e.g. "fatigue_trend")
        version: semantic version string
        priority: evaluation order, lower first
        required_data: AnalysisContext field names the analyzer needs
        evaluate(): the analyzer's logic
    """

    analyzer_id: str
    version: str
    priority: int
    required_data: list[str]

    def has_required_data(self, context: AnalysisContext) -> bool:
        """Check that all required AnalysisContext fields are present."""
        for field_name in self.required_data:
            value = getattr(context, field_name, None)
            if value is None:
                return False
            if isinstance(value, (list, tuple)) and len(value) == 0:
                return False
        return True

    @abstractmethod
    def evaluate(self, context: AnalysisContext) -> AnalysisResult | None:
        """Analyze the context.

        Returns an AnalysisResult, or None if the analyzer has nothing to
        say for this context.
        """
        ...

    def result(
        self,
        adaptation_needed: bool,
        confidence: float,
        **scores: object,
    ) -> AnalysisResult:
        """Build an AnalysisResult tagged with this analyzer's id."""
        return AnalysisResult(
            source=self.analyzer_id,
            adaptation_needed=adaptation_needed,
            confidence=max(0.0, min(1.0, confidence)),
            **scores,  # type: ignore[arg-type]
        )
