"""Orchestrator outcomes: audit trail of one monitoring pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum, auto

from periodization_engine.models.enums import AnalysisStatus, EventKind
from periodization_engine.models.journal import AdaptationJournalEntry
from periodization_engine.models.recommendation import (
    AnalysisResult,
    IntegratedAssessment,
)


class AnalyzerStatus(IntEnum):
    """Whether an analyzer produced a result, returned nothing, or lacked data."""

    FIRED = auto()
    SKIPPED = auto()
    NOT_APPLICABLE = auto()


@dataclass(frozen=True)
class AnalyzerRun:
    """Record of a single analyzer's evaluation during a monitoring pass."""

    analyzer_id: str
    status: AnalyzerStatus
    result: AnalysisResult | None = None
    explanation: str = ""


@dataclass(frozen=True)
class MonitoringOutcome:
    """Complete record of one ``monitor_and_adapt()`` call.

    Records every analyzer's outcome so plan adaptations stay explainable.
    ``assessment`` is None unless the pass actually ran (status OK).
    """

    status: AnalysisStatus
    week: int | None = None
    assessment: IntegratedAssessment | None = None
    runs: tuple[AnalyzerRun, ...] = field(default_factory=tuple)
    system_adjustment_applied: bool = False
    journal_entry: AdaptationJournalEntry | None = None
    message: str = ""


@dataclass(frozen=True)
class ImportResult:
    success: bool
    error: str = ""


@dataclass(frozen=True)
class IntegrationEvent:
    """One entry of the engine's bounded event history."""

    kind: EventKind
    timestamp: datetime
    week: int | None = None
    description: str = ""
