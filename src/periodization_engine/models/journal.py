"""Adaptation journal: append-only audit trail of plan mutations.

Like the plan itself the journal is frozen; ``append()`` returns a new
journal so the engine can swap plan and journal in one step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from periodization_engine.models.recommendation import AdaptationRecommendation


@dataclass(frozen=True)
class AdaptationJournalEntry:
    """One applied adaptation."""

    week: int
    timestamp: datetime
    recommendations: tuple[AdaptationRecommendation, ...]
    confidence: float
    description: str = ""
    system_wide: bool = False
    plan_revision: int = 0


@dataclass(frozen=True)
class AdaptationJournal:
    """Frozen, chronologically ordered journal entries."""

    entries: tuple[AdaptationJournalEntry, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return len(self.entries) == 0

    @property
    def latest(self) -> AdaptationJournalEntry | None:
        return self.entries[-1] if self.entries else None

    def append(self, entry: AdaptationJournalEntry) -> AdaptationJournal:
        """Return a new journal with ``entry`` added at the end."""
        return AdaptationJournal(entries=self.entries + (entry,))

    def entries_for_week(self, week: int) -> tuple[AdaptationJournalEntry, ...]:
        return tuple(e for e in self.entries if e.week == week)

    def has_entry_since(self, timestamp: datetime, system_wide_only: bool = False) -> bool:
        """Whether an adaptation was applied at or after ``timestamp``."""
        return any(
            e.timestamp >= timestamp and (e.system_wide or not system_wide_only)
            for e in self.entries
        )
