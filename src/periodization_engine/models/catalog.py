"""Periodization model catalog entries: read-only phase templates."""

from __future__ import annotations

from dataclasses import dataclass, field

from periodization_engine.models.enums import ModelKey, PhaseFocus


@dataclass(frozen=True)
class PhaseTemplate:
    """One phase of a periodization model.

    ``weeks`` is relative in a catalog entry and absolute once the
    macrocycle builder has scaled it to the plan horizon.
    """

    name: str
    weeks: int
    volume: float  # base volume factor
    intensity: float  # base intensity factor (fraction of max)
    focus: PhaseFocus | None = None


@dataclass(frozen=True)
class PeriodizationModel:
    """A catalog periodization model and its suitability metadata."""

    key: ModelKey
    name: str
    phases: tuple[PhaseTemplate, ...]
    suitability: frozenset[str] = field(default_factory=frozenset)
    specializations: frozenset[str] = field(default_factory=frozenset)
    time_demanding: bool = False
    recovery_demanding: bool = False
    research: str = ""
    adaptation_strategy: str = ""

    @property
    def total_weeks(self) -> int:
        return sum(p.weeks for p in self.phases)

    @property
    def has_peak_phase(self) -> bool:
        """Whether any phase can bring the athlete to a competitive peak."""
        return any(p.focus == PhaseFocus.PEAK for p in self.phases)
