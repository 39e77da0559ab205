"""Engine configuration: cadences, windows and policy thresholds.

Defaults live in models/enums.py. ``EngineConfig.from_env()`` lets a host
process override them through ``PERIODIZATION_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from periodization_engine.errors import ValidationError
from periodization_engine.models.enums import (
    DEFAULT_ANALYSIS_WINDOW,
    DEFAULT_CONSENSUS_THRESHOLD,
    DEFAULT_DECISION_WINDOW,
    DEFAULT_DELOAD_FREQUENCY,
    DEFAULT_MESOCYCLE_LENGTH,
    DEFAULT_TESTING_FIRST_WEEK,
    DEFAULT_TESTING_INTERVAL,
    MAX_SENSITIVITY,
    MIN_SESSIONS_FOR_ANALYSIS,
    REANALYSIS_INTERVAL_DAYS,
    REANALYSIS_SESSION_INTERVAL,
    SENSITIVITY_BUMP,
    SESSION_HISTORY_LIMIT,
)


def _id_list(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class EngineConfig:
    """Tunable parameters for one athlete context."""

    deload_frequency: int = DEFAULT_DELOAD_FREQUENCY
    mesocycle_length: int = DEFAULT_MESOCYCLE_LENGTH
    testing_first_week: int = DEFAULT_TESTING_FIRST_WEEK
    testing_interval: int = DEFAULT_TESTING_INTERVAL
    analysis_window: int = DEFAULT_ANALYSIS_WINDOW
    decision_window: int = DEFAULT_DECISION_WINDOW
    min_sessions: int = MIN_SESSIONS_FOR_ANALYSIS
    reanalysis_interval_days: int = REANALYSIS_INTERVAL_DAYS
    reanalysis_session_interval: int = REANALYSIS_SESSION_INTERVAL
    consensus_threshold: int = DEFAULT_CONSENSUS_THRESHOLD
    sensitivity_bump: float = SENSITIVITY_BUMP
    max_sensitivity: float = MAX_SENSITIVITY
    session_history_limit: int = SESSION_HISTORY_LIMIT
    # Analyzer ids to run; empty runs every discovered analyzer
    enabled_analyzers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in (
            "deload_frequency",
            "mesocycle_length",
            "testing_interval",
            "analysis_window",
            "decision_window",
            "min_sessions",
            "reanalysis_session_interval",
            "consensus_threshold",
            "session_history_limit",
        ):
            if getattr(self, name) < 1:
                raise ValidationError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.sensitivity_bump < 1.0:
            raise ValidationError(
                f"sensitivity_bump must be >= 1.0, got {self.sensitivity_bump}"
            )

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config from ``PERIODIZATION_*`` environment variables."""
        return cls(
            deload_frequency=int(
                os.environ.get("PERIODIZATION_DELOAD_FREQUENCY", DEFAULT_DELOAD_FREQUENCY)
            ),
            mesocycle_length=int(
                os.environ.get("PERIODIZATION_MESOCYCLE_LENGTH", DEFAULT_MESOCYCLE_LENGTH)
            ),
            testing_first_week=int(
                os.environ.get("PERIODIZATION_TESTING_FIRST_WEEK", DEFAULT_TESTING_FIRST_WEEK)
            ),
            testing_interval=int(
                os.environ.get("PERIODIZATION_TESTING_INTERVAL", DEFAULT_TESTING_INTERVAL)
            ),
            analysis_window=int(
                os.environ.get("PERIODIZATION_ANALYSIS_WINDOW", DEFAULT_ANALYSIS_WINDOW)
            ),
            decision_window=int(
                os.environ.get("PERIODIZATION_DECISION_WINDOW", DEFAULT_DECISION_WINDOW)
            ),
            min_sessions=int(
                os.environ.get("PERIODIZATION_MIN_SESSIONS", MIN_SESSIONS_FOR_ANALYSIS)
            ),
            reanalysis_interval_days=int(
                os.environ.get("PERIODIZATION_REANALYSIS_DAYS", REANALYSIS_INTERVAL_DAYS)
            ),
            reanalysis_session_interval=int(
                os.environ.get(
                    "PERIODIZATION_REANALYSIS_SESSIONS", REANALYSIS_SESSION_INTERVAL
                )
            ),
            consensus_threshold=int(
                os.environ.get("PERIODIZATION_CONSENSUS_THRESHOLD", DEFAULT_CONSENSUS_THRESHOLD)
            ),
            sensitivity_bump=float(
                os.environ.get("PERIODIZATION_SENSITIVITY_BUMP", SENSITIVITY_BUMP)
            ),
            max_sensitivity=float(
                os.environ.get("PERIODIZATION_MAX_SENSITIVITY", MAX_SENSITIVITY)
            ),
            session_history_limit=int(
                os.environ.get("PERIODIZATION_SESSION_HISTORY", SESSION_HISTORY_LIMIT)
            ),
            enabled_analyzers=_id_list(os.environ.get("PERIODIZATION_ANALYZERS", "")),
        )
