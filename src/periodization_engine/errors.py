"""Custom exception hierarchy for the periodization engine."""

from __future__ import annotations


class PeriodizationError(Exception):
    """Base exception for all periodization_engine errors."""


class ValidationError(PeriodizationError, ValueError):
    """A profile, goal, session or horizon failed validation."""


class NotFoundError(PeriodizationError):
    """No plan or microcycle exists for the requested week."""

    def __init__(self, message: str, week: int | None = None) -> None:
        super().__init__(message)
        self.week = week


class InsufficientDataError(PeriodizationError):
    """Too few sessions to run a trend analysis."""

    def __init__(self, message: str, sessions_available: int = 0) -> None:
        super().__init__(message)
        self.sessions_available = sessions_available


class PlanImportError(PeriodizationError):
    """A persisted engine document is malformed or an unsupported version."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
