"""Periodization engine: plan building, workout adaptation and performance monitoring."""

from periodization_engine.engine import PeriodizationEngine

__all__ = ["PeriodizationEngine"]
