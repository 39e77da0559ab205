"""Performance monitoring and adaptation decisions."""

from periodization_engine.monitoring.decision import (
    AdaptationDecision,
    AdaptationDecisionEngine,
)
from periodization_engine.monitoring.monitor import PerformanceMonitor

__all__ = ["AdaptationDecision", "AdaptationDecisionEngine", "PerformanceMonitor"]
