"""Plan generation: model selection through competition tapering."""

from periodization_engine.planning.builder import PlanBuilder

__all__ = ["PlanBuilder"]
