"""Analyzer registry: discovers SessionAnalyzer subclasses and filters them by id."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from typing import Iterable

import periodization_engine.analyzers as analyzers_pkg
from periodization_engine.analyzers.base import SessionAnalyzer
from periodization_engine.errors import ValidationError

logger = logging.getLogger(__name__)


def _concrete_analyzers(module: object) -> list[type[SessionAnalyzer]]:
    found = []
    for attr in vars(module).values():
        if (
            isinstance(attr, type)
            and issubclass(attr, SessionAnalyzer)
            and attr is not SessionAnalyzer
            and attr.__module__ == getattr(module, "__name__", None)
            and not getattr(attr, "__abstractmethods__", None)
        ):
            found.append(attr)
    return found


class AnalyzerRegistry:
    """Holds the analyzers one engine runs on each monitoring pass.

    ``enabled`` restricts the registry to the listed analyzer ids; None or
    an empty collection enables every analyzer. Each engine owns its own
    registry instance.

    Usage:
        registry = AnalyzerRegistry(enabled=("fatigue_trend",))
        registry.discover_analyzers()
    """

    def __init__(self, enabled: Iterable[str] | None = None) -> None:
        self._enabled = frozenset(enabled or ())
        self._analyzers: dict[str, SessionAnalyzer] = {}

    @property
    def enabled(self) -> frozenset[str]:
        return self._enabled

    def is_enabled(self, analyzer_id: str) -> bool:
        return not self._enabled or analyzer_id in self._enabled

    def discover_analyzers(self) -> None:
        """Import every module of the analyzers package and register its analyzers.

        Raises:
            ValidationError: If an enabled id matches no discovered analyzer.
        """
        for _, module_name, _ in pkgutil.walk_packages(
            analyzers_pkg.__path__, prefix=analyzers_pkg.__name__ + "."
        ):
            module = importlib.import_module(module_name)
            for analyzer_cls in _concrete_analyzers(module):
                if analyzer_cls.analyzer_id not in self._analyzers:
                    self.register(analyzer_cls())

        missing = self._enabled - set(self._analyzers)
        if missing:
            raise ValidationError(f"Unknown analyzer ids enabled: {sorted(missing)}")

    def register(self, analyzer: SessionAnalyzer) -> bool:
        """Register ``analyzer`` unless it is disabled.

        Returns:
            True if the analyzer was registered.

        Raises:
            ValidationError: If another analyzer already uses the same id.
        """
        if not self.is_enabled(analyzer.analyzer_id):
            logger.debug("Analyzer %s disabled; not registered", analyzer.analyzer_id)
            return False
        if analyzer.analyzer_id in self._analyzers:
            raise ValidationError(f"Duplicate analyzer id {analyzer.analyzer_id!r}")
        self._analyzers[analyzer.analyzer_id] = analyzer
        return True

    def get(self, analyzer_id: str) -> SessionAnalyzer | None:
        return self._analyzers.get(analyzer_id)

    def get_all_analyzers(self) -> list[SessionAnalyzer]:
        """Registered analyzers, lowest priority value first (ties by id)."""
        return sorted(self._analyzers.values(), key=lambda a: (a.priority, a.analyzer_id))

    @property
    def analyzer_ids(self) -> list[str]:
        return [a.analyzer_id for a in self.get_all_analyzers()]
