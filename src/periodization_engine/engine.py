"""PeriodizationEngine: the orchestrator for one athlete's plan and history."""

from __future__ import annotations

import dataclasses
import logging
from collections import deque
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from periodization_engine.adaptation.workout_adapter import WorkoutAdapter
from periodization_engine.analyzers.base import AnalysisContext
from periodization_engine.config import EngineConfig
from periodization_engine.errors import NotFoundError, PlanImportError, ValidationError
from periodization_engine.merging.merger import AnalysisMerger, ConsensusPolicy
from periodization_engine.models.athlete import AthleteProfile, GoalParameters
from periodization_engine.models.enums import (
    DELOAD_INTENSITY_MULTIPLIER,
    DELOAD_VOLUME_MULTIPLIER,
    EMERGENCY_DELOAD_INTENSITY_FACTOR,
    EMERGENCY_DELOAD_VOLUME_FACTOR,
    EVENT_HISTORY_LIMIT,
    INTENSIFICATION_INTENSITY_FACTOR,
    VOLUME_ADJUSTMENT_FACTOR,
    AdaptationType,
    AnalysisStatus,
    EventKind,
    TrainingType,
)
from periodization_engine.models.journal import AdaptationJournal, AdaptationJournalEntry
from periodization_engine.models.outcome import (
    AnalyzerRun,
    AnalyzerStatus,
    ImportResult,
    IntegrationEvent,
    MonitoringOutcome,
)
from periodization_engine.models.plan import Microcycle, Plan
from periodization_engine.models.recommendation import (
    AdaptationRecommendation,
    AnalysisResult,
    IntegratedAssessment,
)
from periodization_engine.models.session import SessionRecord
from periodization_engine.models.workout import AdaptedWorkout, Workout
from periodization_engine.monitoring.decision import AdaptationDecisionEngine
from periodization_engine.planning.builder import PlanBuilder
from periodization_engine.registry import AnalyzerRegistry
from periodization_engine.serialization.plan_json import from_document, to_document

logger = logging.getLogger(__name__)

# Multipliers never drop below this after a manual volume adjustment
_MIN_MULTIPLIER = 0.1

EMERGENCY_DELOAD_TAG = "emergency_deload"
DELOAD_OVERRIDE_TAG = "deload_override"
INTENSIFICATION_TAG = "intensification"
VOLUME_ADJUSTMENT_TAG = "volume_adjustment"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PeriodizationEngine:
    """Builds, adapts and monitors one athlete's periodized plan.

    Each engine owns its plan, journal, session window, analyzer registry
    and merger; nothing is shared between instances.

    Usage:
        engine = PeriodizationEngine()
        plan = engine.build_plan(profile, goal)
        adapted = engine.adapt_workout(week=3, workout=base_workout)
        outcome = engine.record_session(session)
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        registry: AnalyzerRegistry | None = None,
        merger: AnalysisMerger | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.registry = registry or AnalyzerRegistry(
            enabled=self.config.enabled_analyzers
        )
        self.merger = merger or AnalysisMerger(
            policy=ConsensusPolicy(threshold=self.config.consensus_threshold)
        )
        self._clock = clock or _utc_now

        # Auto-discover analyzers if using default registry
        if registry is None:
            self.registry.discover_analyzers()

        self._builder = PlanBuilder(self.config)
        self._adapter = WorkoutAdapter()
        self._decision_engine = AdaptationDecisionEngine(
            training_type=TrainingType.GENERAL, config=self.config
        )

        self._athlete_id: str | None = None
        self._profile: AthleteProfile | None = None
        self._plan: Plan | None = None
        self._journal = AdaptationJournal()
        self._sessions: deque[SessionRecord] = deque(
            maxlen=self.config.session_history_limit
        )
        self._events: deque[IntegrationEvent] = deque(maxlen=EVENT_HISTORY_LIMIT)
        self._last_analysis: datetime | None = None
        self._sessions_since_analysis = 0

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def athlete_id(self) -> str | None:
        return self._athlete_id

    @property
    def plan(self) -> Plan | None:
        return self._plan

    @property
    def journal(self) -> AdaptationJournal:
        return self._journal

    @property
    def sessions(self) -> tuple[SessionRecord, ...]:
        return tuple(self._sessions)

    @property
    def events(self) -> tuple[IntegrationEvent, ...]:
        return tuple(self._events)

    @property
    def sensitivity(self) -> float:
        return self._decision_engine.sensitivity

    @property
    def last_analysis(self) -> datetime | None:
        return self._last_analysis

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def build_plan(
        self, profile: AthleteProfile | None, goal: GoalParameters | None
    ) -> Plan:
        """Build a new plan and make it the active one.

        A fresh plan starts a fresh journal and analysis guard; the
        recorded session window is kept.

        Args:
            profile: Athlete profile. The first profile binds the engine.
            goal: Goal parameters.

        Returns:
            The new Plan.

        Raises:
            ValidationError: If the profile or goal is invalid, or the
                profile belongs to a different athlete than the engine
                is bound to.
        """
        if profile is None:
            raise ValidationError("Athlete profile is required")
        if self._athlete_id is not None and profile.athlete_id != self._athlete_id:
            raise ValidationError(
                f"Engine is bound to athlete {self._athlete_id!r}, "
                f"got {profile.athlete_id!r}"
            )

        plan = self._builder.build(profile, goal, created_at=self._clock())

        self._athlete_id = profile.athlete_id
        self._profile = profile
        self._decision_engine.training_type = profile.training_type
        self._plan = plan
        self._journal = AdaptationJournal()
        self._last_analysis = None
        self._sessions_since_analysis = len(self._sessions)
        self._record_event(
            EventKind.PLAN_BUILT,
            description=f"{plan.selection.name} plan, {plan.total_weeks} weeks",
        )
        return plan

    def adapt_workout(self, week: int, workout: Workout) -> AdaptedWorkout:
        """Adapt ``workout`` to the active plan's ``week`` (never mutates either)."""
        return self._adapter.adapt(self._plan, week, workout)

    def current_week(self) -> int | None:
        """Plan week of the latest session (or today), clamped to the plan."""
        if self._plan is None:
            return None
        return self._week_for(self._plan)

    def _week_for(self, plan: Plan) -> int:
        reference = (
            self._sessions[-1].session_date if self._sessions else self._clock().date()
        )
        elapsed = (reference - plan.macrocycle.start_date).days
        return max(1, min(plan.total_weeks, elapsed // 7 + 1))

    # ------------------------------------------------------------------
    # Monitoring
    # ------------------------------------------------------------------

    def record_session(self, record: SessionRecord) -> MonitoringOutcome:
        """Add a completed session to the window and run monitoring."""
        self._sessions.append(record)
        self._sessions_since_analysis += 1
        return self.monitor_and_adapt()

    def monitor_and_adapt(self) -> MonitoringOutcome:
        """Run every analyzer, merge the results and adapt the plan on consensus.

        Re-running without new sessions, or before the re-analysis interval
        has elapsed, is a no-op returning status SKIPPED.

        Returns:
            MonitoringOutcome with the per-analyzer runs, the integrated
            assessment and, when applied, the journal entry.
        """
        plan = self._plan
        if plan is None:
            return MonitoringOutcome(status=AnalysisStatus.SKIPPED, message="No active plan")
        if self._sessions_since_analysis == 0:
            return MonitoringOutcome(
                status=AnalysisStatus.SKIPPED, message="No new sessions since last analysis"
            )

        now = self._clock()
        if not self._analysis_due(now):
            logger.debug(
                "Skipping analysis: %d new sessions since %s",
                self._sessions_since_analysis,
                self._last_analysis,
            )
            return MonitoringOutcome(
                status=AnalysisStatus.SKIPPED, message="Re-analysis interval not reached"
            )

        sessions = tuple(self._sessions)
        decision = self._decision_engine.decide(sessions)
        if decision.status == AnalysisStatus.INSUFFICIENT_DATA:
            return MonitoringOutcome(
                status=AnalysisStatus.INSUFFICIENT_DATA,
                message=decision.recommendation.rationale,
            )

        week = self._week_for(plan)
        micro = plan.microcycle_for_week(week)
        context = AnalysisContext(
            sessions=sessions,
            report=self._decision_engine.monitor.analyze(
                sessions, window=self.config.analysis_window
            ),
            decision=decision,
            microcycle=micro,
            training_type=self._decision_engine.training_type,
            sensitivity=self.sensitivity,
        )
        runs, results = self._run_analyzers(context)
        assessment = self.merger.merge(results)

        self._last_analysis = now
        self._sessions_since_analysis = 0
        self._record_event(
            EventKind.ANALYSIS,
            week=week,
            description=(
                f"{assessment.agreement_count} of {len(results)} analyzers flagged "
                f"adaptation; unified {assessment.unified.type.name}"
            ),
        )

        entry: AdaptationJournalEntry | None = None
        if self.merger.requires_system_wide_adjustment(assessment):
            entry = self._apply_system_adjustment(assessment, micro, now)

        return MonitoringOutcome(
            status=AnalysisStatus.OK,
            week=week,
            assessment=assessment,
            runs=runs,
            system_adjustment_applied=entry is not None,
            journal_entry=entry,
        )

    def _analysis_due(self, now: datetime) -> bool:
        if self._last_analysis is None:
            return True
        if now - self._last_analysis >= timedelta(days=self.config.reanalysis_interval_days):
            return True
        return self._sessions_since_analysis >= self.config.reanalysis_session_interval

    def _run_analyzers(
        self, context: AnalysisContext
    ) -> tuple[tuple[AnalyzerRun, ...], list[AnalysisResult]]:
        runs: list[AnalyzerRun] = []
        results: list[AnalysisResult] = []

        for analyzer in self.registry.get_all_analyzers():
            if not analyzer.has_required_data(context):
                runs.append(
                    AnalyzerRun(
                        analyzer_id=analyzer.analyzer_id,
                        status=AnalyzerStatus.NOT_APPLICABLE,
                        explanation=f"Missing required data: {analyzer.required_data}",
                    )
                )
                continue

            result = analyzer.evaluate(context)
            if result is not None:
                results.append(result)
                runs.append(
                    AnalyzerRun(
                        analyzer_id=analyzer.analyzer_id,
                        status=AnalyzerStatus.FIRED,
                        result=result,
                        explanation=result.notes,
                    )
                )
            else:
                runs.append(
                    AnalyzerRun(
                        analyzer_id=analyzer.analyzer_id,
                        status=AnalyzerStatus.SKIPPED,
                        explanation="Analyzer returned no result.",
                    )
                )
        return tuple(runs), results

    def _apply_system_adjustment(
        self, assessment: IntegratedAssessment, micro: Microcycle | None, now: datetime
    ) -> AdaptationJournalEntry | None:
        """Emergency deload of the current week, whatever the unified type."""
        if micro is None:
            return None
        week = micro.week
        # A week receives at most one system-wide adjustment
        if any(e.system_wide for e in self._journal.entries_for_week(week)):
            logger.info("Week %d already carries a system-wide adjustment", week)
            return None

        unified = assessment.unified
        adjusted = micro.adjusted(
            EMERGENCY_DELOAD_TAG,
            volume_multiplier=micro.volume_multiplier * EMERGENCY_DELOAD_VOLUME_FACTOR,
            intensity_multiplier=(
                micro.intensity_multiplier * EMERGENCY_DELOAD_INTENSITY_FACTOR
            ),
        )
        description = f"Emergency deload (unified {unified.type.name})"

        sensitivity = self._decision_engine.adjust_sensitivity(self.config.sensitivity_bump)
        entry = self._commit(
            adjusted,
            AdaptationJournalEntry(
                week=week,
                timestamp=now,
                recommendations=assessment.priority_recommendations or (unified,),
                confidence=assessment.confidence,
                description=(
                    f"{description}: {assessment.agreement_count} analyzers agreed "
                    f"({', '.join(assessment.agreeing_sources)})"
                ),
                system_wide=True,
            ),
        )
        logger.warning(
            "%s applied to week %d; sensitivity now %.2f", description, week, sensitivity
        )
        self._record_event(EventKind.SYSTEM_ADJUSTMENT, week=week, description=description)
        return entry

    # ------------------------------------------------------------------
    # Manual adaptation
    # ------------------------------------------------------------------

    def apply_recommendation(
        self, recommendation: AdaptationRecommendation, week: int | None = None
    ) -> Plan:
        """Apply a recommendation to one week and journal it.

        DELOAD overrides the week to deload loading (the deload flag is not
        set on taper weeks). INTENSIFY raises intensity by the recommended
        fraction (default 5%). MODIFY scales volume by the recommended
        fraction (default -10%). NONE leaves the plan unchanged.

        Args:
            recommendation: The recommendation to apply.
            week: Target week; defaults to the current week.

        Returns:
            The active plan after the change.

        Raises:
            NotFoundError: If there is no plan or no such week.
        """
        if self._plan is None:
            raise NotFoundError("No active plan")
        target = week if week is not None else self.current_week()
        micro = self._plan.microcycle_for_week(target) if target is not None else None
        if micro is None:
            raise NotFoundError(f"No microcycle for week {target}", week=target)
        if not recommendation.requires_adaptation:
            return self._plan

        adjusted = self._manual_adjustment(micro, recommendation)
        self._commit(
            adjusted,
            AdaptationJournalEntry(
                week=micro.week,
                timestamp=self._clock(),
                recommendations=(recommendation,),
                confidence=recommendation.confidence,
                description=adjusted.adjustments[-1],
            ),
        )
        logger.info(
            "Applied %s to week %d (%s)",
            recommendation.type.name,
            micro.week,
            recommendation.rationale or "manual",
        )
        self._record_event(
            EventKind.MANUAL_ADJUSTMENT,
            week=micro.week,
            description=recommendation.type.name,
        )
        return self._plan

    @staticmethod
    def _manual_adjustment(
        micro: Microcycle, recommendation: AdaptationRecommendation
    ) -> Microcycle:
        if recommendation.type == AdaptationType.DELOAD:
            return micro.adjusted(
                DELOAD_OVERRIDE_TAG,
                is_deload_week=not micro.is_taper_week,
                volume_multiplier=min(
                    DELOAD_VOLUME_MULTIPLIER,
                    micro.volume_multiplier * DELOAD_VOLUME_MULTIPLIER,
                ),
                intensity_multiplier=micro.intensity_multiplier * DELOAD_INTENSITY_MULTIPLIER,
            )
        if recommendation.type == AdaptationType.INTENSIFY:
            factor = (
                1.0 + recommendation.intensity_adjustment
                if recommendation.intensity_adjustment > 0
                else INTENSIFICATION_INTENSITY_FACTOR
            )
            return micro.adjusted(
                INTENSIFICATION_TAG,
                intensity_multiplier=micro.intensity_multiplier * factor,
            )
        factor = (
            1.0 + recommendation.volume_adjustment
            if recommendation.volume_adjustment != 0
            else VOLUME_ADJUSTMENT_FACTOR
        )
        return micro.adjusted(
            VOLUME_ADJUSTMENT_TAG,
            volume_multiplier=max(_MIN_MULTIPLIER, micro.volume_multiplier * factor),
        )

    def _commit(
        self, microcycle: Microcycle, entry: AdaptationJournalEntry
    ) -> AdaptationJournalEntry:
        """Swap in the next plan revision and its journal entry together."""
        if self._plan is None:
            raise NotFoundError("No active plan")
        plan = self._plan.with_microcycle(microcycle)
        entry = dataclasses.replace(entry, plan_revision=plan.revision)
        journal = self._journal.append(entry)
        self._plan, self._journal = plan, journal
        return entry

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def export_state(self) -> dict[str, Any]:
        """Export plan, journal and sensitivity as a JSON-compatible document."""
        if self._plan is None:
            raise NotFoundError("No active plan to export")
        return to_document(
            self._plan,
            self._journal,
            sensitivity=self.sensitivity,
            exported_at=self._clock(),
            profile=self._profile,
        )

    def import_state(self, document: Any) -> ImportResult:
        """Replace plan, journal and sensitivity from an exported document.

        Fails closed: on any validation error the engine state is left
        untouched and ``ImportResult.success`` is False.
        """
        try:
            state = from_document(document)
        except PlanImportError as exc:
            logger.warning("Rejected state import: %s", exc)
            return ImportResult(success=False, error=str(exc))

        if self._athlete_id is not None and state.athlete_id != self._athlete_id:
            error = (
                f"Document belongs to athlete {state.athlete_id!r}, "
                f"engine is bound to {self._athlete_id!r}"
            )
            logger.warning("Rejected state import: %s", error)
            return ImportResult(success=False, error=error)

        self._athlete_id = state.athlete_id
        if state.profile is not None:
            self._profile = state.profile
            self._decision_engine.training_type = state.profile.training_type
        self._plan = state.plan
        self._journal = state.journal
        self._decision_engine.sensitivity = min(
            self.config.max_sensitivity, state.sensitivity
        )
        self._last_analysis = None
        self._record_event(EventKind.STATE_IMPORTED, description="State imported")
        return ImportResult(success=True)

    def _record_event(
        self, kind: EventKind, week: int | None = None, description: str = ""
    ) -> None:
        self._events.append(
            IntegrationEvent(
                kind=kind, timestamp=self._clock(), week=week, description=description
            )
        )
