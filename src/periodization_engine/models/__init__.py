"""Data models for the periodization engine."""

from periodization_engine.models.enums import (
    AdaptationStatus,
    AdaptationType,
    AnalysisStatus,
    CompetitionImportance,
    CompetitionType,
    ExperienceLevel,
    ModelKey,
    PhaseFocus,
    RecommendationPriority,
    RecoveryCapacity,
    Severity,
    TimeConstraint,
    TrainingType,
)
from periodization_engine.models.athlete import AthleteProfile, Competition, GoalParameters
from periodization_engine.models.journal import AdaptationJournal, AdaptationJournalEntry
from periodization_engine.models.outcome import ImportResult, MonitoringOutcome
from periodization_engine.models.plan import Macrocycle, Mesocycle, Microcycle, Plan
from periodization_engine.models.recommendation import (
    AdaptationRecommendation,
    AnalysisResult,
    IntegratedAssessment,
)
from periodization_engine.models.session import (
    ExerciseEntry,
    SessionRecord,
    SetRecord,
    WellnessScores,
)
from periodization_engine.models.workout import AdaptedWorkout, Exercise, Workout

__all__ = [
    "AdaptationJournal",
    "AdaptationJournalEntry",
    "AdaptationRecommendation",
    "AdaptationStatus",
    "AdaptationType",
    "AdaptedWorkout",
    "AnalysisResult",
    "AnalysisStatus",
    "AthleteProfile",
    "Competition",
    "CompetitionImportance",
    "CompetitionType",
    "Exercise",
    "ExerciseEntry",
    "ExperienceLevel",
    "GoalParameters",
    "ImportResult",
    "IntegratedAssessment",
    "Macrocycle",
    "Mesocycle",
    "Microcycle",
    "ModelKey",
    "MonitoringOutcome",
    "PhaseFocus",
    "Plan",
    "RecommendationPriority",
    "RecoveryCapacity",
    "SessionRecord",
    "SetRecord",
    "Severity",
    "TimeConstraint",
    "TrainingType",
    "WellnessScores",
    "Workout",
]
