"""Enumerations and tuning constants for the periodization engine.

Thresholds and constants cite their published source where one exists.
"""

from enum import IntEnum, auto


class ExperienceLevel(IntEnum):
    """Athlete training-age tiers."""

    BEGINNER = auto()
    INTERMEDIATE = auto()
    ADVANCED = auto()


class TrainingType(IntEnum):
    """Primary training quality the athlete is developing."""

    STRENGTH = auto()
    HYPERTROPHY = auto()
    ENDURANCE = auto()
    GENERAL = auto()


class TimeConstraint(IntEnum):
    """How much weekly training time the athlete has available."""

    LIMITED = auto()
    MODERATE = auto()
    HIGH = auto()


class RecoveryCapacity(IntEnum):
    """Self-reported ability to recover between sessions."""

    LOW = auto()
    MODERATE = auto()
    HIGH = auto()


class ModelKey(IntEnum):
    """Periodization models available in the catalog, in catalog order."""

    LINEAR = auto()
    BLOCK = auto()
    CONJUGATE = auto()
    UNDULATING = auto()
    POLARIZED = auto()


class PhaseFocus(IntEnum):
    """Training emphasis of a macrocycle phase."""

    VOLUME = auto()
    INTENSITY = auto()
    PEAK = auto()
    RECOVERY = auto()
    STRENGTH = auto()
    SPEED = auto()
    HYPERTROPHY = auto()
    POWER = auto()
    AEROBIC_BASE = auto()
    THRESHOLD = auto()
    VO2MAX = auto()


class CompetitionImportance(IntEnum):
    """Competition priority classification.

    MAJOR = season goal, SECONDARY = supporting event, TUNE_UP = practice meet.
    """

    MAJOR = auto()
    SECONDARY = auto()
    TUNE_UP = auto()


class CompetitionType(IntEnum):
    """Competition discipline, drives taper techniques and peaking protocol."""

    POWERLIFTING = auto()
    WEIGHTLIFTING = auto()
    ENDURANCE = auto()
    OTHER = auto()


class AdaptationType(IntEnum):
    """What an adaptation recommendation asks the plan to do."""

    NONE = auto()
    DELOAD = auto()
    INTENSIFY = auto()
    MODIFY = auto()


class RecommendationPriority(IntEnum):
    """Recommendation urgency: lower value = more urgent."""

    IMMEDIATE = 0
    HIGH = 1
    MEDIUM = 2
    LOW = 3


class Severity(IntEnum):
    """Magnitude label attached to a recommendation."""

    NONE = 0
    CONSERVATIVE = 1
    MODERATE = 2
    SIGNIFICANT = 3
    AGGRESSIVE = 4
    SEVERE = 5


class TrendDirection(IntEnum):
    """Sign of a fitted linear trend after thresholding."""

    DECREASING = -1
    STABLE = 0
    INCREASING = 1


class AnalysisStatus(IntEnum):
    """Outcome of a monitoring pass."""

    OK = auto()
    INSUFFICIENT_DATA = auto()
    SKIPPED = auto()


class AdaptationStatus(IntEnum):
    """Outcome of a workout adaptation call."""

    ADAPTED = auto()
    NOT_FOUND = auto()
    NO_PLAN = auto()


class FatigueLevel(IntEnum):
    """Integrated fatigue classification."""

    LOW = auto()
    MODERATE = auto()
    HIGH = auto()
    VERY_HIGH = auto()


class AdaptationQuality(IntEnum):
    """How well the athlete is adapting to the current phase."""

    POOR = auto()
    FAIR = auto()
    GOOD = auto()
    EXCELLENT = auto()


class ModificationType(IntEnum):
    """Kind of change the workout adapter made to an exercise."""

    VOLUME = auto()
    INTENSITY = auto()
    FOCUS = auto()


class Metric(IntEnum):
    """Session metrics tracked by the performance monitor."""

    RPE = auto()
    VOLUME = auto()
    ESTIMATED_MAX = auto()
    RECOVERY = auto()
    ADHERENCE = auto()


class EventKind(IntEnum):
    """Orchestrator event recorded in the integration history."""

    PLAN_BUILT = auto()
    ANALYSIS = auto()
    SYSTEM_ADJUSTMENT = auto()
    MANUAL_ADJUSTMENT = auto()
    STATE_IMPORTED = auto()


# ---------------------------------------------------------------------------
# Model selection weights: scoring heuristics of the model selector
# ---------------------------------------------------------------------------
BASE_MODEL_SCORE = 0.5
TRAINING_TYPE_MATCH_BONUS = 0.3
EXPERIENCE_MATCH_BONUS = 0.2
SPECIALIZATION_MATCH_BONUS = 0.4
COMPETITION_PEAK_BONUS = 0.15
LIMITED_TIME_PENALTY = 0.1
LOW_RECOVERY_PENALTY = 0.1

# ---------------------------------------------------------------------------
# Macrocycle cadence
# ---------------------------------------------------------------------------
# Deload every 4th week (3:1 loading): Bompa & Haff (2009), Periodization
DEFAULT_DELOAD_FREQUENCY = 4

# Mesocycle block length in weeks: Issurin (2010)
DEFAULT_MESOCYCLE_LENGTH = 4

# First testing week and testing cadence thereafter
DEFAULT_TESTING_FIRST_WEEK = 4
DEFAULT_TESTING_INTERVAL = 6

# ---------------------------------------------------------------------------
# Mesocycle progression curves (multipliers at progress 0 -> 1)
# ---------------------------------------------------------------------------
VOLUME_FOCUS_VOLUME_RAMP = (0.8, 1.2)
INTENSITY_FOCUS_VOLUME_RAMP = (1.2, 0.8)
PEAK_FOCUS_VOLUME_RAMP = (0.8, 0.5)
INTENSITY_FOCUS_INTENSITY_RAMP = (0.9, 1.05)
PEAK_FOCUS_INTENSITY_RAMP = (0.95, 1.0)

# Maximum athlete weakness tags added to a mesocycle's focus areas
MAX_WEAKNESS_FOCUS_AREAS = 2

# ---------------------------------------------------------------------------
# Microcycle multipliers
# ---------------------------------------------------------------------------
# Deload week load: Pritchard et al. (2015), 40-60% volume reduction
DELOAD_VOLUME_MULTIPLIER = 0.6
DELOAD_INTENSITY_MULTIPLIER = 0.85

# Week-on-week overload inside a mesocycle
WEEKLY_VOLUME_STEP = 0.05
WEEKLY_INTENSITY_STEP = 0.02
MAX_VOLUME_MULTIPLIER = 1.3
MAX_INTENSITY_MULTIPLIER = 1.05

# Phases at or above this base intensity get physiological monitoring
HIGH_INTENSITY_PHASE_THRESHOLD = 0.85

# Deload weeks keep this fraction of the normal session count (minimum 2)
DELOAD_SESSION_FRACTION = 0.7
MIN_DELOAD_SESSIONS = 2

SESSIONS_PER_WEEK = {
    TrainingType.STRENGTH: 4,
    TrainingType.HYPERTROPHY: 5,
    TrainingType.ENDURANCE: 6,
    TrainingType.GENERAL: 3,
}

SESSION_DURATION_MIN = {
    TimeConstraint.LIMITED: 45,
    TimeConstraint.MODERATE: 60,
    TimeConstraint.HIGH: 90,
}

# Phase-specific RPE targets: Helms et al. (2016), RPE-based loading
TARGET_RPE_BY_PHASE = {
    "anatomical_adaptation": 6.5,
    "hypertrophy": 7.5,
    "strength": 8.5,
    "power_peak": 8.0,
    "accumulation": 7.0,
    "intensification": 8.5,
    "realization": 9.0,
    "restoration": 6.0,
}
DEFAULT_TARGET_RPE = 7.5

# ---------------------------------------------------------------------------
# Competition taper: Bosquet et al. (2007), 41-60% volume reduction
# ---------------------------------------------------------------------------
MAJOR_TAPER_WEEKS = 3
MINOR_TAPER_WEEKS = 2
TAPER_MAX_VOLUME_REDUCTION = 0.6
TAPER_MAX_INTENSITY_INCREASE = 0.05

POST_COMPETITION_VOLUME_MULTIPLIER = 0.5
POST_COMPETITION_INTENSITY_MULTIPLIER = 0.7

# ---------------------------------------------------------------------------
# Workout adapter
# ---------------------------------------------------------------------------
MAX_PERCENTAGE = 100.0
RECOVERY_FOCUS_WEIGHT_FACTOR = 0.8
TECHNIQUE_FOCUS_WEIGHT_FACTOR = 0.9
STRENGTH_MIN_REST_S = 180
HYPERTROPHY_MAX_REST_S = 120
POWER_MIN_REST_S = 240
ENDURANCE_MAX_REST_S = 60

# ---------------------------------------------------------------------------
# Session metrics
# ---------------------------------------------------------------------------
# Epley (1985) e1RM with an RPE-based reps-in-reserve adjustment
RPE_E1RM_ADJUSTMENT = {
    6.0: 1.20,
    6.5: 1.175,
    7.0: 1.15,
    7.5: 1.125,
    8.0: 1.10,
    8.5: 1.075,
    9.0: 1.05,
    9.5: 1.025,
    10.0: 1.0,
}

# Wellness weights for the composite recovery score (sum = 1.0)
RECOVERY_WEIGHT_ENERGY = 0.25
RECOVERY_WEIGHT_SLEEP = 0.30
RECOVERY_WEIGHT_STRESS = 0.15
RECOVERY_WEIGHT_SORENESS = 0.15
RECOVERY_WEIGHT_MOTIVATION = 0.15

# ---------------------------------------------------------------------------
# Monitoring
# ---------------------------------------------------------------------------
TREND_THRESHOLD = 0.05
MIN_SESSIONS_FOR_ANALYSIS = 3
MIN_SESSIONS_FOR_DROP_DETECTION = 4
MIN_SESSIONS_FOR_PREDICTION = 5
DEFAULT_ANALYSIS_WINDOW = 10
DEFAULT_DECISION_WINDOW = 5
SESSION_HISTORY_LIMIT = 50

# Modify triggers on fitted slopes (RPE points / session, volume kg / session)
RPE_SLOPE_MODIFY_THRESHOLD = 0.1
VOLUME_SLOPE_MODIFY_THRESHOLD = 100.0

# Intensify magnitude bands on estimated-max slope
AGGRESSIVE_PROGRESSION_SLOPE = 0.1
MODERATE_PROGRESSION_SLOPE = 0.05

# Alerts
ALERT_RPE_THRESHOLD = 9.0
ALERT_ADHERENCE_THRESHOLD = 0.60
ALERT_RECOVERY_THRESHOLD = 4.0

# RPE benchmark bands: Zourdos et al. (2016), RIR-based RPE scale
RPE_OPTIMAL_RANGE = (7.0, 8.5)
RPE_WARNING_RANGE = (8.5, 9.5)
RPE_CRITICAL_RANGE = (9.5, 10.0)
ADHERENCE_BENCHMARKS = {
    "excellent": 0.95,
    "good": 0.85,
    "acceptable": 0.75,
    "poor": 0.60,
}

# Phase adaptation criteria (fractional change across the window)
VOLUME_ADAPTATION_RANGE = (0.05, 0.15)
STRENGTH_ADAPTATION_RANGE = (0.02, 0.08)
RECOVERY_MIN_SCORE = 6.0
RECOVERY_TARGET_SCORE = 8.0

# ---------------------------------------------------------------------------
# Decision engine sensitivity
# ---------------------------------------------------------------------------
DEFAULT_SENSITIVITY = 1.0
MAX_SENSITIVITY = 2.0
SENSITIVITY_BUMP = 1.2
# RPE points the deload threshold drops per unit of sensitivity above 1.0
SENSITIVITY_RPE_SHIFT = 2.5

# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------
DEFAULT_CONSENSUS_THRESHOLD = 2
REANALYSIS_INTERVAL_DAYS = 1
REANALYSIS_SESSION_INTERVAL = 3
EVENT_HISTORY_LIMIT = 100

EMERGENCY_DELOAD_VOLUME_FACTOR = 0.6
EMERGENCY_DELOAD_INTENSITY_FACTOR = 0.85
INTENSIFICATION_INTENSITY_FACTOR = 1.05
VOLUME_ADJUSTMENT_FACTOR = 0.9

# Integrated-state thresholds for merged analyzer output
VERY_HIGH_FATIGUE_THRESHOLD = 0.9
HIGH_FATIGUE_THRESHOLD = 0.8
MODERATE_FATIGUE_THRESHOLD = 0.6
LOW_READINESS_THRESHOLD = 0.6
LOW_PROGRESSION_THRESHOLD = 0.7
LOW_CONFIDENCE_THRESHOLD = 0.8
DEFAULT_READINESS = 0.7
DEFAULT_CONFIDENCE = 0.7

EXPORT_FORMAT_VERSION = "1.0"
