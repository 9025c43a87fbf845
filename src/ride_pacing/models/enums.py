"""Enumerations and model constants for the pacing engine.

Thresholds are either published conventions (Coggan power zones, TSS) or
fixed heuristic coefficients of the planning model. Each one names its source.
"""

from enum import IntEnum, auto


class PacingStrategy(IntEnum):
    """How target power is shaped across the ride."""

    BALANCED = auto()
    CONSERVATIVE = auto()
    AGGRESSIVE = auto()
    NEGATIVE_SPLIT = auto()
    EVEN_EFFORT = auto()

    @property
    def label(self) -> str:
        return _STRATEGY_LABELS[self]

    @property
    def description(self) -> str:
        return _STRATEGY_DESCRIPTIONS[self]


_STRATEGY_LABELS = {
    PacingStrategy.BALANCED: "Balanced",
    PacingStrategy.CONSERVATIVE: "Conservative",
    PacingStrategy.AGGRESSIVE: "Aggressive",
    PacingStrategy.NEGATIVE_SPLIT: "Negative Split",
    PacingStrategy.EVEN_EFFORT: "Even Effort",
}

_STRATEGY_DESCRIPTIONS = {
    PacingStrategy.BALANCED: "Terrain-aware pacing: push climbs, recover on descents.",
    PacingStrategy.CONSERVATIVE: "6% below balanced everywhere to finish strong.",
    PacingStrategy.AGGRESSIVE: "Hard start, high race pace, then empty the tank in the final 15%.",
    PacingStrategy.NEGATIVE_SPLIT: "Start at 92% and ramp to 106% of the balanced plan.",
    PacingStrategy.EVEN_EFFORT: "Constant physiological effort: more on climbs, coast descents.",
}


class TerrainType(IntEnum):
    """Terrain classification carried on each route segment."""

    FLAT = auto()
    CLIMB = auto()
    DESCENT = auto()
    ROLLING = auto()


class PowerZoneNumber(IntEnum):
    """Coggan 7-zone power model ordinals."""

    RECOVERY = 1
    ENDURANCE = 2
    TEMPO = 3
    SWEET_SPOT = 4
    THRESHOLD = 5
    VO2_MAX = 6
    ANAEROBIC = 7


class KeySegmentType(IntEnum):
    MAJOR_CLIMB = auto()
    HIGH_INTENSITY = auto()
    FUEL_OPPORTUNITY = auto()
    TECHNICAL_SECTION = auto()
    RECOVERY = auto()


class DifficultyRating(IntEnum):
    """Overall plan difficulty, ordered easiest to hardest."""

    RECOVERY = auto()
    EASY = auto()
    MODERATE = auto()
    HARD = auto()
    VERY_HARD = auto()

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


class StressRating(IntEnum):
    """Metabolic stress of a planned ride."""

    LOW = auto()
    MODERATE = auto()
    HIGH = auto()
    EXTREME = auto()


class FuelType(IntEnum):
    GEL = auto()
    DRINK = auto()
    BAR = auto()
    SOLID = auto()
    ELECTROLYTES = auto()


class FuelingStrategyType(IntEnum):
    """Fueling approach, chosen purely by ride duration."""

    MINIMAL = auto()
    LIGHT = auto()
    STRUCTURED = auto()
    COMPREHENSIVE = auto()


# ---------------------------------------------------------------------------
# Power zones — Coggan & Allen (2010), fractions of FTP
# ---------------------------------------------------------------------------
POWER_ZONE_BOUNDARIES_PCT_FTP = {
    PowerZoneNumber.RECOVERY: (0.0, 0.55),
    PowerZoneNumber.ENDURANCE: (0.55, 0.75),
    PowerZoneNumber.TEMPO: (0.75, 0.87),
    PowerZoneNumber.SWEET_SPOT: (0.87, 0.94),
    PowerZoneNumber.THRESHOLD: (0.94, 1.05),
    PowerZoneNumber.VO2_MAX: (1.05, 1.20),
    PowerZoneNumber.ANAEROBIC: (1.20, 1.50),
}

POWER_ZONE_NAMES = {
    PowerZoneNumber.RECOVERY: "Recovery",
    PowerZoneNumber.ENDURANCE: "Endurance",
    PowerZoneNumber.TEMPO: "Tempo",
    PowerZoneNumber.SWEET_SPOT: "Sweet Spot",
    PowerZoneNumber.THRESHOLD: "Threshold",
    PowerZoneNumber.VO2_MAX: "VO2 Max",
    PowerZoneNumber.ANAEROBIC: "Anaerobic",
}

# Display colours, only carried for presentation layers
POWER_ZONE_COLORS = {
    PowerZoneNumber.RECOVERY: "#9E9E9E",
    PowerZoneNumber.ENDURANCE: "#2196F3",
    PowerZoneNumber.TEMPO: "#4CAF50",
    PowerZoneNumber.SWEET_SPOT: "#FFFF00",
    PowerZoneNumber.THRESHOLD: "#FF9800",
    PowerZoneNumber.VO2_MAX: "#F44336",
    PowerZoneNumber.ANAEROBIC: "#9C27B0",
}

# ---------------------------------------------------------------------------
# Normalized power / TSS — Coggan (2003)
# ---------------------------------------------------------------------------
NP_ROLLING_WINDOW_S = 30
NP_EXPONENT = 4
TSS_SCALE = 100.0

# Difficulty thresholds as (TSS, IF) pairs, hardest first
DIFFICULTY_THRESHOLDS = (
    (DifficultyRating.VERY_HARD, 300.0, 1.0),
    (DifficultyRating.HARD, 200.0, 0.9),
    (DifficultyRating.MODERATE, 100.0, 0.8),
    (DifficultyRating.EASY, 50.0, 0.7),
)

# Sustainable IF ceiling by ride duration (max hours, IF), Allen & Coggan
SUSTAINABLE_IF_BY_HOURS = ((1.0, 0.95), (2.0, 0.80), (3.0, 0.72))
SUSTAINABLE_IF_LONG_RIDE = 0.65

# ---------------------------------------------------------------------------
# Fatigue model — heuristic, TSS-driven power decay
# ---------------------------------------------------------------------------
FATIGUE_STRESS_SCALE = 350.0
FATIGUE_EXPONENT = 1.5
MIN_FATIGUE_MULTIPLIER = 0.80

# ---------------------------------------------------------------------------
# Terrain shaping (all strategies except even effort)
# ---------------------------------------------------------------------------
TERRAIN_CLIMB_GRADE = 0.035
TERRAIN_DESCENT_GRADE = -0.025
CLIMB_BOOST_PER_GRADE = 2.5
MAX_CLIMB_BOOST = 1.18
DESCENT_POWER_MULTIPLIER = 0.88
FLAT_POWER_MULTIPLIER = 0.96

# Aggressive phases as (progress upper bound, multiplier); last phase runs to 1.0
AGGRESSIVE_PHASES = ((0.20, 1.10), (0.85, 1.06))
AGGRESSIVE_FINISH_MULTIPLIER = 1.12
CONSERVATIVE_MULTIPLIER = 0.94
NEGATIVE_SPLIT_START = 0.92
NEGATIVE_SPLIT_RAMP = 0.14

# Even effort bypasses terrain shaping: (grade bound, multiplier)
EVEN_EFFORT_CLIMB_STEPS = ((0.06, 1.12), (0.02, 1.06))
EVEN_EFFORT_DESCENT_STEPS = ((-0.05, 0.70), (-0.01, 0.88))

# ---------------------------------------------------------------------------
# Power constraints, fractions of FTP
# ---------------------------------------------------------------------------
MAX_POWER_PCT_FTP = 1.25
MIN_POWER_PCT_FTP = 0.55
DESCENT_MIN_POWER_PCT_FTP = 0.35
DESCENT_FLOOR_GRADE = -0.03

# Time rescaling only applied above this power ratio on re-derivation
MIN_RESCALE_POWER_RATIO = 0.1

# ---------------------------------------------------------------------------
# Key segments and plan warnings
# ---------------------------------------------------------------------------
MAX_KEY_SEGMENTS = 20
KEY_CLIMB_MIN_GRADE = 0.04
KEY_CLIMB_MIN_DISTANCE_KM = 0.3
KEY_CLIMB_SCORE_WEIGHT = 1000.0
KEY_DESCENT_MAX_GRADE = -0.04
KEY_DESCENT_MIN_DISTANCE_KM = 0.4
KEY_DESCENT_SCORE_WEIGHT = 800.0
KEY_HIGH_INTENSITY_PCT_FTP = 1.05
KEY_HIGH_INTENSITY_MIN_DURATION_MIN = 1.0
KEY_HIGH_INTENSITY_SCORE_WEIGHT = 500.0
KEY_SUSTAINED_MIN_DURATION_MIN = 10.0
KEY_SUSTAINED_PCT_FTP = 0.75
KEY_FUEL_MIN_DURATION_MIN = 45.0
KEY_FUEL_SCORE_PER_MIN = 5.0

WARNING_MAX_TSS = 300.0
WARNING_MAX_TIME_ABOVE_FTP_S = 3600.0
WARNING_LONG_RIDE_S = 4 * 3600.0

# ---------------------------------------------------------------------------
# Energy expenditure — Jeukendrup & Wallis (2005), gross efficiency ~20-25%
# ---------------------------------------------------------------------------
GROSS_EFFICIENCY = 0.22
KCAL_PER_KJ = 0.239006
GLYCOGEN_STORE_KCAL = 2000.0
GLYCOGEN_RISK_FRACTION = 0.80
AEROBIC_THRESHOLD_PCT_FTP = 0.85

# Substrate split by intensity — Romijn et al. (1993) crossover concept
FAT_PCT_LOW_INTENSITY_BASE = 85.0
FAT_PCT_LOW_INTENSITY_SLOPE = 20.0
FAT_PCT_MID_INTENSITY_BASE = 50.0
FAT_PCT_MID_INTENSITY_SLOPE = 100.0
FAT_PCT_HIGH_INTENSITY_BASE = 25.0
FAT_PCT_HIGH_INTENSITY_SLOPE = 80.0
SUBSTRATE_LOW_INTENSITY_LIMIT = 0.65
SUBSTRATE_HIGH_INTENSITY_LIMIT = 0.85
MIN_SUBSTRATE_PCT = 5.0
MAX_SUBSTRATE_PCT = 95.0

# Fat oxidation rises during prolonged exercise — Ahlborg et al. (1974)
LONG_DURATION_FAT_SHIFT_START_MIN = 90.0
LONG_DURATION_FAT_SHIFT_SPAN_MIN = 90.0
LONG_DURATION_FAT_SHIFT_MAX_PCT = 20.0

# Stress rating thresholds: (rating, avg intensity %, duration min, glycogen %)
STRESS_RATING_THRESHOLDS = (
    (StressRating.EXTREME, 85.0, 300.0, 90.0),
    (StressRating.HIGH, 75.0, 180.0, 70.0),
    (StressRating.MODERATE, 65.0, 90.0, 40.0),
)

# ---------------------------------------------------------------------------
# Fueling — Jeukendrup (2014), 60-90 g/h carbohydrate for long events
# ---------------------------------------------------------------------------
FUELING_STRATEGY_BY_DURATION_MIN = (
    (60.0, FuelingStrategyType.MINIMAL),
    (90.0, FuelingStrategyType.LIGHT),
    (180.0, FuelingStrategyType.STRUCTURED),
)
FIRST_FEED_MIN = 15.0
FEED_INTERVAL_MIN = 17.5
GEL_CARBS_G = 22.0
CARB_KCAL_PER_G = 4.0
DEFAULT_MAX_CARBS_PER_HOUR = 60.0

# Post-ride recovery — Ivy (2004), carbs + protein at ~3:1
POST_RIDE_CARB_FRACTION = 0.30
POST_RIDE_CARB_PROTEIN_RATIO = 3.0

# Hydration — ACSM (2007), ~0.5-1 L/h
HYDRATION_ML_PER_MIN = 12.0
HYDRATION_SCALE_START_KCAL_PER_HOUR = 600.0
HYDRATION_SCALE_SPAN_KCAL_PER_HOUR = 400.0
MAX_HYDRATION_MULTIPLIER = 1.5
ELECTROLYTE_MIN_DURATION_MIN = 60.0

# Per-unit cost estimates (USD) for the shopping list
FUEL_UNIT_COST = {
    FuelType.GEL: 2.50,
    FuelType.DRINK: 1.50,
    FuelType.BAR: 3.00,
    FuelType.SOLID: 2.00,
    FuelType.ELECTROLYTES: 1.00,
}
