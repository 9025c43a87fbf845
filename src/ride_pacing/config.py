"""Planner configuration — every tunable model constant, injected at construction.

Defaults come from ``ride_pacing.models.enums``. ``load_config_from_env()``
overrides a handful of them from ``RIDE_PACING_*`` environment variables.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field

from ride_pacing.models.enums import (
    AEROBIC_THRESHOLD_PCT_FTP,
    DESCENT_FLOOR_GRADE,
    DESCENT_MIN_POWER_PCT_FTP,
    ELECTROLYTE_MIN_DURATION_MIN,
    FATIGUE_EXPONENT,
    FATIGUE_STRESS_SCALE,
    FEED_INTERVAL_MIN,
    FIRST_FEED_MIN,
    FUEL_UNIT_COST,
    GEL_CARBS_G,
    GLYCOGEN_RISK_FRACTION,
    GLYCOGEN_STORE_KCAL,
    GROSS_EFFICIENCY,
    HYDRATION_ML_PER_MIN,
    HYDRATION_SCALE_SPAN_KCAL_PER_HOUR,
    HYDRATION_SCALE_START_KCAL_PER_HOUR,
    KCAL_PER_KJ,
    KEY_CLIMB_MIN_DISTANCE_KM,
    KEY_CLIMB_MIN_GRADE,
    KEY_DESCENT_MAX_GRADE,
    KEY_DESCENT_MIN_DISTANCE_KM,
    KEY_FUEL_MIN_DURATION_MIN,
    KEY_HIGH_INTENSITY_MIN_DURATION_MIN,
    KEY_HIGH_INTENSITY_PCT_FTP,
    KEY_SUSTAINED_MIN_DURATION_MIN,
    KEY_SUSTAINED_PCT_FTP,
    LONG_DURATION_FAT_SHIFT_MAX_PCT,
    LONG_DURATION_FAT_SHIFT_SPAN_MIN,
    LONG_DURATION_FAT_SHIFT_START_MIN,
    MAX_HYDRATION_MULTIPLIER,
    MAX_KEY_SEGMENTS,
    MAX_POWER_PCT_FTP,
    MIN_FATIGUE_MULTIPLIER,
    MIN_POWER_PCT_FTP,
    WARNING_LONG_RIDE_S,
    WARNING_MAX_TIME_ABOVE_FTP_S,
    WARNING_MAX_TSS,
    FuelType,
)


@dataclass(frozen=True)
class PacingConfig:
    """Fatigue, power-constraint, key-segment and warning parameters."""

    fatigue_stress_scale: float = FATIGUE_STRESS_SCALE
    fatigue_exponent: float = FATIGUE_EXPONENT
    min_fatigue_multiplier: float = MIN_FATIGUE_MULTIPLIER

    max_power_pct_ftp: float = MAX_POWER_PCT_FTP
    min_power_pct_ftp: float = MIN_POWER_PCT_FTP
    descent_min_power_pct_ftp: float = DESCENT_MIN_POWER_PCT_FTP
    descent_floor_grade: float = DESCENT_FLOOR_GRADE

    max_key_segments: int = MAX_KEY_SEGMENTS
    key_climb_min_grade: float = KEY_CLIMB_MIN_GRADE
    key_climb_min_distance_km: float = KEY_CLIMB_MIN_DISTANCE_KM
    key_descent_max_grade: float = KEY_DESCENT_MAX_GRADE
    key_descent_min_distance_km: float = KEY_DESCENT_MIN_DISTANCE_KM
    key_high_intensity_pct_ftp: float = KEY_HIGH_INTENSITY_PCT_FTP
    key_high_intensity_min_duration_min: float = KEY_HIGH_INTENSITY_MIN_DURATION_MIN
    key_sustained_min_duration_min: float = KEY_SUSTAINED_MIN_DURATION_MIN
    key_sustained_pct_ftp: float = KEY_SUSTAINED_PCT_FTP
    key_fuel_min_duration_min: float = KEY_FUEL_MIN_DURATION_MIN

    warning_max_tss: float = WARNING_MAX_TSS
    warning_max_time_above_ftp_s: float = WARNING_MAX_TIME_ABOVE_FTP_S
    warning_long_ride_s: float = WARNING_LONG_RIDE_S


@dataclass(frozen=True)
class EnergyConfig:
    gross_efficiency: float = GROSS_EFFICIENCY
    kcal_per_kj: float = KCAL_PER_KJ
    glycogen_store_kcal: float = GLYCOGEN_STORE_KCAL
    glycogen_risk_fraction: float = GLYCOGEN_RISK_FRACTION
    aerobic_threshold_pct_ftp: float = AEROBIC_THRESHOLD_PCT_FTP
    fat_shift_start_min: float = LONG_DURATION_FAT_SHIFT_START_MIN
    fat_shift_span_min: float = LONG_DURATION_FAT_SHIFT_SPAN_MIN
    fat_shift_max_pct: float = LONG_DURATION_FAT_SHIFT_MAX_PCT

    @property
    def glycogen_risk_kcal(self) -> float:
        return self.glycogen_store_kcal * self.glycogen_risk_fraction


@dataclass(frozen=True)
class FuelingConfig:
    first_feed_min: float = FIRST_FEED_MIN
    feed_interval_min: float = FEED_INTERVAL_MIN
    gel_carbs_g: float = GEL_CARBS_G
    hydration_ml_per_min: float = HYDRATION_ML_PER_MIN
    hydration_scale_start_kcal_per_hour: float = HYDRATION_SCALE_START_KCAL_PER_HOUR
    hydration_scale_span_kcal_per_hour: float = HYDRATION_SCALE_SPAN_KCAL_PER_HOUR
    max_hydration_multiplier: float = MAX_HYDRATION_MULTIPLIER
    electrolyte_min_duration_min: float = ELECTROLYTE_MIN_DURATION_MIN
    unit_costs: dict[FuelType, float] = field(default_factory=lambda: dict(FUEL_UNIT_COST))


@dataclass(frozen=True)
class PlannerConfig:
    pacing: PacingConfig = field(default_factory=PacingConfig)
    energy: EnergyConfig = field(default_factory=EnergyConfig)
    fueling: FuelingConfig = field(default_factory=FuelingConfig)


DEFAULT_CONFIG = PlannerConfig()

# env var -> (section, field)
_ENV_OVERRIDES = {
    "RIDE_PACING_FATIGUE_STRESS_SCALE": ("pacing", "fatigue_stress_scale"),
    "RIDE_PACING_MAX_KEY_SEGMENTS": ("pacing", "max_key_segments"),
    "RIDE_PACING_GROSS_EFFICIENCY": ("energy", "gross_efficiency"),
    "RIDE_PACING_GLYCOGEN_STORE_KCAL": ("energy", "glycogen_store_kcal"),
    "RIDE_PACING_FEED_INTERVAL_MIN": ("fueling", "feed_interval_min"),
    "RIDE_PACING_GEL_CARBS_G": ("fueling", "gel_carbs_g"),
}


def load_config_from_env(environ: dict[str, str] | None = None) -> PlannerConfig:
    """Build a PlannerConfig with overrides from ``RIDE_PACING_*`` variables.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``.

    Returns:
        A new PlannerConfig. Unset variables keep their defaults.

    Raises:
        ValueError: If a set variable does not parse as a number.
    """
    env = os.environ if environ is None else environ
    sections = {
        "pacing": DEFAULT_CONFIG.pacing,
        "energy": DEFAULT_CONFIG.energy,
        "fueling": DEFAULT_CONFIG.fueling,
    }
    for var, (section, name) in _ENV_OVERRIDES.items():
        raw = env.get(var, "")
        if not raw:
            continue
        current = sections[section]
        cast = int if isinstance(getattr(current, name), int) else float
        sections[section] = dataclasses.replace(current, **{name: cast(raw)})
    return PlannerConfig(**sections)
