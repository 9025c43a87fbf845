"""Energy conversion and substrate (carbohydrate / fat) utilization.

Pure functions. Mechanical work is converted to metabolic energy through a
fixed gross efficiency, then split between carbohydrate and fat by relative
intensity and duration.

References:
    Jeukendrup & Wallis (2005). Measurement of substrate oxidation during
        exercise by means of gas exchange measurements. Int J Sports Med 26.
    Romijn et al. (1993). Regulation of endogenous fat and carbohydrate
        metabolism in relation to exercise intensity and duration.
        Am J Physiol 265(3):E380-E391.
"""

from __future__ import annotations

from ride_pacing.models.enums import (
    FAT_PCT_HIGH_INTENSITY_BASE,
    FAT_PCT_HIGH_INTENSITY_SLOPE,
    FAT_PCT_LOW_INTENSITY_BASE,
    FAT_PCT_LOW_INTENSITY_SLOPE,
    FAT_PCT_MID_INTENSITY_BASE,
    FAT_PCT_MID_INTENSITY_SLOPE,
    GROSS_EFFICIENCY,
    KCAL_PER_KJ,
    LONG_DURATION_FAT_SHIFT_MAX_PCT,
    LONG_DURATION_FAT_SHIFT_SPAN_MIN,
    LONG_DURATION_FAT_SHIFT_START_MIN,
    MAX_SUBSTRATE_PCT,
    MIN_SUBSTRATE_PCT,
    SUBSTRATE_HIGH_INTENSITY_LIMIT,
    SUBSTRATE_LOW_INTENSITY_LIMIT,
)


def mechanical_work_kj(power: float, duration_s: float) -> float:
    return power * duration_s / 1000.0


def metabolic_calories(
    work_kj: float,
    gross_efficiency: float = GROSS_EFFICIENCY,
    kcal_per_kj: float = KCAL_PER_KJ,
) -> float:
    """Convert mechanical work to kcal burned.

    total energy (kJ) = work / gross efficiency; kcal = kJ * 0.239006.
    With ~22% efficiency this lands close to the 1 kJ ~ 1 kcal rule of thumb.
    """
    if gross_efficiency <= 0:
        return 0.0
    return work_kj / gross_efficiency * kcal_per_kj


def fat_percentage(
    intensity: float,
    duration_min: float = 0.0,
    shift_start_min: float = LONG_DURATION_FAT_SHIFT_START_MIN,
    shift_span_min: float = LONG_DURATION_FAT_SHIFT_SPAN_MIN,
    shift_max_pct: float = LONG_DURATION_FAT_SHIFT_MAX_PCT,
) -> float:
    """Share of calories from fat, in percent.

    Args:
        intensity: Power as a fraction of FTP.
        duration_min: Effort duration; beyond ``shift_start_min`` fat use
            rises linearly, reaching ``shift_max_pct`` extra points after
            ``shift_span_min`` more minutes.

    Returns:
        Fat percentage clamped to [5, 95].
    """
    if intensity < SUBSTRATE_LOW_INTENSITY_LIMIT:
        fat_pct = FAT_PCT_LOW_INTENSITY_BASE - intensity * FAT_PCT_LOW_INTENSITY_SLOPE
    elif intensity < SUBSTRATE_HIGH_INTENSITY_LIMIT:
        fat_pct = FAT_PCT_MID_INTENSITY_BASE - (
            intensity - SUBSTRATE_LOW_INTENSITY_LIMIT
        ) * FAT_PCT_MID_INTENSITY_SLOPE
    else:
        fat_pct = max(
            MIN_SUBSTRATE_PCT,
            FAT_PCT_HIGH_INTENSITY_BASE
            - (intensity - SUBSTRATE_HIGH_INTENSITY_LIMIT) * FAT_PCT_HIGH_INTENSITY_SLOPE,
        )

    if duration_min > shift_start_min and shift_span_min > 0:
        extra_min = duration_min - shift_start_min
        fat_pct += min(shift_max_pct, shift_max_pct * extra_min / shift_span_min)

    return min(MAX_SUBSTRATE_PCT, max(MIN_SUBSTRATE_PCT, fat_pct))


def carb_percentage(intensity: float, duration_min: float = 0.0, **shift) -> float:
    """Complement of :func:`fat_percentage`; also within [5, 95]."""
    return 100.0 - fat_percentage(intensity, duration_min, **shift)
