"""Pacing strategy evaluation: one segment's target power under a strategy.

Order of operations:
    1. Fatigue: the base power is scaled by the TSS-driven fatigue multiplier.
    2. Terrain: climbs are pushed, descents and flats eased (every strategy
       except EVEN_EFFORT).
    3. Strategy: a multiplier from the strategy and the ride progress.

The result is the pre-constraint target; ``constrain_power`` applies the
FTP-relative floor and ceiling.
"""

from __future__ import annotations

from dataclasses import dataclass

from ride_pacing.config import PacingConfig
from ride_pacing.math.training_load import fatigue_multiplier
from ride_pacing.models.enums import (
    AGGRESSIVE_FINISH_MULTIPLIER,
    AGGRESSIVE_PHASES,
    CLIMB_BOOST_PER_GRADE,
    CONSERVATIVE_MULTIPLIER,
    DESCENT_POWER_MULTIPLIER,
    EVEN_EFFORT_CLIMB_STEPS,
    EVEN_EFFORT_DESCENT_STEPS,
    FLAT_POWER_MULTIPLIER,
    MAX_CLIMB_BOOST,
    NEGATIVE_SPLIT_RAMP,
    NEGATIVE_SPLIT_START,
    TERRAIN_CLIMB_GRADE,
    TERRAIN_DESCENT_GRADE,
    PacingStrategy,
)


@dataclass(frozen=True)
class SegmentContext:
    """Where a segment sits in the ride when its power is evaluated."""

    grade: float
    progress: float               # segment index / segment count, in [0, 1)
    cumulative_stress: float      # TSS accumulated before this segment


def terrain_multiplier(grade: float) -> float:
    """Climb boost (capped at +18%), descent and flat easing."""
    if grade > TERRAIN_CLIMB_GRADE:
        return min(MAX_CLIMB_BOOST, 1.0 + grade * CLIMB_BOOST_PER_GRADE)
    if grade < TERRAIN_DESCENT_GRADE:
        return DESCENT_POWER_MULTIPLIER
    return FLAT_POWER_MULTIPLIER


def even_effort_multiplier(grade: float) -> float:
    for min_grade, multiplier in EVEN_EFFORT_CLIMB_STEPS:
        if grade > min_grade:
            return multiplier
    for max_grade, multiplier in EVEN_EFFORT_DESCENT_STEPS:
        if grade < max_grade:
            return multiplier
    return 1.0


def strategy_multiplier(strategy: PacingStrategy, progress: float) -> float:
    """Strategy-specific shaping applied on top of terrain shaping.

    EVEN_EFFORT has no multiplier here; it replaces terrain shaping instead.
    """
    if strategy == PacingStrategy.AGGRESSIVE:
        for upper_progress, multiplier in AGGRESSIVE_PHASES:
            if progress < upper_progress:
                return multiplier
        return AGGRESSIVE_FINISH_MULTIPLIER
    if strategy == PacingStrategy.CONSERVATIVE:
        return CONSERVATIVE_MULTIPLIER
    if strategy == PacingStrategy.NEGATIVE_SPLIT:
        return NEGATIVE_SPLIT_START + progress * NEGATIVE_SPLIT_RAMP
    return 1.0


def evaluate_target_power(
    base_power: float,
    strategy: PacingStrategy,
    context: SegmentContext,
    config: PacingConfig | None = None,
) -> float:
    """Pre-constraint target power for one segment.

    Args:
        base_power: Power required to ride the segment at nominal speed (W).
        strategy: Pacing strategy for the whole plan.
        context: Grade, ride progress and accumulated stress.
        config: Fatigue parameters; defaults to PacingConfig().

    Returns:
        Target power in watts, before the FTP floor/ceiling.
    """
    cfg = config or PacingConfig()
    power = base_power * fatigue_multiplier(
        context.cumulative_stress,
        stress_scale=cfg.fatigue_stress_scale,
        exponent=cfg.fatigue_exponent,
        floor=cfg.min_fatigue_multiplier,
    )

    if strategy == PacingStrategy.EVEN_EFFORT:
        return power * even_effort_multiplier(context.grade)

    power *= terrain_multiplier(context.grade)
    return power * strategy_multiplier(strategy, context.progress)


def power_bounds(ftp: float, grade: float, config: PacingConfig | None = None) -> tuple[float, float]:
    """(floor, ceiling) for a segment; steep descents get the lower floor."""
    cfg = config or PacingConfig()
    floor_pct = (
        cfg.descent_min_power_pct_ftp
        if grade < cfg.descent_floor_grade
        else cfg.min_power_pct_ftp
    )
    return ftp * floor_pct, ftp * cfg.max_power_pct_ftp


def constrain_power(
    power: float,
    ftp: float,
    grade: float,
    config: PacingConfig | None = None,
) -> float:
    floor, ceiling = power_bounds(ftp, grade, config)
    return min(ceiling, max(floor, power))
