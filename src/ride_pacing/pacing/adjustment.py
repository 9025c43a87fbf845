"""Plan re-derivation: uniform intensity adjustment and metric refresh.

Both functions return a new PacingPlan; the input plan is never modified.
"""

from __future__ import annotations

import dataclasses
from datetime import timedelta

from ride_pacing.config import PacingConfig
from ride_pacing.math.time_model import TimeScaleModel, cube_root_time_scale
from ride_pacing.math.training_load import (
    calculate_ride_metrics,
    classify_difficulty,
    segment_tss,
)
from ride_pacing.math.zones import calculate_power_zones, classify_power
from ride_pacing.models.enums import MIN_RESCALE_POWER_RATIO
from ride_pacing.models.pacing_plan import PacedSegment, PacingPlan
from ride_pacing.pacing.strategy import constrain_power
from ride_pacing.pacing.summary import build_summary, strategy_note


def recalculate_metrics(plan: PacingPlan) -> PacingPlan:
    """Refresh average power, NP, IF, TSS, difficulty, total time and arrival.

    All power metrics come from the 1 Hz sample stream, so average power and
    TSS use rounded per-segment sample counts rather than raw segment times.
    """
    powers = [p.target_power for p in plan.segments]
    times = [p.estimated_time_s for p in plan.segments]
    metrics = calculate_ride_metrics(powers, times, plan.ftp)
    total_time_s = sum(times)

    return dataclasses.replace(
        plan,
        total_time_min=total_time_s / 60.0,
        average_power=metrics.average_power,
        normalized_power=metrics.normalized_power,
        intensity_factor=metrics.intensity_factor,
        estimated_tss=metrics.tss,
        difficulty=classify_difficulty(metrics.tss, metrics.intensity_factor),
        estimated_arrival=plan.start_time + timedelta(seconds=total_time_s),
    )


def adjust_plan_intensity(
    plan: PacingPlan,
    percentage: float,
    config: PacingConfig | None = None,
    time_scale: TimeScaleModel = cube_root_time_scale,
    reapply_constraints: bool = False,
) -> PacingPlan:
    """Scale every segment's target power by ``1 + percentage / 100``.

    Segment times are rescaled with ``time_scale`` (power ratio -> time
    ratio) when the power ratio exceeds 0.1. Zones, cumulative stress,
    power ratios and the summary are rebuilt, then the metrics are refreshed.

    Args:
        plan: Plan to re-derive.
        percentage: Uniform adjustment, e.g. 5 for +5%, -3 for -3%.
        config: Constraint and summary parameters.
        time_scale: Power/time relationship; the default cube-root model is
            an approximation, so +x% followed by -x% is not an exact inverse.
        reapply_constraints: Clamp the scaled power to the FTP floor/ceiling.
            Off by default; scaled powers may leave the bounds.

    Returns:
        A new plan, or ``plan`` itself when ``percentage`` is 0.
    """
    if percentage == 0:
        return plan

    cfg = config or PacingConfig()
    multiplier = 1.0 + percentage / 100.0
    zones = calculate_power_zones(plan.ftp)

    cumulative_stress = 0.0
    adjusted: list[PacedSegment] = []
    for paced in plan.segments:
        power = paced.target_power * multiplier
        if reapply_constraints:
            power = constrain_power(power, plan.ftp, paced.grade, cfg)

        time_s = paced.estimated_time_s
        power_ratio = power / paced.target_power if paced.target_power > 0 else 0.0
        if power_ratio > MIN_RESCALE_POWER_RATIO:
            time_s *= time_scale(power_ratio)

        zone = classify_power(power, zones)
        cumulative_stress += segment_tss(power, time_s, plan.ftp)
        base_power = paced.segment.power_required_w
        adjusted.append(
            dataclasses.replace(
                paced,
                target_power=power,
                estimated_time_s=time_s,
                zone=zone,
                cumulative_stress=cumulative_stress,
                strategy_note=strategy_note(paced.grade, zone, plan.strategy),
                power_ratio=power / base_power if base_power > 0 else 0.0,
            )
        )

    segments = tuple(adjusted)
    refreshed = recalculate_metrics(dataclasses.replace(plan, segments=segments))
    return dataclasses.replace(
        refreshed,
        summary=build_summary(segments, plan.ftp, refreshed.normalized_power, cfg),
    )
