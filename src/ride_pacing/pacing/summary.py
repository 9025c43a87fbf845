"""Plan summary: per-segment strategy notes, time in zones, warnings."""

from __future__ import annotations

from typing import Sequence

from ride_pacing.config import PacingConfig
from ride_pacing.math.training_load import sustainable_intensity_factor
from ride_pacing.models.enums import PacingStrategy, PowerZoneNumber
from ride_pacing.models.pacing_plan import PacedSegment, PacingSummary, PowerZone
from ride_pacing.pacing.key_segments import identify_key_segments

# Grade bounds for the per-segment strategy note
_STEEP_CLIMB_GRADE = 0.08
_CLIMB_GRADE = 0.04
_DESCENT_GRADE = -0.05


def strategy_note(grade: float, zone: PowerZone, strategy: PacingStrategy) -> str:
    """Short cue shown next to a segment's target power."""
    if grade > _STEEP_CLIMB_GRADE:
        return f"Steep climb - steady {zone.name.lower()} effort"
    if grade > _CLIMB_GRADE:
        return f"Climbing - {zone.name.lower()} pace"
    if grade < _DESCENT_GRADE:
        return "Descent - recovery/positioning"
    return f"{zone.name} - {strategy.label.lower()} pacing"


def zone_minutes(segments: Sequence[PacedSegment]) -> tuple[float, ...]:
    """Minutes per zone, one slot per PowerZoneNumber in zone order."""
    minutes = [0.0] * len(PowerZoneNumber)
    for paced in segments:
        minutes[paced.zone.number - 1] += paced.estimated_time_min
    return tuple(minutes)


def total_elevation_gain(segments: Sequence[PacedSegment]) -> float:
    return sum(paced.segment.elevation_gain_m for paced in segments)


def generate_warnings(
    segments: Sequence[PacedSegment],
    ftp: float,
    normalized_power: float,
    config: PacingConfig | None = None,
) -> tuple[str, ...]:
    """Plan-level warnings.

    Checks, in order: IF above the sustainable ceiling for the ride length,
    total TSS, time above FTP, and overall ride length. No warnings when
    FTP <= 0.
    """
    cfg = config or PacingConfig()
    if ftp <= 0 or not segments:
        return ()

    total_tss = segments[-1].cumulative_stress
    total_time_s = sum(paced.estimated_time_s for paced in segments)
    duration_hours = total_time_s / 3600.0
    intensity_factor = normalized_power / ftp

    warnings: list[str] = []
    if intensity_factor > sustainable_intensity_factor(duration_hours):
        warnings.append(
            f"Intensity Factor ({intensity_factor:.2f}) may be unsustainable "
            f"for {duration_hours:.1f} hours"
        )
    if total_tss > cfg.warning_max_tss:
        warnings.append(
            f"Very high training load (TSS {int(total_tss)}) - ensure adequate recovery"
        )

    above_ftp_s = sum(p.estimated_time_s for p in segments if p.target_power > ftp)
    if above_ftp_s > cfg.warning_max_time_above_ftp_s:
        warnings.append("Extended time above FTP - monitor for early fatigue")
    if total_time_s > cfg.warning_long_ride_s:
        warnings.append("Long duration ride - plan nutrition and hydration carefully")

    return tuple(warnings)


def build_summary(
    segments: Sequence[PacedSegment],
    ftp: float,
    normalized_power: float,
    config: PacingConfig | None = None,
) -> PacingSummary:
    return PacingSummary(
        total_elevation_m=total_elevation_gain(segments),
        zone_minutes=zone_minutes(segments),
        key_segments=identify_key_segments(segments, ftp, config),
        warnings=generate_warnings(segments, ftp, normalized_power, config),
    )
