"""Pacing plan models — paced segments, zones, summary and the plan itself."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ride_pacing.models.enums import (
    DifficultyRating,
    KeySegmentType,
    PacingStrategy,
    PowerZoneNumber,
)
from ride_pacing.models.route import RouteSegment


@dataclass(frozen=True)
class PowerZone:
    """A power band: lower bound inclusive, upper bound exclusive (watts)."""

    number: PowerZoneNumber
    name: str
    min_power: float
    max_power: float
    color: str = ""

    def contains(self, power: float) -> bool:
        return self.min_power <= power < self.max_power


@dataclass(frozen=True)
class PacedSegment:
    """A route segment with its target power and estimated riding time."""

    segment: RouteSegment
    target_power: float
    estimated_time_s: float
    zone: PowerZone
    cumulative_stress: float     # TSS up to and including this segment
    strategy_note: str
    power_ratio: float           # target power / base required power

    @property
    def distance_km(self) -> float:
        return self.segment.distance_km

    @property
    def grade(self) -> float:
        return self.segment.grade

    @property
    def estimated_time_min(self) -> float:
        return self.estimated_time_s / 60.0


@dataclass(frozen=True)
class KeySegment:
    """A segment worth calling out to the rider."""

    segment_index: int
    segment_type: KeySegmentType
    description: str
    recommendation: str


@dataclass(frozen=True)
class PacingSummary:
    """Plan-level digest.

    ``zone_minutes`` holds minutes per zone, one slot per PowerZoneNumber in
    zone order.
    """

    total_elevation_m: float = 0.0
    zone_minutes: tuple[float, ...] = (0.0,) * len(PowerZoneNumber)
    key_segments: tuple[KeySegment, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def time_in_zones(self) -> dict[PowerZoneNumber, float]:
        """Minutes per zone in zone order; zones with no time are left out."""
        return {
            zone: minutes
            for zone, minutes in zip(PowerZoneNumber, self.zone_minutes)
            if minutes > 0
        }


@dataclass(frozen=True)
class PacingPlan:
    """Output of PacingEngine.generate_plan().

    Segments are distance-ordered and cover the route exactly once, so
    ``total_distance_km`` and ``total_time_min`` are sums over segments.
    Never mutated: intensity adjustments build a new plan.
    """

    segments: tuple[PacedSegment, ...]
    strategy: PacingStrategy
    total_time_min: float
    total_distance_km: float
    average_power: float
    normalized_power: float
    intensity_factor: float
    estimated_tss: float
    difficulty: DifficultyRating
    start_time: datetime
    estimated_arrival: datetime
    ftp: float
    summary: PacingSummary = field(default_factory=PacingSummary)

    @property
    def total_time_s(self) -> float:
        return self.total_time_min * 60.0

    @property
    def variability_index(self) -> float:
        """NP / average power; 0 for an empty plan."""
        if self.average_power <= 0:
            return 0.0
        return self.normalized_power / self.average_power
