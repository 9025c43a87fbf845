"""Energy expenditure models produced by the EnergyCalculator."""

from __future__ import annotations

from dataclasses import dataclass, field

from ride_pacing.models.enums import StressRating


@dataclass(frozen=True)
class SegmentEnergyData:
    """Energy burned on one paced segment, with running totals."""

    segment_index: int
    duration_s: float
    power: float
    intensity_pct: float          # % of FTP
    mechanical_work_kj: float
    total_calories: float
    carb_calories: float
    fat_calories: float
    carb_pct: float
    cumulative_calories: float
    cumulative_carb_calories: float
    remaining_glycogen_kcal: float   # floored at 0

    @property
    def duration_min(self) -> float:
        return self.duration_s / 60.0


@dataclass(frozen=True)
class MetabolicSummary:
    average_intensity_pct: float = 0.0        # duration-weighted % of FTP
    time_above_threshold_min: float = 0.0     # minutes above the aerobic threshold
    fat_burning_efficiency_pct: float = 0.0   # fat share of total calories
    glycogen_utilization_pct: float = 0.0     # carb calories vs. glycogen store
    stress_rating: StressRating = StressRating.LOW


@dataclass(frozen=True)
class EnergyExpenditure:
    """Per-segment and whole-ride energy for one pacing plan."""

    segments: tuple[SegmentEnergyData, ...] = field(default_factory=tuple)
    total_calories: float = 0.0
    total_carb_calories: float = 0.0
    total_fat_calories: float = 0.0
    calories_per_hour: float = 0.0
    glycogen_depletion_risk: bool = False
    metabolic_summary: MetabolicSummary = field(default_factory=MetabolicSummary)

    @property
    def total_duration_min(self) -> float:
        return sum(s.duration_s for s in self.segments) / 60.0

    @property
    def total_work_kj(self) -> float:
        return sum(s.mechanical_work_kj for s in self.segments)
