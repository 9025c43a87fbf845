"""Data models for the pacing engine."""

from ride_pacing.models.energy import EnergyExpenditure, MetabolicSummary, SegmentEnergyData
from ride_pacing.models.enums import (
    DifficultyRating,
    FuelingStrategyType,
    FuelType,
    KeySegmentType,
    PacingStrategy,
    PowerZoneNumber,
    StressRating,
    TerrainType,
)
from ride_pacing.models.fueling import (
    FuelingPreferences,
    FuelingStrategy,
    FuelPoint,
    HydrationPlan,
    PostRideFueling,
    PreRideFueling,
    ShoppingItem,
)
from ride_pacing.models.pacing_plan import (
    KeySegment,
    PacedSegment,
    PacingPlan,
    PacingSummary,
    PowerZone,
)
from ride_pacing.models.race_plan import RacePlan
from ride_pacing.models.route import GeoWeatherPoint, RiderProfile, RouteSegment

__all__ = [
    "DifficultyRating",
    "EnergyExpenditure",
    "FuelPoint",
    "FuelType",
    "FuelingPreferences",
    "FuelingStrategy",
    "FuelingStrategyType",
    "GeoWeatherPoint",
    "HydrationPlan",
    "KeySegment",
    "KeySegmentType",
    "MetabolicSummary",
    "PacedSegment",
    "PacingPlan",
    "PacingStrategy",
    "PacingSummary",
    "PostRideFueling",
    "PowerZone",
    "PowerZoneNumber",
    "PreRideFueling",
    "RacePlan",
    "RiderProfile",
    "RouteSegment",
    "SegmentEnergyData",
    "ShoppingItem",
    "StressRating",
    "TerrainType",
]
