"""Fueling strategy generation from an EnergyExpenditure.

Feed points are due at 15 min and then every 17.5 min. Every feed is a
22 g carbohydrate gel; rider preferences shape the recommendations and
warnings but not the product choice.

Reference:
    Jeukendrup (2014). A step towards personalized sports nutrition:
    carbohydrate intake during exercise. Sports Med 44(Suppl 1):S25-S33.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Sequence

from ride_pacing.config import FuelingConfig, PlannerConfig
from ride_pacing.models.energy import EnergyExpenditure, SegmentEnergyData
from ride_pacing.models.enums import (
    CARB_KCAL_PER_G,
    FUELING_STRATEGY_BY_DURATION_MIN,
    POST_RIDE_CARB_FRACTION,
    POST_RIDE_CARB_PROTEIN_RATIO,
    FuelingStrategyType,
    FuelType,
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

# Intensity (% FTP) bands for the feed reason text
_HARD_EFFORT_PCT = 85.0
_TEMPO_EFFORT_PCT = 65.0

_STRATEGY_RECOMMENDATIONS: dict[FuelingStrategyType, tuple[str, ...]] = {
    FuelingStrategyType.MINIMAL: (
        "Short ride: water is enough, a gel is optional",
        "Eat a normal meal 2-3 hours before the start",
    ),
    FuelingStrategyType.LIGHT: (
        "Start fueling after 15 minutes and keep to the schedule",
        "Carry one bottle of water or drink mix",
    ),
    FuelingStrategyType.STRUCTURED: (
        "Fuel early and often; do not wait until you feel hungry",
        "Aim for 60g of carbohydrate per hour",
        "Practice this fueling plan on training rides",
    ),
    FuelingStrategyType.COMPREHENSIVE: (
        "Fuel from the first 15 minutes; late fueling cannot catch up",
        "Aim for 60-90g of carbohydrate per hour from mixed sources",
        "Plan refill points for bottles and food",
        "Add some solid food in the first half while intensity is lower",
    ),
}

_PRE_RIDE: dict[FuelingStrategyType, PreRideFueling] = {
    FuelingStrategyType.MINIMAL: PreRideFueling(
        timing="1-2 hours before",
        carbs_amount="30-50g carbs",
        examples=("Banana", "Toast with honey"),
    ),
    FuelingStrategyType.LIGHT: PreRideFueling(
        timing="2 hours before",
        carbs_amount="50-80g carbs",
        examples=("Oatmeal with fruit", "Bagel with jam"),
    ),
    FuelingStrategyType.STRUCTURED: PreRideFueling(
        timing="2-3 hours before",
        carbs_amount="80-120g carbs",
        examples=("Oatmeal with banana and honey", "Rice with eggs", "Pancakes with syrup"),
    ),
    FuelingStrategyType.COMPREHENSIVE: PreRideFueling(
        timing="3 hours before, plus a snack 30 minutes before",
        carbs_amount="120-150g carbs",
        examples=("Large oatmeal bowl with fruit", "Pasta or rice meal", "Gel 15 minutes before the start"),
    ),
}


def select_strategy_type(duration_min: float) -> FuelingStrategyType:
    for max_minutes, strategy_type in FUELING_STRATEGY_BY_DURATION_MIN:
        if duration_min < max_minutes:
            return strategy_type
    return FuelingStrategyType.COMPREHENSIVE


def feed_times(duration_min: float, config: FuelingConfig | None = None) -> list[float]:
    """Nominal feed times (minutes) up to and including ``duration_min``."""
    cfg = config or FuelingConfig()
    if cfg.feed_interval_min <= 0:
        return [cfg.first_feed_min] if duration_min >= cfg.first_feed_min else []
    times: list[float] = []
    count = 0
    time_min = cfg.first_feed_min
    while time_min <= duration_min:
        times.append(time_min)
        count += 1
        time_min = cfg.first_feed_min + count * cfg.feed_interval_min
    return times


def _segment_at(segments: Sequence[SegmentEnergyData], time_min: float) -> SegmentEnergyData:
    """Segment being ridden at ``time_min``; the last one at the finish."""
    elapsed_min = 0.0
    for segment in segments:
        elapsed_min += segment.duration_min
        if time_min < elapsed_min:
            return segment
    return segments[-1]


def _feed_reason(intensity_pct: float) -> str:
    if intensity_pct >= _HARD_EFFORT_PCT:
        return "Hard effort - top up carbohydrate before glycogen drops"
    if intensity_pct >= _TEMPO_EFFORT_PCT:
        return "Tempo effort - keep carbohydrate intake steady"
    return "Endurance pace - easy time to eat and drink"


class FuelingGenerator:
    """Builds a FuelingStrategy for one EnergyExpenditure.

    Usage:
        fueling = FuelingGenerator().generate(energy, FuelingPreferences())
    """

    def __init__(self, config: PlannerConfig | None = None) -> None:
        self.config: FuelingConfig = (config or PlannerConfig()).fueling

    def generate(
        self,
        energy: EnergyExpenditure,
        preferences: FuelingPreferences | None = None,
    ) -> FuelingStrategy:
        prefs = preferences or FuelingPreferences()
        duration_min = energy.total_duration_min
        strategy_type = select_strategy_type(duration_min)
        schedule = self.build_schedule(energy)
        hydration = self.build_hydration(energy)

        return FuelingStrategy(
            strategy_type=strategy_type,
            recommendations=self._recommendations(strategy_type, prefs),
            schedule=schedule,
            pre_ride=_PRE_RIDE[strategy_type],
            post_ride=self.build_post_ride(energy),
            hydration=hydration,
            warnings=self._warnings(energy, schedule, prefs),
            shopping_list=self.build_shopping_list(schedule, hydration, duration_min),
        )

    def build_schedule(self, energy: EnergyExpenditure) -> tuple[FuelPoint, ...]:
        """One gel per due feed time, attributed to the segment being ridden."""
        if not energy.segments:
            return ()
        cfg = self.config
        points: list[FuelPoint] = []
        # TODO: pick fuel type from FuelingPreferences.fuel_types instead of always gels
        for time_min in feed_times(energy.total_duration_min, cfg):
            segment = _segment_at(energy.segments, time_min)
            points.append(
                FuelPoint(
                    time_min=time_min,
                    segment_index=segment.segment_index,
                    fuel_type=FuelType.GEL,
                    amount=f"1 gel ({cfg.gel_carbs_g:.0f}g carbs)",
                    product="Energy gel",
                    reason=_feed_reason(segment.intensity_pct),
                    intensity_pct=segment.intensity_pct,
                    carbs_g=cfg.gel_carbs_g,
                )
            )
        return tuple(points)

    def build_post_ride(self, energy: EnergyExpenditure) -> PostRideFueling:
        carbs_g = POST_RIDE_CARB_FRACTION * energy.total_carb_calories / CARB_KCAL_PER_G
        return PostRideFueling(
            timing="Within 30 minutes of finishing",
            carbs_g=carbs_g,
            protein_g=carbs_g / POST_RIDE_CARB_PROTEIN_RATIO,
            examples=("Recovery shake", "Chocolate milk", "Rice bowl with chicken"),
        )

    def build_hydration(self, energy: EnergyExpenditure) -> HydrationPlan:
        """Fluid volume from duration, scaled up to 1.5x for high burn rates."""
        cfg = self.config
        duration_min = energy.total_duration_min
        scale = 1.0
        if cfg.hydration_scale_span_kcal_per_hour > 0:
            scale = 1.0 + (
                energy.calories_per_hour - cfg.hydration_scale_start_kcal_per_hour
            ) / cfg.hydration_scale_span_kcal_per_hour
        scale = min(cfg.max_hydration_multiplier, max(1.0, scale))

        total_ml = duration_min * cfg.hydration_ml_per_min * scale
        per_hour_ml = total_ml / (duration_min / 60.0) if duration_min > 0 else 0.0
        electrolytes = duration_min > cfg.electrolyte_min_duration_min

        recommendations = ["Start the ride well hydrated (500ml in the 2 hours before)"]
        if electrolytes:
            recommendations.append("Add electrolytes to at least one bottle per hour")
        if scale > 1.0:
            recommendations.append("High energy demand: drink more than usual, especially on climbs")

        return HydrationPlan(
            total_fluid_ml=total_ml,
            fluid_per_hour_ml=per_hour_ml,
            schedule=f"{per_hour_ml / 4:.0f}ml every 15 minutes",
            electrolytes_needed=electrolytes,
            recommendations=tuple(recommendations),
        )

    def build_shopping_list(
        self,
        schedule: Sequence[FuelPoint],
        hydration: HydrationPlan,
        duration_min: float,
    ) -> tuple[ShoppingItem, ...]:
        """Tally fuel by type; one electrolyte serving per started hour when needed."""
        counts = Counter(point.fuel_type for point in schedule)
        if hydration.electrolytes_needed:
            counts[FuelType.ELECTROLYTES] += math.ceil(duration_min / 60.0)
        return tuple(
            ShoppingItem(
                fuel_type=fuel_type,
                quantity=counts[fuel_type],
                unit_cost=self.config.unit_costs.get(fuel_type, 0.0),
            )
            for fuel_type in FuelType
            if counts[fuel_type] > 0
        )

    def _recommendations(
        self,
        strategy_type: FuelingStrategyType,
        prefs: FuelingPreferences,
    ) -> tuple[str, ...]:
        recommendations = list(_STRATEGY_RECOMMENDATIONS[strategy_type])
        if prefs.prefer_liquids:
            recommendations.append("Drink mix can replace some gels if you prefer liquids")
        if prefs.avoid_gluten:
            recommendations.append("Check that gels and bars are gluten-free")
        if prefs.avoid_caffeine:
            recommendations.append("Choose caffeine-free gels")
        return tuple(recommendations)

    def _warnings(
        self,
        energy: EnergyExpenditure,
        schedule: Sequence[FuelPoint],
        prefs: FuelingPreferences,
    ) -> tuple[str, ...]:
        warnings: list[str] = []
        hours = energy.total_duration_min / 60.0
        if schedule and hours > 0:
            carbs_per_hour = sum(p.carbs_g for p in schedule) / hours
            if carbs_per_hour > prefs.max_carbs_per_hour:
                warnings.append(
                    f"Planned intake ({carbs_per_hour:.0f}g/h) exceeds your limit of "
                    f"{prefs.max_carbs_per_hour:.0f}g/h - skip a gel if your gut complains"
                )
        if schedule and FuelType.GEL not in prefs.fuel_types:
            warnings.append("Schedule uses gels, which are not among your preferred fuel types")
        if energy.glycogen_depletion_risk:
            warnings.append("High glycogen depletion risk - do not skip scheduled feeds")
        return tuple(warnings)
