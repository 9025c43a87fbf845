"""Fueling models — rider preferences and the generated fueling strategy."""

from __future__ import annotations

from dataclasses import dataclass, field

from ride_pacing.models.enums import (
    DEFAULT_MAX_CARBS_PER_HOUR,
    FuelingStrategyType,
    FuelType,
)


@dataclass(frozen=True)
class FuelingPreferences:
    max_carbs_per_hour: float = DEFAULT_MAX_CARBS_PER_HOUR
    fuel_types: tuple[FuelType, ...] = (
        FuelType.GEL,
        FuelType.DRINK,
        FuelType.BAR,
        FuelType.SOLID,
    )
    prefer_liquids: bool = False
    avoid_gluten: bool = False
    avoid_caffeine: bool = False


@dataclass(frozen=True)
class FuelPoint:
    """A single timed feed."""

    time_min: float               # minutes from the start
    segment_index: int
    fuel_type: FuelType
    amount: str
    product: str
    reason: str
    intensity_pct: float          # % of FTP at that time
    carbs_g: float = 0.0


@dataclass(frozen=True)
class PreRideFueling:
    timing: str
    carbs_amount: str
    examples: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PostRideFueling:
    timing: str
    carbs_g: float
    protein_g: float
    examples: tuple[str, ...] = field(default_factory=tuple)

    @property
    def carbs_amount(self) -> str:
        return f"{self.carbs_g:.0f}g carbs"

    @property
    def protein_amount(self) -> str:
        return f"{self.protein_g:.0f}g protein"


@dataclass(frozen=True)
class HydrationPlan:
    total_fluid_ml: float
    fluid_per_hour_ml: float
    schedule: str
    electrolytes_needed: bool
    recommendations: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ShoppingItem:
    fuel_type: FuelType
    quantity: int
    unit_cost: float

    @property
    def total_cost(self) -> float:
        return self.quantity * self.unit_cost


@dataclass(frozen=True)
class FuelingStrategy:
    """Timed fueling and hydration plan for one ride."""

    strategy_type: FuelingStrategyType
    recommendations: tuple[str, ...]
    schedule: tuple[FuelPoint, ...]
    pre_ride: PreRideFueling
    post_ride: PostRideFueling
    hydration: HydrationPlan
    warnings: tuple[str, ...] = field(default_factory=tuple)
    shopping_list: tuple[ShoppingItem, ...] = field(default_factory=tuple)

    @property
    def total_carbs_g(self) -> float:
        return sum(p.carbs_g for p in self.schedule)

    @property
    def shopping_total_cost(self) -> float:
        return sum(item.total_cost for item in self.shopping_list)
