"""RacePlanner — runs pacing, energy and fueling as one planning request."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import Sequence

from ride_pacing.config import PlannerConfig
from ride_pacing.math.time_model import TimeScaleModel, cube_root_time_scale
from ride_pacing.models.enums import PacingStrategy
from ride_pacing.models.fueling import FuelingPreferences
from ride_pacing.models.pacing_plan import PacingPlan
from ride_pacing.models.race_plan import RacePlan
from ride_pacing.models.route import RiderProfile, RouteSegment
from ride_pacing.nutrition.energy import EnergyCalculator
from ride_pacing.nutrition.fueling import FuelingGenerator
from ride_pacing.pacing.adjustment import adjust_plan_intensity
from ride_pacing.pacing.engine import PacingEngine

logger = logging.getLogger(__name__)


class RacePlanner:
    """Orchestrates PacingEngine -> EnergyCalculator -> FuelingGenerator.

    Energy and fueling are always regenerated from the pacing plan they
    belong to; nothing is cached between calls.

    Usage:
        planner = RacePlanner(RiderProfile(ftp_watts=250))
        race_plan = planner.generate(route_segments, PacingStrategy.BALANCED)
        harder = planner.adjust(race_plan, 5.0)
    """

    def __init__(
        self,
        rider: RiderProfile,
        config: PlannerConfig | None = None,
    ) -> None:
        self.rider = rider
        self.config = config or PlannerConfig()
        self.engine = PacingEngine(rider, self.config)
        self.energy_calculator = EnergyCalculator(self.config)
        self.fueling_generator = FuelingGenerator(self.config)

    def generate(
        self,
        route: Sequence[RouteSegment],
        strategy: PacingStrategy = PacingStrategy.BALANCED,
        start_time: datetime | None = None,
        preferences: FuelingPreferences | None = None,
    ) -> RacePlan:
        """Plan pacing for ``route``, then derive energy and fueling from it."""
        plan = self.engine.generate_plan(route, strategy, start_time)
        logger.info(
            "Generated %s plan: %d segments, %.1f km, %.0f min, NP %.0fW, IF %.2f, TSS %.0f",
            strategy.label,
            len(plan.segments),
            plan.total_distance_km,
            plan.total_time_min,
            plan.normalized_power,
            plan.intensity_factor,
            plan.estimated_tss,
        )
        return self._derive(plan, preferences or FuelingPreferences())

    def adjust(
        self,
        race_plan: RacePlan,
        percentage: float,
        time_scale: TimeScaleModel = cube_root_time_scale,
        reapply_constraints: bool = False,
    ) -> RacePlan:
        """Re-derive the pacing plan at ``percentage`` intensity and rebuild the rest.

        A 0% adjustment returns ``race_plan`` unchanged.
        """
        if percentage == 0:
            return race_plan
        plan = adjust_plan_intensity(
            race_plan.pacing,
            percentage,
            self.config.pacing,
            time_scale=time_scale,
            reapply_constraints=reapply_constraints,
        )
        logger.info(
            "Adjusted intensity by %+.1f%%: NP %.0fW -> %.0fW, time %.0f -> %.0f min",
            percentage,
            race_plan.pacing.normalized_power,
            plan.normalized_power,
            race_plan.pacing.total_time_min,
            plan.total_time_min,
        )
        return self._derive(plan, race_plan.preferences)

    def refuel(self, race_plan: RacePlan, preferences: FuelingPreferences) -> RacePlan:
        """Regenerate fueling for new preferences; pacing and energy are unchanged."""
        fueling = self.fueling_generator.generate(race_plan.energy, preferences)
        return dataclasses.replace(race_plan, fueling=fueling, preferences=preferences)

    def _derive(self, plan: PacingPlan, preferences: FuelingPreferences) -> RacePlan:
        for warning in plan.summary.warnings:
            logger.debug("Pacing warning: %s", warning)

        energy = self.energy_calculator.calculate(plan)
        logger.info(
            "Energy: %.0f kcal (%.0f carb), %.0f kcal/h, glycogen risk=%s",
            energy.total_calories,
            energy.total_carb_calories,
            energy.calories_per_hour,
            energy.glycogen_depletion_risk,
        )

        fueling = self.fueling_generator.generate(energy, preferences)
        logger.info(
            "Fueling: %s strategy, %d feed points, %.0fml fluids",
            fueling.strategy_type.name.lower(),
            len(fueling.schedule),
            fueling.hydration.total_fluid_ml,
        )
        for warning in fueling.warnings:
            logger.debug("Fueling warning: %s", warning)

        return RacePlan(
            pacing=plan,
            energy=energy,
            fueling=fueling,
            preferences=preferences,
            rider=self.rider,
        )
