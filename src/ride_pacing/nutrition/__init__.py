"""Nutrition — energy expenditure and fueling strategy for a pacing plan."""

from ride_pacing.nutrition.energy import EnergyCalculator
from ride_pacing.nutrition.fueling import FuelingGenerator

__all__ = ["EnergyCalculator", "FuelingGenerator"]
