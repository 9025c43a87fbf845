"""RacePlan — a pacing plan with the energy and fueling derived from it."""

from __future__ import annotations

from dataclasses import dataclass

from ride_pacing.models.energy import EnergyExpenditure
from ride_pacing.models.fueling import FuelingPreferences, FuelingStrategy
from ride_pacing.models.pacing_plan import PacingPlan
from ride_pacing.models.route import RiderProfile


@dataclass(frozen=True)
class RacePlan:
    """Output of RacePlanner.generate(). Downstream parts always match ``pacing``."""

    pacing: PacingPlan
    energy: EnergyExpenditure
    fueling: FuelingStrategy
    preferences: FuelingPreferences
    rider: RiderProfile | None = None
