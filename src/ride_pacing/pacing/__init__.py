"""Pacing — strategy evaluation, plan assembly and re-derivation."""

from ride_pacing.pacing.adjustment import adjust_plan_intensity, recalculate_metrics
from ride_pacing.pacing.engine import PacingEngine, assemble_plan

__all__ = [
    "PacingEngine",
    "adjust_plan_intensity",
    "assemble_plan",
    "recalculate_metrics",
]
