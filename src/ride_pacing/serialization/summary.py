"""Race-day summary — a printable text digest of pacing, energy and fueling."""

from __future__ import annotations

from ride_pacing.models.enums import POWER_ZONE_NAMES
from ride_pacing.models.race_plan import RacePlan

# Key segments listed in the summary; the plan may hold more
_MAX_LISTED_KEY_SEGMENTS = 5


def _format_duration(minutes: float) -> str:
    hours, mins = divmod(int(round(minutes)), 60)
    return f"{hours}h{mins:02d}" if hours else f"{mins}min"


def race_day_summary(race_plan: RacePlan) -> str:
    """Render a RacePlan as plain text for printing or pasting into notes."""
    plan = race_plan.pacing
    energy = race_plan.energy
    fueling = race_plan.fueling

    lines: list[str] = []
    lines.append(f"RACE DAY PLAN - {plan.strategy.label} pacing")
    lines.append(plan.strategy.description)
    lines.append("")
    lines.append(
        f"Distance: {plan.total_distance_km:.1f} km | "
        f"Time: {_format_duration(plan.total_time_min)} | "
        f"Start {plan.start_time:%H:%M} -> arrive {plan.estimated_arrival:%H:%M}"
    )
    if race_plan.rider is not None:
        lines.append(
            f"Rider: FTP {race_plan.rider.ftp_watts:.0f}W, "
            f"{race_plan.rider.power_to_weight:.2f} W/kg"
        )
    lines.append(
        f"Power: avg {plan.average_power:.0f}W | NP {plan.normalized_power:.0f}W | "
        f"VI {plan.variability_index:.2f} | IF {plan.intensity_factor:.2f} | "
        f"TSS {plan.estimated_tss:.0f} | {plan.difficulty.label}"
    )
    lines.append(f"Climbing: {plan.summary.total_elevation_m:.0f} m")

    if plan.summary.time_in_zones:
        lines.append("")
        lines.append("Time in zones:")
        for zone, minutes in plan.summary.time_in_zones.items():
            lines.append(f"  Z{int(zone)} {POWER_ZONE_NAMES[zone]:<10} {_format_duration(minutes)}")

    if plan.summary.key_segments:
        lines.append("")
        lines.append("Key segments:")
        for key in plan.summary.key_segments[:_MAX_LISTED_KEY_SEGMENTS]:
            lines.append(f"  #{key.segment_index + 1}: {key.description} - {key.recommendation}")

    lines.append("")
    lines.append(
        f"Energy: {energy.total_calories:.0f} kcal "
        f"({energy.total_carb_calories:.0f} carb / {energy.total_fat_calories:.0f} fat), "
        f"{energy.calories_per_hour:.0f} kcal/h, "
        f"stress {energy.metabolic_summary.stress_rating.name.lower()}"
    )

    lines.append("")
    lines.append(f"Fueling ({fueling.strategy_type.name.lower()}):")
    lines.append(
        f"  Before: {fueling.pre_ride.carbs_amount}, {fueling.pre_ride.timing}"
    )
    for point in fueling.schedule:
        lines.append(f"  {_format_duration(point.time_min):>6}  {point.amount} - {point.reason}")
    lines.append(
        f"  After: {fueling.post_ride.carbs_amount} + {fueling.post_ride.protein_amount}, "
        f"{fueling.post_ride.timing.lower()}"
    )
    lines.append(
        f"  Fluids: {fueling.hydration.total_fluid_ml:.0f} ml total ({fueling.hydration.schedule})"
        + (", with electrolytes" if fueling.hydration.electrolytes_needed else "")
    )

    warnings = plan.summary.warnings + fueling.warnings
    if warnings:
        lines.append("")
        lines.append("Warnings:")
        for warning in warnings:
            lines.append(f"  ! {warning}")

    return "\n".join(lines)
