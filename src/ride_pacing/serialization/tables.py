"""Tabular exports: per-segment pacing rows, fuel-point rows, course points.

Rows are plain dicts; the ``*_csv`` helpers render them with pandas.
"""

from __future__ import annotations

from itertools import accumulate

import pandas as pd

from ride_pacing.models.energy import EnergyExpenditure
from ride_pacing.models.fueling import FuelingStrategy
from ride_pacing.models.pacing_plan import PacingPlan

PACING_COLUMNS = [
    "segment_index",
    "distance_km",
    "grade_pct",
    "target_power_w",
    "zone",
    "time_min",
    "calories",
    "carb_calories",
    "cumulative_time_min",
    "cumulative_distance_km",
    "strategy_note",
]

FUELING_COLUMNS = [
    "time_min",
    "segment_index",
    "fuel_type",
    "amount",
    "product",
    "reason",
    "intensity_pct",
]


def pacing_rows(plan: PacingPlan, energy: EnergyExpenditure | None = None) -> list[dict]:
    """One row per route segment.

    Calorie columns are 0 when no EnergyExpenditure is given.
    """
    cumulative_time = accumulate(p.estimated_time_min for p in plan.segments)
    cumulative_distance = accumulate(p.distance_km for p in plan.segments)
    energy_segments = energy.segments if energy is not None else ()

    rows = []
    for index, (paced, time_min, distance_km) in enumerate(
        zip(plan.segments, cumulative_time, cumulative_distance)
    ):
        seg_energy = energy_segments[index] if index < len(energy_segments) else None
        rows.append({
            "segment_index": index,
            "distance_km": paced.distance_km,
            "grade_pct": paced.grade * 100.0,
            "target_power_w": paced.target_power,
            "zone": paced.zone.name,
            "time_min": paced.estimated_time_min,
            "calories": seg_energy.total_calories if seg_energy else 0.0,
            "carb_calories": seg_energy.carb_calories if seg_energy else 0.0,
            "cumulative_time_min": time_min,
            "cumulative_distance_km": distance_km,
            "strategy_note": paced.strategy_note,
        })
    return rows


def fueling_rows(fueling: FuelingStrategy) -> list[dict]:
    return [
        {
            "time_min": point.time_min,
            "segment_index": point.segment_index,
            "fuel_type": point.fuel_type.name.lower(),
            "amount": point.amount,
            "product": point.product,
            "reason": point.reason,
            "intensity_pct": point.intensity_pct,
        }
        for point in fueling.schedule
    ]


def pacing_csv(
    plan: PacingPlan,
    energy: EnergyExpenditure | None = None,
    float_format: str = "%.2f",
) -> str:
    frame = pd.DataFrame(pacing_rows(plan, energy), columns=PACING_COLUMNS)
    return frame.to_csv(index=False, float_format=float_format)


def fueling_csv(fueling: FuelingStrategy, float_format: str = "%.1f") -> str:
    frame = pd.DataFrame(fueling_rows(fueling), columns=FUELING_COLUMNS)
    return frame.to_csv(index=False, float_format=float_format)


def course_points(plan: PacingPlan) -> list[dict]:
    """Target power by cumulative distance, for course-file exporters.

    One point per segment end. Coordinates come from the segment's end
    point when the route carries them, otherwise they are None.
    """
    points = []
    distances = accumulate(p.distance_km for p in plan.segments)
    for index, (paced, distance_km) in enumerate(zip(plan.segments, distances)):
        end = paced.segment.end_point
        points.append({
            "segment_index": index,
            "distance_km": distance_km,
            "target_power_w": paced.target_power,
            "zone": int(paced.zone.number),
            "latitude": end.latitude if end else None,
            "longitude": end.longitude if end else None,
        })
    return points
