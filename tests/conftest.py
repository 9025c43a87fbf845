"""Shared test fixtures: riders, route segments, hand-built paced segments."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import pytest

from ride_pacing.math.training_load import segment_tss
from ride_pacing.math.zones import calculate_power_zones, classify_power
from ride_pacing.models.enums import PacingStrategy, TerrainType
from ride_pacing.models.pacing_plan import PacedSegment, PacingPlan
from ride_pacing.models.route import RiderProfile, RouteSegment
from ride_pacing.pacing.engine import assemble_plan

FTP = 250.0
START = datetime(2026, 6, 6, 7, 30)


def _terrain_for(grade: float) -> TerrainType:
    if grade > 0.02:
        return TerrainType.CLIMB
    if grade < -0.02:
        return TerrainType.DESCENT
    return TerrainType.FLAT


@pytest.fixture
def rider() -> RiderProfile:
    """Trained amateur: FTP 250 W, 75 kg."""
    return RiderProfile(ftp_watts=FTP, body_mass_kg=75.0)


@pytest.fixture
def start_time() -> datetime:
    return START


@pytest.fixture
def make_segment() -> Callable[..., RouteSegment]:
    """Factory for route segments; defaults to 1 km flat at 200 W for 2 min."""

    def _make(
        distance_m: float = 1000.0,
        grade: float = 0.0,
        time_s: float = 120.0,
        power: float = 200.0,
    ) -> RouteSegment:
        return RouteSegment(
            distance_m=distance_m,
            grade=grade,
            time_s=time_s,
            power_required_w=power,
            terrain=_terrain_for(grade),
            speed_mps=distance_m / time_s if time_s > 0 else 0.0,
        )

    return _make


@pytest.fixture
def flat_route(make_segment) -> list[RouteSegment]:
    """Ten 3 km flat segments, 6 min each at 200 W (60 min nominal)."""
    return [make_segment(distance_m=3000.0, time_s=360.0) for _ in range(10)]


@pytest.fixture
def hilly_route(make_segment) -> list[RouteSegment]:
    """Flat approach, a 6% climb, a steep descent and a rolling finish."""
    return [
        make_segment(distance_m=5000.0, grade=0.0, time_s=540.0, power=190.0),
        make_segment(distance_m=3000.0, grade=0.06, time_s=900.0, power=240.0),
        make_segment(distance_m=2000.0, grade=0.08, time_s=720.0, power=260.0),
        make_segment(distance_m=4000.0, grade=-0.06, time_s=300.0, power=90.0),
        make_segment(distance_m=3000.0, grade=0.03, time_s=420.0, power=215.0),
        make_segment(distance_m=3000.0, grade=-0.02, time_s=270.0, power=160.0),
        make_segment(distance_m=6000.0, grade=0.0, time_s=660.0, power=200.0),
    ]


@pytest.fixture
def make_paced() -> Callable[..., PacedSegment]:
    """Factory for a paced segment with an exact target power and time."""
    zones = calculate_power_zones(FTP)

    def _make(
        power: float = 200.0,
        time_s: float = 600.0,
        grade: float = 0.0,
        distance_m: float = 5000.0,
        cumulative_stress: float | None = None,
    ) -> PacedSegment:
        segment = RouteSegment(
            distance_m=distance_m,
            grade=grade,
            time_s=time_s,
            power_required_w=power,
            terrain=_terrain_for(grade),
        )
        return PacedSegment(
            segment=segment,
            target_power=power,
            estimated_time_s=time_s,
            zone=classify_power(power, zones),
            cumulative_stress=(
                segment_tss(power, time_s, FTP) if cumulative_stress is None else cumulative_stress
            ),
            strategy_note="",
            power_ratio=1.0,
        )

    return _make


@pytest.fixture
def make_plan(make_paced) -> Callable[..., PacingPlan]:
    """Build a plan from (power, time_s) pairs with running cumulative stress."""

    def _make(efforts: list[tuple[float, float]]) -> PacingPlan:
        segments = []
        stress = 0.0
        for power, time_s in efforts:
            stress += segment_tss(power, time_s, FTP)
            segments.append(make_paced(power=power, time_s=time_s, cumulative_stress=stress))
        return assemble_plan(segments, PacingStrategy.BALANCED, FTP, START)

    return _make
