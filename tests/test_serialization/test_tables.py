"""Tests for tabular pacing/fueling exports and course points."""

from __future__ import annotations

import io

import pandas as pd
import pytest

from ride_pacing.models.energy import EnergyExpenditure
from ride_pacing.models.route import GeoWeatherPoint, RouteSegment
from ride_pacing.nutrition import EnergyCalculator, FuelingGenerator
from ride_pacing.pacing.engine import PacingEngine
from ride_pacing.serialization import course_points, fueling_csv, fueling_rows, pacing_csv, pacing_rows
from ride_pacing.serialization.tables import FUELING_COLUMNS, PACING_COLUMNS


@pytest.fixture
def plan(rider, hilly_route, start_time):
    return PacingEngine(rider).generate_plan(hilly_route, start_time=start_time)


@pytest.fixture
def energy(plan):
    return EnergyCalculator().calculate(plan)


class TestPacingRows:
    def test_one_row_per_segment(self, plan) -> None:
        rows = pacing_rows(plan)
        assert len(rows) == len(plan.segments)
        assert list(rows[0]) == PACING_COLUMNS

    def test_cumulative_columns(self, plan) -> None:
        rows = pacing_rows(plan)
        assert rows[-1]["cumulative_distance_km"] == pytest.approx(plan.total_distance_km)
        assert rows[-1]["cumulative_time_min"] == pytest.approx(plan.total_time_min)

    def test_grade_as_percent(self, plan) -> None:
        assert pacing_rows(plan)[1]["grade_pct"] == pytest.approx(6.0)

    def test_calories_from_energy(self, plan, energy) -> None:
        rows = pacing_rows(plan, energy)
        assert sum(r["calories"] for r in rows) == pytest.approx(energy.total_calories)
        assert sum(r["carb_calories"] for r in rows) == pytest.approx(energy.total_carb_calories)

    def test_calories_zero_without_energy(self, plan) -> None:
        assert all(r["calories"] == 0.0 for r in pacing_rows(plan))

    def test_csv_parses_back(self, plan, energy) -> None:
        frame = pd.read_csv(io.StringIO(pacing_csv(plan, energy)))
        assert list(frame.columns) == PACING_COLUMNS
        assert len(frame) == len(plan.segments)
        assert frame["target_power_w"].iloc[0] == pytest.approx(plan.segments[0].target_power, abs=0.01)


class TestFuelingRows:
    def test_rows_match_schedule(self, energy) -> None:
        fueling = FuelingGenerator().generate(energy)
        rows = fueling_rows(fueling)
        assert len(rows) == len(fueling.schedule)
        assert rows[0]["fuel_type"] == "gel"
        assert rows[0]["time_min"] == 15.0

    def test_csv_header_even_when_empty(self) -> None:
        text = fueling_csv(FuelingGenerator().generate(EnergyExpenditure()))
        assert text.strip() == ",".join(FUELING_COLUMNS)


class TestCoursePoints:
    def test_cumulative_distance_and_power(self, plan) -> None:
        points = course_points(plan)
        assert len(points) == len(plan.segments)
        assert points[-1]["distance_km"] == pytest.approx(plan.total_distance_km)
        assert [p["target_power_w"] for p in points] == [s.target_power for s in plan.segments]

    def test_coordinates_from_end_point(self, rider) -> None:
        segment = RouteSegment(
            distance_m=1000.0,
            grade=0.0,
            time_s=120.0,
            power_required_w=200.0,
            end_point=GeoWeatherPoint(latitude=51.5, longitude=-0.12),
        )
        point = course_points(PacingEngine(rider).generate_plan([segment]))[0]
        assert (point["latitude"], point["longitude"]) == (51.5, -0.12)

    def test_missing_coordinates(self, plan) -> None:
        assert course_points(plan)[0]["latitude"] is None
