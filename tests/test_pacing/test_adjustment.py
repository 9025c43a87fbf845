"""Tests for plan re-derivation and metric refresh."""

from __future__ import annotations

import dataclasses
from datetime import timedelta

import pytest

from ride_pacing.math.training_load import calculate_ride_metrics
from ride_pacing.models.enums import PowerZoneNumber
from ride_pacing.pacing.adjustment import adjust_plan_intensity, recalculate_metrics
from ride_pacing.pacing.engine import PacingEngine


@pytest.fixture
def plan(rider, hilly_route, start_time):
    return PacingEngine(rider).generate_plan(hilly_route, start_time=start_time)


class TestZeroAdjustment:
    def test_returns_same_plan(self, plan) -> None:
        assert adjust_plan_intensity(plan, 0.0) is plan

    def test_values_unchanged(self, plan) -> None:
        adjusted = adjust_plan_intensity(plan, 0)
        assert [p.target_power for p in adjusted.segments] == [p.target_power for p in plan.segments]
        assert adjusted.total_time_min == plan.total_time_min
        assert adjusted.normalized_power == plan.normalized_power
        assert adjusted.estimated_tss == plan.estimated_tss


class TestIntensityAdjustment:
    def test_powers_scaled(self, plan) -> None:
        adjusted = adjust_plan_intensity(plan, 5.0)
        for before, after in zip(plan.segments, adjusted.segments):
            assert after.target_power == pytest.approx(before.target_power * 1.05)

    def test_times_scaled_by_cube_root(self, plan) -> None:
        adjusted = adjust_plan_intensity(plan, 5.0)
        for before, after in zip(plan.segments, adjusted.segments):
            assert after.estimated_time_s == pytest.approx(before.estimated_time_s * 1.05 ** (-1 / 3))

    def test_totals_and_arrival_refreshed(self, plan) -> None:
        adjusted = adjust_plan_intensity(plan, -10.0)
        total_s = sum(p.estimated_time_s for p in adjusted.segments)
        assert adjusted.total_time_min == pytest.approx(total_s / 60)
        assert adjusted.estimated_arrival == plan.start_time + timedelta(seconds=total_s)
        assert adjusted.total_time_min > plan.total_time_min

    def test_metrics_from_sample_stream(self, plan) -> None:
        adjusted = adjust_plan_intensity(plan, 8.0)
        metrics = calculate_ride_metrics(
            [p.target_power for p in adjusted.segments],
            [p.estimated_time_s for p in adjusted.segments],
            adjusted.ftp,
        )
        assert adjusted.normalized_power == pytest.approx(metrics.normalized_power)
        assert adjusted.average_power == pytest.approx(metrics.average_power)
        assert adjusted.estimated_tss == pytest.approx(metrics.tss)
        assert adjusted.intensity_factor == pytest.approx(metrics.intensity_factor)

    def test_original_not_modified(self, plan) -> None:
        powers = [p.target_power for p in plan.segments]
        adjust_plan_intensity(plan, 10.0)
        assert [p.target_power for p in plan.segments] == powers

    def test_zone_reassigned(self, make_plan) -> None:
        plan = make_plan([(192.0, 600.0)])
        adjusted = adjust_plan_intensity(plan, 20.0)
        assert adjusted.segments[0].zone.number == PowerZoneNumber.SWEET_SPOT

    def test_cumulative_stress_rebuilt(self, plan) -> None:
        adjusted = adjust_plan_intensity(plan, 10.0)
        assert adjusted.segments[-1].cumulative_stress > plan.segments[-1].cumulative_stress

    def test_summary_rebuilt(self, plan) -> None:
        adjusted = adjust_plan_intensity(plan, 10.0)
        assert sum(adjusted.summary.time_in_zones.values()) == pytest.approx(adjusted.total_time_min)

    def test_round_trip_is_approximate(self, plan) -> None:
        back = adjust_plan_intensity(adjust_plan_intensity(plan, 5.0), -5.0)
        assert back.total_time_min != plan.total_time_min
        assert back.total_time_min == pytest.approx(plan.total_time_min, rel=1e-2)


class TestConstraintsOnAdjustment:
    def test_not_reapplied_by_default(self, make_plan) -> None:
        plan = make_plan([(312.5, 600.0)])
        adjusted = adjust_plan_intensity(plan, 10.0)
        assert adjusted.segments[0].target_power == pytest.approx(343.75)

    def test_reapplied_on_request(self, make_plan) -> None:
        plan = make_plan([(312.5, 600.0)])
        adjusted = adjust_plan_intensity(plan, 10.0, reapply_constraints=True)
        assert adjusted.segments[0].target_power == pytest.approx(312.5)
        assert adjusted.segments[0].estimated_time_s == pytest.approx(600.0)


class TestTimeScaleModel:
    def test_custom_model(self, make_plan) -> None:
        plan = make_plan([(200.0, 600.0)])
        adjusted = adjust_plan_intensity(plan, 10.0, time_scale=lambda ratio: 1.0)
        assert adjusted.segments[0].estimated_time_s == pytest.approx(600.0)

    def test_no_rescale_for_tiny_ratio(self, make_plan) -> None:
        plan = make_plan([(200.0, 600.0)])
        adjusted = adjust_plan_intensity(plan, -95.0)
        assert adjusted.segments[0].target_power == pytest.approx(10.0)
        assert adjusted.segments[0].estimated_time_s == pytest.approx(600.0)


class TestRecalculateMetrics:
    def test_whole_second_plan_matches_assembly(self, make_plan) -> None:
        plan = make_plan([(150.0, 600.0), (280.0, 300.0), (200.0, 900.0)])
        refreshed = recalculate_metrics(plan)
        assert refreshed.normalized_power == pytest.approx(plan.normalized_power)
        assert refreshed.average_power == pytest.approx(plan.average_power)
        assert refreshed.estimated_tss == pytest.approx(plan.estimated_tss)

    def test_empty_plan(self, rider, start_time) -> None:
        empty = PacingEngine(rider).generate_plan([], start_time=start_time)
        refreshed = recalculate_metrics(empty)
        assert refreshed.normalized_power == 0.0
        assert refreshed.estimated_tss == 0.0
        assert refreshed.estimated_arrival == start_time

    def test_zone_time_not_shared_with_source(self, make_plan) -> None:
        plan = make_plan([(192.0, 1200.0)])
        refreshed = recalculate_metrics(plan)
        zones = refreshed.summary.time_in_zones
        zones[PowerZoneNumber.ANAEROBIC] = 999.0
        assert PowerZoneNumber.ANAEROBIC not in plan.summary.time_in_zones
        assert PowerZoneNumber.ANAEROBIC not in refreshed.summary.time_in_zones
        assert list(plan.summary.time_in_zones) == [PowerZoneNumber.TEMPO]

    def test_zone_minutes_are_read_only(self, make_plan) -> None:
        summary = recalculate_metrics(make_plan([(192.0, 1200.0)])).summary
        with pytest.raises(TypeError):
            summary.zone_minutes[PowerZoneNumber.ANAEROBIC - 1] = 999.0
        with pytest.raises(dataclasses.FrozenInstanceError):
            summary.zone_minutes = (0.0,) * 7
