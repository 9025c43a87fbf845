"""Tests for per-segment target power evaluation and power constraints."""

from __future__ import annotations

import pytest

from ride_pacing.config import PacingConfig
from ride_pacing.math.training_load import fatigue_multiplier
from ride_pacing.models.enums import PacingStrategy
from ride_pacing.pacing.strategy import (
    SegmentContext,
    constrain_power,
    evaluate_target_power,
    power_bounds,
)


def _power(
    strategy: PacingStrategy,
    grade: float = 0.0,
    progress: float = 0.0,
    stress: float = 0.0,
    base: float = 200.0,
) -> float:
    context = SegmentContext(grade=grade, progress=progress, cumulative_stress=stress)
    return evaluate_target_power(base, strategy, context)


class TestTerrainShaping:
    def test_flat_eases_to_96pct(self) -> None:
        assert _power(PacingStrategy.BALANCED) == pytest.approx(192.0)

    def test_climb_boost(self) -> None:
        assert _power(PacingStrategy.BALANCED, grade=0.05) == pytest.approx(225.0)

    def test_climb_boost_capped(self) -> None:
        assert _power(PacingStrategy.BALANCED, grade=0.12) == pytest.approx(236.0)

    def test_climb_threshold_is_exclusive(self) -> None:
        # 3.5% is still "flat" for terrain shaping
        assert _power(PacingStrategy.BALANCED, grade=0.035) == pytest.approx(192.0)

    def test_descent(self) -> None:
        assert _power(PacingStrategy.BALANCED, grade=-0.03) == pytest.approx(176.0)


class TestStrategies:
    def test_conservative(self) -> None:
        assert _power(PacingStrategy.CONSERVATIVE) == pytest.approx(200 * 0.96 * 0.94)

    @pytest.mark.parametrize(
        "progress, multiplier",
        [(0.0, 1.10), (0.19, 1.10), (0.20, 1.06), (0.5, 1.06), (0.85, 1.12), (0.99, 1.12)],
    )
    def test_aggressive_phases(self, progress: float, multiplier: float) -> None:
        assert _power(PacingStrategy.AGGRESSIVE, progress=progress) == pytest.approx(
            200 * 0.96 * multiplier
        )

    def test_negative_split_ramp(self) -> None:
        start = _power(PacingStrategy.NEGATIVE_SPLIT, progress=0.0)
        middle = _power(PacingStrategy.NEGATIVE_SPLIT, progress=0.5)
        assert start == pytest.approx(200 * 0.96 * 0.92)
        assert middle == pytest.approx(200 * 0.96 * 0.99)

    def test_negative_split_increases_with_progress(self) -> None:
        powers = [_power(PacingStrategy.NEGATIVE_SPLIT, progress=p / 10) for p in range(10)]
        assert powers == sorted(powers)

    @pytest.mark.parametrize(
        "grade, multiplier",
        [(0.07, 1.12), (0.03, 1.06), (0.0, 1.0), (-0.02, 0.88), (-0.06, 0.70)],
    )
    def test_even_effort_bypasses_terrain_shaping(self, grade: float, multiplier: float) -> None:
        assert _power(PacingStrategy.EVEN_EFFORT, grade=grade) == pytest.approx(200 * multiplier)

    def test_strategy_has_label_and_description(self) -> None:
        for strategy in PacingStrategy:
            assert strategy.label
            assert strategy.description


class TestFatigue:
    def test_fatigue_applied_before_shaping(self) -> None:
        expected = 200 * fatigue_multiplier(100.0) * 0.96
        assert _power(PacingStrategy.BALANCED, stress=100.0) == pytest.approx(expected)

    def test_fatigue_floor(self) -> None:
        assert _power(PacingStrategy.BALANCED, stress=900.0) == pytest.approx(200 * 0.80 * 0.96)

    def test_fatigue_applies_to_even_effort(self) -> None:
        assert _power(PacingStrategy.EVEN_EFFORT, stress=900.0) == pytest.approx(160.0)

    def test_configured_fatigue_scale(self) -> None:
        context = SegmentContext(grade=0.0, progress=0.0, cumulative_stress=100.0)
        config = PacingConfig(fatigue_stress_scale=100.0)
        power = evaluate_target_power(200.0, PacingStrategy.BALANCED, context, config)
        assert power == pytest.approx(200 * 0.80 * 0.96)


class TestConstraints:
    def test_bounds_on_flat(self) -> None:
        assert power_bounds(250.0, 0.0) == pytest.approx((137.5, 312.5))

    def test_lower_floor_on_steep_descent(self) -> None:
        assert power_bounds(250.0, -0.04) == pytest.approx((87.5, 312.5))

    def test_descent_floor_grade_is_exclusive(self) -> None:
        assert power_bounds(250.0, -0.03)[0] == pytest.approx(137.5)

    def test_clamps_high(self) -> None:
        assert constrain_power(400.0, 250.0, 0.0) == pytest.approx(312.5)

    def test_clamps_low(self) -> None:
        assert constrain_power(50.0, 250.0, 0.0) == pytest.approx(137.5)
        assert constrain_power(50.0, 250.0, -0.06) == pytest.approx(87.5)

    def test_passes_through_in_range(self) -> None:
        assert constrain_power(192.0, 250.0, 0.0) == 192.0
