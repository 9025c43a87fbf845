"""Tests for energy conversion and the carbohydrate/fat split."""

import pytest

from ride_pacing.math.substrate import (
    carb_percentage,
    fat_percentage,
    mechanical_work_kj,
    metabolic_calories,
)


class TestEnergyConversion:
    def test_mechanical_work(self) -> None:
        assert mechanical_work_kj(200.0, 3600.0) == pytest.approx(720.0)

    def test_calories_from_work(self) -> None:
        # 720 kJ / 0.22 = 3272.7 kJ -> ~782 kcal
        assert metabolic_calories(720.0) == pytest.approx(782.2, abs=0.1)

    def test_zero_efficiency_gives_zero(self) -> None:
        assert metabolic_calories(720.0, gross_efficiency=0.0) == 0.0


class TestFatPercentage:
    @pytest.mark.parametrize(
        "intensity, expected",
        [
            (0.0, 85.0),
            (0.5, 75.0),
            (0.65, 50.0),
            (0.8, 35.0),
            (0.85, 25.0),
            (0.9, 21.0),
            (1.5, 5.0),
        ],
    )
    def test_by_intensity(self, intensity: float, expected: float) -> None:
        assert fat_percentage(intensity) == pytest.approx(expected)

    def test_no_shift_up_to_90_minutes(self) -> None:
        assert fat_percentage(0.8, duration_min=90.0) == pytest.approx(35.0)

    def test_long_duration_shift_is_proportional(self) -> None:
        assert fat_percentage(0.8, duration_min=135.0) == pytest.approx(45.0)

    def test_long_duration_shift_capped(self) -> None:
        assert fat_percentage(0.8, duration_min=400.0) == pytest.approx(55.0)

    def test_clamped_to_95(self) -> None:
        assert fat_percentage(0.0, duration_min=300.0) == pytest.approx(95.0)

    def test_carbs_complement_fat(self) -> None:
        for intensity in (0.3, 0.7, 0.95, 1.2):
            assert carb_percentage(intensity) + fat_percentage(intensity) == pytest.approx(100.0)

    def test_carbs_within_bounds(self) -> None:
        for intensity in (0.0, 0.5, 1.0, 2.0):
            assert 5.0 <= carb_percentage(intensity, 500.0) <= 95.0
