"""Tests for per-segment energy expenditure and the metabolic summary."""

from __future__ import annotations

import pytest

from ride_pacing.config import EnergyConfig, PlannerConfig
from ride_pacing.models.energy import EnergyExpenditure
from ride_pacing.models.enums import PacingStrategy, StressRating
from ride_pacing.nutrition.energy import EnergyCalculator, rate_metabolic_stress
from ride_pacing.pacing.engine import assemble_plan


class TestOneHourAt200W:
    """200 W for 3600 s with FTP 250 (80% intensity)."""

    @pytest.fixture
    def energy(self, make_plan) -> EnergyExpenditure:
        return EnergyCalculator().calculate(make_plan([(200.0, 3600.0)]))

    def test_mechanical_work(self, energy) -> None:
        assert energy.segments[0].mechanical_work_kj == pytest.approx(720.0)
        assert energy.total_work_kj == pytest.approx(720.0)

    def test_calories(self, energy) -> None:
        assert energy.total_calories == pytest.approx(782.2, abs=0.1)
        assert energy.calories_per_hour == pytest.approx(energy.total_calories)

    def test_substrate_split(self, energy) -> None:
        segment = energy.segments[0]
        assert segment.intensity_pct == pytest.approx(80.0)
        assert segment.carb_pct == pytest.approx(65.0)
        assert segment.carb_calories == pytest.approx(508.4, abs=0.1)
        assert segment.fat_calories == pytest.approx(273.8, abs=0.1)

    def test_no_depletion_risk(self, energy) -> None:
        assert energy.glycogen_depletion_risk is False
        assert energy.segments[0].remaining_glycogen_kcal == pytest.approx(2000.0 - 508.4, abs=0.1)

    def test_metabolic_summary(self, energy) -> None:
        summary = energy.metabolic_summary
        assert summary.average_intensity_pct == pytest.approx(80.0)
        assert summary.time_above_threshold_min == 0.0
        assert summary.fat_burning_efficiency_pct == pytest.approx(35.0)
        assert summary.glycogen_utilization_pct == pytest.approx(25.4, abs=0.1)
        assert summary.stress_rating == StressRating.HIGH


class TestGlycogen:
    def test_long_hard_ride_depletes(self, make_plan) -> None:
        energy = EnergyCalculator().calculate(make_plan([(300.0, 3600.0)] * 3))
        assert energy.glycogen_depletion_risk is True
        assert energy.segments[-1].remaining_glycogen_kcal == 0.0
        assert energy.metabolic_summary.glycogen_utilization_pct == 100.0

    @pytest.mark.parametrize(
        "efforts",
        [
            [(200.0, 3600.0)],
            [(220.0, 3600.0), (220.0, 3600.0)],
            [(240.0, 3600.0), (240.0, 1800.0)],
            [(150.0, 7200.0), (280.0, 1200.0)],
        ],
    )
    def test_risk_iff_carbs_above_1600(self, make_plan, efforts) -> None:
        energy = EnergyCalculator().calculate(make_plan(efforts))
        assert energy.glycogen_depletion_risk == (energy.total_carb_calories > 1600.0)

    def test_running_totals(self, make_plan) -> None:
        energy = EnergyCalculator().calculate(make_plan([(180.0, 1200.0), (260.0, 600.0), (140.0, 900.0)]))
        cumulative = [s.cumulative_calories for s in energy.segments]
        assert cumulative == sorted(cumulative)
        assert cumulative[-1] == pytest.approx(energy.total_calories)
        for segment in energy.segments:
            assert segment.remaining_glycogen_kcal == pytest.approx(
                max(0.0, 2000.0 - segment.cumulative_carb_calories)
            )

    def test_totals_add_up(self, make_plan) -> None:
        energy = EnergyCalculator().calculate(make_plan([(180.0, 1200.0), (260.0, 600.0)]))
        assert energy.total_carb_calories + energy.total_fat_calories == pytest.approx(energy.total_calories)

    def test_configured_store(self, make_plan) -> None:
        config = PlannerConfig(energy=EnergyConfig(glycogen_store_kcal=500.0))
        energy = EnergyCalculator(config).calculate(make_plan([(200.0, 3600.0)]))
        assert energy.glycogen_depletion_risk is True


class TestMetabolicSummary:
    def test_time_above_threshold(self, make_plan) -> None:
        energy = EnergyCalculator().calculate(make_plan([(230.0, 1800.0), (150.0, 1800.0)]))
        assert energy.metabolic_summary.time_above_threshold_min == pytest.approx(30.0)
        assert energy.metabolic_summary.average_intensity_pct == pytest.approx(76.0)

    def test_easy_short_ride_is_low_stress(self, make_plan) -> None:
        energy = EnergyCalculator().calculate(make_plan([(100.0, 1800.0)]))
        assert energy.metabolic_summary.stress_rating == StressRating.LOW

    def test_long_duration_shifts_toward_fat(self, make_plan) -> None:
        energy = EnergyCalculator().calculate(make_plan([(200.0, 135 * 60.0)]))
        assert energy.segments[0].carb_pct == pytest.approx(55.0)

    @pytest.mark.parametrize(
        "intensity, minutes, glycogen, expected",
        [
            (90.0, 30.0, 10.0, StressRating.EXTREME),
            (50.0, 310.0, 10.0, StressRating.EXTREME),
            (50.0, 30.0, 95.0, StressRating.EXTREME),
            (50.0, 200.0, 10.0, StressRating.HIGH),
            (70.0, 30.0, 10.0, StressRating.MODERATE),
            (50.0, 60.0, 30.0, StressRating.LOW),
        ],
    )
    def test_stress_rating(self, intensity, minutes, glycogen, expected) -> None:
        assert rate_metabolic_stress(intensity, minutes, glycogen) == expected


class TestEdgeCases:
    def test_empty_plan(self, rider, start_time) -> None:
        empty = assemble_plan([], PacingStrategy.BALANCED, 250.0, start_time)
        energy = EnergyCalculator().calculate(empty)
        assert energy == EnergyExpenditure()

    def test_zero_ftp(self, make_paced, start_time) -> None:
        plan = assemble_plan([make_paced(power=200.0, time_s=600.0)], PacingStrategy.BALANCED, 0.0, start_time)
        energy = EnergyCalculator().calculate(plan)
        assert energy.segments[0].intensity_pct == 0.0
        assert energy.segments[0].carb_pct == pytest.approx(15.0)
        assert energy.metabolic_summary.time_above_threshold_min == 0.0
