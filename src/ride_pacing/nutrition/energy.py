"""Energy expenditure for a pacing plan.

Per segment: mechanical work -> metabolic calories through a fixed gross
efficiency, then a carbohydrate/fat split by intensity and duration.
Running carbohydrate burn is tracked against a fixed glycogen store.

Reference:
    Jeukendrup & Wallis (2005). Measurement of substrate oxidation during
    exercise by means of gas exchange measurements. Int J Sports Med 26.
"""

from __future__ import annotations

from typing import Sequence

from ride_pacing.config import EnergyConfig, PlannerConfig
from ride_pacing.math.substrate import fat_percentage, mechanical_work_kj, metabolic_calories
from ride_pacing.models.energy import EnergyExpenditure, MetabolicSummary, SegmentEnergyData
from ride_pacing.models.enums import STRESS_RATING_THRESHOLDS, StressRating
from ride_pacing.models.pacing_plan import PacingPlan


def rate_metabolic_stress(
    average_intensity_pct: float,
    duration_min: float,
    glycogen_utilization_pct: float,
) -> StressRating:
    """Highest tier for which any one of the three measures crosses its threshold."""
    for rating, intensity_pct, minutes, glycogen_pct in STRESS_RATING_THRESHOLDS:
        if (
            average_intensity_pct > intensity_pct
            or duration_min > minutes
            or glycogen_utilization_pct > glycogen_pct
        ):
            return rating
    return StressRating.LOW


class EnergyCalculator:
    """Computes EnergyExpenditure from a finished PacingPlan.

    Usage:
        energy = EnergyCalculator().calculate(plan)
    """

    def __init__(self, config: PlannerConfig | None = None) -> None:
        self.config: EnergyConfig = (config or PlannerConfig()).energy

    def calculate(self, plan: PacingPlan) -> EnergyExpenditure:
        """Per-segment energy plus ride totals for ``plan``.

        An empty plan gives an all-zero EnergyExpenditure. With FTP <= 0
        every segment is treated as zero intensity.
        """
        segments = self._segment_energy(plan)
        if not segments:
            return EnergyExpenditure()

        cfg = self.config
        total_calories = segments[-1].cumulative_calories
        total_carbs = segments[-1].cumulative_carb_calories
        total_fat = sum(s.fat_calories for s in segments)
        hours = sum(s.duration_s for s in segments) / 3600.0

        return EnergyExpenditure(
            segments=tuple(segments),
            total_calories=total_calories,
            total_carb_calories=total_carbs,
            total_fat_calories=total_fat,
            calories_per_hour=total_calories / hours if hours > 0 else 0.0,
            glycogen_depletion_risk=total_carbs > cfg.glycogen_risk_kcal,
            metabolic_summary=self._metabolic_summary(segments, plan.ftp, total_fat, total_calories),
        )

    def _segment_energy(self, plan: PacingPlan) -> list[SegmentEnergyData]:
        cfg = self.config
        ftp = plan.ftp
        cumulative_calories = 0.0
        cumulative_carbs = 0.0
        result: list[SegmentEnergyData] = []

        for index, paced in enumerate(plan.segments):
            duration_s = paced.estimated_time_s
            power = paced.target_power
            intensity = power / ftp if ftp > 0 else 0.0

            work_kj = mechanical_work_kj(power, duration_s)
            calories = metabolic_calories(work_kj, cfg.gross_efficiency, cfg.kcal_per_kj)
            fat_pct = fat_percentage(
                intensity,
                duration_s / 60.0,
                shift_start_min=cfg.fat_shift_start_min,
                shift_span_min=cfg.fat_shift_span_min,
                shift_max_pct=cfg.fat_shift_max_pct,
            )
            carb_pct = 100.0 - fat_pct
            carb_calories = calories * carb_pct / 100.0

            cumulative_calories += calories
            cumulative_carbs += carb_calories
            result.append(
                SegmentEnergyData(
                    segment_index=index,
                    duration_s=duration_s,
                    power=power,
                    intensity_pct=intensity * 100.0,
                    mechanical_work_kj=work_kj,
                    total_calories=calories,
                    carb_calories=carb_calories,
                    fat_calories=calories - carb_calories,
                    carb_pct=carb_pct,
                    cumulative_calories=cumulative_calories,
                    cumulative_carb_calories=cumulative_carbs,
                    remaining_glycogen_kcal=max(0.0, cfg.glycogen_store_kcal - cumulative_carbs),
                )
            )
        return result

    def _metabolic_summary(
        self,
        segments: Sequence[SegmentEnergyData],
        ftp: float,
        total_fat: float,
        total_calories: float,
    ) -> MetabolicSummary:
        cfg = self.config
        total_s = sum(s.duration_s for s in segments)
        average_intensity = (
            sum(s.intensity_pct * s.duration_s for s in segments) / total_s
            if total_s > 0
            else 0.0
        )
        threshold_w = ftp * cfg.aerobic_threshold_pct_ftp
        above_threshold_min = (
            sum(s.duration_min for s in segments if s.power > threshold_w) if ftp > 0 else 0.0
        )
        glycogen_pct = (
            min(100.0, segments[-1].cumulative_carb_calories / cfg.glycogen_store_kcal * 100.0)
            if cfg.glycogen_store_kcal > 0
            else 0.0
        )

        return MetabolicSummary(
            average_intensity_pct=average_intensity,
            time_above_threshold_min=above_threshold_min,
            fat_burning_efficiency_pct=total_fat / total_calories * 100.0 if total_calories > 0 else 0.0,
            glycogen_utilization_pct=glycogen_pct,
            stress_rating=rate_metabolic_stress(average_intensity, total_s / 60.0, glycogen_pct),
        )
