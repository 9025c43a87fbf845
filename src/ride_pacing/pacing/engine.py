"""PacingEngine — turns route segments into a segment-by-segment power plan."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from ride_pacing.config import PacingConfig, PlannerConfig
from ride_pacing.math.time_model import estimate_segment_time
from ride_pacing.math.training_load import (
    calculate_ride_metrics,
    classify_difficulty,
    segment_tss,
    time_weighted_average_power,
    training_stress_score,
)
from ride_pacing.math.zones import calculate_power_zones, classify_power
from ride_pacing.models.enums import PacingStrategy
from ride_pacing.models.pacing_plan import PacedSegment, PacingPlan
from ride_pacing.models.route import RiderProfile, RouteSegment
from ride_pacing.pacing.strategy import SegmentContext, constrain_power, evaluate_target_power
from ride_pacing.pacing.summary import build_summary, strategy_note


def assemble_plan(
    segments: Sequence[PacedSegment],
    strategy: PacingStrategy,
    ftp: float,
    start_time: datetime,
    config: PacingConfig | None = None,
) -> PacingPlan:
    """Compute the aggregate metrics and summary for paced segments.

    Average power is time-weighted over segments; normalized power comes
    from the 1 Hz sample stream; TSS = 100 * hours * (NP / FTP)^2 over the
    summed segment time. An empty list gives an all-zero plan arriving at
    ``start_time``.
    """
    segments = tuple(segments)
    powers = [p.target_power for p in segments]
    times = [p.estimated_time_s for p in segments]
    total_time_s = sum(times)

    normalized_power = calculate_ride_metrics(powers, times, ftp).normalized_power
    intensity_factor = normalized_power / ftp if ftp > 0 else 0.0
    tss = training_stress_score(normalized_power, ftp, total_time_s)

    return PacingPlan(
        segments=segments,
        strategy=strategy,
        total_time_min=total_time_s / 60.0,
        total_distance_km=sum(p.distance_km for p in segments),
        average_power=time_weighted_average_power(powers, times),
        normalized_power=normalized_power,
        intensity_factor=intensity_factor,
        estimated_tss=tss,
        difficulty=classify_difficulty(tss, intensity_factor),
        start_time=start_time,
        estimated_arrival=start_time + timedelta(seconds=total_time_s),
        ftp=ftp,
        summary=build_summary(segments, ftp, normalized_power, config),
    )


class PacingEngine:
    """Builds pacing plans for one rider.

    Usage:
        engine = PacingEngine(RiderProfile(ftp_watts=250))
        plan = engine.generate_plan(route_segments, PacingStrategy.NEGATIVE_SPLIT)
    """

    def __init__(
        self,
        rider: RiderProfile,
        config: PlannerConfig | None = None,
    ) -> None:
        self.rider = rider
        self.config = config or PlannerConfig()
        self.zones = calculate_power_zones(rider.ftp_watts)

    @property
    def ftp(self) -> float:
        return self.rider.ftp_watts

    def generate_plan(
        self,
        route: Sequence[RouteSegment],
        strategy: PacingStrategy = PacingStrategy.BALANCED,
        start_time: datetime | None = None,
    ) -> PacingPlan:
        """Pace every route segment in order and assemble the plan.

        Args:
            route: Route segments in distance order.
            strategy: Pacing strategy for the whole ride.
            start_time: Ride start; defaults to now.

        Returns:
            A new PacingPlan. Never raises for an empty route.
        """
        start = start_time if start_time is not None else datetime.now()
        paced = self._pace_segments(route, strategy)
        return assemble_plan(paced, strategy, self.ftp, start, self.config.pacing)

    def _pace_segments(
        self,
        route: Sequence[RouteSegment],
        strategy: PacingStrategy,
    ) -> list[PacedSegment]:
        cfg = self.config.pacing
        count = len(route)

        cumulative_stress = 0.0
        paced: list[PacedSegment] = []
        for index, segment in enumerate(route):
            context = SegmentContext(
                grade=segment.grade,
                progress=index / count,
                cumulative_stress=cumulative_stress,
            )
            raw_power = evaluate_target_power(segment.power_required_w, strategy, context, cfg)
            power = constrain_power(raw_power, self.ftp, segment.grade, cfg)
            time_s = estimate_segment_time(segment.time_s, segment.power_required_w, power)
            zone = classify_power(power, self.zones)

            cumulative_stress += segment_tss(power, time_s, self.ftp)
            base_power = segment.power_required_w
            paced.append(
                PacedSegment(
                    segment=segment,
                    target_power=power,
                    estimated_time_s=time_s,
                    zone=zone,
                    cumulative_stress=cumulative_stress,
                    strategy_note=strategy_note(segment.grade, zone, strategy),
                    power_ratio=power / base_power if base_power > 0 else 0.0,
                )
            )
        return paced
