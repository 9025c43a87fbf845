"""Key-segment detection.

Each paced segment yields at most one candidate (first matching rule wins),
scored by a difficulty heuristic. Candidates are ranked by score, highest
first, and the top ``max_key_segments`` are kept.
"""

from __future__ import annotations

from typing import Sequence

from ride_pacing.config import PacingConfig
from ride_pacing.models.enums import (
    KEY_CLIMB_SCORE_WEIGHT,
    KEY_DESCENT_SCORE_WEIGHT,
    KEY_FUEL_SCORE_PER_MIN,
    KEY_HIGH_INTENSITY_SCORE_WEIGHT,
    KeySegmentType,
)
from ride_pacing.models.pacing_plan import KeySegment, PacedSegment

# Grade above which a sustained effort is described as rolling rather than flat
_ROLLING_GRADE = 0.02


def _score_segment(
    index: int,
    paced: PacedSegment,
    ftp: float,
    cfg: PacingConfig,
) -> tuple[float, KeySegment] | None:
    grade = paced.grade
    power = paced.target_power
    minutes = paced.estimated_time_min
    distance_km = paced.distance_km

    if grade > cfg.key_climb_min_grade and distance_km > cfg.key_climb_min_distance_km:
        gain_m = grade * distance_km * 1000
        return abs(grade) * KEY_CLIMB_SCORE_WEIGHT * distance_km * minutes, KeySegment(
            segment_index=index,
            segment_type=KeySegmentType.MAJOR_CLIMB,
            description=f"{distance_km:.1f}km climb at {grade * 100:.1f}% (+{int(gain_m)}m)",
            recommendation="Steady effort, avoid surging early",
        )

    if grade < cfg.key_descent_max_grade and distance_km > cfg.key_descent_min_distance_km:
        return abs(grade) * KEY_DESCENT_SCORE_WEIGHT * distance_km * minutes, KeySegment(
            segment_index=index,
            segment_type=KeySegmentType.TECHNICAL_SECTION,
            description=f"{distance_km:.1f}km descent at {abs(grade) * 100:.1f}%",
            recommendation="Technical descent - stay safe, recover for next effort",
        )

    if ftp <= 0:
        return None

    if (
        power > ftp * cfg.key_high_intensity_pct_ftp
        and minutes > cfg.key_high_intensity_min_duration_min
    ):
        return (power / ftp - 1.0) * KEY_HIGH_INTENSITY_SCORE_WEIGHT * minutes, KeySegment(
            segment_index=index,
            segment_type=KeySegmentType.HIGH_INTENSITY,
            description=f"{int(minutes)}min at {int(power)}W ({int(power / ftp * 100)}% FTP)",
            recommendation="High intensity - pace carefully to avoid blowing up",
        )

    if minutes > cfg.key_sustained_min_duration_min and power > ftp * cfg.key_sustained_pct_ftp:
        terrain = "rolling" if abs(grade) > _ROLLING_GRADE else "flat"
        return minutes * (power / ftp) * 100, KeySegment(
            segment_index=index,
            segment_type=KeySegmentType.TECHNICAL_SECTION,
            description=f"{int(minutes)}min sustained {terrain} effort at {paced.zone.name}",
            recommendation="Long effort - maintain steady rhythm and nutrition",
        )

    if minutes > cfg.key_fuel_min_duration_min and power < ftp * cfg.key_sustained_pct_ftp:
        return minutes * KEY_FUEL_SCORE_PER_MIN, KeySegment(
            segment_index=index,
            segment_type=KeySegmentType.FUEL_OPPORTUNITY,
            description=f"{int(minutes)}min recovery at {paced.zone.name.lower()}",
            recommendation="Good opportunity for nutrition and hydration",
        )

    return None


def identify_key_segments(
    segments: Sequence[PacedSegment],
    ftp: float,
    config: PacingConfig | None = None,
) -> tuple[KeySegment, ...]:
    """Rank segments by difficulty score and keep the top entries.

    Args:
        segments: Paced segments in route order.
        ftp: Threshold power used for the intensity rules.
        config: Thresholds and the result cap.

    Returns:
        Up to ``config.max_key_segments`` KeySegments, highest score first.
        Ties keep route order.
    """
    cfg = config or PacingConfig()
    candidates: list[tuple[float, KeySegment]] = []
    for index, paced in enumerate(segments):
        scored = _score_segment(index, paced, ftp, cfg)
        if scored is not None and scored[0] > 0:
            candidates.append(scored)

    candidates.sort(key=lambda c: c[0], reverse=True)
    return tuple(key for _, key in candidates[: cfg.max_key_segments])
