"""Training load calculations: normalized power, IF, TSS, fatigue.

References:
    - Coggan (2003): Normalized Power, Intensity Factor, Training Stress Score
    - Allen & Coggan (2010): sustainable IF by event duration
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from ride_pacing.models.enums import (
    DIFFICULTY_THRESHOLDS,
    FATIGUE_EXPONENT,
    FATIGUE_STRESS_SCALE,
    MIN_FATIGUE_MULTIPLIER,
    NP_EXPONENT,
    NP_ROLLING_WINDOW_S,
    SUSTAINABLE_IF_BY_HOURS,
    SUSTAINABLE_IF_LONG_RIDE,
    TSS_SCALE,
    DifficultyRating,
)


@dataclass(frozen=True)
class RideMetrics:
    """Aggregate power metrics over a virtual 1 Hz sample stream."""

    average_power: float = 0.0
    normalized_power: float = 0.0
    intensity_factor: float = 0.0
    tss: float = 0.0
    sample_count: int = 0

    @property
    def total_hours(self) -> float:
        return self.sample_count / 3600.0


def fatigue_multiplier(
    cumulative_stress: float,
    stress_scale: float = FATIGUE_STRESS_SCALE,
    exponent: float = FATIGUE_EXPONENT,
    floor: float = MIN_FATIGUE_MULTIPLIER,
) -> float:
    """Power multiplier for accumulated fatigue.

    multiplier = max(floor, 1 - (stress / scale) ^ exponent)

    Args:
        cumulative_stress: TSS accumulated before the current segment.
        stress_scale: TSS at which the raw multiplier reaches zero.
        exponent: Curvature; > 1 keeps early-ride fatigue negligible.
        floor: Lowest multiplier returned.

    Returns:
        Multiplier in [floor, 1.0].
    """
    if cumulative_stress <= 0 or stress_scale <= 0:
        return 1.0
    return max(floor, 1.0 - (cumulative_stress / stress_scale) ** exponent)


def segment_tss(power: float, duration_s: float, ftp: float) -> float:
    """TSS for a constant-power effort: 100 * hours * (power / FTP)^2."""
    if ftp <= 0:
        return 0.0
    return TSS_SCALE * (duration_s / 3600.0) * (power / ftp) ** 2


def training_stress_score(normalized_power: float, ftp: float, duration_s: float) -> float:
    """TSS from normalized power: 100 * hours * IF^2. Returns 0 when FTP <= 0."""
    if ftp <= 0:
        return 0.0
    intensity = normalized_power / ftp
    return TSS_SCALE * (duration_s / 3600.0) * intensity ** 2


def expand_power_samples(
    powers: Sequence[float],
    durations_s: Sequence[float],
) -> np.ndarray:
    """Expand (power, duration) pairs into a 1 Hz power stream.

    Each pair contributes round(duration) samples (half away from zero),
    minimum one sample, so zero-length segments still count.
    """
    if len(powers) == 0:
        return np.empty(0, dtype=np.float64)
    durations = np.asarray(durations_s, dtype=np.float64)
    counts = np.maximum(1, np.floor(np.abs(durations) + 0.5)).astype(np.int64)
    return np.repeat(np.asarray(powers, dtype=np.float64), counts)


def calculate_normalized_power(samples: np.ndarray | Sequence[float]) -> float:
    """Calculate normalized power from a 1 Hz power stream.

    NP = (mean(rolling_30s_mean ^ 4)) ^ (1/4)

    The rolling mean is trailing; the first 29 values average however many
    samples exist so far, so short streams still produce a value.

    Reference:
        Coggan (2003). Training and racing using a power meter.
    """
    if len(samples) == 0:
        return 0.0
    series = pd.Series(samples, dtype=np.float64)
    rolling = series.rolling(window=NP_ROLLING_WINDOW_S, min_periods=1).mean().to_numpy()
    mean_of_fourths = float(np.mean(rolling ** NP_EXPONENT))
    return mean_of_fourths ** (1.0 / NP_EXPONENT)


def calculate_ride_metrics(
    powers: Sequence[float],
    durations_s: Sequence[float],
    ftp: float,
) -> RideMetrics:
    """Average power, NP, IF and TSS for an ordered list of efforts.

    Everything is computed in the sample domain: average power is the mean
    of the 1 Hz stream and TSS uses the stream length as duration.

    Args:
        powers: Target power per segment (W).
        durations_s: Estimated time per segment (s).
        ftp: Functional threshold power (W).

    Returns:
        RideMetrics. All zeros for an empty list; IF and TSS are 0 when
        FTP <= 0.
    """
    samples = expand_power_samples(powers, durations_s)
    if samples.size == 0:
        return RideMetrics()

    average_power = float(np.mean(samples))
    normalized_power = calculate_normalized_power(samples)
    sample_count = int(samples.size)

    if ftp > 0:
        intensity_factor = normalized_power / ftp
        tss = TSS_SCALE * (sample_count / 3600.0) * intensity_factor ** 2
    else:
        intensity_factor = 0.0
        tss = 0.0

    return RideMetrics(
        average_power=average_power,
        normalized_power=normalized_power,
        intensity_factor=intensity_factor,
        tss=tss,
        sample_count=sample_count,
    )


def time_weighted_average_power(
    powers: Sequence[float],
    durations_s: Sequence[float],
) -> float:
    """Average power weighted by segment duration (no sample rounding)."""
    total_time = float(np.sum(durations_s)) if len(durations_s) else 0.0
    if total_time <= 0:
        return 0.0
    work = float(np.dot(np.asarray(powers, dtype=np.float64), np.asarray(durations_s, dtype=np.float64)))
    return work / total_time


def classify_difficulty(tss: float, intensity_factor: float) -> DifficultyRating:
    """Rate a plan from its TSS and intensity factor.

    Either metric crossing a tier's threshold is enough for that tier:
    very hard (TSS > 300 or IF > 1.0), hard (> 200 / > 0.9),
    moderate (> 100 / > 0.8), easy (> 50 / > 0.7), otherwise recovery.
    """
    for rating, tss_threshold, if_threshold in DIFFICULTY_THRESHOLDS:
        if tss > tss_threshold or intensity_factor > if_threshold:
            return rating
    return DifficultyRating.RECOVERY


def sustainable_intensity_factor(duration_hours: float) -> float:
    """Highest IF a trained rider can usually hold for a ride of this length."""
    for max_hours, intensity in SUSTAINABLE_IF_BY_HOURS:
        if duration_hours < max_hours:
            return intensity
    return SUSTAINABLE_IF_LONG_RIDE
