"""Segment time models — how riding time responds to a change in power.

Both relationships are approximations of the aero-dominated power/speed
curve, not a physics solution. Re-derivation takes the scaling model as a
parameter so another approximation can be swapped in.
"""

from __future__ import annotations

import math
from typing import Callable

# Maps power ratio (new / old) to time ratio (new / old)
TimeScaleModel = Callable[[float], float]


def square_root_time_scale(power_ratio: float) -> float:
    """time ratio = power_ratio ^ -1/2; used when a plan is first assembled."""
    return 1.0 / math.sqrt(power_ratio)


def cube_root_time_scale(power_ratio: float) -> float:
    """time ratio = power_ratio ^ -1/3; the default for intensity adjustments.

    Unverified heuristic: applying +x% then -x% does not restore the original
    times exactly.
    """
    return power_ratio ** (-1.0 / 3.0)


def estimate_segment_time(
    base_time_s: float,
    base_power: float,
    target_power: float,
    time_scale: TimeScaleModel = square_root_time_scale,
) -> float:
    """Estimate riding time at ``target_power`` from the nominal time at ``base_power``.

    Args:
        base_time_s: Nominal segment time at the base power.
        base_power: Base required power (W).
        target_power: Planned power (W).
        time_scale: Power-ratio to time-ratio model.

    Returns:
        Estimated seconds. The base time is returned unchanged when either
        power is not positive.
    """
    if base_power <= 0 or target_power <= 0:
        return base_time_s
    return base_time_s * time_scale(target_power / base_power)
