"""Power zone calculations.

Zone model: Coggan 7-zone system anchored on FTP, with a Sweet Spot band
between Tempo and Threshold.
Reference: Coggan & Allen (2010), Training and Racing with a Power Meter.
"""

from __future__ import annotations

from ride_pacing.models.enums import (
    POWER_ZONE_BOUNDARIES_PCT_FTP,
    POWER_ZONE_COLORS,
    POWER_ZONE_NAMES,
)
from ride_pacing.models.pacing_plan import PowerZone


def calculate_power_zones(ftp: float) -> list[PowerZone]:
    """Calculate the seven power zones for a threshold power.

    Args:
        ftp: Functional threshold power in watts.

    Returns:
        Seven PowerZone objects in ascending order, bounds in watts.
        Z1: <55%, Z2: 55-75%, Z3: 75-87%, Z4: 87-94%, Z5: 94-105%,
        Z6: 105-120%, Z7: 120-150% FTP.
    """
    return [
        PowerZone(
            number=zone_number,
            name=POWER_ZONE_NAMES[zone_number],
            min_power=ftp * lower_pct,
            max_power=ftp * upper_pct,
            color=POWER_ZONE_COLORS[zone_number],
        )
        for zone_number, (lower_pct, upper_pct) in POWER_ZONE_BOUNDARIES_PCT_FTP.items()
    ]


def classify_power(power: float, zones: list[PowerZone]) -> PowerZone:
    """Return the first zone containing ``power``.

    Power above every band falls back to the last zone and power below the
    first band (only possible for negative values) to the first. When the
    zones are degenerate (FTP <= 0) everything is zone 1.
    """
    first = zones[0]
    if first.max_power <= 0 or power < first.min_power:
        return first
    for zone in zones:
        if zone.contains(power):
            return zone
    return zones[-1]
