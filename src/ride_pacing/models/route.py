"""Route inputs — immutable route segments produced by route analysis."""

from __future__ import annotations

from dataclasses import dataclass

from ride_pacing.models.enums import TerrainType


@dataclass(frozen=True)
class GeoWeatherPoint:
    """A point on the route with the forecast conditions at that point."""

    latitude: float
    longitude: float
    elevation_m: float = 0.0
    distance_m: float = 0.0          # cumulative distance from the route start
    temperature_c: float | None = None
    wind_speed_mps: float | None = None
    wind_direction_deg: float | None = None


@dataclass(frozen=True)
class RouteSegment:
    """One piece of terrain with the power needed to ride it at nominal speed.

    Grade is rise/run, signed (0.05 = 5% climb). Winds are averages over the
    segment; headwind is positive against the rider.
    """

    distance_m: float
    grade: float
    time_s: float                     # nominal time at power_required_w
    power_required_w: float           # base required power
    terrain: TerrainType = TerrainType.FLAT
    headwind_mps: float = 0.0
    crosswind_mps: float = 0.0
    temperature_c: float = 15.0
    humidity_pct: float = 50.0
    speed_mps: float = 0.0
    start_point: GeoWeatherPoint | None = None
    end_point: GeoWeatherPoint | None = None

    @property
    def distance_km(self) -> float:
        return self.distance_m / 1000.0

    @property
    def elevation_gain_m(self) -> float:
        """Climbing in metres; zero for flat or descending segments."""
        return max(0.0, self.grade) * self.distance_m


@dataclass(frozen=True)
class RiderProfile:
    """Rider physiology. FTP is the reference for every intensity value."""

    ftp_watts: float
    body_mass_kg: float = 75.0
    bike_mass_kg: float = 9.0

    @property
    def power_to_weight(self) -> float:
        """FTP in W/kg of body mass (0 when mass is unknown)."""
        if self.body_mass_kg <= 0:
            return 0.0
        return self.ftp_watts / self.body_mass_kg
