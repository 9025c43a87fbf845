"""Flat record serialization for route segments and pacing plans.

Records hold only dicts, lists, str, float, int, bool and None. Enums are
written by lower-case name, datetimes as ISO-8601 strings. Parsing raises
RecordFormatError naming the offending field.
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import IntEnum
from typing import Any, Iterable, TypeVar

from ride_pacing.exceptions import RecordFormatError, UnknownStrategyError
from ride_pacing.math.zones import calculate_power_zones
from ride_pacing.models.enums import (
    DifficultyRating,
    KeySegmentType,
    PacingStrategy,
    PowerZoneNumber,
    TerrainType,
)
from ride_pacing.models.pacing_plan import KeySegment, PacedSegment, PacingPlan, PacingSummary
from ride_pacing.models.route import GeoWeatherPoint, RouteSegment

_E = TypeVar("_E", bound=IntEnum)


def parse_strategy(name: str) -> PacingStrategy:
    """Strategy from its enum name or display label, case-insensitive.

    Accepts "negative_split", "NEGATIVE_SPLIT", "Negative Split" and
    "negative-split".

    Raises:
        UnknownStrategyError: If nothing matches.
    """
    key = str(name).strip().lower().replace("-", "_").replace(" ", "_")
    for strategy in PacingStrategy:
        if key in (strategy.name.lower(), strategy.label.lower().replace(" ", "_")):
            return strategy
    raise UnknownStrategyError(name)


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _enum_name(value: IntEnum) -> str:
    return value.name.lower()


def _parse_enum(enum_cls: type[_E], value: Any, field: str) -> _E:
    try:
        return enum_cls[str(value).strip().upper()]
    except KeyError:
        raise RecordFormatError(
            f"Invalid {enum_cls.__name__} value {value!r}", field=field
        ) from None


def _require(record: dict, field: str) -> Any:
    if not isinstance(record, dict):
        raise RecordFormatError(f"Expected an object, got {type(record).__name__}", field=field)
    if field not in record:
        raise RecordFormatError(f"Missing required field {field!r}", field=field)
    return record[field]


def _float(record: dict, field: str, default: float | None = None) -> float:
    if default is not None and record.get(field) is None:
        return default
    value = _require(record, field)
    if isinstance(value, bool):
        raise RecordFormatError(f"Field {field!r} must be a number", field=field)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise RecordFormatError(
            f"Field {field!r} must be a number, got {value!r}", field=field
        ) from None


def _optional_float(record: dict, field: str) -> float | None:
    if record.get(field) is None:
        return None
    return _float(record, field)


def _datetime(record: dict, field: str) -> datetime:
    value = _require(record, field)
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise RecordFormatError(
            f"Field {field!r} is not an ISO-8601 datetime: {value!r}", field=field
        ) from None


# ---------------------------------------------------------------------------
# Route segments
# ---------------------------------------------------------------------------


def point_to_record(point: GeoWeatherPoint | None) -> dict | None:
    if point is None:
        return None
    return {
        "latitude": point.latitude,
        "longitude": point.longitude,
        "elevation_m": point.elevation_m,
        "distance_m": point.distance_m,
        "temperature_c": point.temperature_c,
        "wind_speed_mps": point.wind_speed_mps,
        "wind_direction_deg": point.wind_direction_deg,
    }


def point_from_record(record: dict | None) -> GeoWeatherPoint | None:
    if record is None:
        return None
    return GeoWeatherPoint(
        latitude=_float(record, "latitude"),
        longitude=_float(record, "longitude"),
        elevation_m=_float(record, "elevation_m", 0.0),
        distance_m=_float(record, "distance_m", 0.0),
        temperature_c=_optional_float(record, "temperature_c"),
        wind_speed_mps=_optional_float(record, "wind_speed_mps"),
        wind_direction_deg=_optional_float(record, "wind_direction_deg"),
    )


def segment_to_record(segment: RouteSegment) -> dict:
    return {
        "distance_m": segment.distance_m,
        "grade": segment.grade,
        "time_s": segment.time_s,
        "power_required_w": segment.power_required_w,
        "terrain": _enum_name(segment.terrain),
        "headwind_mps": segment.headwind_mps,
        "crosswind_mps": segment.crosswind_mps,
        "temperature_c": segment.temperature_c,
        "humidity_pct": segment.humidity_pct,
        "speed_mps": segment.speed_mps,
        "start_point": point_to_record(segment.start_point),
        "end_point": point_to_record(segment.end_point),
    }


def segment_from_record(record: dict) -> RouteSegment:
    """Parse one route segment. Only distance, grade, time and power are required."""
    terrain = record.get("terrain") if isinstance(record, dict) else None
    return RouteSegment(
        distance_m=_float(record, "distance_m"),
        grade=_float(record, "grade"),
        time_s=_float(record, "time_s"),
        power_required_w=_float(record, "power_required_w"),
        terrain=_parse_enum(TerrainType, terrain, "terrain") if terrain else TerrainType.FLAT,
        headwind_mps=_float(record, "headwind_mps", 0.0),
        crosswind_mps=_float(record, "crosswind_mps", 0.0),
        temperature_c=_float(record, "temperature_c", 15.0),
        humidity_pct=_float(record, "humidity_pct", 50.0),
        speed_mps=_float(record, "speed_mps", 0.0),
        start_point=point_from_record(record.get("start_point")),
        end_point=point_from_record(record.get("end_point")),
    )


def segments_from_records(records: Iterable[dict]) -> list[RouteSegment]:
    return [segment_from_record(record) for record in records]


def segments_from_json_string(text: str) -> list[RouteSegment]:
    """Parse a JSON list of segment records, or an object with a "segments" list."""
    data = _loads(text)
    if isinstance(data, dict):
        data = _require(data, "segments")
    if not isinstance(data, list):
        raise RecordFormatError("Expected a list of route segments", field="segments")
    return segments_from_records(data)


# ---------------------------------------------------------------------------
# Pacing plans
# ---------------------------------------------------------------------------


def _key_segment_to_record(key: KeySegment) -> dict:
    return {
        "segment_index": key.segment_index,
        "segment_type": _enum_name(key.segment_type),
        "description": key.description,
        "recommendation": key.recommendation,
    }


def _paced_segment_to_record(paced: PacedSegment) -> dict:
    return {
        "segment": segment_to_record(paced.segment),
        "target_power": paced.target_power,
        "estimated_time_s": paced.estimated_time_s,
        "zone": int(paced.zone.number),
        "cumulative_stress": paced.cumulative_stress,
        "strategy_note": paced.strategy_note,
        "power_ratio": paced.power_ratio,
    }


def plan_to_record(plan: PacingPlan) -> dict:
    """Flatten a PacingPlan into JSON-compatible primitives."""
    summary = plan.summary
    return {
        "strategy": _enum_name(plan.strategy),
        "ftp": plan.ftp,
        "start_time": plan.start_time.isoformat(),
        "estimated_arrival": plan.estimated_arrival.isoformat(),
        "total_time_min": plan.total_time_min,
        "total_distance_km": plan.total_distance_km,
        "average_power": plan.average_power,
        "normalized_power": plan.normalized_power,
        "intensity_factor": plan.intensity_factor,
        "estimated_tss": plan.estimated_tss,
        "difficulty": _enum_name(plan.difficulty),
        "segments": [_paced_segment_to_record(p) for p in plan.segments],
        "summary": {
            "total_elevation_m": summary.total_elevation_m,
            # JSON object keys are strings
            "time_in_zones": {str(int(z)): m for z, m in summary.time_in_zones.items()},
            "key_segments": [_key_segment_to_record(k) for k in summary.key_segments],
            "warnings": list(summary.warnings),
        },
    }


def _zone_number(value: Any, field: str) -> PowerZoneNumber:
    try:
        return PowerZoneNumber(int(value))
    except (TypeError, ValueError):
        raise RecordFormatError(f"Invalid power zone {value!r}", field=field) from None


def plan_from_record(record: dict) -> PacingPlan:
    """Rebuild a PacingPlan from ``plan_to_record`` output.

    Zones are recomputed from the stored FTP.
    """
    ftp = _float(record, "ftp")
    zones = calculate_power_zones(ftp)

    segments = []
    for item in _require(record, "segments"):
        segments.append(
            PacedSegment(
                segment=segment_from_record(_require(item, "segment")),
                target_power=_float(item, "target_power"),
                estimated_time_s=_float(item, "estimated_time_s"),
                zone=zones[_zone_number(_require(item, "zone"), "zone") - 1],
                cumulative_stress=_float(item, "cumulative_stress"),
                strategy_note=str(item.get("strategy_note", "")),
                power_ratio=_float(item, "power_ratio", 0.0),
            )
        )

    summary_record = record.get("summary") or {}
    zone_minutes = [0.0] * len(PowerZoneNumber)
    for zone, minutes in (summary_record.get("time_in_zones") or {}).items():
        zone_minutes[_zone_number(zone, "time_in_zones") - 1] = float(minutes)
    summary = PacingSummary(
        total_elevation_m=_float(summary_record, "total_elevation_m", 0.0),
        zone_minutes=tuple(zone_minutes),
        key_segments=tuple(
            KeySegment(
                segment_index=int(_require(k, "segment_index")),
                segment_type=_parse_enum(KeySegmentType, _require(k, "segment_type"), "segment_type"),
                description=str(k.get("description", "")),
                recommendation=str(k.get("recommendation", "")),
            )
            for k in summary_record.get("key_segments") or ()
        ),
        warnings=tuple(str(w) for w in summary_record.get("warnings") or ()),
    )

    return PacingPlan(
        segments=tuple(segments),
        strategy=parse_strategy(_require(record, "strategy")),
        total_time_min=_float(record, "total_time_min"),
        total_distance_km=_float(record, "total_distance_km"),
        average_power=_float(record, "average_power"),
        normalized_power=_float(record, "normalized_power"),
        intensity_factor=_float(record, "intensity_factor"),
        estimated_tss=_float(record, "estimated_tss"),
        difficulty=_parse_enum(DifficultyRating, _require(record, "difficulty"), "difficulty"),
        start_time=_datetime(record, "start_time"),
        estimated_arrival=_datetime(record, "estimated_arrival"),
        ftp=ftp,
        summary=summary,
    )


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecordFormatError(f"Invalid JSON: {exc}") from exc


def plan_to_json_string(plan: PacingPlan, indent: int = 2) -> str:
    return json.dumps(plan_to_record(plan), indent=indent)


def plan_from_json_string(text: str) -> PacingPlan:
    data = _loads(text)
    if not isinstance(data, dict):
        raise RecordFormatError("Expected a JSON object for a pacing plan")
    return plan_from_record(data)
