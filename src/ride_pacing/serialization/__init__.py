"""Serialization module — flat records, tabular exports and text summaries."""

from ride_pacing.serialization.records import (
    parse_strategy,
    plan_from_json_string,
    plan_from_record,
    plan_to_json_string,
    plan_to_record,
    segment_from_record,
    segment_to_record,
    segments_from_json_string,
    segments_from_records,
)
from ride_pacing.serialization.summary import race_day_summary
from ride_pacing.serialization.tables import (
    course_points,
    fueling_csv,
    fueling_rows,
    pacing_csv,
    pacing_rows,
)

__all__ = [
    "course_points",
    "fueling_csv",
    "fueling_rows",
    "pacing_csv",
    "pacing_rows",
    "parse_strategy",
    "plan_from_json_string",
    "plan_from_record",
    "plan_to_json_string",
    "plan_to_record",
    "race_day_summary",
    "segment_from_record",
    "segment_to_record",
    "segments_from_json_string",
    "segments_from_records",
]
