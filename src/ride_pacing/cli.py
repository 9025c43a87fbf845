"""Command-line race planner.

Usage:
    ride-pacing route.json --ftp 250                        # print race-day summary
    ride-pacing route.json --ftp 250 --strategy negative_split \\
        --pacing-csv pacing.csv --fueling-csv fueling.csv --plan-json plan.json
    python -m ride_pacing.cli route.json --ftp 250 --adjust -3

The route file is a JSON list of route segment records (or an object with a
"segments" list) as produced by the route analysis step.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from datetime import datetime
from pathlib import Path

from ride_pacing.config import load_config_from_env
from ride_pacing.exceptions import RecordFormatError, RidePacingError
from ride_pacing.models.fueling import FuelingPreferences
from ride_pacing.models.route import RiderProfile
from ride_pacing.planner import RacePlanner
from ride_pacing.serialization import (
    fueling_csv,
    pacing_csv,
    parse_strategy,
    plan_to_json_string,
    race_day_summary,
    segments_from_json_string,
)

logger = logging.getLogger(__name__)


def _parse_start(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise RecordFormatError(f"Invalid start time {value!r}", field="start") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ride-pacing",
        description="Power-based pacing and fueling plan for a cycling route",
    )
    parser.add_argument("route", type=Path, help="JSON file of route segments")
    parser.add_argument("--ftp", type=float, required=True, help="Functional threshold power (W)")
    parser.add_argument("--mass", type=float, default=75.0, help="Rider body mass (kg)")
    parser.add_argument(
        "--strategy",
        default="balanced",
        help="balanced, conservative, aggressive, negative_split or even_effort",
    )
    parser.add_argument("--start", help="Start time, ISO-8601 (default: now)")
    parser.add_argument(
        "--adjust", type=float, default=0.0, help="Uniform intensity adjustment in percent"
    )
    parser.add_argument(
        "--max-carbs", type=float, default=None, help="Maximum carbohydrate intake (g/h)"
    )
    parser.add_argument("--avoid-caffeine", action="store_true")
    parser.add_argument("--pacing-csv", type=Path, help="Write per-segment pacing CSV")
    parser.add_argument("--fueling-csv", type=Path, help="Write fueling schedule CSV")
    parser.add_argument("--plan-json", type=Path, help="Write the pacing plan as JSON")
    parser.add_argument(
        "--summary", action="store_true", help="Print the race-day summary (default without outputs)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def run(args: argparse.Namespace) -> None:
    """Plan the ride described by parsed arguments and write the requested outputs."""
    strategy = parse_strategy(args.strategy)
    start_time = _parse_start(args.start)
    route = segments_from_json_string(args.route.read_text())
    logger.info("Loaded %d route segments from %s", len(route), args.route)

    preferences = FuelingPreferences(avoid_caffeine=args.avoid_caffeine)
    if args.max_carbs is not None:
        preferences = dataclasses.replace(preferences, max_carbs_per_hour=args.max_carbs)

    planner = RacePlanner(
        RiderProfile(ftp_watts=args.ftp, body_mass_kg=args.mass),
        load_config_from_env(),
    )
    race_plan = planner.generate(route, strategy, start_time, preferences)
    if args.adjust:
        race_plan = planner.adjust(race_plan, args.adjust)

    outputs = (
        (args.pacing_csv, lambda: pacing_csv(race_plan.pacing, race_plan.energy)),
        (args.fueling_csv, lambda: fueling_csv(race_plan.fueling)),
        (args.plan_json, lambda: plan_to_json_string(race_plan.pacing)),
    )
    written = 0
    for path, render in outputs:
        if path is None:
            continue
        path.write_text(render())
        logger.info("Wrote %s", path)
        written += 1

    if args.summary or written == 0:
        print(race_day_summary(race_plan))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        run(args)
    except (RidePacingError, OSError, ValueError) as exc:
        logger.error("Planning failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
