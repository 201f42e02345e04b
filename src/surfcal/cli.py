"""Command-line interface for surfcal."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from pydantic import ValidationError

from surfcal.calendar.base import CalendarError, CalendarSource
from surfcal.config import ConfigurationError, get_settings
from surfcal.models.surf import AcceptanceCriteria, Rating, SurfableHour
from surfcal.providers.base import ForecastSource, ProviderError
from surfcal.providers.surfline import POPULAR_SPOTS
from surfcal.recommendations.surfable_hours import (
    SpotNameCache,
    SurfableHoursService,
    group_by_day,
    group_by_spot,
)
from surfcal.sources import build_calendar_source, connect_forecast_source

logger = logging.getLogger(__name__)

DAY_SECONDS = 86400

MISSING_SPOT_ID = "Error: At least one --spotId argument is required."


class CLIError(Exception):
    """Invalid command-line usage."""

    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise CLIError(f"Error: {message}")


@dataclass
class CLIResult:
    """Outcome of a CLI run."""

    success: bool
    output: str = ""
    error: str | None = None


@dataclass
class Horizon:
    """Time window to search, with a label for output."""

    label: str
    days: int
    now: float


def _wave_height(value: str) -> float:
    try:
        height = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError("--wave-min requires a numeric value (feet).")
    if height < 0:
        raise argparse.ArgumentTypeError("--wave-min must be a positive number.")
    return height


def _rating(value: str) -> Rating:
    try:
        return Rating.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_date(value: str) -> datetime:
    """Parse a DD/MM/YYYY date as local midnight."""
    try:
        return datetime.strptime(value, "%d/%m/%Y")
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Use dd/mm/yyyy."
        )


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="surfcal",
        description="Find surfable hours at your favourite spots and check them against your calendar",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument(
        "--spotId",
        "--spot-id",
        dest="spot_ids",
        action="append",
        default=[],
        metavar="SPOT_ID",
        help="Surf spot ID (can be used multiple times)",
    )
    parser.add_argument(
        "--calendar",
        dest="calendar_ids",
        action="append",
        default=[],
        metavar="CALENDAR_ID",
        help="Google Calendar ID to check for busy times (can be used multiple times)",
    )
    parser.add_argument(
        "--wave-min",
        type=_wave_height,
        metavar="FEET",
        help="Minimum wave height in feet (default: 2)",
    )
    parser.add_argument(
        "--rating-min",
        type=_rating,
        metavar="RATING",
        help="Minimum surf rating (default: POOR_TO_FAIR). Valid ratings: "
        + ", ".join(r.value for r in Rating),
    )

    horizon = parser.add_mutually_exclusive_group()
    horizon.add_argument("--today", action="store_true", help="Surfable hours for today")
    horizon.add_argument(
        "--tomorrow", action="store_true", help="Surfable hours from tomorrow"
    )
    horizon.add_argument(
        "--week", action="store_true", help="Surfable hours for the next 7 days"
    )
    horizon.add_argument(
        "--on",
        type=parse_date,
        metavar="DD/MM/YYYY",
        help="Surfable hours from a specific date",
    )
    horizon.add_argument("--search", metavar="QUERY", help="Search surf spots by name")

    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def resolve_horizon(args: argparse.Namespace, now: float) -> Horizon | None:
    """Turn the horizon flag into a search window, or None if none was given."""
    if args.today:
        return Horizon("today", 1, now)
    if args.tomorrow:
        return Horizon("tomorrow", 7, now + DAY_SECONDS)
    if args.week:
        return Horizon("the week", 7, now)
    if args.on is not None:
        return Horizon(args.on.strftime("%d/%m/%Y"), 7, args.on.timestamp())
    return None


def usage_text() -> str:
    lines = [
        "Welcome to surfcal!",
        "Usage: surfcal --spotId ID [--spotId ID ...] [--calendar ID ...] "
        "[--wave-min FEET] [--rating-min RATING] "
        "(--today | --tomorrow | --week | --on DD/MM/YYYY)",
        "       surfcal --search QUERY",
        "",
        "Popular spot IDs:",
    ]
    lines.extend(f"  {name + ':':<14}{spot_id}" for spot_id, name in POPULAR_SPOTS.items())
    return "\n".join(lines)


def _time(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%H:%M")


async def format_hours(
    hours: list[SurfableHour],
    horizon: Horizon,
    spot_count: int,
    calendar_count: int,
    names: SpotNameCache,
) -> str:
    """Render surfable hours grouped by spot and day."""
    plural = "s" if spot_count > 1 else ""
    header = f"Surfable hours for {horizon.label} ({spot_count} spot{plural})"
    if calendar_count:
        header += f" (checked against {calendar_count} calendar{'s' if calendar_count > 1 else ''})"
    lines = [header + ":"]

    if not hours:
        lines.append(f"No surfable hours found for {horizon.label}.")
        return "\n".join(lines)

    for spot_id, spot_hours in group_by_spot(hours).items():
        lines.append("")
        lines.append(f"Spot: {await names.display(spot_id)}")
        for day, day_hours in group_by_day(spot_hours).items():
            weekday = datetime.fromisoformat(day).strftime("%A %d/%m/%Y")
            lines.append(f"  {weekday}:")
            for hour in day_hours:
                suffix = " [CALENDAR CONFLICT]" if hour.calendar_conflict else ""
                lines.append(
                    f"    {_time(hour.start_time)} - {_time(hour.end_time)} "
                    f"({hour.condition.value}, {hour.wave_height:g}ft){suffix}"
                )
    return "\n".join(lines)


async def run_cli(
    argv: Sequence[str],
    forecast_source: ForecastSource,
    calendar_source: CalendarSource | None = None,
    names: SpotNameCache | None = None,
    now: float | None = None,
) -> CLIResult:
    """Run the CLI against the given sources and capture its output."""
    names = names or SpotNameCache(forecast_source)
    names.clear()

    try:
        args = build_parser().parse_args(list(argv))
    except CLIError as e:
        return CLIResult(success=False, error=str(e))

    now = time.time() if now is None else now
    horizon = resolve_horizon(args, now)

    try:
        if args.search is not None:
            results = await forecast_source.search_spots(args.search)
            if args.json:
                return CLIResult(
                    success=True,
                    output=json.dumps([r.model_dump(mode="json") for r in results], indent=2),
                )
            if not results:
                return CLIResult(success=True, output=f"No spots found for '{args.search}'.")
            lines = [f"Spots matching '{args.search}':"]
            for result in results:
                where = ", ".join(p for p in (result.region, result.country) if p)
                lines.append(f"  {result.name} ({result.id})" + (f" - {where}" if where else ""))
            return CLIResult(success=True, output="\n".join(lines))

        if horizon is None:
            return CLIResult(success=True, output=usage_text())

        if not args.spot_ids:
            return CLIResult(success=False, error=MISSING_SPOT_ID)

        settings = get_settings()
        defaults = settings.default_criteria()
        criteria = AcceptanceCriteria(
            min_wave_height=(
                args.wave_min if args.wave_min is not None else defaults.min_wave_height
            ),
            min_rating=args.rating_min or defaults.min_rating,
        )

        service = SurfableHoursService(forecast_source, calendar_source)
        hours = await service.get_surfable_hours(
            args.spot_ids,
            days=horizon.days,
            now=horizon.now,
            calendar_ids=args.calendar_ids or None,
            criteria=criteria,
        )
    except (ProviderError, CalendarError, ValueError) as e:
        logger.debug("Run failed", exc_info=True)
        return CLIResult(success=False, error=f"Error: {e}")

    if args.json:
        output = json.dumps([hour.to_dict() for hour in hours], indent=2)
    else:
        output = await format_hours(
            hours, horizon, len(args.spot_ids), len(args.calendar_ids), names
        )
    return CLIResult(success=True, output=output)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


async def _main(argv: list[str]) -> CLIResult:
    settings = get_settings()
    try:
        forecast_source = await connect_forecast_source(settings)
    except (ConfigurationError, ProviderError) as e:
        return CLIResult(success=False, error=f"Error: {e}")

    async with forecast_source:
        return await run_cli(argv, forecast_source, build_calendar_source(settings))


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    argv = sys.argv[1:] if argv is None else argv

    # Validate arguments before touching any credentials
    try:
        args = build_parser().parse_args(argv)
    except CLIError as e:
        print(e, file=sys.stderr)
        return 1

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    if args.search is None:
        if resolve_horizon(args, time.time()) is None:
            print(usage_text())
            return 0
        if not args.spot_ids:
            print(MISSING_SPOT_ID, file=sys.stderr)
            return 1

    result = asyncio.run(_main(argv))
    if not result.success:
        if result.error:
            print(result.error, file=sys.stderr)
        return 1

    if result.output:
        print(result.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
