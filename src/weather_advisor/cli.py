"""Command-line interface for weather advice."""

import argparse
import asyncio
import logging
import sys

from weather_advisor.app import InvalidLocationError, WeatherApp, WeatherReport
from weather_advisor.config import get_settings
from weather_advisor.models.location import Coordinates
from weather_advisor.normalizer import MalformedObservationError
from weather_advisor.preferences import PreferencesStore
from weather_advisor.providers.base import ProviderError

logger = logging.getLogger(__name__)


def _bullets(title: str, entries: tuple[str, ...]) -> list[str]:
    if not entries:
        return []
    return [f"{title}:"] + [f"  - {entry}" for entry in entries]


def render_report(report: WeatherReport) -> str:
    """Render a report as plain text for the terminal."""
    bundle = report.bundle
    scores = bundle.scores

    lines = [
        report.location_name,
        f"  {report.observation.summary()}",
    ]
    if report.description:
        lines.append(f"  {report.description}")
    lines.append("")
    lines.append(bundle.personalized_tip)
    lines.append("")
    lines.append(
        f"Clothing weight {scores.clothing_weight:.0%} | "
        f"Activity {scores.activity_level:.0%} | "
        f"Comfort {scores.comfort_index:.0%}"
    )
    lines.extend(_bullets("What to wear", bundle.clothing))
    lines.extend(_bullets("What to bring", bundle.items))
    lines.extend(_bullets("Outdoors", bundle.activities.outdoor))
    lines.extend(_bullets("Indoors", bundle.activities.indoor))
    lines.extend(_bullets("Tips", bundle.activities.tips))
    if report.result.is_fallback():
        lines.append("")
        lines.append("(Simplified advice: detailed recommendations were unavailable.)")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="weather-advisor",
        description="Weather Advisor - What to wear, bring and do in today's weather",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Advise command
    advise_parser = subparsers.add_parser(
        "advise", help="Get advice for a location"
    )
    advise_parser.add_argument(
        "location",
        nargs="?",
        help="City name or lat,lon coordinates (default: your location or last city)",
    )
    advise_parser.add_argument(
        "--here",
        action="store_true",
        help="Use your approximate current location",
    )
    advise_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )

    # Preferences command
    subparsers.add_parser("prefs", help="Show saved preferences")

    return parser


async def _advise(app: WeatherApp, location: str | None, here: bool) -> WeatherReport | None:
    try:
        if here:
            return await app.lookup_current_location()
        if location:
            try:
                coordinates = Coordinates.from_string(location)
            except ValueError:
                return await app.lookup_city(location)
            return await app.lookup_coordinates(coordinates)
        return await app.start()
    finally:
        await app.close()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "advise" and args.here and args.location:
        parser.error("argument location: not allowed with argument --here")

    settings = get_settings()
    logging.basicConfig(
        level="DEBUG" if args.verbose else settings.effective_log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "prefs":
        store = PreferencesStore(
            settings.preferences_path, default_location=settings.default_location
        )
        print(store.load().model_dump_json(indent=2))
        return 0

    app = WeatherApp.from_settings(settings)
    try:
        report = asyncio.run(_advise(app, args.location, args.here))
    except (InvalidLocationError, ProviderError, MalformedObservationError) as e:
        logger.debug("Lookup failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if report is None:
        print("Error: no weather data available", file=sys.stderr)
        return 1

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print(render_report(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
