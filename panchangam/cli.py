"""Command line interface for Panchangam."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from .atlas import Location, resolve_zone
from .config import PanchangCfg, Settings, load_settings
from .engine import PanchangComputationError, compute_panchang
from .ephemeris import SUPPORTED_AYANAMSHAS

__all__ = ["build_parser", "main"]

LOG = logging.getLogger(__name__)


def _parse_moment(value: str | None, tzid: str) -> datetime:
    """Parse ``value`` as ISO-8601; naive values are read in ``tzid`` wall time."""

    if not value:
        return datetime.now(UTC).astimezone(resolve_zone(tzid))
    moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=resolve_zone(tzid))
    return moment


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = load_settings(Path(args.config) if args.config else None)
    overrides: dict[str, object] = {}
    if args.ayanamsa:
        overrides["ayanamsa"] = args.ayanamsa
    if args.tropical:
        overrides["sidereal"] = False
    if args.no_sunrise_anchor:
        overrides["anchor_to_sunrise"] = False
    if not overrides:
        return settings
    panchang = PanchangCfg.model_validate({**settings.panchang.model_dump(), **overrides})
    return settings.model_copy(update={"panchang": panchang})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="panchangam",
        description="Compute tithi, nakshatra, yoga, karana and daily windows",
    )
    parser.add_argument(
        "--date",
        help="Instant to evaluate (ISO-8601). Naive values use --tz; default is now",
    )
    parser.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
    parser.add_argument("--lon", type=float, required=True, help="Longitude in degrees (east positive)")
    parser.add_argument("--tz", default="UTC", help="IANA timezone identifier for output")
    parser.add_argument("--name", help="Display name of the location")
    parser.add_argument("--altitude", type=float, default=0.0, help="Altitude in metres")
    parser.add_argument(
        "--ayanamsa",
        choices=sorted(SUPPORTED_AYANAMSHAS),
        help="Sidereal ayanamsa (defaults to the configured value)",
    )
    parser.add_argument("--config", help="Path to a settings YAML file")
    parser.add_argument(
        "--tropical",
        action="store_true",
        help="Use tropical longitudes without the ayanamsa correction",
    )
    parser.add_argument(
        "--no-sunrise-anchor",
        action="store_true",
        help="Compute elements at the instant instead of the day's sunrise",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        location = Location(
            latitude=args.lat,
            longitude=args.lon,
            timezone=args.tz,
            altitude=args.altitude,
            name=args.name,
        )
        moment = _parse_moment(args.date, location.timezone)
        settings = _settings_from_args(args)
        record = compute_panchang(moment, location, settings=settings)
    except PanchangComputationError as exc:
        print(f"panchangam: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"panchangam: invalid input: {exc}", file=sys.stderr)
        return 1

    LOG.debug("Computed pañchānga for %s", record.moment.isoformat())
    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    return 0
