from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from .aggregate import aggregate_segments
from .constants import (
    DEFAULT_CACHE_PRECISION,
    DEFAULT_INPUT_FILE,
    DEFAULT_MIN_DELAY_SECONDS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TIMEOUT,
    DEFAULT_WORKERS,
    NOMINATIM_USER_AGENT,
)
from .errors import CountryDistanceError
from .extract import extract_segments
from .geocode import CountryResolver, build_resolver
from .io import load_timeline_document, report_output_path, resolve_input_path, write_report
from .models import RunConfig
from .report import print_summary, render_report
from .time_utils import parse_date_string


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Report the distance travelled per country per day from a Google location-history export."
    )
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        default=DEFAULT_INPUT_FILE,
        help=f"Path to the timeline JSON export (default: {DEFAULT_INPUT_FILE}).",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help="Directory for distance_report_<YYYY-MM-DD>.txt (default: current directory).",
    )
    parser.add_argument(
        "--start-date",
        type=str,
        default=None,
        help="Only count segments starting on or after this date (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--end-date",
        type=str,
        default=None,
        help="Only count segments starting on or before this date (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help="Number of concurrent country lookups (default: 1).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Seconds to wait for each reverse geocoding request (default: 10).",
    )
    parser.add_argument(
        "--min-delay",
        type=float,
        default=DEFAULT_MIN_DELAY_SECONDS,
        help="Minimum seconds between Nominatim requests (default: 1).",
    )
    parser.add_argument(
        "--user-agent",
        type=str,
        default=NOMINATIM_USER_AGENT,
        help="User agent sent to Nominatim; the public instance requires one identifying your application.",
    )
    cache_group = parser.add_mutually_exclusive_group()
    cache_group.add_argument(
        "--cache-precision",
        type=int,
        default=DEFAULT_CACHE_PRECISION,
        help="Reuse lookups for coordinates equal to this many decimals (default: 4).",
    )
    cache_group.add_argument(
        "--no-cache",
        action="store_true",
        help="Send one lookup per segment even for repeated coordinates.",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Resolve countries locally with the optional reverse_geocoder package instead of Nominatim.",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, today: Optional[date] = None) -> RunConfig:
    start = parse_date_string(args.start_date) if args.start_date else None
    end = parse_date_string(args.end_date) if args.end_date else None
    if start and end and start > end:
        raise ValueError("Start date must be on or before the end date.")
    if args.workers < 1:
        raise ValueError("--workers must be at least 1.")
    return RunConfig(
        today=today or date.today(),
        input_path=args.input,
        output_dir=args.output_dir,
        user_agent=args.user_agent,
        timeout=args.timeout,
        min_delay_seconds=args.min_delay,
        workers=args.workers,
        cache_precision=None if args.no_cache else args.cache_precision,
        offline=args.offline,
        start_date=start,
        end_date=end,
    )


def run(config: RunConfig, resolver: Optional[CountryResolver] = None) -> Path:
    """Build the report described by ``config`` and return the written path."""
    input_path = resolve_input_path(config.input_path)
    document = load_timeline_document(input_path)
    segments = extract_segments(document)
    if not segments:
        print(f"No activity segments found in {input_path}.")

    if resolver is None:
        resolver = build_resolver(config)
    report = aggregate_segments(
        segments,
        resolver,
        workers=config.workers,
        start_date=config.start_date,
        end_date=config.end_date,
    )

    output_path = write_report(render_report(report), report_output_path(config.output_dir, config.today))
    print_summary(report)
    print(f"Distance report saved to {output_path}")
    return output_path


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ValueError as exc:
        raise SystemExit(str(exc))
    try:
        run(config)
    except CountryDistanceError as exc:
        raise SystemExit(str(exc))
