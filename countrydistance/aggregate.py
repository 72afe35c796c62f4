from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import ResolutionError, TimestampError
from .geocode import CountryResolver
from .models import AggregateReport, ResolvedSegment, Segment
from .time_utils import segment_date, within_range

Lookup = Union[str, ResolutionError]


class DistanceAggregator:
    """Accumulate segment distances into country -> date -> kilometre buckets."""

    def __init__(self) -> None:
        self._buckets: Dict[str, Dict[str, float]] = {}
        self._lock = threading.Lock()

    def add(self, resolved: ResolvedSegment) -> None:
        with self._lock:
            per_country = self._buckets.setdefault(resolved.country_code, {})
            per_country[resolved.date] = per_country.get(resolved.date, 0.0) + resolved.distance_km

    def totals(self) -> AggregateReport:
        with self._lock:
            return {country: dict(days) for country, days in self._buckets.items()}


def _lookup(resolver: CountryResolver, segment: Segment) -> Lookup:
    try:
        return resolver.resolve(segment.start.latitude, segment.start.longitude)
    except ResolutionError as exc:
        return exc


def lookup_countries(
    segments: Sequence[Segment],
    resolver: CountryResolver,
    workers: int = 1,
) -> Iterator[Tuple[Segment, Lookup]]:
    """Yield each segment with its country code or resolution error, in input order."""
    if workers <= 1:
        for segment in segments:
            yield segment, _lookup(resolver, segment)
        return

    executor = ThreadPoolExecutor(max_workers=workers)
    futures: List[Future] = [executor.submit(_lookup, resolver, segment) for segment in segments]
    try:
        for segment, future in zip(segments, futures):
            yield segment, future.result()
    except BaseException:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)


def resolve_segment(segment: Segment, country_code: str) -> ResolvedSegment:
    return ResolvedSegment(
        segment=segment,
        country_code=country_code,
        date=segment_date(segment.start_timestamp),
    )


def aggregate_resolved(resolved_segments: Iterable[ResolvedSegment]) -> AggregateReport:
    aggregator = DistanceAggregator()
    for resolved in resolved_segments:
        aggregator.add(resolved)
    return aggregator.totals()


def _in_date_range(segment: Segment, start: Optional[date], end: Optional[date]) -> bool:
    try:
        day = segment_date(segment.start_timestamp)
    except TimestampError:
        # kept so the bad timestamp is reported after lookup
        return True
    return within_range(day, start, end)


def aggregate_segments(
    segments: Sequence[Segment],
    resolver: CountryResolver,
    workers: int = 1,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> AggregateReport:
    """Resolve and bucket every segment; failing segments are announced and skipped."""
    if start_date or end_date:
        segments = [segment for segment in segments if _in_date_range(segment, start_date, end_date)]
    aggregator = DistanceAggregator()
    for segment, lookup in lookup_countries(segments, resolver, workers):
        start = segment.start
        if isinstance(lookup, ResolutionError):
            print(f"Error getting country for lat: {start.latitude:f}, lng: {start.longitude:f} - {lookup}")
            continue
        try:
            resolved = resolve_segment(segment, lookup)
        except TimestampError as exc:
            print(f"Error parsing startTimestamp {segment.start_timestamp!r}: {exc}")
            continue
        if segment.distance_m < 0:
            print(
                f"Skipping segment at lat: {start.latitude:f}, lng: {start.longitude:f} "
                f"with negative distance {segment.distance_m}"
            )
            continue
        aggregator.add(resolved)
    return aggregator.totals()
