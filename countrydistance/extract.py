from __future__ import annotations

from typing import List, Mapping, Optional

from .constants import E7_SCALE
from .errors import InputError
from .models import Coordinate, Segment


def e7_to_degrees(value: int) -> float:
    return value / E7_SCALE


def parse_json_int(value: object, field: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field} must be an integer, got {value!r}")
    return value


def parse_location(location: object) -> Coordinate:
    # Absent fields fall back to 0, so a segment with no start location is
    # looked up at 0,0 rather than dropped.
    if not isinstance(location, Mapping):
        location = {}
    return Coordinate(
        latitude=e7_to_degrees(parse_json_int(location.get("latitudeE7"), "latitudeE7")),
        longitude=e7_to_degrees(parse_json_int(location.get("longitudeE7"), "longitudeE7")),
    )


def parse_activity_segment(payload: Mapping) -> Segment:
    duration = payload.get("duration")
    if not isinstance(duration, Mapping):
        duration = {}
    return Segment(
        start=parse_location(payload.get("startLocation")),
        end=parse_location(payload.get("endLocation")),
        distance_m=parse_json_int(payload.get("distance"), "distance"),
        start_timestamp=str(duration.get("startTimestamp") or ""),
    )


def extract_segments(document: object) -> List[Segment]:
    """Return the activity segments of a timeline export in file order.

    Only ``timelineObjects`` entries carrying an ``activitySegment`` payload
    yield a segment; place visits and unknown record kinds are skipped.
    """
    if not isinstance(document, Mapping):
        raise InputError("Timeline export must be a JSON object with 'timelineObjects'.")
    entries: Optional[list] = document.get("timelineObjects")
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise InputError("'timelineObjects' must be a list.")

    segments: List[Segment] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            continue
        payload = entry.get("activitySegment")
        if not isinstance(payload, Mapping):
            continue
        try:
            segments.append(parse_activity_segment(payload))
        except (TypeError, ValueError) as exc:
            raise InputError(f"Malformed activitySegment at timelineObjects[{index}]: {exc}") from exc
    return segments
