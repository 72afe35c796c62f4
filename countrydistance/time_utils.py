from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from .errors import TimestampError

RFC3339_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})", re.ASCII)


def parse_timestamp(raw: str) -> datetime:
    """Parse an RFC 3339 timestamp, keeping the offset it was recorded in."""
    if not isinstance(raw, str) or not raw.strip():
        raise TimestampError(f"missing startTimestamp: {raw!r}")
    if not RFC3339_PATTERN.fullmatch(raw):
        raise TimestampError(f"startTimestamp {raw!r} is not an RFC 3339 timestamp")
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise TimestampError(f"invalid startTimestamp {raw!r}: {exc}") from exc


def segment_date(raw: str) -> str:
    return parse_timestamp(raw).strftime("%Y-%m-%d")


def parse_date_string(date_str: str) -> date:
    cleaned = date_str.strip()
    for fmt in ("%Y-%m-%d", "%Y%m%d"):
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid date format '{date_str}'. Use YYYYMMDD or YYYY-MM-DD.")


def within_range(day: str, start: Optional[date], end: Optional[date]) -> bool:
    if start and day < start.isoformat():
        return False
    if end and day > end.isoformat():
        return False
    return True
