from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Dict, Optional

from .constants import (
    DEFAULT_CACHE_PRECISION,
    DEFAULT_INPUT_FILE,
    DEFAULT_MIN_DELAY_SECONDS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TIMEOUT,
    DEFAULT_WORKERS,
    NOMINATIM_USER_AGENT,
)

# country code -> YYYY-MM-DD -> kilometres
AggregateReport = Dict[str, Dict[str, float]]


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Segment:
    start: Coordinate
    end: Coordinate
    distance_m: int
    start_timestamp: str


@dataclass(frozen=True)
class ResolvedSegment:
    segment: Segment
    country_code: str
    date: str

    @property
    def distance_km(self) -> float:
        return self.segment.distance_m / 1000.0


@dataclass(frozen=True)
class RunConfig:
    """Everything one invocation needs, passed explicitly into ``cli.run``."""

    today: date
    input_path: Path = DEFAULT_INPUT_FILE
    output_dir: Path = DEFAULT_OUTPUT_DIR
    user_agent: str = NOMINATIM_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    min_delay_seconds: float = DEFAULT_MIN_DELAY_SECONDS
    workers: int = DEFAULT_WORKERS
    cache_precision: Optional[int] = DEFAULT_CACHE_PRECISION
    offline: bool = False
    start_date: Optional[date] = None
    end_date: Optional[date] = None
