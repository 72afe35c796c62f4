from __future__ import annotations

from pathlib import Path

DEFAULT_INPUT_FILE = Path("timeline.json")
DEFAULT_OUTPUT_DIR = Path(".")
REPORT_FILENAME_TEMPLATE = "distance_report_{date}.txt"
REPORT_HEADER = "Total distance traveled in each country per day (in kilometers):"

NOMINATIM_USER_AGENT = "countrydistance/0.1"
COUNTRY_ZOOM = 3
DEFAULT_TIMEOUT = 10.0
# Public Nominatim allows at most one request per second.
DEFAULT_MIN_DELAY_SECONDS = 1.0
DEFAULT_CACHE_PRECISION = 4
DEFAULT_WORKERS = 1

E7_SCALE = 10_000_000
