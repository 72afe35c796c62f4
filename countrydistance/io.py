from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from .constants import DEFAULT_INPUT_FILE, REPORT_FILENAME_TEMPLATE
from .errors import InputError, OutputError


def resolve_input_path(candidate: Optional[Path]) -> Path:
    path = (candidate or DEFAULT_INPUT_FILE).expanduser()
    if not path.exists():
        raise InputError(f"Input file not found: {path}")
    return path


def load_timeline_document(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except OSError as exc:
        raise InputError(f"Error reading JSON file {path}: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InputError(f"Error parsing JSON file {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise InputError(f"Unrecognised timeline export structure in {path}")
    return payload


def report_output_path(output_dir: Path, today: date) -> Path:
    return output_dir / REPORT_FILENAME_TEMPLATE.format(date=today.strftime("%Y-%m-%d"))


def write_report(lines: Sequence[str], path: Path) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            for line in lines:
                handle.write(f"{line}\n")
    except OSError as exc:
        raise OutputError(f"Error creating output file {path}: {exc}") from exc
    return path
