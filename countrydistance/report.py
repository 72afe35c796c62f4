from __future__ import annotations

from typing import List

import pycountry

from .constants import REPORT_HEADER
from .models import AggregateReport


def render_report(report: AggregateReport) -> List[str]:
    lines = [REPORT_HEADER]
    for country in sorted(report):
        lines.append(f"Country: {country}")
        for day, distance in sorted(report[country].items()):
            lines.append(f"  {day}: {distance:.2f} km")
    return lines


def lookup_country_name(iso_code: str) -> str:
    if not iso_code:
        return "Unknown"
    match = pycountry.countries.get(alpha_2=iso_code.upper())
    if match:
        return getattr(match, "common_name", match.name)
    return iso_code.upper()


def print_summary(report: AggregateReport) -> None:
    if not report:
        print("\nNo distance could be attributed to any country.")
        return

    print("\nDistance by country")
    print("-------------------")
    for country in sorted(report):
        days = report[country]
        total = sum(days.values())
        print(
            f"  - {lookup_country_name(country)} ({country}): {total:.2f} km "
            f"over {len(days)} day{'s' if len(days) != 1 else ''}"
        )
