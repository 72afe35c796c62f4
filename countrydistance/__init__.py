"""
Country distance report package.

Turns a Google location-history export into a per-country, per-day distance
report. The public entrypoint for CLI usage is ``countrydistance.cli.main``.
"""

from .cli import main  # noqa: F401
