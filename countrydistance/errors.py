from __future__ import annotations


class CountryDistanceError(Exception):
    """Base class for errors raised by the report pipeline."""


class InputError(CountryDistanceError):
    """The export file could not be read or is not a timeline document."""


class OutputError(CountryDistanceError):
    """The report file could not be written."""


class ResolutionError(CountryDistanceError):
    """A coordinate could not be resolved to a country code."""


class TimestampError(CountryDistanceError, ValueError):
    """A segment start timestamp is not an RFC 3339 timestamp with offset."""
