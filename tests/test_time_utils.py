from datetime import date

import pytest

from countrydistance.errors import TimestampError
from countrydistance.time_utils import parse_date_string, parse_timestamp, segment_date, within_range


def test_segment_date_uses_the_timestamp_offset():
    assert segment_date("2024-03-01T23:30:00-05:00") == "2024-03-01"
    assert segment_date("2024-03-02T00:30:00+01:00") == "2024-03-02"


def test_zulu_and_fractional_seconds_are_accepted():
    assert segment_date("2024-03-01T10:00:00.123Z") == "2024-03-01"
    assert parse_timestamp("2024-03-01T10:00:00Z").utcoffset().total_seconds() == 0


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "yesterday",
        "2024-13-01T00:00:00Z",
        "2024-03-01T10:00:00",
        "2024-03-01T10:00+01:00",
        "2024-03-01 10:00:00+01:00",
        "20240301T100000+0100",
        "2024-03-01T10:00:00+0100",
        "2024-03-01",
        " 2024-03-01T10:00:00Z",
    ],
)
def test_invalid_timestamps_raise(raw):
    with pytest.raises(TimestampError):
        segment_date(raw)


def test_parse_date_string_accepts_both_formats():
    assert parse_date_string("2024-03-01") == date(2024, 3, 1)
    assert parse_date_string(" 20240301 ") == date(2024, 3, 1)
    with pytest.raises(ValueError):
        parse_date_string("01/03/2024")


def test_within_range_is_inclusive():
    start, end = date(2024, 3, 1), date(2024, 3, 31)
    assert within_range("2024-03-01", start, end)
    assert within_range("2024-03-31", start, end)
    assert not within_range("2024-02-29", start, end)
    assert within_range("2024-04-01", start, None)
    assert not within_range("2024-02-01", start, None)
    assert not within_range("2024-04-01", None, end)
    assert within_range("2024-02-01", None, end)
    assert within_range("1999-01-01", None, None)
