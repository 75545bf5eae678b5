"""Tests for timestamp parsing and time filters."""

from datetime import datetime, timedelta, timezone

import pytest

from cc_history.errors import InvalidTimeError
from cc_history.timerange import parse_bound, parse_timestamp, time_in_range

NOW = datetime(2024, 6, 15, 13, 30, tzinfo=timezone.utc)


def test_parse_timestamp_formats():
    utc = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)

    assert parse_timestamp("2024-01-15T10:00:00Z") == utc
    assert parse_timestamp("2024-01-15T10:00:00.000Z") == utc
    assert parse_timestamp("2024-01-15T12:00:00+02:00") == utc
    assert parse_timestamp("2024-01-15T10:00:00") == utc
    assert parse_timestamp("2024-01-15") == datetime(2024, 1, 15, tzinfo=timezone.utc)


def test_parse_timestamp_invalid():
    assert parse_timestamp("not-a-time") is None
    assert parse_timestamp("") is None


def test_parse_bound_keywords():
    assert parse_bound("today", now=NOW) == datetime(2024, 6, 15, tzinfo=timezone.utc)
    assert parse_bound("week", now=NOW) == NOW - timedelta(days=7)
    assert parse_bound("month", now=NOW) == NOW - timedelta(days=30)


def test_parse_bound_relative():
    assert parse_bound("2h", now=NOW) == NOW - timedelta(hours=2)
    assert parse_bound("3d", now=NOW) == NOW - timedelta(days=3)
    assert parse_bound("1w", now=NOW) == NOW - timedelta(weeks=1)


def test_parse_bound_absolute_and_none():
    assert parse_bound("2024-01-01", now=NOW) == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert parse_bound(None) is None


def test_parse_bound_invalid():
    with pytest.raises(InvalidTimeError):
        parse_bound("yesterday-ish")


def test_time_in_range_bounds_inclusive():
    since = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    until = datetime(2024, 1, 15, 11, 0, tzinfo=timezone.utc)

    assert time_in_range("2024-01-15T10:00:00Z", since, until)
    assert time_in_range("2024-01-15T11:00:00Z", since, until)
    assert not time_in_range("2024-01-15T09:59:59Z", since, until)
    assert not time_in_range("2024-01-15T11:00:01Z", since, until)


def test_time_in_range_fails_open():
    """Unparsable timestamps are kept rather than dropped."""
    since = datetime(2030, 1, 1, tzinfo=timezone.utc)
    assert time_in_range("garbage", since, None)
