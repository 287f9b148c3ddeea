"""Datetime helpers: UTC normalisation and local calendar-day bounds."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from app.shared.utils.datetime import ensure_utc, local_day_bounds, parse_iso_day


def test_ensure_utc_naive_is_assumed_utc() -> None:
    assert ensure_utc(datetime(2025, 1, 1, 10, 0)) == datetime(2025, 1, 1, 10, 0, tzinfo=UTC)


def test_ensure_utc_converts_aware() -> None:
    manila = timezone(timedelta(hours=8))
    converted = ensure_utc(datetime(2025, 1, 1, 10, 0, tzinfo=manila))
    assert converted == datetime(2025, 1, 1, 2, 0, tzinfo=UTC)
    assert converted.tzinfo is UTC


def test_ensure_utc_none() -> None:
    assert ensure_utc(None) is None


def test_parse_iso_day() -> None:
    assert parse_iso_day("2025-03-15") == date(2025, 3, 15)
    with pytest.raises(ValueError):
        parse_iso_day("03/15/2025")


def test_day_bounds_in_utc() -> None:
    start, end = local_day_bounds(date(2025, 3, 15), "UTC")
    assert start == datetime(2025, 3, 15, tzinfo=UTC)
    assert end == datetime(2025, 3, 16, tzinfo=UTC)


def test_day_bounds_follow_dst() -> None:
    """The spring-forward day in New York is 23 hours long."""
    start, end = local_day_bounds(date(2025, 3, 9), "America/New_York")
    assert start == datetime(2025, 3, 9, 5, 0, tzinfo=UTC)
    assert end - start == timedelta(hours=23)
