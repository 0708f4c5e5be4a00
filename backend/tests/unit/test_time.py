"""Tests for UTC timestamp helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from admin_console.utils.time import (
    end_of_day,
    format_timestamp,
    parse_timestamp,
    start_of_day,
    utc_now,
)


class TestUtcHelpers:
    """Test UTC time helpers."""

    def test_utc_now_is_utc(self) -> None:
        dt = utc_now()
        assert dt.tzinfo is not None
        assert dt.tzinfo == UTC

    def test_format_timestamp_millisecond_z_suffix(self) -> None:
        dt = datetime(2026, 2, 14, 12, 30, 45, 123456, tzinfo=UTC)
        assert format_timestamp(dt) == "2026-02-14T12:30:45.123Z"

    def test_format_timestamp_converts_offset_to_utc(self) -> None:
        ist = timezone(timedelta(hours=5, minutes=30))
        dt = datetime(2026, 2, 14, 5, 30, tzinfo=ist)
        assert format_timestamp(dt) == "2026-02-14T00:00:00.000Z"

    def test_format_timestamp_treats_naive_as_utc(self) -> None:
        assert format_timestamp(datetime(2026, 1, 1)) == "2026-01-01T00:00:00.000Z"


class TestParseTimestamp:
    """parse_timestamp accepts the shapes the order API emits."""

    def test_z_suffix(self) -> None:
        parsed = parse_timestamp("2026-02-14T12:30:45.123Z")
        assert parsed == datetime(2026, 2, 14, 12, 30, 45, 123000, tzinfo=UTC)
        assert parsed.tzinfo == UTC

    def test_explicit_offset_normalized(self) -> None:
        parsed = parse_timestamp("2026-02-14T05:30:00+05:30")
        assert parsed == datetime(2026, 2, 14, 0, 0, tzinfo=UTC)

    def test_naive_is_utc(self) -> None:
        assert parse_timestamp("2026-02-14T12:00:00").tzinfo == UTC

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")


class TestDayBounds:
    """Date-range filters cover whole UTC days."""

    def test_start_of_day(self) -> None:
        assert start_of_day(date(2026, 3, 1)) == datetime(2026, 3, 1, tzinfo=UTC)

    def test_end_of_day(self) -> None:
        end = end_of_day(date(2026, 3, 1))
        assert end == datetime(2026, 3, 1, 23, 59, 59, 999999, tzinfo=UTC)
        assert format_timestamp(end) == "2026-03-01T23:59:59.999Z"
