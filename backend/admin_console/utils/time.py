"""UTC helpers for order timestamps and date-range query parameters.

All times are UTC. The order API emits and accepts ISO 8601 strings with
millisecond precision and a Z suffix (JavaScript ``toISOString`` style).
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """Return the current UTC datetime, timezone-aware."""
    return datetime.now(UTC)


def format_timestamp(dt: datetime) -> str:
    """Format a datetime as ISO 8601 with millisecond precision and Z suffix.

    Output format: YYYY-MM-DDTHH:MM:SS.fffZ
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    utc_dt = dt.astimezone(UTC)
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_dt.microsecond // 1000:03d}Z"


def parse_timestamp(s: str) -> datetime:
    """Parse an ISO 8601 timestamp to a UTC-aware datetime.

    Accepts a Z suffix, an explicit offset, or a bare date. Naive values
    are taken to be UTC.
    """
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def start_of_day(d: date) -> datetime:
    """First instant of the given UTC day."""
    return datetime.combine(d, time.min, tzinfo=UTC)


def end_of_day(d: date) -> datetime:
    """Last representable instant of the given UTC day."""
    return datetime.combine(d, time.max, tzinfo=UTC)
