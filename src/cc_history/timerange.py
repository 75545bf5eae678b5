"""Timestamp parsing and time-window filtering."""

import re
from datetime import datetime, timedelta, timezone

from cc_history.errors import InvalidTimeError

RELATIVE_RE = re.compile(r"^(\d+)([hdwmy])$")


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp or a bare date into a UTC-aware datetime.

    Returns None when the value can't be parsed.
    """
    value = value.strip()
    if not value:
        return None

    try:
        if "T" in value or " " in value:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        else:
            dt = datetime.fromisoformat(value + "T00:00:00")
    except ValueError:
        return None

    # If naive, assume UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_bound(value: str | None, now: datetime | None = None) -> datetime | None:
    """Parse a user-supplied since/until value.

    Supports:
    - Keywords: "today", "week", "month"
    - Relative: "2h", "7d", "1w", "3m", "1y"
    - Absolute: "2024-01-01", "2024-01-01T00:00:00", "2024-01-01T00:00:00Z"
    """
    if value is None:
        return None

    text = value.strip().lower()
    if not text:
        return None

    if now is None:
        now = datetime.now(tz=timezone.utc)

    if text == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if text == "week":
        return now - timedelta(days=7)
    if text == "month":
        return now - timedelta(days=30)

    match = RELATIVE_RE.match(text)
    if match:
        amount = int(match.group(1))
        unit = match.group(2)
        if unit == "h":
            return now - timedelta(hours=amount)
        elif unit == "d":
            return now - timedelta(days=amount)
        elif unit == "w":
            return now - timedelta(weeks=amount)
        elif unit == "m":
            return now - timedelta(days=amount * 30)  # Approximate
        elif unit == "y":
            return now - timedelta(days=amount * 365)  # Approximate

    dt = parse_timestamp(value)
    if dt is None:
        raise InvalidTimeError(f"Invalid time value: {value}")
    return dt


def time_in_range(timestamp: str, since: datetime | None, until: datetime | None) -> bool:
    """Check a record timestamp against inclusive bounds.

    Unparsable timestamps are kept.
    """
    if since is None and until is None:
        return True

    ts = parse_timestamp(timestamp)
    if ts is None:
        return True

    if since is not None and ts < since:
        return False
    if until is not None and ts > until:
        return False
    return True
