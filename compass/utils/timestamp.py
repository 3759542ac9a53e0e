"""Timestamp helpers shared by the scoring contexts.

All datetimes are naive local time, matching datetime.now().
"""

from datetime import date, datetime
from typing import Optional, Union

SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR


def now() -> datetime:
    """Current local time."""
    return datetime.now()


def parse_timestamp(value: Union[str, datetime, date, None]) -> Optional[datetime]:
    """
    Coerce an ISO 8601 string, date or datetime to a naive datetime.

    A trailing "Z" is accepted; timezone-aware values are converted to local
    time and made naive so they compare with datetime.now().

    Raises:
        ValueError: If a string is not valid ISO 8601
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def days_between(earlier: datetime, later: datetime) -> float:
    """Fractional days from earlier to later (negative if later is before earlier)."""
    return (later - earlier).total_seconds() / SECONDS_PER_DAY


def hours_between(earlier: datetime, later: datetime) -> float:
    """Fractional hours from earlier to later."""
    return (later - earlier).total_seconds() / SECONDS_PER_HOUR


def format_timestamp(value: Union[str, datetime], relative: bool = False) -> str:
    """
    Format a timestamp for display.

    Args:
        value: ISO 8601 string or datetime
        relative: If True, show compact relative time (e.g., "2h ago")
                  If False, show absolute time (e.g., "2025-11-13 18:45:40")

    Returns:
        Human-readable timestamp, or the input unchanged if it cannot be parsed
    """
    try:
        dt = parse_timestamp(value)
    except (ValueError, TypeError):
        return str(value)
    if dt is None:
        return ""

    if relative:
        return _format_relative_time(dt)
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def _format_relative_time(dt: datetime) -> str:
    """Compact relative time: "30s ago", "15m ago", "2h ago", "5d ago" (or "from now")."""
    diff = now() - dt

    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = diff.days

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{days}d {suffix}"
