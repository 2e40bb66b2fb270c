import re
from datetime import datetime, timezone
from typing import Optional

_INTERVAL_UNITS = {"s": 1, "m": 60, "h": 3600}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_iso_date(date_str: Optional[str]) -> Optional[datetime]:
    """
    Parses an ISO 8601 date string into a UTC datetime.
    Handles the 'Z' suffix, which datetime.fromisoformat() rejects before Python 3.11.
    Naive values are assumed to be UTC.

    Returns:
        A datetime object or None if the string is empty or cannot be parsed.
    """
    if not date_str:
        return None

    if date_str.endswith("Z"):
        date_str = date_str[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(date_str)
    except ValueError:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso_z(dt: datetime) -> str:
    """
    Converts a datetime to an ISO 8601 string with 'Z' suffix for UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_interval_seconds(interval_str: str) -> int:
    """Parses a Prometheus-style duration such as '30s', '5m' or '1h' into seconds."""
    match = re.match(r"^(\d+)([smh])$", interval_str.strip().lower())
    if not match:
        raise ValueError(f"Invalid interval format: '{interval_str}'. Use 's', 'm', or 'h'.")
    value, unit = int(match.group(1)), match.group(2)
    return value * _INTERVAL_UNITS[unit]
