"""Date and time helpers."""

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from dateutil import parser as date_parser
from dateutil import tz


def get_timezone(name: str) -> tzinfo:
    """Return the tzinfo for an IANA name.

    Raises:
        ValueError: If the timezone is unknown
    """
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown timezone '{name}'")
    return zone


def now_in(zone_name: str) -> datetime:
    """Current wall-clock time in the given timezone."""
    return datetime.now(get_timezone(zone_name))


def to_date_part(day: date) -> str:
    """Format a date as ``YYYYMMDD``."""
    return day.strftime("%Y%m%d")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports:
    - Relative dates: "today", "yesterday", "tomorrow"
    - Compact dates: "20250715"
    - Anything dateutil understands: "2025-07-15", "2025/07/15", ...

    Args:
        date_str: Date string
        today: Reference date for relative names (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    if len(date_str) == 8 and date_str.isdigit():
        try:
            return datetime.strptime(date_str, "%Y%m%d").date()
        except ValueError as e:
            raise ValueError(f"Could not parse date '{date_str}': {e}")

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
