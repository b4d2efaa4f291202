"""Timezone utilities for US/Eastern market time."""

from datetime import date, datetime, time
from typing import Optional

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def parse_date(value) -> Optional[date]:
    """
    Parse a date-like value (date, datetime or string) into a date.

    Returns None for empty input. Raises ValueError on unparseable strings.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.parse(str(value)).date()


def parse_time(value) -> Optional[time]:
    """Parse a time-of-day value; None when missing."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    return date_parser.parse(str(value)).time()


def execution_datetime(trade_date: date, trade_time: Optional[time]) -> datetime:
    """Combine a trade date and optional time; a missing time means start of day."""
    return datetime.combine(trade_date, trade_time or time.min)
