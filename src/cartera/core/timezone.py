"""Calendar date utilities for snapshot dates and the local "today"."""

import re
from datetime import date, datetime
from typing import Union

import pytz
from dateutil import parser as date_parser

from cartera.core.exceptions import ValidationError

DEFAULT_TZ_NAME = "America/Argentina/Buenos_Aires"

# A full calendar date, optionally followed by a time part
_FULL_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}(?:$|[T ])")


def local_tz(tz_name: str = DEFAULT_TZ_NAME) -> pytz.BaseTzInfo:
    """Return the pytz timezone for an IANA name."""
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        raise ValidationError(f"Unknown timezone: {tz_name}")


def now_local(tz_name: str = DEFAULT_TZ_NAME) -> datetime:
    """Return current time in the given timezone."""
    return datetime.now(local_tz(tz_name))


def today_local(tz_name: str = DEFAULT_TZ_NAME) -> date:
    """Return today's calendar date in the given timezone."""
    return now_local(tz_name).date()


def parse_iso_date(value: Union[str, date, datetime]) -> date:
    """
    Parse a YYYY-MM-DD value into a date.

    Datetimes are truncated to their date; time components in strings are
    accepted and dropped. Partial dates such as "2024" or "2024-06" are
    rejected.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _FULL_DATE.match(value.strip()):
        raise ValidationError(f"Invalid date: {value!r}")
    try:
        return date_parser.isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        raise ValidationError(f"Invalid date: {value!r}")
