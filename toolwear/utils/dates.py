"""
Date handling at the display boundary.

Internally every production date is a ``date`` in plant local time, every
swap instant is a timezone-aware UTC ``datetime`` and every month bucket is
the first day of its month. The "DD/MM/YYYY" and "MM/YYYY" strings used by
the dashboard are parsed and produced only here.
"""

from datetime import date, datetime, timezone, tzinfo
from typing import Optional, Union

from toolwear.config.constants import DATE_FORMAT, DATETIME_FORMAT, MONTH_FORMAT
from toolwear.core.errors import InvalidInputError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Attach UTC to naive datetimes.

    SQLite drops the offset of ``DateTime(timezone=True)`` columns, and every
    instant this service writes is UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    return ensure_utc(value).astimezone(tz)


def local_today(tz: tzinfo, now: Optional[datetime] = None) -> date:
    return to_local(now or utcnow(), tz).date()


def parse_display_date(value: str) -> date:
    """
    Parse a "DD/MM/YYYY" string.

    Raises:
        InvalidInputError: text is empty or not a valid calendar date
    """
    if not value or not str(value).strip():
        raise InvalidInputError("Date is required (DD/MM/YYYY)")
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise InvalidInputError(f"Invalid date, expected DD/MM/YYYY: {value}")


def parse_month_year(value: str) -> date:
    """
    Parse a "MM/YYYY" bucket key into the first day of that month.

    Raises:
        InvalidInputError: text is not a two-digit month and four-digit year
    """
    text = str(value).strip() if value is not None else ""
    parts = text.split("/")
    if len(parts) != 2 or len(parts[0]) != 2 or len(parts[1]) != 4 or not text.replace("/", "").isdigit():
        raise InvalidInputError(f"Invalid month, expected MM/YYYY: {value}")
    month, year = int(parts[0]), int(parts[1])
    if not 1 <= month <= 12 or year < 1:
        raise InvalidInputError(f"Invalid month, expected MM/YYYY: {value}")
    return date(year, month, 1)


def format_display_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_display_datetime(value: datetime, tz: tzinfo) -> str:
    return to_local(value, tz).strftime(DATETIME_FORMAT)


def format_month_year(value: Union[date, datetime]) -> str:
    return value.strftime(MONTH_FORMAT)
