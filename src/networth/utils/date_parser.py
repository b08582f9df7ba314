"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Fills fields a partial date string leaves out ("2024-02" -> 2024-02-01)
_DEFAULT_DATETIME = datetime(2000, 1, 1)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "01/15/2024", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    try:
        dt = date_parser.parse(date_str, default=_DEFAULT_DATETIME)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def to_datetime(value) -> datetime:
    """Normalize a datetime, date or string into a datetime.

    Strings keep the wall-clock fields they were written with; an ISO
    timestamp ending in "Z" stays in the month it names.

    Raises:
        ValueError: If a string cannot be parsed
        TypeError: If value is of an unsupported type
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        try:
            return date_parser.isoparse(text)
        except (ValueError, OverflowError):
            pass
        try:
            return date_parser.parse(text, default=_DEFAULT_DATETIME)
        except (ValueError, TypeError, OverflowError) as e:
            raise ValueError(f"Could not parse date '{text}': {e}")
    raise TypeError(f"Unsupported date value: {value!r}")
