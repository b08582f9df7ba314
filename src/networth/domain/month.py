"""Calendar month value type used as the snapshot bucket key."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterator, Optional, Union

from networth.utils.date_parser import to_datetime

MonthLike = Union["Month", date, datetime, str]


@dataclass(frozen=True, order=True)
class Month:
    """A calendar month, ordered by (year, month).

    Replaces ``YYYY-MM-01`` strings as comparison keys; ``str()`` still
    renders that form for storage and display.
    """

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def of(cls, value: MonthLike) -> "Month":
        """Normalize a Month, date, datetime or date string into a Month.

        Raises:
            ValueError: If a string cannot be parsed as a date
        """
        if isinstance(value, Month):
            return value
        if isinstance(value, date):
            # datetime is a date subclass
            return cls(value.year, value.month)
        dt = to_datetime(value)
        return cls(dt.year, dt.month)

    @classmethod
    def current(cls, today: Optional[date] = None) -> "Month":
        """Return the month containing ``today`` (defaults to the system date)."""
        return cls.of(today or date.today())

    def shift(self, months: int) -> "Month":
        """Return the month ``months`` calendar months away (negative for earlier)."""
        index = self.year * 12 + (self.month - 1) + months
        return Month(index // 12, index % 12 + 1)

    def next(self) -> "Month":
        return self.shift(1)

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def label(self) -> str:
        """Human label such as ``January 2024``."""
        return self.first_day().strftime("%B %Y")

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-01"


def iter_months(start: Month, end: Month) -> Iterator[Month]:
    """Yield every month from start through end, inclusive."""
    current = start
    while current <= end:
        yield current
        current = current.next()
