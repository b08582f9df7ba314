"""Domain model entities for networth.

These are pure data classes representing business concepts, independent of
database schema. The snapshot engine consumes and produces only these types.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from networth.domain.month import Month

DateLike = Union[datetime, date, str]


class ItemKind(str, Enum):
    """Which side of the balance sheet a tracked item sits on."""

    ASSET = "asset"
    LIABILITY = "liability"


class RangeOption(str, Enum):
    """Chart windows supported by the range filter."""

    THREE_MONTHS = "3m"
    TWELVE_MONTHS = "12m"
    YEAR_TO_DATE = "ytd"
    ALL = "all"


@dataclass(frozen=True)
class ValuationPoint:
    """Recorded worth of a named asset or liability at a point in time.

    ``month`` may be left as None; it is then derived from ``date``.
    """

    kind: ItemKind
    name: str
    value: Decimal
    date: DateLike
    month: Optional[Month] = None
    desc: str = ""
    id: Optional[int] = None

    @property
    def effective_month(self) -> Month:
        return self.month if self.month is not None else Month.of(self.date)


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity. Positive amounts are inflows."""

    date: DateLike
    amount: Decimal
    description: str = ""
    category: str = "Uncategorized"
    account: str = "General"
    notes: str = ""
    id: Optional[int] = None


@dataclass(frozen=True)
class MonthlySnapshot:
    """Derived balance sheet for one calendar month.

    When a position overlay has been applied, ``base_assets`` holds the
    valuation-plus-cash part and ``assets == base_assets + positions_value``.
    """

    date: Month
    assets: Decimal
    liabilities: Decimal
    net_worth: Decimal
    base_assets: Optional[Decimal] = None
    positions_value: Optional[Decimal] = None


@dataclass(frozen=True)
class Position:
    """Holding of a tradable instrument."""

    symbol: str
    shares: Decimal
    avg_cost: Decimal = Decimal("0")
    account: str = "General"
    added_date: Optional[date] = None
    notes: str = ""
    id: Optional[int] = None


@dataclass(frozen=True)
class PricePoint:
    """Closing price of a symbol for a month."""

    symbol: str
    month: Month
    close: Decimal
    id: Optional[int] = None


@dataclass(frozen=True)
class ActivityItem:
    """One row of the recent-activity feed (a valuation or a transaction)."""

    source: str
    date: datetime
    label: str
    badge: str
    amount: Decimal


@dataclass(frozen=True)
class NetWorthSummary:
    """Figures for the latest month, shown by summary widgets."""

    month: Optional[Month]
    assets: Decimal
    liabilities: Decimal
    net_worth: Decimal
    positions_value: Optional[Decimal] = None


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a CSV import."""

    imported: int
    errors: tuple[str, ...] = ()
