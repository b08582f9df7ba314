"""Monthly net-worth reconstruction from sparse valuations and transactions.

Both functions here are pure: they read only their arguments and return new
lists, so they can be called repeatedly and from several threads at once.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from networth.domain.entities import (
    ItemKind,
    MonthlySnapshot,
    RangeOption,
    Transaction,
    ValuationPoint,
)
from networth.domain.month import Month, iter_months

ZERO = Decimal("0")

_TRAILING_WINDOWS = {
    RangeOption.THREE_MONTHS: 3,
    RangeOption.TWELVE_MONTHS: 12,
}


def to_decimal(value) -> Decimal:
    """Convert a numeric value to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _kind_value(kind) -> str:
    return kind.value if isinstance(kind, ItemKind) else str(kind)


def compute_monthly_snapshots(
    valuations: Iterable[ValuationPoint],
    transactions: Iterable[Transaction] = (),
    today: Optional[date] = None,
) -> list[MonthlySnapshot]:
    """Rebuild a contiguous monthly balance sheet.

    Each ``(kind, name)`` item contributes its latest valuation at or before
    the month (forward fill); items with no valuation yet contribute nothing.
    The running total of all transactions through the month is added to
    assets as cash. The series runs from the earliest month in either input
    to the later of the newest month and the current month.

    Dates are normalized to ``Month`` on entry, so strings and date objects
    are both accepted; an unparseable date string raises ``ValueError``.
    Values are not validated and a NaN propagates into the sums.

    Args:
        valuations: Valuation points in any order
        transactions: Transactions in any order
        today: Date used for "now" (defaults to the system date)

    Returns:
        Snapshots ordered by month, one per calendar month; empty when both
        inputs are empty
    """
    # Sorting is stable: among points sharing a month, the later input wins.
    groups: dict[tuple[str, str], list[tuple[Month, str, Decimal]]] = defaultdict(list)
    for point in valuations:
        kind = _kind_value(point.kind)
        groups[(kind, point.name)].append(
            (point.effective_month, kind, to_decimal(point.value))
        )
    for points in groups.values():
        points.sort(key=lambda entry: entry[0])

    deltas: dict[Month, Decimal] = defaultdict(lambda: ZERO)
    for txn in transactions:
        deltas[Month.of(txn.date)] += to_decimal(txn.amount)

    seen_months = [points[0][0] for points in groups.values()]
    seen_months += [points[-1][0] for points in groups.values()]
    seen_months += list(deltas)
    if not seen_months:
        return []

    start = min(seen_months)
    end = max(max(seen_months), Month.current(today))

    cursors = {key: -1 for key in groups}
    cumulative = ZERO
    snapshots = []
    for month in iter_months(start, end):
        assets = ZERO
        liabilities = ZERO
        for key, points in groups.items():
            index = cursors[key]
            while index + 1 < len(points) and points[index + 1][0] <= month:
                index += 1
            cursors[key] = index
            if index < 0:
                continue
            _, kind, value = points[index]
            if kind == ItemKind.ASSET.value:
                assets += value
            else:
                liabilities += value

        cumulative += deltas.get(month, ZERO)
        assets += cumulative
        snapshots.append(
            MonthlySnapshot(
                date=month,
                assets=assets,
                liabilities=liabilities,
                net_worth=assets - liabilities,
            )
        )
    return snapshots


def range_cutoff(range_option: Union[RangeOption, str], today: Optional[date] = None) -> Optional[Month]:
    """Return the first month kept by a range, or None for ``all``.

    Unknown range values behave like ``12m``.
    """
    try:
        option = RangeOption(range_option)
    except ValueError:
        option = RangeOption.TWELVE_MONTHS

    current = Month.current(today)
    if option == RangeOption.ALL:
        return None
    if option == RangeOption.YEAR_TO_DATE:
        return Month(current.year, 1)
    return current.shift(-(_TRAILING_WINDOWS[option] - 1))


def filter_by_range(
    snapshots: Iterable[MonthlySnapshot],
    range_option: Union[RangeOption, str],
    today: Optional[date] = None,
) -> list[MonthlySnapshot]:
    """Keep the snapshots inside a chart window ending at the current month.

    ``3m`` and ``12m`` keep that many trailing months including the current
    one, ``ytd`` keeps January onward and ``all`` keeps everything.
    """
    cutoff = range_cutoff(range_option, today)
    if cutoff is None:
        return list(snapshots)
    return [snap for snap in snapshots if snap.date >= cutoff]
