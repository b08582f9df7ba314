"""Domain layer for networth application.

Services live in their own modules (``networth.domain.valuation`` and so on)
and are not re-exported here, because they import the database layer, which
in turn imports these entities.
"""

from networth.domain.entities import (
    ItemKind,
    MonthlySnapshot,
    Position,
    PricePoint,
    RangeOption,
    Transaction,
    ValuationPoint,
)
from networth.domain.month import Month

__all__ = [
    "ItemKind",
    "Month",
    "MonthlySnapshot",
    "Position",
    "PricePoint",
    "RangeOption",
    "Transaction",
    "ValuationPoint",
]
