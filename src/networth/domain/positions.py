"""Positions in tradable instruments and their overlay onto snapshots.

The overlay keeps two explicit fields on each snapshot: ``base_assets``
(valuations plus cash, fixed the first time the overlay runs) and
``positions_value``. Assets are always rebuilt as their sum, so applying the
overlay again, with the same or newer prices, never counts positions twice.
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from networth.database.base import Database
from networth.domain.entities import MonthlySnapshot, Position, PricePoint
from networth.domain.errors import NotFoundError, ValidationError, position_not_found
from networth.domain.month import Month
from networth.domain.snapshot_engine import ZERO

PriceHistory = Mapping[str, Mapping[Month, Decimal]]


@dataclass(frozen=True)
class AggregatedPosition:
    """All lots of one symbol merged together."""

    symbol: str
    shares: Decimal
    cost: Decimal
    account: str
    first_month: Optional[Month]

    @property
    def avg_cost(self) -> Decimal:
        return self.cost / self.shares if self.shares else ZERO


def aggregate_positions(positions: Iterable[Position]) -> list[AggregatedPosition]:
    """Merge lots by symbol, summing shares and cost basis.

    ``first_month`` is the earliest month any lot was added, or None when a
    lot has no added date (the holding then counts for every month).
    """
    merged: dict[str, AggregatedPosition] = {}
    for position in positions:
        added = Month.of(position.added_date) if position.added_date else None
        lot_cost = position.shares * position.avg_cost
        current = merged.get(position.symbol)
        if current is None:
            merged[position.symbol] = AggregatedPosition(
                symbol=position.symbol,
                shares=position.shares,
                cost=lot_cost,
                account=position.account,
                first_month=added,
            )
            continue
        if current.first_month is None or added is None:
            first_month = None
        else:
            first_month = min(current.first_month, added)
        merged[position.symbol] = replace(
            current,
            shares=current.shares + position.shares,
            cost=current.cost + lot_cost,
            first_month=first_month,
        )
    return [merged[symbol] for symbol in sorted(merged)]


def build_price_history(prices: Iterable[PricePoint]) -> dict[str, dict[Month, Decimal]]:
    """Index prices as ``{symbol: {month: close}}``."""
    history: dict[str, dict[Month, Decimal]] = {}
    for price in prices:
        history.setdefault(price.symbol, {})[price.month] = price.close
    return history


def _lots_held_in(positions: Iterable[Position], month: Month) -> list[Position]:
    return [
        p for p in positions
        if p.added_date is None or Month.of(p.added_date) <= month
    ]


def positions_value_for(
    positions: Iterable[Position], price_history: PriceHistory, month: Month
) -> Decimal:
    """Market value of the lots held in ``month``.

    Uses the recorded close for that month, falling back to the lot's
    average cost when no close is recorded.
    """
    total = ZERO
    for lot in _lots_held_in(positions, month):
        price = price_history.get(lot.symbol, {}).get(month, lot.avg_cost)
        total += lot.shares * price
    return total


def overlay_positions(
    snapshots: Iterable[MonthlySnapshot],
    positions: Iterable[Position],
    price_history: PriceHistory,
) -> list[MonthlySnapshot]:
    """Return snapshots with position market value added to assets.

    Liabilities are left untouched.
    """
    positions = list(positions)
    overlaid = []
    for snap in snapshots:
        base = snap.base_assets if snap.base_assets is not None else snap.assets
        value = positions_value_for(positions, price_history, snap.date)
        assets = base + value
        overlaid.append(
            replace(
                snap,
                base_assets=base,
                positions_value=value,
                assets=assets,
                net_worth=assets - snap.liabilities,
            )
        )
    return overlaid


class PositionService:
    """Service for managing positions and recorded prices."""

    def __init__(self, db: Database):
        """Initialize position service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_position(
        self,
        symbol: str,
        shares: Decimal,
        avg_cost: Decimal = ZERO,
        account: str = "General",
        added_date: Optional[date] = None,
        notes: str = "",
    ) -> int:
        """Add a lot of an instrument.

        Raises:
            ValidationError: If symbol is empty or numbers are invalid
        """
        symbol = _normalize_symbol(symbol)
        if not shares.is_finite() or shares <= 0:
            raise ValidationError("Shares must be a positive number")
        if not avg_cost.is_finite() or avg_cost < 0:
            raise ValidationError("Average cost must be a non-negative number")
        return self.db.create_position(
            symbol=symbol,
            shares=shares,
            avg_cost=avg_cost,
            account=account or "General",
            added_date=added_date,
            notes=notes or "",
        )

    def list_positions(self) -> list[Position]:
        """List every lot, ordered by symbol."""
        return self.db.list_positions()

    def update_position(
        self,
        position_id: int,
        shares: Optional[Decimal] = None,
        avg_cost: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update shares, cost or notes of a lot.

        Raises:
            NotFoundError: If the position doesn't exist
        """
        if self.db.get_position(position_id) is None:
            raise NotFoundError(position_not_found(position_id))
        if shares is not None and (not shares.is_finite() or shares <= 0):
            raise ValidationError("Shares must be a positive number")
        if avg_cost is not None and (not avg_cost.is_finite() or avg_cost < 0):
            raise ValidationError("Average cost must be a non-negative number")
        self.db.update_position(position_id, shares=shares, avg_cost=avg_cost, notes=notes)

    def delete_position(self, position_id: int) -> None:
        """Delete a lot.

        Raises:
            NotFoundError: If the position doesn't exist
        """
        if self.db.get_position(position_id) is None:
            raise NotFoundError(position_not_found(position_id))
        self.db.delete_position(position_id)

    def record_price(self, symbol: str, month: Month, close: Decimal) -> int:
        """Record the monthly close of a symbol, replacing an earlier entry."""
        if not close.is_finite() or close < 0:
            raise ValidationError("Close must be a non-negative number")
        return self.db.upsert_price(_normalize_symbol(symbol), month, close)

    def list_prices(self, symbol: Optional[str] = None) -> list[PricePoint]:
        """List recorded prices, optionally for one symbol."""
        return self.db.list_prices(_normalize_symbol(symbol) if symbol else None)

    def price_history(self) -> dict[str, dict[Month, Decimal]]:
        """All recorded prices indexed by symbol and month."""
        return build_price_history(self.db.list_prices())

    def market_values(self, month: Month) -> list[tuple[AggregatedPosition, Optional[Decimal], Decimal]]:
        """Value each aggregated holding at the latest close on or before ``month``.

        Returns:
            ``(holding, price, market_value)`` tuples sorted by market value,
            largest first; ``price`` is None when no close is recorded and the
            value falls back to cost basis.
        """
        history = self.price_history()
        rows = []
        for holding in aggregate_positions(self.db.list_positions()):
            closes = history.get(holding.symbol, {})
            known = [m for m in closes if m <= month]
            price = closes[max(known)] if known else None
            value = holding.shares * price if price is not None else holding.cost
            rows.append((holding, price, value))
        rows.sort(key=lambda row: (-row[2], row[0].symbol))
        return rows


def _normalize_symbol(symbol: str) -> str:
    symbol = (symbol or "").strip().upper()
    if not symbol:
        raise ValidationError("Symbol must not be empty")
    return symbol
