"""Valuation point domain service."""

from typing import Optional
from decimal import Decimal

from networth.database.base import Database
from networth.domain.entities import DateLike, ItemKind, ValuationPoint
from networth.domain.errors import (
    NotFoundError,
    ValidationError,
    unknown_kind,
    valuation_not_found,
)
from networth.domain.month import Month
from networth.utils.date_parser import to_datetime


def normalize_kind(kind: str | ItemKind) -> ItemKind:
    """Return the ItemKind for a kind string.

    Raises:
        ValidationError: If kind is neither asset nor liability
    """
    try:
        return ItemKind(str(kind.value if isinstance(kind, ItemKind) else kind).strip().lower())
    except ValueError:
        raise ValidationError(unknown_kind(str(kind)))


def _validate_value(value: Decimal) -> Decimal:
    if not value.is_finite():
        raise ValidationError("Value must be a finite number")
    if value < 0:
        raise ValidationError("Value must be non-negative; record liabilities as positive amounts")
    return value


class ValuationService:
    """Service for managing valuation points of assets and liabilities."""

    def __init__(self, db: Database):
        """Initialize valuation service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_valuation(
        self,
        kind: str | ItemKind,
        name: str,
        value: Decimal,
        date: DateLike,
        desc: str = "",
    ) -> int:
        """Record the worth of an asset or liability at a date.

        Args:
            kind: "asset" or "liability"
            name: Item name, e.g. "House"
            value: Non-negative magnitude
            date: Valuation date or timestamp
            desc: Optional note

        Returns:
            Valuation ID

        Raises:
            ValidationError: If kind, name, value or date is invalid
        """
        item_kind = normalize_kind(kind)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name must not be empty")
        _validate_value(value)

        try:
            # Stored naive, keeping the wall-clock fields as entered
            recorded = to_datetime(date).replace(tzinfo=None)
        except (TypeError, ValueError) as e:
            raise ValidationError(str(e))

        return self.db.create_valuation(
            kind=item_kind.value,
            name=name,
            value=value,
            date=recorded,
            month=Month.of(recorded),
            desc=desc or "",
        )

    def get_valuation(self, valuation_id: int) -> Optional[ValuationPoint]:
        """Get valuation point by ID.

        Args:
            valuation_id: Valuation ID

        Returns:
            ValuationPoint or None if not found
        """
        return self.db.get_valuation(valuation_id)

    def list_valuations(
        self, kind: Optional[str | ItemKind] = None, name: Optional[str] = None
    ) -> list[ValuationPoint]:
        """List valuation points, newest first, optionally filtered."""
        kind_value = normalize_kind(kind).value if kind is not None else None
        return self.db.list_valuations(kind=kind_value, name=name)

    def list_items(self) -> list[ValuationPoint]:
        """Return the latest valuation point of every tracked item, sorted by kind and name."""
        latest: dict[tuple[str, str], ValuationPoint] = {}
        for point in self.db.list_valuations():
            key = (point.kind.value, point.name)
            current = latest.get(key)
            if current is None or point.effective_month > current.effective_month:
                latest[key] = point
        return [latest[key] for key in sorted(latest)]

    def update_valuation(
        self,
        valuation_id: int,
        value: Optional[Decimal] = None,
        desc: Optional[str] = None,
    ) -> None:
        """Update the value or note of a valuation point.

        Kind, name and date are fixed once recorded.

        Raises:
            NotFoundError: If the valuation doesn't exist
            ValidationError: If value is invalid
        """
        if self.db.get_valuation(valuation_id) is None:
            raise NotFoundError(valuation_not_found(valuation_id))
        if value is not None:
            _validate_value(value)
        self.db.update_valuation(valuation_id, value=value, desc=desc)

    def delete_valuation(self, valuation_id: int) -> None:
        """Delete a valuation point.

        Raises:
            NotFoundError: If the valuation doesn't exist
        """
        if self.db.get_valuation(valuation_id) is None:
            raise NotFoundError(valuation_not_found(valuation_id))
        self.db.delete_valuation(valuation_id)
