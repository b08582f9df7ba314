"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from networth.domain.entities import (
    MonthlySnapshot,
    Position,
    PricePoint,
    Transaction,
    ValuationPoint,
)
from networth.domain.month import Month


class Database(ABC):
    """Abstract database interface for networth."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Valuation operations
    @abstractmethod
    def create_valuation(
        self,
        kind: str,
        name: str,
        value: Decimal,
        date: datetime,
        month: Month,
        desc: str = "",
    ) -> int:
        """Create a valuation point. Returns valuation ID."""
        pass

    @abstractmethod
    def get_valuation(self, valuation_id: int) -> Optional[ValuationPoint]:
        """Get valuation point by ID."""
        pass

    @abstractmethod
    def list_valuations(
        self, kind: Optional[str] = None, name: Optional[str] = None
    ) -> list[ValuationPoint]:
        """List valuation points, newest first."""
        pass

    @abstractmethod
    def update_valuation(
        self, valuation_id: int, value: Optional[Decimal] = None, desc: Optional[str] = None
    ) -> None:
        """Update the mutable fields of a valuation point."""
        pass

    @abstractmethod
    def delete_valuation(self, valuation_id: int) -> None:
        """Delete a valuation point."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date: datetime,
        amount: Decimal,
        description: str = "",
        category: str = "Uncategorized",
        account: str = "General",
        notes: str = "",
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        account: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions, newest first.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            category: Optional exact category filter
            account: Optional exact account filter
            search: Optional case-insensitive substring of description or notes
        """
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        date: Optional[datetime] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        account: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update the provided transaction fields."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_categories(self) -> list[str]:
        """List distinct transaction categories, sorted."""
        pass

    # Position operations
    @abstractmethod
    def create_position(
        self,
        symbol: str,
        shares: Decimal,
        avg_cost: Decimal,
        account: str = "General",
        added_date: Optional[date] = None,
        notes: str = "",
    ) -> int:
        """Create a position. Returns position ID."""
        pass

    @abstractmethod
    def get_position(self, position_id: int) -> Optional[Position]:
        """Get position by ID."""
        pass

    @abstractmethod
    def list_positions(self) -> list[Position]:
        """List all positions ordered by symbol."""
        pass

    @abstractmethod
    def update_position(
        self,
        position_id: int,
        shares: Optional[Decimal] = None,
        avg_cost: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update the provided position fields."""
        pass

    @abstractmethod
    def delete_position(self, position_id: int) -> None:
        """Delete a position."""
        pass

    # Price operations
    @abstractmethod
    def upsert_price(self, symbol: str, month: Month, close: Decimal) -> int:
        """Record the close for a symbol and month, replacing any previous one."""
        pass

    @abstractmethod
    def list_prices(self, symbol: Optional[str] = None) -> list[PricePoint]:
        """List recorded prices ordered by symbol and month."""
        pass

    # Snapshot cache operations
    @abstractmethod
    def replace_snapshots(self, snapshots: Sequence[MonthlySnapshot]) -> None:
        """Replace the cached snapshot series in a single commit."""
        pass

    @abstractmethod
    def read_snapshots(self) -> list[MonthlySnapshot]:
        """Read cached snapshots in ascending month order."""
        pass
