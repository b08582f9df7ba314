"""Transaction domain service."""

from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from networth.database.base import Database
from networth.domain.entities import DateLike, Transaction as TransactionEntity
from networth.domain.errors import NotFoundError, ValidationError, transaction_not_found
from networth.utils.date_parser import to_datetime

DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_ACCOUNT = "General"


def _normalize_timestamp(value: DateLike) -> datetime:
    try:
        return to_datetime(value).replace(tzinfo=None)
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e))


def _validate_amount(amount: Decimal) -> Decimal:
    if not amount.is_finite():
        raise ValidationError("Amount must be a finite number")
    return amount


class TransactionService:
    """Service for managing cash transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        date: DateLike,
        amount: Decimal,
        description: str = "",
        category: Optional[str] = None,
        account: Optional[str] = None,
        notes: str = "",
    ) -> int:
        """Create a transaction.

        Args:
            date: Transaction date or timestamp
            amount: Signed amount (positive = income, negative = expense)
            description: Optional description
            category: Category name (defaults to "Uncategorized")
            account: Account name (defaults to "General")
            notes: Optional notes

        Returns:
            Transaction ID

        Raises:
            ValidationError: If date or amount is invalid
        """
        return self.db.create_transaction(
            date=_normalize_timestamp(date),
            amount=_validate_amount(amount),
            description=description or "",
            category=(category or "").strip() or DEFAULT_CATEGORY,
            account=(account or "").strip() or DEFAULT_ACCOUNT,
            notes=notes or "",
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: int,
        date: Optional[DateLike] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        account: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update transaction fields.

        Updates only the fields that are provided.

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If date or amount is invalid
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.db.update_transaction(
            transaction_id=transaction_id,
            date=_normalize_timestamp(date) if date is not None else None,
            amount=_validate_amount(amount) if amount is not None else None,
            description=description,
            category=category.strip() or DEFAULT_CATEGORY if category is not None else None,
            account=account.strip() or DEFAULT_ACCOUNT if account is not None else None,
            notes=notes,
        )

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.delete_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        account: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, newest first.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter (inclusive)
            category: Optional category filter
            account: Optional account filter
            search: Optional text matched against description and notes

        Returns:
            List of transaction entities
        """
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            category=category,
            account=account,
            search=search,
        )

    def list_categories(self) -> list[str]:
        """List the categories used by transactions."""
        return self.db.list_categories()
