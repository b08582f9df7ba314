"""CSV import domain service."""

import csv
import logging
from pathlib import Path

from networth.database.base import Database
from networth.domain.entities import ImportResult
from networth.domain.errors import ValidationError
from networth.domain.transaction import TransactionService
from networth.utils.amount_parser import parse_amount
from networth.utils.date_parser import to_datetime

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("date", "amount", "description")
OPTIONAL_FIELDS = ("category", "account")


class CSVImportService:
    """Service for importing transactions from bank CSV exports."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)

    def import_csv(self, csv_file_path: str, mapping: dict[str, str]) -> ImportResult:
        """Import transactions from a CSV file.

        Args:
            csv_file_path: Path to CSV file
            mapping: Transaction field -> CSV column name. "date", "amount" and
                "description" are required; "category" and "account" are optional.

        Returns:
            ImportResult with the number of imported rows and per-row errors

        Raises:
            ValidationError: If the mapping or the CSV header is incomplete
            FileNotFoundError: If CSV file doesn't exist
        """
        missing_fields = [f for f in REQUIRED_FIELDS if not mapping.get(f)]
        if missing_fields:
            raise ValidationError(
                f"Please map required columns: {', '.join(missing_fields)}"
            )
        unknown = set(mapping) - set(REQUIRED_FIELDS) - set(OPTIONAL_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown transaction fields: {', '.join(sorted(unknown))}")

        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        imported = 0
        errors = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            csv_columns = reader.fieldnames
            if csv_columns is None:
                raise ValidationError("CSV file is empty")

            mapped_columns = {column for column in mapping.values() if column}
            missing_columns = mapped_columns - set(csv_columns)
            if missing_columns:
                raise ValidationError(
                    f"CSV file missing mapped columns: {', '.join(sorted(missing_columns))}"
                )

            for row_num, row in enumerate(reader, start=2):  # header is row 1
                values = {
                    field: (row.get(column) or "").strip()
                    for field, column in mapping.items()
                    if column
                }

                if not values["date"]:
                    errors.append(f"Row {row_num}: Missing date")
                    continue
                if not values["amount"]:
                    errors.append(f"Row {row_num}: Missing amount")
                    continue

                try:
                    txn_date = to_datetime(values["date"])
                    amount = parse_amount(values["amount"])
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")
                    continue

                self.transaction_service.create_transaction(
                    date=txn_date,
                    amount=amount,
                    description=values["description"],
                    category=values.get("category"),
                    account=values.get("account"),
                )
                imported += 1

        logger.info(
            "Imported %d transactions from %s (%d errors)", imported, csv_path.name, len(errors)
        )
        return ImportResult(imported=imported, errors=tuple(errors))
