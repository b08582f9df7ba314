"""Tests for database mappers."""

from datetime import datetime, date
from decimal import Decimal

from networth.database.models import (
    Valuation as ORMValuation,
    Transaction as ORMTransaction,
    Position as ORMPosition,
    Price as ORMPrice,
    Snapshot as ORMSnapshot,
)
from networth.database.mappers import (
    valuation_to_domain,
    transaction_to_domain,
    position_to_domain,
    price_to_domain,
    snapshot_to_domain,
    snapshot_to_orm,
)
from networth.domain.entities import ItemKind, MonthlySnapshot
from networth.domain.month import Month


class TestValuationMapper:
    """Tests for Valuation mapper."""

    def test_valuation_to_domain(self):
        orm_valuation = ORMValuation(
            id=3,
            kind="liability",
            name="Mortgage",
            value=Decimal("280000.00"),
            date=datetime(2024, 1, 15, 10, 0),
            month=date(2024, 1, 1),
            desc=None,
        )

        point = valuation_to_domain(orm_valuation)

        assert point.id == 3
        assert point.kind == ItemKind.LIABILITY
        assert point.month == Month(2024, 1)
        assert point.date == datetime(2024, 1, 15, 10, 0)
        assert point.desc == ""


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain(self):
        orm_transaction = ORMTransaction(
            id=1,
            date=datetime(2024, 1, 15),
            amount=Decimal("-50.00"),
            description=None,
            category="Groceries",
            account="Checking",
            notes=None,
        )

        txn = transaction_to_domain(orm_transaction)

        assert txn.id == 1
        assert txn.amount == Decimal("-50.00")
        assert txn.description == ""
        assert txn.notes == ""
        assert txn.category == "Groceries"


class TestPositionAndPriceMappers:
    """Tests for Position and Price mappers."""

    def test_position_to_domain(self):
        orm_position = ORMPosition(
            id=2,
            symbol="VTI",
            shares=Decimal("12.5"),
            avg_cost=Decimal("210.10"),
            account="Brokerage",
            added_date=date(2023, 11, 5),
            notes="",
        )

        position = position_to_domain(orm_position)

        assert position.symbol == "VTI"
        assert position.shares == Decimal("12.5")
        assert position.added_date == date(2023, 11, 5)

    def test_price_to_domain(self):
        orm_price = ORMPrice(id=7, symbol="VTI", month=date(2024, 2, 1), close=Decimal("240.5"))

        price = price_to_domain(orm_price)

        assert price.month == Month(2024, 2)
        assert price.close == Decimal("240.5")


class TestSnapshotMappers:
    """Tests for Snapshot mappers."""

    def test_round_trip_with_overlay_fields(self):
        snapshot = MonthlySnapshot(
            date=Month(2024, 3),
            assets=Decimal("1500"),
            liabilities=Decimal("400"),
            net_worth=Decimal("1100"),
            base_assets=Decimal("1000"),
            positions_value=Decimal("500"),
        )

        orm_snapshot = snapshot_to_orm(snapshot)
        assert orm_snapshot.month == date(2024, 3, 1)

        assert snapshot_to_domain(orm_snapshot) == snapshot

    def test_snapshot_without_overlay(self):
        orm_snapshot = ORMSnapshot(
            month=date(2024, 3, 1),
            assets=Decimal("10"),
            liabilities=Decimal("0"),
            net_worth=Decimal("10"),
        )

        snapshot = snapshot_to_domain(orm_snapshot)

        assert snapshot.base_assets is None
        assert snapshot.positions_value is None
