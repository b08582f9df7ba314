"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from networth.domain import entities
from networth.domain.errors import NotFoundError
from networth.domain.month import Month


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_valuation_returns_domain_model(self, temp_db):
        """Test that get_valuation returns a domain ValuationPoint entity."""
        valuation_id = temp_db.create_valuation(
            kind="asset",
            name="House",
            value=Decimal("400000"),
            date=datetime(2024, 2, 10),
            month=Month(2024, 2),
        )

        point = temp_db.get_valuation(valuation_id)

        assert isinstance(point, entities.ValuationPoint)
        assert point.kind is entities.ItemKind.ASSET
        assert isinstance(point.month, Month)
        assert isinstance(point.value, Decimal)

    def test_list_transactions_returns_domain_models(self, temp_db):
        """Test that list_transactions returns domain Transaction entities."""
        temp_db.create_transaction(date=datetime(2024, 1, 1), amount=Decimal("10"))
        temp_db.create_transaction(date=datetime(2024, 1, 2), amount=Decimal("-5"))

        transactions = temp_db.list_transactions()

        assert len(transactions) == 2
        for txn in transactions:
            assert isinstance(txn, entities.Transaction)
            assert isinstance(txn.date, datetime)

    def test_end_date_includes_whole_day(self, temp_db):
        temp_db.create_transaction(date=datetime(2024, 1, 31, 18, 45), amount=Decimal("10"))

        assert len(temp_db.list_transactions(end_date=date(2024, 1, 31))) == 1
        assert temp_db.list_transactions(end_date=date(2024, 1, 30)) == []

    def test_replace_snapshots(self, temp_db):
        """Test that replace_snapshots swaps the whole cached series."""
        first = [
            entities.MonthlySnapshot(
                date=Month(2024, m), assets=Decimal("1"), liabilities=Decimal("0"), net_worth=Decimal("1")
            )
            for m in (1, 2, 3)
        ]
        temp_db.replace_snapshots(first)
        second = [
            entities.MonthlySnapshot(
                date=Month(2024, 2), assets=Decimal("5"), liabilities=Decimal("2"), net_worth=Decimal("3")
            )
        ]
        temp_db.replace_snapshots(second)

        assert temp_db.read_snapshots() == second

    def test_snapshot_cache_keeps_sub_cent_position_values(self, temp_db):
        positions_value = Decimal("1.5") * Decimal("123.4567")
        snapshot = entities.MonthlySnapshot(
            date=Month(2024, 5),
            assets=Decimal("1000") + positions_value,
            liabilities=Decimal("0"),
            net_worth=Decimal("1000") + positions_value,
            base_assets=Decimal("1000"),
            positions_value=positions_value,
        )

        temp_db.replace_snapshots([snapshot])
        cached = temp_db.read_snapshots()[0]

        assert cached.positions_value == Decimal("185.18505")
        assert cached.assets == Decimal("1185.18505")
        assert cached == snapshot

    def test_update_missing_rows_raise(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_valuation(1, value=Decimal("1"))
        with pytest.raises(NotFoundError):
            temp_db.delete_transaction(1)
        with pytest.raises(NotFoundError):
            temp_db.update_position(1, shares=Decimal("1"))
