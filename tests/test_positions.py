"""Tests for positions, prices and the snapshot overlay."""

import pytest
from datetime import date
from decimal import Decimal

from networth.domain.entities import MonthlySnapshot, Position, PricePoint
from networth.domain.errors import NotFoundError, ValidationError
from networth.domain.month import Month
from networth.domain.positions import (
    aggregate_positions,
    build_price_history,
    overlay_positions,
    positions_value_for,
)


def _snapshot(month, assets, liabilities="0"):
    assets = Decimal(assets)
    liabilities = Decimal(liabilities)
    return MonthlySnapshot(
        date=month, assets=assets, liabilities=liabilities, net_worth=assets - liabilities
    )


@pytest.fixture
def snapshots():
    return [
        _snapshot(Month(2024, 1), "1000", "400"),
        _snapshot(Month(2024, 2), "1000", "400"),
        _snapshot(Month(2024, 3), "1200", "400"),
    ]


@pytest.fixture
def prices():
    return build_price_history(
        [
            PricePoint(symbol="AAPL", month=Month(2024, 1), close=Decimal("100")),
            PricePoint(symbol="AAPL", month=Month(2024, 2), close=Decimal("110")),
        ]
    )


class TestOverlay:
    """Tests for overlay_positions."""

    def test_adds_market_value_to_assets(self, snapshots, prices):
        positions = [Position(symbol="AAPL", shares=Decimal("10"), avg_cost=Decimal("90"))]

        result = overlay_positions(snapshots, positions, prices)

        assert [s.positions_value for s in result] == [
            Decimal("1000"),
            Decimal("1100"),
            Decimal("900"),  # no close recorded, falls back to average cost
        ]
        assert result[1].base_assets == Decimal("1000")
        assert result[1].assets == Decimal("2100")
        assert result[1].liabilities == Decimal("400")
        assert result[1].net_worth == Decimal("1700")

    def test_idempotent(self, snapshots, prices):
        positions = [Position(symbol="AAPL", shares=Decimal("10"), avg_cost=Decimal("90"))]

        once = overlay_positions(snapshots, positions, prices)
        twice = overlay_positions(once, positions, prices)

        assert twice == once

    def test_reapply_with_new_prices_keeps_base(self, snapshots, prices):
        positions = [Position(symbol="AAPL", shares=Decimal("10"), avg_cost=Decimal("90"))]
        once = overlay_positions(snapshots, positions, prices)

        newer = build_price_history(
            [PricePoint(symbol="AAPL", month=Month(2024, 1), close=Decimal("200"))]
        )
        again = overlay_positions(once, positions, newer)

        assert again[0].base_assets == Decimal("1000")
        assert again[0].assets == Decimal("3000")
        assert again[0].net_worth == again[0].assets - again[0].liabilities

    def test_input_snapshots_unchanged(self, snapshots, prices):
        original = list(snapshots)
        overlay_positions(snapshots, [Position(symbol="AAPL", shares=Decimal("1"))], prices)

        assert snapshots == original
        assert snapshots[0].positions_value is None

    def test_lot_counts_from_added_month(self, snapshots, prices):
        positions = [
            Position(
                symbol="AAPL",
                shares=Decimal("10"),
                avg_cost=Decimal("90"),
                added_date=date(2024, 2, 20),
            )
        ]

        result = overlay_positions(snapshots, positions, prices)

        assert result[0].positions_value == Decimal("0")
        assert result[0].assets == Decimal("1000")
        assert result[1].positions_value == Decimal("1100")

    def test_no_positions(self, snapshots, prices):
        result = overlay_positions(snapshots, [], prices)

        assert all(s.positions_value == Decimal("0") for s in result)
        assert [s.assets for s in result] == [s.assets for s in snapshots]


def test_positions_value_for_multiple_lots(prices):
    positions = [
        Position(symbol="AAPL", shares=Decimal("2"), avg_cost=Decimal("50")),
        Position(symbol="VTI", shares=Decimal("3"), avg_cost=Decimal("200")),
    ]

    assert positions_value_for(positions, prices, Month(2024, 1)) == Decimal("800")


class TestAggregate:
    """Tests for aggregate_positions."""

    def test_merges_lots_by_symbol(self):
        lots = [
            Position(symbol="VTI", shares=Decimal("10"), avg_cost=Decimal("200"), added_date=date(2024, 3, 1)),
            Position(symbol="AAPL", shares=Decimal("5"), avg_cost=Decimal("100")),
            Position(symbol="VTI", shares=Decimal("10"), avg_cost=Decimal("220"), added_date=date(2023, 11, 5)),
        ]

        merged = aggregate_positions(lots)

        assert [h.symbol for h in merged] == ["AAPL", "VTI"]
        vti = merged[1]
        assert vti.shares == Decimal("20")
        assert vti.cost == Decimal("4200")
        assert vti.avg_cost == Decimal("210")
        assert vti.first_month == Month(2023, 11)
        assert merged[0].first_month is None

    def test_lot_without_date_clears_first_month(self):
        lots = [
            Position(symbol="VTI", shares=Decimal("1"), added_date=date(2024, 3, 1)),
            Position(symbol="VTI", shares=Decimal("1")),
        ]

        assert aggregate_positions(lots)[0].first_month is None


class TestPositionService:
    """Tests for PositionService."""

    def test_add_and_list(self, position_service):
        position_id = position_service.add_position(
            symbol=" aapl ", shares=Decimal("10"), avg_cost=Decimal("150"), added_date=date(2024, 1, 10)
        )

        lots = position_service.list_positions()
        assert len(lots) == 1
        assert lots[0].id == position_id
        assert lots[0].symbol == "AAPL"
        assert lots[0].shares == Decimal("10")
        assert lots[0].added_date == date(2024, 1, 10)

    @pytest.mark.parametrize(
        "symbol,shares,avg_cost",
        [
            ("", "1", "0"),
            ("AAPL", "0", "0"),
            ("AAPL", "-1", "0"),
            ("AAPL", "1", "-5"),
        ],
    )
    def test_add_rejects_invalid(self, position_service, symbol, shares, avg_cost):
        with pytest.raises(ValidationError):
            position_service.add_position(
                symbol=symbol, shares=Decimal(shares), avg_cost=Decimal(avg_cost)
            )

    def test_update_and_delete(self, position_service):
        position_id = position_service.add_position(symbol="VTI", shares=Decimal("5"))

        position_service.update_position(position_id, shares=Decimal("7"), notes="topped up")
        lot = position_service.list_positions()[0]
        assert lot.shares == Decimal("7")
        assert lot.notes == "topped up"

        position_service.delete_position(position_id)
        assert position_service.list_positions() == []

    def test_missing_position(self, position_service):
        with pytest.raises(NotFoundError, match="Position 99 not found"):
            position_service.update_position(99, shares=Decimal("1"))
        with pytest.raises(NotFoundError):
            position_service.delete_position(99)

    def test_record_price_replaces_same_month(self, position_service):
        position_service.record_price("aapl", Month(2024, 1), Decimal("100"))
        position_service.record_price("AAPL", Month(2024, 1), Decimal("105"))
        position_service.record_price("AAPL", Month(2024, 2), Decimal("110"))

        prices = position_service.list_prices("AAPL")
        assert [(p.month, p.close) for p in prices] == [
            (Month(2024, 1), Decimal("105")),
            (Month(2024, 2), Decimal("110")),
        ]
        assert position_service.price_history()["AAPL"][Month(2024, 1)] == Decimal("105")

    def test_record_price_rejects_negative(self, position_service):
        with pytest.raises(ValidationError):
            position_service.record_price("AAPL", Month(2024, 1), Decimal("-1"))

    def test_market_values(self, position_service):
        position_service.add_position(symbol="AAPL", shares=Decimal("10"), avg_cost=Decimal("100"))
        position_service.add_position(symbol="VTI", shares=Decimal("2"), avg_cost=Decimal("200"))
        position_service.record_price("AAPL", Month(2024, 1), Decimal("120"))
        position_service.record_price("AAPL", Month(2024, 9), Decimal("999"))

        rows = position_service.market_values(Month(2024, 6))

        assert [(h.symbol, price, value) for h, price, value in rows] == [
            ("AAPL", Decimal("120"), Decimal("1200")),
            ("VTI", None, Decimal("400")),
        ]
