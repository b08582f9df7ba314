"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain types (``Month``,
``ItemKind``) never leak into the schema and the schema never leaks into the
snapshot engine.
"""

from networth.domain import entities as domain
from networth.domain.month import Month
from networth.database.models import (
    Valuation as ORMValuation,
    Transaction as ORMTransaction,
    Position as ORMPosition,
    Price as ORMPrice,
    Snapshot as ORMSnapshot,
)


def valuation_to_domain(orm_valuation: ORMValuation) -> domain.ValuationPoint:
    """Convert SQLAlchemy Valuation model to domain ValuationPoint entity."""
    return domain.ValuationPoint(
        kind=domain.ItemKind(orm_valuation.kind),
        name=orm_valuation.name,
        value=orm_valuation.value,
        date=orm_valuation.date,
        month=Month.of(orm_valuation.month),
        desc=orm_valuation.desc or "",
        id=orm_valuation.id,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        description=orm_transaction.description or "",
        category=orm_transaction.category,
        account=orm_transaction.account,
        notes=orm_transaction.notes or "",
        id=orm_transaction.id,
    )


def position_to_domain(orm_position: ORMPosition) -> domain.Position:
    """Convert SQLAlchemy Position model to domain Position entity."""
    return domain.Position(
        symbol=orm_position.symbol,
        shares=orm_position.shares,
        avg_cost=orm_position.avg_cost,
        account=orm_position.account,
        added_date=orm_position.added_date,
        notes=orm_position.notes or "",
        id=orm_position.id,
    )


def price_to_domain(orm_price: ORMPrice) -> domain.PricePoint:
    """Convert SQLAlchemy Price model to domain PricePoint entity."""
    return domain.PricePoint(
        symbol=orm_price.symbol,
        month=Month.of(orm_price.month),
        close=orm_price.close,
        id=orm_price.id,
    )


def snapshot_to_domain(orm_snapshot: ORMSnapshot) -> domain.MonthlySnapshot:
    """Convert SQLAlchemy Snapshot model to domain MonthlySnapshot entity."""
    return domain.MonthlySnapshot(
        date=Month.of(orm_snapshot.month),
        assets=orm_snapshot.assets,
        liabilities=orm_snapshot.liabilities,
        net_worth=orm_snapshot.net_worth,
        base_assets=orm_snapshot.base_assets,
        positions_value=orm_snapshot.positions_value,
    )


def snapshot_to_orm(snapshot: domain.MonthlySnapshot) -> ORMSnapshot:
    """Convert domain MonthlySnapshot entity to a new SQLAlchemy Snapshot row."""
    return ORMSnapshot(
        month=snapshot.date.first_day(),
        assets=snapshot.assets,
        liabilities=snapshot.liabilities,
        net_worth=snapshot.net_worth,
        base_assets=snapshot.base_assets,
        positions_value=snapshot.positions_value,
    )
