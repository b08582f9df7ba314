"""SQLAlchemy models for networth database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Valuation(Base):
    """Valuation point model."""

    __tablename__ = "valuations"

    id = Column(Integer, primary_key=True)
    kind = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    value = Column(Numeric(14, 2), nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    # First day of the valuation's month
    month = Column(Date, nullable=False)
    desc = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    date = Column(DateTime, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False, default="Uncategorized", index=True)
    account = Column(String, nullable=False, default="General", index=True)
    notes = Column(String, nullable=False, default="")
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Position(Base):
    """Instrument position model."""

    __tablename__ = "positions"

    id = Column(Integer, primary_key=True)
    symbol = Column(String, nullable=False, index=True)
    shares = Column(Numeric(18, 6), nullable=False)
    avg_cost = Column(Numeric(14, 4), nullable=False, default=0)
    account = Column(String, nullable=False, default="General")
    added_date = Column(Date, nullable=True)
    notes = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Price(Base):
    """Monthly closing price model."""

    __tablename__ = "prices"

    id = Column(Integer, primary_key=True)
    symbol = Column(String, nullable=False)
    month = Column(Date, nullable=False)
    close = Column(Numeric(14, 4), nullable=False)

    __table_args__ = (UniqueConstraint("symbol", "month", name="uq_price_symbol_month"),)


class Snapshot(Base):
    """Cached monthly snapshot model, keyed by month.

    Figures keep ten decimal places, enough for shares (6) times a close (4).
    SQLite stores NUMERIC as REAL, so the cache is exact to about 15
    significant digits.
    """

    __tablename__ = "snapshots"

    month = Column(Date, primary_key=True)
    assets = Column(Numeric(28, 10), nullable=False)
    liabilities = Column(Numeric(28, 10), nullable=False)
    net_worth = Column(Numeric(28, 10), nullable=False)
    base_assets = Column(Numeric(28, 10), nullable=True)
    positions_value = Column(Numeric(28, 10), nullable=True)
    computed_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
