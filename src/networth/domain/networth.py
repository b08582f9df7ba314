"""Net worth state management: recompute, cache and read snapshots."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from networth.database.base import Database
from networth.domain.entities import (
    ActivityItem,
    ItemKind,
    MonthlySnapshot,
    NetWorthSummary,
    RangeOption,
)
from networth.domain.errors import ComputationError, net_worth_not_computable
from networth.domain.month import Month
from networth.domain.positions import build_price_history, overlay_positions
from networth.domain.snapshot_engine import ZERO, compute_monthly_snapshots, filter_by_range
from networth.domain.valuation import ValuationService

logger = logging.getLogger(__name__)

# (kind, name, value, months before the current month)
DEMO_VALUATIONS = (
    ("asset", "House", "400000", 12),
    ("asset", "House", "410000", 9),
    ("asset", "House", "420000", 6),
    ("asset", "House", "430000", 3),
    ("asset", "House", "440000", 0),
    ("asset", "Car", "25000", 12),
    ("asset", "Car", "23000", 6),
    ("asset", "Car", "21000", 0),
    ("liability", "Mortgage", "320000", 12),
    ("liability", "Mortgage", "310000", 9),
    ("liability", "Mortgage", "300000", 6),
    ("liability", "Mortgage", "290000", 3),
    ("liability", "Mortgage", "280000", 0),
    ("asset", "Cash", "10000", 12),
    ("asset", "Cash", "12000", 0),
)


def _is_nan(snapshot: MonthlySnapshot) -> bool:
    return any(
        figure.is_nan()
        for figure in (snapshot.assets, snapshot.liabilities, snapshot.net_worth)
    )


class NetWorthService:
    """Owns the snapshot cache.

    The engine itself holds no state; this service loads its inputs from the
    database, applies the position overlay, and replaces the cached series.
    """

    def __init__(self, db: Database):
        """Initialize net worth service.

        Args:
            db: Database instance
        """
        self.db = db

    def recompute(self, today: Optional[date] = None) -> list[MonthlySnapshot]:
        """Rebuild the snapshot series from stored records and cache it.

        Args:
            today: Date used for "now" (defaults to the system date)

        Returns:
            The freshly computed snapshots

        Raises:
            ComputationError: If a snapshot came out non-numeric
        """
        # Chronological input order makes the latest same-month valuation win
        valuations = sorted(self.db.list_valuations(), key=lambda v: (v.date, v.id or 0))
        transactions = self.db.list_transactions()
        logger.info(
            "Computing snapshots from %d valuations and %d transactions",
            len(valuations),
            len(transactions),
        )

        snapshots = compute_monthly_snapshots(valuations, transactions, today=today)

        positions = self.db.list_positions()
        if positions and snapshots:
            history = build_price_history(self.db.list_prices())
            snapshots = overlay_positions(snapshots, positions, history)
            logger.info("Applied %d positions to %d snapshots", len(positions), len(snapshots))

        bad = [snap for snap in snapshots if _is_nan(snap)]
        if bad:
            logger.warning("Snapshot computation produced non-numeric figures for %s", bad[0].date)
            raise ComputationError(net_worth_not_computable(bad[0].date))

        self.db.replace_snapshots(snapshots)
        logger.info("Generated %d snapshots", len(snapshots))
        if snapshots:
            logger.debug("Latest snapshot: %s", snapshots[-1])
        return snapshots

    def ensure_current(self, today: Optional[date] = None) -> list[MonthlySnapshot]:
        """Return the cached series, recomputing it when it is empty or ends
        before the current month.

        Raises:
            ComputationError: If a recompute was needed and produced non-numeric figures
        """
        snapshots = self.db.read_snapshots()
        current = Month.current(today)
        if snapshots and snapshots[-1].date >= current:
            return snapshots

        logger.info(
            "Snapshot cache ends at %s, recomputing through %s",
            snapshots[-1].date if snapshots else "nothing",
            current,
        )
        return self.recompute(today=today)

    def get_snapshots(
        self, range_option: RangeOption | str = RangeOption.ALL, today: Optional[date] = None
    ) -> list[MonthlySnapshot]:
        """Read the cached series, filtered to a chart range."""
        return filter_by_range(self.db.read_snapshots(), range_option, today=today)

    def get_summary(self) -> NetWorthSummary:
        """Figures of the latest cached month.

        Returns zeroes when nothing has been computed yet.

        Raises:
            ComputationError: If the latest snapshot is non-numeric
        """
        snapshots = self.db.read_snapshots()
        if not snapshots:
            return NetWorthSummary(month=None, assets=ZERO, liabilities=ZERO, net_worth=ZERO)

        latest = snapshots[-1]
        if _is_nan(latest):
            raise ComputationError(net_worth_not_computable(latest.date))
        return NetWorthSummary(
            month=latest.date,
            assets=latest.assets,
            liabilities=latest.liabilities,
            net_worth=latest.net_worth,
            positions_value=latest.positions_value,
        )

    def recent_activity(self, limit: int = 8) -> list[ActivityItem]:
        """Valuations and transactions merged, newest first."""
        items = [
            ActivityItem(
                source="valuation",
                date=v.date,
                label=v.name,
                badge=v.kind.value,
                amount=v.value,
            )
            for v in self.db.list_valuations()
        ]
        items += [
            ActivityItem(
                source="transaction",
                date=t.date,
                label=t.description,
                badge="income" if t.amount >= 0 else "expense",
                amount=t.amount,
            )
            for t in self.db.list_transactions()
        ]
        items.sort(key=lambda item: item.date, reverse=True)
        return items[:limit]

    def seed_demo(self, today: Optional[date] = None) -> int:
        """Insert demo valuations when none exist.

        Returns:
            Number of valuation points inserted (0 when data already exists)
        """
        if self.db.list_valuations():
            logger.info("Skipping demo seed: valuations already exist")
            return 0

        current = Month.current(today)
        service = ValuationService(self.db)
        for kind, name, value, months_back in DEMO_VALUATIONS:
            service.add_valuation(
                kind=ItemKind(kind),
                name=name,
                value=Decimal(value),
                date=current.shift(-months_back).first_day(),
            )
        logger.info("Seeded %d demo valuations", len(DEMO_VALUATIONS))
        return len(DEMO_VALUATIONS)
