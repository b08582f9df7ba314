"""Shared pytest fixtures for networth tests."""

import tempfile
import os
from datetime import date
from pathlib import Path
import pytest

from networth.database.factories import create_sqlite_database
from networth.domain.csv_import import CSVImportService
from networth.domain.networth import NetWorthService
from networth.domain.positions import PositionService
from networth.domain.transaction import TransactionService
from networth.domain.valuation import ValuationService

# Pinned "now" for tests that depend on the current month
TODAY = date(2024, 6, 15)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def today():
    """Fixed date used as the current date."""
    return TODAY


@pytest.fixture
def valuation_service(temp_db):
    """Create a ValuationService with a temporary database."""
    return ValuationService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def position_service(temp_db):
    """Create a PositionService with a temporary database."""
    return PositionService(temp_db)


@pytest.fixture
def networth_service(temp_db):
    """Create a NetWorthService with a temporary database."""
    return NetWorthService(temp_db)


@pytest.fixture
def csv_import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
