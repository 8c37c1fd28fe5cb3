"""Shared pytest fixtures for finavis tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from finavis.database.factories import create_sqlite_database
from finavis.domain.chart_of_accounts import ChartOfAccounts
from finavis.domain.closing import PeriodClosingService
from finavis.domain.entities import JournalEntry
from finavis.domain.fiscal_period import FiscalPeriodService
from finavis.domain.journal import JournalService
from finavis.domain.session import AccountingSession

PERIOD_START = date(2024, 4, 1)


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
def chart():
    """The built-in chart of accounts."""
    return ChartOfAccounts()


@pytest.fixture
def journal_service(temp_db, chart):
    """Create a JournalService with a temporary database."""
    return JournalService(temp_db, chart)


@pytest.fixture
def fiscal_period_service(temp_db):
    """Create a FiscalPeriodService with a temporary database."""
    return FiscalPeriodService(temp_db)


@pytest.fixture
def closing_service(temp_db, chart):
    """Create a PeriodClosingService with a temporary database."""
    return PeriodClosingService(temp_db, chart)


@pytest.fixture
def session(temp_db, chart):
    """Create an AccountingSession with a temporary database."""
    return AccountingSession(temp_db, chart)


@pytest.fixture
def configured_session(session):
    """Session whose fiscal period starts on 2024-04-01."""
    session.set_fiscal_start_date(PERIOD_START, is_sample=True)
    return session


def record(session, day, description, debits, credits):
    """Add a transaction from ``{account_id: amount}`` debit and credit maps."""
    entries = [JournalEntry.debit(a, Decimal(v)) for a, v in debits.items()]
    entries += [JournalEntry.credit(a, Decimal(v)) for a, v in credits.items()]
    return session.add_transaction(day, description, entries)


@pytest.fixture
def first_year_books(configured_session):
    """A year of activity ending with 70,000 net income.

    Cash 1,170,000, receivables 100,000, equipment 300,000, loan 500,000,
    capital 1,000,000.
    """
    s = configured_session
    record(s, date(2024, 4, 1), "出資", {1: 1000000}, {6: 1000000})
    record(s, date(2024, 4, 2), "借入", {1: 500000}, {5: 500000})
    record(s, date(2024, 4, 5), "備品購入", {10: 300000}, {1: 300000})
    record(s, date(2024, 5, 10), "現金売上", {1: 200000}, {7: 200000})
    record(s, date(2024, 5, 20), "掛売上", {2: 100000}, {7: 100000})
    record(s, date(2024, 6, 1), "仕入", {8: 150000}, {1: 150000})
    record(s, date(2024, 6, 25), "給料", {9: 80000}, {1: 80000})
    return s


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def add_entries():
    """Helper that records a transaction from debit and credit maps."""
    return record
