"""Tests for the AccountingSession facade."""

import pytest
from datetime import date
from decimal import Decimal

from finavis.domain.entities import JournalEntry
from finavis.domain.errors import NotFoundError


def test_statements_empty_before_setup(session, add_entries):
    add_entries(session, date(2024, 4, 1), "出資", {1: 1000}, {6: 1000})

    assert session.is_initial_setup
    assert session.get_fiscal_period_label() == "未設定"
    assert session.get_balance_sheet().total_assets == Decimal("0")
    assert session.get_income_statement().net_income == Decimal("0")
    assert session.get_cash_flow_statement().ending_cash_balance == Decimal("0")


def test_statements_follow_the_journal(first_year_books):
    assert first_year_books.get_income_statement().net_income == Decimal("70000")
    assert first_year_books.get_balance_sheet().total_assets == Decimal("1570000")
    assert first_year_books.get_cash_flow_statement().ending_cash_balance == Decimal("1170000")


def test_update_changes_statements(first_year_books):
    sale = next(t for t in first_year_books.list_transactions() if t.description == "現金売上")
    first_year_books.update_transaction(
        sale.id,
        sale.transaction_date,
        sale.description,
        [JournalEntry.debit(1, Decimal("250000")), JournalEntry.credit(7, Decimal("250000"))],
    )
    assert first_year_books.get_income_statement().net_income == Decimal("120000")
    assert first_year_books.get_balance_sheet().is_balanced


def test_historical_statements_by_index(first_year_books):
    first_year_books.close_period(today=date(2025, 3, 31))

    snapshot = first_year_books.get_historical_statements(0)
    assert snapshot.period_label.startswith("第1期")
    assert snapshot.statements.income_statement.net_income == Decimal("70000")


def test_historical_index_out_of_range(first_year_books):
    with pytest.raises(NotFoundError, match="no periods have been closed"):
        first_year_books.get_historical_statements(0)

    first_year_books.close_period(today=date(2025, 3, 31))
    with pytest.raises(NotFoundError, match="valid range: 0-0"):
        first_year_books.get_historical_statements(1)
    with pytest.raises(NotFoundError):
        first_year_books.get_historical_statements(-1)


def test_reset_keeps_journal_and_history(first_year_books):
    first_year_books.close_period(today=date(2025, 3, 31))
    first_year_books.reset_fiscal_period()

    assert first_year_books.is_initial_setup
    assert len(first_year_books.get_history()) == 1
    assert len(first_year_books.list_transactions()) == 8


def test_listing_reference_data(session):
    assert any(a.name == "現金" for a in session.list_accounts())
    assert session.list_templates()[0].id == "revenue-cash"
