"""Tests for the sample data generator."""

import pytest
from datetime import date
from decimal import Decimal

from finavis.domain.errors import ConflictError


def test_load_partial_year(session):
    """Test that only activity up to today is generated."""
    count = session.load_sample_data(date(2024, 4, 1), today=date(2024, 5, 10))

    transactions = session.list_transactions()
    assert count == len(transactions) == 8
    assert max(t.transaction_date for t in transactions) <= date(2024, 5, 10)
    assert session.use_sample_data
    assert session.get_fiscal_period().start_date == date(2024, 4, 1)
    assert session.get_fiscal_period_label() == "第1期 (2024/4/1 - 2025/3/31)"


def test_load_full_year(session):
    count = session.load_sample_data(date(2024, 4, 1), today=date(2026, 1, 1))

    assert count == 51
    transactions = session.list_transactions()
    assert max(t.transaction_date for t in transactions) <= date(2025, 3, 31)


def test_sample_statements_are_consistent(session):
    session.load_sample_data(date(2024, 4, 1), today=date(2026, 1, 1))

    statements = session.get_statements()
    assert statements.balance_sheet.is_balanced
    assert statements.balance_sheet.capital_stock == Decimal("1000000")
    assert statements.balance_sheet.fixed_assets == {10: Decimal("300000")}
    assert statements.balance_sheet.fixed_liabilities == {5: Decimal("500000")}
    cash_flow = statements.cash_flow_statement
    assert cash_flow.investing_activities == Decimal("-300000")
    assert cash_flow.financing_activities == Decimal("1500000")
    assert (
        cash_flow.beginning_cash_balance + cash_flow.net_cash_flow
        == cash_flow.ending_cash_balance
    )
    assert statements.income_statement.net_income > Decimal("0")


def test_sample_data_requires_empty_journal(session):
    session.load_sample_data(date(2024, 4, 1), today=date(2024, 5, 10))
    with pytest.raises(ConflictError):
        session.load_sample_data(date(2024, 4, 1), today=date(2024, 5, 10))
    assert len(session.list_transactions()) == 8


def test_sample_start_is_not_fast_forwarded(session):
    session.load_sample_data(date(2020, 4, 1), today=date(2026, 1, 1))
    assert session.get_fiscal_period().start_date == date(2020, 4, 1)


def test_failed_load_keeps_previous_period(session, temp_db, monkeypatch):
    session.set_fiscal_start_date(date(2023, 4, 1), is_sample=True)

    def fail(**kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(temp_db, "create_transaction", fail)
    with pytest.raises(RuntimeError, match="disk full"):
        session.load_sample_data(date(2024, 4, 1), today=date(2024, 5, 10))

    assert session.get_fiscal_period().start_date == date(2023, 4, 1)
    assert not session.use_sample_data
    assert session.list_transactions() == []
