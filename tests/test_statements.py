"""Tests for financial statement derivation."""

import pytest
from datetime import date
from decimal import Decimal

from finavis.domain.entities import (
    FiscalPeriod,
    JournalEntry,
    OpeningBalances,
    Transaction,
)
from finavis.domain.statements import (
    FINANCING,
    INVESTING,
    OPERATING,
    classify_cash_flow,
    derive_statements,
)

PERIOD = FiscalPeriod(
    start_date=date(2024, 4, 1),
    original_start_date=date(2024, 4, 1),
    end_date=date(2025, 3, 31),
    label="第1期 (2024/4/1 - 2025/3/31)",
)
UNSET = FiscalPeriod(None, None, None, "未設定")


def txn(txn_id, day, debits, credits):
    entries = tuple(JournalEntry.debit(a, Decimal(v)) for a, v in debits.items())
    entries += tuple(JournalEntry.credit(a, Decimal(v)) for a, v in credits.items())
    return Transaction(id=txn_id, transaction_date=day, description="", entries=entries)


@pytest.fixture
def journal():
    return [
        txn(1, date(2024, 4, 1), {1: 1000000}, {6: 1000000}),
        txn(2, date(2024, 4, 2), {1: 500000}, {5: 500000}),
        txn(3, date(2024, 4, 5), {10: 300000}, {1: 300000}),
        txn(4, date(2024, 5, 10), {1: 200000}, {7: 200000}),
        txn(5, date(2024, 5, 20), {2: 100000}, {7: 100000}),
        txn(6, date(2024, 6, 1), {8: 150000}, {1: 150000}),
        txn(7, date(2024, 6, 25), {9: 80000}, {1: 80000}),
    ]


class TestIncomeStatement:
    """Tests for the income statement rollups."""

    def test_stepwise_profit(self, chart, journal):
        statement = derive_statements(chart, journal, PERIOD).income_statement

        assert statement.revenue == {7: Decimal("300000")}
        assert statement.total_revenue == Decimal("300000")
        assert statement.total_cost_of_sales == Decimal("150000")
        assert statement.gross_profit == Decimal("150000")
        assert statement.total_sga == Decimal("80000")
        assert statement.operating_income == Decimal("70000")
        assert statement.ordinary_income == Decimal("70000")
        assert statement.pre_tax_income == Decimal("70000")
        assert statement.total_expenses == Decimal("230000")
        assert statement.net_income == Decimal("70000")

    def test_non_operating_and_extraordinary_items(self, chart):
        journal = [
            txn(1, date(2024, 4, 1), {1: 1000}, {7: 1000}),
            txn(2, date(2024, 4, 2), {1: 50}, {17: 50}),
            txn(3, date(2024, 4, 3), {12: 30}, {1: 30}),
            txn(4, date(2024, 4, 4), {1: 200}, {18: 200}),
            txn(5, date(2024, 4, 5), {19: 400}, {1: 400}),
            txn(6, date(2024, 4, 6), {13: 100}, {14: 100}),
        ]
        statement = derive_statements(chart, journal, PERIOD).income_statement

        assert statement.operating_income == Decimal("1000")
        assert statement.ordinary_income == Decimal("1020")
        assert statement.pre_tax_income == Decimal("820")
        assert statement.total_income_taxes == Decimal("100")
        assert statement.net_income == Decimal("720")


class TestBalanceSheet:
    """Tests for the balance sheet."""

    def test_accounting_equation_holds(self, chart, journal):
        sheet = derive_statements(chart, journal, PERIOD).balance_sheet

        assert sheet.current_assets == {1: Decimal("1170000"), 2: Decimal("100000")}
        assert sheet.fixed_assets == {10: Decimal("300000")}
        assert sheet.fixed_liabilities == {5: Decimal("500000")}
        assert sheet.capital_stock == Decimal("1000000")
        assert sheet.retained_earnings == Decimal("70000")
        assert sheet.total_assets == Decimal("1570000")
        assert sheet.total_liabilities == Decimal("500000")
        assert sheet.total_equity == Decimal("1070000")
        assert sheet.is_balanced

    def test_balances_every_prefix_of_the_journal(self, chart, journal):
        for end in range(len(journal) + 1):
            assert derive_statements(chart, journal[:end], PERIOD).balance_sheet.is_balanced

    def test_opening_balances_are_carried(self, chart):
        opening = OpeningBalances(
            retained_earnings=Decimal("70000"),
            balances={1: Decimal("570000"), 6: Decimal("-500000")},
        )
        sheet = derive_statements(chart, [], PERIOD, opening).balance_sheet

        assert sheet.total_assets == Decimal("570000")
        assert sheet.capital_stock == Decimal("500000")
        assert sheet.retained_earnings == Decimal("70000")
        assert sheet.is_balanced


class TestCashFlow:
    """Tests for cash flow classification and the statement."""

    def test_statement(self, chart, journal):
        statement = derive_statements(chart, journal, PERIOD).cash_flow_statement

        assert statement.operating_activities == Decimal("-30000")
        assert statement.investing_activities == Decimal("-300000")
        assert statement.financing_activities == Decimal("1500000")
        assert statement.net_cash_flow == Decimal("1170000")
        assert statement.beginning_cash_balance == Decimal("0")
        assert statement.ending_cash_balance == Decimal("1170000")

    def test_equipment_purchase_is_investing(self, chart):
        assert classify_cash_flow(chart, txn(1, date(2024, 4, 1), {10: 300}, {1: 300})) == INVESTING

    def test_loan_is_financing(self, chart):
        assert classify_cash_flow(chart, txn(1, date(2024, 4, 1), {1: 500}, {5: 500})) == FINANCING
        assert classify_cash_flow(chart, txn(1, date(2024, 4, 1), {5: 100}, {1: 100})) == FINANCING

    def test_purchase_is_operating(self, chart):
        assert classify_cash_flow(chart, txn(1, date(2024, 4, 1), {8: 100}, {1: 100})) == OPERATING

    def test_fixed_asset_wins_over_financing(self, chart):
        mixed = txn(1, date(2024, 4, 1), {10: 300}, {1: 100, 5: 200})
        assert classify_cash_flow(chart, mixed) == INVESTING

    def test_non_cash_transaction_is_ignored(self, chart):
        assert classify_cash_flow(chart, txn(1, date(2024, 4, 1), {2: 100}, {7: 100})) is None

    def test_transfer_between_cash_accounts_is_ignored(self, chart):
        assert classify_cash_flow(chart, txn(1, date(2024, 4, 1), {16: 100}, {1: 100})) is None

    def test_opening_cash_is_beginning_balance(self, chart):
        opening = OpeningBalances(balances={1: Decimal("1000"), 16: Decimal("500")})
        journal = [txn(1, date(2024, 4, 1), {1: 200}, {7: 200})]
        statement = derive_statements(chart, journal, PERIOD, opening).cash_flow_statement

        assert statement.beginning_cash_balance == Decimal("1500")
        assert statement.ending_cash_balance == Decimal("1700")


class TestDerivation:
    """Tests for derive_statements as a whole."""

    def test_unset_period_yields_empty_statements(self, chart, journal):
        statements = derive_statements(chart, journal, UNSET)

        assert statements.balance_sheet.total_assets == Decimal("0")
        assert statements.income_statement.net_income == Decimal("0")
        assert statements.cash_flow_statement.net_cash_flow == Decimal("0")

    def test_transactions_outside_period_are_ignored(self, chart, journal):
        outside = [
            txn(8, date(2024, 3, 31), {1: 999}, {7: 999}),
            txn(9, date(2025, 4, 1), {1: 999}, {7: 999}),
        ]
        assert derive_statements(chart, journal + outside, PERIOD) == derive_statements(
            chart, journal, PERIOD
        )

    def test_derivation_is_repeatable(self, chart, journal):
        assert derive_statements(chart, journal, PERIOD) == derive_statements(
            chart, journal, PERIOD
        )

    def test_unknown_account_is_skipped(self, chart, caplog):
        journal = [txn(1, date(2024, 4, 1), {1: 100}, {999: 100})]

        statements = derive_statements(chart, journal, PERIOD)

        assert statements.balance_sheet.total_assets == Decimal("100")
        assert "unknown account 999" in caplog.text
