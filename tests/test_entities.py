"""Tests for domain entities."""

import pytest
from datetime import date
from decimal import Decimal

from finavis.domain.entities import (
    Account,
    AccountType,
    BalanceSheet,
    FiscalPeriod,
    JournalEntry,
    Transaction,
)


class TestAccount:
    """Tests for Account entity."""

    def test_revenue_and_expense_are_temporary(self):
        assert Account(7, "売上", AccountType.REVENUE).is_temporary
        assert Account(9, "給料", AccountType.EXPENSE).is_temporary
        assert not Account(1, "現金", AccountType.ASSET).is_temporary
        assert not Account(6, "資本金", AccountType.EQUITY).is_temporary

    def test_account_immutability(self):
        """Test that Account entities are immutable."""
        account = Account(1, "現金", AccountType.ASSET)
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            account.name = "New Name"


class TestJournalEntry:
    """Tests for JournalEntry entity."""

    def test_debit_constructor(self):
        entry = JournalEntry.debit(1, Decimal("500"))
        assert entry.debit_amount == Decimal("500")
        assert entry.credit_amount == Decimal("0")
        assert entry.signed_amount == Decimal("500")

    def test_credit_constructor(self):
        entry = JournalEntry.credit(7, Decimal("500"))
        assert entry.signed_amount == Decimal("-500")


class TestTransaction:
    """Tests for Transaction entity."""

    def test_totals(self):
        txn = Transaction(
            id=1,
            transaction_date=date(2024, 4, 1),
            description="仕入",
            entries=(
                JournalEntry.debit(8, Decimal("500")),
                JournalEntry.credit(1, Decimal("300")),
                JournalEntry.credit(4, Decimal("200")),
            ),
        )
        assert txn.total_debit == Decimal("500")
        assert txn.total_credit == Decimal("500")


class TestFiscalPeriod:
    """Tests for FiscalPeriod value."""

    def test_contains_is_inclusive(self):
        period = FiscalPeriod(date(2024, 4, 1), date(2024, 4, 1), date(2025, 3, 31), "第1期")
        assert period.contains(date(2024, 4, 1))
        assert period.contains(date(2025, 3, 31))
        assert not period.contains(date(2024, 3, 31))
        assert not period.contains(date(2025, 4, 1))

    def test_unset_period_contains_nothing(self):
        period = FiscalPeriod(None, None, None, "未設定")
        assert not period.is_set
        assert not period.contains(date(2024, 4, 1))


class TestBalanceSheet:
    """Tests for BalanceSheet entity."""

    def test_empty_sheet_is_balanced(self):
        assert BalanceSheet().is_balanced

    def test_is_balanced(self):
        sheet = BalanceSheet(
            total_assets=Decimal("1500"),
            total_liabilities=Decimal("500"),
            total_equity=Decimal("1000"),
        )
        assert sheet.is_balanced
