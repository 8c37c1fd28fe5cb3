"""Accounting session aggregate.

``AccountingSession`` owns the journal, fiscal period tracker, history store
and closing procedure for one user, and exposes the read and write API that
front ends call. Statements are recomputed from the journal on every read.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from finavis.domain.chart_of_accounts import ChartOfAccounts
from finavis.domain.closing import PeriodClosingService
from finavis.domain.entities import (
    Account,
    BalanceSheet,
    CashFlowStatement,
    FinancialStatements,
    FiscalPeriod,
    HistoricalData,
    IncomeStatement,
    JournalEntry,
    Transaction,
    TransactionTemplate,
)
from finavis.domain.errors import NotFoundError, history_index_out_of_range
from finavis.domain.fiscal_period import FiscalPeriodService
from finavis.domain.journal import JournalService
from finavis.domain.sample_data import SampleDataService
from finavis.domain.statements import derive_statements

if TYPE_CHECKING:
    from finavis.database.base import Database


class AccountingSession:
    """Read/write facade over one set of books."""

    def __init__(self, db: Database, chart: Optional[ChartOfAccounts] = None):
        """Initialize accounting session.

        Args:
            db: Database instance
            chart: Chart of accounts (defaults to the built-in chart)
        """
        self.db = db
        self.chart = chart or ChartOfAccounts()
        self.journal = JournalService(db, self.chart)
        self.fiscal_period = FiscalPeriodService(db)
        self.closing = PeriodClosingService(db, self.chart)
        self.sample_data = SampleDataService(db, self.chart)

    # Read API
    def get_statements(self) -> FinancialStatements:
        """Derive all three statements for the current period."""
        return derive_statements(
            self.chart,
            self.journal.list_transactions(),
            self.fiscal_period.get_period(),
            self.fiscal_period.get_opening_balances(),
        )

    def get_balance_sheet(self) -> BalanceSheet:
        return self.get_statements().balance_sheet

    def get_income_statement(self) -> IncomeStatement:
        return self.get_statements().income_statement

    def get_cash_flow_statement(self) -> CashFlowStatement:
        return self.get_statements().cash_flow_statement

    def get_fiscal_period(self) -> FiscalPeriod:
        return self.fiscal_period.get_period()

    def get_fiscal_period_label(self) -> str:
        return self.fiscal_period.period_label

    @property
    def is_initial_setup(self) -> bool:
        return self.fiscal_period.is_initial_setup

    def get_history(self) -> list[HistoricalData]:
        """Closed-period snapshots, oldest first."""
        return self.db.list_historical_snapshots()

    def get_historical_statements(self, index: int) -> HistoricalData:
        """Return the snapshot at ``index`` in history (oldest first).

        Raises:
            NotFoundError: If ``index`` is out of range
        """
        history = self.get_history()
        if not 0 <= index < len(history):
            raise NotFoundError(history_index_out_of_range(index, len(history)))
        return history[index]

    def list_transactions(self) -> list[Transaction]:
        return self.journal.list_transactions()

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self.journal.get_transaction(transaction_id)

    def list_accounts(self) -> list[Account]:
        return self.chart.list_accounts()

    def list_templates(self) -> list[TransactionTemplate]:
        return self.chart.list_templates()

    def is_period_closed(self) -> bool:
        return self.closing.is_period_closed()

    def closed_net_income(self) -> Optional[Decimal]:
        return self.closing.closed_net_income()

    @property
    def use_sample_data(self) -> bool:
        return self.fiscal_period.use_sample_data

    # Write API
    def add_transaction(
        self, transaction_date: date, description: str, entries: Iterable[JournalEntry]
    ) -> Transaction:
        return self.journal.add_transaction(transaction_date, description, entries)

    def update_transaction(
        self,
        transaction_id: int,
        transaction_date: date,
        description: str,
        entries: Iterable[JournalEntry],
    ) -> Transaction:
        return self.journal.update_transaction(
            transaction_id, transaction_date, description, entries
        )

    def add_from_template(
        self, template_id: str, amount: Decimal, transaction_date: date, description: str = ""
    ) -> Transaction:
        return self.journal.add_from_template(template_id, amount, transaction_date, description)

    def set_fiscal_start_date(
        self, start_date: date, is_sample: bool = False, today: Optional[date] = None
    ) -> FiscalPeriod:
        return self.fiscal_period.set_start_date(start_date, is_sample=is_sample, today=today)

    def set_use_sample_data(self, use: bool) -> None:
        self.fiscal_period.set_use_sample_data(use)

    def reset_fiscal_period(self) -> None:
        self.fiscal_period.reset()

    def post_income_tax(self, today: Optional[date] = None) -> Transaction:
        return self.closing.post_income_tax(today=today)

    def close_period(self, today: Optional[date] = None) -> HistoricalData:
        return self.closing.close_period(today=today)

    def load_sample_data(self, start_date: date, today: Optional[date] = None) -> int:
        return self.sample_data.load(start_date, today=today)
