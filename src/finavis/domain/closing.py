"""Period closing procedure.

Closing snapshots the current statements into history, books a closing
transaction that zeroes every revenue and expense account into retained
earnings, carries balance-sheet balances into the next period and advances
the fiscal period by one year.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, ROUND_FLOOR
from typing import TYPE_CHECKING, Optional

from finavis.domain.chart_of_accounts import (
    ACCRUED_INCOME_TAX_ACCOUNT_ID,
    CAPITAL_STOCK_NAME,
    INCOME_TAX_ACCOUNT_ID,
    ChartOfAccounts,
)
from finavis.domain.entities import (
    AccountType,
    FinancialStatements,
    FiscalPeriod,
    HistoricalData,
    IncomeStatement,
    JournalEntry,
    OpeningBalances,
    Transaction,
    ZERO,
)
from finavis.domain.errors import (
    AlreadyClosedError,
    TaxAlreadyPostedError,
    ValidationError,
    period_already_closed,
)
from finavis.domain.fiscal_period import FiscalPeriodService, utc_today
from finavis.domain.journal import JournalService, normalize_entries
from finavis.domain.statements import account_balances, derive_statements, transactions_in_period

if TYPE_CHECKING:
    from finavis.database.base import Database

logger = logging.getLogger(__name__)

CLOSING_DESCRIPTION = "決算整理仕訳（損益振替）"
INCOME_TAX_DESCRIPTION = "法人税等の計上"
INCOME_TAX_RATE = Decimal("0.3")


def clamp_to_period(target: date, period: FiscalPeriod) -> date:
    """Move ``target`` to the nearest date inside the period window."""
    if target < period.start_date:
        return period.start_date
    if target > period.end_date:
        return period.end_date
    return target


def build_closing_entries(
    income_statement: IncomeStatement, retained_earnings_account_id: int
) -> list[JournalEntry]:
    """Entries that zero every temporary account into retained earnings.

    Revenue balances are debited and expense balances credited; a bucket
    holding a balance against its normal side is reversed the other way.
    Net income is credited to retained earnings, or debited for a loss.
    Zero balances produce no entry.
    """
    entries: list[JournalEntry] = []
    for bucket in income_statement.revenue_buckets():
        for account_id, amount in bucket.items():
            if amount > ZERO:
                entries.append(JournalEntry.debit(account_id, amount))
            elif amount < ZERO:
                entries.append(JournalEntry.credit(account_id, -amount))
    for bucket in income_statement.expense_buckets():
        for account_id, amount in bucket.items():
            if amount > ZERO:
                entries.append(JournalEntry.credit(account_id, amount))
            elif amount < ZERO:
                entries.append(JournalEntry.debit(account_id, -amount))

    net_income = income_statement.net_income
    if net_income > ZERO:
        entries.append(JournalEntry.credit(retained_earnings_account_id, net_income))
    elif net_income < ZERO:
        entries.append(JournalEntry.debit(retained_earnings_account_id, -net_income))
    return entries


def compute_income_tax(pre_tax_income: Decimal, rate: Decimal = INCOME_TAX_RATE) -> Decimal:
    """Tax on pre-tax income, rounded down to whole currency units."""
    return (pre_tax_income * rate).quantize(Decimal("1"), rounding=ROUND_FLOOR)


class PeriodClosingService:
    """Service for closing fiscal periods and booking year-end entries."""

    def __init__(self, db: Database, chart: ChartOfAccounts):
        """Initialize period closing service.

        Args:
            db: Database instance
            chart: Chart of accounts
        """
        self.db = db
        self.chart = chart
        self.journal = JournalService(db, chart)
        self.fiscal_period = FiscalPeriodService(db)

    def current_statements(self) -> FinancialStatements:
        """Derive statements for the current period."""
        return derive_statements(
            self.chart,
            self.journal.list_transactions(),
            self.fiscal_period.get_period(),
            self.fiscal_period.get_opening_balances(),
        )

    def find_closing_transaction(self) -> Optional[Transaction]:
        """Return the closing transaction booked in the current period, if any."""
        period = self.fiscal_period.get_period()
        if not period.is_set:
            return None
        transactions = self.journal.list_transactions(
            start_date=period.start_date, end_date=period.end_date
        )
        for txn in transactions:
            if txn.description == CLOSING_DESCRIPTION:
                return txn
        return None

    def is_period_closed(self) -> bool:
        """True if the current period already carries a closing transaction."""
        return self.find_closing_transaction() is not None

    def closed_net_income(self) -> Optional[Decimal]:
        """Net income finalised by the closing transaction, or None if open."""
        closing = self.find_closing_transaction()
        if closing is None:
            return None
        retained_id = self.chart.retained_earnings_account_id
        return sum(
            (-e.signed_amount for e in closing.entries if e.account_id == retained_id), ZERO
        )

    def post_income_tax(self, today: Optional[date] = None) -> Transaction:
        """Book corporate income tax on the current period's pre-tax income.

        Raises:
            PeriodNotConfiguredError: If no fiscal period is set
            TaxAlreadyPostedError: If tax expense is already recorded
            ValidationError: If there is no taxable income
        """
        period = self.fiscal_period.require_period()
        income_statement = self.current_statements().income_statement
        if income_statement.total_income_taxes != ZERO:
            raise TaxAlreadyPostedError(f"Income tax already posted for {period.label}")

        tax = compute_income_tax(income_statement.pre_tax_income)
        if tax <= ZERO:
            raise ValidationError(
                f"No taxable income (pre-tax income {income_statement.pre_tax_income:,})"
            )

        transaction = self.journal.add_transaction(
            transaction_date=clamp_to_period(today or utc_today(), period),
            description=INCOME_TAX_DESCRIPTION,
            entries=[
                JournalEntry.debit(INCOME_TAX_ACCOUNT_ID, tax),
                JournalEntry.credit(ACCRUED_INCOME_TAX_ACCOUNT_ID, tax),
            ],
        )
        logger.info("Posted income tax %s for %s", tax, period.label)
        return transaction

    def close_period(self, today: Optional[date] = None) -> HistoricalData:
        """Close the current fiscal period.

        Every check runs before the first write so a rejected close leaves
        the journal, history and period untouched.

        Args:
            today: Override for the current UTC date; the closing transaction
                is dated today, moved into the period window if outside it

        Returns:
            The history snapshot recorded for the closed period

        Raises:
            PeriodNotConfiguredError: If no fiscal period is set
            AlreadyClosedError: If the period already has a closing transaction
        """
        period = self.fiscal_period.require_period()
        if self.is_period_closed():
            raise AlreadyClosedError(period_already_closed(period.label))

        opening = self.fiscal_period.get_opening_balances()
        in_period = transactions_in_period(self.journal.list_transactions(), period)
        statements = derive_statements(self.chart, in_period, period, opening)

        closing_entries = build_closing_entries(
            statements.income_statement, self.chart.retained_earnings_account_id
        )
        if closing_entries:
            # Raises before anything is written if the entries do not balance
            normalize_entries(self.chart, closing_entries)

        balances = account_balances(self.chart, in_period, opening)
        carried = {
            account_id: amount
            for account_id, amount in balances.items()
            if self._carries_forward(account_id) and amount != ZERO
        }
        next_opening = OpeningBalances(
            retained_earnings=statements.balance_sheet.retained_earnings,
            balances=carried,
        )

        with self.db.transaction():
            snapshot_id = self.db.add_historical_snapshot(
                period_label=period.label,
                start_date=period.start_date,
                end_date=period.end_date,
                balance_sheet=statements.balance_sheet,
                income_statement=statements.income_statement,
                cash_flow_statement=statements.cash_flow_statement,
            )
            if closing_entries:
                self.journal.add_transaction(
                    transaction_date=clamp_to_period(today or utc_today(), period),
                    description=CLOSING_DESCRIPTION,
                    entries=closing_entries,
                )
            else:
                logger.info("No revenue or expense balances to close for %s", period.label)
            self.fiscal_period.set_opening_balances(next_opening)
            self.fiscal_period.advance_to_next_period()

        logger.info(
            "Closed %s with net income %s",
            period.label,
            statements.income_statement.net_income,
        )
        return HistoricalData(
            id=snapshot_id,
            period_label=period.label,
            start_date=period.start_date,
            end_date=period.end_date,
            balance_sheet=statements.balance_sheet,
            income_statement=statements.income_statement,
            cash_flow_statement=statements.cash_flow_statement,
        )

    def _carries_forward(self, account_id: int) -> bool:
        account = self.chart.lookup(account_id)
        if account is None or account.is_temporary:
            return False
        if account.type == AccountType.EQUITY:
            # Retained earnings travel as a single figure
            return account.name == CAPITAL_STOCK_NAME
        return True
