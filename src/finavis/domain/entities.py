"""Domain model entities for finavis.

These are pure data classes representing bookkeeping concepts, independent
of the database schema. Statement buckets are keyed by the stable numeric
account id; display names are resolved through the chart of accounts only
when rendering.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0")


class AccountType(str, Enum):
    """Top-level account classification."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


class AccountSubType(str, Enum):
    """Secondary account classification."""

    CURRENT = "current"
    FIXED = "fixed"
    COGS = "cogs"
    SGA = "sga"
    TAX = "tax"
    NON_OPERATING_EXPENSE = "non-operating-expense"
    EXTRAORDINARY_LOSS = "extraordinary-loss"
    NON_OPERATING_REVENUE = "non-operating-revenue"
    EXTRAORDINARY_PROFIT = "extraordinary-profit"


class TemplateCategory(str, Enum):
    """Grouping used when listing transaction templates."""

    REVENUE = "revenue"
    EXPENSE = "expense"
    INVESTING = "investing"
    FINANCING = "financing"


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: int
    name: str
    type: AccountType
    sub_type: Optional[AccountSubType] = None

    @property
    def is_temporary(self) -> bool:
        """Revenue and expense accounts are zeroed at closing."""
        return self.type in (AccountType.REVENUE, AccountType.EXPENSE)


@dataclass(frozen=True)
class JournalEntry:
    """One side of a transaction.

    Exactly one of ``debit_amount`` / ``credit_amount`` is non-zero.
    """

    account_id: int
    debit_amount: Decimal = ZERO
    credit_amount: Decimal = ZERO

    @property
    def signed_amount(self) -> Decimal:
        """Debit minus credit."""
        return self.debit_amount - self.credit_amount

    @classmethod
    def debit(cls, account_id: int, amount: Decimal) -> "JournalEntry":
        return cls(account_id=account_id, debit_amount=amount)

    @classmethod
    def credit(cls, account_id: int, amount: Decimal) -> "JournalEntry":
        return cls(account_id=account_id, credit_amount=amount)


@dataclass(frozen=True)
class Transaction:
    """Journal transaction entity."""

    id: int
    transaction_date: date
    description: str
    entries: tuple[JournalEntry, ...]
    created_at: Optional[datetime] = None

    @property
    def total_debit(self) -> Decimal:
        return sum((e.debit_amount for e in self.entries), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((e.credit_amount for e in self.entries), ZERO)


@dataclass(frozen=True)
class TransactionTemplate:
    """Two-sided shortcut for common transactions."""

    id: str
    label: str
    category: TemplateCategory
    debit_account_id: int
    credit_account_id: int


@dataclass(frozen=True)
class FiscalPeriod:
    """Snapshot of the fiscal period tracker state.

    ``start_date`` is None while the period is unset.
    """

    start_date: Optional[date]
    original_start_date: Optional[date]
    end_date: Optional[date]
    label: str

    @property
    def is_set(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    def contains(self, target: date) -> bool:
        """Return True if ``target`` falls inside the inclusive window."""
        if not self.is_set:
            return False
        return self.start_date <= target <= self.end_date


@dataclass(frozen=True)
class OpeningBalances:
    """Figures carried into a period from the previous closing.

    ``balances`` holds signed (debit minus credit) balances for balance-sheet
    accounts other than retained earnings.
    """

    retained_earnings: Decimal = ZERO
    balances: dict[int, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class BalanceSheet:
    """Balance sheet derived for one fiscal period."""

    current_assets: dict[int, Decimal] = field(default_factory=dict)
    fixed_assets: dict[int, Decimal] = field(default_factory=dict)
    current_liabilities: dict[int, Decimal] = field(default_factory=dict)
    fixed_liabilities: dict[int, Decimal] = field(default_factory=dict)
    capital_stock: Decimal = ZERO
    retained_earnings: Decimal = ZERO
    total_assets: Decimal = ZERO
    total_liabilities: Decimal = ZERO
    total_equity: Decimal = ZERO

    @property
    def is_balanced(self) -> bool:
        """Accounting equation: assets == liabilities + equity."""
        return self.total_assets == self.total_liabilities + self.total_equity


@dataclass(frozen=True)
class IncomeStatement:
    """Income statement derived for one fiscal period."""

    revenue: dict[int, Decimal] = field(default_factory=dict)
    cost_of_sales: dict[int, Decimal] = field(default_factory=dict)
    sga: dict[int, Decimal] = field(default_factory=dict)
    non_operating_revenue: dict[int, Decimal] = field(default_factory=dict)
    non_operating_expense: dict[int, Decimal] = field(default_factory=dict)
    extraordinary_profit: dict[int, Decimal] = field(default_factory=dict)
    extraordinary_loss: dict[int, Decimal] = field(default_factory=dict)
    income_taxes: dict[int, Decimal] = field(default_factory=dict)
    total_revenue: Decimal = ZERO
    total_cost_of_sales: Decimal = ZERO
    gross_profit: Decimal = ZERO
    total_sga: Decimal = ZERO
    operating_income: Decimal = ZERO
    total_non_operating_revenue: Decimal = ZERO
    total_non_operating_expense: Decimal = ZERO
    ordinary_income: Decimal = ZERO
    total_extraordinary_profit: Decimal = ZERO
    total_extraordinary_loss: Decimal = ZERO
    pre_tax_income: Decimal = ZERO
    total_income_taxes: Decimal = ZERO
    total_expenses: Decimal = ZERO
    net_income: Decimal = ZERO

    def revenue_buckets(self) -> tuple[dict[int, Decimal], ...]:
        """Buckets holding credit-natured (revenue) balances."""
        return (self.revenue, self.non_operating_revenue, self.extraordinary_profit)

    def expense_buckets(self) -> tuple[dict[int, Decimal], ...]:
        """Buckets holding debit-natured (expense) balances."""
        return (
            self.cost_of_sales,
            self.sga,
            self.non_operating_expense,
            self.extraordinary_loss,
            self.income_taxes,
        )


@dataclass(frozen=True)
class CashFlowStatement:
    """Cash flow statement derived for one fiscal period."""

    operating_activities: Decimal = ZERO
    investing_activities: Decimal = ZERO
    financing_activities: Decimal = ZERO
    net_cash_flow: Decimal = ZERO
    beginning_cash_balance: Decimal = ZERO
    ending_cash_balance: Decimal = ZERO


@dataclass(frozen=True)
class FinancialStatements:
    """The three statements derived together."""

    balance_sheet: BalanceSheet
    income_statement: IncomeStatement
    cash_flow_statement: CashFlowStatement


@dataclass(frozen=True)
class HistoricalData:
    """Snapshot of a closed period."""

    id: int
    period_label: str
    start_date: date
    end_date: date
    balance_sheet: BalanceSheet
    income_statement: IncomeStatement
    cash_flow_statement: CashFlowStatement
    closed_at: Optional[datetime] = None

    @property
    def statements(self) -> FinancialStatements:
        return FinancialStatements(
            balance_sheet=self.balance_sheet,
            income_statement=self.income_statement,
            cash_flow_statement=self.cash_flow_statement,
        )
