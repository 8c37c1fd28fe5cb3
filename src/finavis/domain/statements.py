"""Financial statement derivation.

``derive_statements`` folds the journal into the balance sheet, income
statement and cash flow statement for one fiscal period. It is a pure
function: the same inputs always produce equal outputs, and nothing is
written anywhere. Malformed data is skipped with a logged warning because
the statements back a live view and must always render.
"""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional

from finavis.domain.chart_of_accounts import CAPITAL_STOCK_NAME, ChartOfAccounts
from finavis.domain.entities import (
    Account,
    AccountSubType,
    AccountType,
    BalanceSheet,
    CashFlowStatement,
    FinancialStatements,
    FiscalPeriod,
    IncomeStatement,
    OpeningBalances,
    Transaction,
    ZERO,
)

logger = logging.getLogger(__name__)

OPERATING = "operating"
INVESTING = "investing"
FINANCING = "financing"


def empty_statements() -> FinancialStatements:
    """Statements shown before a fiscal period has been configured."""
    return FinancialStatements(
        balance_sheet=BalanceSheet(),
        income_statement=IncomeStatement(),
        cash_flow_statement=CashFlowStatement(),
    )


def transactions_in_period(
    transactions: Iterable[Transaction], period: FiscalPeriod
) -> list[Transaction]:
    """Keep transactions dated inside the inclusive period window."""
    return [txn for txn in transactions if period.contains(txn.transaction_date)]


def _total(bucket: dict[int, Decimal]) -> Decimal:
    return sum(bucket.values(), ZERO)


def _is_retained_earnings(account: Account) -> bool:
    return account.type == AccountType.EQUITY and account.name != CAPITAL_STOCK_NAME


def account_balances(
    chart: ChartOfAccounts,
    transactions: Iterable[Transaction],
    opening: Optional[OpeningBalances] = None,
) -> dict[int, Decimal]:
    """Signed (debit minus credit) balance per account.

    Opening balances are folded in first. Entries against unknown accounts
    and entries with no amount are skipped with a warning.
    """
    balances: dict[int, Decimal] = defaultdict(lambda: ZERO)
    if opening is not None:
        for account_id, amount in opening.balances.items():
            if chart.lookup(account_id) is None:
                logger.warning("Skipping opening balance for unknown account %s", account_id)
                continue
            balances[account_id] += amount

    for txn in transactions:
        for entry in txn.entries:
            if chart.lookup(entry.account_id) is None:
                logger.warning(
                    "Transaction %s: skipping entry for unknown account %s",
                    txn.id,
                    entry.account_id,
                )
                continue
            if entry.debit_amount == ZERO and entry.credit_amount == ZERO:
                logger.warning(
                    "Transaction %s: skipping zero entry for account %s",
                    txn.id,
                    entry.account_id,
                )
                continue
            balances[entry.account_id] += entry.signed_amount
    return dict(balances)


def build_income_statement(
    chart: ChartOfAccounts, balances: dict[int, Decimal]
) -> IncomeStatement:
    """Accumulate revenue and expense balances and compute the rollups."""
    revenue: dict[int, Decimal] = {}
    non_operating_revenue: dict[int, Decimal] = {}
    extraordinary_profit: dict[int, Decimal] = {}
    cost_of_sales: dict[int, Decimal] = {}
    sga: dict[int, Decimal] = {}
    non_operating_expense: dict[int, Decimal] = {}
    extraordinary_loss: dict[int, Decimal] = {}
    income_taxes: dict[int, Decimal] = {}

    revenue_targets = {
        AccountSubType.NON_OPERATING_REVENUE: non_operating_revenue,
        AccountSubType.EXTRAORDINARY_PROFIT: extraordinary_profit,
    }
    expense_targets = {
        AccountSubType.COGS: cost_of_sales,
        AccountSubType.SGA: sga,
        AccountSubType.NON_OPERATING_EXPENSE: non_operating_expense,
        AccountSubType.EXTRAORDINARY_LOSS: extraordinary_loss,
        AccountSubType.TAX: income_taxes,
    }

    for account_id, signed in balances.items():
        account = chart.lookup(account_id)
        if account.type == AccountType.REVENUE:
            # Revenue grows on the credit side
            target = revenue_targets.get(account.sub_type, revenue)
            target[account_id] = target.get(account_id, ZERO) - signed
        elif account.type == AccountType.EXPENSE:
            # Expenses without a specific sub-type count as SG&A
            target = expense_targets.get(account.sub_type, sga)
            target[account_id] = target.get(account_id, ZERO) + signed

    total_revenue = _total(revenue)
    total_cost_of_sales = _total(cost_of_sales)
    gross_profit = total_revenue - total_cost_of_sales
    total_sga = _total(sga)
    operating_income = gross_profit - total_sga
    total_non_operating_revenue = _total(non_operating_revenue)
    total_non_operating_expense = _total(non_operating_expense)
    ordinary_income = operating_income + total_non_operating_revenue - total_non_operating_expense
    total_extraordinary_profit = _total(extraordinary_profit)
    total_extraordinary_loss = _total(extraordinary_loss)
    pre_tax_income = ordinary_income + total_extraordinary_profit - total_extraordinary_loss
    total_income_taxes = _total(income_taxes)
    net_income = pre_tax_income - total_income_taxes

    total_expenses = (
        total_cost_of_sales
        + total_sga
        + total_non_operating_expense
        + total_extraordinary_loss
        + total_income_taxes
    )
    flat_net_income = (
        total_revenue + total_non_operating_revenue + total_extraordinary_profit - total_expenses
    )
    if flat_net_income != net_income:
        logger.warning(
            "Net income mismatch: stepwise %s, flat %s", net_income, flat_net_income
        )

    return IncomeStatement(
        revenue=revenue,
        cost_of_sales=cost_of_sales,
        sga=sga,
        non_operating_revenue=non_operating_revenue,
        non_operating_expense=non_operating_expense,
        extraordinary_profit=extraordinary_profit,
        extraordinary_loss=extraordinary_loss,
        income_taxes=income_taxes,
        total_revenue=total_revenue,
        total_cost_of_sales=total_cost_of_sales,
        gross_profit=gross_profit,
        total_sga=total_sga,
        operating_income=operating_income,
        total_non_operating_revenue=total_non_operating_revenue,
        total_non_operating_expense=total_non_operating_expense,
        ordinary_income=ordinary_income,
        total_extraordinary_profit=total_extraordinary_profit,
        total_extraordinary_loss=total_extraordinary_loss,
        pre_tax_income=pre_tax_income,
        total_income_taxes=total_income_taxes,
        total_expenses=total_expenses,
        net_income=net_income,
    )


def build_balance_sheet(
    chart: ChartOfAccounts,
    balances: dict[int, Decimal],
    opening_retained_earnings: Decimal,
    net_income: Decimal,
) -> BalanceSheet:
    """Accumulate asset, liability and equity balances and compute the rollups."""
    current_assets: dict[int, Decimal] = {}
    fixed_assets: dict[int, Decimal] = {}
    current_liabilities: dict[int, Decimal] = {}
    fixed_liabilities: dict[int, Decimal] = {}
    capital_stock = ZERO
    retained_earnings = ZERO

    for account_id, signed in balances.items():
        account = chart.lookup(account_id)
        if account.type == AccountType.ASSET:
            target = current_assets if account.sub_type == AccountSubType.CURRENT else fixed_assets
            target[account_id] = target.get(account_id, ZERO) + signed
        elif account.type == AccountType.LIABILITY:
            target = (
                current_liabilities
                if account.sub_type == AccountSubType.CURRENT
                else fixed_liabilities
            )
            target[account_id] = target.get(account_id, ZERO) - signed
        elif account.type == AccountType.EQUITY:
            if _is_retained_earnings(account):
                retained_earnings -= signed
            else:
                capital_stock -= signed

    retained_earnings += opening_retained_earnings + net_income
    total_assets = _total(current_assets) + _total(fixed_assets)
    total_liabilities = _total(current_liabilities) + _total(fixed_liabilities)
    total_equity = capital_stock + retained_earnings

    return BalanceSheet(
        current_assets=current_assets,
        fixed_assets=fixed_assets,
        current_liabilities=current_liabilities,
        fixed_liabilities=fixed_liabilities,
        capital_stock=capital_stock,
        retained_earnings=retained_earnings,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_equity=total_equity,
    )


def classify_cash_flow(chart: ChartOfAccounts, transaction: Transaction) -> Optional[str]:
    """Return the cash flow category of a transaction.

    Returns None when the transaction does not touch cash, or when every
    entry is a cash account (a transfer between cash accounts). A fixed
    asset counterpart makes it investing, checked before a fixed liability
    or equity counterpart which makes it financing; anything else is
    operating.
    """
    cash_entries = [e for e in transaction.entries if chart.is_cash(e.account_id)]
    if not cash_entries:
        return None
    other_accounts = [
        chart.lookup(e.account_id)
        for e in transaction.entries
        if not chart.is_cash(e.account_id)
    ]
    other_accounts = [a for a in other_accounts if a is not None]
    if not other_accounts:
        return None

    if any(a.type == AccountType.ASSET and a.sub_type == AccountSubType.FIXED for a in other_accounts):
        return INVESTING
    if any(
        (a.type == AccountType.LIABILITY and a.sub_type == AccountSubType.FIXED)
        or a.type == AccountType.EQUITY
        for a in other_accounts
    ):
        return FINANCING
    return OPERATING


def build_cash_flow_statement(
    chart: ChartOfAccounts,
    transactions: Iterable[Transaction],
    opening: OpeningBalances,
    balances: dict[int, Decimal],
) -> CashFlowStatement:
    """Classify cash movements and reconcile them against the cash balances."""
    totals = {OPERATING: ZERO, INVESTING: ZERO, FINANCING: ZERO}
    for txn in transactions:
        category = classify_cash_flow(chart, txn)
        if category is None:
            continue
        movement = sum(
            (e.signed_amount for e in txn.entries if chart.is_cash(e.account_id)), ZERO
        )
        totals[category] += movement

    net_cash_flow = totals[OPERATING] + totals[INVESTING] + totals[FINANCING]
    beginning = sum(
        (amount for account_id, amount in opening.balances.items() if chart.is_cash(account_id)),
        ZERO,
    )
    ending = sum(
        (amount for account_id, amount in balances.items() if chart.is_cash(account_id)),
        ZERO,
    )
    if beginning + net_cash_flow != ending:
        logger.warning(
            "Cash flow does not reconcile: beginning %s + net %s != ending %s",
            beginning,
            net_cash_flow,
            ending,
        )

    return CashFlowStatement(
        operating_activities=totals[OPERATING],
        investing_activities=totals[INVESTING],
        financing_activities=totals[FINANCING],
        net_cash_flow=net_cash_flow,
        beginning_cash_balance=beginning,
        ending_cash_balance=ending,
    )


def derive_statements(
    chart: ChartOfAccounts,
    transactions: Iterable[Transaction],
    period: FiscalPeriod,
    opening: Optional[OpeningBalances] = None,
) -> FinancialStatements:
    """Derive the three statements for ``period``.

    Args:
        chart: Chart of accounts
        transactions: The whole journal; entries outside the period are ignored
        period: Fiscal period window; an unset period yields empty statements
        opening: Retained earnings and balances carried from the previous closing

    Returns:
        FinancialStatements for the period
    """
    if not period.is_set:
        return empty_statements()

    opening = opening or OpeningBalances()
    in_period = transactions_in_period(transactions, period)
    balances = account_balances(chart, in_period, opening)

    income_statement = build_income_statement(chart, balances)
    balance_sheet = build_balance_sheet(
        chart, balances, opening.retained_earnings, income_statement.net_income
    )
    if not balance_sheet.is_balanced:
        logger.warning(
            "Balance sheet does not balance: assets %s, liabilities %s, equity %s",
            balance_sheet.total_assets,
            balance_sheet.total_liabilities,
            balance_sheet.total_equity,
        )
    cash_flow_statement = build_cash_flow_statement(chart, in_period, opening, balances)

    return FinancialStatements(
        balance_sheet=balance_sheet,
        income_statement=income_statement,
        cash_flow_statement=cash_flow_statement,
    )
