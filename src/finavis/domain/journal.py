"""Journal domain service.

The journal is the single enforcement point for the double-entry balance
rule: nothing reaches the database unless its entries balance.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Iterable, Optional

from finavis.domain.chart_of_accounts import ChartOfAccounts
from finavis.domain.entities import JournalEntry, Transaction, ZERO
from finavis.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    template_not_found,
    transaction_not_found,
    unbalanced_entries,
)

if TYPE_CHECKING:
    from finavis.database.base import Database

logger = logging.getLogger(__name__)


CENT = Decimal("0.01")
# Journal entry amounts are stored with 14 integer and 2 fractional digits
AMOUNT_LIMIT = Decimal("1e14")


def _to_amount(value) -> Decimal:
    if isinstance(value, Decimal):
        amount = value
    else:
        if isinstance(value, float):
            value = str(value)
        try:
            amount = Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError(f"Invalid amount '{value}'")

    if not amount.is_finite():
        raise ValidationError(f"Invalid amount '{value}'")
    if abs(amount) >= AMOUNT_LIMIT:
        raise ValidationError(f"Amount {amount} is too large")
    if amount != amount.quantize(CENT):
        raise ValidationError(f"Amount {amount} has more than two decimal places")
    return amount


def normalize_entries(
    chart: ChartOfAccounts, entries: Iterable[JournalEntry]
) -> list[JournalEntry]:
    """Validate entries and return them with Decimal amounts.

    Args:
        chart: Chart of accounts used to resolve account ids
        entries: Proposed journal entries

    Returns:
        List of validated entries, in the given order

    Raises:
        ValidationError: If there are fewer than two entries, an account is
            unknown, an amount is negative, not finite, out of range or finer
            than a cent, an entry carries zero or both sides, or debits and
            credits do not balance to a positive total
    """
    normalized = []
    for position, entry in enumerate(entries, start=1):
        if chart.lookup(entry.account_id) is None:
            raise ValidationError(account_not_found(entry.account_id))
        debit = _to_amount(entry.debit_amount)
        credit = _to_amount(entry.credit_amount)
        if debit < ZERO or credit < ZERO:
            raise ValidationError(f"Entry {position}: amounts must not be negative")
        if debit == ZERO and credit == ZERO:
            raise ValidationError(f"Entry {position}: debit or credit amount is required")
        if debit != ZERO and credit != ZERO:
            raise ValidationError(f"Entry {position}: cannot carry both a debit and a credit")
        normalized.append(
            JournalEntry(account_id=entry.account_id, debit_amount=debit, credit_amount=credit)
        )

    if not normalized:
        raise ValidationError("A transaction needs at least one entry")
    if len(normalized) < 2:
        raise ValidationError("A transaction needs at least two entries")

    total_debit = sum((e.debit_amount for e in normalized), ZERO)
    total_credit = sum((e.credit_amount for e in normalized), ZERO)
    if total_debit != total_credit:
        raise ValidationError(unbalanced_entries(total_debit, total_credit))
    if total_debit <= ZERO:
        raise ValidationError("Transaction total must be greater than zero")
    return normalized


class JournalService:
    """Service for recording and editing transactions."""

    def __init__(self, db: Database, chart: ChartOfAccounts):
        """Initialize journal service.

        Args:
            db: Database instance
            chart: Chart of accounts
        """
        self.db = db
        self.chart = chart

    def add_transaction(
        self,
        transaction_date: date,
        description: str,
        entries: Iterable[JournalEntry],
    ) -> Transaction:
        """Record a balanced transaction.

        Args:
            transaction_date: Transaction date
            description: Free-text description
            entries: Debit and credit entries

        Returns:
            The stored transaction with its assigned ID

        Raises:
            ValidationError: If the entries are invalid or do not balance
        """
        normalized = normalize_entries(self.chart, entries)
        transaction_id = self.db.create_transaction(
            transaction_date=transaction_date,
            description=description or "",
            entries=normalized,
        )
        logger.debug("Added transaction %s dated %s", transaction_id, transaction_date)
        return self.db.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: int,
        transaction_date: date,
        description: str,
        entries: Iterable[JournalEntry],
    ) -> Transaction:
        """Replace an existing transaction's date, description and entries.

        Raises:
            NotFoundError: If the transaction does not exist
            ValidationError: If the new entries are invalid or do not balance
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        normalized = normalize_entries(self.chart, entries)
        self.db.replace_transaction(
            transaction_id=transaction_id,
            transaction_date=transaction_date,
            description=description or "",
            entries=normalized,
        )
        logger.debug("Updated transaction %s", transaction_id)
        return self.db.get_transaction(transaction_id)

    def add_from_template(
        self,
        template_id: str,
        amount: Decimal,
        transaction_date: date,
        description: str = "",
    ) -> Transaction:
        """Record a two-entry transaction from a template.

        Raises:
            NotFoundError: If the template does not exist
            ValidationError: If the amount is not positive
        """
        template = self.chart.get_template(template_id)
        if template is None:
            raise NotFoundError(template_not_found(template_id))

        amount = _to_amount(amount)
        if amount <= ZERO:
            raise ValidationError("Amount must be greater than zero")

        return self.add_transaction(
            transaction_date=transaction_date,
            description=description or template.label,
            entries=[
                JournalEntry.debit(template.debit_account_id, amount),
                JournalEntry.credit(template.credit_account_id, amount),
            ],
        )

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions in insertion order."""
        return self.db.list_transactions(start_date=start_date, end_date=end_date)
