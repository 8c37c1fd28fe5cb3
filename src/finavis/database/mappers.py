"""Mapper functions to convert between domain models and SQLAlchemy models.

Statements are stored as JSON documents inside history snapshots. JSON has
no decimal type and only string keys, so amounts are written as decimal
strings and account ids as string keys, then restored on the way back.
"""

from dataclasses import fields
from decimal import Decimal
from typing import Any, TypeVar

from finavis.domain import entities as domain
from finavis.database.models import (
    HistoricalSnapshot as ORMHistoricalSnapshot,
    JournalEntry as ORMJournalEntry,
    Transaction as ORMTransaction,
)

StatementT = TypeVar("StatementT")


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model to domain JournalEntry entity."""
    return domain.JournalEntry(
        account_id=orm_entry.account_id,
        debit_amount=Decimal(orm_entry.debit_amount),
        credit_amount=Decimal(orm_entry.credit_amount),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        transaction_date=orm_transaction.transaction_date,
        description=orm_transaction.description,
        entries=tuple(journal_entry_to_domain(e) for e in orm_transaction.entries),
        created_at=orm_transaction.created_at,
    )


def journal_entries_to_orm(entries: list[domain.JournalEntry]) -> list[ORMJournalEntry]:
    """Build ORM entry rows, numbering them in the given order."""
    return [
        ORMJournalEntry(
            position=position,
            account_id=entry.account_id,
            debit_amount=entry.debit_amount,
            credit_amount=entry.credit_amount,
        )
        for position, entry in enumerate(entries)
    ]


def statement_to_json(statement: Any) -> dict[str, Any]:
    """Serialize a statement dataclass into JSON-safe primitives."""
    result: dict[str, Any] = {}
    for f in fields(statement):
        value = getattr(statement, f.name)
        if isinstance(value, dict):
            result[f.name] = {str(k): str(v) for k, v in value.items()}
        else:
            result[f.name] = str(value)
    return result


def statement_from_json(statement_cls: type[StatementT], data: dict[str, Any]) -> StatementT:
    """Restore a statement dataclass written by ``statement_to_json``.

    Fields missing from ``data`` keep their dataclass defaults.
    """
    kwargs: dict[str, Any] = {}
    for f in fields(statement_cls):
        if f.name not in data:
            continue
        value = data[f.name]
        if isinstance(value, dict):
            kwargs[f.name] = {int(k): Decimal(v) for k, v in value.items()}
        else:
            kwargs[f.name] = Decimal(value)
    return statement_cls(**kwargs)


def historical_snapshot_to_domain(orm_snapshot: ORMHistoricalSnapshot) -> domain.HistoricalData:
    """Convert SQLAlchemy HistoricalSnapshot model to domain HistoricalData entity."""
    return domain.HistoricalData(
        id=orm_snapshot.id,
        period_label=orm_snapshot.period_label,
        start_date=orm_snapshot.start_date,
        end_date=orm_snapshot.end_date,
        balance_sheet=statement_from_json(domain.BalanceSheet, orm_snapshot.balance_sheet),
        income_statement=statement_from_json(
            domain.IncomeStatement, orm_snapshot.income_statement
        ),
        cash_flow_statement=statement_from_json(
            domain.CashFlowStatement, orm_snapshot.cash_flow_statement
        ),
        closed_at=orm_snapshot.closed_at,
    )
