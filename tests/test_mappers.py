"""Tests for database mappers."""

from datetime import date, datetime, UTC
from decimal import Decimal

from finavis.database.mappers import (
    historical_snapshot_to_domain,
    journal_entries_to_orm,
    statement_from_json,
    statement_to_json,
    transaction_to_domain,
)
from finavis.database.models import (
    HistoricalSnapshot as ORMHistoricalSnapshot,
    JournalEntry as ORMJournalEntry,
    Transaction as ORMTransaction,
)
from finavis.domain.entities import (
    BalanceSheet,
    CashFlowStatement,
    HistoricalData,
    IncomeStatement,
    JournalEntry,
    Transaction,
)


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain(self):
        """Test converting ORM Transaction to domain Transaction."""
        orm_transaction = ORMTransaction(
            id=1,
            transaction_date=date(2024, 4, 1),
            description="出資",
            created_at=datetime.now(UTC),
            entries=[
                ORMJournalEntry(position=0, account_id=1, debit_amount=Decimal("1000"), credit_amount=Decimal("0")),
                ORMJournalEntry(position=1, account_id=6, debit_amount=Decimal("0"), credit_amount=Decimal("1000")),
            ],
        )

        transaction = transaction_to_domain(orm_transaction)

        assert isinstance(transaction, Transaction)
        assert transaction.id == 1
        assert transaction.description == "出資"
        assert transaction.entries == (
            JournalEntry.debit(1, Decimal("1000")),
            JournalEntry.credit(6, Decimal("1000")),
        )

    def test_entries_to_orm_numbers_positions(self):
        rows = journal_entries_to_orm(
            [JournalEntry.debit(8, Decimal("5")), JournalEntry.credit(1, Decimal("5"))]
        )
        assert [(r.position, r.account_id) for r in rows] == [(0, 8), (1, 1)]


class TestStatementJson:
    """Tests for statement JSON encoding."""

    def test_amounts_and_ids_are_strings(self):
        data = statement_to_json(
            BalanceSheet(current_assets={1: Decimal("1170000.50")}, total_assets=Decimal("1170000.50"))
        )
        assert data["current_assets"] == {"1": "1170000.50"}
        assert data["total_assets"] == "1170000.50"

    def test_restores_int_keys_and_decimals(self):
        statement = IncomeStatement(
            revenue={7: Decimal("300000")},
            sga={9: Decimal("80000")},
            net_income=Decimal("220000"),
        )
        restored = statement_from_json(IncomeStatement, statement_to_json(statement))
        assert restored == statement
        assert list(restored.revenue) == [7]

    def test_missing_fields_keep_defaults(self):
        restored = statement_from_json(CashFlowStatement, {"net_cash_flow": "10"})
        assert restored.net_cash_flow == Decimal("10")
        assert restored.operating_activities == Decimal("0")


def test_historical_snapshot_to_domain():
    orm_snapshot = ORMHistoricalSnapshot(
        id=3,
        period_label="第1期 (2024/4/1 - 2025/3/31)",
        start_date=date(2024, 4, 1),
        end_date=date(2025, 3, 31),
        balance_sheet=statement_to_json(BalanceSheet(total_assets=Decimal("5"))),
        income_statement=statement_to_json(IncomeStatement()),
        cash_flow_statement=statement_to_json(CashFlowStatement()),
        closed_at=datetime.now(UTC),
    )

    snapshot = historical_snapshot_to_domain(orm_snapshot)

    assert isinstance(snapshot, HistoricalData)
    assert snapshot.id == 3
    assert snapshot.balance_sheet.total_assets == Decimal("5")
    assert snapshot.statements.income_statement == IncomeStatement()
