"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from typing import ContextManager, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from finavis.domain.entities import (
    BalanceSheet,
    CashFlowStatement,
    HistoricalData,
    IncomeStatement,
    JournalEntry,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for finavis."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self) -> ContextManager[None]:
        """Context in which every write commits together or is rolled back."""
        pass

    # Key/value settings
    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        """Get a setting value, or None if unset."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        """Create or overwrite a setting."""
        pass

    @abstractmethod
    def delete_setting(self, key: str) -> None:
        """Remove a setting. Missing keys are ignored."""
        pass

    # Journal operations
    @abstractmethod
    def create_transaction(
        self,
        transaction_date: date,
        description: str,
        entries: list[JournalEntry],
    ) -> int:
        """Create a transaction with its entries. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def replace_transaction(
        self,
        transaction_id: int,
        transaction_date: date,
        description: str,
        entries: list[JournalEntry],
    ) -> None:
        """Replace date, description and the whole entry set of a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions in insertion order, optionally within a date window.

        Args:
            start_date: Optional inclusive start date filter
            end_date: Optional inclusive end date filter
        """
        pass

    # History operations
    @abstractmethod
    def add_historical_snapshot(
        self,
        period_label: str,
        start_date: date,
        end_date: date,
        balance_sheet: BalanceSheet,
        income_statement: IncomeStatement,
        cash_flow_statement: CashFlowStatement,
    ) -> int:
        """Append a closed-period snapshot. Returns snapshot ID."""
        pass

    @abstractmethod
    def list_historical_snapshots(self) -> list[HistoricalData]:
        """List closed-period snapshots, oldest first."""
        pass

    @abstractmethod
    def clear_history(self) -> None:
        """Remove every closed-period snapshot."""
        pass
