"""SQLAlchemy models for finavis database."""

from datetime import datetime, UTC
from decimal import Decimal
from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


class ExactDecimal(TypeDecorator):
    """Decimal stored as its text form.

    SQLite keeps NUMERIC columns as floating point, which silently rounds
    large amounts, so the exact digits are written as a string instead.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class Setting(Base):
    """Key/value setting model."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)


class Transaction(Base):
    """Journal transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    transaction_date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entries = relationship(
        "JournalEntry",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="JournalEntry.position",
    )


class JournalEntry(Base):
    """One debit or credit line of a transaction."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    position = Column(Integer, nullable=False)
    account_id = Column(Integer, nullable=False)
    debit_amount = Column(ExactDecimal, nullable=False, default=Decimal("0"))
    credit_amount = Column(ExactDecimal, nullable=False, default=Decimal("0"))

    # Relationships
    transaction = relationship("Transaction", back_populates="entries")


class HistoricalSnapshot(Base):
    """Statements captured when a fiscal period was closed."""

    __tablename__ = "historical_snapshots"

    id = Column(Integer, primary_key=True)
    period_label = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    balance_sheet = Column(JSON, nullable=False)
    income_statement = Column(JSON, nullable=False)
    cash_flow_statement = Column(JSON, nullable=False)
    closed_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # Share one connection so every session sees the same in-memory database
        engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
