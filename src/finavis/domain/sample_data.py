"""Sample data generator for demonstrations."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from dateutil.relativedelta import relativedelta

from finavis.domain.chart_of_accounts import (
    CASH_ACCOUNT_ID,
    SALARIES_ACCOUNT_ID,
    ChartOfAccounts,
)
from finavis.domain.entities import FiscalPeriod, JournalEntry
from finavis.domain.errors import ConflictError
from finavis.domain.fiscal_period import FiscalPeriodService, utc_today
from finavis.domain.journal import JournalService

if TYPE_CHECKING:
    from finavis.database.base import Database

logger = logging.getLogger(__name__)

OPENING_CAPITAL = Decimal("1000000")
LONG_TERM_LOAN = Decimal("500000")
EQUIPMENT_COST = Decimal("300000")
MONTHLY_CASH_SALES = Decimal("300000")
MONTHLY_CREDIT_SALES = Decimal("100000")
MONTHLY_PURCHASES = Decimal("150000")
MONTHLY_SALARIES = Decimal("80000")
MONTHLY_GROWTH = Decimal("10000")


class SampleDataService:
    """Service that seeds a fresh journal with a year of demo activity."""

    def __init__(self, db: Database, chart: ChartOfAccounts):
        """Initialize sample data service.

        Args:
            db: Database instance
            chart: Chart of accounts
        """
        self.db = db
        self.chart = chart
        self.journal = JournalService(db, chart)
        self.fiscal_period = FiscalPeriodService(db)

    def load(self, start_date: date, today: Optional[date] = None) -> int:
        """Seed sample transactions from ``start_date`` up to today.

        The fiscal period is set without fast-forwarding and monthly activity
        is generated until today or the period end, whichever comes first.

        Args:
            start_date: First day of the sample fiscal period
            today: Override for the current UTC date

        Returns:
            Number of transactions created

        Raises:
            ConflictError: If the journal already holds transactions
        """
        if self.journal.list_transactions():
            raise ConflictError("Sample data can only be loaded into an empty journal")

        with self.db.transaction():
            count, period = self._seed(start_date, today or utc_today())
        logger.info("Loaded %d sample transactions for %s", count, period.label)
        return count

    def _seed(self, start_date: date, today: date) -> tuple[int, FiscalPeriod]:
        self.db.clear_history()
        self.fiscal_period.reset()
        period = self.fiscal_period.set_start_date(start_date, is_sample=True)
        self.fiscal_period.set_use_sample_data(True)
        last_day = min(today, period.end_date)

        count = 0
        self.journal.add_from_template(
            "financing-capital", OPENING_CAPITAL, start_date, "事業開始のため資本金を現金で受け入れた"
        )
        count += 1

        month = 0
        while True:
            month_start = start_date + relativedelta(months=month)
            if month_start > last_day:
                break

            plan = [
                (4, "expense-cogs-cash", MONTHLY_PURCHASES, "商品を現金で仕入れた"),
                (14, "revenue-cash", MONTHLY_CASH_SALES + MONTHLY_GROWTH * month, "商品を現金で売り上げた"),
                (19, "revenue-receivable", MONTHLY_CREDIT_SALES, "商品を掛けで売り上げた"),
                (24, None, MONTHLY_SALARIES, "従業員の給料を現金で支払った"),
            ]
            if month == 0:
                plan.append((29, "asset-purchase-cash", EQUIPMENT_COST, "備品を現金で購入した"))
            if month == 1:
                plan.insert(0, (0, "financing-loan", LONG_TERM_LOAN, "銀行から長期資金を借り入れた"))

            for day_offset, template_id, amount, description in plan:
                txn_date = month_start + timedelta(days=day_offset)
                if txn_date > last_day:
                    continue
                if template_id is None:
                    # Salaries have no template
                    self.journal.add_transaction(
                        txn_date,
                        description,
                        [
                            JournalEntry.debit(SALARIES_ACCOUNT_ID, amount),
                            JournalEntry.credit(CASH_ACCOUNT_ID, amount),
                        ],
                    )
                else:
                    self.journal.add_from_template(template_id, amount, txn_date, description)
                count += 1
            month += 1

        return count, period
