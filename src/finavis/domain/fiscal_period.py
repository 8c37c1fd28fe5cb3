"""Fiscal period tracker.

The tracker owns the current period start, the original (first-ever) start
used as the epoch for period numbering, and the "use sample data" flag.
Its state lives in the database key/value store so it survives restarts.

States: unset -> set -> set (advanced) -> unset (reset).
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from dateutil.relativedelta import relativedelta

from finavis.domain.entities import FiscalPeriod, OpeningBalances
from finavis.domain.errors import PeriodNotConfiguredError, period_not_configured

if TYPE_CHECKING:
    from finavis.database.base import Database

logger = logging.getLogger(__name__)

START_DATE_KEY = "fiscal_start_date"
ORIGINAL_START_DATE_KEY = "original_start_date"
USE_SAMPLE_DATA_KEY = "use_sample_data"
OPENING_RETAINED_EARNINGS_KEY = "opening_retained_earnings"
OPENING_BALANCES_KEY = "opening_balances"

UNSET_LABEL = "未設定"


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(UTC).date()


def period_end_for(start_date: date) -> date:
    """Last day of the one-year period starting at ``start_date``."""
    return start_date + relativedelta(years=1) - timedelta(days=1)


def fiscal_year_for_date(target_date: date, start_month: int) -> int:
    return target_date.year - 1 if target_date.month < start_month else target_date.year


def period_number(start_date: date, original_start_date: date) -> int:
    """1-based period number of ``start_date`` counted from the original start."""
    start_month = original_start_date.month
    return (
        fiscal_year_for_date(start_date, start_month)
        - fiscal_year_for_date(original_start_date, start_month)
        + 1
    )


def format_period_date(value: date) -> str:
    return f"{value.year}/{value.month}/{value.day}"


def format_period_label(start_date: Optional[date], original_start_date: Optional[date]) -> str:
    """Render ``第{n}期 (start - end)``, or the unset label."""
    if start_date is None:
        return UNSET_LABEL
    number = period_number(start_date, original_start_date or start_date)
    end_date = period_end_for(start_date)
    return f"第{number}期 ({format_period_date(start_date)} - {format_period_date(end_date)})"


def fast_forward(candidate: date, today: date) -> date:
    """Advance ``candidate`` by whole years until its period contains ``today``.

    Years are added to the original candidate rather than compounded, so a
    29 February start does not drift to the 28th for every later year.
    """
    if not candidate < today:
        return candidate
    years = 0
    while not today < candidate + relativedelta(years=years + 1):
        years += 1
    return candidate + relativedelta(years=years)


class FiscalPeriodService:
    """Service for the fiscal period state machine."""

    def __init__(self, db: Database):
        """Initialize fiscal period service.

        Args:
            db: Database instance
        """
        self.db = db

    def _get_date(self, key: str) -> Optional[date]:
        value = self.db.get_setting(key)
        if value is None:
            return None
        return date.fromisoformat(value)

    @property
    def start_date(self) -> Optional[date]:
        return self._get_date(START_DATE_KEY)

    @property
    def original_start_date(self) -> Optional[date]:
        return self._get_date(ORIGINAL_START_DATE_KEY)

    @property
    def end_date(self) -> Optional[date]:
        start = self.start_date
        return period_end_for(start) if start is not None else None

    @property
    def is_initial_setup(self) -> bool:
        """True while no start date has been chosen."""
        return self.start_date is None

    @property
    def period_label(self) -> str:
        return format_period_label(self.start_date, self.original_start_date)

    def get_period(self) -> FiscalPeriod:
        """Return the current tracker state as an immutable value."""
        start = self.start_date
        original = self.original_start_date
        return FiscalPeriod(
            start_date=start,
            original_start_date=original,
            end_date=period_end_for(start) if start is not None else None,
            label=format_period_label(start, original),
        )

    def require_period(self) -> FiscalPeriod:
        """Return the current period, or raise if the tracker is unset.

        Raises:
            PeriodNotConfiguredError: If no start date is set
        """
        period = self.get_period()
        if not period.is_set:
            raise PeriodNotConfiguredError(period_not_configured())
        return period

    def set_start_date(
        self, start_date: date, is_sample: bool = False, today: Optional[date] = None
    ) -> FiscalPeriod:
        """Choose the fiscal period start.

        On the first call the date also becomes the original start date.
        Unless ``is_sample`` is set, an original start date in the past is
        advanced by whole years until the period contains today, and that
        date replaces the requested one. Otherwise the requested date is
        used as given.

        Args:
            start_date: Requested first day of the period
            is_sample: Skip fast-forwarding so sample data renders unmodified
            today: Override for the current UTC date

        Returns:
            The resulting fiscal period
        """
        original = self.original_start_date
        if original is None:
            original = start_date
            self.db.set_setting(ORIGINAL_START_DATE_KEY, start_date.isoformat())

        effective = start_date
        today = today or utc_today()
        if not is_sample and original < today:
            effective = fast_forward(original, today)
            logger.info("Fast-forwarded fiscal start %s to %s", original, effective)

        self.db.set_setting(START_DATE_KEY, effective.isoformat())
        period = self.get_period()
        logger.info("Fiscal period set: %s", period.label)
        return period

    def advance_to_next_period(self) -> FiscalPeriod:
        """Move the start date forward by exactly one year.

        Raises:
            PeriodNotConfiguredError: If no start date is set
        """
        current = self.require_period()
        next_start = current.start_date + relativedelta(years=1)
        self.db.set_setting(START_DATE_KEY, next_start.isoformat())
        period = self.get_period()
        logger.info("Advanced fiscal period to %s", period.label)
        return period

    def reset(self) -> None:
        """Clear the period and the figures carried from previous closings."""
        for key in (
            START_DATE_KEY,
            ORIGINAL_START_DATE_KEY,
            OPENING_RETAINED_EARNINGS_KEY,
            OPENING_BALANCES_KEY,
        ):
            self.db.delete_setting(key)
        logger.info("Fiscal period reset")

    # Sample data flag
    @property
    def use_sample_data(self) -> bool:
        return self.db.get_setting(USE_SAMPLE_DATA_KEY) == "1"

    def set_use_sample_data(self, use: bool) -> None:
        self.db.set_setting(USE_SAMPLE_DATA_KEY, "1" if use else "0")

    # Opening figures carried between periods
    def get_opening_balances(self) -> OpeningBalances:
        retained = self.db.get_setting(OPENING_RETAINED_EARNINGS_KEY)
        raw_balances = self.db.get_setting(OPENING_BALANCES_KEY)
        balances: dict[int, Decimal] = {}
        if raw_balances:
            balances = {int(k): Decimal(v) for k, v in json.loads(raw_balances).items()}
        return OpeningBalances(
            retained_earnings=Decimal(retained) if retained is not None else Decimal("0"),
            balances=balances,
        )

    def set_opening_balances(self, opening: OpeningBalances) -> None:
        self.db.set_setting(OPENING_RETAINED_EARNINGS_KEY, str(opening.retained_earnings))
        self.db.set_setting(
            OPENING_BALANCES_KEY,
            json.dumps({str(k): str(v) for k, v in opening.balances.items()}),
        )
