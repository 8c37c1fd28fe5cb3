"""Domain layer for finavis application."""

from finavis.domain.chart_of_accounts import ChartOfAccounts
from finavis.domain.closing import PeriodClosingService
from finavis.domain.fiscal_period import FiscalPeriodService
from finavis.domain.journal import JournalService
from finavis.domain.sample_data import SampleDataService
from finavis.domain.session import AccountingSession
from finavis.domain.statements import derive_statements

__all__ = [
    "AccountingSession",
    "ChartOfAccounts",
    "FiscalPeriodService",
    "JournalService",
    "PeriodClosingService",
    "SampleDataService",
    "derive_statements",
]
