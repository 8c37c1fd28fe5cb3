"""Utility functions for finavis."""

from finavis.utils.date_parser import parse_date
from finavis.utils.amount_parser import parse_amount, format_amount
from finavis.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "format_amount", "resolve_account"]
