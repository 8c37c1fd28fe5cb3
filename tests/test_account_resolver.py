"""Tests for account name and ID resolution."""

import pytest
from decimal import Decimal

from finavis.cli.account_resolution import parse_entry_option
from finavis.utils.account_resolver import resolve_account


def test_resolve_by_id(chart):
    assert resolve_account(chart, 1) == 1
    assert resolve_account(chart, "7") == 7


def test_resolve_by_name(chart):
    assert resolve_account(chart, "売掛金") == 2


def test_resolve_unknown(chart):
    with pytest.raises(ValueError, match="not found"):
        resolve_account(chart, "存在しない")
    with pytest.raises(ValueError, match="not found"):
        resolve_account(chart, 999)


def test_parse_entry_option(chart):
    assert parse_entry_option(chart, "現金=1,000,000") == (1, Decimal("1000000"))
    assert parse_entry_option(chart, "8=500") == (8, Decimal("500"))


def test_parse_entry_option_requires_separator(chart):
    with pytest.raises(ValueError, match="ACCOUNT=AMOUNT"):
        parse_entry_option(chart, "現金")
