"""CLI helpers for account resolution and entry parsing."""

from __future__ import annotations

from decimal import Decimal

import click

from finavis.domain.chart_of_accounts import ChartOfAccounts
from finavis.domain.entities import JournalEntry
from finavis.utils.account_resolver import resolve_account
from finavis.utils.amount_parser import parse_amount


def parse_entry_option(chart: ChartOfAccounts, text: str) -> tuple[int, Decimal]:
    """Parse ``ACCOUNT=AMOUNT`` where ACCOUNT is an account name or ID.

    Raises:
        ValueError: If the text is malformed or the account is unknown
    """
    account, sep, amount = text.rpartition("=")
    if not sep or not account.strip():
        raise ValueError(f"Invalid entry '{text}': expected ACCOUNT=AMOUNT")
    return resolve_account(chart, account.strip()), parse_amount(amount)


def build_entries_or_exit(
    ctx: click.Context,
    chart: ChartOfAccounts,
    debits: tuple[str, ...],
    credits: tuple[str, ...],
) -> list[JournalEntry]:
    """Turn --debit/--credit options into journal entries, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    entries = []
    try:
        for item in debits:
            account_id, amount = parse_entry_option(chart, item)
            entries.append(JournalEntry.debit(account_id, amount))
        for item in credits:
            account_id, amount = parse_entry_option(chart, item)
            entries.append(JournalEntry.credit(account_id, amount))
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
    return entries
