"""Add transaction commands."""

import click

from finavis.cli.account_resolution import build_entries_or_exit
from finavis.cli.error_handling import handle_domain_error
from finavis.domain.entities import Transaction
from finavis.domain.errors import DomainError
from finavis.domain.session import AccountingSession
from finavis.utils.amount_parser import format_amount, parse_amount
from finavis.utils.date_parser import parse_date


def echo_transaction(session: AccountingSession, txn: Transaction) -> None:
    """Print a transaction with its entries."""
    click.echo(f"  Date: {txn.transaction_date}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    for entry in txn.entries:
        name = session.chart.name_of(entry.account_id)
        if entry.debit_amount:
            click.echo(f"  借方 {name}: {format_amount(entry.debit_amount)}")
        else:
            click.echo(f"  貸方 {name}: {format_amount(entry.credit_amount)}")


@click.command("add")
@click.option(
    "--date",
    "date_str",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", default="", help="Transaction description")
@click.option(
    "--debit",
    "debits",
    multiple=True,
    metavar="ACCOUNT=AMOUNT",
    help="Debit entry; ACCOUNT is an account name or ID (repeatable)",
)
@click.option(
    "--credit",
    "credits",
    multiple=True,
    metavar="ACCOUNT=AMOUNT",
    help="Credit entry; ACCOUNT is an account name or ID (repeatable)",
)
@click.pass_context
def add_transaction(ctx, date_str: str, description: str, debits, credits):
    """Record a journal transaction.

    Debits and credits must balance.

    Examples:
        finavis add --date 2024-04-01 --description "出資" --debit 現金=1000000 --credit 資本金=1000000
        finavis add --debit 8=500000 --credit 1=300000 --credit 4=200000
    """
    session: AccountingSession = ctx.obj["session"]

    try:
        txn_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    entries = build_entries_or_exit(ctx, session.chart, debits, credits)

    try:
        txn = session.add_transaction(txn_date, description, entries)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {txn.id}")
    echo_transaction(session, txn)


@click.command("quick")
@click.argument("template_id")
@click.argument("amount")
@click.option(
    "--date",
    "date_str",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", default="", help="Description (defaults to the template label)")
@click.pass_context
def add_from_template(ctx, template_id: str, amount: str, date_str: str, description: str):
    """Record a transaction from a template.

    Run 'finavis templates' to see the available TEMPLATE_ID values.

    Examples:
        finavis quick revenue-cash 50000
        finavis quick financing-loan 1,000,000 --date 2024-05-01
    """
    session: AccountingSession = ctx.obj["session"]

    try:
        txn_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        txn = session.add_from_template(template_id, txn_amount, txn_date, description)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {txn.id}")
    echo_transaction(session, txn)


def register_commands(cli):
    """Register add commands with main CLI."""
    cli.add_command(add_transaction)
    cli.add_command(add_from_template)
