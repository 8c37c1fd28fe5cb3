"""Transaction management commands."""

import click

from finavis.cli.account_resolution import build_entries_or_exit
from finavis.cli.commands.add import echo_transaction
from finavis.cli.error_handling import handle_domain_error
from finavis.domain.errors import DomainError
from finavis.domain.session import AccountingSession
from finavis.utils.amount_parser import format_amount
from finavis.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--verbose", "-v", is_flag=True, help="Show every journal entry")
@click.pass_context
def list_transactions(ctx, verbose: bool):
    """List transactions in the order they were recorded."""
    session: AccountingSession = ctx.obj["session"]

    transactions = session.list_transactions()
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 80)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            echo_transaction(session, txn)
            click.echo("-" * 80)
        return

    click.echo("-" * 80)
    click.echo(f"{'ID':<6} {'Date':<12} {'Amount':>14}  {'Description'}")
    click.echo("-" * 80)
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {str(txn.transaction_date):<12} "
            f"{format_amount(txn.total_debit):>14}  {txn.description[:40]}"
        )


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show one transaction with its entries."""
    session: AccountingSession = ctx.obj["session"]

    txn = session.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"Transaction ID: {txn.id}")
    echo_transaction(session, txn)


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--date", "date_str", help="New date (keeps the current date if omitted)")
@click.option("--description", help="New description (keeps the current one if omitted)")
@click.option("--debit", "debits", multiple=True, metavar="ACCOUNT=AMOUNT", help="Debit entry")
@click.option("--credit", "credits", multiple=True, metavar="ACCOUNT=AMOUNT", help="Credit entry")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    date_str: str | None,
    description: str | None,
    debits,
    credits,
) -> None:
    """Update a transaction.

    Entries are replaced as a whole: when any --debit or --credit is given
    the complete new entry set must be supplied. Without them the existing
    entries are kept.

    Examples:
        finavis transaction update 3 --description "売上（修正）"
        finavis transaction update 3 --debit 現金=90000 --credit 売上=90000
    """
    session: AccountingSession = ctx.obj["session"]

    existing = session.get_transaction(transaction_id)
    if existing is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    txn_date = existing.transaction_date
    if date_str is not None:
        try:
            txn_date = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    if debits or credits:
        entries = build_entries_or_exit(ctx, session.chart, debits, credits)
    else:
        entries = list(existing.entries)

    try:
        txn = session.update_transaction(
            transaction_id,
            txn_date,
            description if description is not None else existing.description,
            entries,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated transaction {txn.id}")
    echo_transaction(session, txn)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
