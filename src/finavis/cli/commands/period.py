"""Fiscal period commands."""

import click

from finavis.cli.error_handling import handle_domain_error
from finavis.domain.errors import DomainError
from finavis.domain.session import AccountingSession
from finavis.utils.amount_parser import format_amount
from finavis.utils.date_parser import parse_date


@click.group()
def period_group():
    """Manage the fiscal period."""
    pass


@period_group.command("show")
@click.pass_context
def show_period(ctx):
    """Show the current fiscal period and whether it is closed."""
    session: AccountingSession = ctx.obj["session"]

    if session.is_initial_setup:
        click.echo("Fiscal period: 未設定")
        click.echo("Run 'finavis period set START_DATE' to begin.")
        return

    click.echo(f"Fiscal period: {session.get_fiscal_period_label()}")
    if session.is_period_closed():
        click.echo(f"Status: closed (net income {format_amount(session.closed_net_income())})")
    else:
        click.echo("Status: open")
    if session.use_sample_data:
        click.echo("Sample data: on")


@period_group.command("set")
@click.argument("start_date")
@click.option("--sample", is_flag=True, help="Keep the date as given (no fast-forward)")
@click.pass_context
def set_period(ctx, start_date: str, sample: bool):
    """Set the fiscal period start date.

    A start date more than a year in the past is moved forward by whole
    years so that the period contains today, unless --sample is given.
    Once a first start date is recorded, later calls count those years
    from it, so the period keeps the original anniversary.

    Examples:
        finavis period set 2024-04-01
        finavis period set 2023-04-01 --sample
    """
    session: AccountingSession = ctx.obj["session"]

    try:
        start = parse_date(start_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    period = session.set_fiscal_start_date(start, is_sample=sample)
    click.echo(f"Fiscal period set: {period.label}")
    if period.start_date != start:
        click.echo(f"Start date adjusted from {start} to {period.start_date}")


@period_group.command("reset")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset_period(ctx, yes: bool):
    """Clear the fiscal period so it can be configured again."""
    session: AccountingSession = ctx.obj["session"]

    if not yes and not click.confirm("Reset the fiscal period?"):
        click.echo("Reset cancelled.")
        return

    session.reset_fiscal_period()
    click.echo("Fiscal period reset.")


@period_group.command("post-tax")
@click.pass_context
def post_tax(ctx):
    """Book corporate income tax (30% of pre-tax income)."""
    session: AccountingSession = ctx.obj["session"]

    try:
        txn = session.post_income_tax()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Posted income tax {format_amount(txn.total_debit)} (transaction {txn.id})")


@period_group.command("close")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def close_period(ctx, yes: bool):
    """Close the current period and advance to the next year.

    Revenue and expense balances are transferred to retained earnings and
    the closing statements are kept in history.
    """
    session: AccountingSession = ctx.obj["session"]

    if not yes and not click.confirm(f"Close {session.get_fiscal_period_label()}?"):
        click.echo("Closing cancelled.")
        return

    try:
        snapshot = session.close_period()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Closed {snapshot.period_label}")
    click.echo(f"  Net income: {format_amount(snapshot.income_statement.net_income)}")
    click.echo(f"  Retained earnings: {format_amount(snapshot.balance_sheet.retained_earnings)}")
    click.echo(f"Current period: {session.get_fiscal_period_label()}")


def register_commands(cli):
    """Register period commands with main CLI."""
    cli.add_command(period_group, name="period")
