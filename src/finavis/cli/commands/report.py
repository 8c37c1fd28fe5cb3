"""Financial statement report commands."""

import click

from finavis.cli.error_handling import handle_domain_error
from finavis.cli.formatting import (
    echo_lines,
    render_balance_sheet,
    render_cash_flow_statement,
    render_income_statement,
)
from finavis.domain.entities import FinancialStatements
from finavis.domain.errors import NotFoundError
from finavis.domain.session import AccountingSession
from finavis.utils.amount_parser import format_amount

period_option = click.option(
    "--period",
    "period_index",
    type=int,
    help="Historical period index from 'finavis report history' (default: current period)",
)


def _select_statements(
    ctx: click.Context, session: AccountingSession, period_index: int | None
) -> tuple[str, FinancialStatements]:
    """Return the label and statements for the current or a closed period."""
    if period_index is None:
        if session.is_initial_setup:
            click.echo("Fiscal period is not set; statements are empty.", err=True)
        return f"{session.get_fiscal_period_label()} (現在)", session.get_statements()
    try:
        snapshot = session.get_historical_statements(period_index)
    except NotFoundError as e:
        handle_domain_error(ctx, e)
    return snapshot.period_label, snapshot.statements


@click.group()
def report_group():
    """Show financial statements."""
    pass


@report_group.command("balance-sheet")
@period_option
@click.pass_context
def balance_sheet(ctx, period_index: int | None):
    """Show the balance sheet."""
    session: AccountingSession = ctx.obj["session"]
    label, statements = _select_statements(ctx, session, period_index)
    click.echo(label)
    echo_lines(render_balance_sheet(session.chart, statements.balance_sheet))


@report_group.command("income-statement")
@period_option
@click.pass_context
def income_statement(ctx, period_index: int | None):
    """Show the income statement."""
    session: AccountingSession = ctx.obj["session"]
    label, statements = _select_statements(ctx, session, period_index)
    click.echo(label)
    echo_lines(render_income_statement(session.chart, statements.income_statement))


@report_group.command("cash-flow")
@period_option
@click.pass_context
def cash_flow(ctx, period_index: int | None):
    """Show the cash flow statement."""
    session: AccountingSession = ctx.obj["session"]
    label, statements = _select_statements(ctx, session, period_index)
    click.echo(label)
    echo_lines(render_cash_flow_statement(statements.cash_flow_statement))


@report_group.command("history")
@click.pass_context
def history(ctx):
    """List closed periods."""
    session: AccountingSession = ctx.obj["session"]

    snapshots = session.get_history()
    if not snapshots:
        click.echo("No closed periods.")
        return

    click.echo(f"{'Index':<6} {'Period':<36} {'Net income':>14} {'Total assets':>14}")
    click.echo("-" * 74)
    for index, snapshot in enumerate(snapshots):
        click.echo(
            f"{index:<6} {snapshot.period_label:<36} "
            f"{format_amount(snapshot.income_statement.net_income):>14} "
            f"{format_amount(snapshot.balance_sheet.total_assets):>14}"
        )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
