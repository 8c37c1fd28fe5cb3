"""Sample data commands."""

import click

from finavis.cli.error_handling import handle_domain_error
from finavis.domain.errors import DomainError
from finavis.domain.session import AccountingSession
from finavis.utils.date_parser import parse_date


@click.group()
def sample_group():
    """Work with demonstration data."""
    pass


@sample_group.command("load")
@click.argument("start_date")
@click.pass_context
def load_sample(ctx, start_date: str):
    """Seed an empty journal with sample activity from START_DATE to today.

    Examples:
        finavis sample load 2024-04-01
    """
    session: AccountingSession = ctx.obj["session"]

    try:
        start = parse_date(start_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        count = session.load_sample_data(start)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Loaded {count} sample transaction(s)")
    click.echo(f"Fiscal period: {session.get_fiscal_period_label()}")


def register_commands(cli):
    """Register sample data commands with main CLI."""
    cli.add_command(sample_group, name="sample")
