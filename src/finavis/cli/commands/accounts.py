"""Chart of accounts and template listing commands."""

import click

from finavis.domain.session import AccountingSession


@click.command("accounts")
@click.pass_context
def list_accounts(ctx):
    """List the chart of accounts."""
    session: AccountingSession = ctx.obj["session"]

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in session.list_accounts():
        sub_type = acc.sub_type.value if acc.sub_type is not None else "-"
        click.echo(f"ID: {acc.id:3d} | {acc.name:<12s} | {acc.type.value:<9s} | {sub_type}")


@click.command("templates")
@click.pass_context
def list_templates(ctx):
    """List transaction templates usable with 'finavis quick'."""
    session: AccountingSession = ctx.obj["session"]
    chart = session.chart

    click.echo("\nTemplates:")
    click.echo("-" * 80)
    for template in session.list_templates():
        click.echo(
            f"{template.id:<22s} [{template.category.value:<9s}] {template.label}"
            f" (借方: {chart.name_of(template.debit_account_id)}"
            f" / 貸方: {chart.name_of(template.credit_account_id)})"
        )


def register_commands(cli):
    """Register listing commands with main CLI."""
    cli.add_command(list_accounts)
    cli.add_command(list_templates)
