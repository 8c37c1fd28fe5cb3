"""Main CLI entry point."""

import logging

import click
from finavis.database.factories import create_sqlite_database
from finavis.domain.session import AccountingSession

# Import and register all commands at module level
from finavis.cli.commands import (
    accounts,
    add,
    period,
    report,
    sample,
    transaction,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINAVIS_DB_PATH environment variable)",
    envvar="FINAVIS_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
    envvar="FINAVIS_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """FinaVis - double-entry bookkeeping with live financial statements.

    Record journal transactions and view the balance sheet, income statement
    and cash flow statement they produce. Close a fiscal period to move its
    profit into retained earnings and start the next year.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["session"] = AccountingSession(db)
        ctx.call_on_close(db.disconnect)


# Register all commands
accounts.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
period.register_commands(cli)
report.register_commands(cli)
sample.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
