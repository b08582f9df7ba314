"""Main CLI entry point."""

import logging

import click
from networth.database.factories import create_sqlite_database

# Import and register all commands at module level
from networth.cli.commands import (
    valuation,
    transaction,
    import_cmd,
    position,
    report,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides NETWORTH_DB_PATH environment variable)",
    envvar="NETWORTH_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="NETWORTH_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Networth - Net worth history from valuations and transactions.

    Record what your assets and liabilities are worth from time to time,
    add or import cash transactions, and get a month-by-month net worth
    history.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
valuation.register_commands(cli)
transaction.register_commands(cli)
import_cmd.register_commands(cli)
position.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
