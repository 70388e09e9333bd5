"""Main CLI entry point."""

import click
from finreport.cli.error_handling import handle_storage_error
from finreport.database.factories import create_sqlite_database
from finreport.domain.errors import StorageError
from finreport.logging_config import configure_logging

# Import and register all commands at module level
from finreport.cli.commands import account, journal, report

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINREPORT_DB_PATH environment variable)",
    envvar="FINREPORT_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="FINREPORT_LOG_LEVEL",
    help="Logging verbosity (written to stderr)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Finreport - financial reports from a journal-entry ledger.

    Derives general ledgers, trial balances, balance sheets and income
    statements from posted journal entries and a chart of accounts.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            db = create_sqlite_database(database_path=db_path)
            db.connect()
            db.initialize_schema()
        except StorageError as e:
            handle_storage_error(ctx, e, "Could not open database")
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
journal.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
