"""Main CLI entry point."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.errors import DomainError
from ledgerbook.logging_setup import configure_logging, get_logger
from ledgerbook.session import SessionProvider, session_from_env

# Import and register all commands at module level
from ledgerbook.cli.commands import (
    customer,
    dashboard,
    payment,
    session,
    transaction,
)

logger = get_logger(__name__)

# Commands that run without a session even when one is required
SESSIONLESS_COMMANDS = {"whoami"}


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERBOOK_DB_PATH environment variable)",
    envvar="LEDGERBOOK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="LEDGERBOOK_LOG_LEVEL",
    help="Logging level (default WARNING)",
)
@click.option(
    "--require-session/--no-require-session",
    default=False,
    envvar="LEDGERBOOK_REQUIRE_SESSION",
    help="Refuse to run commands unless LEDGERBOOK_SESSION_TOKEN is set",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None, require_session: bool):
    """Ledgerbook - customer balances for a small business.

    Record customers, the transactions they owe, and payments against those
    transactions; see what you should receive and what you owe.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    provider = SessionProvider(session_from_env())
    ctx.obj["session"] = provider

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    if (
        require_session
        and ctx.invoked_subcommand not in SESSIONLESS_COMMANDS
        and not provider.is_authenticated()
    ):
        click.echo("Error: Not signed in (set LEDGERBOOK_SESSION_TOKEN).", err=True)
        ctx.exit(1)

    try:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
    except DomainError as e:
        handle_domain_error(ctx, e)
    ctx.obj["db"] = db
    ctx.call_on_close(db.disconnect)
    logger.debug("Using database %s", db.database_url)


# Register all commands
customer.register_commands(cli)
transaction.register_commands(cli)
payment.register_commands(cli)
dashboard.register_commands(cli)
session.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
