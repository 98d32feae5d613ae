"""Main CLI entry point."""

import click
from cashwallet.config import WalletConfig
from cashwallet.database.factories import create_sqlite_database
from cashwallet.domain.fraud import FraudService
from cashwallet.domain.notifications import LoggingNotifier
from cashwallet.logging import setup_logging

# Import and register all commands at module level
from cashwallet.cli.commands import account, wallet, admin


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CASHWALLET_DB_PATH environment variable)",
    envvar="CASHWALLET_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (overrides CASHWALLET_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Cashwallet - demo wallet with fraud monitoring.

    Register accounts, move virtual cash between them and review
    transactions flagged by the fraud rules.
    """
    ctx.ensure_object(dict)

    config = WalletConfig.from_env()
    if db_path is not None:
        config.database_path = db_path
    if log_level is not None:
        config.log_level = log_level

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        setup_logging(level=config.log_level, format_type=config.log_format)
        db = create_sqlite_database(database_path=config.database_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["config"] = config
        ctx.obj["db"] = db
        ctx.obj["fraud"] = FraudService(db, config.fraud, notifier=LoggingNotifier())


# Register all commands
account.register_commands(cli)
wallet.register_commands(cli)
admin.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
