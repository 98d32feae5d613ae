"""CLI helpers for account resolution and service wiring."""

from __future__ import annotations

import click
from cashwallet.domain.account import AccountService
from cashwallet.domain.ledger import LedgerService
from cashwallet.utils.account_resolver import resolve_account


def resolve_account_or_exit(ctx: click.Context, account_service: AccountService, account: str) -> str:
    """Resolve account ID or email, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def ledger_service(ctx: click.Context) -> LedgerService:
    """Build a LedgerService sharing the invocation's fraud service."""
    config = ctx.obj["config"]
    return LedgerService(ctx.obj["db"], ctx.obj["fraud"], currency=config.currency)
