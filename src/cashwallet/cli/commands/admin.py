"""Administrator commands: ledger overview, flagged review and fraud rescans."""

import threading

import click
from cashwallet.cli.account_resolution import ledger_service, resolve_account_or_exit
from cashwallet.cli.commands.wallet import format_transaction
from cashwallet.cli.error_handling import handle_domain_error
from cashwallet.domain.account import AccountService
from cashwallet.domain.errors import DomainError
from cashwallet.domain.scheduler import RescanScheduler


@click.group()
def admin_group():
    """Administrator operations."""
    pass


def _requester_or_exit(ctx: click.Context, requester: str) -> str:
    account_service = AccountService(ctx.obj["db"])
    requester_id = resolve_account_or_exit(ctx, account_service, requester)
    if not account_service.is_admin(requester_id):
        click.echo("Error: Unauthorized", err=True)
        ctx.exit(1)
    return requester_id


@admin_group.command("balances")
@click.option("--as", "requester", required=True, help="Administrator account ID or email")
@click.pass_context
def list_balances(ctx, requester: str):
    """List every stored balance."""
    requester_id = _requester_or_exit(ctx, requester)
    try:
        balances = ledger_service(ctx).list_all_balances(requester_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not balances:
        click.echo("No balances found.")
        return

    for account_id, balance in balances.items():
        click.echo(f"{account_id:18s} | ${balance.amount:>12,.2f} {balance.currency}")


@admin_group.command("transactions")
@click.option("--as", "requester", required=True, help="Administrator account ID or email")
@click.option("--flagged", is_flag=True, help="Only show flagged transactions")
@click.pass_context
def list_transactions(ctx, requester: str, flagged: bool):
    """List transactions of every account."""
    requester_id = _requester_or_exit(ctx, requester)
    ledger = ledger_service(ctx)
    try:
        if flagged:
            transactions = ledger.list_flagged_transactions(requester_id)
        else:
            transactions = ledger.list_all_transactions(requester_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in sorted(transactions, key=lambda t: t.timestamp, reverse=True):
        click.echo(f"{txn.account_id:18s} | {format_transaction(txn)}")


@admin_group.command("flagged")
@click.option("--as", "requester", required=True, help="Administrator account ID or email")
@click.pass_context
def list_flagged(ctx, requester: str):
    """List transactions flagged for review."""
    ctx.invoke(list_transactions, requester=requester, flagged=True)


@admin_group.command("rescan")
@click.option("--as", "requester", required=True, help="Administrator account ID or email")
@click.pass_context
def rescan(ctx, requester: str):
    """Run the fraud rescan once."""
    _requester_or_exit(ctx, requester)
    try:
        count = ctx.obj["fraud"].rescan()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Fraud rescan complete: {count} transaction{'s' if count != 1 else ''} flagged")


@admin_group.command("monitor")
@click.option("--as", "requester", required=True, help="Administrator account ID or email")
@click.option("--interval", type=float, help="Seconds between rescans (default from config)")
@click.pass_context
def monitor(ctx, requester: str, interval: float | None):
    """Run the fraud rescan periodically until interrupted."""
    _requester_or_exit(ctx, requester)
    config = ctx.obj["config"]
    scheduler = RescanScheduler(
        ctx.obj["fraud"].rescan,
        interval_seconds=interval or config.fraud.rescan_interval_seconds,
    )
    click.echo(f"Monitoring every {scheduler.interval_seconds:g}s. Press Ctrl+C to stop.")
    scheduler.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        click.echo("Stopping monitor.")
    finally:
        scheduler.stop()


@admin_group.command("seed")
@click.option("--amount", type=str, help="Starting balance (default from config)")
@click.pass_context
def seed_admin_wallets(ctx, amount: str | None):
    """Give administrator accounts without a balance a starting balance."""
    config = ctx.obj["config"]
    ledger = ledger_service(ctx)
    try:
        seeded = ledger.initialize_admin_wallets(
            amount if amount is not None else config.admin_seed_balance
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not seeded:
        click.echo("No administrator wallets needed seeding.")
        return
    for account_id in seeded:
        balance = ledger.get_balance(account_id)
        click.echo(f"Seeded {account_id} with ${balance.amount:,.2f} {balance.currency}")


def register_commands(cli):
    """Register admin commands with main CLI."""
    cli.add_command(admin_group, name="admin")
