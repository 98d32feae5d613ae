"""Wallet commands: deposit, withdraw, transfer, balance and history."""

import click
from cashwallet.cli.account_resolution import ledger_service, resolve_account_or_exit
from cashwallet.cli.error_handling import handle_domain_error
from cashwallet.domain.account import AccountService
from cashwallet.domain.entities import Transaction, TransactionKind
from cashwallet.domain.errors import DomainError
from cashwallet.utils.amount_parser import parse_amount


def _parse_amount_or_exit(ctx: click.Context, amount: str):
    try:
        return parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def format_transaction(txn: Transaction) -> str:
    """Render a transaction as one history line."""
    sign = "+" if txn.kind in (TransactionKind.DEPOSIT, TransactionKind.TRANSFER_IN) else "-"
    line = (
        f"{txn.timestamp:%Y-%m-%d %H:%M} | {txn.kind.value:12s} | "
        f"{sign}${txn.amount:>10,.2f} | {txn.description}"
    )
    if txn.kind.is_transfer:
        direction = "to" if txn.kind == TransactionKind.TRANSFER_OUT else "from"
        line += f" ({direction} {txn.counterparty_name or txn.counterparty_account_id})"
    if txn.flagged:
        line += f" [FLAGGED: {txn.flag_reason}]"
    return line


@click.command("deposit")
@click.argument("account", metavar="ACCOUNT")
@click.argument("amount", metavar="AMOUNT")
@click.option("--description", help="Transaction description")
@click.pass_context
def deposit(ctx, account: str, amount: str, description: str | None):
    """Deposit AMOUNT into ACCOUNT (ID or email).

    Examples:
        cashwallet deposit alice@example.com 250
    """
    account_id = resolve_account_or_exit(ctx, AccountService(ctx.obj["db"]), account)
    value = _parse_amount_or_exit(ctx, amount)

    try:
        balance = ledger_service(ctx).deposit(account_id, value, description)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deposited ${value:,.2f}. New balance: ${balance.amount:,.2f} {balance.currency}")


@click.command("withdraw")
@click.argument("account", metavar="ACCOUNT")
@click.argument("amount", metavar="AMOUNT")
@click.option("--description", help="Transaction description")
@click.pass_context
def withdraw(ctx, account: str, amount: str, description: str | None):
    """Withdraw AMOUNT from ACCOUNT (ID or email)."""
    account_id = resolve_account_or_exit(ctx, AccountService(ctx.obj["db"]), account)
    value = _parse_amount_or_exit(ctx, amount)

    try:
        balance = ledger_service(ctx).withdraw(account_id, value, description)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Withdrew ${value:,.2f}. New balance: ${balance.amount:,.2f} {balance.currency}")


@click.command("transfer")
@click.argument("sender", metavar="SENDER")
@click.argument("recipient", metavar="RECIPIENT")
@click.argument("amount", metavar="AMOUNT")
@click.option("--description", help="Transaction description")
@click.pass_context
def transfer(ctx, sender: str, recipient: str, amount: str, description: str | None):
    """Transfer AMOUNT from SENDER to RECIPIENT.

    SENDER can be an account ID or email. RECIPIENT is passed to the ledger
    as given, resolving an email first if one matches.

    Examples:
        cashwallet transfer alice@example.com bob@example.com 40 --description "Lunch"
    """
    account_service = AccountService(ctx.obj["db"])
    sender_id = resolve_account_or_exit(ctx, account_service, sender)
    recipient_obj = account_service.get_account_by_email(recipient) if "@" in recipient else None
    recipient_id = recipient_obj.id if recipient_obj is not None else recipient
    value = _parse_amount_or_exit(ctx, amount)

    try:
        balance = ledger_service(ctx).transfer(sender_id, recipient_id, value, description)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(
        f"Transferred ${value:,.2f} to {recipient_id}. "
        f"New balance: ${balance.amount:,.2f} {balance.currency}"
    )


@click.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_balance(ctx, account: str):
    """Show the balance of ACCOUNT (ID or email)."""
    account_id = resolve_account_or_exit(ctx, AccountService(ctx.obj["db"]), account)
    balance = ledger_service(ctx).get_balance(account_id)
    click.echo(f"Balance: ${balance.amount:,.2f} {balance.currency}")


@click.command("history")
@click.argument("account", metavar="ACCOUNT")
@click.option("--flagged", is_flag=True, help="Only show flagged transactions")
@click.pass_context
def show_history(ctx, account: str, flagged: bool):
    """Show the transactions of ACCOUNT, most recent first."""
    account_id = resolve_account_or_exit(ctx, AccountService(ctx.obj["db"]), account)
    transactions = ledger_service(ctx).get_history(account_id)
    if flagged:
        transactions = [t for t in transactions if t.flagged]

    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in reversed(transactions):
        click.echo(format_transaction(txn))


def register_commands(cli):
    """Register wallet commands with main CLI."""
    cli.add_command(deposit)
    cli.add_command(withdraw)
    cli.add_command(transfer)
    cli.add_command(show_balance)
    cli.add_command(show_history)
