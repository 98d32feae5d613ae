"""Account management commands."""

import click
from cashwallet.cli.account_resolution import resolve_account_or_exit
from cashwallet.domain.account import AccountService


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("register")
@click.argument("name", metavar="DISPLAY_NAME")
@click.option("--email", required=True, help="Account email (must be unique)")
@click.option("--admin", is_flag=True, help="Grant administrator privileges")
@click.pass_context
def register_account(ctx, name: str, email: str, admin: bool):
    """Register a new account.

    Examples:
        cashwallet account register "Alice" --email alice@example.com
        cashwallet account register "Ops" --email ops@example.com --admin
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        account_id = service.register_account(display_name=name, email=email, is_admin=admin)
        click.echo(f"Registered account '{name}' (ID: {account_id})")
        if admin:
            click.echo("Administrator privileges granted")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        role = "admin" if acc.is_admin else "user"
        click.echo(f"{acc.id:18s} | {acc.display_name:20s} | {acc.email:28s} | {role}")


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show one account.

    ACCOUNT can be an account ID or email.
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.resolve(account_id)

    click.echo(f"ID: {account_obj.id}")
    click.echo(f"Name: {account_obj.display_name}")
    click.echo(f"Email: {account_obj.email}")
    click.echo(f"Administrator: {'yes' if account_obj.is_admin else 'no'}")
    click.echo(f"Created: {account_obj.created_at:%Y-%m-%d %H:%M}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
