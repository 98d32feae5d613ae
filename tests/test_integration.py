"""Integration tests for end-to-end CLI workflows."""

from datetime import datetime, UTC
from decimal import Decimal

from cashwallet.cli.commands.wallet import format_transaction
from cashwallet.cli.main import cli
from cashwallet.domain.entities import Transaction, TransactionKind


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--log-level", "ERROR", *args])


def test_full_workflow(cli_runner, temp_db):
    """Test register → deposit → transfer → history → admin review → rescan."""
    for name, email, extra in [
        ("Alice", "alice@example.com", []),
        ("Bob", "bob@example.com", []),
        ("Admin", "admin@example.com", ["--admin"]),
    ]:
        result = _invoke(cli_runner, temp_db, "account", "register", name, "--email", email, *extra)
        assert result.exit_code == 0

    result = _invoke(cli_runner, temp_db, "deposit", "alice@example.com", "1,500.00", "--description", "Salary")
    assert result.exit_code == 0
    assert "New balance: $1,500.00 USD" in result.output

    result = _invoke(
        cli_runner, temp_db, "transfer", "alice@example.com", "bob@example.com", "77", "--description", "Lunch"
    )
    assert result.exit_code == 0
    assert "New balance: $1,423.00 USD" in result.output

    result = _invoke(cli_runner, temp_db, "balance", "bob@example.com")
    assert result.exit_code == 0
    assert "Balance: $77.00 USD" in result.output

    result = _invoke(cli_runner, temp_db, "history", "alice@example.com")
    assert result.exit_code == 0
    lines = [line for line in result.output.splitlines() if "|" in line]
    assert "transfer_out" in lines[0]
    assert "(to Bob)" in lines[0]
    assert "deposit" in lines[1]
    assert "[FLAGGED: Large amount transaction: $1500.00]" in lines[1]

    result = _invoke(cli_runner, temp_db, "admin", "flagged", "--as", "admin@example.com")
    assert result.exit_code == 0
    assert "Large amount transaction" in result.output
    assert "Lunch" not in result.output

    result = _invoke(cli_runner, temp_db, "admin", "rescan", "--as", "admin@example.com")
    assert result.exit_code == 0
    assert "0 transactions flagged" in result.output


def test_rescan_flags_repeated_amounts(cli_runner, temp_db, ledger_service, clock, alice, admin):
    """Test the rescan command flags a repeated unusual amount."""
    for _ in range(3):
        ledger_service.deposit(alice, 88)
        clock.advance(minutes=10)

    result = _invoke(cli_runner, temp_db, "admin", "rescan", "--as", admin)
    assert result.exit_code == 0
    assert "3 transactions flagged" in result.output

    result = _invoke(cli_runner, temp_db, "history", alice, "--flagged")
    assert result.exit_code == 0
    assert result.output.count("Unusual pattern: Amount $88.00 used 3 times") == 3


def test_wallet_errors_exit_with_failure(cli_runner, temp_db, alice, bob):
    """Test domain errors are reported with exit code 1."""
    result = _invoke(cli_runner, temp_db, "withdraw", alice, "10")
    assert result.exit_code == 1
    assert "Insufficient funds" in result.output

    result = _invoke(cli_runner, temp_db, "deposit", alice, "0")
    assert result.exit_code == 1
    assert "greater than zero" in result.output

    result = _invoke(cli_runner, temp_db, "deposit", alice, "ten")
    assert result.exit_code == 1
    assert "Invalid amount format" in result.output

    result = _invoke(cli_runner, temp_db, "transfer", alice, alice, "1")
    assert result.exit_code == 1
    assert "Cannot transfer to yourself" in result.output

    result = _invoke(cli_runner, temp_db, "transfer", alice, "user_missing", "1")
    assert result.exit_code == 1
    assert "Recipient user_missing not found" in result.output


def test_admin_commands_require_admin(cli_runner, temp_db, alice):
    """Test non-admin accounts cannot use admin commands."""
    for command in ("balances", "transactions", "flagged", "rescan"):
        result = _invoke(cli_runner, temp_db, "admin", command, "--as", alice)
        assert result.exit_code == 1
        assert "Unauthorized" in result.output


def test_admin_seed_and_balances(cli_runner, temp_db, admin):
    """Test seeding admin wallets and listing balances."""
    result = _invoke(cli_runner, temp_db, "admin", "seed")
    assert result.exit_code == 0
    assert f"Seeded {admin} with $10,000.00 USD" in result.output

    result = _invoke(cli_runner, temp_db, "admin", "seed")
    assert "No administrator wallets needed seeding" in result.output

    result = _invoke(cli_runner, temp_db, "admin", "balances", "--as", "admin@example.com")
    assert result.exit_code == 0
    assert admin in result.output
    assert "10,000.00" in result.output


def test_format_transaction_names_counterparty_only_for_transfers():
    """Test history rows show a direction and counterparty for transfers only."""
    timestamp = datetime(2026, 1, 15, 9, 30, tzinfo=UTC)
    incoming = Transaction(
        id="tx_1_in",
        account_id="user_2",
        amount=Decimal("12.50"),
        kind=TransactionKind.TRANSFER_IN,
        description="Lunch",
        timestamp=timestamp,
        counterparty_account_id="user_1",
    )
    deposit = Transaction(
        id="tx_2",
        account_id="user_2",
        amount=Decimal("40.00"),
        kind=TransactionKind.DEPOSIT,
        description="Cash",
        timestamp=timestamp,
        counterparty_account_id="user_9",
    )

    assert format_transaction(incoming).endswith("Lunch (from user_1)")
    assert "+$     12.50" in format_transaction(incoming)
    assert format_transaction(deposit).endswith("| Cash")
    assert not TransactionKind.DEPOSIT.is_transfer
    assert not TransactionKind.WITHDRAWAL.is_transfer
