"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the domain entities stay stable
when the database schema changes.
"""

from datetime import datetime, UTC

from cashwallet.domain import entities as domain
from cashwallet.database.models import (
    Account as ORMAccount,
    Balance as ORMBalance,
    Transaction as ORMTransaction,
)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        display_name=orm_account.display_name,
        email=orm_account.email,
        is_admin=orm_account.is_admin,
        created_at=_as_utc(orm_account.created_at),
    )


def balance_to_domain(orm_balance: ORMBalance) -> domain.Balance:
    """Convert SQLAlchemy Balance model to domain Balance entity."""
    return domain.Balance(
        account_id=orm_balance.account_id,
        amount=orm_balance.amount,
        currency=orm_balance.currency,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        amount=orm_transaction.amount,
        kind=domain.TransactionKind(orm_transaction.kind),
        description=orm_transaction.description,
        timestamp=_as_utc(orm_transaction.timestamp),
        counterparty_account_id=orm_transaction.counterparty_account_id,
        counterparty_name=orm_transaction.counterparty_name,
        flagged=orm_transaction.flagged,
        flag_reason=orm_transaction.flag_reason,
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Build a new SQLAlchemy Transaction row from a domain Transaction."""
    return ORMTransaction(
        id=transaction.id,
        account_id=transaction.account_id,
        amount=transaction.amount,
        kind=transaction.kind.value,
        description=transaction.description,
        timestamp=transaction.timestamp,
        counterparty_account_id=transaction.counterparty_account_id,
        counterparty_name=transaction.counterparty_name,
        flagged=transaction.flagged,
        flag_reason=transaction.flag_reason,
    )
