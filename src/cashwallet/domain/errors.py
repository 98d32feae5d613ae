"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidAmountError(ValidationError):
    """Amount is not a positive currency value."""


class SelfTransferError(ValidationError):
    """Sender and recipient of a transfer are the same account."""


class InsufficientFundsError(DomainError):
    """Operation would drive a balance below zero."""


class RecipientNotFoundError(NotFoundError):
    """Transfer recipient is unknown to the account directory."""


class UnauthorizedError(DomainError):
    """Caller lacks the privilege required for the operation."""


class StorageUnavailableError(DomainError):
    """The persistence layer failed to read or write."""


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def recipient_not_found(account_id: str) -> str:
    """Return message for an unknown transfer recipient."""
    return f"Recipient {account_id} not found"


def invalid_amount(amount: object) -> str:
    """Return message for a non-positive or unparseable amount."""
    return f"Amount must be greater than zero (got {amount})"


def amount_over_limit(amount: Decimal, limit: Decimal) -> str:
    """Return message for an amount or resulting balance the ledger cannot store."""
    return f"Amount {amount:.2f} exceeds the ledger limit of {limit:.2f}"


def insufficient_funds(account_id: str, balance: Decimal, amount: Decimal) -> str:
    """Return message when a debit exceeds the available balance."""
    return (
        f"Insufficient funds in account {account_id}: "
        f"balance {balance:.2f}, requested {amount:.2f}"
    )


def self_transfer(account_id: str) -> str:
    """Return message for a transfer to the sender's own account."""
    return f"Cannot transfer to yourself ({account_id})"


def unauthorized(account_id: str) -> str:
    """Return message for a non-admin requester."""
    return f"Account {account_id} is not authorized for administrator operations"


def duplicate_email(email: str) -> str:
    """Return message for a duplicate account email."""
    return f"Account with email '{email}' already exists"
