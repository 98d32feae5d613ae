"""Utility for resolving account IDs or emails to account IDs."""

from cashwallet.domain.account import AccountService
from cashwallet.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, account: str) -> str:
    """Resolve an account ID or email to an account ID.

    Args:
        account_service: AccountService instance
        account: Account ID (e.g. "user_1a2b3c4d5e6f") or email

    Returns:
        Account ID

    Raises:
        NotFoundError: If no account matches
    """
    account_obj = account_service.get_account(account)
    if account_obj is not None:
        return account_obj.id

    if "@" in account:
        account_obj = account_service.get_account_by_email(account)
        if account_obj is not None:
            return account_obj.id

    raise NotFoundError(f"Account '{account}' not found")
