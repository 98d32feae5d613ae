"""Account directory domain service."""

import re
import uuid
from typing import Optional

from cashwallet.database.base import Database
from cashwallet.domain.entities import Account as AccountEntity
from cashwallet.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    duplicate_email,
)
from cashwallet.logging import get_logger

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AccountService:
    """Service for registering and resolving accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def register_account(self, display_name: str, email: str, is_admin: bool = False) -> str:
        """Register a new account.

        Args:
            display_name: Name shown to other users
            email: Contact email, unique across accounts
            is_admin: Whether the account may use administrator operations

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty or the email is malformed
            ConflictError: If an account with the same email exists
        """
        display_name = display_name.strip()
        email = email.strip().lower()
        if not display_name:
            raise ValidationError("Display name must not be empty")
        if not EMAIL_PATTERN.match(email):
            raise ValidationError(f"Invalid email address '{email}'")

        if self.db.get_account_by_email(email) is not None:
            raise ConflictError(duplicate_email(email))

        account_id = f"user_{uuid.uuid4().hex[:12]}"
        self.db.create_account(
            account_id=account_id, display_name=display_name, email=email, is_admin=is_admin
        )
        logger.info("Registered account %s (admin=%s)", account_id, is_admin)
        return account_id

    def get_account(self, account_id: str) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def get_account_by_email(self, email: str) -> Optional[AccountEntity]:
        """Get account by email."""
        return self.db.get_account_by_email(email.strip())

    def resolve(self, account_id: str) -> AccountEntity:
        """Get account by ID, raising if it does not exist.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def is_admin(self, account_id: str) -> bool:
        """Return True if the account exists and is an administrator."""
        account = self.db.get_account(account_id)
        return account is not None and account.is_admin

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()
