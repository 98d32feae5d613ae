"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from cashwallet.domain.entities import (
    Account,
    Balance,
    Transaction,
    FlagUpdate,
)


class Database(ABC):
    """Abstract storage interface for the ledger, the transaction log and the
    account directory.

    Implementations assume a single writer. Every method is synchronous from
    the caller's point of view and raises StorageUnavailableError when the
    underlying store fails.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self, account_id: str, display_name: str, email: str, is_admin: bool = False
    ) -> str:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_email(self, email: str) -> Optional[Account]:
        """Get account by email (case-insensitive)."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Balance operations
    @abstractmethod
    def read_balance(self, account_id: str) -> Optional[Balance]:
        """Get the stored balance for an account, or None if never credited."""
        pass

    @abstractmethod
    def write_balance(self, balance: Balance) -> None:
        """Store a balance, replacing any previous value (last writer wins)."""
        pass

    @abstractmethod
    def list_balances(self) -> dict[str, Balance]:
        """Get all stored balances keyed by account ID."""
        pass

    # Transaction log operations
    @abstractmethod
    def append_transaction(self, transaction: Transaction) -> None:
        """Append a transaction to its account's log."""
        pass

    @abstractmethod
    def post_entries(
        self, balances: Sequence[Balance], transactions: Sequence[Transaction]
    ) -> None:
        """Write balances and append transactions as one unit.

        Either every balance and every transaction is stored, or none is.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions_for_account(self, account_id: str) -> list[Transaction]:
        """List an account's transactions in insertion order."""
        pass

    @abstractmethod
    def list_all_transactions(self) -> dict[str, list[Transaction]]:
        """Get every account's transactions, each list in insertion order."""
        pass

    @abstractmethod
    def update_transaction_flag(
        self, transaction_id: str, account_id: str, flagged: bool, reason: Optional[str]
    ) -> None:
        """Set the fraud flag and reason on a stored transaction.

        A flag that is already set is never cleared.
        """
        pass

    @abstractmethod
    def update_transaction_flags(self, updates: Sequence[FlagUpdate]) -> None:
        """Flag several transactions in one write."""
        pass
