"""Domain model entities for cashwallet.

These are pure data classes representing wallet concepts, independent of the
database schema. Services and the storage layer exchange only these types.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


DEFAULT_CURRENCY = "USD"


class TransactionKind(str, Enum):
    """Kind of ledger entry."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"

    @property
    def is_transfer(self) -> bool:
        return self in (TransactionKind.TRANSFER_IN, TransactionKind.TRANSFER_OUT)


@dataclass(frozen=True)
class Account:
    """Wallet account domain entity."""

    id: str
    display_name: str
    email: str
    is_admin: bool
    created_at: datetime


@dataclass(frozen=True)
class Balance:
    """Current balance of one account."""

    account_id: str
    amount: Decimal
    currency: str = DEFAULT_CURRENCY


@dataclass(frozen=True)
class Transaction:
    """Ledger entry belonging to a single account's log.

    Only ``flagged`` and ``flag_reason`` may change after creation, and only
    through the fraud engine.
    """

    id: str
    account_id: str
    amount: Decimal
    kind: TransactionKind
    description: str
    timestamp: datetime
    counterparty_account_id: Optional[str] = None
    counterparty_name: Optional[str] = None
    flagged: bool = False
    flag_reason: Optional[str] = None


@dataclass(frozen=True)
class FlagUpdate:
    """A pending fraud flag for one stored transaction."""

    transaction_id: str
    account_id: str
    reason: str


@dataclass
class VelocityWindow:
    """Rolling transaction counter for one account."""

    window_start: datetime
    count: int
