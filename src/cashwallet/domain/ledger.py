"""Ledger domain service.

The ledger service is the only component that writes balances or appends to
the transaction log. Each operation validates everything first, then stores
the new balance(s) and transaction record(s) in one storage commit, then
hands every new record to the fraud service.
"""

import uuid
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cashwallet.database.base import Database
from cashwallet.domain.account import AccountService
from cashwallet.domain.entities import (
    DEFAULT_CURRENCY,
    Balance,
    Transaction,
    TransactionKind,
)
from cashwallet.domain.errors import (
    InsufficientFundsError,
    InvalidAmountError,
    RecipientNotFoundError,
    SelfTransferError,
    UnauthorizedError,
    amount_over_limit,
    insufficient_funds,
    invalid_amount,
    recipient_not_found,
    self_transfer,
    unauthorized,
)
from cashwallet.domain.fraud import FraudService
from cashwallet.logging import get_logger
from cashwallet.utils.amount_parser import to_currency
from cashwallet.utils.clock import Clock, utc_now

logger = get_logger(__name__)

TRANSFER_IN_SUFFIX = "_in"

# Largest value the Numeric(14, 2) amount columns store exactly
MAX_AMOUNT = Decimal("999999999999.99")


def generate_transaction_id(timestamp: datetime) -> str:
    """Return a new transaction ID like ``tx_1700000000000_1a2b3c4d5``."""
    return f"tx_{int(timestamp.timestamp() * 1000)}_{uuid.uuid4().hex[:9]}"


class LedgerService:
    """Service for moving money between wallets."""

    def __init__(
        self,
        db: Database,
        fraud_service: FraudService,
        currency: str = DEFAULT_CURRENCY,
        clock: Clock = utc_now,
    ):
        """Initialize ledger service.

        Args:
            db: Database instance
            fraud_service: Fraud service invoked on every new transaction
            currency: Currency code for newly created balances
            clock: Time source for transaction timestamps
        """
        self.db = db
        self.fraud_service = fraud_service
        self.accounts = AccountService(db)
        self.currency = currency
        self._clock = clock

    def _validate_amount(self, amount: Decimal | int | str) -> Decimal:
        try:
            value = to_currency(amount)
        except ValueError as e:
            raise InvalidAmountError(invalid_amount(amount)) from e
        if value <= 0:
            raise InvalidAmountError(invalid_amount(amount))
        if value > MAX_AMOUNT:
            raise InvalidAmountError(amount_over_limit(value, MAX_AMOUNT))
        return value

    def _credit(self, balance: Balance, value: Decimal) -> Balance:
        total = balance.amount + value
        if total > MAX_AMOUNT:
            raise InvalidAmountError(amount_over_limit(total, MAX_AMOUNT))
        return replace(balance, amount=total)

    def get_balance(self, account_id: str) -> Balance:
        """Get an account's balance; accounts never credited read as zero."""
        balance = self.db.read_balance(account_id)
        if balance is None:
            return Balance(account_id=account_id, amount=Decimal("0.00"), currency=self.currency)
        return balance

    def get_history(self, account_id: str) -> list[Transaction]:
        """Get an account's transactions in insertion order (oldest first)."""
        return self.db.list_transactions_for_account(account_id)

    def deposit(
        self, account_id: str, amount: Decimal | int | str, description: Optional[str] = None
    ) -> Balance:
        """Credit an account.

        Args:
            account_id: Account to credit
            amount: Positive amount
            description: Optional description (defaults to "Deposit")

        Returns:
            Updated balance

        Raises:
            InvalidAmountError: If amount is not positive, or the balance would
                exceed MAX_AMOUNT
            StorageUnavailableError: If the store fails
        """
        value = self._validate_amount(amount)
        current = self.get_balance(account_id)
        updated = self._credit(current, value)

        timestamp = self._clock()
        transaction = Transaction(
            id=generate_transaction_id(timestamp),
            account_id=account_id,
            amount=value,
            kind=TransactionKind.DEPOSIT,
            description=description or "Deposit",
            timestamp=timestamp,
        )
        self.db.post_entries([updated], [transaction])
        logger.info("Deposited %s into %s (%s)", value, account_id, transaction.id)

        self.fraud_service.evaluate(transaction)
        return updated

    def withdraw(
        self, account_id: str, amount: Decimal | int | str, description: Optional[str] = None
    ) -> Balance:
        """Debit an account.

        Args:
            account_id: Account to debit
            amount: Positive amount not exceeding the balance
            description: Optional description (defaults to "Withdrawal")

        Returns:
            Updated balance

        Raises:
            InvalidAmountError: If amount is not positive
            InsufficientFundsError: If amount exceeds the balance
            StorageUnavailableError: If the store fails
        """
        value = self._validate_amount(amount)
        current = self.get_balance(account_id)
        if value > current.amount:
            raise InsufficientFundsError(insufficient_funds(account_id, current.amount, value))
        updated = replace(current, amount=current.amount - value)

        timestamp = self._clock()
        transaction = Transaction(
            id=generate_transaction_id(timestamp),
            account_id=account_id,
            amount=value,
            kind=TransactionKind.WITHDRAWAL,
            description=description or "Withdrawal",
            timestamp=timestamp,
        )
        self.db.post_entries([updated], [transaction])
        logger.info("Withdrew %s from %s (%s)", value, account_id, transaction.id)

        self.fraud_service.evaluate(transaction)
        return updated

    def transfer(
        self,
        sender_id: str,
        recipient_id: str,
        amount: Decimal | int | str,
        description: Optional[str] = None,
    ) -> Balance:
        """Move money from one account to another.

        Produces a transfer_out record on the sender's log and a transfer_in
        record on the recipient's log. They share a timestamp; the recipient
        record's ID is the sender record's ID with an ``_in`` suffix.

        Args:
            sender_id: Account to debit
            recipient_id: Account to credit, must exist in the directory
            amount: Positive amount not exceeding the sender's balance
            description: Optional description (defaults to "Transfer")

        Returns:
            Sender's updated balance

        Raises:
            InvalidAmountError: If amount is not positive
            SelfTransferError: If sender and recipient are the same
            RecipientNotFoundError: If the recipient does not exist
            InsufficientFundsError: If amount exceeds the sender's balance
            InvalidAmountError: If the recipient balance would exceed MAX_AMOUNT
            StorageUnavailableError: If the store fails
        """
        value = self._validate_amount(amount)
        if sender_id == recipient_id:
            raise SelfTransferError(self_transfer(sender_id))

        recipient = self.accounts.get_account(recipient_id)
        if recipient is None:
            raise RecipientNotFoundError(recipient_not_found(recipient_id))

        sender_balance = self.get_balance(sender_id)
        if value > sender_balance.amount:
            raise InsufficientFundsError(
                insufficient_funds(sender_id, sender_balance.amount, value)
            )
        recipient_balance = self.get_balance(recipient_id)

        sender_updated = replace(sender_balance, amount=sender_balance.amount - value)
        recipient_updated = self._credit(recipient_balance, value)

        sender = self.accounts.get_account(sender_id)
        timestamp = self._clock()
        description = description or "Transfer"
        transaction_id = generate_transaction_id(timestamp)

        outgoing = Transaction(
            id=transaction_id,
            account_id=sender_id,
            amount=value,
            kind=TransactionKind.TRANSFER_OUT,
            description=description,
            timestamp=timestamp,
            counterparty_account_id=recipient_id,
            counterparty_name=recipient.display_name,
        )
        incoming = Transaction(
            id=transaction_id + TRANSFER_IN_SUFFIX,
            account_id=recipient_id,
            amount=value,
            kind=TransactionKind.TRANSFER_IN,
            description=description,
            timestamp=timestamp,
            counterparty_account_id=sender_id,
            counterparty_name=sender.display_name if sender is not None else None,
        )
        self.db.post_entries([sender_updated, recipient_updated], [outgoing, incoming])
        logger.info(
            "Transferred %s from %s to %s (%s)", value, sender_id, recipient_id, transaction_id
        )

        self.fraud_service.evaluate(outgoing)
        self.fraud_service.evaluate(incoming)
        return sender_updated

    # Administrator operations
    def _require_admin(self, requester_id: str) -> None:
        if not self.accounts.is_admin(requester_id):
            raise UnauthorizedError(unauthorized(requester_id))

    def list_all_balances(self, requester_id: str) -> dict[str, Balance]:
        """Get every stored balance. Administrator only.

        Raises:
            UnauthorizedError: If the requester is not an administrator
        """
        self._require_admin(requester_id)
        return self.db.list_balances()

    def list_all_transactions(self, requester_id: str) -> list[Transaction]:
        """Get every account's transactions, grouped by account. Administrator only.

        Raises:
            UnauthorizedError: If the requester is not an administrator
        """
        self._require_admin(requester_id)
        return [
            txn
            for transactions in self.db.list_all_transactions().values()
            for txn in transactions
        ]

    def list_flagged_transactions(self, requester_id: str) -> list[Transaction]:
        """Get every flagged transaction. Administrator only.

        Raises:
            UnauthorizedError: If the requester is not an administrator
        """
        return [txn for txn in self.list_all_transactions(requester_id) if txn.flagged]

    def initialize_admin_wallets(self, seed_amount: Decimal | int | str = Decimal("10000")) -> list[str]:
        """Give every administrator without a balance a starting balance.

        No transaction record is written and no fraud check runs.

        Returns:
            IDs of the accounts that were seeded
        """
        value = self._validate_amount(seed_amount)
        seeded = []
        for account in self.accounts.list_accounts():
            if not account.is_admin or self.db.read_balance(account.id) is not None:
                continue
            self.db.write_balance(
                Balance(account_id=account.id, amount=value, currency=self.currency)
            )
            logger.info("Initialized admin wallet %s with %s", account.id, value)
            seeded.append(account.id)
        return seeded
