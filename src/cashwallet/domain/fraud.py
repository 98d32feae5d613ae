"""Fraud detection domain service.

Two evaluation modes share one rule set:

* ``evaluate`` runs synchronously on every newly stored transaction and
  applies the large-amount and velocity rules.
* ``rescan`` re-reads the whole transaction log and applies the
  repeated-unusual-amount rule.

Rules are evaluated in a fixed order and the first rule that fires supplies
the flag reason. Flags are monotonic: a flagged transaction is never
re-evaluated by ``rescan`` and never unflagged.
"""

from collections import defaultdict
from datetime import timedelta
from decimal import Decimal
from typing import Callable, Optional, Sequence

from cashwallet.config import FraudConfig
from cashwallet.database.base import Database
from cashwallet.domain.entities import FlagUpdate, Transaction, VelocityWindow
from cashwallet.domain.notifications import (
    LoggingNotifier,
    Notifier,
    Severity,
    send_notification,
)
from cashwallet.logging import get_logger
from cashwallet.utils.clock import Clock, utc_now

logger = get_logger(__name__)


class VelocityTracker:
    """Per-account rolling transaction counter.

    State lives only in memory and resets when the process restarts.
    """

    def __init__(self, window: timedelta, clock: Clock = utc_now):
        self.window = window
        self._clock = clock
        self._windows: dict[str, VelocityWindow] = {}

    def record(self, account_id: str) -> int:
        """Count one transaction for ``account_id`` and return the window count."""
        now = self._clock()
        current = self._windows.get(account_id)
        if current is None or now - current.window_start >= self.window:
            self._windows[account_id] = VelocityWindow(window_start=now, count=1)
            return 1
        current.count += 1
        return current.count

    def get_window(self, account_id: str) -> Optional[VelocityWindow]:
        return self._windows.get(account_id)


class FraudService:
    """Service for flagging suspicious transactions."""

    def __init__(
        self,
        db: Database,
        config: Optional[FraudConfig] = None,
        notifier: Optional[Notifier] = None,
        clock: Clock = utc_now,
    ):
        """Initialize fraud service.

        Args:
            db: Database instance
            config: Rule thresholds (defaults to FraudConfig())
            notifier: Sink for fraud alerts (defaults to LoggingNotifier)
            clock: Time source for the velocity window
        """
        self.db = db
        self.config = config or FraudConfig()
        self.notifier = notifier or LoggingNotifier()
        self.velocity = VelocityTracker(self.config.velocity_window, clock=clock)
        self._incremental_rules: list[tuple[str, Callable[[Transaction], Optional[str]]]] = [
            ("large-amount", self._check_large_amount),
            ("velocity", self._check_velocity),
        ]

    # Incremental check
    def evaluate(self, transaction: Transaction) -> bool:
        """Apply the incremental rules to a newly stored transaction.

        Every rule runs so velocity bookkeeping always advances; the first
        rule to fire provides the reason. A rule that raises is treated as
        not fired.

        Args:
            transaction: Transaction that was just appended to the log

        Returns:
            True if the transaction was flagged

        Raises:
            StorageUnavailableError: If the flag could not be persisted
        """
        reasons = []
        for rule_name, rule in self._incremental_rules:
            try:
                reason = rule(transaction)
            except Exception:
                logger.exception(
                    "Fraud rule %s failed on transaction %s", rule_name, transaction.id
                )
                continue
            if reason is not None:
                reasons.append(reason)

        if not reasons:
            return False

        reason = reasons[0]
        self.db.update_transaction_flag(transaction.id, transaction.account_id, True, reason)
        logger.warning("Fraud alert: %s for account %s", reason, transaction.account_id)
        send_notification(self.notifier, Severity.WARNING, "Transaction flagged for review", reason)
        return True

    def _check_large_amount(self, transaction: Transaction) -> Optional[str]:
        if transaction.amount >= self.config.large_amount_threshold:
            return f"Large amount transaction: ${transaction.amount:.2f}"
        return None

    def _check_velocity(self, transaction: Transaction) -> Optional[str]:
        count = self.velocity.record(transaction.account_id)
        if count >= self.config.velocity_threshold:
            return f"Multiple transactions ({count}) in a short period"
        return None

    # Batch rescan
    def rescan(self) -> int:
        """Re-scan the whole transaction log for repeated unusual amounts.

        Returns:
            Number of transactions flagged by this run
        """
        logger.info("Running fraud rescan")
        updates: list[FlagUpdate] = []
        for account_id, transactions in self.db.list_all_transactions().items():
            try:
                updates.extend(self.find_repeated_unusual_amounts(transactions))
            except Exception:
                logger.exception("Fraud rescan skipped account %s", account_id)

        if updates:
            self.db.update_transaction_flags(updates)
            logger.warning("Fraud rescan found %d suspicious transactions", len(updates))
            send_notification(
                self.notifier,
                Severity.WARNING,
                "Fraud rescan complete",
                f"{len(updates)} suspicious transactions detected",
            )
        else:
            logger.info("Fraud rescan found nothing new")
        return len(updates)

    def find_repeated_unusual_amounts(self, transactions: Sequence[Transaction]) -> list[FlagUpdate]:
        """Find unflagged transactions of one account sharing an unusual amount.

        An amount is unusual when it is above the minimum and not a multiple
        of the round unit. Every unflagged transaction in a group of at least
        ``unusual_repeat_threshold`` is returned.
        """
        groups: dict[Decimal, list[Transaction]] = defaultdict(list)
        for txn in transactions:
            if not txn.flagged:
                groups[txn.amount].append(txn)

        updates = []
        for amount, group in groups.items():
            if not self._is_unusual_amount(amount):
                continue
            if len(group) < self.config.unusual_repeat_threshold:
                continue
            reason = f"Unusual pattern: Amount ${amount:.2f} used {len(group)} times"
            updates.extend(
                FlagUpdate(transaction_id=txn.id, account_id=txn.account_id, reason=reason)
                for txn in group
            )
        return updates

    def _is_unusual_amount(self, amount: Decimal) -> bool:
        return (
            amount > self.config.unusual_min_amount
            and amount % self.config.unusual_round_unit != 0
        )
