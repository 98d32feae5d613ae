"""Notification sinks for fraud alerts."""

import logging
from abc import ABC, abstractmethod
from enum import Enum

from cashwallet.logging import get_logger

logger = get_logger(__name__)


class Severity(str, Enum):
    """Notification severity."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def log_level(self) -> int:
        return {
            Severity.INFO: logging.INFO,
            Severity.WARNING: logging.WARNING,
            Severity.ERROR: logging.ERROR,
        }[self]


class Notifier(ABC):
    """Abstract notification sink."""

    @abstractmethod
    def notify(self, severity: Severity, title: str, detail: str) -> None:
        """Deliver one notification."""
        pass


class LoggingNotifier(Notifier):
    """Writes notifications to the ``cashwallet.notifications`` logger."""

    def __init__(self, logger_name: str = "cashwallet.notifications"):
        self._logger = get_logger(logger_name)

    def notify(self, severity: Severity, title: str, detail: str) -> None:
        self._logger.log(severity.log_level, "%s: %s", title, detail)


def send_notification(notifier: Notifier, severity: Severity, title: str, detail: str) -> None:
    """Deliver a notification without ever failing the caller.

    Notification is fire-and-forget: sink errors are logged and dropped.
    """
    try:
        notifier.notify(severity, title, detail)
    except Exception:
        logger.exception("Notification '%s' could not be delivered", title)
