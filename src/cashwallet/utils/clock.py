"""Time source used by the ledger and the fraud engine."""

from datetime import datetime, UTC
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)
