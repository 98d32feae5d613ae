"""Periodic fraud rescan timer."""

import threading
from typing import Callable, Optional

from cashwallet.logging import get_logger

logger = get_logger(__name__)


class RescanScheduler:
    """Runs a rescan callable on a fixed interval in a daemon timer thread.

    A failed run is logged and the next run is still scheduled.
    """

    def __init__(self, rescan: Callable[[], int], interval_seconds: float = 300):
        """Initialize scheduler.

        Args:
            rescan: Callable returning the number of newly flagged transactions
            interval_seconds: Seconds between runs
        """
        self.rescan = rescan
        self.interval_seconds = interval_seconds
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start periodic runs. The first run happens after one interval."""
        with self._lock:
            if self._running:
                return
            self._running = True
            self._schedule()
        logger.info("Fraud rescan scheduled every %s seconds", self.interval_seconds)

    def stop(self) -> None:
        """Cancel the pending run, if any."""
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def run_once(self) -> Optional[int]:
        """Run the rescan now.

        Returns:
            Number of newly flagged transactions, or None if the run failed
        """
        try:
            return self.rescan()
        except Exception:
            logger.exception("Scheduled fraud rescan failed")
            return None

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval_seconds, self._tick)
        self._timer.daemon = True
        self._timer.start()

    def _tick(self) -> None:
        self.run_once()
        with self._lock:
            if self._running:
                self._schedule()
