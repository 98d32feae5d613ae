"""Shared pytest fixtures for cashwallet tests."""

import logging
import os
import tempfile
from datetime import datetime, timedelta, UTC

import pytest

from cashwallet.config import FraudConfig
from cashwallet.database.factories import create_sqlite_database
from cashwallet.domain.account import AccountService
from cashwallet.domain.fraud import FraudService
from cashwallet.domain.ledger import LedgerService
from cashwallet.domain.notifications import Notifier


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime = datetime(2026, 1, 15, 9, 30, tzinfo=UTC)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingNotifier(Notifier):
    """Notifier that keeps every notification in memory."""

    def __init__(self):
        self.events = []

    def notify(self, severity, title, detail):
        self.events.append((severity, title, detail))


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handlers installed by setup_logging during a test."""
    root = logging.getLogger()
    package_logger = logging.getLogger("cashwallet")
    handlers = root.handlers[:]
    level = root.level
    package_level = package_logger.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    package_logger.setLevel(package_level)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """Create a fake clock shared by the ledger and fraud services."""
    return FakeClock()


@pytest.fixture
def notifier():
    """Create a notifier that records notifications."""
    return RecordingNotifier()


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def fraud_service(temp_db, notifier, clock):
    """Create a FraudService with default thresholds."""
    return FraudService(temp_db, FraudConfig(), notifier=notifier, clock=clock)


@pytest.fixture
def ledger_service(temp_db, fraud_service, clock):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db, fraud_service, clock=clock)


@pytest.fixture
def alice(account_service):
    """Register a regular account and return its ID."""
    return account_service.register_account("Alice", "alice@example.com")


@pytest.fixture
def bob(account_service):
    """Register a second regular account and return its ID."""
    return account_service.register_account("Bob", "bob@example.com")


@pytest.fixture
def admin(account_service):
    """Register an administrator account and return its ID."""
    return account_service.register_account("Admin", "admin@example.com", is_admin=True)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
