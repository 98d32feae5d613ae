"""Tests for configuration, logging setup and notifications."""

import io
import json
import logging
import sys
from datetime import timedelta
from decimal import Decimal

import pytest

from cashwallet.config import FraudConfig, WalletConfig
from cashwallet.domain.notifications import LoggingNotifier, Notifier, Severity, send_notification
from cashwallet.logging import JsonFormatter, setup_logging


def test_default_config():
    """Test defaults match the documented thresholds."""
    config = WalletConfig()

    assert config.currency == "USD"
    assert config.admin_seed_balance == Decimal("10000")
    assert config.database_path is None
    assert config.fraud.large_amount_threshold == Decimal("1000")
    assert config.fraud.velocity_threshold == 3
    assert config.fraud.velocity_window == timedelta(minutes=5)
    assert config.fraud.unusual_repeat_threshold == 3
    assert config.fraud.unusual_min_amount == Decimal("50")
    assert config.fraud.unusual_round_unit == Decimal("100")
    assert config.fraud.rescan_interval_seconds == 300


def test_config_from_env(monkeypatch):
    """Test environment variables override defaults."""
    monkeypatch.setenv("CASHWALLET_LARGE_AMOUNT", "2500.50")
    monkeypatch.setenv("CASHWALLET_VELOCITY_WINDOW", "60")
    monkeypatch.setenv("CASHWALLET_RESCAN_INTERVAL", "30")
    monkeypatch.setenv("CASHWALLET_DB_PATH", "/tmp/wallet.db")
    monkeypatch.setenv("CASHWALLET_LOG_FORMAT", "json")

    config = WalletConfig.from_env()

    assert config.fraud.large_amount_threshold == Decimal("2500.50")
    assert config.fraud.velocity_window == timedelta(seconds=60)
    assert config.fraud.rescan_interval_seconds == 30
    assert config.fraud.velocity_threshold == 3
    assert config.database_path == "/tmp/wallet.db"
    assert config.log_format == "json"


def test_fraud_config_is_independent_per_instance():
    """Test nested config objects are not shared."""
    first = WalletConfig()
    second = WalletConfig()
    first.fraud.velocity_threshold = 10

    assert second.fraud.velocity_threshold == 3
    assert isinstance(second.fraud, FraudConfig)


def test_setup_logging_standard_format():
    """Test standard format writes pipe-separated records."""
    stream = io.StringIO()
    setup_logging(level="DEBUG", format_type="standard", stream=stream)

    logging.getLogger("cashwallet.test").debug("hello %s", "world")

    output = stream.getvalue()
    assert "DEBUG" in output
    assert "cashwallet.test" in output
    assert "hello world" in output


def test_setup_logging_json_format():
    """Test json format writes one JSON object per record."""
    stream = io.StringIO()
    setup_logging(level="INFO", format_type="json", stream=stream)

    logging.getLogger("cashwallet.test").info("structured")
    logging.getLogger("cashwallet.test").debug("hidden")

    lines = stream.getvalue().strip().splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["level"] == "INFO"
    assert record["logger"] == "cashwallet.test"
    assert record["message"] == "structured"


def test_json_formatter_includes_exception():
    """Test exception info is serialized."""
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord(
            "cashwallet", logging.ERROR, __file__, 1, "failed", None, exc_info=sys.exc_info()
        )

    data = json.loads(JsonFormatter().format(record))
    assert data["message"] == "failed"
    assert "RuntimeError: boom" in data["exception"]


def test_logging_notifier_uses_severity(caplog):
    """Test notifications are logged at the severity's level."""
    caplog.set_level(logging.INFO, logger="cashwallet.notifications")

    LoggingNotifier().notify(Severity.WARNING, "Transaction flagged for review", "Large amount")

    assert len(caplog.records) == 1
    assert caplog.records[0].levelno == logging.WARNING
    assert caplog.records[0].getMessage() == "Transaction flagged for review: Large amount"


def test_send_notification_swallows_sink_errors(caplog):
    """Test a failing sink is logged and never raises."""

    class BrokenNotifier(Notifier):
        def notify(self, severity, title, detail):
            raise ConnectionError("sink down")

    caplog.set_level(logging.ERROR, logger="cashwallet.domain.notifications")

    send_notification(BrokenNotifier(), Severity.INFO, "Fraud rescan complete", "0")

    assert "could not be delivered" in caplog.text


def test_notifier_is_abstract():
    """Test the notifier base class cannot be used without notify()."""
    with pytest.raises(TypeError):
        Notifier()

    class SilentNotifier(Notifier):
        pass

    with pytest.raises(TypeError):
        SilentNotifier()
