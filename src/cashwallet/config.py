"""Configuration management for cashwallet."""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from cashwallet.domain.entities import DEFAULT_CURRENCY


@dataclass
class FraudConfig:
    """Thresholds for the fraud rules."""

    large_amount_threshold: Decimal = Decimal("1000")
    velocity_window_seconds: int = 300
    velocity_threshold: int = 3
    unusual_repeat_threshold: int = 3
    unusual_min_amount: Decimal = Decimal("50")
    unusual_round_unit: Decimal = Decimal("100")
    rescan_interval_seconds: int = 300

    @property
    def velocity_window(self) -> timedelta:
        """Velocity window as a timedelta."""
        return timedelta(seconds=self.velocity_window_seconds)


@dataclass
class WalletConfig:
    """Main configuration for cashwallet."""

    fraud: FraudConfig = field(default_factory=FraudConfig)
    currency: str = DEFAULT_CURRENCY
    admin_seed_balance: Decimal = Decimal("10000")
    database_path: Optional[str] = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "WalletConfig":
        """Create config from environment variables."""
        fraud = FraudConfig(
            large_amount_threshold=Decimal(os.getenv("CASHWALLET_LARGE_AMOUNT", "1000")),
            velocity_window_seconds=int(os.getenv("CASHWALLET_VELOCITY_WINDOW", "300")),
            velocity_threshold=int(os.getenv("CASHWALLET_VELOCITY_THRESHOLD", "3")),
            unusual_repeat_threshold=int(os.getenv("CASHWALLET_REPEAT_THRESHOLD", "3")),
            unusual_min_amount=Decimal(os.getenv("CASHWALLET_UNUSUAL_MIN_AMOUNT", "50")),
            unusual_round_unit=Decimal(os.getenv("CASHWALLET_ROUND_UNIT", "100")),
            rescan_interval_seconds=int(os.getenv("CASHWALLET_RESCAN_INTERVAL", "300")),
        )

        return cls(
            fraud=fraud,
            currency=os.getenv("CASHWALLET_CURRENCY", DEFAULT_CURRENCY),
            admin_seed_balance=Decimal(os.getenv("CASHWALLET_ADMIN_SEED", "10000")),
            database_path=os.getenv("CASHWALLET_DB_PATH"),
            log_level=os.getenv("CASHWALLET_LOG_LEVEL", "INFO"),
            log_format=os.getenv("CASHWALLET_LOG_FORMAT", "standard"),
        )
