"""Utility functions for cashwallet."""

from cashwallet.utils.amount_parser import parse_amount, to_currency
from cashwallet.utils.clock import utc_now

__all__ = ["parse_amount", "to_currency", "utc_now"]
