"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$€£¥,\s]", "", amount_str)

    try:
        return Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e


def to_currency(value: Decimal | int | float | str) -> Decimal:
    """Convert a number or numeric string to a cent-quantized Decimal.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Unsupported amount type: {type(value).__name__}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{value}'") from e
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite (got {value})")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
