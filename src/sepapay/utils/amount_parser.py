"""Amount parsing and rounding utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "€123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()

    is_negative = text.startswith("(") and text.endswith(")")
    if is_negative:
        text = text[1:-1]

    text = re.sub(r"[$€£¥\s]", "", text).replace(",", "")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")
    return -amount if is_negative else amount


def to_decimal(value) -> Decimal:
    """Coerce a numeric value into a Decimal.

    Floats go through ``str`` so that 231.349819872 keeps the digits the
    caller wrote instead of its binary expansion.

    Raises:
        ValueError: If value is not a number or numeric string
    """
    if isinstance(value, bool):
        raise ValueError(f"Amount must be a number, got {value!r}")
    if isinstance(value, str):
        return parse_amount(value)
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    else:
        raise ValueError(f"Amount must be a number, got {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Amount {value!r} is not a finite number")
    return amount


def round_amount(amount: Decimal) -> Decimal:
    """Round an amount half-up to cents."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
