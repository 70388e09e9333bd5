"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

CENT = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a monetary amount into a Decimal rounded to cents.

    Handles various formats:
    - "123.45"
    - "$123.45" / "Rp 1,500.00"
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

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and codes
    amount_str = re.sub(r"[$€£¥]|\bRp\b|\bIDR\b|\bUSD\b", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")

    amount = amount.quantize(CENT)
    return -amount if is_negative else amount
