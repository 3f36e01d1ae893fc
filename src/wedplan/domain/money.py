"""Fixed-point money helpers.

All amounts are two-place Decimals. Floats are converted through their
string form so that 0.1 stays 0.10 rather than its binary expansion.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from wedplan.domain.errors import InvalidAmountError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# Largest magnitude a Numeric(12, 2) column holds.
MAX_AMOUNT = Decimal("9999999999.99")


def to_money(value: Any, field_name: str = "amount") -> Decimal:
    """Coerce a number or numeric string to a two-place Decimal.

    Args:
        value: Decimal, int, float or numeric string
        field_name: Name used in error messages

    Returns:
        Decimal quantized to cents

    Raises:
        InvalidAmountError: If the value is missing, not numeric, not finite,
            has more than two decimal places, or exceeds MAX_AMOUNT
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError(f"A numeric {field_name} is required")

    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, (int, float)):
            amount = Decimal(str(value))
        elif isinstance(value, str) and value.strip():
            amount = Decimal(value.strip())
        else:
            raise InvalidAmountError(f"A numeric {field_name} is required")
    except InvalidOperation:
        raise InvalidAmountError(f"Could not parse {field_name} '{value}'")

    if not amount.is_finite():
        raise InvalidAmountError(f"The {field_name} must be a finite number")

    if abs(amount) > MAX_AMOUNT:
        raise InvalidAmountError(
            f"The {field_name} may not exceed {MAX_AMOUNT}, got {value}"
        )

    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation:
        raise InvalidAmountError(f"Could not parse {field_name} '{value}'")
    if quantized != amount:
        raise InvalidAmountError(
            f"The {field_name} may have at most two decimal places, got {value}"
        )
    return quantized


def to_positive_money(value: Any, field_name: str = "amount") -> Decimal:
    """Coerce a value with to_money() and require it to be above zero."""
    amount = to_money(value, field_name)
    if amount <= ZERO:
        raise InvalidAmountError(f"The {field_name} must be a positive number")
    return amount
