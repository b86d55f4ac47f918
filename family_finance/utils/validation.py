"""
Validation utilities for money input
"""
import re
from decimal import Decimal, InvalidOperation


def normalize_decimal_input(value) -> str:
    """
    Normalize an amount: comma decimal separator becomes a dot

    Example:
        >>> normalize_decimal_input("100,50")
        "100.50"
        >>> normalize_decimal_input(Decimal("100.50"))
        "100.50"
    """
    return str(value).strip().replace(",", ".")


def validate_decimal_amount(value, max_decimal_places: int = 2) -> tuple[bool, str | None]:
    """
    Validate a money amount

    Returns:
        (is_valid, error_message)

    Example:
        >>> validate_decimal_amount("100.50")
        (True, None)
        >>> validate_decimal_amount("100.505")
        (False, "At most 2 decimal places")
    """
    normalized = normalize_decimal_input(value)

    try:
        decimal_value = Decimal(normalized)
    except (InvalidOperation, ValueError):
        return False, "Invalid amount"
    if not decimal_value.is_finite():
        return False, "Invalid amount"

    pattern = rf"^-?\d+(\.\d{{1,{max_decimal_places}}})?$"
    if not re.match(pattern, normalized):
        return False, f"At most {max_decimal_places} decimal places"

    return True, None


def parse_amount(value, max_decimal_places: int = 2) -> Decimal:
    """
    Validate and convert an amount to Decimal

    Raises:
        ValueError: if validation fails
    """
    is_valid, error = validate_decimal_amount(value, max_decimal_places)
    if not is_valid:
        raise ValueError(error)
    return Decimal(normalize_decimal_input(value))
