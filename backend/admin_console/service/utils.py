"""Shared service utilities.

Centralized helpers used across all order service implementations.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation


def to_decimal(value: float | int | str | None) -> Decimal:
    """Convert a JSON number or string to Decimal safely.

    For string values: Decimal(str_value) directly.
    For float values: Decimal(str(float_value)) to avoid IEEE 754
    precision issues. None maps to zero.

    Raises:
        ValueError: If the value is not numeric.
    """
    if value is None:
        return Decimal("0")
    try:
        if isinstance(value, str):
            return Decimal(value)
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Not a numeric value: {value!r}") from e
