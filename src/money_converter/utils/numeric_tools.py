from __future__ import annotations

from decimal import Decimal
from typing import TypeAlias

# Use where an amount can be given in any supported human-facing form (converted to fixed-point `int`)
AmountLike: TypeAlias = str | int | float | Decimal

# Use where an integer count is expected, but its decimal string form is also accepted
IntLike: TypeAlias = int | str


def is_strict_int(value: object) -> bool:
    """Return True if $value is an `int` and not a `bool`.

    `bool` is a subclass of `int`, but `True` is never a meaningful amount.
    """
    return isinstance(value, int) and not isinstance(value, bool)


def int_to_digits(value: int) -> str:
    """Return the decimal string of $value (with a leading "-" when negative) for any number of digits.

    Plain `str(int)` raises ValueError above `sys.get_int_max_str_digits()` digits; `Decimal`
    converts exactly and has no such limit.
    """
    return f"{Decimal(value):f}"


def digits_to_int(text: str) -> int:
    """Inverse of `int_to_digits` for an already validated string like "-12345"."""
    return int(Decimal(text))
