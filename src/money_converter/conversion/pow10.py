from __future__ import annotations

from typing import Final

from money_converter.utils.numeric_tools import is_strict_int

# Largest exponent served directly from the table; covers every realistic configured precision
POW10_MAX: Final[int] = 104


def _build_table(max_exponent: int) -> tuple[int, ...]:
    values = [1]
    for _ in range(max_exponent):
        values.append(values[-1] * 10)
    return tuple(values)


_POW10_TABLE: Final[tuple[int, ...]] = _build_table(POW10_MAX)


def pow10(n: int) -> int:
    """Return exactly 10**$n as an arbitrary-precision `int`.

    Exponents up to `POW10_MAX` come from a table built at import. Larger exponents are split
    into `POW10_MAX`-sized chunks, so the result stays exact for any $n.

    Args:
        n: Non-negative integer exponent.

    Returns:
        10 raised to $n.

    Raises:
        TypeError: If $n is not an `int`.
        ValueError: If $n is negative.

    Examples:
        >>> pow10(0)
        1
        >>> pow10(5)
        100000
    """
    # Raise: negative or non-integer exponents are programming errors
    if not is_strict_int(n):
        raise TypeError(f"Cannot call `pow10` because $n is not int (got type '{type(n).__name__}')")
    if n < 0:
        raise ValueError(f"Cannot call `pow10` because $n ({n}) < 0")

    if n <= POW10_MAX:
        return _POW10_TABLE[n]

    result = _POW10_TABLE[n % POW10_MAX]
    for _ in range(n // POW10_MAX):
        result *= _POW10_TABLE[POW10_MAX]
    return result
