from __future__ import annotations

from money_converter.domain.monetary.currency_registry import CurrencyRegistry
from money_converter.domain.monetary.money import Money
from money_converter.utils.numeric_tools import int_to_digits, is_strict_int

DECIMAL_POINT = "."


def format_money(registry: CurrencyRegistry, money: Money, precision: int | None = None) -> str:
    """Render $money as a decimal string in its own unit.

    Without $precision the fraction is trimmed of trailing zeros but keeps at least one digit,
    so the output parses back to the same amount. With $precision the fraction is truncated
    (never rounded) or zero-padded to exactly that many digits; 0 drops the decimal point.

    Args:
        registry: Currency registry used to resolve the unit precision.
        money: Amount to render.
        precision: Optional number of fractional digits in the output.

    Returns:
        Decimal string such as "123.45", "-0.00001" or "0.0".

    Raises:
        UnsupportedCurrency: If $money's currency or unit is not registered.
        ValueError: If $precision is negative.

    Examples:
        >>> format_money(registry, Money(12_345_678, "GBP", "GBP"))
        '123.45678'
        >>> format_money(registry, Money(999, "EUR", "EUR"), precision=0)
        '0'
    """
    # Raise: output precision must be a non-negative int
    if precision is not None and (not is_strict_int(precision) or precision < 0):
        raise ValueError(f"Cannot call `format_money` because $precision must be None or a non-negative int, but provided value is: {precision!r}")

    unit_precision = registry.unit_precision(money.currency_code, money.currency_unit)

    sign = "-" if money.amount < 0 else ""
    digits = int_to_digits(abs(money.amount)).rjust(unit_precision + 1, "0")
    split_at = len(digits) - unit_precision
    integer_digits, fractional_digits = digits[:split_at], digits[split_at:]

    if precision is None:
        fractional_digits = fractional_digits.rstrip("0") or "0"
    elif precision == 0:
        return sign + integer_digits
    else:
        fractional_digits = fractional_digits[:precision].ljust(precision, "0")

    return sign + integer_digits + DECIMAL_POINT + fractional_digits


def format_display(registry: CurrencyRegistry, money: Money) -> str:
    """Render $money with its unit's configured `display_precision` (truncating)."""
    _, unit = registry.resolve(money.currency_code, money.currency_unit)
    return format_money(registry, money, precision=unit.display_precision)


def to_float(registry: CurrencyRegistry, money: Money) -> float:
    """Convert $money to the closest float by way of its exact decimal string.

    Examples:
        >>> to_float(registry, Money(1, "EUR", "EUR"))
        1e-05
    """
    return float(format_money(registry, money))
