from __future__ import annotations

import re

from money_converter.conversion.formatter import format_money
from money_converter.conversion.parser import parse
from money_converter.domain.monetary.currency_registry import CurrencyRegistry
from money_converter.domain.monetary.errors import InvalidFormat, UnsupportedCurrency
from money_converter.domain.monetary.money import Money
from money_converter.utils.numeric_tools import IntLike, digits_to_int, is_strict_int

# Optional sign ("+" or "-") followed by ASCII digits
_WHOLE_NUMBER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _minor_unit_of(registry: CurrencyRegistry, currency_code: str, unit: str | None) -> str:
    if unit is not None:
        return unit

    minor_unit = registry.currency(currency_code).minor_unit_name

    # Raise: a currency with only shift-0 units has no minor unit to default to
    if minor_unit is None:
        raise UnsupportedCurrency(f"Currency '{currency_code}' has no minor unit configured", currency_code=currency_code)
    return minor_unit


def from_minor(registry: CurrencyRegistry, integer_amount: IntLike, currency_code: str, unit: str | None = None) -> Money:
    """Build Money from a whole count of $unit, e.g. 12345 cents.

    Args:
        registry: Currency registry.
        integer_amount: Whole number of units, as `int` or a string like "12345", "+12345" or "-7".
        currency_code: Currency code.
        unit: Unit counted by $integer_amount; defaults to the currency's minor unit.

    Returns:
        Money expressed in $unit.

    Raises:
        UnsupportedCurrency: If the currency or unit is unknown, or no minor unit exists.
        InvalidFormat: If a string $integer_amount is not a whole number.

    Examples:
        >>> from_minor(registry, 12_345, "EUR")
        Money(amount=12345000, currency_code='EUR', currency_unit='cent')
    """
    unit_name = _minor_unit_of(registry, currency_code, unit)

    if isinstance(integer_amount, str):
        # Raise: a minor-unit count is a signed whole number without a fractional part
        if _WHOLE_NUMBER_PATTERN.fullmatch(integer_amount) is None:
            raise InvalidFormat(f"Cannot call `from_minor` because $integer_amount ('{integer_amount}') is not a whole number", value=integer_amount)
        integer_amount = integer_amount.removeprefix("+")
    elif not is_strict_int(integer_amount):
        raise TypeError(f"Cannot call `from_minor` because $integer_amount is not int or str (got type '{type(integer_amount).__name__}')")

    return parse(registry, integer_amount, currency_code, unit_name)


def to_minor(registry: CurrencyRegistry, money: Money, unit: str | None = None) -> int:
    """Whole count of $unit held by `money.amount`, truncated toward zero.

    `money.amount` is read on the scale of $unit (`precision - shift` fractional digits), matching
    what `from_minor` produces, so `from_minor(to_minor(m))` restores any amount built by
    `from_minor` or by parsing a whole number in $unit.

    Raises:
        UnsupportedCurrency: If the currency, `money.currency_unit` or $unit is unknown, or no minor unit exists.

    Examples:
        >>> to_minor(registry, Money(12_345_678, "EUR", "EUR"))
        12345
    """
    registry.resolve(money.currency_code, money.currency_unit)
    unit_name = _minor_unit_of(registry, money.currency_code, unit)
    return digits_to_int(format_money(registry, Money(money.amount, money.currency_code, unit_name), precision=0))
