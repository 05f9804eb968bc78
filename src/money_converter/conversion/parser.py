from __future__ import annotations

import math
import re
from decimal import Decimal, ROUND_HALF_EVEN, localcontext

from money_converter.conversion.pow10 import pow10
from money_converter.domain.monetary.currency_registry import CurrencyRegistry
from money_converter.domain.monetary.errors import InvalidFormat, UnsupportedCurrency
from money_converter.domain.monetary.money import Money
from money_converter.utils.numeric_tools import AmountLike, digits_to_int, is_strict_int

# Optional leading "-", integer digits, optional single point with fraction digits. ASCII digits only.
_AMOUNT_PATTERN = re.compile(r"(-)?([0-9]*)(?:\.([0-9]*))?")


def parse(
    registry: CurrencyRegistry,
    amount: AmountLike,
    currency_code: str | None = None,
    currency_unit: str | None = None,
) -> Money:
    """Convert a human-facing amount into exact fixed-point `Money`.

    Accepted $amount forms:
    - `str`: strict decimal string such as "123.45", "-0.5", ".5" or "12.". Fraction digits beyond
      the unit precision are truncated, never rounded. With $currency_code None the string must start
      with a registered symbol or code, e.g. "$123.45" or "mBTC1.5".
    - `float`: rounded half-to-even to the unit precision, then read as a string.
    - `int`: scaled by 10**unit_precision.
    - `Decimal`: rendered in fixed-point notation, then read as a string.

    Args:
        registry: Currency registry to resolve $currency_code and $currency_unit against.
        amount: Amount to convert.
        currency_code: Currency code. None selects the prefixed string form.
        currency_unit: Unit of $amount; defaults to $currency_code.

    Returns:
        Money in $currency_code / $currency_unit.

    Raises:
        UnsupportedCurrency: If the currency or unit is not registered, or no prefix matches.
        InvalidFormat: If $amount is malformed or not finite.
        TypeError: If $amount has an unsupported type.

    Examples:
        >>> parse(DEFAULT_CURRENCY_REGISTRY, "123.45", "EUR")
        Money(amount=12345000, currency_code='EUR', currency_unit='EUR')
    """
    if currency_code is None:
        return _parse_prefixed(registry, amount)

    unit_name = currency_code if currency_unit is None else currency_unit
    unit_precision = registry.unit_precision(currency_code, unit_name)

    if isinstance(amount, str):
        value = parse_decimal_string(amount, unit_precision)
    elif is_strict_int(amount):
        value = amount * pow10(unit_precision)
    elif isinstance(amount, float):
        value = parse_decimal_string(float_to_decimal_string(amount, unit_precision), unit_precision)
    elif isinstance(amount, Decimal):
        # Raise: NaN and infinities have no fixed-point representation
        if not amount.is_finite():
            raise InvalidFormat(f"Cannot call `parse` because $amount ({amount}) is not finite", value=amount)
        value = parse_decimal_string(f"{amount:f}", unit_precision)
    else:
        raise TypeError(f"Cannot call `parse` because $amount has unsupported type '{type(amount).__name__}'. Expected str, int, float or Decimal")

    return Money(value, currency_code, unit_name)


def _parse_prefixed(registry: CurrencyRegistry, amount: AmountLike) -> Money:
    # Raise: only strings can carry a currency prefix
    if not isinstance(amount, str):
        raise UnsupportedCurrency(f"Cannot call `parse` because $currency_code is missing and $amount ({amount!r}) is not a prefixed string")

    match = registry.match_prefix(amount)
    if match is None:
        raise UnsupportedCurrency(f"Cannot call `parse` because $amount ('{amount}') does not start with a registered currency symbol or code")

    return parse(registry, amount[len(match.prefix):], match.currency_code, match.currency_unit)


def parse_decimal_string(text: str, unit_precision: int) -> int:
    """Read a strict decimal string as an integer count of 10**-$unit_precision steps.

    Args:
        text: Decimal string, optionally with a leading "-" and a single decimal point.
        unit_precision: Number of fractional digits kept; extra digits are truncated.

    Returns:
        The signed fixed-point integer.

    Raises:
        InvalidFormat: If $text is not a strict decimal string.

    Examples:
        >>> parse_decimal_string("-0.00001", 5)
        -1
        >>> parse_decimal_string("0.0000099999", 5)
        0
    """
    match = _AMOUNT_PATTERN.fullmatch(text)

    # Raise: signs other than one leading "-", extra points and any other characters are rejected
    if match is None:
        raise InvalidFormat(f"Cannot parse amount '{text}' because it is not a plain decimal number", value=text)

    sign, integer_digits, fractional_digits = match.groups()

    # Raise: at least one digit is required ("", "-", "." are not numbers)
    if not integer_digits and not fractional_digits:
        raise InvalidFormat(f"Cannot parse amount '{text}' because it contains no digits", value=text)

    integer_digits = integer_digits or "0"
    fractional_digits = (fractional_digits or "0")[:unit_precision].ljust(unit_precision, "0")

    magnitude = digits_to_int(integer_digits) * pow10(unit_precision) + (digits_to_int(fractional_digits) if fractional_digits else 0)
    return -magnitude if sign else magnitude


def float_to_decimal_string(value: float, decimals: int) -> str:
    """Render $value with exactly $decimals fractional digits.

    The exact binary value of the float is rounded with ROUND_HALF_EVEN, so results do not depend on
    the platform's shortest-repr algorithm. Example: 0.0000099999999 with 5 decimals gives "0.00001".

    Raises:
        InvalidFormat: If $value is NaN or infinite.
    """
    # Raise: NaN and infinities have no fixed-point representation
    if not math.isfinite(value):
        raise InvalidFormat(f"Cannot convert float {value} because it is not finite", value=value)

    exact = Decimal(value)
    with localcontext() as ctx:
        # Enough significant digits to hold every integer digit of a float plus the requested decimals
        ctx.prec = decimals + 330
        rounded = exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_EVEN)
    return f"{rounded:f}"
