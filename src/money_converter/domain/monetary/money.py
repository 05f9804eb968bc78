from __future__ import annotations

from dataclasses import dataclass

from money_converter.utils.numeric_tools import int_to_digits, is_strict_int


@dataclass(frozen=True)
class Money:
    """Exact fixed-point monetary amount.

    $amount is an arbitrary-precision integer counting steps of 10**-(precision - shift) of
    $currency_unit, where precision belongs to $currency_code and shift to $currency_unit.
    Whether $currency_unit is registered under $currency_code is checked by every conversion
    call against its registry, not here.

    Attributes:
        amount (int): Signed fixed-point amount.
        currency_code (str): Currency identifier (e.g. "EUR").
        currency_unit (str): Unit the amount is expressed in (e.g. "EUR", "cent", "mBTC").
    """

    amount: int
    currency_code: str
    currency_unit: str

    def __post_init__(self) -> None:
        # Raise: floats and Decimals must go through the parser, never straight into $amount
        if not is_strict_int(self.amount):
            raise TypeError(f"Cannot init `Money` because $amount is not int (got type '{type(self.amount).__name__}'). Use `parse` to convert other amount types")

        if not isinstance(self.currency_code, str) or not self.currency_code:
            raise ValueError(f"Cannot init `Money` because $currency_code must be a non-empty string, but provided value is: {self.currency_code!r}")

        if not isinstance(self.currency_unit, str) or not self.currency_unit:
            raise ValueError(f"Cannot init `Money` because $currency_unit must be a non-empty string, but provided value is: {self.currency_unit!r}")

    def __str__(self) -> str:
        """Return string like '12345000 EUR/cent' (raw fixed-point amount, not formatted)."""
        return f"{int_to_digits(self.amount)} {self.currency_code}/{self.currency_unit}"
