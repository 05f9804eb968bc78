from __future__ import annotations


class UnsupportedCurrency(ValueError):
    """Raised when a currency code is unknown, or a unit is not registered under the currency.

    Attributes:
        currency_code (str | None): The requested currency code.
        currency_unit (str | None): The requested unit, if the unit was the problem.
    """

    def __init__(self, message: str, currency_code: str | None = None, currency_unit: str | None = None):
        super().__init__(message)
        self.currency_code = currency_code
        self.currency_unit = currency_unit


class InvalidFormat(ValueError):
    """Raised when a textual or numeric amount cannot be read as a fixed-point decimal.

    Attributes:
        value (object): The rejected input value.
    """

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value
