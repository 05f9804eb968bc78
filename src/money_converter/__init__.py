__version__ = "0.3.3"

from money_converter.conversion.converter import MoneyConverter
from money_converter.conversion.formatter import format_display, format_money, to_float
from money_converter.conversion.minor_units import from_minor, to_minor
from money_converter.conversion.parser import parse
from money_converter.conversion.pow10 import pow10
from money_converter.conversion.unit_converter import switch_unit
from money_converter.domain.monetary.currency import CurrencyDescriptor, UnitDescriptor
from money_converter.domain.monetary.currency_registry import DEFAULT_CURRENCY_REGISTRY, CurrencyRegistry
from money_converter.domain.monetary.errors import InvalidFormat, UnsupportedCurrency
from money_converter.domain.monetary.money import Money

__all__ = [
    "CurrencyDescriptor",
    "CurrencyRegistry",
    "DEFAULT_CURRENCY_REGISTRY",
    "InvalidFormat",
    "Money",
    "MoneyConverter",
    "UnitDescriptor",
    "UnsupportedCurrency",
    "format_display",
    "format_money",
    "from_minor",
    "parse",
    "pow10",
    "switch_unit",
    "to_float",
    "to_minor",
]
