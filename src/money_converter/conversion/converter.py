from __future__ import annotations

from money_converter.conversion import formatter, minor_units, parser, unit_converter
from money_converter.domain.monetary.currency_registry import CurrencyRegistry
from money_converter.domain.monetary.money import Money
from money_converter.utils.numeric_tools import AmountLike, IntLike


class MoneyConverter:
    """Binds one `CurrencyRegistry` to all conversion operations.

    Example:
        >>> converter = MoneyConverter(DEFAULT_CURRENCY_REGISTRY)
        >>> money = converter.parse("123.45", "EUR")
        >>> converter.format(converter.switch_unit(money, "cent"))
        '123.45'
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: CurrencyRegistry):
        # Raise: converter needs a real registry, not a plain dict
        if not isinstance(registry, CurrencyRegistry):
            raise TypeError(f"Cannot init `MoneyConverter` because $registry is not CurrencyRegistry (got type '{type(registry).__name__}')")
        self._registry = registry

    @classmethod
    def default(cls) -> MoneyConverter:
        """Create a converter over the configured default registry (see `get_default_registry`)."""
        from money_converter.config.settings import get_default_registry

        return cls(get_default_registry())

    @property
    def registry(self) -> CurrencyRegistry:
        return self._registry

    def parse(self, amount: AmountLike, currency_code: str | None = None, currency_unit: str | None = None) -> Money:
        return parser.parse(self._registry, amount, currency_code, currency_unit)

    def format(self, money: Money, precision: int | None = None) -> str:
        return formatter.format_money(self._registry, money, precision)

    def format_display(self, money: Money) -> str:
        return formatter.format_display(self._registry, money)

    def to_float(self, money: Money) -> float:
        return formatter.to_float(self._registry, money)

    def switch_unit(self, money: Money, target_unit: str) -> Money:
        return unit_converter.switch_unit(self._registry, money, target_unit)

    def from_minor(self, integer_amount: IntLike, currency_code: str, unit: str | None = None) -> Money:
        return minor_units.from_minor(self._registry, integer_amount, currency_code, unit)

    def to_minor(self, money: Money, unit: str | None = None) -> int:
        return minor_units.to_minor(self._registry, money, unit)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._registry!r})"
