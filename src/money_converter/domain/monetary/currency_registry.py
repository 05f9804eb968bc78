from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import NamedTuple

from money_converter.domain.monetary.currency import CurrencyDescriptor, UnitDescriptor
from money_converter.domain.monetary.errors import UnsupportedCurrency

logger = logging.getLogger(__name__)


class PrefixMatch(NamedTuple):
    """Result of matching a symbol/code prefix against a textual amount."""

    prefix: str
    currency_code: str
    currency_unit: str


class CurrencyRegistry(Mapping[str, CurrencyDescriptor]):
    """Immutable mapping from currency code to `CurrencyDescriptor`.

    Build it once at startup and pass it to every conversion call. Nothing mutates it afterwards,
    so one instance can be shared freely between threads.

    Prefix matching for inputs like "$123.45" picks the longest registered symbol/code. If one prefix
    string is claimed by several units, the candidate with the smallest (currency code, unit name)
    wins; this is reported as a warning when the registry is built.
    """

    def __init__(self, currencies: Iterable[CurrencyDescriptor] | Mapping[str, CurrencyDescriptor]):
        """Initialize the registry.

        Args:
            currencies: Currency descriptors, either keyed by code or as an iterable.

        Raises:
            TypeError: If an item is not a CurrencyDescriptor.
            ValueError: If a currency code is defined twice.
        """
        items = currencies.values() if isinstance(currencies, Mapping) else currencies

        by_code: dict[str, CurrencyDescriptor] = {}
        for currency in items:
            # Raise: registry holds only CurrencyDescriptor instances
            if not isinstance(currency, CurrencyDescriptor):
                raise TypeError(f"Cannot init `CurrencyRegistry` because item is not CurrencyDescriptor (got type '{type(currency).__name__}')")

            # Raise: currency codes must be unique
            if currency.code in by_code:
                raise ValueError(f"Cannot init `CurrencyRegistry` because currency '{currency.code}' is defined twice")

            by_code[currency.code] = currency

        self._currencies = MappingProxyType(by_code)
        self._prefix_matches = self._build_prefix_index(by_code)

        logger.debug(f"Built CurrencyRegistry with {len(by_code)} currency(ies) and {len(self._prefix_matches)} prefix(es)")

    @staticmethod
    def _build_prefix_index(by_code: Mapping[str, CurrencyDescriptor]) -> tuple[PrefixMatch, ...]:
        candidates = [
            PrefixMatch(prefix, currency.code, unit.name)
            for currency in by_code.values()
            for unit in currency.units.values()
            for prefix in unit.prefixes
        ]
        candidates.sort(key=lambda m: (-len(m.prefix), m.currency_code, m.currency_unit))

        # Keep the first candidate for each prefix string
        index: dict[str, PrefixMatch] = {}
        for match in candidates:
            winner = index.get(match.prefix)
            if winner is None:
                index[match.prefix] = match
            else:
                logger.warning(f"Prefix '{match.prefix}' is claimed by '{winner.currency_code}/{winner.currency_unit}' and '{match.currency_code}/{match.currency_unit}'; using '{winner.currency_code}/{winner.currency_unit}'")

        # dict preserves the sorted insertion order: longest prefixes first
        return tuple(index.values())

    # region Mapping protocol

    def __getitem__(self, currency_code: str) -> CurrencyDescriptor:
        return self._currencies[currency_code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._currencies)

    def __len__(self) -> int:
        return len(self._currencies)

    def __contains__(self, currency_code: object) -> bool:
        return currency_code in self._currencies

    # endregion

    # region Lookups

    def currency(self, currency_code: str) -> CurrencyDescriptor:
        """Get the descriptor of $currency_code.

        Raises:
            UnsupportedCurrency: If $currency_code is not registered.
        """
        try:
            return self._currencies[currency_code]
        except (KeyError, TypeError):
            raise UnsupportedCurrency(f"Unsupported currency '{currency_code}'", currency_code=currency_code) from None

    def resolve(self, currency_code: str, currency_unit: str | None = None) -> tuple[CurrencyDescriptor, UnitDescriptor]:
        """Resolve the currency and unit descriptor pair.

        Args:
            currency_code: Currency code to look up.
            currency_unit: Unit name; defaults to $currency_code (the major unit).

        Returns:
            Tuple of (CurrencyDescriptor, UnitDescriptor).

        Raises:
            UnsupportedCurrency: If the currency or the unit is not registered.
        """
        currency = self.currency(currency_code)
        unit = currency.unit(currency_code if currency_unit is None else currency_unit)
        return currency, unit

    def unit_precision(self, currency_code: str, currency_unit: str | None = None) -> int:
        """Fractional digits carried by amounts of $currency_unit (`precision - shift`)."""
        currency, unit = self.resolve(currency_code, currency_unit)
        return currency.precision - unit.shift

    def match_prefix(self, text: str) -> PrefixMatch | None:
        """Find the longest registered symbol/code that $text starts with.

        Returns:
            The matching `PrefixMatch`, or None if no prefix matches.
        """
        for match in self._prefix_matches:
            if text.startswith(match.prefix):
                return match
        return None

    # endregion

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({sorted(self._currencies)})"


def _fiat(code: str, symbol: str | None, name: str) -> CurrencyDescriptor:
    return CurrencyDescriptor(
        code,
        5,
        [
            UnitDescriptor(code, shift=0, display_precision=2, input_precision=2, symbol=symbol, code=code, long_name=name),
            UnitDescriptor("cent", shift=2, display_precision=0, input_precision=0),
        ],
        minor_unit="cent",
    )


# Fiat currencies
EUR = _fiat("EUR", "€", "Euro")
GBP = _fiat("GBP", "£", "British Pound")
PHP = _fiat("PHP", "₱", "Philippine Peso")
USD = _fiat("USD", "$", "US Dollar")

# Crypto currencies
BTC = CurrencyDescriptor(
    "BTC",
    8,
    [
        UnitDescriptor("BTC", shift=0, display_precision=8, input_precision=8, symbol="₿", code="BTC", long_name="Bitcoin"),
        UnitDescriptor("mBTC", shift=3, display_precision=5, input_precision=5, code="mBTC", long_name="Millibitcoin"),
        UnitDescriptor("uBTC", shift=6, display_precision=2, input_precision=2, symbol="μBTC", code="uBTC", long_name="Microbitcoin"),
        UnitDescriptor("satoshi", shift=8, display_precision=0, input_precision=0, code="sat", long_name="Satoshi"),
    ],
    minor_unit="satoshi",
)

DEFAULT_CURRENCY_REGISTRY = CurrencyRegistry([EUR, GBP, PHP, USD, BTC])
