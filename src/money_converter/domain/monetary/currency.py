from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from money_converter.domain.monetary.errors import UnsupportedCurrency
from money_converter.utils.numeric_tools import is_strict_int


def _require_non_negative_int(owner: str, name: str, value: object) -> None:
    if not is_strict_int(value) or value < 0:
        raise ValueError(f"Cannot init `{owner}` because ${name} must be a non-negative int, but provided value is: {value!r}")


def _require_optional_str(owner: str, name: str, value: object) -> None:
    if value is not None and (not isinstance(value, str) or not value):
        raise ValueError(f"Cannot init `{owner}` because ${name} must be None or a non-empty string, but provided value is: {value!r}")


@dataclass(frozen=True)
class UnitDescriptor:
    """One denomination of a currency (major unit, "cent", "mBTC", ...).

    Attributes:
        name (str): Unit identifier used as `Money.currency_unit` (e.g. "EUR", "cent").
        shift (int): Decimal digits by which this unit is coarser than the currency precision.
        display_precision (int): Default number of fractional digits shown for this unit.
        input_precision (int): Fractional digits textual input is expected to carry. Informational only.
        symbol (str | None): Prefix recognized by symbol-prefixed parsing (e.g. "$").
        code (str | None): Alternate textual prefix recognized the same way (e.g. "USD").
        long_name (str | None): Human readable name (e.g. "US Dollar").
    """

    name: str
    shift: int
    display_precision: int
    input_precision: int
    symbol: str | None = None
    code: str | None = None
    long_name: str | None = None

    def __post_init__(self) -> None:
        # Raise: $name is the lookup key, it cannot be empty
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"Cannot init `UnitDescriptor` because $name must be a non-empty string, but provided value is: {self.name!r}")

        _require_non_negative_int("UnitDescriptor", "shift", self.shift)
        _require_non_negative_int("UnitDescriptor", "display_precision", self.display_precision)
        _require_non_negative_int("UnitDescriptor", "input_precision", self.input_precision)
        _require_optional_str("UnitDescriptor", "symbol", self.symbol)
        _require_optional_str("UnitDescriptor", "code", self.code)

    @property
    def prefixes(self) -> tuple[str, ...]:
        """Textual prefixes (symbol first, then code) that select this unit in prefixed input."""
        result: list[str] = []
        for prefix in (self.symbol, self.code):
            if prefix is not None and prefix not in result:
                result.append(prefix)
        return tuple(result)


class CurrencyDescriptor:
    """Represents a currency with its native precision and the units it can be expressed in.

    Attributes:
        code (str): Currency code (e.g. "EUR", "BTC").
        precision (int): Total decimal digits of resolution at the finest configured unit.
        units (Mapping[str, UnitDescriptor]): Read-only mapping from unit name to descriptor.
        minor_unit_name (str | None): Unit used by minor-unit accessors (e.g. "cent").
    """

    __slots__ = ("_code", "_precision", "_units", "_minor_unit")

    def __init__(
        self,
        code: str,
        precision: int,
        units: Mapping[str, UnitDescriptor] | list[UnitDescriptor],
        minor_unit: str | None = None,
    ) -> None:
        """Initialize a CurrencyDescriptor.

        Args:
            code: Currency code.
            precision: Non-negative number of decimal digits at the finest resolution.
            units: Unit descriptors, either keyed by unit name or as a list.
            minor_unit: Optional explicit minor unit name. If None, the unit with the
                smallest positive shift is used.

        Raises:
            ValueError: If parameters are invalid or a unit's shift exceeds $precision.
        """
        # Raise: $code must be a non-empty string
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"Cannot init `CurrencyDescriptor` because $code must be a non-empty string, but provided value is: {code!r}")

        _require_non_negative_int("CurrencyDescriptor", "precision", precision)

        unit_list = list(units.values()) if isinstance(units, Mapping) else list(units)
        units_by_name: dict[str, UnitDescriptor] = {}
        for unit in unit_list:
            # Raise: units must be UnitDescriptor instances
            if not isinstance(unit, UnitDescriptor):
                raise TypeError(f"Cannot init `CurrencyDescriptor` for '{code}' because unit is not UnitDescriptor (got type '{type(unit).__name__}')")

            # Raise: unit names must be unique
            if unit.name in units_by_name:
                raise ValueError(f"Cannot init `CurrencyDescriptor` for '{code}' because unit '{unit.name}' is defined twice")

            # Raise: a unit cannot be coarser than the currency precision allows
            if unit.shift > precision:
                raise ValueError(f"Cannot init `CurrencyDescriptor` for '{code}' because unit '{unit.name}' has $shift ({unit.shift}) > $precision ({precision})")

            units_by_name[unit.name] = unit

        # Raise: explicit minor unit must be one of the units
        if minor_unit is not None and minor_unit not in units_by_name:
            raise ValueError(f"Cannot init `CurrencyDescriptor` for '{code}' because $minor_unit ('{minor_unit}') is not one of its units: {sorted(units_by_name)}")

        self._code = code.strip()
        self._precision = precision
        self._units = MappingProxyType(units_by_name)
        self._minor_unit = minor_unit

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._code

    @property
    def precision(self) -> int:
        """Get the currency precision."""
        return self._precision

    @property
    def units(self) -> Mapping[str, UnitDescriptor]:
        """Get the read-only mapping of units."""
        return self._units

    @property
    def minor_unit_name(self) -> str | None:
        """Name of the minor unit: configured explicitly, else the unit with the smallest positive shift."""
        if self._minor_unit is not None:
            return self._minor_unit

        candidates = sorted((unit.shift, unit.name) for unit in self._units.values() if unit.shift > 0)
        return candidates[0][1] if candidates else None

    def unit(self, name: str) -> UnitDescriptor:
        """Get a unit by name.

        Raises:
            UnsupportedCurrency: If $name is not a unit of this currency.
        """
        try:
            return self._units[name]
        except (KeyError, TypeError):
            raise UnsupportedCurrency(
                f"Unit '{name}' is not registered under currency '{self._code}'. Available units: {sorted(self._units)}",
                currency_code=self._code,
                currency_unit=name,
            ) from None

    def unit_precision(self, name: str) -> int:
        """Number of fractional digits carried by amounts in unit $name (`precision - shift`)."""
        return self._precision - self.unit(name).shift

    def __eq__(self, other) -> bool:
        if not isinstance(other, CurrencyDescriptor):
            return False
        return (self._code, self._precision, dict(self._units), self._minor_unit) == (other._code, other._precision, dict(other._units), other._minor_unit)

    def __hash__(self) -> int:
        return hash((self._code, self._precision))

    def __str__(self) -> str:
        return self._code

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self._code}', {self._precision}, units={sorted(self._units)})"
