from __future__ import annotations

# Builders for `CurrencyRegistry` from external currency configuration:
# the JSON document shape (also accepted as an in-memory mapping) and a flat
# one-row-per-unit table given as CSV or a pandas DataFrame.

import json
import logging
from collections.abc import Mapping
from numbers import Integral
from pathlib import Path
from typing import Any

import pandas as pd

from money_converter.domain.monetary.currency import CurrencyDescriptor, UnitDescriptor
from money_converter.domain.monetary.currency_registry import CurrencyRegistry

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("currency_code", "precision", "unit", "shift")
UNIT_COLUMNS = ("shift", "display_precision", "input_precision", "symbol", "code", "name")


# region Value helpers


def _first_present(spec: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in spec and not _is_missing(spec[key]):
            return spec[key]
    return None


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    return bool(pd.isna(value)) if not isinstance(value, (Mapping, list, tuple)) else False


def _as_int(value: Any, where: str) -> int:
    """Convert config values like `5`, `numpy.int64(5)`, `5.0` or `"5"` to int."""
    # Raise: bool is not a number in currency config
    if isinstance(value, bool):
        raise ValueError(f"Invalid currency config at {where}: expected an integer, but provided value is: {value!r}")
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"Invalid currency config at {where}: expected an integer, but provided value is: {value!r}")


def _as_optional_str(value: Any) -> str | None:
    return None if _is_missing(value) else str(value)


# endregion

# region Mapping / JSON


def _unit_from_spec(unit_name: str, spec: Mapping[str, Any], precision: int, where: str) -> UnitDescriptor:
    # Raise: each unit must be described by an object
    if not isinstance(spec, Mapping):
        raise ValueError(f"Invalid currency config at {where}: unit must be an object, but provided value is: {spec!r}")

    shift_value = _first_present(spec, "shift")
    # Raise: $shift is the only mandatory unit field
    if shift_value is None:
        raise ValueError(f"Invalid currency config at {where}: missing 'shift'")
    shift = _as_int(shift_value, f"{where}.shift")

    display_value = _first_present(spec, "displayPrecision", "display_precision")
    display_precision = precision - shift if display_value is None else _as_int(display_value, f"{where}.displayPrecision")

    input_value = _first_present(spec, "inputPrecision", "input_precision")
    input_precision = display_precision if input_value is None else _as_int(input_value, f"{where}.inputPrecision")

    try:
        return UnitDescriptor(
            name=unit_name,
            shift=shift,
            display_precision=display_precision,
            input_precision=input_precision,
            symbol=_as_optional_str(_first_present(spec, "symbol")),
            code=_as_optional_str(_first_present(spec, "code")),
            long_name=_as_optional_str(_first_present(spec, "name", "long_name")),
        )
    except ValueError as e:
        raise ValueError(f"Invalid currency config at {where}: {e}") from e


def registry_from_mapping(raw: Mapping[Any, Any]) -> CurrencyRegistry:
    """Build a registry from the currency config document shape.

    Expected shape (keys may be any objects convertible with `str`, e.g. atoms/enums)::

        {"EUR": {"precision": 5,
                 "minorUnit": "cent",                       # optional
                 "units": {"EUR": {"shift": 0, "displayPrecision": 2, "inputPrecision": 2,
                                   "symbol": "€", "code": "EUR", "name": "Euro"},
                           "cent": {"shift": 2}}}}

    Unit fields accept camelCase or snake_case. Missing `displayPrecision` defaults to
    `precision - shift`; missing `inputPrecision` defaults to the display precision.

    Raises:
        ValueError: If the document is malformed or violates descriptor invariants.
    """
    # Raise: top level must map currency codes to currency specs
    if not isinstance(raw, Mapping):
        raise ValueError(f"Invalid currency config: expected an object keyed by currency code, but got '{type(raw).__name__}'")

    currencies: list[CurrencyDescriptor] = []
    for raw_code, spec in raw.items():
        currency_code = str(raw_code)

        # Raise: each currency must be described by an object with units
        if not isinstance(spec, Mapping):
            raise ValueError(f"Invalid currency config at {currency_code}: currency must be an object, but provided value is: {spec!r}")
        units_spec = spec.get("units")
        if not isinstance(units_spec, Mapping) or not units_spec:
            raise ValueError(f"Invalid currency config at {currency_code}: 'units' must be a non-empty object")

        precision_value = _first_present(spec, "precision")
        if precision_value is None:
            raise ValueError(f"Invalid currency config at {currency_code}: missing 'precision'")
        precision = _as_int(precision_value, f"{currency_code}.precision")

        units = [_unit_from_spec(str(unit_name), unit_spec, precision, f"{currency_code}.units.{unit_name}") for unit_name, unit_spec in units_spec.items()]

        try:
            currency = CurrencyDescriptor(currency_code, precision, units, minor_unit=_as_optional_str(_first_present(spec, "minorUnit", "minor_unit")))
        except ValueError as e:
            raise ValueError(f"Invalid currency config at {currency_code}: {e}") from e
        currencies.append(currency)

    return CurrencyRegistry(currencies)


def load_registry_json(path: str | Path) -> CurrencyRegistry:
    """Load a registry from a JSON currency config file (see `registry_from_mapping` for the shape)."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    registry = registry_from_mapping(raw)
    logger.info(f"Loaded {len(registry)} currency(ies) from JSON config '{path}'")
    return registry


# endregion

# region Table / DataFrame


def registry_from_dataframe(df: pd.DataFrame) -> CurrencyRegistry:
    """Build a registry from a table with one row per unit.

    Required columns: currency_code, precision, unit, shift.
    Optional columns: display_precision, input_precision, symbol, code, name, minor_unit.
    Rows of the same currency must agree on $precision (and on $minor_unit when given).

    Raises:
        ValueError: If $df is not a DataFrame, lacks required columns or holds inconsistent rows.
    """
    # Check: $df must be a pandas DataFrame
    if not isinstance(df, pd.DataFrame):
        raise ValueError(f"Expected a pandas DataFrame, but received {type(df).__name__}")

    # Check: required columns present
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"The provided DataFrame is missing required columns: {', '.join(missing)}. Required columns are: {', '.join(REQUIRED_COLUMNS)}")

    raw: dict[str, dict[str, Any]] = {}
    for row_number, row in enumerate(df.to_dict(orient="records")):
        where = f"row {row_number}"
        currency_code = _as_optional_str(row["currency_code"])
        unit_name = _as_optional_str(row["unit"])
        if currency_code is None or unit_name is None:
            raise ValueError(f"Invalid currency table at {where}: 'currency_code' and 'unit' cannot be empty")

        precision = _as_int(row["precision"], f"{where}.precision")
        currency_spec = raw.setdefault(currency_code, {"precision": precision, "units": {}})

        # Raise: all rows of one currency must share the same precision
        if currency_spec["precision"] != precision:
            raise ValueError(f"Invalid currency table at {where}: currency '{currency_code}' has conflicting precisions {currency_spec['precision']} and {precision}")

        minor_unit = _as_optional_str(row.get("minor_unit"))
        if minor_unit is not None:
            known = currency_spec.setdefault("minor_unit", minor_unit)
            if known != minor_unit:
                raise ValueError(f"Invalid currency table at {where}: currency '{currency_code}' has conflicting minor units '{known}' and '{minor_unit}'")

        # Raise: unit names must be unique within a currency
        if unit_name in currency_spec["units"]:
            raise ValueError(f"Invalid currency table at {where}: unit '{unit_name}' of '{currency_code}' is defined twice")

        currency_spec["units"][unit_name] = {column: row[column] for column in UNIT_COLUMNS if column in row}

    return registry_from_mapping(raw)


def load_registry_csv(path: str | Path) -> CurrencyRegistry:
    """Load a registry from a CSV file with one row per unit (see `registry_from_dataframe`)."""
    path = Path(path)
    # Read text columns as-is: symbols like "$" or codes like "NA" must not become NaN
    df = pd.read_csv(path, dtype={"currency_code": str, "unit": str, "symbol": str, "code": str, "name": str, "minor_unit": str}, keep_default_na=False)

    registry = registry_from_dataframe(df)
    logger.info(f"Loaded {len(registry)} currency(ies) from CSV config '{path}'")
    return registry


# endregion
