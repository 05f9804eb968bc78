import json

import pandas as pd
import pytest

from money_converter.config.registry_loader import load_registry_csv, load_registry_json, registry_from_dataframe, registry_from_mapping
from money_converter.conversion.parser import parse
from money_converter.domain.monetary.money import Money

# Constants
RAW_CONFIG = {
    "EUR": {
        "code": "EUR",
        "precision": 5,
        "units": {
            "EUR": {"code": "EUR", "name": "Euro", "displayPrecision": 2, "inputPrecision": 2, "shift": 0, "symbol": "€"},
            "cent": {"code": "cent", "name": "Euro cent", "displayPrecision": 0, "inputPrecision": 0, "shift": 2, "symbol": "c"},
        },
    },
    "BTC": {
        "code": "BTC",
        "precision": 8,
        "minorUnit": "satoshi",
        "units": {
            "BTC": {"shift": 0, "symbol": "₿", "code": "BTC"},
            "mBTC": {"shift": 3, "display_precision": 5, "code": "mBTC"},
            "satoshi": {"shift": 8},
        },
    },
}

CSV_TEXT = """currency_code,precision,unit,shift,display_precision,input_precision,symbol,code,name,minor_unit
USD,5,USD,0,2,2,$,USD,US Dollar,cent
USD,5,cent,2,0,0,,,US cent,cent
NAD,2,NAD,0,2,2,N$,NA,Namibian Dollar,
"""


def test_registry_from_mapping():
    registry = registry_from_mapping(RAW_CONFIG)

    assert sorted(registry) == ["BTC", "EUR"]
    eur_cent = registry["EUR"].unit("cent")
    assert (eur_cent.shift, eur_cent.display_precision, eur_cent.input_precision) == (2, 0, 0)
    assert eur_cent.long_name == "Euro cent"
    assert registry["BTC"].minor_unit_name == "satoshi"


def test_registry_from_mapping_defaults():
    registry = registry_from_mapping(RAW_CONFIG)

    btc = registry["BTC"].unit("BTC")
    assert btc.display_precision == 8  # precision - shift
    assert btc.input_precision == 8  # display precision
    assert registry["BTC"].unit("mBTC").input_precision == 5
    assert registry["BTC"].unit("satoshi").symbol is None


def test_registry_from_mapping_normalizes_keys():
    raw = {1: {"precision": 2, "units": {1: {"shift": 0}}}}
    registry = registry_from_mapping(raw)
    assert registry.unit_precision("1", "1") == 2


@pytest.mark.parametrize(
    "raw",
    [
        [],
        {"EUR": []},
        {"EUR": {"precision": 5}},
        {"EUR": {"precision": 5, "units": {}}},
        {"EUR": {"units": {"EUR": {"shift": 0}}}},
        {"EUR": {"precision": 5, "units": {"EUR": {}}}},
        {"EUR": {"precision": 5, "units": {"EUR": {"shift": 6}}}},
        {"EUR": {"precision": 5, "units": {"EUR": {"shift": -1}}}},
        {"EUR": {"precision": "five", "units": {"EUR": {"shift": 0}}}},
        {"EUR": {"precision": True, "units": {"EUR": {"shift": 0}}}},
        {"EUR": {"precision": 5, "minorUnit": "cent", "units": {"EUR": {"shift": 0}}}},
    ],
)
def test_registry_from_mapping_rejects_invalid_config(raw):
    with pytest.raises(ValueError):
        registry_from_mapping(raw)


def test_invalid_config_names_the_currency():
    with pytest.raises(ValueError, match="EUR"):
        registry_from_mapping({"EUR": {"precision": 1, "units": {"cent": {"shift": 2}}}})


def test_load_registry_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(RAW_CONFIG), encoding="utf-8")

    registry = load_registry_json(path)

    assert parse(registry, "€123.45") == Money(12_345_000, "EUR", "EUR")
    assert parse(registry, "mBTC1") == Money(100_000, "BTC", "mBTC")


def test_registry_from_dataframe():
    df = pd.DataFrame(
        {
            "currency_code": ["EUR", "EUR"],
            "precision": [5, 5],
            "unit": ["EUR", "cent"],
            "shift": [0, 2],
            "symbol": ["€", None],
        }
    )

    registry = registry_from_dataframe(df)

    assert registry.unit_precision("EUR", "cent") == 3
    assert registry["EUR"].unit("EUR").symbol == "€"
    assert registry["EUR"].unit("cent").symbol is None
    assert registry["EUR"].minor_unit_name == "cent"


def test_registry_from_dataframe_rejects_invalid_tables():
    with pytest.raises(ValueError):
        registry_from_dataframe({"currency_code": ["EUR"]})

    with pytest.raises(ValueError, match="missing required columns"):
        registry_from_dataframe(pd.DataFrame({"currency_code": ["EUR"], "precision": [5]}))

    conflicting = pd.DataFrame({"currency_code": ["EUR", "EUR"], "precision": [5, 4], "unit": ["EUR", "cent"], "shift": [0, 2]})
    with pytest.raises(ValueError, match="conflicting precisions"):
        registry_from_dataframe(conflicting)

    duplicated = pd.DataFrame({"currency_code": ["EUR", "EUR"], "precision": [5, 5], "unit": ["EUR", "EUR"], "shift": [0, 2]})
    with pytest.raises(ValueError, match="defined twice"):
        registry_from_dataframe(duplicated)


def test_load_registry_csv(tmp_path):
    path = tmp_path / "currencies.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")

    registry = load_registry_csv(path)

    assert sorted(registry) == ["NAD", "USD"]
    assert registry["USD"].minor_unit_name == "cent"
    assert registry["USD"].unit("cent").symbol is None
    # "NA" stays a code and is not read as a missing value
    assert registry["NAD"].unit("NAD").code == "NA"
    assert parse(registry, "$1.5") == Money(150_000, "USD", "USD")
    assert parse(registry, "N$1.5") == Money(150, "NAD", "NAD")
