import dataclasses
from decimal import Decimal

import pytest

from money_converter.domain.monetary.money import Money


def test_money_is_a_value():
    assert Money(1, "EUR", "cent") == Money(1, "EUR", "cent")
    assert Money(1, "EUR", "cent") != Money(1, "EUR", "EUR")
    assert hash(Money(1, "EUR", "cent")) == hash(Money(1, "EUR", "cent"))
    assert str(Money(-5, "EUR", "cent")) == "-5 EUR/cent"


def test_money_is_immutable():
    money = Money(1, "EUR", "EUR")
    with pytest.raises(dataclasses.FrozenInstanceError):
        money.amount = 2


def test_money_accepts_unbounded_integers():
    assert Money(10**200, "EUR", "EUR").amount == 10**200


@pytest.mark.parametrize("amount", [1.5, Decimal("1"), "1", True, None])
def test_money_requires_int_amount(amount):
    with pytest.raises(TypeError):
        Money(amount, "EUR", "EUR")


def test_money_requires_code_and_unit():
    with pytest.raises(ValueError):
        Money(1, "", "EUR")
    with pytest.raises(ValueError):
        Money(1, "EUR", "")
    with pytest.raises(ValueError):
        Money(1, None, "EUR")


def test_money_str_beyond_int_string_limit():
    assert str(Money(-(10**5000), "EUR", "cent")) == "-1" + "0" * 5000 + " EUR/cent"
