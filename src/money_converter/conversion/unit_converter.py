from __future__ import annotations

import logging

from money_converter.conversion.pow10 import pow10
from money_converter.domain.monetary.currency_registry import CurrencyRegistry
from money_converter.domain.monetary.money import Money
from money_converter.utils.numeric_tools import int_to_digits

logger = logging.getLogger(__name__)


def switch_unit(registry: CurrencyRegistry, money: Money, target_unit: str) -> Money:
    """Re-denominate $money into $target_unit of the same currency.

    The amount is scaled by 10**|shift_target - shift_source|: multiplied when the target unit has a
    smaller shift, divided (truncating toward zero) when it has a larger one. Coarsening drops the
    discarded digits without validation.

    Args:
        registry: Currency registry used to resolve both units.
        money: Source amount.
        target_unit: Unit registered under `money.currency_code`.

    Returns:
        New Money with `currency_unit == target_unit`.

    Raises:
        UnsupportedCurrency: If the currency, the source unit or $target_unit is not registered.
    """
    currency, source = registry.resolve(money.currency_code, money.currency_unit)
    target = currency.unit(target_unit)

    delta = target.shift - source.shift
    if delta < 0:
        amount = money.amount * pow10(-delta)
    elif delta > 0:
        factor = pow10(delta)
        quotient, remainder = divmod(abs(money.amount), factor)
        amount = -quotient if money.amount < 0 else quotient
        if remainder:
            logger.debug(f"Truncated {int_to_digits(remainder)} from {money} when switching to unit '{target_unit}'")
    else:
        amount = money.amount

    return Money(amount, money.currency_code, target_unit)
