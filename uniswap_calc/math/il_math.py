"""
Impermanent Loss Math

Full-range (V2 style) impermanent loss as a function of the price ratio
since deposit:

    IL = |2 * sqrt(r) / (1 + r) - 1| * 100

where r = current price / initial price. IL(r) == IL(1/r).
"""

import math

from ..exceptions import InvalidInputError


def calculate_impermanent_loss(price_ratio: float) -> float:
    """Impermanent loss in percent for a price ratio

    Args:
        price_ratio: current price / initial price (1.5 = +50%)

    Returns:
        Loss in percent (always >= 0); exactly 0.0 at price_ratio == 1

    Raises:
        InvalidInputError: negative price_ratio
    """
    if price_ratio < 0:
        raise InvalidInputError(f"price_ratio must be non-negative, got {price_ratio}", "price_ratio")

    sqrt_ratio = math.sqrt(price_ratio)
    il = 2 * sqrt_ratio / (1 + price_ratio) - 1
    return abs(il * 100)


def percent_change(old_value: float, new_value: float) -> float:
    """Percent change from old_value to new_value; 0 when old_value is 0"""
    if old_value == 0:
        return 0.0
    return (new_value - old_value) / old_value * 100
