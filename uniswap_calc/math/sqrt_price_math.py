"""
Sqrt Price Math - sqrtPriceX96 <-> price

Uniswap V3 stores the pool price as sqrtPriceX96:
    sqrtPriceX96 = sqrt(price) * 2^96

Human-readable prices are decimal adjusted:
    price = (sqrtPriceX96 / 2^96)^2 * 10^(decimals0 - decimals1)

References:
- Uniswap V3 Core: contracts/libraries/SqrtPriceMath.sol
"""

import math
import numbers

from ..constants import Q96, Q192
from ..data.types import parse_big_int
from ..exceptions import InvalidInputError


def _non_negative(value, argument: str) -> int:
    parsed = parse_big_int(value, argument)
    if parsed < 0:
        raise InvalidInputError(f"{argument} must be non-negative, got {parsed}", argument)
    return parsed


def sqrt_price_x96_to_price(
    sqrt_price_x96,
    decimals0: int = 18,
    decimals1: int = 18
) -> float:
    """Convert sqrtPriceX96 to a human-readable price

    price = (sqrtPriceX96 / 2^96)^2 * 10^(decimals0 - decimals1)

    Args:
        sqrt_price_x96: sqrtPriceX96 as int or decimal string
        decimals0: token0 decimals
        decimals1: token1 decimals

    Returns:
        Price of token0 in token1 (token1/token0), decimal adjusted

    Example:
        >>> sqrt_price_x96_to_price(2 ** 96, 18, 18)
        1.0
        >>> sqrt_price_x96_to_price("79228162514264337593543950336", 6, 18)
        1e-12
    """
    value = _non_negative(sqrt_price_x96, "sqrt_price_x96")

    # normalize first so the square stays within float range
    sqrt_price = value / Q96
    price_raw = sqrt_price * sqrt_price

    return price_raw * (10 ** (decimals0 - decimals1))


def sqrt_price_x96_to_price_int(
    sqrt_price_x96,
    decimals0: int = 18,
    decimals1: int = 18,
    precision: int = 18
) -> int:
    """Convert sqrtPriceX96 to a fixed-point integer price

    Integer-only counterpart of sqrt_price_x96_to_price; the result carries
    `precision` decimal digits (price * 10^precision, floored).

    Args:
        sqrt_price_x96: sqrtPriceX96 as int or decimal string
        decimals0: token0 decimals
        decimals1: token1 decimals
        precision: Number of decimal digits in the result

    Returns:
        floor(price * 10^precision)
    """
    value = _non_negative(sqrt_price_x96, "sqrt_price_x96")
    if precision < 0:
        raise InvalidInputError(f"precision must be non-negative, got {precision}", "precision")

    decimal_diff = decimals0 - decimals1

    numerator = value * value * (10 ** precision)
    denominator = Q192

    if decimal_diff >= 0:
        numerator *= 10 ** decimal_diff
    else:
        denominator *= 10 ** (-decimal_diff)

    return numerator // denominator


def price_to_sqrt_price_x96(price: float) -> int:
    """Convert a raw price to sqrtPriceX96

    sqrtPriceX96 = floor(sqrt(price) * 2^96)

    Args:
        price: Raw price (token1/token0, no decimal adjustment)

    Returns:
        sqrtPriceX96

    Raises:
        InvalidInputError: price is not positive
    """
    if isinstance(price, bool) or not isinstance(price, numbers.Real):
        raise InvalidInputError(f"price must be a number, got {price!r}", "price")
    if price <= 0 or (not isinstance(price, numbers.Integral) and not math.isfinite(price)):
        raise InvalidInputError(f"price must be positive and finite, got {price}", "price")

    return int(math.sqrt(price) * Q96)
