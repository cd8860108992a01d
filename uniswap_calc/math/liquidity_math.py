"""
Liquidity Math - liquidity <-> token amounts

Concentrated liquidity in a price range [sqrtA, sqrtB]:

    L = amount0 * sqrtA * sqrtB / (sqrtB - sqrtA)    # token0 side
    L = amount1 / (sqrtB - sqrtA)                     # token1 side

with every sqrt price in Q64.96. Which side applies depends on where the
current price sits:

    sqrtP <= sqrtA         -> only token0
    sqrtA < sqrtP < sqrtB  -> both, the scarcer token binds
    sqrtP >= sqrtB         -> only token1

All arithmetic is unbounded int; intermediate products exceed 256 bits.

References:
- Uniswap V3 Periphery: contracts/libraries/LiquidityAmounts.sol
- Whitepaper Section 6.2.1: Concentrated Liquidity
"""

from typing import Tuple

from ..config import settings
from ..constants import Q96
from ..data.types import TokenAmounts, TokenRatio, parse_big_int
from ..exceptions import DegenerateRangeError, InvalidInputError
from .tick_math import tick_to_sqrt_price_x96


def _parse_non_negative(value, argument: str) -> int:
    parsed = parse_big_int(value, argument)
    if parsed < 0:
        raise InvalidInputError(f"{argument} must be non-negative, got {parsed}", argument)
    return parsed


def _ordered_bounds(sqrt_price_a, sqrt_price_b) -> Tuple[int, int]:
    """Parse both bounds and return them as (lower, upper)"""
    a = _parse_non_negative(sqrt_price_a, "sqrt_price_a")
    b = _parse_non_negative(sqrt_price_b, "sqrt_price_b")
    if a > b:
        a, b = b, a
    if a == b:
        raise DegenerateRangeError("sqrt price range has zero width", "sqrt_price_b")
    if a == 0:
        raise InvalidInputError("sqrt_price_a must be positive", "sqrt_price_a")
    return a, b


def get_liquidity_for_amount0(sqrt_price_a: int, sqrt_price_b: int, amount0: int) -> int:
    """Liquidity from amount0 over [sqrt_price_a, sqrt_price_b]

    L = amount0 * (sqrtA * sqrtB / Q96) / (sqrtB - sqrtA)
    """
    intermediate = sqrt_price_a * sqrt_price_b // Q96
    return amount0 * intermediate // (sqrt_price_b - sqrt_price_a)


def get_liquidity_for_amount1(sqrt_price_a: int, sqrt_price_b: int, amount1: int) -> int:
    """Liquidity from amount1 over [sqrt_price_a, sqrt_price_b]

    L = amount1 * Q96 / (sqrtB - sqrtA)
    """
    return amount1 * Q96 // (sqrt_price_b - sqrt_price_a)


def get_amount0_for_liquidity(sqrt_price_a: int, sqrt_price_b: int, liquidity: int) -> int:
    """token0 held by liquidity over [sqrt_price_a, sqrt_price_b], rounded down

    amount0 = L * (sqrtB - sqrtA) * Q96 / (sqrtA * sqrtB)
    """
    return liquidity * (sqrt_price_b - sqrt_price_a) * Q96 // (sqrt_price_a * sqrt_price_b)


def get_amount1_for_liquidity(sqrt_price_a: int, sqrt_price_b: int, liquidity: int) -> int:
    """token1 held by liquidity over [sqrt_price_a, sqrt_price_b], rounded down

    amount1 = L * (sqrtB - sqrtA) / Q96
    """
    return liquidity * (sqrt_price_b - sqrt_price_a) // Q96


def calculate_liquidity_from_amounts(
    sqrt_price_x96,
    sqrt_price_a_x96,
    sqrt_price_b_x96,
    amount0,
    amount1
) -> int:
    """Maximum liquidity mintable from amount0 and amount1

    Args:
        sqrt_price_x96: Current sqrtPriceX96
        sqrt_price_a_x96: sqrtPriceX96 at one range bound
        sqrt_price_b_x96: sqrtPriceX96 at the other range bound
        amount0: token0 amount (smallest units)
        amount1: token1 amount (smallest units)

    All arguments accept ints or decimal strings. Bounds given in reverse
    order are swapped.

    Returns:
        Liquidity; in range, the smaller of the two per-token candidates

    Raises:
        DegenerateRangeError: both bounds equal
        InvalidInputError: negative or malformed input
    """
    sqrt_price = _parse_non_negative(sqrt_price_x96, "sqrt_price_x96")
    sqrt_a, sqrt_b = _ordered_bounds(sqrt_price_a_x96, sqrt_price_b_x96)
    amt0 = _parse_non_negative(amount0, "amount0")
    amt1 = _parse_non_negative(amount1, "amount1")

    if sqrt_price <= sqrt_a:
        # below range: all token0
        return get_liquidity_for_amount0(sqrt_a, sqrt_b, amt0)

    if sqrt_price < sqrt_b:
        # in range: whichever token runs out first caps liquidity
        liquidity0 = get_liquidity_for_amount0(sqrt_price, sqrt_b, amt0)
        liquidity1 = get_liquidity_for_amount1(sqrt_a, sqrt_price, amt1)
        return min(liquidity0, liquidity1)

    # above range: all token1
    return get_liquidity_for_amount1(sqrt_a, sqrt_b, amt1)


def calculate_amounts_from_liquidity(
    sqrt_price_x96,
    sqrt_price_a_x96,
    sqrt_price_b_x96,
    liquidity
) -> TokenAmounts:
    """Token amounts held by a position

    Args:
        sqrt_price_x96: Current sqrtPriceX96
        sqrt_price_a_x96: sqrtPriceX96 at one range bound
        sqrt_price_b_x96: sqrtPriceX96 at the other range bound
        liquidity: Position liquidity

    Returns:
        TokenAmounts; amount1 == 0 below the range, amount0 == 0 above it

    Raises:
        DegenerateRangeError: both bounds equal
        InvalidInputError: negative or malformed input
    """
    sqrt_price = _parse_non_negative(sqrt_price_x96, "sqrt_price_x96")
    sqrt_a, sqrt_b = _ordered_bounds(sqrt_price_a_x96, sqrt_price_b_x96)
    liq = _parse_non_negative(liquidity, "liquidity")

    if sqrt_price <= sqrt_a:
        amount0 = get_amount0_for_liquidity(sqrt_a, sqrt_b, liq)
        amount1 = 0
    elif sqrt_price < sqrt_b:
        amount0 = get_amount0_for_liquidity(sqrt_price, sqrt_b, liq)
        amount1 = get_amount1_for_liquidity(sqrt_a, sqrt_price, liq)
    else:
        amount0 = 0
        amount1 = get_amount1_for_liquidity(sqrt_a, sqrt_b, liq)

    return TokenAmounts(amount0=amount0, amount1=amount1)


def calculate_optimal_ratio(sqrt_price_x96, tick_lower: int, tick_upper: int) -> TokenRatio:
    """Share of a new position's raw token amounts held in each token

    Evaluated for a reference liquidity (settings.UNIT_LIQUIDITY). Ratios
    are of raw smallest-unit amounts, not of value.

    Returns:
        TokenRatio(ratio0, ratio1); (0.5, 0.5) if both amounts are zero
    """
    amounts = calculate_amounts_from_liquidity(
        sqrt_price_x96,
        tick_to_sqrt_price_x96(tick_lower),
        tick_to_sqrt_price_x96(tick_upper),
        settings.UNIT_LIQUIDITY,
    )

    total = amounts.amount0 + amounts.amount1
    if total == 0:
        return TokenRatio(ratio0=0.5, ratio1=0.5)

    return TokenRatio(ratio0=amounts.amount0 / total, ratio1=amounts.amount1 / total)


def calculate_position_value(
    amount0,
    amount1,
    price: float,
    decimals0: int = 18,
    decimals1: int = 18
) -> float:
    """Position value in token1 units

    value = amount0 / 10^decimals0 * price + amount1 / 10^decimals1

    Args:
        amount0: token0 amount (smallest units)
        amount1: token1 amount (smallest units)
        price: token1 per token0, decimal adjusted
        decimals0: token0 decimals
        decimals1: token1 decimals
    """
    amt0 = parse_big_int(amount0, "amount0") / (10 ** decimals0)
    amt1 = parse_big_int(amount1, "amount1") / (10 ** decimals1)
    return amt0 * price + amt1
