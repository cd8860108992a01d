"""
Tick Math - Tick <-> Price and Tick <-> sqrtPriceX96 conversions

Two families of functions live here:

- Floating-point conversions (tick_to_price, price_to_tick,
  tick_to_sqrt_price_x96, sqrt_price_x96_to_tick). These are for display and
  estimation. They tolerate ULP-level drift and are not wei-exact.
- Exact integer conversions (get_sqrt_ratio_at_tick, get_tick_at_sqrt_ratio)
  matching the on-chain TickMath library bit for bit.

References:
- Uniswap V3 Core: contracts/libraries/TickMath.sol
- Whitepaper Section 6.1: Ticks and Tick Spacing

Core formulas:
    price = 1.0001^tick
    tick = floor(log(price) / log(1.0001))
    sqrtPriceX96 = sqrt(price) * 2^96
"""

import math
import numbers

from ..constants import Q96, MIN_TICK, MAX_TICK, MIN_SQRT_RATIO, MAX_SQRT_RATIO, TICK_BASE
from ..data.types import PriceRange, parse_big_int
from ..exceptions import InvalidInputError

_LOG_TICK_BASE = math.log(TICK_BASE)

# 2^128 / sqrt(1.0001)^(2^i) in Q128.128, for bits 1..19 of |tick|
_RATIO_MULTIPLIERS = (
    (0x2, 0xfff97272373d413259a46990580e213a),
    (0x4, 0xfff2e50f5f656932ef12357cf3c7fdcc),
    (0x8, 0xffe5caca7e10e4e61c3624eaa0941cd0),
    (0x10, 0xffcb9843d60f6159c9db58835c926644),
    (0x20, 0xff973b41fa98c081472e6896dfb254c0),
    (0x40, 0xff2ea16466c96a3843ec78b326b52861),
    (0x80, 0xfe5dee046a99a2a811c461f1969c3053),
    (0x100, 0xfcbe86c7900a88aedcffc83b479aa3a4),
    (0x200, 0xf987a7253ac413176f2b074cf7815e54),
    (0x400, 0xf3392b0822b70005940c7a398e4b70f3),
    (0x800, 0xe7159475a2c29b7443b29c7fa6e889d9),
    (0x1000, 0xd097f3bdfd2022b8845ad8f792aa5825),
    (0x2000, 0xa9f746462d870fdf8a65dc1f90e061e5),
    (0x4000, 0x70d869a156d2a1b890bb3df62baf32f7),
    (0x8000, 0x31be135f97d08fd981231505542fcfa6),
    (0x10000, 0x9aa508b5b7a84e1c677de54f3e99bc9),
    (0x20000, 0x5d6af8dedb81196699c329225ee604),
    (0x40000, 0x2216e584f5fa1ea926041bedfe98),
    (0x80000, 0x48a170391f7dc42444e8fa2),
)


def tick_to_price(tick: int) -> float:
    """Convert a tick to a raw price (token1/token0, no decimal adjustment)

    price = 1.0001^tick

    Total for every tick in range and strictly increasing in tick.

    Example:
        >>> tick_to_price(0)
        1.0
        >>> round(tick_to_price(6931), 4)
        1.9998
    """
    return TICK_BASE ** tick


def price_to_tick(price: float) -> int:
    """Convert a raw price to the tick at or below it

    tick = floor(log(price) / log(1.0001))

    Rounding is toward negative infinity, so a price between two tick
    boundaries maps to the lower one and tick_to_price(price_to_tick(p)) <= p
    (up to float error).

    Args:
        price: Raw price (token1/token0), must be positive

    Returns:
        Tick index

    Raises:
        InvalidInputError: price is not a positive finite number
    """
    if not isinstance(price, numbers.Real) or isinstance(price, bool):
        raise InvalidInputError(f"price must be a number, got {price!r}", "price")
    if price <= 0 or (not isinstance(price, numbers.Integral) and not math.isfinite(price)):
        raise InvalidInputError(f"price must be positive and finite, got {price}", "price")

    return math.floor(math.log(price) / _LOG_TICK_BASE)


def tick_to_sqrt_price_x96(tick: int) -> int:
    """Convert a tick to sqrtPriceX96 via floating point

    sqrtPriceX96 = floor(sqrt(1.0001^tick) * 2^96)

    Tick 0 gives exactly 2^96. For on-chain exact values use
    get_sqrt_ratio_at_tick.
    """
    return int(math.sqrt(tick_to_price(tick)) * Q96)


def sqrt_price_x96_to_tick(sqrt_price_x96) -> int:
    """Convert sqrtPriceX96 to a tick via floating point

    Normalizes by 2^96, squares, then applies price_to_tick. Intended for
    display and estimation; may land one tick below the exact on-chain tick.

    Args:
        sqrt_price_x96: sqrtPriceX96 as int or decimal string

    Returns:
        Tick index

    Raises:
        InvalidInputError: sqrt_price_x96 is not a positive integer
    """
    value = parse_big_int(sqrt_price_x96, "sqrt_price_x96")
    if value <= 0:
        raise InvalidInputError(f"sqrt_price_x96 must be positive, got {value}", "sqrt_price_x96")

    sqrt_price = value / Q96
    return price_to_tick(sqrt_price * sqrt_price)


def ticks_to_prices(
    tick_lower: int,
    tick_upper: int,
    decimals0: int = 18,
    decimals1: int = 18
) -> PriceRange:
    """Decimal-adjusted prices for a tick range

    price = 1.0001^tick * 10^(decimals0 - decimals1)

    Args:
        tick_lower: Lower tick
        tick_upper: Upper tick
        decimals0: token0 decimals
        decimals1: token1 decimals

    Returns:
        PriceRange(price_lower, price_upper)
    """
    decimal_adjustment = 10 ** (decimals0 - decimals1)
    return PriceRange(
        price_lower=tick_to_price(tick_lower) * decimal_adjustment,
        price_upper=tick_to_price(tick_upper) * decimal_adjustment,
    )


def ticks_between(price_lower: float, price_upper: float) -> int:
    """Number of ticks between two raw prices"""
    return abs(price_to_tick(price_upper) - price_to_tick(price_lower))


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """Exact sqrtPriceX96 at a tick

    Same algorithm as TickMath.getSqrtRatioAtTick(): multiply together the
    precomputed 1/sqrt(1.0001)^(2^i) factors for each set bit of |tick| in
    Q128.128, invert for positive ticks, then round up to Q64.96.

    Args:
        tick: Tick index (MIN_TICK ~ MAX_TICK)

    Returns:
        sqrtPriceX96 (Q64.96)

    Raises:
        InvalidInputError: tick outside [MIN_TICK, MAX_TICK]
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise InvalidInputError(
            f"tick out of range: {tick} (range: {MIN_TICK} ~ {MAX_TICK})", "tick"
        )

    abs_tick = abs(tick)

    if abs_tick & 0x1:
        ratio = 0xfffcb933bd6fad37aa2d162d1a594001
    else:
        ratio = 0x100000000000000000000000000000000

    for mask, multiplier in _RATIO_MULTIPLIERS:
        if abs_tick & mask:
            ratio = (ratio * multiplier) >> 128

    if tick > 0:
        ratio = (2 ** 256 - 1) // ratio

    # Q128.128 -> Q64.96, rounding up
    return (ratio >> 32) + (1 if ratio % (1 << 32) else 0)


def get_tick_at_sqrt_ratio(sqrt_price_x96) -> int:
    """Exact greatest tick whose sqrt ratio is <= sqrt_price_x96

    Same algorithm as TickMath.getTickAtSqrtRatio(): a 14-iteration binary
    log2, scaled to log_sqrt(1.0001), with the two candidate ticks resolved
    against get_sqrt_ratio_at_tick.

    Args:
        sqrt_price_x96: sqrtPriceX96 as int or decimal string,
            MIN_SQRT_RATIO <= value < MAX_SQRT_RATIO

    Returns:
        Tick index

    Raises:
        InvalidInputError: value outside the valid sqrt ratio range
    """
    value = parse_big_int(sqrt_price_x96, "sqrt_price_x96")
    if value < MIN_SQRT_RATIO or value >= MAX_SQRT_RATIO:
        raise InvalidInputError(
            f"sqrt_price_x96 out of range: {value} "
            f"(range: {MIN_SQRT_RATIO} ~ {MAX_SQRT_RATIO - 1})",
            "sqrt_price_x96",
        )

    ratio = value << 32
    msb = ratio.bit_length() - 1

    if msb >= 128:
        r = ratio >> (msb - 127)
    else:
        r = ratio << (127 - msb)

    log_2 = (msb - 128) << 64

    for i in range(14):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << (63 - i)
        r >>= f

    log_sqrt10001 = log_2 * 255738958999603826347141

    tick_low = (log_sqrt10001 - 3402992956809132418596140100660247210) >> 128
    tick_high = (log_sqrt10001 + 291339464771989622907027621153398088495) >> 128

    if tick_low == tick_high:
        return tick_low

    return tick_high if get_sqrt_ratio_at_tick(tick_high) <= value else tick_low
