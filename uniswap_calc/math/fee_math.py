"""
Fee Math - uncollected fees, fee growth inside a range, APR

Fee growth accumulators are Q128 values per unit of liquidity:

    f_a(i) = f_g - f_o(i)  if i_c >= i else f_o(i)      # above tick i
    f_b(i) = f_o(i)        if i_c >= i else f_g - f_o(i) # below tick i
    f_r    = f_g - f_b(i_l) - f_a(i_u)                   # inside the range
    fees   = (f_r(t1) - f_r(t0)) * L / 2^128

References:
- Whitepaper Section 6.3: Tick-Indexed State (feeGrowthOutside)
- Whitepaper Section 6.4.1: Position-Indexed State (uncollected fees)
"""

import logging

from ..constants import Q128
from ..data.types import FeeAmounts, parse_big_int
from ..exceptions import InvalidInputError

logger = logging.getLogger(__name__)

_UINT256_MODULUS = 2 ** 256


def _fee_growth_delta(current: int, last: int, wrap: bool, argument: str) -> int:
    delta = current - last
    if delta >= 0:
        return delta
    if wrap:
        return delta % _UINT256_MODULUS
    raise InvalidInputError(
        f"{argument} is below its last snapshot ({current} < {last}); "
        "pass wrap=True if the accumulator overflowed",
        argument,
    )


def calculate_fees(
    fee_growth_inside0_x128,
    fee_growth_inside1_x128,
    liquidity,
    fee_growth_inside0_last_x128,
    fee_growth_inside1_last_x128,
    wrap: bool = False
) -> FeeAmounts:
    """Uncollected fees of a position since its last snapshot

    fees_i = (feeGrowthInside_i - feeGrowthInside_i_last) * liquidity / 2^128

    On chain the accumulators are uint256 and the subtraction wraps. By
    default a negative delta is rejected; wrap=True applies the 2^256
    wraparound instead.

    Args:
        fee_growth_inside0_x128: Current fee growth inside, token0 (Q128)
        fee_growth_inside1_x128: Current fee growth inside, token1 (Q128)
        liquidity: Position liquidity
        fee_growth_inside0_last_x128: Snapshot at last update, token0
        fee_growth_inside1_last_x128: Snapshot at last update, token1
        wrap: Apply uint256 wraparound to negative deltas

    Returns:
        FeeAmounts(fees0, fees1) in smallest units

    Raises:
        InvalidInputError: negative liquidity, or a negative delta with wrap=False
    """
    liq = parse_big_int(liquidity, "liquidity")
    if liq < 0:
        raise InvalidInputError(f"liquidity must be non-negative, got {liq}", "liquidity")

    delta0 = _fee_growth_delta(
        parse_big_int(fee_growth_inside0_x128, "fee_growth_inside0_x128"),
        parse_big_int(fee_growth_inside0_last_x128, "fee_growth_inside0_last_x128"),
        wrap,
        "fee_growth_inside0_x128",
    )
    delta1 = _fee_growth_delta(
        parse_big_int(fee_growth_inside1_x128, "fee_growth_inside1_x128"),
        parse_big_int(fee_growth_inside1_last_x128, "fee_growth_inside1_last_x128"),
        wrap,
        "fee_growth_inside1_x128",
    )

    return FeeAmounts(fees0=delta0 * liq // Q128, fees1=delta1 * liq // Q128)


def fee_growth_inside(
    tick_lower: int,
    tick_upper: int,
    current_tick: int,
    fee_growth_global,
    fee_growth_outside_lower,
    fee_growth_outside_upper
) -> int:
    """Fee growth inside a tick range (f_r)

    f_r = f_g - f_b(i_l) - f_a(i_u), wrapped to uint256 like the on-chain
    unchecked arithmetic.

    Args:
        tick_lower: Lower tick (i_l)
        tick_upper: Upper tick (i_u)
        current_tick: Current pool tick (i_c)
        fee_growth_global: Global fee growth (f_g)
        fee_growth_outside_lower: feeGrowthOutside of the lower tick
        fee_growth_outside_upper: feeGrowthOutside of the upper tick

    Returns:
        Fee growth inside (Q128)
    """
    f_g = parse_big_int(fee_growth_global, "fee_growth_global")
    f_o_lower = parse_big_int(fee_growth_outside_lower, "fee_growth_outside_lower")
    f_o_upper = parse_big_int(fee_growth_outside_upper, "fee_growth_outside_upper")

    f_b = f_o_lower if current_tick >= tick_lower else f_g - f_o_lower
    f_a = f_g - f_o_upper if current_tick >= tick_upper else f_o_upper

    return (f_g - f_b - f_a) % _UINT256_MODULUS


def estimate_apr(fees_24h: float, tvl: float) -> float:
    """Annualized fee APR in percent

    apr = fees_24h / tvl * 365 * 100

    Returns 0.0 when tvl is 0.
    """
    if tvl == 0:
        logger.debug("estimate_apr called with zero TVL, returning 0")
        return 0.0
    daily_return = fees_24h / tvl
    return daily_return * 365 * 100
