"""
Math layer for uniswap_calc

- tick_math: tick <-> price, sqrtPriceX96 and the exact on-chain TickMath
- sqrt_price_math: sqrtPriceX96 <-> human price
- tick_spacing: fee tiers, usable ticks, tick validation
- range_math: position ranges and range analytics
- liquidity_math: liquidity <-> token amounts
- fee_math: uncollected fees and APR
- il_math: impermanent loss
- price_math: TWAP, slippage, unit conversion, formatting
- volatility: realized volatility from a price series
"""

from .tick_math import (
    tick_to_price,
    price_to_tick,
    tick_to_sqrt_price_x96,
    sqrt_price_x96_to_tick,
    ticks_to_prices,
    ticks_between,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)
from .sqrt_price_math import (
    sqrt_price_x96_to_price,
    sqrt_price_x96_to_price_int,
    price_to_sqrt_price_x96,
)
from .tick_spacing import (
    get_tick_spacing,
    get_fee_tier,
    get_all_fee_tiers,
    is_valid_fee_tier,
    fee_to_percent,
    get_recommended_fee_tier,
    nearest_usable_tick,
    is_usable_tick,
    is_valid_tick,
    validate_ticks,
    get_tick_count,
    get_usable_ticks_in_range,
)
from .range_math import (
    calculate_tick_range,
    get_full_range_ticks,
    get_ticks_from_price_range,
    is_position_in_range,
    get_position_width,
    get_tick_distance,
    suggest_tick_range,
    capital_efficiency,
    concentration_factor,
)
from .liquidity_math import (
    calculate_liquidity_from_amounts,
    calculate_amounts_from_liquidity,
    calculate_optimal_ratio,
    calculate_position_value,
    get_liquidity_for_amount0,
    get_liquidity_for_amount1,
    get_amount0_for_liquidity,
    get_amount1_for_liquidity,
)
from .fee_math import (
    calculate_fees,
    fee_growth_inside,
    estimate_apr,
)
from .il_math import (
    calculate_impermanent_loss,
    percent_change,
)
from .price_math import (
    calculate_twap,
    calculate_price_impact,
    get_minimum_received,
    get_maximum_sent,
    to_wei,
    from_wei,
    format_price,
    format_usd,
    invert_price,
    sort_tokens,
    is_sorted,
)
from .volatility import estimate_volatility
