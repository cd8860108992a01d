"""
Range Math - position range construction and range analytics

Builds (tick_lower, tick_upper) pairs from a percent band, a price band,
a volatility estimate or the full tick range, and measures where the
current tick sits relative to a position.

Price bands are symmetric in price, not in tick space: a +/-10% band
around the current price is wider below than above once expressed in ticks.
"""

import logging
import math

from ..constants import MIN_TICK, MAX_TICK, Z_SCORES, DEFAULT_Z_SCORE
from ..data.types import PositionRange, TickDistance
from ..exceptions import DegenerateRangeError, InvalidInputError
from .tick_math import tick_to_price, price_to_tick
from .tick_spacing import get_tick_spacing, nearest_usable_tick

logger = logging.getLogger(__name__)


def _snapped_range(tick_lower: int, tick_upper: int, tick_spacing: int) -> PositionRange:
    """Snap both bounds to tick_spacing, keeping tick_lower < tick_upper

    When both bounds snap to the same tick the range is widened by one
    spacing: upward, or downward when the upper bound is already at the
    highest usable tick.
    """
    lower = nearest_usable_tick(tick_lower, tick_spacing)
    upper = nearest_usable_tick(tick_upper, tick_spacing)

    if lower >= upper:
        if upper + tick_spacing <= nearest_usable_tick(MAX_TICK, tick_spacing):
            upper = lower + tick_spacing
        else:
            lower = upper - tick_spacing
        logger.debug("range collapsed to one tick, widened to [%d, %d]", lower, upper)

    return PositionRange(tick_lower=lower, tick_upper=upper)


def calculate_tick_range(current_tick: int, percent_range: float, fee_tier: int) -> PositionRange:
    """Tick range covering current price +/- percent_range percent

    Args:
        current_tick: Current pool tick
        percent_range: Band width in percent (10 means +/-10%)
        fee_tier: Pool fee tier

    Returns:
        PositionRange snapped to the fee tier's tick spacing, at least one
        spacing wide

    Raises:
        OutOfRangeError: unknown fee tier
        InvalidInputError: percent_range outside [0, 100)
    """
    if percent_range < 0 or percent_range >= 100:
        raise InvalidInputError(
            f"percent_range must be within [0, 100), got {percent_range}", "percent_range"
        )

    tick_spacing = get_tick_spacing(fee_tier)
    current_price = tick_to_price(current_tick)

    price_lower = current_price * (1 - percent_range / 100)
    price_upper = current_price * (1 + percent_range / 100)

    return _snapped_range(price_to_tick(price_lower), price_to_tick(price_upper), tick_spacing)


def get_full_range_ticks(fee_tier: int) -> PositionRange:
    """Widest usable range for a fee tier

    Example:
        >>> get_full_range_ticks(100)
        PositionRange(tick_lower=-887272, tick_upper=887272)
        >>> get_full_range_ticks(3000)
        PositionRange(tick_lower=-887160, tick_upper=887160)
    """
    tick_spacing = get_tick_spacing(fee_tier)
    return PositionRange(
        tick_lower=nearest_usable_tick(MIN_TICK, tick_spacing),
        tick_upper=nearest_usable_tick(MAX_TICK, tick_spacing),
    )


def get_ticks_from_price_range(
    price_lower: float,
    price_upper: float,
    fee_tier: int,
    decimals0: int = 18,
    decimals1: int = 18
) -> PositionRange:
    """Tick range for a human-readable price band

    Prices are token1 per token0 in whole-token units; they are converted to
    raw prices with 10^(decimals1 - decimals0) before taking the tick.

    Raises:
        InvalidInputError: price_lower > price_upper, or a non-positive price
    """
    if price_lower > price_upper:
        raise InvalidInputError(
            f"price_lower must not exceed price_upper ({price_lower} > {price_upper})", "price_lower"
        )

    tick_spacing = get_tick_spacing(fee_tier)
    decimal_adjustment = 10 ** (decimals1 - decimals0)

    return _snapped_range(
        price_to_tick(price_lower * decimal_adjustment),
        price_to_tick(price_upper * decimal_adjustment),
        tick_spacing,
    )


def is_position_in_range(tick_lower: int, tick_upper: int, current_tick: int) -> bool:
    """Half-open membership: tick_lower <= current_tick < tick_upper

    The upper bound is exclusive, matching how the pool crosses ticks.
    """
    return tick_lower <= current_tick < tick_upper


def get_position_width(tick_lower: int, tick_upper: int) -> int:
    return tick_upper - tick_lower


def get_tick_distance(current_tick: int, tick_lower: int, tick_upper: int) -> TickDistance:
    """Distance from the current tick to each bound

    percent_in_range is 0 below the range, 100 above it, and the linear
    position of current_tick inside it otherwise.

    Raises:
        DegenerateRangeError: zero-width range with current_tick on it
    """
    width = tick_upper - tick_lower
    to_lower = current_tick - tick_lower
    to_upper = tick_upper - current_tick

    if current_tick < tick_lower:
        percent_in_range = 0.0
    elif current_tick > tick_upper:
        percent_in_range = 100.0
    else:
        if width == 0:
            raise DegenerateRangeError("tick range has zero width", "tick_upper")
        percent_in_range = to_lower / width * 100

    return TickDistance(to_lower=to_lower, to_upper=to_upper, percent_in_range=percent_in_range)


def suggest_tick_range(
    current_tick: int,
    volatility: float,
    holding_period_days: float,
    confidence_level: float,
    fee_tier: int
) -> PositionRange:
    """Tick range sized to the expected price move over a holding period

    expected_move = volatility * sqrt(holding_period_days) * z

    z comes from Z_SCORES (0.90, 0.95, 0.99). Any other confidence level
    falls back to 1.96 without raising.

    Args:
        current_tick: Current pool tick
        volatility: Daily volatility as a decimal (0.05 for 5%)
        holding_period_days: Expected holding period in days
        confidence_level: Statistical confidence (0.95 for 95%)
        fee_tier: Pool fee tier

    Returns:
        PositionRange centered on current_tick, snapped to tick spacing,
        at least one spacing wide

    Raises:
        InvalidInputError: negative volatility or holding period
        OutOfRangeError: unknown fee tier
    """
    if volatility < 0:
        raise InvalidInputError(f"volatility must be non-negative, got {volatility}", "volatility")
    if holding_period_days < 0:
        raise InvalidInputError(
            f"holding_period_days must be non-negative, got {holding_period_days}",
            "holding_period_days",
        )

    z_score = Z_SCORES.get(confidence_level)
    if z_score is None:
        logger.debug(
            "no z-score for confidence level %s, using %s", confidence_level, DEFAULT_Z_SCORE
        )
        z_score = DEFAULT_Z_SCORE

    expected_move = volatility * math.sqrt(holding_period_days) * z_score

    tick_spacing = get_tick_spacing(fee_tier)
    tick_move = math.ceil(abs(price_to_tick(1 + expected_move) - price_to_tick(1)))

    return _snapped_range(current_tick - tick_move, current_tick + tick_move, tick_spacing)


def capital_efficiency(tick_lower: int, tick_upper: int) -> float:
    """Capital efficiency relative to a full-range position

    (MAX_TICK - MIN_TICK) / (tick_upper - tick_lower)

    Raises:
        DegenerateRangeError: tick_lower == tick_upper
    """
    position_range = tick_upper - tick_lower
    if position_range == 0:
        raise DegenerateRangeError(
            "capital efficiency undefined for a zero-width range", "tick_upper"
        )
    return (MAX_TICK - MIN_TICK) / position_range


def concentration_factor(tick_lower: int, tick_upper: int, current_tick: int) -> float:
    """Fee concentration versus full range; 0 when the position is out of range

    Both bounds count as in range here.
    """
    if current_tick < tick_lower or current_tick > tick_upper:
        return 0.0
    return capital_efficiency(tick_lower, tick_upper)
