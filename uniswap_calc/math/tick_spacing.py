"""
Tick spacing - fee tiers, usable ticks and tick validation

Only ticks divisible by the pool's tick spacing can bound a position.
Fee tier -> tick spacing:
- 0.01% (100)   -> 1
- 0.05% (500)   -> 10
- 0.30% (3000)  -> 60
- 1.00% (10000) -> 200
"""

import logging
import numbers
from typing import List

from ..constants import MIN_TICK, MAX_TICK, TICK_SPACINGS, FEE_TIERS, FeeAmount
from ..data.types import FeeTier, TickValidation
from ..exceptions import InvalidInputError, OutOfRangeError

logger = logging.getLogger(__name__)


def get_tick_spacing(fee_tier: int) -> int:
    """Tick spacing for a fee tier

    Args:
        fee_tier: Fee tier (100, 500, 3000, 10000)

    Returns:
        Tick spacing

    Raises:
        OutOfRangeError: fee tier is not one of the standard tiers
    """
    if fee_tier not in TICK_SPACINGS:
        raise OutOfRangeError(
            f"Invalid fee tier: {fee_tier}. Valid fee tiers are: {sorted(int(f) for f in TICK_SPACINGS)}",
            "fee_tier",
        )
    return TICK_SPACINGS[fee_tier]


def get_fee_tier(fee: int) -> FeeTier:
    """Full fee tier definition (spacing, label, description)

    Raises:
        OutOfRangeError: fee is not one of the standard tiers
    """
    tick_spacing = get_tick_spacing(fee)
    info = FEE_TIERS[fee]
    return FeeTier(
        fee=int(fee),
        tick_spacing=tick_spacing,
        label=info["label"],
        description=info["description"],
    )


def get_all_fee_tiers() -> List[FeeTier]:
    return [get_fee_tier(fee) for fee in TICK_SPACINGS]


def is_valid_fee_tier(fee: int) -> bool:
    return fee in TICK_SPACINGS


def fee_to_percent(fee: int) -> float:
    """Fee amount -> percent (3000 -> 0.3)"""
    return fee / 10000


def get_recommended_fee_tier(is_stable_pair: bool, is_exotic_pair: bool = False) -> FeeAmount:
    """Suggested fee tier for a pair type

    Stable pairs take the lowest tier, exotic pairs the highest, everything
    else the 0.3% tier.
    """
    if is_stable_pair:
        return FeeAmount.LOWEST
    if is_exotic_pair:
        return FeeAmount.HIGH
    return FeeAmount.MEDIUM


def _check_spacing(tick_spacing: int) -> int:
    if isinstance(tick_spacing, bool) or not isinstance(tick_spacing, numbers.Integral) or tick_spacing <= 0:
        raise InvalidInputError(
            f"tick_spacing must be a positive integer, got {tick_spacing!r}", "tick_spacing"
        )
    return int(tick_spacing)


def nearest_usable_tick(tick: int, tick_spacing: int) -> int:
    """Round a tick to the nearest multiple of tick_spacing

    Ties round away from zero (15 -> 20 and -15 -> -20 for spacing 10).
    A result outside [MIN_TICK, MAX_TICK] is clamped into
    [MIN_TICK + spacing, MAX_TICK - spacing] and then moved inward to the
    nearest multiple of spacing, so the result is always usable.

    Args:
        tick: Tick to round
        tick_spacing: Pool tick spacing (e.g. 60 for 0.3%)

    Returns:
        Usable tick

    Raises:
        InvalidInputError: tick_spacing is not a positive integer

    Example:
        >>> nearest_usable_tick(89, 60)
        60
        >>> nearest_usable_tick(90, 60)
        120
        >>> nearest_usable_tick(-887272, 60)
        -887160
    """
    tick_spacing = _check_spacing(tick_spacing)

    quotient, remainder = divmod(abs(tick), tick_spacing)
    if remainder * 2 >= tick_spacing:
        quotient += 1
    rounded = quotient * tick_spacing if tick >= 0 else -quotient * tick_spacing

    if rounded < MIN_TICK:
        # ceil to a multiple of spacing at or above the margin
        clamped = -((-(MIN_TICK + tick_spacing)) // tick_spacing) * tick_spacing
        logger.debug("tick %d rounded below MIN_TICK, clamped to %d", tick, clamped)
        return clamped
    if rounded > MAX_TICK:
        clamped = ((MAX_TICK - tick_spacing) // tick_spacing) * tick_spacing
        logger.debug("tick %d rounded above MAX_TICK, clamped to %d", tick, clamped)
        return clamped
    return rounded


def is_usable_tick(tick: int, tick_spacing: int) -> bool:
    """True if tick can bound a position in a pool with this spacing"""
    tick_spacing = _check_spacing(tick_spacing)
    return tick % tick_spacing == 0


def is_valid_tick(tick: int) -> bool:
    return MIN_TICK <= tick <= MAX_TICK


def validate_ticks(tick_lower: int, tick_upper: int, tick_spacing: int) -> TickValidation:
    """Validate a tick range for minting

    Checks, in order: ordering, bounds, lower alignment, upper alignment.
    Only the first failing reason is reported.

    Args:
        tick_lower: Lower tick
        tick_upper: Upper tick
        tick_spacing: Pool tick spacing

    Returns:
        TickValidation(valid, error)
    """
    tick_spacing = _check_spacing(tick_spacing)

    if tick_lower >= tick_upper:
        return TickValidation(valid=False, error="tickLower must be less than tickUpper")

    if tick_lower < MIN_TICK or tick_upper > MAX_TICK:
        return TickValidation(valid=False, error="Ticks out of valid range")

    if tick_lower % tick_spacing != 0:
        return TickValidation(valid=False, error="tickLower not aligned to tick spacing")

    if tick_upper % tick_spacing != 0:
        return TickValidation(valid=False, error="tickUpper not aligned to tick spacing")

    return TickValidation(valid=True)


def get_tick_count(tick_lower: int, tick_upper: int, tick_spacing: int) -> int:
    """Number of tick-spacing steps in a range"""
    tick_spacing = _check_spacing(tick_spacing)
    return (tick_upper - tick_lower) // tick_spacing


def get_usable_ticks_in_range(tick_lower: int, tick_upper: int, tick_spacing: int) -> List[int]:
    """All usable ticks from nearest_usable_tick(tick_lower) up to tick_upper"""
    start = nearest_usable_tick(tick_lower, tick_spacing)
    return list(range(start, tick_upper + 1, tick_spacing))
