"""
Price helpers - TWAP, price impact, slippage bounds, unit conversion and
display formatting.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Iterable, Optional, Tuple, Union

from pydantic import ValidationError

from ..config import settings
from ..data.types import Observation, parse_big_int
from ..exceptions import DegenerateRangeError, InvalidInputError
from .tick_math import tick_to_price

_BPS_BASE = 10000


def calculate_twap(observations: Iterable[Union[Observation, dict]], period: Optional[int] = None) -> float:
    """Time-weighted average price from oracle observations

    average_tick = (tickCumulative_newest - tickCumulative_oldest) / (t_newest - t_oldest)

    The average tick is truncated toward zero, as Solidity integer division does.

    Args:
        observations: Oldest first; Observation models or dicts with
            tick_cumulative (or tickCumulative) and timestamp
        period: Requested window in seconds. Only the first and last
            observations are used; kept for callers that pass it through.

    Returns:
        Raw price (token1/token0) at the average tick

    Raises:
        InvalidInputError: fewer than two observations, or a malformed one
        DegenerateRangeError: zero time delta
    """
    try:
        points = [o if isinstance(o, Observation) else Observation.model_validate(o) for o in observations]
    except ValidationError as exc:
        raise InvalidInputError(f"malformed observation: {exc}", "observations") from exc
    if len(points) < 2:
        raise InvalidInputError("Need at least 2 observations to calculate TWAP", "observations")

    oldest, newest = points[0], points[-1]
    tick_cumulative_delta = newest.tick_cumulative - oldest.tick_cumulative
    time_delta = newest.timestamp - oldest.timestamp

    if time_delta == 0:
        raise DegenerateRangeError("Time delta cannot be zero", "observations")

    average_tick = abs(tick_cumulative_delta) // abs(time_delta)
    if (tick_cumulative_delta < 0) != (time_delta < 0):
        average_tick = -average_tick

    return tick_to_price(average_tick)


def calculate_price_impact(
    amount_in,
    amount_out,
    spot_price: float,
    decimals_in: int,
    decimals_out: int
) -> float:
    """Price impact of a swap in percent

    expected = amount_in * spot_price
    impact = |(expected - amount_out) / expected| * 100

    Raises:
        DegenerateRangeError: expected output is zero
    """
    in_amount = parse_big_int(amount_in, "amount_in") / (10 ** decimals_in)
    out_amount = parse_big_int(amount_out, "amount_out") / (10 ** decimals_out)

    expected_out = in_amount * spot_price
    if expected_out == 0:
        raise DegenerateRangeError("expected output is zero", "amount_in")

    return abs((expected_out - out_amount) / expected_out * 100)


def _slippage_bps(slippage_percent: float) -> int:
    if slippage_percent < 0 or slippage_percent > 100:
        raise InvalidInputError(
            f"slippage_percent must be within [0, 100], got {slippage_percent}", "slippage_percent"
        )
    return int(slippage_percent * 100)


def get_minimum_received(amount_out, slippage_percent: float) -> int:
    """amount_out reduced by slippage (basis-point integer math, floored)"""
    amount = parse_big_int(amount_out, "amount_out")
    return amount * (_BPS_BASE - _slippage_bps(slippage_percent)) // _BPS_BASE


def get_maximum_sent(amount_in, slippage_percent: float) -> int:
    """amount_in increased by slippage (basis-point integer math, floored)"""
    amount = parse_big_int(amount_in, "amount_in")
    return amount * (_BPS_BASE + _slippage_bps(slippage_percent)) // _BPS_BASE


def to_wei(amount: Union[str, int, float], decimals: int) -> int:
    """Human-readable amount -> smallest units

    Exact decimal arithmetic; amounts with more fractional digits than
    `decimals` are rejected rather than silently truncated.

    Example:
        >>> to_wei("1.5", 18)
        1500000000000000000
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise InvalidInputError(f"amount is not a number: {amount!r}", "amount")

    if not value.is_finite():
        raise InvalidInputError(f"amount must be finite, got {amount!r}", "amount")

    with localcontext() as ctx:
        ctx.prec = 100
        scaled = value.scaleb(decimals)

    if scaled != scaled.to_integral_value():
        raise InvalidInputError(
            f"amount {amount} has more than {decimals} fractional digits", "amount"
        )
    return int(scaled)


def from_wei(amount, decimals: int) -> str:
    """Smallest units -> human-readable decimal string

    Example:
        >>> from_wei(1500000000000000000, 18)
        '1.5'
        >>> from_wei("1000000", 6)
        '1.0'
    """
    value = parse_big_int(amount, "amount")
    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), 10 ** decimals)

    fraction_str = str(fraction).rjust(decimals, "0").rstrip("0") if decimals else ""
    return f"{sign}{whole}.{fraction_str or '0'}"


def format_price(price: float, significant_digits: Optional[int] = None) -> str:
    """Format a price for display

    - 0 -> "0"
    - below 0.0001 -> scientific notation
    - below 1 -> fixed significant digits
    - otherwise -> thousands separators, at most significant_digits digits

    Args:
        price: Price to format
        significant_digits: Defaults to settings.PRICE_DIGITS
    """
    digits = significant_digits or settings.PRICE_DIGITS

    if price == 0:
        return "0"
    if price < 0.0001:
        return f"{price:.{digits - 1}e}"
    if price < 1:
        return f"{price:#.{digits}g}"

    rounded = float(f"{price:.{digits}g}")
    if rounded.is_integer():
        return f"{int(rounded):,}"
    return f"{rounded:,}"


def format_usd(value: float) -> str:
    """Format a USD value: 1234.5 -> "$1,234.50" """
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def invert_price(price: float) -> float:
    """Swap base and quote; 0 stays 0"""
    if price == 0:
        return 0.0
    return 1 / price


def sort_tokens(token_a: str, token_b: str) -> Tuple[str, str]:
    """Order two token addresses as the pool does (token0 < token1)"""
    if token_a.lower() < token_b.lower():
        return token_a, token_b
    return token_b, token_a


def is_sorted(token_a: str, token_b: str) -> bool:
    return token_a.lower() < token_b.lower()
