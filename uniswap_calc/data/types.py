"""
Value types for the math layer

All types are immutable pydantic models. Big integers (sqrtPriceX96,
liquidity, token amounts, fee growth) are plain Python ints internally,
accept decimal strings on input, and serialize back to decimal strings in
JSON mode, since 256-bit values do not survive a round trip through a JSON
number.
"""

import numbers
import re
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

from ..exceptions import InvalidInputError

_DECIMAL_INT = re.compile(r"[+-]?\d+")


def parse_big_int(value: Any, argument: Optional[str] = None) -> int:
    """Parse an int or a decimal integer string

    Floats and booleans are rejected: a float cannot carry a 256-bit value
    exactly, and bool is an int subclass only by accident.

    Args:
        value: int (numpy integers included) or decimal string
            (e.g. "79228162514264337593543950336")
        argument: argument name used in the error message

    Returns:
        Parsed integer

    Raises:
        InvalidInputError: value is not an integer or decimal integer string
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"{argument or 'value'} must be an integer, got bool", argument)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if _DECIMAL_INT.fullmatch(text):
            return int(text)
    raise InvalidInputError(
        f"{argument or 'value'} must be an integer or decimal string, got {value!r}",
        argument,
    )


def _coerce_big_int(value: Any) -> int:
    return parse_big_int(value)


BigInt = Annotated[
    int,
    BeforeValidator(_coerce_big_int),
    PlainSerializer(str, return_type=str, when_used="json"),
]

NonNegativeBigInt = Annotated[
    int,
    Field(ge=0),
    BeforeValidator(_coerce_big_int),
    PlainSerializer(str, return_type=str, when_used="json"),
]


class _ValueType(BaseModel):
    model_config = ConfigDict(frozen=True)


class PositionRange(_ValueType):
    """Tick bounds of a position

    The range builders in math.range_math always return
    tick_lower < tick_upper. Models built directly are not checked; use
    validate_ticks.
    """
    tick_lower: int
    tick_upper: int

    @property
    def width(self) -> int:
        return self.tick_upper - self.tick_lower

    def to_prices(self, decimals0: int = 18, decimals1: int = 18) -> "PriceRange":
        from ..math.tick_math import ticks_to_prices
        return ticks_to_prices(self.tick_lower, self.tick_upper, decimals0, decimals1)


class PriceRange(_ValueType):
    """Decimal-adjusted prices (token1 per token0) of a tick range"""
    price_lower: float
    price_upper: float


class TokenAmounts(_ValueType):
    """Token amounts in smallest units"""
    amount0: NonNegativeBigInt
    amount1: NonNegativeBigInt


class FeeAmounts(_ValueType):
    """Uncollected fees in smallest units"""
    fees0: BigInt
    fees1: BigInt


class TickDistance(_ValueType):
    """Distance of the current tick to the position bounds"""
    to_lower: int
    to_upper: int
    percent_in_range: float


class TickValidation(_ValueType):
    """Result of validate_ticks: first failing reason only"""
    valid: bool
    error: Optional[str] = None


class TokenRatio(_ValueType):
    """Share of a position's raw token amounts held in each token (sums to 1)"""
    ratio0: float
    ratio1: float


class FeeTier(_ValueType):
    """Fee tier definition"""
    fee: int
    tick_spacing: int
    label: str
    description: str


class Observation(_ValueType):
    """Oracle observation used for TWAP

    Accepts both `tick_cumulative` and the on-chain `tickCumulative` key.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tick_cumulative: BigInt = Field(alias="tickCumulative")
    timestamp: int
