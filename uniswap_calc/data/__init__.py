"""
Data layer for uniswap_calc

Immutable value types passed between the math functions and the calling
application.
"""

from .types import (
    parse_big_int,
    PositionRange,
    PriceRange,
    TokenAmounts,
    FeeAmounts,
    TickDistance,
    TickValidation,
    TokenRatio,
    FeeTier,
    Observation,
)
