"""
Uniswap V3 constants

Fixed-point and protocol bounds used across the math layer:
- Q96: sqrt price encoding (2^96)
- Q128: fee growth encoding (2^128)
- MIN_TICK / MAX_TICK, MIN_SQRT_RATIO / MAX_SQRT_RATIO: protocol bounds
- FEE_TIERS / TICK_SPACINGS: the four standard fee tiers
"""

from enum import IntEnum
from typing import Dict

# Fixed-point encoding
Q96: int = 2 ** 96
Q128: int = 2 ** 128
Q192: int = 2 ** 192

# Tick bounds
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# sqrtPriceX96 at MIN_TICK / MAX_TICK (TickMath.sol)
MIN_SQRT_RATIO: int = 4295128739
MAX_SQRT_RATIO: int = 1461446703485210103287273052203988822378723970342

# price = TICK_BASE ** tick
TICK_BASE: float = 1.0001

# Display precision for prices
PRICE_PRECISION: int = 18

UINT256_MAX: int = 2 ** 256 - 1
UINT128_MAX: int = 2 ** 128 - 1


class FeeAmount(IntEnum):
    """Standard fee amounts (hundredths of a bip)"""
    LOWEST = 100
    LOW = 500
    MEDIUM = 3000
    HIGH = 10000


# fee -> tick spacing
TICK_SPACINGS: Dict[int, int] = {
    FeeAmount.LOWEST: 1,
    FeeAmount.LOW: 10,
    FeeAmount.MEDIUM: 60,
    FeeAmount.HIGH: 200,
}

# fee -> (label, description)
FEE_TIERS: Dict[int, Dict[str, str]] = {
    FeeAmount.LOWEST: {
        "label": "0.01%",
        "description": "Best for very stable pairs like stablecoins",
    },
    FeeAmount.LOW: {
        "label": "0.05%",
        "description": "Best for stable pairs",
    },
    FeeAmount.MEDIUM: {
        "label": "0.3%",
        "description": "Best for most pairs",
    },
    FeeAmount.HIGH: {
        "label": "1%",
        "description": "Best for exotic pairs",
    },
}

# Two-sided normal z-scores by confidence level
Z_SCORES: Dict[float, float] = {
    0.90: 1.645,
    0.95: 1.96,
    0.99: 2.576,
}
DEFAULT_Z_SCORE: float = 1.96
