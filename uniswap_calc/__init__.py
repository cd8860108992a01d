"""
Uniswap V3 Tick, Price and Liquidity Calculator

Pure functions for concentrated liquidity positions: tick <-> price
conversion, tick spacing and range construction, liquidity <-> token
amounts, uncollected fees, impermanent loss and price helpers.
"""

import logging

__version__ = "0.1.0"

from .constants import Q96, Q128, Q192, MIN_TICK, MAX_TICK, FeeAmount, TICK_SPACINGS, FEE_TIERS
from .exceptions import UniswapMathError, InvalidInputError, OutOfRangeError, DegenerateRangeError

logging.getLogger(__name__).addHandler(logging.NullHandler())
