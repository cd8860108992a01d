"""
Realized volatility from a price series.

Feeds the `volatility` argument of suggest_tick_range.
"""

import math
from typing import Sequence

import numpy as np

from ..exceptions import InvalidInputError


def estimate_volatility(prices: Sequence[float], periods_per_day: float = 1) -> float:
    """Daily volatility from a series of prices

    Standard deviation of log returns, scaled to one day:

        sigma_daily = std(diff(log(prices))) * sqrt(periods_per_day)

    Args:
        prices: Prices sampled at a fixed interval, oldest first
        periods_per_day: Samples per day (24 for hourly closes)

    Returns:
        Daily volatility as a decimal (0.05 for 5%)

    Raises:
        InvalidInputError: fewer than two prices, non-positive prices, or
            non-positive periods_per_day
    """
    if periods_per_day <= 0:
        raise InvalidInputError(
            f"periods_per_day must be positive, got {periods_per_day}", "periods_per_day"
        )

    series = np.asarray(prices, dtype=float)
    if series.ndim != 1 or series.size < 2:
        raise InvalidInputError("Need at least 2 prices to estimate volatility", "prices")
    if not np.all(np.isfinite(series)) or np.any(series <= 0):
        raise InvalidInputError("prices must be positive and finite", "prices")

    returns = np.diff(np.log(series))  # Log returns
    return float(np.std(returns)) * math.sqrt(periods_per_day)
