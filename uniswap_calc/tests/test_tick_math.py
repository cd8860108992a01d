"""
Tick Math tests

Float conversions (tick <-> price, sqrtPriceX96) and the exact on-chain
TickMath functions, checked against known on-chain values.
"""

import math

import numpy as np
import pytest

from ..constants import Q96, MIN_TICK, MAX_TICK, MIN_SQRT_RATIO, MAX_SQRT_RATIO
from ..exceptions import InvalidInputError
from ..math.tick_math import (
    tick_to_price,
    price_to_tick,
    tick_to_sqrt_price_x96,
    sqrt_price_x96_to_tick,
    ticks_to_prices,
    ticks_between,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)


class TestTickToPrice:
    """tick_to_price tests"""

    def test_tick_0(self):
        """Tick 0 is price 1 exactly"""
        assert tick_to_price(0) == 1.0

    def test_tick_1(self):
        assert tick_to_price(1) == pytest.approx(1.0001)

    def test_negative_tick(self):
        assert tick_to_price(-1) == pytest.approx(1 / 1.0001)

    def test_doubling(self):
        """~6931 ticks double the price"""
        assert tick_to_price(6931) == pytest.approx(2.0, rel=1e-3)

    def test_extremes_are_finite(self):
        assert 0 < tick_to_price(MIN_TICK) < 1e-38
        assert tick_to_price(MAX_TICK) > 1e38
        assert math.isfinite(tick_to_price(MAX_TICK))

    def test_strictly_increasing(self):
        ticks = [MIN_TICK, -500000, -60, -1, 0, 1, 60, 500000, MAX_TICK]
        prices = [tick_to_price(t) for t in ticks]
        assert all(a < b for a, b in zip(prices, prices[1:]))


class TestPriceToTick:
    """price_to_tick tests"""

    def test_price_1(self):
        assert price_to_tick(1) == 0
        assert price_to_tick(1.0) == 0

    def test_one_tick_up(self):
        assert price_to_tick(1.0001) == 1

    def test_floors_between_ticks(self):
        """A price between two ticks maps to the lower one"""
        assert price_to_tick(1.00005) == 0
        assert price_to_tick(0.99995) == -1

    @pytest.mark.parametrize("price", [1e-12, 1e-6, 0.25, 0.5, 2.0, 1500.0, 3.7e6, 1e12])
    def test_round_trip_within_one_tick(self, price):
        """tick_to_price(price_to_tick(p)) sits at most one tick below p"""
        recovered = tick_to_price(price_to_tick(price))
        assert recovered <= price * (1 + 1e-9)
        assert recovered >= price / 1.0001 * (1 - 1e-9)

    def test_monotone(self):
        prices = [1e-9, 0.001, 0.9, 1, 1.1, 1000, 1e9]
        ticks = [price_to_tick(p) for p in prices]
        assert ticks == sorted(ticks)

    @pytest.mark.parametrize("price", [0, -1, -0.5, float("nan"), float("inf")])
    def test_invalid_price(self, price):
        with pytest.raises(InvalidInputError) as exc_info:
            price_to_tick(price)
        assert exc_info.value.argument == "price"

    def test_numpy_scalars(self):
        assert price_to_tick(np.int64(1)) == 0
        assert price_to_tick(np.float64(1.0001)) == 1
        assert price_to_tick(np.float32(2.0)) == price_to_tick(2.0)

    def test_numpy_nan(self):
        with pytest.raises(InvalidInputError):
            price_to_tick(np.float32("nan"))

    @pytest.mark.parametrize("price", ["1.5", None, True])
    def test_non_numeric_price(self, price):
        with pytest.raises(InvalidInputError):
            price_to_tick(price)

    def test_invalid_input_is_value_error(self):
        """Callers catching ValueError still see these errors"""
        with pytest.raises(ValueError):
            price_to_tick(0)


class TestSqrtPriceX96Conversions:
    """tick_to_sqrt_price_x96 / sqrt_price_x96_to_tick tests"""

    def test_tick_0_is_q96(self):
        assert tick_to_sqrt_price_x96(0) == Q96

    def test_q96_is_tick_0(self):
        assert sqrt_price_x96_to_tick(Q96) == 0

    def test_accepts_decimal_string(self):
        assert sqrt_price_x96_to_tick("79228162514264337593543950336") == 0

    def test_close_to_exact_tick_math(self):
        """Float path agrees with the on-chain path to ~1e-9"""
        for tick in [-200000, -887, -1, 1, 60, 887, 200000]:
            exact = get_sqrt_ratio_at_tick(tick)
            approx = tick_to_sqrt_price_x96(tick)
            assert abs(approx - exact) / exact < 1e-9

    def test_round_trip_within_one_tick(self):
        for tick in [-100000, -60, -1, 1, 60, 100000]:
            recovered = sqrt_price_x96_to_tick(tick_to_sqrt_price_x96(tick))
            assert tick - 1 <= recovered <= tick

    @pytest.mark.parametrize("value", [0, -1, "0", "abc", 1.5])
    def test_invalid(self, value):
        with pytest.raises(InvalidInputError):
            sqrt_price_x96_to_tick(value)


class TestTicksToPrices:
    """ticks_to_prices / ticks_between tests"""

    def test_same_decimals(self):
        prices = ticks_to_prices(-100, 100)
        assert prices.price_lower == pytest.approx(tick_to_price(-100))
        assert prices.price_upper == pytest.approx(tick_to_price(100))
        assert prices.price_lower < 1 < prices.price_upper

    def test_decimal_adjustment(self):
        """10^(decimals0 - decimals1) scales the raw price"""
        prices = ticks_to_prices(0, 0, 18, 6)
        assert prices.price_lower == pytest.approx(1e12)
        prices = ticks_to_prices(0, 0, 6, 18)
        assert prices.price_upper == pytest.approx(1e-12)

    def test_ticks_between(self):
        assert ticks_between(1, 1.0001) == 1
        assert ticks_between(1.0001, 1) == 1
        assert ticks_between(2, 2) == 0


class TestGetSqrtRatioAtTick:
    """get_sqrt_ratio_at_tick tests (TickMath.getSqrtRatioAtTick)"""

    def test_min_tick(self):
        assert get_sqrt_ratio_at_tick(MIN_TICK) == MIN_SQRT_RATIO

    def test_max_tick(self):
        assert get_sqrt_ratio_at_tick(MAX_TICK) == MAX_SQRT_RATIO

    def test_tick_0(self):
        assert get_sqrt_ratio_at_tick(0) == Q96

    def test_strictly_increasing(self):
        ticks = [MIN_TICK, MIN_TICK + 1, -1000, -1, 0, 1, 1000, MAX_TICK - 1, MAX_TICK]
        ratios = [get_sqrt_ratio_at_tick(t) for t in ticks]
        assert all(a < b for a, b in zip(ratios, ratios[1:]))

    @pytest.mark.parametrize("tick", [MIN_TICK - 1, MAX_TICK + 1])
    def test_out_of_range(self, tick):
        with pytest.raises(InvalidInputError) as exc_info:
            get_sqrt_ratio_at_tick(tick)
        assert exc_info.value.argument == "tick"


class TestGetTickAtSqrtRatio:
    """get_tick_at_sqrt_ratio tests (TickMath.getTickAtSqrtRatio)"""

    def test_min_sqrt_ratio(self):
        assert get_tick_at_sqrt_ratio(MIN_SQRT_RATIO) == MIN_TICK

    def test_max_sqrt_ratio_minus_one(self):
        assert get_tick_at_sqrt_ratio(MAX_SQRT_RATIO - 1) == MAX_TICK - 1

    def test_q96(self):
        assert get_tick_at_sqrt_ratio(Q96) == 0

    def test_accepts_decimal_string(self):
        assert get_tick_at_sqrt_ratio(str(Q96)) == 0

    @pytest.mark.parametrize("tick", [MIN_TICK, -500000, -60, -1, 0, 1, 60, 500000, MAX_TICK - 1])
    def test_round_trip(self, tick):
        assert get_tick_at_sqrt_ratio(get_sqrt_ratio_at_tick(tick)) == tick

    def test_just_below_tick_boundary(self):
        """One below a tick's ratio belongs to the previous tick"""
        ratio = get_sqrt_ratio_at_tick(100)
        assert get_tick_at_sqrt_ratio(ratio - 1) == 99

    @pytest.mark.parametrize("value", [MIN_SQRT_RATIO - 1, MAX_SQRT_RATIO, 0])
    def test_out_of_range(self, value):
        with pytest.raises(InvalidInputError):
            get_tick_at_sqrt_ratio(value)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
