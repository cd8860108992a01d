"""
Fee Math tests

Uncollected fees from fee growth snapshots (whitepaper 6.4.1), fee growth
inside a range (6.3) and APR.
"""

import logging

import pytest

from ..constants import Q128
from ..data.types import FeeAmounts
from ..exceptions import InvalidInputError
from ..math.fee_math import (
    calculate_fees,
    fee_growth_inside,
    estimate_apr,
)

UINT256 = 2 ** 256


class TestCalculateFees:
    """calculate_fees tests"""

    def test_basic(self):
        """(f_now - f_last) * L / 2^128"""
        result = calculate_fees(10 * Q128, 20 * Q128, 1000, 0, 0)
        assert isinstance(result, FeeAmounts)
        assert result.fees0 == 10000
        assert result.fees1 == 20000

    def test_delta_from_snapshot(self):
        result = calculate_fees(15 * Q128, 4 * Q128, 100, 5 * Q128, 4 * Q128)
        assert result.fees0 == 1000
        assert result.fees1 == 0

    def test_floors(self):
        """Fractional fees are dropped"""
        result = calculate_fees(Q128 // 3, 0, 1, 0, 0)
        assert result.fees0 == 0

    def test_decimal_strings(self):
        result = calculate_fees(str(10 * Q128), str(20 * Q128), "1000", "0", "0")
        assert (result.fees0, result.fees1) == (10000, 20000)

    def test_zero_liquidity(self):
        result = calculate_fees(10 * Q128, 20 * Q128, 0, 0, 0)
        assert (result.fees0, result.fees1) == (0, 0)

    def test_negative_delta_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_fees(5, 0, Q128, 10, 0)
        assert exc_info.value.argument == "fee_growth_inside0_x128"

    def test_negative_delta_token1_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_fees(0, 5, Q128, 0, 10)
        assert exc_info.value.argument == "fee_growth_inside1_x128"

    def test_wraparound(self):
        """Accumulator overflowed past 2^256 since the snapshot"""
        result = calculate_fees(5, 0, Q128, UINT256 - 5, 0, wrap=True)
        assert result.fees0 == 10
        assert result.fees1 == 0

    def test_negative_liquidity(self):
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_fees(0, 0, -1, 0, 0)
        assert exc_info.value.argument == "liquidity"

    def test_json_dump_uses_strings(self):
        result = calculate_fees(10 * Q128, 20 * Q128, 1000, 0, 0)
        assert result.model_dump(mode="json") == {"fees0": "10000", "fees1": "20000"}


class TestFeeGrowthInside:
    """fee_growth_inside tests (f_r = f_g - f_b - f_a)"""

    def test_current_in_range(self):
        # f_b = 300, f_a = 200
        assert fee_growth_inside(-100, 100, 0, 1000, 300, 200) == 500

    def test_current_below_range(self):
        # f_b = 1000 - 300, f_a = 200
        assert fee_growth_inside(-100, 100, -200, 1000, 300, 200) == 100

    def test_current_above_range(self):
        # f_b = 300, f_a = 1000 - 900
        assert fee_growth_inside(-100, 100, 200, 1000, 300, 900) == 600

    def test_current_at_lower_tick(self):
        """i_c >= i_l counts as above the lower tick"""
        assert fee_growth_inside(-100, 100, -100, 1000, 300, 200) == 500

    def test_wraps_to_uint256(self):
        assert fee_growth_inside(-100, 100, 200, 1000, 300, 200) == UINT256 - 100

    def test_decimal_strings(self):
        assert fee_growth_inside(-100, 100, 0, "1000", "300", "200") == 500


class TestEstimateApr:
    """estimate_apr tests"""

    def test_basic(self):
        assert estimate_apr(10, 1000) == pytest.approx(365.0)

    def test_zero_tvl(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="uniswap_calc.math.fee_math"):
            assert estimate_apr(10, 0) == 0.0
        assert "zero TVL" in caplog.text

    def test_zero_fees(self):
        assert estimate_apr(0, 1000) == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
