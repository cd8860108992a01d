"""
Impermanent Loss tests
"""

import pytest

from ..exceptions import InvalidInputError
from ..math.il_math import calculate_impermanent_loss, percent_change


class TestImpermanentLoss:
    """calculate_impermanent_loss tests"""

    def test_no_price_change(self):
        assert calculate_impermanent_loss(1) == 0.0

    def test_price_quadruples(self):
        """r = 4: 2 * 2 / 5 - 1 = -0.2"""
        assert calculate_impermanent_loss(4) == pytest.approx(20.0)

    def test_price_doubles(self):
        assert calculate_impermanent_loss(2) == pytest.approx(5.719, abs=1e-3)

    def test_price_to_zero(self):
        assert calculate_impermanent_loss(0) == pytest.approx(100.0)

    @pytest.mark.parametrize("ratio", [0.25, 0.5, 1.5, 2, 3.7, 100])
    def test_symmetric(self, ratio):
        """IL(r) == IL(1/r)"""
        assert calculate_impermanent_loss(ratio) == pytest.approx(calculate_impermanent_loss(1 / ratio))

    def test_non_negative(self):
        for ratio in [0.01, 0.9, 1, 1.1, 50]:
            assert calculate_impermanent_loss(ratio) >= 0

    def test_negative_ratio(self):
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_impermanent_loss(-0.5)
        assert exc_info.value.argument == "price_ratio"


class TestPercentChange:
    """percent_change tests"""

    def test_increase(self):
        assert percent_change(100, 150) == 50.0

    def test_decrease(self):
        assert percent_change(200, 150) == -25.0

    def test_zero_base(self):
        assert percent_change(0, 5) == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
