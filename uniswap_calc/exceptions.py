"""
Errors raised by the math layer.

Every error carries the name of the offending argument (or None) so the
calling application can build a precise message.
"""

from typing import Optional


class UniswapMathError(Exception):
    """Base error for uniswap_calc"""

    def __init__(self, message: str, argument: Optional[str] = None):
        super().__init__(message)
        self.argument = argument


class InvalidInputError(UniswapMathError, ValueError):
    """Argument value violates a constraint (non-positive price, bad tick, ...)"""
    pass


class OutOfRangeError(UniswapMathError, ValueError):
    """Lookup key outside the recognized set (e.g. unknown fee tier)"""
    pass


class DegenerateRangeError(UniswapMathError, ZeroDivisionError):
    """Ratio formula would divide by zero (zero-width range, zero time delta)"""
    pass
