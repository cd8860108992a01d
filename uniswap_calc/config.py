"""
Configuration settings for uniswap_calc

Reads UNISWAP_CALC_* environment variables and provides library-level
defaults. Protocol constants live in constants.py and are not configurable.

Importing the package never reads a .env file; call load_settings() to
pull one into the environment. An invalid UNISWAP_CALC_* value already set
in the environment raises ValueError at import.
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv


class Settings:
    """Library settings"""

    def __init__(self):
        self.reload()

    def reload(self) -> "Settings":
        """Re-read the environment; on invalid values nothing changes"""
        # Logging
        log_level = os.getenv("UNISWAP_CALC_LOG_LEVEL", "WARNING").upper()

        # Significant digits used by format_price
        price_digits = int(os.getenv("UNISWAP_CALC_PRICE_DIGITS", 6))

        # Reference liquidity for calculate_optimal_ratio
        unit_liquidity = int(os.getenv("UNISWAP_CALC_UNIT_LIQUIDITY", 10 ** 18))

        if price_digits < 1:
            raise ValueError(f"UNISWAP_CALC_PRICE_DIGITS must be >= 1, got {price_digits}")
        if unit_liquidity <= 0:
            raise ValueError(f"UNISWAP_CALC_UNIT_LIQUIDITY must be positive, got {unit_liquidity}")

        self.LOG_LEVEL: str = log_level
        self.PRICE_DIGITS: int = price_digits
        self.UNIT_LIQUIDITY: int = unit_liquidity
        return self


# Create global settings instance
settings = Settings()


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Load a .env file and refresh the global settings.

    Variables already present in the environment win over the file.

    Args:
        dotenv_path: Path to the .env file. Defaults to the nearest .env
            found by python-dotenv.

    Returns:
        The refreshed global ``settings``

    Raises:
        ValueError: a UNISWAP_CALC_* value is invalid
    """
    load_dotenv(dotenv_path, override=False)
    return settings.reload()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    The library never configures handlers on import; applications call this
    (or set up logging themselves) when they want the debug trail.

    Args:
        level: Log level name. Defaults to settings.LOG_LEVEL.

    Returns:
        The ``uniswap_calc`` logger
    """
    logger = logging.getLogger("uniswap_calc")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        logger.addHandler(handler)

    return logger
