"""Configuration management for Expensi."""

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

_ROUNDING_MODES = {
    "half_up": ROUND_HALF_UP,
    "half_even": ROUND_HALF_EVEN,
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Settlement settings
    settle_epsilon: Decimal = Field(default=Decimal("0.01"), gt=0)
    decimal_places: int = Field(default=2, ge=0, le=8)
    rounding: Literal["half_up", "half_even"] = "half_up"
    strict_zero_sum: bool = False  # Reject imbalanced ledgers before simplifying

    # Display settings
    currency: str = "USD"
    currency_symbol: str = "$"

    @property
    def rounding_mode(self) -> str:
        """The decimal module rounding constant for the configured rule."""
        return _ROUNDING_MODES[self.rounding]


def load_settings(**overrides) -> Settings:
    """Load application settings from environment variables."""
    try:
        return Settings(**overrides)
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load settings. Check the EXPENSI_* environment variables "
            f"and your .env file.\n"
            f"Error: {e}"
        ) from e
