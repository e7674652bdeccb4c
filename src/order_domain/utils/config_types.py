# This file defines the structure of configuration objects using Pydantic.
# It is kept separate from configuration.py to avoid circular imports.

from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..core.domain.value_objects.currency import Currency

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseModel):
    """
    Configuration settings for hosts embedding the order domain.

    The domain entities never read settings themselves. A host that wants a
    configured currency for the zero total of an order without lines passes
    ``default_currency`` to ``Order.calculate_total``.
    """

    # Logging settings
    log_level: str = "INFO"  # Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_file: Optional[Path] = None  # Optional rotating log file
    structured_logging: bool = False  # Emit JSON log records
    module_levels: Dict[str, str] = Field(default_factory=dict)

    # Domain settings
    default_currency: Currency = Currency.USD  # Currency of an empty order total

    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        normalized = v.upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: '{v}'. Must be one of {sorted(VALID_LOG_LEVELS)}"
            )
        return normalized

    @field_validator("module_levels")
    @classmethod
    def validate_module_levels(cls, v: Dict[str, str]) -> Dict[str, str]:
        for module_name, level in v.items():
            if level.upper() not in VALID_LOG_LEVELS:
                raise ValueError(
                    f"Invalid level '{level}' for module '{module_name}'"
                )
        return {name: level.upper() for name, level in v.items()}

    @model_validator(mode="after")
    def sync_debug_and_log_level(self) -> "Settings":
        """Keep the debug flag and log_level consistent."""
        if self.debug and self.log_level != "DEBUG":
            self.log_level = "DEBUG"
        elif self.log_level == "DEBUG" and not self.debug:
            self.debug = True
        return self
