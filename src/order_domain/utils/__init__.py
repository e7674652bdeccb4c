"""Configuration and logging utilities for hosts embedding order_domain."""

from .configuration import ConfigurationError, ConfigurationManager
from .logging_config import configure_logging
from .settings import Settings, get_config_manager, load_settings

__all__ = [
    "ConfigurationError",
    "ConfigurationManager",
    "Settings",
    "configure_logging",
    "get_config_manager",
    "load_settings",
]
