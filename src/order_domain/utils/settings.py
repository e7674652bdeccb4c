import logging
from pathlib import Path
from typing import Optional, Union

from .config_types import Settings
from .configuration import ConfigurationError, ConfigurationManager

logger = logging.getLogger(__name__)

__all__ = [
    "ConfigurationError",
    "Settings",
    "get_config_manager",
    "load_settings",
]

# Single manager shared by the process.
_config_manager_instance: Optional[ConfigurationManager] = None


def get_config_manager(
    config_file: Optional[Union[str, Path]] = None, force_reload: bool = False
) -> ConfigurationManager:
    """
    Get the global ConfigurationManager instance, initializing or reloading as needed.

    Args:
        config_file: Optional path to a specific config file, used when the
                     manager is created or reloaded.
        force_reload: If True, re-create the manager and reload all sources.
    """
    global _config_manager_instance

    if _config_manager_instance is None or force_reload:
        logger.debug(
            f"Initializing or reloading ConfigurationManager (force_reload={force_reload})."
        )
        _config_manager_instance = ConfigurationManager(
            settings_cls=Settings,
            config_file_path=config_file,
        )
        _config_manager_instance.load_config(force_reload=force_reload)
    elif config_file is not None:
        logger.warning(
            f"get_config_manager called with config_file='{config_file}' but "
            f"force_reload=False. Returning existing manager instance."
        )

    return _config_manager_instance


def load_settings(
    config_file: Optional[Union[str, Path]] = None,
    force_reload: bool = False,
    debug: bool = False,
) -> Settings:
    """
    Load settings using the process-wide ConfigurationManager.

    Args:
        config_file: Optional path to a specific configuration file to use.
        force_reload: If True, reload from all sources before returning.
        debug: If True, force the DEBUG log level.
    """
    manager = get_config_manager(config_file=config_file, force_reload=force_reload)
    overrides = {"debug": True} if debug else None
    return manager.get_settings(overrides=overrides)
