import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from .config_types import Settings

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration cannot be loaded or validated."""

    pass


def _deep_merge(source: Dict[str, Any], destination: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deeply merge two dictionaries. `source` is merged into `destination`.
    """
    for key, value in source.items():
        if (
            isinstance(value, dict)
            and key in destination
            and isinstance(destination[key], dict)
        ):
            destination[key] = _deep_merge(value, destination[key])
        else:
            destination[key] = value
    return destination


class ConfigurationManager:
    """
    Loads Settings from several sources with Pydantic validation.

    Precedence, lowest first:
    1. Defaults from the Settings model.
    2. A YAML file: the given path, else order-domain.yaml in the working
       directory.
    3. Environment variables prefixed with ORDER_DOMAIN_ (a .env file is
       loaded first if present).
    4. Runtime overrides passed to get_settings().
    """

    DEFAULT_CONFIG_FILES = ["order-domain.yaml", "order-domain.yml"]
    ENV_PREFIX = "ORDER_DOMAIN_"

    def __init__(
        self,
        settings_cls: Type[Settings] = Settings,
        config_file_path: Optional[Union[str, Path]] = None,
        env_prefix: str = ENV_PREFIX,
    ):
        if not (isinstance(settings_cls, type) and issubclass(settings_cls, BaseModel)):
            raise TypeError(f"{settings_cls.__name__} must be a Pydantic BaseModel.")

        self.settings_cls: Type[Settings] = settings_cls
        self.env_prefix: str = env_prefix
        self._dotenv_loaded: bool = False
        self._original_config_file_path = config_file_path
        self._config_file_path: Optional[Path] = self._resolve_config_file_path(
            config_file_path
        )
        self._config: Dict[str, Any] = {}
        self._loaded: bool = False
        self._settings_instance: Optional[Settings] = None

        self._load_dotenv()

    def _load_dotenv(self) -> None:
        """Load a .env file from the working directory, once per instance."""
        if self._dotenv_loaded:
            return
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.is_file():
            load_dotenv(dotenv_path, override=False)
            logger.info(f"Loaded environment variables from .env file: {dotenv_path}")
            self._dotenv_loaded = True

    def reload(self, force: bool = True) -> None:
        """Reload the configuration from all sources, including the .env file."""
        self._dotenv_loaded = False
        self._settings_instance = None
        self._config_file_path = self._resolve_config_file_path(
            self._original_config_file_path
        )
        self._load_dotenv()
        self.load_config(force_reload=force)

    def _resolve_config_file_path(
        self, specific_path: Optional[Union[str, Path]]
    ) -> Optional[Path]:
        """Find the configuration file path."""
        if specific_path:
            p = Path(specific_path)
            if p.is_file():
                logger.debug(f"Using specified configuration file: {p}")
                return p
            logger.warning(f"Specified configuration file not found: {specific_path}")

        search_paths: List[Path] = [
            Path.cwd() / name for name in self.DEFAULT_CONFIG_FILES
        ]
        for path in search_paths:
            if path.is_file():
                logger.debug(f"Found configuration file: {path}")
                return path

        logger.debug("No configuration file found in standard locations.")
        return None

    def load_config(self, force_reload: bool = False) -> None:
        """Load configuration from all sources."""
        if self._loaded and not force_reload:
            return

        self._config = {}
        self._settings_instance = None

        try:
            defaults = self._load_defaults()
            file_config = self._load_from_file()
            env_config = self._load_from_env()
        except ConfigurationError:
            self._loaded = False
            raise

        # Merge with precedence: defaults < file < env
        self._config = defaults
        _deep_merge(file_config, self._config)
        _deep_merge(env_config, self._config)

        self._loaded = True
        logger.debug("Configuration loaded successfully.")

    def _load_defaults(self) -> Dict[str, Any]:
        """Load default values from the Pydantic Settings model."""
        try:
            return self.settings_cls().model_dump()
        except Exception as e:
            logger.error(
                f"Critical error getting defaults from {self.settings_cls.__name__}: {e}"
            )
            raise ConfigurationError(
                f"Could not initialize default settings: {e}"
            ) from e

    def _load_single_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load configuration from a single YAML file."""
        try:
            with open(file_path, "r") as f:
                file_config = yaml.safe_load(f)
        except FileNotFoundError:
            logger.debug(f"Configuration file not found: {file_path}")
            return {}
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {file_path}: {e}")
            raise ConfigurationError(f"Invalid YAML format in {file_path}") from e
        except OSError as e:
            logger.error(f"Error reading configuration file {file_path}: {e}")
            raise ConfigurationError(f"Could not read file {file_path}") from e

        if isinstance(file_config, dict):
            logger.info(f"Loaded configuration from file: {file_path}")
            return file_config
        if file_config is not None:
            logger.warning(
                f"Configuration file {file_path} does not contain a dictionary."
            )
        return {}

    def _load_from_file(self) -> Dict[str, Any]:
        if self._config_file_path is None:
            return {}
        return self._load_single_yaml_file(self._config_file_path)

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}
        model_fields = self.settings_cls.model_fields

        for env_var, value in os.environ.items():
            if not env_var.startswith(self.env_prefix):
                continue

            key = env_var[len(self.env_prefix) :].lower()
            if key not in model_fields:
                continue

            try:
                env_config[key] = self._convert_type(
                    value, model_fields[key].annotation
                )
                logger.debug(f"Loaded env var '{env_var}' as '{key}'.")
            except (ValueError, TypeError) as e:
                logger.warning(f"Could not convert env var {env_var}: {e}")
        return env_config

    def _convert_type(self, value: str, target_type: Any) -> Any:
        """Convert string value to the target type."""
        origin_type = getattr(target_type, "__origin__", None)
        args = getattr(target_type, "__args__", ())

        if target_type is bool:
            return value.lower() in ("true", "1", "yes", "y", "on")
        elif target_type is str:
            return value
        elif target_type is Path:
            return Path(value)
        elif origin_type is Union and type(None) in args:
            non_none_type = next((t for t in args if t is not type(None)), str)
            return self._convert_type(value, non_none_type)
        elif origin_type is dict:
            result: Dict[str, str] = {}
            for item in value.split(","):
                if "=" in item:
                    k, v = item.split("=", 1)
                    result[k.strip()] = v.strip()
            return result

        try:
            return target_type(value)
        except (ValueError, TypeError):
            raise TypeError(
                f"Unsupported type conversion for {target_type} from string."
            )

    def get_settings(self, overrides: Optional[Dict[str, Any]] = None) -> Settings:
        """
        Return the final configuration as a validated Settings object.

        Args:
            overrides: Settings applied on top of all other sources.

        Raises:
            ConfigurationError: If the merged configuration fails validation.
        """
        if overrides is None and self._settings_instance is not None:
            return self._settings_instance

        if not self._loaded:
            self.load_config()

        final_config = dict(self._config)
        if overrides:
            final_config = _deep_merge(overrides, final_config)

        try:
            instance = self.settings_cls.model_validate(final_config)
        except ValidationError as e:
            logger.error(f"Failed to validate final configuration: {e}")
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        if overrides is None:
            self._settings_instance = instance
        logger.debug("Created settings instance from loaded configuration.")
        return instance
