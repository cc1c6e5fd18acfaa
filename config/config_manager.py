#!/usr/bin/env python3

"""
Configuration Manager.

Loads the framework configuration from three layers, later layers winning:

1. Schema defaults
2. Configuration file (JSON or YAML). A file may hold an ``environments``
   section whose entry for the active environment overrides the top level:

       selenium:
         browser: chrome
       environments:
         qa:
           selenium:
             remote_url: http://grid.qa:4444/wd/hub

3. Environment variables (``BROWSER``, ``OS``, ``HEADLESS_MODE``, ...), with
   a ``.env`` file loaded through python-dotenv first.
"""

# === CORE INFRASTRUCTURE ===
import logging
import os

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
import copy
import json
from pathlib import Path
from typing import Any, Optional, Union

# === THIRD-PARTY IMPORTS ===
import yaml
from dotenv import load_dotenv

# === LOCAL IMPORTS ===
from config.config_schema import APIConfig, ConfigSchema, LoggingConfig, SeleniumConfig
from core.exceptions import ConfigurationError

DEFAULT_CONFIG_FILE = Path("conf") / "sentinel.yml"
DEFAULT_ENVIRONMENT = "default"
_TRUE_VALUES = {"true", "1", "yes", "on"}


class _ConfigManagerSingleton:
    """Container class for singleton instance to avoid global statement."""

    instance: Optional["ConfigManager"] = None


def get_config_manager(
    config_file: Optional[Union[str, Path]] = None,
    environment: Optional[str] = None,
    force_new: bool = False,
) -> "ConfigManager":
    """
    Get the shared ConfigManager instance.

    Args:
        config_file: Optional configuration file path (only used on first call)
        environment: Environment name (only used on first call)
        force_new: If True, create a new instance (for testing only)
    """
    if force_new or _ConfigManagerSingleton.instance is None:
        _ConfigManagerSingleton.instance = ConfigManager(config_file=config_file, environment=environment)
    return _ConfigManagerSingleton.instance


class ConfigManager:
    """
    Configuration manager with type-safe schemas and validation.

    Usage:
        from config.config_manager import get_config_manager
        config = get_config_manager().get_config()
        config.selenium.browser
    """

    _supported_formats = frozenset({".json", ".yaml", ".yml"})

    def __init__(
        self,
        config_file: Optional[Union[str, Path]] = None,
        environment: Optional[str] = None,
        auto_load: bool = True,
    ) -> None:
        # Load .env file (unless explicitly skipped for tests)
        skip_dotenv = os.getenv("CONFIG_SKIP_DOTENV", "").strip().lower()
        if skip_dotenv not in _TRUE_VALUES:
            load_dotenv()

        self._explicit_file = config_file is not None or bool(os.getenv("CONFIG_FILE"))
        self.config_file = Path(config_file or os.getenv("CONFIG_FILE") or DEFAULT_CONFIG_FILE)
        self.environment = environment or os.getenv("ENVIRONMENT") or DEFAULT_ENVIRONMENT
        self._config_cache: Optional[ConfigSchema] = None
        self._file_modification_time: Optional[float] = None

        if auto_load:
            self.load_config()

    def load_config(self) -> ConfigSchema:
        """
        Load and validate configuration from all sources.

        Raises:
            ConfigurationError: If the file cannot be read or validation fails
        """
        logger.debug(f"Loading configuration for environment: {self.environment}")

        config_data = self._get_default_config()

        file_config = self._load_config_file()
        environments = file_config.pop("environments", None) or {}
        config_data = self._merge_configs(config_data, file_config)
        if self.environment in environments:
            config_data = self._merge_configs(config_data, environments[self.environment] or {})
        elif environments and self.environment != DEFAULT_ENVIRONMENT:
            logger.warning(f"No '{self.environment}' section in {self.config_file}; using top-level settings")

        config_data = self._merge_configs(config_data, self._load_environment_variables())
        config_data["environment"] = self.environment

        try:
            config = ConfigSchema.from_dict(config_data)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigurationError(f"Configuration loading failed: {e}", context={"file": str(self.config_file)}) from e

        validation_errors = config.validate()
        if validation_errors:
            logger.error(f"Configuration validation failed: {validation_errors}")
            raise ConfigurationError(f"Configuration validation failed: {validation_errors}")

        self._config_cache = config
        if self.config_file.exists():
            self._file_modification_time = self.config_file.stat().st_mtime

        logger.debug(f"Configuration loaded successfully for environment: {self.environment}")
        return config

    def get_config(self, reload_if_changed: bool = True) -> ConfigSchema:
        """Get the current configuration, reloading when the file changed."""
        if reload_if_changed and self._should_reload():
            logger.info("Configuration file changed, reloading...")
            return self.load_config()

        if self._config_cache is None:
            return self.load_config()

        return self._config_cache

    def reload_config(self) -> ConfigSchema:
        """Force reload configuration from all sources."""
        self._config_cache = None
        self._file_modification_time = None
        return self.load_config()

    def get_selenium_config(self) -> SeleniumConfig:
        return self.get_config().selenium

    def get_api_config(self) -> APIConfig:
        return self.get_config().api

    def get_logging_config(self) -> LoggingConfig:
        return self.get_config().logging

    @staticmethod
    def _get_default_config() -> dict[str, Any]:
        return ConfigSchema().to_dict()

    def _load_config_file(self) -> dict[str, Any]:
        """Load configuration from file."""
        if not self.config_file.exists():
            if self._explicit_file:
                logger.error(f"Configuration file not found: {self.config_file}")
                raise ConfigurationError(
                    f"Configuration file not found: {self.config_file}",
                    recovery_hint="Check the path passed as config_file or set in CONFIG_FILE",
                )
            return {}

        suffix = self.config_file.suffix.lower()
        if suffix not in self._supported_formats:
            raise ConfigurationError(f"Unsupported config file format: {suffix}")

        try:
            with self.config_file.open(encoding="utf-8") as f:
                data = json.load(f) if suffix == ".json" else yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config file {self.config_file}: {e}")
            raise ConfigurationError(f"Could not parse {self.config_file}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {self.config_file} must be a mapping")
        return data

    @staticmethod
    def _set_string_config(config: dict[str, Any], section: str, key: str, env_var: str) -> None:
        """Set a string configuration value from environment variable."""
        value = os.getenv(env_var)
        if value:
            config.setdefault(section, {})[key] = value

    @staticmethod
    def _set_int_config(config: dict[str, Any], section: str, key: str, env_var: str) -> None:
        """Set an integer configuration value from environment variable."""
        value = os.getenv(env_var)
        if value:
            try:
                config.setdefault(section, {})[key] = int(value)
            except ValueError:
                logger.warning(f"Invalid {env_var} value: {value}")

    @staticmethod
    def _set_float_config(config: dict[str, Any], section: str, key: str, env_var: str) -> None:
        """Set a float configuration value from environment variable."""
        value = os.getenv(env_var)
        if value:
            try:
                config.setdefault(section, {})[key] = float(value)
            except ValueError:
                logger.warning(f"Invalid {env_var} value: {value}")

    @staticmethod
    def _set_bool_config(config: dict[str, Any], section: str, key: str, env_var: str) -> None:
        """Set a boolean configuration value from environment variable."""
        value = os.getenv(env_var)
        if value is not None and value.strip():
            config.setdefault(section, {})[key] = value.strip().lower() in _TRUE_VALUES

    def _load_selenium_config_from_env(self, config: dict[str, Any]) -> None:
        self._set_string_config(config, "selenium", "browser", "BROWSER")
        self._set_string_config(config, "selenium", "os", "OS")
        self._set_string_config(config, "selenium", "remote_url", "REMOTE_URL")
        self._set_string_config(config, "selenium", "download_dir", "DOWNLOAD_DIR")
        self._set_string_config(config, "selenium", "window_size", "WINDOW_SIZE")
        self._set_bool_config(config, "selenium", "headless", "HEADLESS_MODE")
        self._set_float_config(config, "selenium", "default_timeout", "DEFAULT_TIMEOUT")
        self._set_float_config(config, "selenium", "page_load_timeout", "PAGE_LOAD_TIMEOUT")
        self._set_float_config(config, "selenium", "implicit_wait", "IMPLICIT_WAIT")
        self._set_int_config(config, "selenium", "max_retries", "BROWSER_MAX_RETRIES")

    def _load_api_config_from_env(self, config: dict[str, Any]) -> None:
        self._set_string_config(config, "api", "base_url", "API_BASE_URL")
        self._set_float_config(config, "api", "timeout", "API_TIMEOUT")
        self._set_int_config(config, "api", "max_retries", "API_MAX_RETRIES")
        self._set_bool_config(config, "api", "verify_ssl", "API_VERIFY_SSL")

    def _load_logging_config_from_env(self, config: dict[str, Any]) -> None:
        self._set_string_config(config, "logging", "log_level", "LOG_LEVEL")
        self._set_string_config(config, "logging", "log_file", "LOG_FILE")

    def _load_environment_variables(self) -> dict[str, Any]:
        """Load configuration from environment variables."""
        config: dict[str, Any] = {}
        self._load_selenium_config_from_env(config)
        self._load_api_config_from_env(config)
        self._load_logging_config_from_env(config)
        debug_mode = os.getenv("DEBUG_MODE")
        if debug_mode is not None and debug_mode.strip():
            config["debug_mode"] = debug_mode.strip().lower() in _TRUE_VALUES
        return config

    def _merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep-merge ``override`` into a copy of ``base``."""
        result = copy.deepcopy(base)

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _should_reload(self) -> bool:
        """Check if configuration should be reloaded."""
        if not self.config_file.exists():
            return False

        if self._file_modification_time is None:
            return True

        current_mtime = self.config_file.stat().st_mtime
        return current_mtime > self._file_modification_time
