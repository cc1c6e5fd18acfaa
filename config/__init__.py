"""
Configuration Package - Schema-based Configuration System

Main components:
- ConfigManager: Handles configuration loading (defaults, file, environment) and validation
- ConfigSchema: Type-safe configuration schemas with validation
"""

from config.config_manager import ConfigManager, get_config_manager
from config.config_schema import APIConfig, ConfigSchema, LoggingConfig, SeleniumConfig

__all__ = [
    "APIConfig",
    "ConfigManager",
    "ConfigSchema",
    "LoggingConfig",
    "SeleniumConfig",
    "get_config_manager",
]
