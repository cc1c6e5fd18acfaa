#!/usr/bin/env python3

"""
Configuration Schema Definitions.

This module defines type-safe configuration schemas using dataclasses,
validated on construction. Values come from defaults, then the config file,
then environment variables (see config_manager).
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Optional

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class ValidationRule:
    """Configuration validation rule."""

    field_name: str
    validator: Callable[[Any], bool]
    error_message: str
    required: bool = True


class ConfigValidator:
    """Configuration validator with custom rules."""

    def __init__(self, rules: Optional[list[ValidationRule]] = None) -> None:
        self.rules: list[ValidationRule] = list(rules or [])

    def add_rule(self, rule: ValidationRule) -> None:
        """Add a validation rule."""
        self.rules.append(rule)

    def _validate_single_rule(self, config: Any, rule: ValidationRule) -> Optional[str]:
        """Validate a single rule against config. Returns error message or None."""
        if hasattr(config, rule.field_name):
            value = getattr(config, rule.field_name)
            if value is None and rule.required:
                return f"Required field {rule.field_name} is missing"
            if value is not None and not rule.validator(value):
                return rule.error_message
        elif rule.required:
            return f"Required field {rule.field_name} is missing"
        return None

    def validate(self, config: Any) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []
        for rule in self.rules:
            error = self._validate_single_rule(config, rule)
            if error:
                errors.append(error)
        return errors

    def raise_for_errors(self, config: Any) -> None:
        errors = self.validate(config)
        if errors:
            raise ValueError("; ".join(errors))


def _is_positive(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _is_non_negative(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0


def _is_window_size(value: Any) -> bool:
    parts = str(value).split(",")
    return len(parts) == 2 and all(part.strip().isdigit() for part in parts)


_SELENIUM_RULES = [
    ValidationRule("browser", lambda v: bool(str(v).strip()), "browser must not be empty"),
    ValidationRule("os", lambda v: bool(str(v).strip()), "os must not be empty"),
    ValidationRule("implicit_wait", _is_non_negative, "implicit_wait must be non-negative"),
    ValidationRule("page_load_timeout", _is_positive, "page_load_timeout must be positive"),
    ValidationRule("default_timeout", _is_positive, "default_timeout must be positive"),
    ValidationRule("poll_interval", _is_positive, "poll_interval must be positive"),
    ValidationRule("max_retries", _is_non_negative, "max_retries must be non-negative"),
    ValidationRule("retry_delay", _is_non_negative, "retry_delay must be non-negative"),
    ValidationRule("window_size", _is_window_size, "window_size must be in format 'width,height'", required=False),
]


@dataclass
class SeleniumConfig:
    """Selenium/WebDriver configuration schema."""

    # Target browser
    browser: str = "chrome"
    os: str = "windows"
    remote_url: Optional[str] = None

    # Browser behavior
    headless: bool = False
    download_dir: Optional[Path] = None
    window_size: Optional[str] = "1920,1080"

    # Timeouts (seconds)
    implicit_wait: float = 0
    page_load_timeout: float = 30
    default_timeout: float = 10
    poll_interval: float = 0.2

    # Retry settings
    max_retries: int = 3
    retry_delay: float = 5

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.download_dir is not None and not isinstance(self.download_dir, Path):
            self.download_dir = Path(self.download_dir)
        ConfigValidator(_SELENIUM_RULES).raise_for_errors(self)

    @property
    def window_dimensions(self) -> Optional[tuple[int, int]]:
        if not self.window_size:
            return None
        width, height = (int(part) for part in self.window_size.split(","))
        return width, height


@dataclass
class APIConfig:
    """API configuration schema."""

    base_url: Optional[str] = None

    # Request settings
    timeout: float = 30
    max_retries: int = 3
    backoff_factor: float = 0.5
    verify_ssl: bool = True
    retry_status_codes: list[int] = field(default_factory=lambda: [429, 500, 502, 503, 504])

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.base_url and not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.backoff_factor < 0:
            raise ValueError("backoff_factor must be non-negative")


@dataclass
class LoggingConfig:
    """Logging configuration schema."""

    log_level: str = "INFO"
    log_file: Optional[Path] = None
    max_log_size_mb: int = 10
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.log_level = str(self.log_level).upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {VALID_LOG_LEVELS}")
        if self.log_file is not None and not isinstance(self.log_file, Path):
            self.log_file = Path(self.log_file)
        if self.max_log_size_mb <= 0:
            raise ValueError("max_log_size_mb must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must be non-negative")


_SECTIONS: dict[str, type] = {
    "selenium": SeleniumConfig,
    "api": APIConfig,
    "logging": LoggingConfig,
}


@dataclass
class ConfigSchema:
    """Main configuration schema that combines all sub-schemas."""

    environment: str = "default"
    debug_mode: bool = False

    selenium: SeleniumConfig = field(default_factory=SeleniumConfig)
    api: APIConfig = field(default_factory=APIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.environment or not str(self.environment).strip():
            raise ValueError("environment must not be empty")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        result: dict[str, Any] = {}
        for schema_field in fields(self):
            value = getattr(self, schema_field.name)
            if hasattr(value, "__dataclass_fields__"):
                result[schema_field.name] = {sub.name: getattr(value, sub.name) for sub in fields(value)}
            else:
                result[schema_field.name] = value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConfigSchema":
        """Create configuration from dictionary. Unknown keys raise ValueError."""
        sections: dict[str, Any] = {}
        for name, section_cls in _SECTIONS.items():
            section_data = data.get(name) or {}
            known = {f.name for f in fields(section_cls)}
            unknown = set(section_data) - known
            if unknown:
                raise ValueError(f"Unknown {name} settings: {sorted(unknown)}")
            sections[name] = section_cls(**section_data)

        main_data = {k: v for k, v in data.items() if k not in _SECTIONS}
        known_main = {f.name for f in fields(cls)} - set(_SECTIONS)
        unknown_main = set(main_data) - known_main
        if unknown_main:
            raise ValueError(f"Unknown settings: {sorted(unknown_main)}")

        return cls(**sections, **main_data)

    def validate(self) -> list[str]:
        """
        Validate the entire configuration.

        Returns:
            List of validation error messages
        """
        errors = []
        try:
            # Re-run each sub-config's __post_init__
            for name, section_cls in _SECTIONS.items():
                section_cls(**getattr(self, name).__dict__)
            self.__post_init__()
        except ValueError as e:
            errors.append(str(e))
        return errors
