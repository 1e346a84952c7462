"""Utility modules for configuration, logging, and errors."""

from .config import AppConfig, ExtractionConfig, FilterConfig, get_config, load_config, reset_config
from .exceptions import (
    AppException,
    ConfigError,
    ConfigFileNotFoundError,
    ConfigurationError,
    ContentBlockedError,
    MissingRequiredFieldError,
    PageParsingError,
    ScraperError,
    UnknownRegionError,
)
from .logger import get_logger, log_execution_time, set_log_level, set_package_log_level

__all__ = [
    # Configuration
    "AppConfig",
    "ExtractionConfig",
    "FilterConfig",
    "get_config",
    "load_config",
    "reset_config",
    # Errors
    "AppException",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigurationError",
    "ContentBlockedError",
    "MissingRequiredFieldError",
    "PageParsingError",
    "ScraperError",
    "UnknownRegionError",
    # Logging
    "get_logger",
    "log_execution_time",
    "set_log_level",
    "set_package_log_level",
]
