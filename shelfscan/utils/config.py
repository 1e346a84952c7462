"""Configuration management using Pydantic v2 and YAML.

This module provides type-safe configuration loading with validation
for shelfscan. The loaded configuration is read-only by convention and
is passed into parsers and filter chains rather than read globally.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigFileNotFoundError, ConfigurationError

CONFIG_ENV = "SHELFSCAN_CONFIG"


class ExtractionConfig(BaseModel):
    """Phrase lists and placeholders used while reading pages."""

    hidden_price_phrases: list[str] = Field(
        default_factory=lambda: ["see price", "cart"],
        description="Price text containing any of these means the price is only shown in the cart",
    )
    in_stock_phrases: list[str] = Field(
        default_factory=lambda: ["in stock", "available"],
        description="Availability text containing any of these means the product is in stock",
    )
    out_of_stock_phrases: list[str] = Field(
        default_factory=lambda: ["unavailable", "out of stock"],
        description="Availability text containing any of these means the product is not in stock, checked first",
    )
    unknown_title: str = Field(default="Unknown", description="Title used for cards without one")

    @field_validator('hidden_price_phrases', 'in_stock_phrases', 'out_of_stock_phrases')
    @classmethod
    def validate_phrases(cls, v: list[str]) -> list[str]:
        """Drop blank phrases and require at least one."""
        phrases = [p.strip() for p in v if p and p.strip()]
        if not phrases:
            raise ValueError("At least one phrase is required")
        return phrases


class FilterConfig(BaseModel):
    """Default filter settings applied to extracted products."""

    min_price: Optional[float] = Field(default=None, ge=0.0, description="Minimum visible price")
    max_price: Optional[float] = Field(default=None, ge=0.0, description="Maximum visible price")
    min_rating: Optional[float] = Field(default=None, ge=0.0, le=5.0, description="Minimum star rating")
    prime_only: bool = Field(default=False, description="Keep only Prime-eligible products")
    no_sponsored: bool = Field(default=False, description="Drop sponsored listings")
    keywords: list[str] = Field(default_factory=list, description="Words that must appear in the title")
    exclude_keywords: list[str] = Field(default_factory=list, description="Words that must not appear in the title")

    @model_validator(mode='after')
    def validate_price_bounds(self) -> 'FilterConfig':
        """Ensure min_price does not exceed max_price."""
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError(
                f"min_price ({self.min_price}) must not exceed max_price ({self.max_price})"
            )
        return self


class AppConfig(BaseModel):
    """Root configuration model containing all sub-configurations."""

    region: str = Field(default="us", description="Default storefront region code")
    log_level: str = Field(default="INFO", description="Logging level")
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)

    @field_validator('region')
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Normalize aliases like 'germany' to their region code."""
        from shelfscan.scraper.regions import Region

        return Region.parse(v).value

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Choose from: {valid_levels}")
        return v_upper

    @classmethod
    def from_yaml(cls, path: Path | str) -> 'AppConfig':
        """Load and validate a configuration file."""
        return load_config(path)


# Singleton pattern for configuration
_config: Optional[AppConfig] = None


def _default_config_path() -> Path:
    env_config_path = os.environ.get(CONFIG_ENV)
    if env_config_path:
        return Path(env_config_path)
    return Path.cwd() / "config" / "config.yaml"


def load_config(config_path: Optional[Path | str] = None) -> AppConfig:
    """Load and validate configuration from a YAML file.

    Args:
        config_path: Path to configuration file. Defaults to the
                     SHELFSCAN_CONFIG env var, then config/config.yaml
                     under the working directory.

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigFileNotFoundError: If the config file doesn't exist
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    config_path = Path(config_path) if config_path is not None else _default_config_path()

    if not config_path.exists():
        example_path = config_path.parent / "config.example.yaml"
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {config_path}. "
            f"Copy {example_path} to {config_path} or set {CONFIG_ENV}.",
            path=str(config_path),
        )

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_dict = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Could not parse YAML in {config_path}: {e}",
            context={"path": str(config_path)},
        ) from e

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration root must be a mapping: {config_path}",
            context={"path": str(config_path)},
        )

    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {config_path}: {e}",
            context={"path": str(config_path)},
        ) from e


def get_config(config_path: Optional[Path | str] = None, reload: bool = False) -> AppConfig:
    """Get configuration instance (singleton pattern).

    Falls back to defaults when no file is given and the default path
    does not exist.

    Args:
        config_path: Path to configuration file (only used on first call or if reload=True)
        reload: Force reload of configuration

    Returns:
        Cached or newly loaded AppConfig instance
    """
    global _config

    if _config is None or reload:
        if config_path is None and not _default_config_path().exists():
            _config = AppConfig()
        else:
            _config = load_config(config_path)

    return _config


def reset_config() -> None:
    """Reset cached configuration (useful for testing)."""
    global _config
    _config = None
