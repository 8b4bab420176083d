"""
Configuration management for repo-man.

Configuration is loaded from:
1. A YAML config file (explicit path, or the first of the standard locations)
2. Environment variables prefixed with REPOMAN_ (nested with "__",
   e.g. REPOMAN_DIAGRAM__TYPE=risk)
3. Default values (lowest priority)

Values from the YAML file are passed to Settings directly, so they win over
environment variables for the keys they set.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from repoman.core.colors import DEFAULT_COLOR, DEFAULT_COLOR_MAPPINGS
from repoman.exceptions import ConfigurationError

CONFIG_PATHS = (
    Path("repoman.yaml"),
    Path("config/repoman.yaml"),
    Path.home() / ".repoman" / "config.yaml",
)


class DiagramSettings(BaseModel):
    """Diagram rendering options."""

    # "size": color by extension only, "risk": shade by relative risk index
    type: Literal["size", "risk"] = "size"
    # "folder": nested folder rectangles, "flat": one row of circles
    layout: Literal["folder", "flat"] = "folder"
    default_color: str = DEFAULT_COLOR


class OutputSettings(BaseModel):
    """Where the rendered SVG goes."""

    path: str = "repo.svg"


class CrawlerSettings(BaseModel):
    """Git crawler options."""

    git_timeout: float = Field(default=120.0, gt=0)  # Seconds per git invocation


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_format: bool = False
    file: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class Settings(BaseSettings):
    """Main settings class that combines all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="REPOMAN_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    diagram: DiagramSettings = Field(default_factory=DiagramSettings)
    colors: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_COLOR_MAPPINGS))
    output: OutputSettings = Field(default_factory=OutputSettings)
    crawler: CrawlerSettings = Field(default_factory=CrawlerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("colors")
    @classmethod
    def merge_default_colors(cls, v: dict[str, str]) -> dict[str, str]:
        # Configured keys extend and override the built-in table
        return {**DEFAULT_COLOR_MAPPINGS, **v}


def find_config_file() -> Path | None:
    """First existing config file in the standard locations."""
    for candidate in CONFIG_PATHS:
        if candidate.exists():
            return candidate
    return None


def load_yaml_config(path: Path | None = None) -> dict:
    """
    Load configuration from YAML file.

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    if path is None:
        path = find_config_file()

    if path is None or not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError("Invalid YAML in config file", config_path=str(path)) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Config file must contain a mapping at the top level",
            config_path=str(path),
        )
    return data


def load_settings(path: Path | None = None) -> Settings:
    """
    Build settings from a config file (uncached).

    Raises:
        ConfigurationError: If the file or any value is invalid
    """
    yaml_config = load_yaml_config(path)
    try:
        return Settings(**yaml_config)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid configuration",
            config_path=str(path) if path else None,
            details={"errors": e.error_count()},
            context=str(e),
        ) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()


def reload_settings() -> Settings:
    """Force reload of settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
