"""Configuration management using Pydantic Settings."""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from related_content.exceptions import ConfigError

# Load environment variables from .env file
load_dotenv()


class CatalogConfig(BaseModel):
    """Static content catalog configuration."""

    sources: list[str] = Field(default_factory=list)  # File paths or http(s) URLs
    http_timeout: float = 30.0


class DatabaseConfig(BaseModel):
    """Live post database configuration."""

    path: str = ""  # Empty disables database lookups

    @property
    def enabled(self) -> bool:
        return bool(self.path)


class RelatedConfig(BaseModel):
    """Related-article selection configuration."""

    default_count: int = Field(default=3, ge=0)
    db_timeout_seconds: float = Field(default=3.0, gt=0)
    db_fetch_multiplier: int = Field(default=2, ge=1)  # Over-fetch when merging with static


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="RELATED_CONTENT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    related: RelatedConfig = Field(default_factory=RelatedConfig)

    @property
    def database_file(self) -> Path | None:
        if not self.database.enabled:
            return None
        return Path(self.database.path).expanduser()


def _interpolate_env_vars(data: Any) -> Any:
    """Recursively interpolate ${VAR} patterns with environment variables."""
    if isinstance(data, str):
        if data.startswith("${") and data.endswith("}"):
            var_name = data[2:-1]
            return os.environ.get(var_name, "")
        return data
    elif isinstance(data, dict):
        return {k: _interpolate_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_interpolate_env_vars(item) for item in data]
    return data


def load_config(config_path: Path | None = None) -> Settings:
    """Load configuration from YAML file with env var interpolation."""
    if config_path is None:
        # Check current directory first, then home directory
        local_config = Path("config.yaml")
        if local_config.exists():
            config_path = local_config
        else:
            config_path = Path.home() / ".related-content" / "config.yaml"

    if not config_path.exists():
        # Return defaults if no config file
        return Settings()

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Config file must contain a mapping: {config_path}")

    config_data = _interpolate_env_vars(raw_config)

    # A bare list under "catalog" is shorthand for catalog.sources
    if isinstance(config_data.get("catalog"), list):
        config_data["catalog"] = {"sources": config_data["catalog"]}

    try:
        return Settings(**config_data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


# Global settings instance (lazy loaded)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings
