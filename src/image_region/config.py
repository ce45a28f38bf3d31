"""
Configuration management using Pydantic for the Image Region Service.
Provides type-safe configuration with validation and environment variable support.
"""

import importlib
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, List, Optional

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from image_region.common.constants import APIConstants, RenderingConstants, SystemConstants

logger = logging.getLogger(__name__)


class RenderingConfig(BaseSettings):
    """Rendering engine configuration."""

    model_config = SettingsConfigDict(env_prefix="MV_RENDERING_", extra="ignore")

    client_factory: Optional[str] = Field(
        default=None,
        description="Import path 'package.module:callable' returning a RenderingClient",
    )
    default_compression_quality: float = Field(
        default=RenderingConstants.DEFAULT_COMPRESSION_QUALITY,
        ge=RenderingConstants.MIN_COMPRESSION_QUALITY,
        le=RenderingConstants.MAX_COMPRESSION_QUALITY,
        description="Compression quality used when a request does not set one",
    )
    query_group: str = Field(
        default=RenderingConstants.ALL_GROUPS,
        description="Group context for image lookups, -1 for all groups",
    )

    @field_validator("client_factory")
    @classmethod
    def validate_client_factory(cls, v):
        """Ensure the factory path names a module and an attribute."""
        if v is not None and ":" not in v:
            raise ValueError(f"Invalid client factory {v!r}, expected 'package.module:callable'")
        return v

    def load_client_factory(self) -> Optional[Callable[[], Any]]:
        """
        Import the configured client factory.

        Returns:
            The factory callable, or None if none is configured
        """
        if self.client_factory is None:
            return None
        module_name, _, attr = self.client_factory.partition(":")
        module = importlib.import_module(module_name)
        return getattr(module, attr)


class APIConfig(BaseSettings):
    """API configuration."""

    model_config = SettingsConfigDict(env_prefix="MV_API_", extra="ignore")

    host: str = Field(default="0.0.0.0", description="API host address")
    port: int = Field(default=8080, ge=1, le=65535, description="API port")
    api_version: str = Field(default=APIConstants.API_VERSION, description="API version")
    cors_enabled: bool = Field(default=True, description="Enable CORS")
    cors_origins: List[str] = Field(default=["*"], description="CORS allowed origins")
    not_found_status_code: int = Field(
        default=APIConstants.NOT_FOUND_STATUS_CODE,
        ge=400,
        le=599,
        description="Status returned when the image does not exist",
    )
    failure_status_code: int = Field(
        default=APIConstants.FAILURE_STATUS_CODE,
        ge=400,
        le=599,
        description="Status returned when rendering fails",
    )


class SystemConfig(BaseSettings):
    """System configuration."""

    model_config = SettingsConfigDict(env_prefix="MV_SYSTEM_", extra="ignore")

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default=SystemConstants.LOG_LEVEL_DEFAULT, description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MV_", case_sensitive=False, env_nested_delimiter="__", extra="ignore"
    )

    # Sub-configurations
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)

    environment: str = Field(
        default="production", description="Environment (development, staging, production)"
    )

    config_file: Optional[str] = Field(default=None, description="Path to YAML config file")

    @model_validator(mode="before")
    @classmethod
    def load_config_file(cls, values):
        """Load configuration from YAML file if specified."""
        if not isinstance(values, dict):
            return values
        config_file = values.get("config_file") or os.getenv("MV_CONFIG_FILE")

        if config_file and Path(config_file).exists():
            try:
                with open(config_file, "r") as f:
                    file_config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config file {config_file}: {e}")
                return values
            if file_config:
                # Env vars and explicit values take precedence
                for key, value in file_config.items():
                    if key not in values or values[key] is None:
                        values[key] = value

        return values

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_envs = ["development", "staging", "production", "test"]
        if v not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of {valid_envs}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with validated configuration
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Reload settings, clearing the cache.

    Returns:
        Fresh Settings object
    """
    get_settings.cache_clear()
    return get_settings()
