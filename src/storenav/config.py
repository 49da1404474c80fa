"""
Configuration management.

Settings are read from environment variables prefixed with STORENAV_ (and an
optional .env file), validated by pydantic, and turned into a
ConfigurationError when invalid.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.enums import Algorithm
from .core.exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Runtime settings for the navigator server and CLI."""

    # === Storage ===
    data_dir: Path = Field(default=Path("data"), description="Directory for graph.json and stores.json")

    # === Server ===
    host: str = Field(default="127.0.0.1", description="Server bind address")
    port: int = Field(default=5000, ge=0, le=65535, description="Server port, 0 picks a free port")

    # === Path finding ===
    algorithm: Algorithm = Field(default=Algorithm.DIJKSTRA, description="Initial path finding algorithm")
    query_timeout: Optional[float] = Field(
        default=None, gt=0, description="Default query timeout in seconds, unbounded if unset"
    )
    cache_size: int = Field(default=256, ge=0, description="Shortest path cache entries, 0 disables")
    cache_ttl: float = Field(default=300.0, gt=0, description="Shortest path cache TTL in seconds")

    # === Logging ===
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_prefix="STORENAV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("algorithm", mode="before")
    @classmethod
    def parse_algorithm(cls, v):
        try:
            return Algorithm.parse(v)
        except ConfigurationError as e:
            raise ValueError(str(e)) from e

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {sorted(valid_levels)}")
        return v.upper()

    @property
    def logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return {"level": self.log_level, "format": LOG_FORMAT}


def load_settings(**overrides: Any) -> Settings:
    """
    Build settings from the environment, with explicit overrides on top.

    Raises:
        ConfigurationError: If a value fails validation
    """
    try:
        return Settings(**{key: value for key, value in overrides.items() if value is not None})
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for an entry point."""
    logging.basicConfig(**settings.logging_config)
