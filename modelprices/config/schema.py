"""Configuration schema using Pydantic."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from modelprices.catalog.source import DEFAULT_URL


class Base(BaseModel):
    """Sections are written in camelCase; snake_case keys are accepted too."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SourceConfig(Base):
    """Where the pricing document comes from."""
    location: str = DEFAULT_URL  # File path or http(s) URL
    timeout: float = 30.0  # Seconds, HTTP only


class QueryConfig(Base):
    """Defaults for the list and cost commands."""
    default_volume: int = 1_000_000  # Tokens (or images/seconds) per quoted price
    default_limit: int = 20


class LoggingConfig(Base):
    """Logging configuration."""
    level: str = "WARNING"
    file_enabled: bool = False
    file_path: str = "~/.modelprices/logs/modelprices.log"
    rotation: str = "10 MB"
    retention: str = "7 days"


class Config(BaseSettings):
    """Root configuration for modelprices."""
    model_config = SettingsConfigDict(env_prefix="MODELPRICES_", env_nested_delimiter="__")

    source: SourceConfig = Field(default_factory=SourceConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
