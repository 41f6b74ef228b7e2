"""Configuration module for modelprices."""

from modelprices.config.loader import get_config_path, load_config
from modelprices.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path"]
