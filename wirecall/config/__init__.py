"""Configuration module for wirecall."""

from wirecall.config.loader import get_config_path, load_config, save_config
from wirecall.config.schema import Config
from wirecall.config.access import get_config, clear_config_cache

__all__ = ["Config", "load_config", "save_config", "get_config_path", "get_config", "clear_config_cache"]
