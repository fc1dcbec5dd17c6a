"""Configuration module — exports Settings, load_config and settings_from_config."""

from listening_to.config.loader import load_config, settings_from_config
from listening_to.config.settings import Settings

__all__ = ["Settings", "load_config", "settings_from_config"]
