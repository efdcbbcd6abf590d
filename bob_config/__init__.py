"""Configuration loading for the bob Neovim version manager."""

from bob_config.config import Config, ConfigError, ConfigFormat, ConfigParseError, load_config

__all__ = ["Config", "ConfigError", "ConfigFormat", "ConfigParseError", "load_config"]
