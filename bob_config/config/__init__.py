"""Configuration loading and schema.

- One optional file, TOML (``.toml``) or JSON (anything else)
- A missing or unreadable file yields an all-unset Config
- ``$NAME`` placeholders in path/mirror settings are resolved from the environment
"""

from __future__ import annotations

from bob_config.config.env import substitute_env, substitute_placeholder
from bob_config.config.errors import ConfigError, ConfigParseError
from bob_config.config.loader import load_config, load_config_async, parse_config
from bob_config.config.model import SUBSTITUTABLE_FIELDS, Config, ConfigFormat

__all__ = [
    "SUBSTITUTABLE_FIELDS",
    "Config",
    "ConfigError",
    "ConfigFormat",
    "ConfigParseError",
    "load_config",
    "load_config_async",
    "parse_config",
    "substitute_env",
    "substitute_placeholder",
]
