from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bob_config.config.model import ConfigFormat


class ConfigError(RuntimeError):
    """Raised when a present config file cannot be turned into a Config."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.message = message
        self.path = path


class ConfigParseError(ConfigError):
    """The file exists and is readable but is not valid for its format."""

    def __init__(self, message: str, *, path: str | None = None, fmt: ConfigFormat | None = None):
        super().__init__(message, path=path)
        self.fmt = fmt
