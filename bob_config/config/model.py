from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from bob_config.config.errors import ConfigParseError


# Processing order for env substitution.
SUBSTITUTABLE_FIELDS: tuple[str, ...] = (
    "downloads_location",
    "github_mirror",
    "installation_location",
    "version_sync_file_location",
)

ROLLBACK_LIMIT_MAX = 255


class ConfigFormat(Enum):
    TOML = "toml"
    JSON = "json"

    @classmethod
    def from_path(cls, path: str | Path) -> ConfigFormat:
        """`.toml` selects TOML; every other suffix (or none) is read as JSON."""

        if Path(path).suffix == ".toml":
            return cls.TOML
        return cls.JSON


@dataclass(slots=True)
class Config:
    """User settings for bob.

    Every field is optional. ``None`` means "use the built-in default", which
    is decided by whoever consumes the config, not here.
    """

    enable_nightly_info: bool | None = None
    enable_release_build: bool | None = None
    downloads_location: str | None = None
    installation_location: str | None = None
    version_sync_file_location: str | None = None
    github_mirror: str | None = None
    rollback_limit: int | None = None
    enable_manpage_mirror: bool | None = None

    @classmethod
    def from_mapping(cls, raw: Any) -> Config:
        """Build a Config from a parsed TOML/JSON document.

        Only types are checked. Unknown keys are ignored and ``null`` leaves
        a field unset.

        Raises:
            ConfigParseError: If the root is not a mapping or a value has the
                wrong type.
        """

        if not isinstance(raw, Mapping):
            raise ConfigParseError(f"Config root must be a mapping/object, got {type(raw).__name__}")

        values: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in raw or raw[f.name] is None:
                continue
            values[f.name] = _coerce(f.name, raw[f.name])
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def is_default(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


_BOOL_FIELDS = frozenset({"enable_nightly_info", "enable_release_build", "enable_manpage_mirror"})


def _coerce(name: str, value: Any) -> Any:
    if name in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ConfigParseError(f"Expected a boolean for '{name}', got {type(value).__name__}")
        return value

    if name == "rollback_limit":
        # bool is an int subclass; reject it explicitly.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigParseError(f"Expected an integer for '{name}', got {type(value).__name__}")
        if not 0 <= value <= ROLLBACK_LIMIT_MAX:
            raise ConfigParseError(f"'{name}' must be between 0 and {ROLLBACK_LIMIT_MAX}, got {value}")
        return value

    if not isinstance(value, str):
        raise ConfigParseError(f"Expected a string for '{name}', got {type(value).__name__}")
    return value


CONFIG_FIELDS: frozenset[str] = frozenset(f.name for f in fields(Config))
