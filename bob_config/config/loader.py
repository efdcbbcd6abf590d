from __future__ import annotations

import asyncio
import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Mapping

from bob_config.config.env import substitute_env
from bob_config.config.errors import ConfigParseError
from bob_config.config.model import CONFIG_FIELDS, Config, ConfigFormat


logger = logging.getLogger(__name__)


def _read_config_text(path: Path) -> str | None:
    """Return the file contents, or None when the file cannot be read.

    A missing or unreadable config is a valid setup (bob runs with no config
    at all), so read failures are reported as a value rather than raised.
    """

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, ValueError) as e:
        # ValueError: paths the OS cannot represent (embedded NUL).
        logger.debug("config_file_unreadable", extra={"path": str(path), "error": str(e)})
        return None


class _JsonObject(dict):
    """A decoded JSON object that remembers keys it saw more than once."""

    duplicates: frozenset[str] = frozenset()


def _json_object(pairs: list[tuple[str, Any]]) -> _JsonObject:
    obj = _JsonObject()
    seen: set[str] = set()
    for k, v in pairs:
        if k in obj:
            seen.add(k)
        obj[k] = v
    obj.duplicates = frozenset(seen)
    return obj


def _parse(text: str, fmt: ConfigFormat) -> Any:
    if fmt is ConfigFormat.TOML:
        return tomllib.loads(text)

    raw = json.loads(text, object_pairs_hook=_json_object)
    # Unknown keys are ignored, duplicates included; a repeated setting is not.
    repeated = sorted(getattr(raw, "duplicates", frozenset()) & CONFIG_FIELDS)
    if repeated:
        raise ValueError(f"duplicate field '{repeated[0]}'")
    return raw


def parse_config(text: str, fmt: ConfigFormat, *, path: str | Path | None = None) -> Config:
    """Deserialize config text in the given format (no env substitution).

    Raises:
        ConfigParseError: If the text is not valid for ``fmt`` or a value has
            the wrong type.
    """

    where = str(path) if path is not None else None
    # TOMLDecodeError and JSONDecodeError are ValueErrors; so are oversized
    # integer literals. Deep JSON nesting surfaces as RecursionError.
    try:
        raw = _parse(text, fmt)
    except (ValueError, RecursionError) as e:
        raise ConfigParseError(
            f"Failed to parse {fmt.value.upper()} config: {e}", path=where, fmt=fmt
        ) from e

    try:
        return Config.from_mapping(raw)
    except ConfigParseError as e:
        raise ConfigParseError(e.message, path=where, fmt=fmt) from e


def load_config(path: str | Path, *, env: Mapping[str, str] | None = None) -> Config:
    """Load bob's config file and resolve `$NAME` placeholders.

    Args:
        path: Location of the config file. ``.toml`` is read as TOML,
            anything else as JSON.
        env: Environment used for placeholder lookup. Defaults to
            ``os.environ`` at call time.

    Returns:
        A fresh Config. When the file is missing or unreadable every field is
        unset.

    Raises:
        ConfigParseError: If the file is readable but malformed.
    """

    config_path = Path(path)
    text = _read_config_text(config_path)
    if text is None:
        return Config()

    fmt = ConfigFormat.from_path(config_path)
    cfg = parse_config(text, fmt, path=config_path)
    logger.debug("config_parsed", extra={"path": str(config_path), "format": fmt.value})

    substitute_env(cfg, env)
    return cfg


async def load_config_async(path: str | Path, *, env: Mapping[str, str] | None = None) -> Config:
    """Same as load_config, with the blocking work run off the event loop."""

    return await asyncio.to_thread(load_config, path, env=env)
