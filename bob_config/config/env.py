"""`$NAME` placeholder resolution for path and mirror settings.

Only the first placeholder in a value decides which variable is looked up;
every verbatim occurrence of that token is then replaced. A later, different
placeholder in the same value is left as written.

A variable that is not set does not fail the load. The token is replaced with
a readable marker instead (``Couldn't find NAME environment variable``).
"""

from __future__ import annotations

import logging
import os
import re
from typing import Mapping

from bob_config.config.model import SUBSTITUTABLE_FIELDS, Config


logger = logging.getLogger(__name__)

_ENV_PLACEHOLDER_RE = re.compile(r"\$([A-Z_]+)")


def missing_env_marker(name: str) -> str:
    return f"Couldn't find {name} environment variable"


def substitute_placeholder(value: str, env: Mapping[str, str], *, field: str | None = None) -> str:
    match = _ENV_PLACEHOLDER_RE.search(value)
    if match is None:
        return value

    name = match.group(1)
    if name is None:  # pragma: no cover
        raise RuntimeError(f"Placeholder matched without a variable name in {value!r}")

    resolved = env.get(name)
    if resolved is None:
        logger.warning("env_placeholder_unresolved", extra={"field": field, "var_name": name})
        resolved = missing_env_marker(name)

    return value.replace(f"${name}", resolved)


def substitute_env(config: Config, env: Mapping[str, str] | None = None) -> None:
    """Resolve placeholders in the substitutable string fields, in place."""

    lookup = os.environ if env is None else env
    for name in SUBSTITUTABLE_FIELDS:
        value = getattr(config, name)
        if value is None:
            continue
        setattr(config, name, substitute_placeholder(value, lookup, field=name))
