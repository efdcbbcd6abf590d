from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Sequence

from dotenv import load_dotenv

from bob_config.config.errors import ConfigError
from bob_config.config.loader import load_config
from bob_config.observability.logging import configure_logging


logger = logging.getLogger(__name__)


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """`$BOB_CONFIG`, else `<XDG_CONFIG_HOME or ~/.config>/bob/config.json`."""

    lookup = os.environ if env is None else env
    explicit = lookup.get("BOB_CONFIG")
    if explicit:
        return Path(explicit).expanduser()

    base = lookup.get("XDG_CONFIG_HOME")
    config_home = Path(base).expanduser() if base else Path.home() / ".config"
    return config_home / "bob" / "config.json"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bob-config",
        description="Inspect the effective bob configuration",
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        default="json",
        help="Log line format on stderr",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to the config file (default: $BOB_CONFIG or ~/.config/bob/config.json)",
    )
    parser.add_argument(
        "--no-dotenv",
        action="store_true",
        help="Do not load ./.env before resolving $NAME placeholders",
    )

    sub = parser.add_subparsers(dest="command")

    print_p = sub.add_parser("print-config", help="Load and print the effective config as JSON")
    print_p.set_defaults(command="print-config")

    path_p = sub.add_parser("config-path", help="Print the config file location")
    path_p.set_defaults(command="config-path")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint referenced by pyproject.toml."""

    parser = _build_parser()

    try:
        ns = parser.parse_args(argv)
    except SystemExit as e:
        # argparse has already printed help/usage.
        code = e.code
        return int(code) if isinstance(code, int) else 1

    configure_logging(level=ns.log_level, fmt=ns.log_format)

    config_path: Path = ns.config if ns.config is not None else default_config_path()

    # `print-config` is the default when no subcommand is given.
    if ns.command == "config-path":
        sys.stdout.write(f"{config_path}\n")
        return 0

    try:
        if not ns.no_dotenv:
            # Never override variables that are already set.
            load_dotenv(Path.cwd() / ".env", override=False)

        cfg = load_config(config_path)

        logger.info(
            "config_loaded",
            extra={"config_file": str(config_path), "all_default": cfg.is_default()},
        )

        sys.stdout.write(json.dumps(cfg.to_dict(), ensure_ascii=False, indent=2))
        sys.stdout.write("\n")
        return 0

    except ConfigError as e:
        logger.error("config_error", extra={"error": str(e)})
        sys.stderr.write(f"ConfigError: {e}\n")
        return 2
    except Exception as e:  # noqa: BLE001
        logger.exception("fatal_error")
        sys.stderr.write(f"Fatal error: {e}\n")
        return 1
