from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    root = Path(__file__).resolve().parents[1]
    if (root / "bob_config").exists():
        sys.path.insert(0, str(root))


@pytest.fixture
def write_config(tmp_path: Path):
    def _write(name: str, text: str) -> Path:
        p = tmp_path / name
        p.write_text(text.lstrip(), encoding="utf-8")
        return p

    return _write
