"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolated_flatstore_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear FLATSTORE_* overrides so every test starts from defaults."""
    for name in ("FLATSTORE_DATA_ROOT", "FLATSTORE_JSON_INDENT", "FLATSTORE_LOCK_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
