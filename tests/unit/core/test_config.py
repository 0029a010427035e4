"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import FlatstoreConfig
from core.errors import FlatstoreConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("FLATSTORE_DATA_ROOT", "./.tmp-flatstore")

    config = FlatstoreConfig.from_env()

    assert config.data_root.name == ".tmp-flatstore" and config.data_root.is_absolute()


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to default indent and lock timeout."""
    monkeypatch.delenv("FLATSTORE_JSON_INDENT", raising=False)
    monkeypatch.delenv("FLATSTORE_LOCK_TIMEOUT", raising=False)
    monkeypatch.delenv("FLATSTORE_DATA_ROOT", raising=False)

    config = FlatstoreConfig.from_env()

    assert (config.json_indent, config.lock_timeout_seconds, config.data_root.name) == (
        4,
        10.0,
        "data",
    )


def test_from_env_raises_for_invalid_indent(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric JSON indent."""
    monkeypatch.setenv("FLATSTORE_JSON_INDENT", "wide")

    with pytest.raises(FlatstoreConfigError):
        FlatstoreConfig.from_env()

    assert os.getenv("FLATSTORE_JSON_INDENT") == "wide"


def test_from_env_raises_for_negative_indent(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject negative JSON indent."""
    monkeypatch.setenv("FLATSTORE_JSON_INDENT", "-2")

    with pytest.raises(FlatstoreConfigError):
        FlatstoreConfig.from_env()


def test_from_env_raises_for_non_positive_lock_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject a zero lock timeout."""
    monkeypatch.setenv("FLATSTORE_LOCK_TIMEOUT", "0")

    with pytest.raises(FlatstoreConfigError):
        FlatstoreConfig.from_env()


def test_for_data_root_resolves_path(tmp_path) -> None:
    """Explicit data root should be resolved to an absolute path."""
    config = FlatstoreConfig.for_data_root(tmp_path / "nested")

    assert config.data_root == (tmp_path / "nested").resolve()
