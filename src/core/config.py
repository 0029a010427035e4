"""Runtime configuration model for Flatstore.

This module owns all environment variable parsing and validation.
Stores and queries consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_JSON_INDENT,
    DEFAULT_LOCK_TIMEOUT_SECONDS,
)
from core.errors import FlatstoreConfigError


@dataclass(frozen=True)
class FlatstoreConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Directory holding one JSON file per collection.
        json_indent: Indentation used when pretty-printing collection files.
        lock_timeout_seconds: Maximum wait for a collection write lock.
    """

    data_root: Path
    json_indent: int = DEFAULT_JSON_INDENT
    lock_timeout_seconds: float = DEFAULT_LOCK_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "FlatstoreConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            FlatstoreConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("FLATSTORE_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        json_indent = _parse_json_indent(
            os.getenv("FLATSTORE_JSON_INDENT", str(DEFAULT_JSON_INDENT))
        )
        lock_timeout = _parse_lock_timeout(
            os.getenv("FLATSTORE_LOCK_TIMEOUT", str(DEFAULT_LOCK_TIMEOUT_SECONDS))
        )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            json_indent=json_indent,
            lock_timeout_seconds=lock_timeout,
        )

    @classmethod
    def for_data_root(cls, data_root: str | Path) -> "FlatstoreConfig":
        """Build config for an explicit data root with default settings.

        Args:
            data_root: Directory holding collection files.

        Returns:
            Config rooted at the resolved directory.
        """
        return cls(data_root=Path(data_root).expanduser().resolve())


def _parse_json_indent(raw_value: str) -> int:
    """Parse the JSON indent environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed non-negative indent.

    Raises:
        FlatstoreConfigError: If value is not a non-negative integer.
    """
    try:
        indent = int(raw_value)
    except ValueError as error:
        raise FlatstoreConfigError(
            "Invalid FLATSTORE_JSON_INDENT value: "
            f"expected integer, got '{raw_value}'. "
            "Set FLATSTORE_JSON_INDENT to a numeric value."
        ) from error
    if indent < 0:
        raise FlatstoreConfigError(
            f"Invalid FLATSTORE_JSON_INDENT value: expected >= 0, got {indent}."
        )
    return indent


def _parse_lock_timeout(raw_value: str) -> float:
    """Parse the lock timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive timeout in seconds.

    Raises:
        FlatstoreConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise FlatstoreConfigError(
            "Invalid FLATSTORE_LOCK_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'."
        ) from error
    if timeout <= 0:
        raise FlatstoreConfigError(
            f"Invalid FLATSTORE_LOCK_TIMEOUT value: expected > 0, got {timeout}."
        )
    return timeout
