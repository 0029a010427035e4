"""JSON array I/O helpers for collection files."""

from __future__ import annotations

import json
import os
from pathlib import Path
import stat
from typing import Any
from uuid import uuid4

from core.constants import NEW_FILE_MODE, TEMP_FILE_SUFFIX
from core.errors import FlatstoreCorruptionError, FlatstoreIOError
from core.types import Record


def read_record_array(collection_path: Path) -> list[Record]:
    """Read a collection file as an ordered list of records.

    Missing files, blank files, and a JSON ``null`` all read as an empty list.

    Args:
        collection_path: Collection JSON path.

    Returns:
        Parsed records in file order.

    Raises:
        FlatstoreIOError: If the file exists but cannot be read.
        FlatstoreCorruptionError: If the content is not UTF-8 encoded JSON
            holding an array of objects.
    """
    try:
        raw_text = collection_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except UnicodeDecodeError as error:
        raise FlatstoreCorruptionError(
            f"Failed to decode collection file {collection_path}: {error.reason} "
            f"at byte {error.start}. Collection files must be UTF-8 encoded."
        ) from error
    except OSError as error:
        raise FlatstoreIOError(
            f"Failed to read collection file {collection_path}: {error}."
        ) from error
    if not raw_text.strip():
        return []
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as error:
        raise FlatstoreCorruptionError(
            f"Failed to parse collection file {collection_path}: {error.msg} "
            f"(line {error.lineno}). Repair or remove the file."
        ) from error
    return _validate_record_array(collection_path, payload)


def write_record_array(collection_path: Path, records: list[Record], indent: int) -> None:
    """Replace a collection file with the given records.

    The payload is written to a sibling temporary file and moved into place,
    so readers never observe a partially written collection. A replaced file
    keeps its permission bits; a new file gets the process umask applied.

    Args:
        collection_path: Collection JSON path.
        records: Full ordered record list.
        indent: Pretty-print indentation.

    Raises:
        FlatstoreIOError: If the file cannot be written.
    """
    payload = json.dumps(records, indent=indent, ensure_ascii=False) + "\n"
    temp_path = collection_path.with_name(
        f".{collection_path.stem}-{uuid4().hex}{TEMP_FILE_SUFFIX}"
    )
    try:
        file_descriptor = os.open(
            temp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, NEW_FILE_MODE
        )
        with os.fdopen(file_descriptor, "w", encoding="utf-8") as handle:
            handle.write(payload)
        existing_mode = _existing_mode(collection_path)
        if existing_mode is not None:
            os.chmod(temp_path, existing_mode)
        os.replace(temp_path, collection_path)
    except OSError as error:
        if temp_path.exists():
            temp_path.unlink()
        raise FlatstoreIOError(
            f"Failed to write collection file {collection_path}: {error}."
        ) from error


def _existing_mode(collection_path: Path) -> int | None:
    """Return permission bits of an existing collection file, or None."""
    try:
        return stat.S_IMODE(collection_path.stat().st_mode)
    except FileNotFoundError:
        return None


def _validate_record_array(collection_path: Path, payload: Any) -> list[Record]:
    """Check that a decoded payload is a list of JSON objects."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise FlatstoreCorruptionError(
            f"Failed to parse collection file {collection_path}: "
            "expected JSON array at top level."
        )
    for position, item in enumerate(payload):
        if not isinstance(item, dict):
            raise FlatstoreCorruptionError(
                f"Failed to parse collection file {collection_path}: "
                f"entry {position} is not a JSON object."
            )
    return payload
