"""Collection store for whole-file JSON persistence.

This module maps one named collection to its JSON file and owns record
identifiers and timestamps. Every call re-reads the file from disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from core.config import FlatstoreConfig
from core.constants import (
    COLLECTION_FILE_SUFFIX,
    CREATED_AT_FIELD,
    DATA_DIR_MODE,
    FIRST_RECORD_ID,
    PRIMARY_KEY_FIELD,
    UPDATED_AT_FIELD,
)
from core.errors import FlatstoreIOError, FlatstorePreconditionError
from core.logging_config import get_logger
from core.timestamps import format_timestamp
from core.types import Record
from store.collection_io import read_record_array, write_record_array
from store.collection_lock import collection_lock

_LOGGER = get_logger(__name__)


class CollectionStore:
    """Whole-file store for one named collection.

    Reads always load the full collection and writes always replace it.
    Insert, update, and delete run as one locked read-modify-write step.
    """

    def __init__(self, collection_name: str, config: FlatstoreConfig) -> None:
        """Bind the store to a collection file, creating it when absent.

        Args:
            collection_name: Logical collection name.
            config: Runtime configuration.

        Raises:
            FlatstorePreconditionError: If collection name is empty.
            FlatstoreIOError: If the directory or file cannot be created.
        """
        if not collection_name:
            raise FlatstorePreconditionError(
                "Collection name must be a non-empty string."
            )
        self._collection_name = collection_name
        self._config = config
        self._path = Path(config.data_root) / f"{collection_name}{COLLECTION_FILE_SUFFIX}"
        self._bootstrap()

    @property
    def collection_name(self) -> str:
        """Logical collection name."""
        return self._collection_name

    @property
    def path(self) -> Path:
        """Backing JSON file path."""
        return self._path

    def read_all(self) -> list[Record]:
        """Return every record in insertion order.

        Returns:
            Ordered record list; empty when the file is missing or blank.

        Raises:
            FlatstoreIOError: If the file cannot be read.
            FlatstoreCorruptionError: If the file holds malformed JSON.
        """
        return read_record_array(self._path)

    def write_all(self, records: list[Record]) -> None:
        """Replace the collection with the given records.

        Args:
            records: Full ordered record list.

        Raises:
            FlatstoreIOError: If the file cannot be written.
        """
        with collection_lock(self._path, self._config.lock_timeout_seconds):
            write_record_array(self._path, list(records), self._config.json_indent)
        _LOGGER.debug(
            "collection_written",
            collection=self._collection_name,
            record_count=len(records),
        )

    def insert(self, record: Mapping[str, Any]) -> Record:
        """Append a record with a fresh id and creation timestamp.

        Args:
            record: Caller-defined fields; store-managed fields are overwritten.

        Returns:
            Stored record including ``id``, ``created_at`` and ``updated_at``.
        """
        with collection_lock(self._path, self._config.lock_timeout_seconds):
            records = self.read_all()
            stored: Record = dict(record)
            stored[PRIMARY_KEY_FIELD] = next_record_id(records)
            stored[CREATED_AT_FIELD] = format_timestamp()
            stored[UPDATED_AT_FIELD] = None
            records.append(stored)
            self.write_all(records)
        _LOGGER.info(
            "record_inserted",
            collection=self._collection_name,
            record_id=stored[PRIMARY_KEY_FIELD],
        )
        return stored

    def update(self, record_id: Any, changes: Mapping[str, Any]) -> Record | None:
        """Merge changes into the record with the given id.

        ``id`` and ``created_at`` are never overwritten; ``updated_at`` is
        refreshed on every successful update.

        Args:
            record_id: Identifier of the record to update.
            changes: Fields to merge into the stored record.

        Returns:
            Merged record, or None when no record has that id.

        Raises:
            FlatstorePreconditionError: If record id is missing.
        """
        _require_record_id(record_id, "update", self._collection_name)
        merged: Record | None = None
        with collection_lock(self._path, self._config.lock_timeout_seconds):
            records = self.read_all()
            for position, existing in enumerate(records):
                if existing.get(PRIMARY_KEY_FIELD) != record_id:
                    continue
                merged = {**existing, **_mutable_fields(changes)}
                merged[UPDATED_AT_FIELD] = format_timestamp()
                records[position] = merged
                break
            if merged is not None:
                self.write_all(records)
        if merged is not None:
            _LOGGER.info(
                "record_updated",
                collection=self._collection_name,
                record_id=record_id,
                fields=sorted(changes),
            )
        return merged

    def delete(self, record_id: Any) -> bool:
        """Remove the record with the given id.

        Args:
            record_id: Identifier of the record to delete.

        Returns:
            True when a record was removed, False when none matched.

        Raises:
            FlatstorePreconditionError: If record id is missing.
        """
        _require_record_id(record_id, "delete", self._collection_name)
        with collection_lock(self._path, self._config.lock_timeout_seconds):
            records = self.read_all()
            remaining = [item for item in records if item.get(PRIMARY_KEY_FIELD) != record_id]
            deleted = len(remaining) < len(records)
            if deleted:
                self.write_all(remaining)
        if deleted:
            _LOGGER.info(
                "record_deleted",
                collection=self._collection_name,
                record_id=record_id,
            )
        return deleted

    def _bootstrap(self) -> None:
        """Create the data directory and an empty collection file if absent."""
        try:
            self._path.parent.mkdir(mode=DATA_DIR_MODE, parents=True, exist_ok=True)
        except OSError as error:
            raise FlatstoreIOError(
                f"Failed to create data directory {self._path.parent}: {error}. "
                "Check permissions or choose another data root."
            ) from error
        with collection_lock(self._path, self._config.lock_timeout_seconds):
            if self._path.exists():
                return
            self.write_all([])
        _LOGGER.debug(
            "collection_initialized",
            collection=self._collection_name,
            path=str(self._path),
        )


def next_record_id(records: list[Record]) -> int:
    """Return the id following the highest existing id.

    Args:
        records: Current collection records.

    Returns:
        1 for an empty collection, otherwise max id plus one.
    """
    ids = [
        item[PRIMARY_KEY_FIELD]
        for item in records
        if isinstance(item.get(PRIMARY_KEY_FIELD), int)
        and not isinstance(item.get(PRIMARY_KEY_FIELD), bool)
    ]
    if not ids:
        return FIRST_RECORD_ID
    return max(ids) + 1


def _mutable_fields(changes: Mapping[str, Any]) -> Record:
    """Drop store-managed identity fields from an update payload."""
    return {
        key: value
        for key, value in changes.items()
        if key not in (PRIMARY_KEY_FIELD, CREATED_AT_FIELD)
    }


def _require_record_id(record_id: Any, action: str, collection_name: str) -> None:
    """Reject update/delete calls without a record id."""
    if record_id is None:
        raise FlatstorePreconditionError(
            f"Cannot {action}: missing '{PRIMARY_KEY_FIELD}' for record in "
            f"collection '{collection_name}'."
        )
