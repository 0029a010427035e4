"""Client entry point for collection access.

This module exposes a config-bound handle for opening collection stores
and queries without going through model classes.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import FlatstoreConfig
from core.types import RecordAdapter
from store.collection_store import CollectionStore
from store.query_engine import QueryEngine


class FlatstoreClient:
    """Primary SDK entry point for raw collection access."""

    def __init__(self, config: FlatstoreConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration; read from env when omitted.
        """
        self._config = config or FlatstoreConfig.from_env()

    @property
    def config(self) -> FlatstoreConfig:
        """Configuration shared by every store and query from this client."""
        return self._config

    def collection(self, collection_name: str) -> CollectionStore:
        """Open a collection store, creating its file when absent.

        Args:
            collection_name: Collection identifier.

        Returns:
            Collection store handle.
        """
        return CollectionStore(collection_name, self._config)

    def query(self, collection_name: str, adapter: RecordAdapter | None = None) -> QueryEngine:
        """Start a query over a collection.

        Args:
            collection_name: Collection identifier.
            adapter: Optional callable wrapping each matching record.

        Returns:
            Empty query ready for ``where`` chaining.
        """
        return QueryEngine(collection_name, self._config, adapter)

    def with_data_root(self, data_root: str | Path) -> "FlatstoreClient":
        """Clone the client with a different data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        return FlatstoreClient(replace(self._config, data_root=resolved_root))
