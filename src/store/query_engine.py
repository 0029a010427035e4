"""Query engine over collection stores.

This module accumulates predicate chains, evaluates them against the
full collection, and optionally adapts each match into a caller type.
"""

from __future__ import annotations

from typing import Any

from core.config import FlatstoreConfig
from core.constants import OPERATOR_EQUALS, PRIMARY_KEY_FIELD
from core.types import Predicate, RecordAdapter
from store.collection_store import CollectionStore
from store.predicates import filter_records


class QueryEngine:
    """Chainable filtered retrieval over one collection.

    Predicates are combined with logical AND and results keep the
    collection's insertion order.
    """

    def __init__(
        self,
        collection_name: str,
        config: FlatstoreConfig,
        adapter: RecordAdapter | None = None,
    ) -> None:
        """Create a query over a collection.

        Args:
            collection_name: Collection to query.
            config: Runtime configuration.
            adapter: Optional callable applied to every matching record.
        """
        self._collection_name = collection_name
        self._config = config
        self._adapter = adapter
        self._predicates: list[Predicate] = []

    @property
    def collection_name(self) -> str:
        """Queried collection name."""
        return self._collection_name

    @property
    def predicates(self) -> tuple[Predicate, ...]:
        """Current predicate chain in the order it was added."""
        return tuple(self._predicates)

    def where(self, field: str, operator: str, value: Any) -> "QueryEngine":
        """Append a condition to the chain.

        Supported operators: ``=``, ``!=``, ``>``, ``<``, ``LIKE``. Any other
        operator makes the query return no records.

        Args:
            field: Record field name.
            operator: Comparison operator.
            value: Comparison value.

        Returns:
            This query, for chaining.
        """
        self._predicates.append(Predicate(field=field, operator=operator, value=value))
        return self

    def with_adapter(self, adapter: RecordAdapter | None) -> "QueryEngine":
        """Bind the callable used to wrap matching records.

        Args:
            adapter: Callable taking one record mapping, or None for raw dicts.

        Returns:
            This query, for chaining.
        """
        self._adapter = adapter
        return self

    def get(self) -> list[Any]:
        """Return every record matching the predicate chain.

        Returns:
            Matching records, adapted when an adapter is bound.

        Raises:
            FlatstoreIOError: If the collection file cannot be read.
            FlatstoreCorruptionError: If the collection file is malformed.
        """
        records = CollectionStore(self._collection_name, self._config).read_all()
        matches = filter_records(records, self.predicates)
        if self._adapter is None:
            return matches
        return [self._adapter(record) for record in matches]

    def first(self) -> Any | None:
        """Return the first matching record, or None when nothing matches."""
        results = self.get()
        return results[0] if results else None

    def find(self, record_id: Any) -> Any | None:
        """Look up one record by primary key, ignoring the current chain.

        Args:
            record_id: Identifier to match with ``=`` semantics.

        Returns:
            Matching record or None.
        """
        lookup = QueryEngine(self._collection_name, self._config, self._adapter)
        return lookup.where(PRIMARY_KEY_FIELD, OPERATOR_EQUALS, record_id).first()

    def count(self) -> int:
        """Return the number of matching records."""
        return len(self.get())
