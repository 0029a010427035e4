"""Model layer over collection stores.

Subclasses declare a collection name and get CRUD and relationship
helpers that return model instances instead of raw record dicts.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, TypeVar

from core.config import FlatstoreConfig
from core.constants import PRIMARY_KEY_FIELD
from core.errors import FlatstorePreconditionError
from core.types import Record, RecordAdapter, RelationOwner, RelationTarget
from store import relationships
from store.collection_store import CollectionStore
from store.query_engine import QueryEngine

ModelT = TypeVar("ModelT", bound="Model")


class Model:
    """Base class for records stored in one JSON collection.

    Attributes:
        collection: Collection name; subclasses must set it.
        config: Optional fixed configuration; environment config otherwise.
    """

    collection: ClassVar[str] = ""
    config: ClassVar[FlatstoreConfig | None] = None

    def __init__(
        self,
        attributes: Mapping[str, Any] | None = None,
        config: FlatstoreConfig | None = None,
    ) -> None:
        self._attributes: Record = dict(attributes or {})
        self._bound_config = config

    @classmethod
    def resolve_config(cls, config: FlatstoreConfig | None = None) -> FlatstoreConfig:
        """Return the explicit, class-level, or environment configuration."""
        return config or cls.config or FlatstoreConfig.from_env()

    @classmethod
    def collection_name(cls) -> str:
        """Return the declared collection name.

        Raises:
            FlatstorePreconditionError: If the subclass did not declare one.
        """
        if not cls.collection:
            raise FlatstorePreconditionError(
                f"The class attribute 'collection' must be defined on model {cls.__name__}."
            )
        return cls.collection

    @classmethod
    def adapter(cls: type[ModelT], config: FlatstoreConfig | None = None) -> RecordAdapter:
        """Return a callable wrapping records into instances bound to config."""

        def _wrap(record: Record) -> ModelT:
            return cls(record, config=config)

        return _wrap

    @classmethod
    def query(cls, config: FlatstoreConfig | None = None) -> QueryEngine:
        """Start a query whose results are instances of this model."""
        resolved = cls.resolve_config(config)
        return QueryEngine(cls.collection_name(), resolved, cls.adapter(resolved))

    @classmethod
    def all(cls: type[ModelT], config: FlatstoreConfig | None = None) -> list[ModelT]:
        """Return every stored record as a model instance."""
        return cls.query(config).get()

    @classmethod
    def where(
        cls,
        field: str,
        operator: str,
        value: Any,
        config: FlatstoreConfig | None = None,
    ) -> QueryEngine:
        """Start a query with one condition."""
        return cls.query(config).where(field, operator, value)

    @classmethod
    def create(
        cls: type[ModelT],
        data: Mapping[str, Any],
        config: FlatstoreConfig | None = None,
    ) -> ModelT:
        """Insert a record and return it as a model instance."""
        resolved = cls.resolve_config(config)
        record = CollectionStore(cls.collection_name(), resolved).insert(data)
        return cls(record, config=resolved)

    @classmethod
    def find(
        cls: type[ModelT],
        record_id: Any,
        config: FlatstoreConfig | None = None,
    ) -> ModelT | None:
        """Return the instance with the given id, or None."""
        return cls.query(config).find(record_id)

    @property
    def id(self) -> Any | None:
        """Primary key, or None before the record is stored."""
        return self._attributes.get(PRIMARY_KEY_FIELD)

    def get_attribute(self, key: str) -> Any | None:
        """Return one attribute value; None when absent."""
        return self._attributes.get(key)

    def to_dict(self) -> Record:
        """Return a copy of the attribute mapping."""
        return dict(self._attributes)

    def update(self, data: Mapping[str, Any]) -> bool:
        """Merge data into the stored record and refresh this instance.

        Returns:
            True when the record was found and rewritten.

        Raises:
            FlatstorePreconditionError: If this instance has no id.
        """
        merged = self._store().update(self._require_id("update"), data)
        if merged is None:
            return False
        self._attributes = merged
        return True

    def delete(self) -> bool:
        """Remove the stored record.

        Returns:
            True when a record was removed.

        Raises:
            FlatstorePreconditionError: If this instance has no id.
        """
        return self._store().delete(self._require_id("delete"))

    def belongs_to(
        self,
        related: type[ModelT],
        foreign_key: str | None = None,
    ) -> ModelT | None:
        """Resolve the parent record referenced by a foreign key on this record."""
        return relationships.belongs_to(
            self._relation_owner(), self._relation_target(related), self._config(), foreign_key
        )

    def has_many(self, related: type[ModelT], foreign_key: str | None = None) -> list[ModelT]:
        """Resolve every related record referencing this record."""
        return relationships.has_many(
            self._relation_owner(), self._relation_target(related), self._config(), foreign_key
        )

    def has_one(
        self,
        related: type[ModelT],
        foreign_key: str | None = None,
    ) -> ModelT | None:
        """Resolve the first related record referencing this record."""
        return relationships.has_one(
            self._relation_owner(), self._relation_target(related), self._config(), foreign_key
        )

    def _config(self) -> FlatstoreConfig:
        return self.resolve_config(self._bound_config)

    def _store(self) -> CollectionStore:
        return CollectionStore(self.collection_name(), self._config())

    def _require_id(self, action: str) -> Any:
        record_id = self.id
        if record_id is None:
            raise FlatstorePreconditionError(
                f"Cannot {action}: missing '{PRIMARY_KEY_FIELD}' in model "
                f"[{self.collection_name()}]."
            )
        return record_id

    def _relation_owner(self) -> RelationOwner:
        return RelationOwner(type_name=type(self).__name__, attributes=self._attributes)

    def _relation_target(self, related: type[Model]) -> RelationTarget:
        # related records live under this record's data root
        return RelationTarget(
            collection_name=related.collection_name(),
            adapter=related.adapter(self._config()),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return type(self) is type(other) and self._attributes == other._attributes

    def __hash__(self) -> int:
        # equal instances share attributes and therefore id
        return hash((type(self), self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"
