"""Shared typed models.

This module defines the record, predicate, and relationship models used
by the collection store, query engine, and model layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

Record = dict[str, Any]
RecordAdapter = Callable[[Record], Any]


@dataclass(frozen=True)
class Predicate:
    """One field/operator/value filter condition.

    Attributes:
        field: Record field name to read; missing fields read as None.
        operator: One of ``=``, ``!=``, ``>``, ``<``, ``LIKE``.
        value: Comparison value supplied by the caller.
    """

    field: str
    operator: str
    value: Any


@dataclass(frozen=True)
class RelationOwner:
    """Record on whose behalf a relationship is resolved.

    Attributes:
        type_name: Owner type name used for default foreign keys.
        attributes: Owner record attributes.
    """

    type_name: str
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RelationTarget:
    """Related collection a relationship resolves into.

    Attributes:
        collection_name: Related collection name.
        adapter: Optional callable wrapping each related record.
    """

    collection_name: str
    adapter: RecordAdapter | None = None
