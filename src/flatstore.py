"""Public SDK surface for Flatstore.

This module provides a stable import path for library users.
It re-exports the client, model base class, and typed models.
"""

from __future__ import annotations

from core.config import FlatstoreConfig
from core.errors import (
    FlatstoreConfigError,
    FlatstoreCorruptionError,
    FlatstoreError,
    FlatstoreIOError,
    FlatstoreLockError,
    FlatstorePreconditionError,
    FlatstoreRelationError,
)
from core.types import Predicate, Record, RelationOwner, RelationTarget
from store.client import FlatstoreClient
from store.collection_store import CollectionStore
from store.query_engine import QueryEngine
from store.record_model import Model
from store.relationships import belongs_to, foreign_key_for, has_many, has_one

__all__ = [
    "CollectionStore",
    "FlatstoreClient",
    "FlatstoreConfig",
    "FlatstoreConfigError",
    "FlatstoreCorruptionError",
    "FlatstoreError",
    "FlatstoreIOError",
    "FlatstoreLockError",
    "FlatstorePreconditionError",
    "FlatstoreRelationError",
    "Model",
    "Predicate",
    "QueryEngine",
    "Record",
    "RelationOwner",
    "RelationTarget",
    "belongs_to",
    "foreign_key_for",
    "has_many",
    "has_one",
]
