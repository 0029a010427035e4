"""Relationship resolution between collections.

Relationships are not stored; they are resolved on demand by querying
the related collection with the owner's foreign key or identifier.
"""

from __future__ import annotations

import re
from typing import Any

from core.config import FlatstoreConfig
from core.constants import FOREIGN_KEY_SUFFIX, OPERATOR_EQUALS, PRIMARY_KEY_FIELD
from core.errors import FlatstoreRelationError
from core.types import RelationOwner, RelationTarget
from store.query_engine import QueryEngine

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def foreign_key_for(type_name: str) -> str:
    """Derive the default foreign key for a type name.

    Args:
        type_name: Plain or dotted type name, e.g. ``app.models.BlogPost``.

    Returns:
        Snake-cased short name with ``_id`` suffix, e.g. ``blog_post_id``.
    """
    short_name = type_name.rsplit(".", 1)[-1]
    return _CAMEL_BOUNDARY.sub("_", short_name).lower() + FOREIGN_KEY_SUFFIX


def belongs_to(
    owner: RelationOwner,
    target: RelationTarget,
    config: FlatstoreConfig,
    foreign_key: str | None = None,
) -> Any | None:
    """Resolve the related record referenced by the owner's foreign key.

    Args:
        owner: Record holding the foreign key.
        target: Related collection.
        config: Configuration shared with the related collection.
        foreign_key: Attribute holding the related id; derived from the
            owner type when omitted.

    Returns:
        Related record, or None when the foreign key is empty or dangling.

    Raises:
        FlatstoreRelationError: If the owner lacks the foreign key attribute.
    """
    key = foreign_key or foreign_key_for(owner.type_name)
    if key not in owner.attributes:
        raise FlatstoreRelationError(
            f"Foreign key '{key}' not found on {owner.type_name} record. "
            "Pass foreign_key explicitly or add the attribute."
        )
    related_id = owner.attributes[key]
    if not related_id:
        return None
    return _related_query(target, config).find(related_id)


def has_many(
    owner: RelationOwner,
    target: RelationTarget,
    config: FlatstoreConfig,
    foreign_key: str | None = None,
) -> list[Any]:
    """Resolve every related record pointing at the owner.

    Args:
        owner: Record referenced by the related records.
        target: Related collection.
        config: Configuration shared with the related collection.
        foreign_key: Related attribute holding the owner id; derived from the
            owner type when omitted.

    Returns:
        Related records in insertion order.

    Raises:
        FlatstoreRelationError: If the owner has no id.
    """
    return _children_query(owner, target, config, foreign_key, "has_many").get()


def has_one(
    owner: RelationOwner,
    target: RelationTarget,
    config: FlatstoreConfig,
    foreign_key: str | None = None,
) -> Any | None:
    """Resolve the first related record pointing at the owner.

    Raises:
        FlatstoreRelationError: If the owner has no id.
    """
    return _children_query(owner, target, config, foreign_key, "has_one").first()


def _children_query(
    owner: RelationOwner,
    target: RelationTarget,
    config: FlatstoreConfig,
    foreign_key: str | None,
    relation: str,
) -> QueryEngine:
    """Build the related-collection query filtered by the owner id."""
    if owner.attributes.get(PRIMARY_KEY_FIELD) is None:
        raise FlatstoreRelationError(
            f"Missing '{PRIMARY_KEY_FIELD}' on {owner.type_name} record for {relation} relation."
        )
    key = foreign_key or foreign_key_for(owner.type_name)
    owner_id = owner.attributes[PRIMARY_KEY_FIELD]
    return _related_query(target, config).where(key, OPERATOR_EQUALS, owner_id)


def _related_query(target: RelationTarget, config: FlatstoreConfig) -> QueryEngine:
    return QueryEngine(target.collection_name, config, target.adapter)
