"""Unit tests for relationship resolution."""

from __future__ import annotations

import pytest

from core.config import FlatstoreConfig
from core.errors import FlatstorePreconditionError, FlatstoreRelationError
from core.types import RelationOwner, RelationTarget
from store.collection_store import CollectionStore
from store.relationships import belongs_to, foreign_key_for, has_many, has_one


def _config(tmp_path) -> FlatstoreConfig:
    return FlatstoreConfig.for_data_root(tmp_path)


def _seed_posts(config: FlatstoreConfig) -> None:
    posts = CollectionStore("posts", config)
    posts.insert({"title": "first", "user_id": 5})
    posts.insert({"title": "other", "user_id": 6})
    posts.insert({"title": "second", "user_id": "5"})
    posts.insert({"title": "orphan", "user_id": None})


@pytest.mark.parametrize(
    ("type_name", "expected"),
    [
        ("User", "user_id"),
        ("BlogPost", "blog_post_id"),
        ("app.models.HTTPLog", "h_t_t_p_log_id"),
        ("post", "post_id"),
    ],
)
def test_foreign_key_for_snake_cases_short_name(type_name: str, expected: str) -> None:
    """Default foreign keys should come from the short type name."""
    assert foreign_key_for(type_name) == expected


def test_has_many_returns_matching_records_in_order(tmp_path) -> None:
    """has_many should return posts whose user_id equals the owner id."""
    config = _config(tmp_path)
    _seed_posts(config)
    owner = RelationOwner(type_name="User", attributes={"id": 5})

    posts = has_many(owner, RelationTarget("posts"), config)

    assert [post["title"] for post in posts] == ["first", "second"]


def test_has_one_returns_first_match_or_none(tmp_path) -> None:
    """has_one should return the first related record."""
    config = _config(tmp_path)
    _seed_posts(config)

    first = has_one(RelationOwner("User", {"id": 5}), RelationTarget("posts"), config)
    missing = has_one(RelationOwner("User", {"id": 77}), RelationTarget("posts"), config)

    assert first is not None and first["title"] == "first" and missing is None


def test_has_many_requires_owner_id(tmp_path) -> None:
    """has_many should fail when the owner has no id."""
    owner = RelationOwner(type_name="User", attributes={"name": "x"})

    with pytest.raises(FlatstoreRelationError):
        has_many(owner, RelationTarget("posts"), _config(tmp_path))


def test_has_many_uses_explicit_foreign_key(tmp_path) -> None:
    """An explicit foreign key should override the owner-derived default."""
    config = _config(tmp_path)
    CollectionStore("posts", config).insert({"title": "by author", "author_id": 3})
    owner = RelationOwner(type_name="User", attributes={"id": 3})

    posts = has_many(owner, RelationTarget("posts"), config, foreign_key="author_id")

    assert [post["title"] for post in posts] == ["by author"]


def test_belongs_to_resolves_parent_record(tmp_path) -> None:
    """belongs_to should find the related record by foreign key value."""
    config = _config(tmp_path)
    CollectionStore("users", config).insert({"name": "Alice"})
    owner = RelationOwner(type_name="Post", attributes={"id": 1, "user_id": 1})

    user = belongs_to(owner, RelationTarget("users"), config, foreign_key="user_id")

    assert user is not None and user["name"] == "Alice"


def test_belongs_to_default_key_derives_from_owner_type(tmp_path) -> None:
    """Without an explicit key belongs_to should read <owner>_id."""
    config = _config(tmp_path)
    CollectionStore("users", config).insert({"name": "Alice"})
    owner = RelationOwner(type_name="Post", attributes={"post_id": 1})

    user = belongs_to(owner, RelationTarget("users"), config)

    assert user is not None and user["id"] == 1


def test_belongs_to_missing_foreign_key_raises(tmp_path) -> None:
    """An absent foreign key attribute is a precondition failure."""
    owner = RelationOwner(type_name="Post", attributes={"id": 1})

    with pytest.raises(FlatstorePreconditionError):
        belongs_to(owner, RelationTarget("users"), _config(tmp_path), foreign_key="user_id")


@pytest.mark.parametrize("empty_value", [None, 0, ""])
def test_belongs_to_falsy_foreign_key_returns_none(tmp_path, empty_value) -> None:
    """A present but empty foreign key should mean no relation."""
    owner = RelationOwner(type_name="Post", attributes={"user_id": empty_value})

    related = belongs_to(owner, RelationTarget("users"), _config(tmp_path), foreign_key="user_id")

    assert related is None


def test_relation_target_adapter_wraps_results(tmp_path) -> None:
    """Targets with an adapter should return adapted related records."""
    config = _config(tmp_path)
    _seed_posts(config)
    target = RelationTarget("posts", adapter=lambda record: record["title"].upper())

    titles = has_many(RelationOwner("User", {"id": 6}), target, config)

    assert titles == ["OTHER"]
