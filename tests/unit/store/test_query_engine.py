"""Unit tests for the query engine."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from core.config import FlatstoreConfig
from core.types import Predicate
from store.collection_store import CollectionStore
from store.query_engine import QueryEngine


@dataclass(frozen=True)
class _UserView:
    attributes: dict[str, Any]


def _seeded_config(tmp_path) -> FlatstoreConfig:
    config = replace(FlatstoreConfig.from_env(), data_root=tmp_path)
    store = CollectionStore("users", config)
    store.insert({"name": "Alice", "age": 25})
    store.insert({"name": "Alice", "age": 30})
    store.insert({"name": "Bob", "age": 25})
    return config


def test_get_without_predicates_returns_all_in_insertion_order(tmp_path) -> None:
    """A bare query should return every record in file order."""
    config = _seeded_config(tmp_path)

    records = QueryEngine("users", config).get()

    assert [item["id"] for item in records] == [1, 2, 3]


def test_where_returns_self_and_records_predicates(tmp_path) -> None:
    """where should chain and keep predicates in order."""
    query = QueryEngine("users", _seeded_config(tmp_path))

    chained = query.where("name", "=", "Alice").where("age", "=", 30)

    assert chained is query and query.predicates == (
        Predicate("name", "=", "Alice"),
        Predicate("age", "=", 30),
    )


def test_multiple_conditions_combine_with_and(tmp_path) -> None:
    """Chained predicates should intersect."""
    config = _seeded_config(tmp_path)

    results = QueryEngine("users", config).where("name", "=", "Alice").where("age", "=", "30").get()

    assert [item["id"] for item in results] == [2]


def test_first_returns_none_when_nothing_matches(tmp_path) -> None:
    """first should return None for an empty result."""
    config = _seeded_config(tmp_path)

    assert QueryEngine("users", config).where("name", "=", "Carol").first() is None


def test_unsupported_operator_returns_empty_list(tmp_path) -> None:
    """An unknown operator should make the query empty without raising."""
    config = _seeded_config(tmp_path)

    assert QueryEngine("users", config).where("name", "BETWEEN", "A").get() == []


def test_with_adapter_wraps_results_without_changing_filtering(tmp_path) -> None:
    """Bound adapters should wrap every match."""
    config = _seeded_config(tmp_path)

    results = QueryEngine("users", config).with_adapter(_UserView).where("age", "=", 25).get()

    assert [view.attributes["name"] for view in results] == ["Alice", "Bob"]


def test_find_ignores_existing_chain(tmp_path) -> None:
    """find should look up by id regardless of pending predicates."""
    config = _seeded_config(tmp_path)
    query = QueryEngine("users", config).where("name", "=", "Bob")

    found = query.find(1)

    assert found is not None and found["name"] == "Alice" and query.count() == 1


def test_find_returns_none_for_unknown_id(tmp_path) -> None:
    """find should return None when no record has the id."""
    config = _seeded_config(tmp_path)

    assert QueryEngine("users", config).find(9999) is None


def test_query_rereads_file_on_every_call(tmp_path) -> None:
    """Queries should observe writes made after they were built."""
    config = _seeded_config(tmp_path)
    query = QueryEngine("users", config).where("name", "LIKE", "car%")
    before = query.get()
    CollectionStore("users", config).insert({"name": "Carol"})

    after = query.get()

    assert before == [] and [item["name"] for item in after] == ["Carol"]
