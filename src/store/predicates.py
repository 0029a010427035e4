"""Record predicate evaluation.

This module applies field/operator/value conditions to collection records.
Each predicate is applied as a successive filter over the previous result.
"""

from __future__ import annotations

import re
from typing import Any

from core.constants import (
    LIKE_WILDCARD,
    OPERATOR_EQUALS,
    OPERATOR_GREATER_THAN,
    OPERATOR_LESS_THAN,
    OPERATOR_LIKE,
    OPERATOR_NOT_EQUALS,
    SUPPORTED_OPERATORS,
)
from core.logging_config import get_logger
from core.types import Predicate, Record

_LOGGER = get_logger(__name__)
_NUMERIC_STRING = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_INTEGER_STRING = re.compile(r"^\s*[+-]?\d+\s*$")


def filter_records(records: list[Record], predicates: tuple[Predicate, ...]) -> list[Record]:
    """Filter records by a conjunctive predicate chain.

    Args:
        records: Input records in insertion order.
        predicates: Ordered predicates; all must hold.

    Returns:
        Matching records in their original order.
    """
    filtered = list(records)
    for predicate in predicates:
        if not is_supported_operator(predicate.operator):
            _LOGGER.warning(
                "unsupported_operator",
                field=predicate.field,
                operator=predicate.operator,
            )
            return []
        filtered = [record for record in filtered if matches(record, predicate)]
    return filtered


def is_supported_operator(operator: str) -> bool:
    """Return whether an operator has defined semantics."""
    return operator in SUPPORTED_OPERATORS


def matches(record: Record, predicate: Predicate) -> bool:
    """Evaluate one predicate against one record.

    Args:
        record: Record to test; a missing field reads as None.
        predicate: Condition to evaluate.

    Returns:
        True when the record satisfies the condition. Unsupported
        operators never match.
    """
    comparator = _OPERATORS.get(predicate.operator)
    if comparator is None:
        return False
    return comparator(record.get(predicate.field), predicate.value)


def loose_equals(left: Any, right: Any) -> bool:
    """Compare two values with numeric-string coercion.

    Numbers and numeric-looking strings compare by numeric value. All other
    combinations require the same type and equal values.

    Args:
        left: Stored field value.
        right: Comparison value.

    Returns:
        Whether the values are considered equal.
    """
    left_number = as_number(left)
    right_number = as_number(right)
    if left_number is not None and right_number is not None:
        return left_number == right_number
    return type(left) is type(right) and left == right


def as_number(value: Any) -> float | int | None:
    """Coerce a number or numeric-looking string; None otherwise.

    Booleans are not treated as numbers. Integer strings parse as int so
    large identifiers keep full precision.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        return None
    if _INTEGER_STRING.match(value):
        return int(value)
    if _NUMERIC_STRING.match(value):
        return float(value)
    return None


def like_pattern(search: Any) -> re.Pattern[str]:
    """Compile a ``%``-wildcard pattern into a case-insensitive regex.

    Args:
        search: Pattern where ``%`` matches any run of characters.

    Returns:
        Compiled unanchored regex.
    """
    parts = str(search).split(LIKE_WILDCARD)
    return re.compile(".*".join(re.escape(part) for part in parts), re.IGNORECASE | re.DOTALL)


def _not_equals(left: Any, right: Any) -> bool:
    return not loose_equals(left, right)


def _greater_than(left: Any, right: Any) -> bool:
    ordered = _ordered_pair(left, right)
    return ordered is not None and ordered[0] > ordered[1]


def _less_than(left: Any, right: Any) -> bool:
    ordered = _ordered_pair(left, right)
    return ordered is not None and ordered[0] < ordered[1]


def _like(left: Any, right: Any) -> bool:
    if not isinstance(left, str):
        return False
    return like_pattern(right).search(left) is not None


def _ordered_pair(left: Any, right: Any) -> tuple[Any, Any] | None:
    """Return a comparable pair, or None when the values cannot be ordered."""
    left_number = as_number(left)
    right_number = as_number(right)
    if left_number is not None and right_number is not None:
        return left_number, right_number
    if isinstance(left, str) and isinstance(right, str):
        return left, right
    return None


_OPERATORS = {
    OPERATOR_EQUALS: loose_equals,
    OPERATOR_NOT_EQUALS: _not_equals,
    OPERATOR_GREATER_THAN: _greater_than,
    OPERATOR_LESS_THAN: _less_than,
    OPERATOR_LIKE: _like,
}
