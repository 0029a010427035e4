"""Flatstore exception hierarchy.

This module defines traceable storage errors with clear boundaries.
Callers can tell I/O failures apart from domain precondition failures.
"""

from __future__ import annotations


class FlatstoreError(Exception):
    """Base exception for all Flatstore failures."""


class FlatstoreConfigError(FlatstoreError):
    """Raised for invalid runtime configuration."""


class FlatstoreIOError(FlatstoreError):
    """Raised when a collection file or directory cannot be read or written."""


class FlatstoreCorruptionError(FlatstoreError):
    """Raised when a collection file holds malformed JSON content."""


class FlatstoreLockError(FlatstoreError):
    """Raised when a collection lock cannot be acquired in time."""


class FlatstorePreconditionError(FlatstoreError):
    """Raised when an operation is attempted on invalid domain state."""


class FlatstoreRelationError(FlatstorePreconditionError):
    """Raised when a relationship cannot be resolved from record attributes."""
