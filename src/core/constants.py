"""Core constants used across Flatstore modules.

This module centralizes file layout, field names, and defaults.
Keeping values here avoids magic literals in storage logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path("data")
DEFAULT_JSON_INDENT = 4
DEFAULT_LOCK_TIMEOUT_SECONDS = 10.0
COLLECTION_FILE_SUFFIX = ".json"
TEMP_FILE_SUFFIX = ".tmp"
DATA_DIR_MODE = 0o755
NEW_FILE_MODE = 0o666
TIMESTAMP_FORMAT = "%d-%m-%y %H:%M:%S"
PRIMARY_KEY_FIELD = "id"
CREATED_AT_FIELD = "created_at"
UPDATED_AT_FIELD = "updated_at"
FOREIGN_KEY_SUFFIX = "_id"
FIRST_RECORD_ID = 1
OPERATOR_EQUALS = "="
OPERATOR_NOT_EQUALS = "!="
OPERATOR_GREATER_THAN = ">"
OPERATOR_LESS_THAN = "<"
OPERATOR_LIKE = "LIKE"
SUPPORTED_OPERATORS = (
    OPERATOR_EQUALS,
    OPERATOR_NOT_EQUALS,
    OPERATOR_GREATER_THAN,
    OPERATOR_LESS_THAN,
    OPERATOR_LIKE,
)
LIKE_WILDCARD = "%"
