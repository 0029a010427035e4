"""Record timestamp formatting."""

from __future__ import annotations

from datetime import datetime

from core.constants import TIMESTAMP_FORMAT


def format_timestamp(moment: datetime | None = None) -> str:
    """Render a record timestamp in day-first two-digit-year form.

    Args:
        moment: Time to render; local now when omitted.

    Returns:
        Timestamp string such as ``19-10-26 14:03:59``.
    """
    return (moment or datetime.now()).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """Parse a record timestamp produced by ``format_timestamp``."""
    return datetime.strptime(value, TIMESTAMP_FORMAT)
