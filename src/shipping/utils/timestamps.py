"""Timestamp normalisation shared by the domain and the HTTP schemas."""

from datetime import UTC, datetime


def as_utc(value: datetime | None) -> datetime | None:
    """Read a naive timestamp as UTC; aware timestamps pass through unchanged."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
