"""SQLAlchemy models."""

from logrecall.models.kv_entry import KeyValueEntry

__all__ = [
    "KeyValueEntry",
]
