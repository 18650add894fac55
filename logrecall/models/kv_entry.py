"""Key-value entry model for small client-owned blobs."""

from sqlalchemy import JSON, Column, Integer, String

from logrecall.database import Base
from logrecall.models.mixins import TimestampMixin


class KeyValueEntry(Base, TimestampMixin):
    """A JSON value stored under a fixed string key.

    Used as durable storage for the save-suggestion dismissal record
    ({"hashes": [...], "count": n}), which lives under a single key.
    """

    __tablename__ = "kv_entries"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(255), nullable=False, unique=True, index=True)
    value = Column(JSON, nullable=True)
