"""Track save suggestions the user has dismissed."""

import logging
from typing import Any, Protocol

from sqlalchemy.orm import Session

from logrecall.config import get_settings
from logrecall.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Durable storage for small JSON-compatible values."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class InMemoryKeyValueStore:
    """Process-local store, for tests and embedded use."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


class SQLKeyValueStore:
    """Store backed by the kv_entries table."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Any | None:
        entry = self.db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
        return entry.value if entry else None

    def set(self, key: str, value: Any) -> None:
        entry = self.db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
        if entry:
            entry.value = value
        else:
            self.db.add(KeyValueEntry(key=key, value=value))
        self.db.commit()


class DismissalTracker:
    """Remember dismissed suggestions and count "Not now" clicks.

    The record is one blob under a fixed key: {"hashes": [...], "count": n}.
    Hashes only ever get added and the count only ever grows. Resetting is
    left to the host application, which can clear the key in its own store.
    """

    def __init__(
        self,
        store: KeyValueStore,
        storage_key: str | None = None,
        opt_out_threshold: int | None = None,
    ):
        settings = get_settings()
        self.store = store
        self.storage_key = storage_key if storage_key is not None else settings.dismissal_storage_key
        self.opt_out_threshold = (
            opt_out_threshold if opt_out_threshold is not None else settings.opt_out_threshold
        )

    def _load(self) -> tuple[set[str], int]:
        raw = self.store.get(self.storage_key)
        if raw is None:
            return set(), 0

        try:
            hashes = raw["hashes"]
            count = int(raw["count"])
            if not isinstance(hashes, list) or not all(isinstance(h, str) for h in hashes):
                raise TypeError("hashes must be a list of strings")
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable dismissal record '{self.storage_key}': {e}")
            return set(), 0

        return set(hashes), max(count, 0)

    def _save(self, hashes: set[str], count: int) -> None:
        self.store.set(self.storage_key, {"hashes": sorted(hashes), "count": count})

    def is_dismissed(self, signature_hash: str) -> bool:
        """Check if a suggestion has been dismissed before."""
        hashes, _ = self._load()
        return signature_hash in hashes

    def dismiss(self, signature_hash: str) -> int:
        """Dismiss a suggestion and return the new dismissal count."""
        hashes, count = self._load()
        hashes.add(signature_hash)
        count += 1
        self._save(hashes, count)
        logger.info(f"Dismissed save suggestion {signature_hash} (dismissals: {count})")
        return count

    def get_dismissal_count(self) -> int:
        """Get the total number of dismissals."""
        _, count = self._load()
        return count

    def should_show_opt_out_link(self) -> bool:
        """Check if the user has dismissed enough to be offered an opt-out."""
        return self.get_dismissal_count() >= self.opt_out_threshold
