from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol

from ..core.enums import Collection


class Store(Protocol):
    """Whole-collection document store.

    There is no partial update API: callers read a collection, change it and
    write the full list back. Failures are raised as StorageError.
    """

    def get(self, collection: Collection) -> list[dict]:
        raise NotImplementedError

    def put(self, collection: Collection, items: list[dict]) -> None:
        raise NotImplementedError


class StoreBackedRepository:
    """Base for repositories that own one collection of a Store."""

    collection: Collection

    def __init__(self, store: Store, *, lock: Optional[threading.RLock] = None):
        self._store = store
        self._lock = lock or threading.RLock()

    def _load(self) -> list[dict]:
        return self._store.get(self.collection)

    @contextmanager
    def _mutate(self) -> Iterator[list[dict]]:
        """Read-modify-write under the collection lock; writes only on success."""
        with self._lock:
            items = self._load()
            yield items
            self._store.put(self.collection, items)
