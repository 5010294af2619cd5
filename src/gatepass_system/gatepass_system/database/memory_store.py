from __future__ import annotations

import copy
import threading
from typing import Iterable, Optional

from ..core.enums import Collection


class InMemoryStore:
    """Process-local store. Hands out copies so callers cannot mutate state in place."""

    def __init__(self, initial: Optional[dict[str, Iterable[dict]]] = None):
        self._lock = threading.Lock()
        self._data: dict[Collection, list[dict]] = {c: [] for c in Collection}
        for name, items in (initial or {}).items():
            self._data[Collection(name)] = [dict(i) for i in items]

    def get(self, collection: Collection) -> list[dict]:
        with self._lock:
            return copy.deepcopy(self._data[Collection(collection)])

    def put(self, collection: Collection, items: list[dict]) -> None:
        with self._lock:
            self._data[Collection(collection)] = copy.deepcopy(list(items))
