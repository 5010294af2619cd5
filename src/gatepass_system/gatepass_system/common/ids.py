from __future__ import annotations

import secrets
import threading
import time
from typing import Protocol


class IdGenerator(Protocol):
    def new_id(self, prefix: str) -> str:
        raise NotImplementedError


class TimeRandomIdGenerator:
    """Prefix + epoch milliseconds + 3-digit random suffix, e.g. REQ1718000000000042.

    Ids are unique within an instance. Only ids of the current millisecond are
    remembered; the millisecond used never moves backwards.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._millis = -1
        self._issued: set[str] = set()

    def new_id(self, prefix: str) -> str:
        with self._lock:
            while True:
                millis = max(int(time.time() * 1000), self._millis)
                if millis != self._millis:
                    self._millis = millis
                    self._issued.clear()
                candidate = f"{prefix}{millis}{secrets.randbelow(1000):03d}"
                if candidate not in self._issued:
                    self._issued.add(candidate)
                    return candidate
