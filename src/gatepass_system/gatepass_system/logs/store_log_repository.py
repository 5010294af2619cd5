from __future__ import annotations

from typing import Sequence

from ..core.enums import Collection
from ..database.store import StoreBackedRepository
from .model import LogEntry
from .repository import LogRepository


class StoreLogRepository(StoreBackedRepository, LogRepository):
    collection = Collection.LOGS

    def append(self, entry: LogEntry) -> None:
        with self._mutate() as items:
            items.append(entry.to_record())

    def list_all(self) -> Sequence[LogEntry]:
        return [LogEntry.from_record(r) for r in self._load()]
