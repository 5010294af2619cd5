from __future__ import annotations

from typing import Protocol, Sequence

from .model import LogEntry


class LogRepository(Protocol):
    def append(self, entry: LogEntry) -> None:
        raise NotImplementedError

    def list_all(self) -> Sequence[LogEntry]:
        raise NotImplementedError
