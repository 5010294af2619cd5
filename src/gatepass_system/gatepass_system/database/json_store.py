from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from ..core.enums import Collection
from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


class JsonFileStore:
    """All collections in one JSON document: {"users": [...], "requests": [...], "logs": [...]}.

    A missing file reads as empty collections. Writes go to a temp file that
    replaces the original, so readers never see a half-written document.
    """

    def __init__(self, path: os.PathLike | str):
        self._path = Path(path)
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict:
        if not self._path.exists():
            return {c.value: [] for c in Collection}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                doc = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Error reading store %s: %s", self._path, e)
            raise StorageError(f"Cannot read store: {e}") from e
        if not isinstance(doc, dict):
            raise StorageError("Store document must be a JSON object")
        for c in Collection:
            doc.setdefault(c.value, [])
        return doc

    def _write_document(self, doc: dict) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=str(self._path.parent), prefix=".store-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(doc, f, indent=2, ensure_ascii=False)
                os.replace(tmp, self._path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as e:
            logger.error("Error writing store %s: %s", self._path, e)
            raise StorageError(f"Cannot write store: {e}") from e

    def get(self, collection: Collection) -> list[dict]:
        with self._lock:
            return list(self._read_document()[Collection(collection).value])

    def put(self, collection: Collection, items: list[dict]) -> None:
        with self._lock:
            doc = self._read_document()
            doc[Collection(collection).value] = list(items)
            self._write_document(doc)
