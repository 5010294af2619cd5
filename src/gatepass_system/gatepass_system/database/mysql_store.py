from __future__ import annotations

import json
import logging

import mysql.connector

from ..core.enums import Collection
from ..core.exceptions import StorageError
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchone

logger = logging.getLogger(__name__)

TABLE_NAME = "gatepass_collections"


class MySQLStore:
    """Keeps each collection as one JSON document row in `gatepass_collections`."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, collection: Collection) -> list[dict]:
        name = Collection(collection).value
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"SELECT payload FROM {TABLE_NAME} WHERE name=%s",
                    (name,),
                )
                row = fetchone(cur)
        except mysql.connector.Error as e:
            logger.error("Error reading collection %s: %s", name, e)
            raise StorageError(f"Cannot read {name}: {e}") from e

        if not row or not row.get("payload"):
            return []
        try:
            items = json.loads(row["payload"])
        except ValueError as e:
            raise StorageError(f"Corrupt {name} document") from e
        return list(items)

    def put(self, collection: Collection, items: list[dict]) -> None:
        name = Collection(collection).value
        payload = json.dumps(list(items), ensure_ascii=False)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO {TABLE_NAME}(name, payload)
                    VALUES(%s,%s)
                    ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                    """,
                    (name, payload),
                )
        except mysql.connector.Error as e:
            logger.error("Error writing collection %s: %s", name, e)
            raise StorageError(f"Cannot write {name}: {e}") from e
