from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from ..core.enums import Role
from ..users.service import UserService
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

# (user id, display name, username, role, email); the password comes from DEMO_PASSWORD.
DEMO_USERS: tuple[tuple[str, str, str, Role, str], ...] = (
    ("STU001", "Demo Student", "student1", Role.STUDENT, "student1@example.edu"),
    ("MOD001", "Demo Moderator", "moderator1", Role.MODERATOR, "moderator1@example.edu"),
    ("GATE001", "Demo Gatekeeper", "gatekeeper1", Role.GATEKEEPER, "gatekeeper1@example.edu"),
    ("ADM001", "Demo Admin", "admin1", Role.ADMIN, "admin1@example.edu"),
)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # schema.sql holds no ';' inside literals, so a plain split is enough.
    for part in sql.split(";"):
        lines = [ln for ln in part.splitlines() if ln.strip() and not ln.strip().startswith("--")]
        stmt = "\n".join(lines).strip()
        if stmt:
            yield stmt


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Create the database if needed, then run schema.sql (idempotent)."""
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    database = conn_factory.config.database

    conn = conn_factory.connect(use_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()

    sql = Path(schema_path).read_text(encoding="utf-8")
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to %s", database)


def ensure_demo_users(user_service: UserService, *, password: str | None = None) -> list[str]:
    """Provision the demo accounts that are missing. Returns the usernames created."""
    password = password or os.getenv("DEMO_PASSWORD", "changeme123")
    existing = {u["username"] for u in user_service.list_users()}

    created: list[str] = []
    for user_id, name, username, role, email in DEMO_USERS:
        if username in existing:
            continue
        user_service.create_user(
            user_id=user_id,
            name=name,
            username=username,
            password=password,
            role=role,
            email=email,
        )
        created.append(username)
    return created
