from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles, stored as lower-case strings."""

    STUDENT = "student"
    MODERATOR = "moderator"
    GATEKEEPER = "gatekeeper"
    ADMIN = "admin"


class RequestStatus(str, Enum):
    """Leave request lifecycle. APPROVED and REJECTED are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LogType(str, Enum):
    ENTRY = "entry"
    EXIT = "exit"


class Collection(str, Enum):
    """Top-level collections held by the document store."""

    USERS = "users"
    REQUESTS = "requests"
    LOGS = "logs"
