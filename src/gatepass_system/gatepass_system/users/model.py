from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: `password_hash` is a salted werkzeug hash, never the plain secret.
    """

    user_id: str
    name: str
    username: str
    password_hash: str
    role: Role
    email: Optional[str] = None

    @classmethod
    def from_record(cls, r: dict) -> "User":
        return cls(
            user_id=str(r["id"]),
            name=str(r.get("name") or ""),
            username=str(r.get("username") or ""),
            password_hash=str(r.get("passwordHash") or ""),
            role=Role(r["role"]),
            email=r.get("email"),
        )

    def to_record(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "username": self.username,
            "passwordHash": self.password_hash,
            "role": self.role.value,
            "email": self.email,
        }

    def public_view(self) -> dict:
        """What login hands back to the client."""
        return {
            "id": self.user_id,
            "name": self.name,
            "role": self.role.value,
            "email": self.email,
        }
