from __future__ import annotations

from typing import Optional, Protocol

from werkzeug.security import check_password_hash

from .model import User
from .repository import UserRepository


class CredentialVerifier(Protocol):
    def find_user(self, username: str, secret: str) -> Optional[User]:
        raise NotImplementedError


class HashedCredentialVerifier:
    """Looks the user up by username and checks the secret against its salted hash."""

    def __init__(self, users: UserRepository):
        self._users = users

    def find_user(self, username: str, secret: str) -> Optional[User]:
        user = self._users.get_by_username(username)
        if not user or not user.password_hash:
            return None
        try:
            ok = check_password_hash(user.password_hash, secret)
        except ValueError:
            # e.g. placeholder hashes or an unknown hashing method
            ok = False
        return user if ok else None
