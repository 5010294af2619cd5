from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import generate_password_hash

from ..common.ids import IdGenerator, TimeRandomIdGenerator
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .credentials import CredentialVerifier
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

USER_ID_PREFIX = "USR"


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, credentials: CredentialVerifier):
        self._credentials = credentials

    def authenticate(self, username: str, password: str) -> User:
        username = require_non_empty(username, "username")
        if not password:
            raise ValidationError("password is required")

        user = self._credentials.find_user(username, password)
        if not user:
            logger.warning("Failed login for %s", username)
            raise AuthenticationError("Invalid credentials")
        logger.info("User %s logged in as %s", user.user_id, user.role.value)
        return user


class UserService:
    """Use case: list and provision users (admin / seeding)."""

    def __init__(self, users: UserRepository, *, id_generator: Optional[IdGenerator] = None):
        self._users = users
        self._ids = id_generator or TimeRandomIdGenerator()

    def list_users(self) -> list[dict]:
        return [
            {
                "id": u.user_id,
                "name": u.name,
                "username": u.username,
                "role": u.role.value,
                "email": u.email,
            }
            for u in self._users.list_all()
        ]

    def create_user(
        self,
        *,
        name: str,
        username: str,
        password: str,
        role: Role | str,
        email: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> User:
        name = require_non_empty(name, "name")
        username = require_non_empty(username, "username")
        require_non_empty(password, "password")
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role}")

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user = User(
            user_id=user_id or self._ids.new_id(USER_ID_PREFIX),
            name=name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            email=(email or "").strip() or None,
        )
        self._users.create(user)
        logger.info("Provisioned %s user %s", role.value, user.user_id)
        return user
