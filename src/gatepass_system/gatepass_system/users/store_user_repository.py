from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Collection
from ..database.store import StoreBackedRepository
from .model import User
from .repository import UserRepository


class StoreUserRepository(StoreBackedRepository, UserRepository):
    collection = Collection.USERS

    def get_by_id(self, user_id: str) -> Optional[User]:
        for r in self._load():
            if str(r.get("id")) == str(user_id):
                return User.from_record(r)
        return None

    def get_by_username(self, username: str) -> Optional[User]:
        for r in self._load():
            if r.get("username") == username:
                return User.from_record(r)
        return None

    def list_all(self) -> Sequence[User]:
        return [User.from_record(r) for r in self._load()]

    def create(self, user: User) -> None:
        with self._mutate() as items:
            items.append(user.to_record())
