from __future__ import annotations

import pytest

from src.gatepass_system.gatepass_system.core.enums import Collection, Role
from src.gatepass_system.gatepass_system.core.exceptions import (
    AuthenticationError,
    NotFoundError,
    ValidationError,
)
from src.gatepass_system.gatepass_system.database.bootstrap import DEMO_USERS, ensure_demo_users
from src.gatepass_system.gatepass_system.database.memory_store import InMemoryStore
from src.gatepass_system.gatepass_system.users.credentials import HashedCredentialVerifier
from src.gatepass_system.gatepass_system.users.service import AuthService, UserService
from src.gatepass_system.gatepass_system.users.store_user_repository import StoreUserRepository


def _make():
    store = InMemoryStore()
    users = StoreUserRepository(store)
    user_service = UserService(users)
    auth = AuthService(HashedCredentialVerifier(users))
    user_service.create_user(
        user_id="S1",
        name="Stu Dent",
        username="student1",
        password="s3cret-pass",
        role="student",
        email="s1@example.edu",
    )
    return store, user_service, auth


def test_login_with_correct_password():
    _, _, auth = _make()
    user = auth.authenticate("student1", "s3cret-pass")

    assert user.user_id == "S1"
    assert user.role == Role.STUDENT
    assert user.public_view() == {"id": "S1", "name": "Stu Dent", "role": "student", "email": "s1@example.edu"}


@pytest.mark.parametrize("username,password", [("student1", "wrong"), ("nobody", "s3cret-pass")])
def test_bad_credentials(username, password):
    _, _, auth = _make()
    with pytest.raises(AuthenticationError) as exc:
        auth.authenticate(username, password)
    assert isinstance(exc.value, NotFoundError)


@pytest.mark.parametrize("username,password", [("", "x"), ("student1", "")])
def test_login_requires_both_fields(username, password):
    _, _, auth = _make()
    with pytest.raises(ValidationError):
        auth.authenticate(username, password)


def test_secret_is_stored_hashed():
    store, _, _ = _make()
    (row,) = store.get(Collection.USERS)
    assert row["passwordHash"] != "s3cret-pass"
    assert "password" not in row


def test_placeholder_hash_never_matches():
    store = InMemoryStore({"users": [{"id": "U1", "name": "Old", "username": "old", "passwordHash": "CHANGE_ME", "role": "admin"}]})
    auth = AuthService(HashedCredentialVerifier(StoreUserRepository(store)))
    with pytest.raises(AuthenticationError):
        auth.authenticate("old", "CHANGE_ME")


def test_user_listing_has_no_secrets():
    _, user_service, _ = _make()
    assert user_service.list_users() == [
        {"id": "S1", "name": "Stu Dent", "username": "student1", "role": "student", "email": "s1@example.edu"}
    ]


def test_duplicate_username_and_unknown_role_are_rejected():
    _, user_service, _ = _make()
    with pytest.raises(ValidationError):
        user_service.create_user(name="X", username="student1", password="p", role="student")
    with pytest.raises(ValidationError):
        user_service.create_user(name="X", username="x1", password="p", role="janitor")


def test_demo_users_are_provisioned_once():
    store = InMemoryStore()
    user_service = UserService(StoreUserRepository(store))

    created = ensure_demo_users(user_service, password="demo-pass")
    assert created == [u[2] for u in DEMO_USERS]
    assert ensure_demo_users(user_service, password="demo-pass") == []
    assert {u["role"] for u in user_service.list_users()} == {"student", "moderator", "gatekeeper", "admin"}
