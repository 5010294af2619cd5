from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Optional

from .admin.service import StatsService
from .common.datetime_utils import Clock, SystemClock
from .common.ids import IdGenerator, TimeRandomIdGenerator
from .common.locks import KeyedLock
from .core.constants import DEFAULT_ENCODE_TIMEOUT_SECONDS
from .core.enums import Collection
from .core.exceptions import StorageError, ValidationError
from .database.connection import DatabaseConnection, DBConfig
from .database.json_store import JsonFileStore
from .database.memory_store import InMemoryStore
from .database.mysql_store import MySQLStore
from .database.store import Store
from .logs.service import ActivityLogger
from .logs.store_log_repository import StoreLogRepository
from .passes.issuer import PassIssuer, QRCodePassIssuer
from .passes.verifier import PassVerifier
from .requests.service import RequestService
from .requests.store_request_repository import StoreRequestRepository
from .users.credentials import HashedCredentialVerifier
from .users.service import AuthService, UserService
from .users.store_user_repository import StoreUserRepository


@dataclass(frozen=True)
class Container:
    store: Store

    users_repo: StoreUserRepository
    requests_repo: StoreRequestRepository
    logs_repo: StoreLogRepository

    auth_service: AuthService
    user_service: UserService
    request_service: RequestService
    pass_issuer: PassIssuer
    pass_verifier: PassVerifier
    activity_logger: ActivityLogger
    stats_service: StatsService

    def store_ok(self) -> bool:
        try:
            self.store.get(Collection.USERS)
            return True
        except StorageError:
            return False


def build_store(settings: Any) -> Store:
    """Pick the store backend named by STORE_BACKEND (json | mysql | memory)."""
    backend = str(getattr(settings, "STORE_BACKEND", "json")).lower()
    if backend == "json":
        return JsonFileStore(getattr(settings, "DATA_PATH"))
    if backend == "mysql":
        return MySQLStore(DatabaseConnection(DBConfig.from_dict(getattr(settings, "DB_CONFIG"))))
    if backend == "memory":
        return InMemoryStore()
    raise ValidationError(f"Unknown STORE_BACKEND: {backend}")


def build_container(
    *,
    store: Store,
    clock: Optional[Clock] = None,
    id_generator: Optional[IdGenerator] = None,
    issuer: Optional[PassIssuer] = None,
    encode_timeout: Optional[float] = DEFAULT_ENCODE_TIMEOUT_SECONDS,
    qr_box_size: int = 10,
    qr_border: int = 2,
) -> Container:
    clock = clock or SystemClock()
    id_generator = id_generator or TimeRandomIdGenerator()
    locks = KeyedLock()

    users_repo = StoreUserRepository(store, lock=threading.RLock())
    requests_repo = StoreRequestRepository(store, lock=threading.RLock())
    logs_repo = StoreLogRepository(store, lock=threading.RLock())

    pass_issuer = issuer or QRCodePassIssuer(box_size=qr_box_size, border=qr_border, timeout_seconds=encode_timeout)

    auth_service = AuthService(HashedCredentialVerifier(users_repo))
    user_service = UserService(users_repo, id_generator=id_generator)
    request_service = RequestService(
        requests_repo,
        users_repo,
        pass_issuer,
        clock=clock,
        id_generator=id_generator,
        locks=locks,
    )
    pass_verifier = PassVerifier(requests_repo, clock=clock)
    activity_logger = ActivityLogger(
        requests_repo,
        logs_repo,
        clock=clock,
        id_generator=id_generator,
        locks=locks,
    )
    stats_service = StatsService(requests_repo, logs_repo, clock=clock)

    return Container(
        store=store,
        users_repo=users_repo,
        requests_repo=requests_repo,
        logs_repo=logs_repo,
        auth_service=auth_service,
        user_service=user_service,
        request_service=request_service,
        pass_issuer=pass_issuer,
        pass_verifier=pass_verifier,
        activity_logger=activity_logger,
        stats_service=stats_service,
    )
