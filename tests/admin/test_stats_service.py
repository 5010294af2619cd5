from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.gatepass_system.gatepass_system.admin.service import StatsService
from src.gatepass_system.gatepass_system.common.datetime_utils import resolve_timezone
from src.gatepass_system.gatepass_system.core.exceptions import ValidationError
from src.gatepass_system.gatepass_system.database.memory_store import InMemoryStore
from src.gatepass_system.gatepass_system.logs.service import ActivityLogger
from src.gatepass_system.gatepass_system.logs.store_log_repository import StoreLogRepository
from src.gatepass_system.gatepass_system.requests.service import RequestService
from src.gatepass_system.gatepass_system.requests.store_request_repository import StoreRequestRepository
from src.gatepass_system.gatepass_system.users.store_user_repository import StoreUserRepository

YESTERDAY = datetime(2026, 4, 5, 22, 0, 0, tzinfo=timezone.utc)
TODAY = datetime(2026, 4, 6, 9, 0, 0, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current


class CountingIds:
    def __init__(self):
        self._n = 0

    def new_id(self, prefix: str) -> str:
        self._n += 1
        return f"{prefix}{self._n}"


class FakeIssuer:
    def encode(self, payload) -> str:
        return "data:image/png;base64,FAKE"


def _make():
    store = InMemoryStore({"users": [{"id": "S1", "name": "Stu", "username": "s1", "passwordHash": "x", "role": "student"}]})
    clock = FixedClock(YESTERDAY)
    ids = CountingIds()
    requests = StoreRequestRepository(store)
    logs = StoreLogRepository(store)
    service = RequestService(requests, StoreUserRepository(store), FakeIssuer(), clock=clock, id_generator=ids)
    gate = ActivityLogger(requests, logs, clock=clock, id_generator=ids)
    stats = StatsService(requests, logs, clock=clock)
    return service, gate, stats, clock


def _new(service):
    return service.create_request(student_id="S1", reason="errand", expected_time="10:00", duration=1)


def test_dashboard_counts_only_todays_decisions_and_entries():
    service, gate, stats, clock = _make()

    old = _new(service)
    service.approve(request_id=old.request_id)
    gate.record_entry(pass_id=old.request_id, log_type="entry")
    old_rejected = _new(service)
    service.reject(request_id=old_rejected.request_id, reason="no")

    clock.current = TODAY
    fresh = _new(service)
    service.approve(request_id=fresh.request_id)
    gate.record_entry(pass_id=fresh.request_id, log_type="exit")
    gate.record_entry(pass_id=fresh.request_id, log_type="entry")
    rejected = _new(service)
    service.reject(request_id=rejected.request_id, reason="no")
    _new(service)

    assert stats.dashboard() == {
        "totalRequests": 5,
        "pendingRequests": 1,
        "approvedToday": 1,
        "rejectedToday": 1,
        "totalLogs": 3,
        "entryLogsToday": 1,
    }


def test_empty_dashboard():
    _, _, stats, _ = _make()
    assert stats.dashboard() == {
        "totalRequests": 0,
        "pendingRequests": 0,
        "approvedToday": 0,
        "rejectedToday": 0,
        "totalLogs": 0,
        "entryLogsToday": 0,
    }


def test_export_picks_collection_by_kind():
    service, gate, stats, _ = _make()
    req = _new(service)
    service.approve(request_id=req.request_id)
    gate.record_entry(pass_id=req.request_id, log_type="entry")

    logs = stats.export("logs")
    assert [row["passId"] for row in logs] == [req.request_id]

    for kind in ("requests", None, "anything"):
        rows = stats.export(kind)
        assert [row["id"] for row in rows] == [req.request_id]
        assert rows[0]["qrData"]["used"] is True


def test_decisions_are_measured_from_midnight():
    service, _, stats, clock = _make()
    clock.current = TODAY.replace(hour=0, minute=0) - timedelta(seconds=1)
    req = _new(service)
    service.approve(request_id=req.request_id)

    clock.current = TODAY
    assert stats.dashboard()["approvedToday"] == 0


def test_day_boundary_follows_clock_timezone():
    kolkata = resolve_timezone("Asia/Kolkata")
    # 20:00 UTC on the 5th is already 01:30 on the 6th in Kolkata
    approved_utc = datetime(2026, 4, 5, 20, 0, 0, tzinfo=timezone.utc)
    service, _, stats, clock = _make()
    clock.current = approved_utc.astimezone(kolkata)
    req = _new(service)
    service.approve(request_id=req.request_id)

    clock.current = datetime(2026, 4, 6, 9, 0, 0, tzinfo=kolkata)
    assert stats.dashboard()["approvedToday"] == 1

    # a UTC day started after the approval
    clock.current = datetime(2026, 4, 6, 9, 0, 0, tzinfo=timezone.utc)
    assert stats.dashboard()["approvedToday"] == 0


def test_timezone_names():
    assert resolve_timezone(None) is timezone.utc
    assert resolve_timezone("utc") is timezone.utc
    assert resolve_timezone("local") is not None
    assert datetime(2026, 1, 1, tzinfo=resolve_timezone("Asia/Kolkata")).utcoffset() == timedelta(hours=5, minutes=30)
    with pytest.raises(ValidationError):
        resolve_timezone("Mars/Olympus_Mons")
