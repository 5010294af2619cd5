from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import Clock, SystemClock, start_of_day
from ..core.enums import LogType, RequestStatus
from ..logs.repository import LogRepository
from ..requests.repository import RequestRepository


class StatsService:
    """Admin dashboard counters and raw exports."""

    def __init__(self, requests: RequestRepository, logs: LogRepository, *, clock: Optional[Clock] = None):
        self._requests = requests
        self._logs = logs
        self._clock = clock or SystemClock()

    def dashboard(self) -> dict:
        today = start_of_day(self._clock.now())
        requests = self._requests.list_requests()
        logs = self._logs.list_all()

        return {
            "totalRequests": len(requests),
            "pendingRequests": sum(1 for r in requests if r.status == RequestStatus.PENDING),
            "approvedToday": sum(
                1 for r in requests
                if r.status == RequestStatus.APPROVED and r.approved_at and r.approved_at >= today
            ),
            "rejectedToday": sum(
                1 for r in requests
                if r.status == RequestStatus.REJECTED and r.rejected_at and r.rejected_at >= today
            ),
            "totalLogs": len(logs),
            "entryLogsToday": sum(
                1 for l in logs
                if l.log_type == LogType.ENTRY and l.timestamp and l.timestamp >= today
            ),
        }

    def export(self, kind: Optional[str]) -> list[dict]:
        if kind == "logs":
            return [l.to_record() for l in self._logs.list_all()]
        return [r.to_record() for r in self._requests.list_requests()]
