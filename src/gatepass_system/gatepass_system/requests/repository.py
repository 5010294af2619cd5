from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import LeaveRequest


class RequestRepository(Protocol):
    def create(self, request: LeaveRequest) -> None:
        raise NotImplementedError

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        """Storage order, no sort."""

        raise NotImplementedError

    def decide(self, request: LeaveRequest, *, expected: RequestStatus = RequestStatus.PENDING) -> bool:
        """Replace the stored request only if its stored status is still `expected`.

        Returns False when the request is missing or was already decided.
        """

        raise NotImplementedError

    def mark_pass_used(self, request_id: str) -> Optional[LeaveRequest]:
        """Set the embedded pass's used flag; returns the request (None if missing)."""

        raise NotImplementedError
