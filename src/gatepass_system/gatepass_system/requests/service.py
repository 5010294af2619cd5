from __future__ import annotations

import logging
from dataclasses import replace
from datetime import timedelta
from typing import Any, Optional

from ..common.datetime_utils import Clock, SystemClock
from ..common.ids import IdGenerator, TimeRandomIdGenerator
from ..common.locks import KeyedLock
from ..common.validators import require_non_empty, require_positive_hours
from ..core.constants import DEFAULT_APPROVAL_REMARKS, REQUEST_ID_PREFIX
from ..core.enums import RequestStatus, Role
from ..core.exceptions import InvalidStateError, NotFoundError
from ..passes.issuer import PassIssuer
from ..passes.model import PassPayload
from ..users.repository import UserRepository
from .model import LeaveRequest
from .repository import RequestRepository

logger = logging.getLogger(__name__)


def _clean_remarks(remarks: Any) -> str:
    text = "" if remarks is None else str(remarks).strip()
    return text or DEFAULT_APPROVAL_REMARKS


class RequestService:
    """Leave request lifecycle: pending -> approved | rejected, each at most once."""

    def __init__(
        self,
        requests: RequestRepository,
        users: UserRepository,
        issuer: PassIssuer,
        *,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
        locks: Optional[KeyedLock] = None,
    ):
        self._requests = requests
        self._users = users
        self._issuer = issuer
        self._clock = clock or SystemClock()
        self._ids = id_generator or TimeRandomIdGenerator()
        self._locks = locks or KeyedLock()

    def create_request(
        self,
        *,
        student_id: Any,
        reason: Any,
        expected_time: Any,
        duration: Any,
    ) -> LeaveRequest:
        student_id = require_non_empty(student_id, "studentId")
        reason = require_non_empty(reason, "reason")
        expected_time = require_non_empty(expected_time, "expectedTime")
        hours = require_positive_hours(duration, "duration")

        student = self._users.get_by_id(student_id)
        if not student or student.role != Role.STUDENT:
            raise NotFoundError("Student not found")

        request = LeaveRequest(
            request_id=self._ids.new_id(REQUEST_ID_PREFIX),
            student_id=student.user_id,
            student_name=student.name,
            reason=reason,
            expected_time=expected_time,
            duration=hours,
            status=RequestStatus.PENDING,
            created_at=self._clock.now(),
        )
        self._requests.create(request)
        logger.info("Request %s created for student %s (%sh)", request.request_id, student.user_id, hours)
        return request

    def list_by_student(self, student_id: str) -> list[LeaveRequest]:
        return list(self._requests.list_requests(student_id=str(student_id)))

    def list_pending(self) -> list[LeaveRequest]:
        return list(self._requests.list_requests(status=RequestStatus.PENDING))

    def list_all(self) -> list[LeaveRequest]:
        return list(self._requests.list_requests())

    def _get_pending(self, request_id: str) -> LeaveRequest:
        req = self._requests.get_by_id(request_id)
        if not req:
            raise NotFoundError("Request not found")
        if not req.is_pending:
            logger.warning("Request %s already %s", request_id, req.status.value)
            raise InvalidStateError("Request already processed")
        return req

    def _commit(self, decided: LeaveRequest) -> LeaveRequest:
        if not self._requests.decide(decided, expected=RequestStatus.PENDING):
            raise InvalidStateError("Request already processed")
        return decided

    def approve(self, *, request_id: Any, remarks: Any = None) -> LeaveRequest:
        request_id = require_non_empty(request_id, "requestId")

        with self._locks.hold(request_id):
            req = self._get_pending(request_id)

            approved_at = self._clock.now()
            expires_at = approved_at + timedelta(hours=float(req.duration))
            payload = PassPayload(
                pass_id=req.request_id,
                student_id=req.student_id,
                student_name=req.student_name,
                reason=req.reason,
                approved_at=approved_at,
                expires_at=expires_at,
                used=False,
            )
            # EncodingError propagates before anything is written.
            qr_code = self._issuer.encode(payload)

            approved = self._commit(
                replace(
                    req,
                    status=RequestStatus.APPROVED,
                    moderator_remarks=_clean_remarks(remarks),
                    approved_at=approved_at,
                    expires_at=expires_at,
                    pass_payload=payload,
                    qr_code=qr_code,
                )
            )

        logger.info("Request %s approved, pass valid until %s", request_id, expires_at.isoformat())
        return approved

    def reject(self, *, request_id: Any, reason: Any) -> LeaveRequest:
        request_id = require_non_empty(request_id, "requestId")
        reason = require_non_empty(reason, "reason")

        with self._locks.hold(request_id):
            req = self._get_pending(request_id)
            rejected = self._commit(
                replace(
                    req,
                    status=RequestStatus.REJECTED,
                    rejection_reason=reason,
                    rejected_at=self._clock.now(),
                )
            )

        logger.info("Request %s rejected", request_id)
        return rejected
