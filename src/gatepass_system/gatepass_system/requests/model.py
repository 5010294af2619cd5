from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..common.datetime_utils import parse_iso, to_iso
from ..core.enums import RequestStatus
from ..passes.model import PassPayload


@dataclass(frozen=True)
class LeaveRequest:
    """A student's leave request and, once approved, the gate pass it carries."""

    request_id: str
    student_id: str
    student_name: str
    reason: str
    expected_time: str
    duration: Union[int, float]
    status: RequestStatus
    created_at: datetime
    moderator_remarks: Optional[str] = None
    approved_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    rejected_at: Optional[datetime] = None
    pass_payload: Optional[PassPayload] = None
    qr_code: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    @classmethod
    def from_record(cls, r: dict) -> "LeaveRequest":
        qr_data = r.get("qrData")
        return cls(
            request_id=str(r["id"]),
            student_id=str(r["studentId"]),
            student_name=str(r.get("studentName") or ""),
            reason=str(r.get("reason") or ""),
            expected_time=str(r.get("expectedTime") or ""),
            duration=r.get("duration"),
            status=RequestStatus(r.get("status", RequestStatus.PENDING.value)),
            created_at=parse_iso(r.get("createdAt")),
            moderator_remarks=r.get("moderatorRemarks"),
            approved_at=parse_iso(r.get("approvedAt")),
            expires_at=parse_iso(r.get("expiresAt")),
            rejection_reason=r.get("rejectionReason"),
            rejected_at=parse_iso(r.get("rejectedAt")),
            pass_payload=PassPayload.from_dict(qr_data) if qr_data else None,
            qr_code=r.get("qrCode"),
        )

    def to_record(self) -> dict:
        out = {
            "id": self.request_id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "reason": self.reason,
            "expectedTime": self.expected_time,
            "duration": self.duration,
            "status": self.status.value,
            "createdAt": to_iso(self.created_at),
            "moderatorRemarks": self.moderator_remarks,
            "qrCode": self.qr_code,
            "expiresAt": to_iso(self.expires_at),
        }
        if self.approved_at is not None:
            out["approvedAt"] = to_iso(self.approved_at)
        if self.pass_payload is not None:
            out["qrData"] = self.pass_payload.to_dict()
        if self.rejection_reason is not None:
            out["rejectionReason"] = self.rejection_reason
        if self.rejected_at is not None:
            out["rejectedAt"] = to_iso(self.rejected_at)
        return out
