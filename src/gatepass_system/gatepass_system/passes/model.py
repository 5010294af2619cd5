from __future__ import annotations

import json
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_iso, to_iso


@dataclass(frozen=True)
class PassPayload:
    """What the QR code carries. Owned by its LeaveRequest; pass_id is the request id."""

    pass_id: str
    student_id: str
    student_name: str
    reason: str
    approved_at: datetime
    expires_at: datetime
    used: bool = False

    def to_dict(self) -> dict:
        return {
            "passId": self.pass_id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "reason": self.reason,
            "approvedAt": to_iso(self.approved_at),
            "expiresAt": to_iso(self.expires_at),
            "used": self.used,
        }

    def to_json(self) -> str:
        """Canonical serialized form: compact JSON in field order."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_dict(cls, d: dict) -> "PassPayload":
        return cls(
            pass_id=str(d["passId"]),
            student_id=str(d.get("studentId") or ""),
            student_name=str(d.get("studentName") or ""),
            reason=str(d.get("reason") or ""),
            approved_at=parse_iso(d.get("approvedAt")),
            expires_at=parse_iso(d["expiresAt"]),
            used=bool(d.get("used", False)),
        )

    def mark_used(self) -> "PassPayload":
        return self if self.used else replace(self, used=True)


@dataclass(frozen=True)
class VerificationResult:
    valid: bool
    message: str
    color: str
    details: Optional[dict] = None

    def to_dict(self) -> dict:
        out = {"valid": self.valid, "message": self.message, "color": self.color}
        if self.details is not None:
            out["details"] = self.details
        return out
