from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Union

from ..common.datetime_utils import parse_iso, to_iso
from ..core.enums import LogType


def _read_type(raw) -> Union[LogType, str]:
    # Older records may carry free-form types; only new writes are restricted.
    try:
        return LogType(raw)
    except ValueError:
        return str(raw or "")


@dataclass(frozen=True)
class LogEntry:
    """Gate entry/exit record. Append-only; fields are snapshots of the request."""

    log_id: str
    pass_id: str
    student_id: str
    student_name: str
    log_type: Union[LogType, str]
    timestamp: datetime
    reason: str

    @classmethod
    def from_record(cls, r: dict) -> "LogEntry":
        return cls(
            log_id=str(r["id"]),
            pass_id=str(r["passId"]),
            student_id=str(r.get("studentId") or ""),
            student_name=str(r.get("studentName") or ""),
            log_type=_read_type(r.get("type")),
            timestamp=parse_iso(r.get("timestamp")),
            reason=str(r.get("reason") or ""),
        )

    def to_record(self) -> dict:
        return {
            "id": self.log_id,
            "passId": self.pass_id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "type": getattr(self.log_type, "value", self.log_type),
            "timestamp": to_iso(self.timestamp),
            "reason": self.reason,
        }
