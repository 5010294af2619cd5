from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Collection, RequestStatus
from ..database.store import StoreBackedRepository
from .model import LeaveRequest
from .repository import RequestRepository


class StoreRequestRepository(StoreBackedRepository, RequestRepository):
    collection = Collection.REQUESTS

    @staticmethod
    def _index_of(items: list[dict], request_id: str) -> Optional[int]:
        for i, r in enumerate(items):
            if str(r.get("id")) == str(request_id):
                return i
        return None

    def create(self, request: LeaveRequest) -> None:
        with self._mutate() as items:
            items.append(request.to_record())

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        items = self._load()
        i = self._index_of(items, request_id)
        return LeaveRequest.from_record(items[i]) if i is not None else None

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        out: list[LeaveRequest] = []
        for r in self._load():
            if status is not None and r.get("status") != status.value:
                continue
            if student_id is not None and str(r.get("studentId")) != str(student_id):
                continue
            out.append(LeaveRequest.from_record(r))
        return out

    def decide(self, request: LeaveRequest, *, expected: RequestStatus = RequestStatus.PENDING) -> bool:
        with self._lock:
            items = self._load()
            i = self._index_of(items, request.request_id)
            if i is None or items[i].get("status") != expected.value:
                return False
            items[i] = request.to_record()
            self._store.put(self.collection, items)
            return True

    def mark_pass_used(self, request_id: str) -> Optional[LeaveRequest]:
        with self._lock:
            items = self._load()
            i = self._index_of(items, request_id)
            if i is None:
                return None
            qr_data = items[i].get("qrData")
            if qr_data and not qr_data.get("used"):
                qr_data["used"] = True
                self._store.put(self.collection, items)
            return LeaveRequest.from_record(items[i])
