from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.datetime_utils import Clock, SystemClock
from ..common.ids import IdGenerator, TimeRandomIdGenerator
from ..common.locks import KeyedLock
from ..common.validators import require_non_empty
from ..core.constants import LOG_ID_PREFIX
from ..core.enums import LogType
from ..core.exceptions import NotFoundError, ValidationError
from ..requests.repository import RequestRepository
from .model import LogEntry
from .repository import LogRepository

logger = logging.getLogger(__name__)


class ActivityLogger:
    """Records gate entry/exit and consumes the pass on its first use."""

    def __init__(
        self,
        requests: RequestRepository,
        logs: LogRepository,
        *,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
        locks: Optional[KeyedLock] = None,
    ):
        self._requests = requests
        self._logs = logs
        self._clock = clock or SystemClock()
        self._ids = id_generator or TimeRandomIdGenerator()
        self._locks = locks or KeyedLock()

    def record_entry(self, *, pass_id: Any, log_type: Any) -> LogEntry:
        pass_id = require_non_empty(pass_id, "passId")
        raw_type = require_non_empty(log_type, "type")
        try:
            kind = LogType(raw_type)
        except ValueError:
            raise ValidationError("type must be 'entry' or 'exit'")

        with self._locks.hold(pass_id):
            request = self._requests.get_by_id(pass_id)
            if not request:
                raise NotFoundError("Pass not found")

            if request.pass_payload is not None:
                self._requests.mark_pass_used(pass_id)

            entry = LogEntry(
                log_id=self._ids.new_id(LOG_ID_PREFIX),
                pass_id=request.request_id,
                student_id=request.student_id,
                student_name=request.student_name,
                log_type=kind,
                timestamp=self._clock.now(),
                reason=request.reason,
            )
            self._logs.append(entry)

        logger.info("Logged %s for pass %s", kind.value, pass_id)
        return entry

    def list_logs(self) -> list[LogEntry]:
        return list(self._logs.list_all())
