from __future__ import annotations

import json
import logging
from typing import Union

from ..common.datetime_utils import Clock, SystemClock
from ..core.constants import (
    COLOR_INVALID,
    COLOR_VALID,
    MSG_INVALID_QR,
    MSG_PASS_EXPIRED,
    MSG_PASS_NOT_APPROVED,
    MSG_PASS_NOT_FOUND,
    MSG_PASS_USED,
    MSG_PASS_VALID,
)
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError
from ..requests.repository import RequestRepository
from .model import PassPayload, VerificationResult

logger = logging.getLogger(__name__)


def parse_scanned_payload(raw: Union[str, bytes, dict]) -> tuple[dict, PassPayload]:
    """Return (payload as scanned, parsed payload) or raise ValidationError."""
    try:
        data = raw if isinstance(raw, dict) else json.loads(raw)
    except (TypeError, ValueError):
        raise ValidationError(MSG_INVALID_QR)
    if not isinstance(data, dict) or not data.get("passId") or not data.get("expiresAt"):
        raise ValidationError(MSG_INVALID_QR)
    try:
        payload = PassPayload.from_dict(data)
    except (KeyError, TypeError, ValueError):
        raise ValidationError(MSG_INVALID_QR)
    return data, payload


class PassVerifier:
    """Gatekeeper check of a scanned pass.

    Checks run in a fixed order (existence, approval, single use, expiry) and
    the first failing one decides the result. The scanned payload is the
    input; the copy stored on the request can only make the outcome stricter.
    """

    def __init__(self, requests: RequestRepository, *, clock: Clock | None = None):
        self._requests = requests
        self._clock = clock or SystemClock()

    def verify(self, raw: Union[str, bytes, dict]) -> VerificationResult:
        scanned, payload = parse_scanned_payload(raw)

        request = self._requests.get_by_id(payload.pass_id)
        if request is None:
            return self._deny(payload, MSG_PASS_NOT_FOUND)

        if request.status != RequestStatus.APPROVED:
            return self._deny(payload, MSG_PASS_NOT_APPROVED)

        stored = request.pass_payload
        if payload.used or (stored is not None and stored.used):
            return self._deny(payload, MSG_PASS_USED)

        expires_at = payload.expires_at
        if stored is not None and stored.expires_at < expires_at:
            expires_at = stored.expires_at
        if self._clock.now() > expires_at:
            return self._deny(payload, MSG_PASS_EXPIRED, details=scanned)

        logger.info("Pass %s verified", payload.pass_id)
        return VerificationResult(valid=True, message=MSG_PASS_VALID, color=COLOR_VALID, details=scanned)

    @staticmethod
    def _deny(payload: PassPayload, message: str, *, details: dict | None = None) -> VerificationResult:
        logger.warning("Pass %s rejected at gate: %s", payload.pass_id, message)
        return VerificationResult(valid=False, message=message, color=COLOR_INVALID, details=details)
