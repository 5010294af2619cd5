from __future__ import annotations

import base64
import io
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import Optional, Protocol

import qrcode

from ..core.constants import DEFAULT_ENCODE_TIMEOUT_SECONDS
from ..core.exceptions import EncodingError
from .model import PassPayload

logger = logging.getLogger(__name__)


class PassIssuer(Protocol):
    def encode(self, payload: PassPayload) -> str:
        """Return an opaque, scannable representation of the payload."""

        raise NotImplementedError


class QRCodePassIssuer:
    """Renders the payload's canonical JSON as a PNG QR code data URL.

    Rendering runs on a worker thread; once `timeout_seconds` elapses the
    caller gets EncodingError and stops waiting.
    """

    def __init__(
        self,
        *,
        box_size: int = 10,
        border: int = 2,
        timeout_seconds: Optional[float] = DEFAULT_ENCODE_TIMEOUT_SECONDS,
    ):
        self._box_size = int(box_size)
        self._border = int(border)
        self._timeout = timeout_seconds
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    def _render(self, data: str) -> str:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=self._box_size,
            border=self._border,
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")

    def encode(self, payload: PassPayload) -> str:
        data = payload.to_json()
        if not self._timeout:
            try:
                return self._render(data)
            except Exception as e:
                logger.error("QR encoding failed for %s: %s", payload.pass_id, e)
                raise EncodingError("Failed to generate QR code") from e

        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="qr-encode")
            executor = self._executor
            future = executor.submit(self._render, data)
        try:
            return future.result(timeout=self._timeout)
        except FuturesTimeout:
            # A running render cannot be cancelled; later encodes get a fresh pool.
            with self._executor_lock:
                if self._executor is executor:
                    self._executor = None
            executor.shutdown(wait=False)
            logger.error("QR encoding timed out for %s after %ss", payload.pass_id, self._timeout)
            raise EncodingError("Failed to generate QR code (timed out)")
        except Exception as e:
            logger.error("QR encoding failed for %s: %s", payload.pass_id, e)
            raise EncodingError("Failed to generate QR code") from e
