from __future__ import annotations

import base64
import json
import threading
from datetime import datetime, timedelta, timezone

import pytest

from src.gatepass_system.gatepass_system.core.exceptions import EncodingError
from src.gatepass_system.gatepass_system.passes.issuer import QRCodePassIssuer
from src.gatepass_system.gatepass_system.passes.model import PassPayload

APPROVED = datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc)


def _payload(**overrides) -> PassPayload:
    data = dict(
        pass_id="REQ1",
        student_id="S1",
        student_name="Stu Dent",
        reason="medical",
        approved_at=APPROVED,
        expires_at=APPROVED + timedelta(hours=2),
    )
    data.update(overrides)
    return PassPayload(**data)


def test_canonical_json_field_order():
    text = _payload().to_json()
    assert list(json.loads(text)) == [
        "passId", "studentId", "studentName", "reason", "approvedAt", "expiresAt", "used",
    ]
    assert json.loads(text)["used"] is False
    assert " " not in text.replace("Stu Dent", "")


def test_encode_returns_png_data_url():
    url = QRCodePassIssuer(box_size=2, border=1).encode(_payload())

    prefix = "data:image/png;base64,"
    assert url.startswith(prefix)
    assert base64.b64decode(url[len(prefix):]).startswith(b"\x89PNG")


def test_encode_without_timeout_runs_inline():
    url = QRCodePassIssuer(box_size=2, border=1, timeout_seconds=None).encode(_payload())
    assert url.startswith("data:image/png;base64,")


class CapturingIssuer(QRCodePassIssuer):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.rendered = []

    def _render(self, data: str) -> str:
        self.rendered.append(data)
        return "data:image/png;base64,X"


def test_encodes_the_canonical_payload():
    issuer = CapturingIssuer()
    payload = _payload()
    issuer.encode(payload)
    assert issuer.rendered == [payload.to_json()]


class BrokenIssuer(QRCodePassIssuer):
    def _render(self, data: str) -> str:
        raise ValueError("data too long")


@pytest.mark.parametrize("timeout", [None, 1.0])
def test_render_errors_become_encoding_error(timeout):
    with pytest.raises(EncodingError):
        BrokenIssuer(timeout_seconds=timeout).encode(_payload())


class StuckIssuer(QRCodePassIssuer):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.release = threading.Event()

    def _render(self, data: str) -> str:
        self.release.wait(5)
        return "late"


def test_stuck_encoder_times_out():
    issuer = StuckIssuer(timeout_seconds=0.05)
    try:
        with pytest.raises(EncodingError):
            issuer.encode(_payload())
    finally:
        issuer.release.set()


class SometimesStuckIssuer(QRCodePassIssuer):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.release = threading.Event()
        self.stuck_calls = 2

    def _render(self, data: str) -> str:
        if self.stuck_calls > 0:
            self.stuck_calls -= 1
            self.release.wait(5)
            return "late"
        return "data:image/png;base64,OK"


def test_stuck_renders_do_not_block_later_encodes():
    issuer = SometimesStuckIssuer(timeout_seconds=0.2)
    try:
        for _ in range(2):
            with pytest.raises(EncodingError):
                issuer.encode(_payload())
        assert issuer.encode(_payload()) == "data:image/png;base64,OK"
    finally:
        issuer.release.set()
