from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/qr/verify", methods=["POST"], endpoint="verify_pass")
    def verify_pass():
        qr_data = json_body().get("qrData")
        if not qr_data:
            raise ValidationError("QR data required")
        result = container.pass_verifier.verify(qr_data)
        return jsonify(result.to_dict())
