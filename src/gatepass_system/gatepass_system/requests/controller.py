from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.request_service

    def _rows(items) -> list[dict]:
        return [r.to_record() for r in items]

    @app.route("/api/requests/create", methods=["POST"], endpoint="create_request")
    def create_request():
        data = json_body()
        req = service.create_request(
            student_id=data.get("studentId"),
            reason=data.get("reason"),
            expected_time=data.get("expectedTime"),
            duration=data.get("duration"),
        )
        return jsonify({"success": True, "request": req.to_record()})

    @app.route("/api/requests/student/<student_id>", methods=["GET"], endpoint="student_requests")
    def student_requests(student_id: str):
        return jsonify({"requests": _rows(service.list_by_student(student_id))})

    @app.route("/api/requests/pending", methods=["GET"], endpoint="pending_requests")
    def pending_requests():
        return jsonify({"requests": _rows(service.list_pending())})

    @app.route("/api/requests/all", methods=["GET"], endpoint="all_requests")
    def all_requests():
        return jsonify({"requests": _rows(service.list_all())})

    @app.route("/api/requests/approve", methods=["POST"], endpoint="approve_request")
    def approve_request():
        data = json_body()
        req = service.approve(request_id=data.get("requestId"), remarks=data.get("remarks"))
        return jsonify({"success": True, "request": req.to_record()})

    @app.route("/api/requests/reject", methods=["POST"], endpoint="reject_request")
    def reject_request():
        data = json_body()
        req = service.reject(request_id=data.get("requestId"), reason=data.get("reason"))
        return jsonify({"success": True, "request": req.to_record()})
