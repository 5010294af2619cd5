from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/logs/entry", methods=["POST"], endpoint="log_entry")
    def log_entry():
        data = json_body()
        entry = container.activity_logger.record_entry(pass_id=data.get("passId"), log_type=data.get("type"))
        return jsonify({"success": True, "log": entry.to_record()})

    @app.route("/api/logs/all", methods=["GET"], endpoint="all_logs")
    def all_logs():
        return jsonify({"logs": [l.to_record() for l in container.activity_logger.list_logs()]})
