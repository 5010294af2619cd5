from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/stats", methods=["GET"], endpoint="admin_stats")
    def admin_stats():
        return jsonify(container.stats_service.dashboard())

    @app.route("/api/admin/export", methods=["GET"], endpoint="admin_export")
    def admin_export():
        # 'logs' or anything else for requests
        return jsonify({"data": container.stats_service.export(request.args.get("type"))})

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        ok = container.store_ok()
        return jsonify({"status": "ok" if ok else "degraded", "store": "up" if ok else "down"})
