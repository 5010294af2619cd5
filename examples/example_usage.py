"""Example: drive the service layer directly (no Flask).

Walks one pass through its whole life: request, approval, gate check, exit log.
"""

from src.gatepass_system.gatepass_system.container import build_container
from src.gatepass_system.gatepass_system.database.bootstrap import ensure_demo_users
from src.gatepass_system.gatepass_system.database.memory_store import InMemoryStore


def main():
    container = build_container(store=InMemoryStore())
    ensure_demo_users(container.user_service, password="demo-pass")

    req = container.request_service.create_request(
        student_id="STU001",
        reason="medical",
        expected_time="2026-01-10T09:00",
        duration=2,
    )
    approved = container.request_service.approve(request_id=req.request_id, remarks="ok")
    print("pass valid until", approved.expires_at.isoformat())

    scanned = approved.pass_payload.to_json()
    print(container.pass_verifier.verify(scanned).to_dict())

    container.activity_logger.record_entry(pass_id=req.request_id, log_type="exit")
    print(container.pass_verifier.verify(scanned).to_dict()["message"])
    print(container.stats_service.dashboard())


if __name__ == "__main__":
    main()
