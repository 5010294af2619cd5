from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.gatepass_system.gatepass_system.container import build_container, build_store
from src.gatepass_system.gatepass_system.database.bootstrap import ensure_demo_users


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(store=build_store(settings))

    created = ensure_demo_users(container.user_service)
    if created:
        print(f"OK: Seeded demo users ({settings.STORE_BACKEND}): {', '.join(created)}")
    else:
        print(f"OK: Demo users already present ({settings.STORE_BACKEND})")


if __name__ == "__main__":
    main()
