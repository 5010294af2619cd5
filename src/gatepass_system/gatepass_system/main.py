from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .admin.controller import register as register_admin
from .common.datetime_utils import SystemClock, resolve_timezone
from .common.http_errors import register_error_handlers
from .container import Container, build_container, build_store
from .database.bootstrap import apply_schema, ensure_demo_users
from .logs.controller import register as register_logs
from .passes.controller import register as register_passes
from .requests.controller import register as register_requests
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def load_settings():
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def create_app(container: Optional[Container] = None, *, settings=None) -> Flask:
    settings = settings or load_settings()

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    if container is None:
        backend = str(getattr(settings, "STORE_BACKEND", "json")).lower()
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(getattr(settings, "DB_CONFIG"), schema_path=SCHEMA_PATH)

        container = build_container(
            store=build_store(settings),
            clock=SystemClock(resolve_timezone(getattr(settings, "TIMEZONE", None))),
            encode_timeout=getattr(settings, "ENCODE_TIMEOUT_SECONDS", None),
            qr_box_size=int(getattr(settings, "QR_BOX_SIZE", 10)),
            qr_border=int(getattr(settings, "QR_BORDER", 2)),
        )
        logger.info("Gate pass service using %s store", backend)

        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            created = ensure_demo_users(container.user_service)
            if created:
                logger.info("Demo users provisioned: %s", ", ".join(created))

    app.extensions["gatepass"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_requests(app, container)
    register_passes(app, container)
    register_logs(app, container)
    register_admin(app, container)

    return app
