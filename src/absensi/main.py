from __future__ import annotations

import importlib
import logging
from datetime import datetime

from dotenv import load_dotenv
from flask import Flask

from .settings import get_settings_module

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    firebase_config = getattr(settings, "FIREBASE_CONFIG")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if app.config["DEBUG"]:
        logger.debug(
            "settings=%s project=%s timezone=%s",
            settings_module,
            firebase_config.get("project_id") or "<default>",
            getattr(settings, "APP_TIMEZONE", "") or "<local>",
        )

    if container is None:
        container = build_container(
            firebase_config=firebase_config,
            timezone=getattr(settings, "APP_TIMEZONE", ""),
            one_checkin_per_day=bool(getattr(settings, "ONE_CHECKIN_PER_DAY", False)),
            identity_timeout=float(getattr(settings, "IDENTITY_TIMEOUT", 10)),
        )
    app.extensions["absensi.container"] = container

    @app.context_processor
    def inject_year():
        return {"current_year": datetime.now().year}

    register_users(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
