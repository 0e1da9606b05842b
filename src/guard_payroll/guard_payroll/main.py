from __future__ import annotations

import logging

from dotenv import load_dotenv
from flask import Flask

from .common.logging_utils import configure_logging
from .config import get_settings_module, load_settings
from .container import build_container
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def create_app(**container_overrides) -> Flask:
    load_dotenv(override=False)
    settings = load_settings()

    app = Flask(__name__)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    backend_config = getattr(settings, "BACKEND_CONFIG")
    logger.info("settings=%s backend=%s", get_settings_module(), backend_config.get("base_url"))

    container = build_container(
        backend_config=backend_config,
        default_ot_rate=float(getattr(settings, "DEFAULT_OT_RATE", 700)),
        employee_limit=int(getattr(settings, "EMPLOYEE_FETCH_LIMIT", 1000)),
        persist_workers=int(getattr(settings, "PERSIST_WORKERS", 4)),
        **container_overrides,
    )
    app.extensions["payroll_container"] = container

    register_payroll(app, container)

    return app
