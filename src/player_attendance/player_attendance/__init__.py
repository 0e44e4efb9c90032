"""Player attendance tracker.

Feature modules (players, attendance) each carry a model, a repository
protocol with a MySQL implementation, a service holding the rules and a thin
Flask controller exposing the JSON API.
"""
from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_cors, register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_UTC_OFFSET_HOURS
from .database.bootstrap import apply_schema
from .players.controller import register as register_players

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, settings: Optional[Any] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings = importlib.import_module(get_settings_module())

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ADMIN_PIN"] = str(getattr(settings, "ADMIN_PIN", "") or "")
    app.config["CORS_ORIGIN"] = getattr(settings, "CORS_ORIGIN", "*")
    offset = int(getattr(settings, "BUSINESS_UTC_OFFSET_HOURS", DEFAULT_UTC_OFFSET_HOURS))

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        container = build_container(db_config=db_config, utc_offset_hours=offset)
        logger.info(
            "database %s@%s:%s/%s",
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )
        # One explicit, idempotent schema pass per process.
        if bool(getattr(settings, "AUTO_INIT_DB", False)) and container.conn is not None:
            apply_schema(container.conn)

    if not app.config["ADMIN_PIN"]:
        logger.warning("ADMIN_PIN is not set; admin routes are open")

    app.extensions["player_attendance"] = container

    register_error_handlers(app)
    register_cors(app)
    register_players(app, container)
    register_attendance(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"ok": True})

    return app
