from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RecordStoreError,
    ValidationError,
)
from .database.bootstrap import apply_schema, list_tables
from .leaves.controller import register as register_leaves
from .summary.controller import register as register_summary

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    def _error(status: int):
        def handler(e):
            return jsonify({"success": False, "message": str(e)}), status

        return handler

    app.register_error_handler(ValidationError, _error(400))
    app.register_error_handler(AuthenticationError, _error(401))
    app.register_error_handler(AuthorizationError, _error(403))
    app.register_error_handler(NotFoundError, _error(404))
    app.register_error_handler(RecordStoreError, _error(503))


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    db_config = getattr(settings, "DB_CONFIG", None)
    store_backend = getattr(settings, "STORE_BACKEND", "mysql")

    logger.info(
        "college-erp settings=%s store=%s db=%s@%s/%s",
        settings_module,
        store_backend,
        (db_config or {}).get("user"),
        (db_config or {}).get("host"),
        (db_config or {}).get("database"),
    )

    if store_backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    if container is None:
        container = build_container(
            db_config=db_config,
            store_backend=store_backend,
            api_tokens=getattr(settings, "API_TOKENS", None),
            pass_percentage=float(getattr(settings, "PASS_PERCENTAGE", 40)),
            good_standing_percentage=float(getattr(settings, "GOOD_STANDING_PERCENTAGE", 75)),
        )
    app.extensions["college_erp"] = container

    _register_error_handlers(app)
    register_summary(app, container)
    register_leaves(app, container)

    return app
