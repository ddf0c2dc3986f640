from __future__ import annotations

import asyncio
import importlib
import logging
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_utils import configure_logging
from .container import Container, build_container
from .core.exceptions import StoreError, ValidationError
from .entries.controller import register as register_entries
from .export.controller import register as register_export
from .roster.controller import register as register_roster
from .store.repository import DocumentStore

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(StoreError)
    def _store_error(exc: StoreError):
        logger.error("Store unavailable: %s", exc)
        return jsonify({"error": "document store unavailable"}), 503


def create_app(settings: Optional[ModuleType] = None, *, store: Optional[DocumentStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings = importlib.import_module(get_settings_module())
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    logger.info("Starting with settings=%s backend=%s", settings.__name__, getattr(settings, "STORE_BACKEND", "memory"))

    container: Container = build_container(settings, store=store)
    if not asyncio.run(container.roster.refresh()):
        logger.warning("Starting with an empty roster; the initial refresh failed")
    app.extensions["event_checkin"] = container

    register_error_handlers(app)
    register_roster(app, container)
    register_attendance(app, container)
    register_export(app, container)
    register_entries(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "people": len(container.roster.get())})

    return app
