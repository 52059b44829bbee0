from __future__ import annotations

import atexit
import importlib
import logging
import time
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from config import get_settings_module

from .common.logging_setup import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_JWT_ALGORITHM, DEFAULT_POOL_SIZE, DEFAULT_TOKEN_DAYS
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 500

ENDPOINTS = {
    "students": {
        "register": "POST /api/students/register",
        "login": "POST /api/students/login",
        "profile": "GET /api/students/profile",
        "attendance": "GET /api/students/attendance",
    },
    "teachers": {
        "register": "POST /api/teachers/register",
        "login": "POST /api/teachers/login",
        "profile": "GET /api/teachers/profile",
        "students": "GET /api/teachers/students",
        "attendanceSummary": "GET /api/teachers/attendance-summary",
        "attendanceRecords": "GET /api/teachers/attendance-records",
        "markAttendance": "POST /api/teachers/attendance",
    },
}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(NotFound)
    @app.errorhandler(MethodNotAllowed)
    def handle_route_not_found(e):
        return jsonify({"error": "Route not found"}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500


def register_request_logging(app: Flask) -> None:
    @app.before_request
    def log_request_start():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request_end(response):
        started = g.get("request_started")
        duration_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        # Only non-200 or slow responses, to keep the log readable.
        if response.status_code != 200 or duration_ms > SLOW_REQUEST_MS:
            logger.info("%s %s -> %s (%.0fms)", request.method, request.path, response.status_code, duration_ms)
        return response


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    CORS(app, origins=getattr(settings, "CORS_ORIGINS", "*"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            target = DBConfig.from_dict(db_config)
            apply_schema(target)
            logger.info("Schema ready (tables=%s)", len(list_tables(target)))

        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_algorithm=getattr(settings, "JWT_ALGORITHM", DEFAULT_JWT_ALGORITHM),
            token_days=int(getattr(settings, "TOKEN_TTL_DAYS", DEFAULT_TOKEN_DAYS)),
            pool_size=int(getattr(settings, "DB_POOL_SIZE", DEFAULT_POOL_SIZE)),
        )
        atexit.register(container.conn.close)

    app.extensions["smart_attendance"] = container

    @app.route("/", endpoint="index")
    def index():
        return jsonify(
            {
                "message": "Smart Attendance Management System API is running!",
                "version": "1.0.0",
                "endpoints": ENDPOINTS,
            }
        )

    register_students(app, container)
    register_teachers(app, container)
    register_error_handlers(app)
    register_request_logging(app)

    return app
