from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.web import json_error
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .offices.controller import register as register_offices
from .payments.controller import register as register_payments
from .promotions.controller import register as register_promotions
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def register_all(app: Flask, container: Container) -> None:
    register_users(app, container)
    register_offices(app, container)
    register_employees(app, container)
    register_payments(app, container)
    register_reports(app, container)
    register_promotions(app, container)

    @app.errorhandler(Exception)
    def unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return json_error(e.description or e.name, status=e.code or 500)
        logger.exception("unhandled error")
        return json_error("خطأ في النظام", status=500)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ADMIN_EMAILS"] = tuple(getattr(settings, "ADMIN_EMAILS", ()))
    app.config["STAMP_FEE_TITLE"] = getattr(settings, "STAMP_FEE_TITLE")
    app.config["STAMP_FEE_AMOUNT"] = getattr(settings, "STAMP_FEE_AMOUNT")
    app.json.ensure_ascii = False

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            retirement_percentage=getattr(settings, "RETIREMENT_PERCENTAGE"),
            activation_days=int(getattr(settings, "OFFICE_ACTIVATION_DAYS")),
        )

    register_all(app, container)
    return app
