from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .performance.controller import register as register_performance

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        if app.config["DEBUG"]:
            print(
                "[teacher-performance] settings=", settings_module,
                " db=", f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
            )
        container = build_container(db_config=db_config, scoring=getattr(settings, "SCORING", None))

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            if app.config["DEBUG"]:
                print(f"[teacher-performance] schema ready (tables={len(list_tables(container.conn))})")

    register_performance(app, container)
    return app
