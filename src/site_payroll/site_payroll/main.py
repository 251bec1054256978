from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_config import configure_logging, get_logger
from .common.money import to_decimal
from .container import Container, PayrollSettings, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .equipment.controller import register as register_equipment
from .payroll.controller import register as register_payroll
from .work_records.controller import register as register_work_records

logger = get_logger("main")

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _payroll_settings(settings) -> PayrollSettings:
    defaults = PayrollSettings()
    return PayrollSettings(
        standard_workday_hours=to_decimal(
            getattr(settings, "STANDARD_WORKDAY_HOURS", defaults.standard_workday_hours), "STANDARD_WORKDAY_HOURS"
        ),
        overtime_multiplier=to_decimal(
            getattr(settings, "OVERTIME_MULTIPLIER", defaults.overtime_multiplier), "OVERTIME_MULTIPLIER"
        ),
        default_daily_rate=to_decimal(
            getattr(settings, "DEFAULT_DAILY_RATE", defaults.default_daily_rate), "DEFAULT_DAILY_RATE"
        ),
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """Flask app factory; pass ``container`` to run against fakes."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False

    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "starting",
            extra={
                "settings": settings_module,
                "db": f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
            },
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready", extra={"tables": len(list_tables(db_config))})
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")

        container = build_container(db_config=db_config, settings=_payroll_settings(settings))

    register_payroll(app, container)
    register_work_records(app, container)
    register_equipment(app, container)

    return app
