"""Tạo bảng users / kpi_data / evaluations từ database/schema.sql."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.kpi_system.kpi_system.database.bootstrap import apply_schema, list_tables

logger = logging.getLogger("init_db")

REQUIRED_TABLES = ("users", "kpi_data", "evaluations")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = set(list_tables(db_config))
    missing = [t for t in REQUIRED_TABLES if t not in tables]
    if missing:
        logger.error("schema applied but tables are missing: %s", ", ".join(missing))
        return 1

    logger.info(
        "schema ready on %s@%s:%s/%s (%s)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        ", ".join(sorted(tables)),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
