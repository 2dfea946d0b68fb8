"""Create the database, apply schema.sql and insert default rows.

    python scripts/init_db.py [--rerank]
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.rig_attendance.rig_attendance.common.logging_config import configure_logging
from src.rig_attendance.rig_attendance.container import build_container
from src.rig_attendance.rig_attendance.core.constants import DESIGNATION_RANKS, UNRANKED_DESIGNATION
from src.rig_attendance.rig_attendance.database.bootstrap import apply_schema, ensure_defaults, list_tables

logger = logging.getLogger("scripts.init_db")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--rerank", action="store_true", help="recompute designation order for stored employees")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    ensure_defaults(db_config)
    logger.info(
        "Schema applied to %s@%s/%s (tables=%d)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("database"),
        len(list_tables(db_config)),
    )

    if args.rerank:
        container = build_container(db_config=db_config)
        changed = container.employees_repo.refresh_designation_orders(
            DESIGNATION_RANKS, default_rank=UNRANKED_DESIGNATION
        )
        logger.info("Re-ranked %d employee(s)", changed)


if __name__ == "__main__":
    main()
