"""Load the demo crew from database/seed.sql (schema must already exist)."""

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
from src.rig_attendance.rig_attendance.database.bootstrap import apply_seed_sql, ensure_defaults

logger = logging.getLogger("scripts.seed_db")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed-file", type=Path, default=REPO_ROOT / "database" / "seed.sql")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    # Employees reference workspaces, so those rows go first.
    ensure_defaults(db_config)
    apply_seed_sql(db_config, seed_path=args.seed_file)
    logger.info("Seeded %s from %s", db_config.get("database"), args.seed_file)


if __name__ == "__main__":
    main()
