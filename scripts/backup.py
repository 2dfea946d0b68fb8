"""Dump the configured database with `mysqldump`.

The password is passed through MYSQL_PWD so it does not show up in the process list.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import os
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.rig_attendance.rig_attendance.common.logging_config import configure_logging

logger = logging.getLogger("scripts.backup")


def dump_command(db: dict, out_file: Path) -> list:
    return [
        "mysqldump",
        f"--host={db['host']}",
        f"--port={db.get('port', 3306)}",
        f"--user={db['user']}",
        "--single-transaction",
        f"--result-file={out_file}",
        db["database"],
    ]


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--out-dir", type=Path, default=REPO_ROOT / "backups")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db = settings.DB_CONFIG

    args.out_dir.mkdir(parents=True, exist_ok=True)
    out_file = args.out_dir / f"{db['database']}_{datetime.now():%Y%m%d_%H%M%S}.sql"
    env = dict(os.environ, MYSQL_PWD=str(db.get("password", "")))

    try:
        subprocess.run(dump_command(db, out_file), env=env, stderr=subprocess.PIPE, check=True)
    except FileNotFoundError:
        raise SystemExit("mysqldump not found; install the MySQL client tools")
    except subprocess.CalledProcessError as e:
        raise SystemExit(f"mysqldump failed: {e.stderr.decode(errors='replace').strip()}")
    logger.info("Backup written to %s", out_file)


if __name__ == "__main__":
    main()
