"""Schema/seed application used by `create_app` (AUTO_INIT_DB / AUTO_SEED_DB) and `scripts/`."""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Union

from ..core.constants import DEFAULT_COMPANY_NAME, DEFAULT_RIG_NAME, DEFAULT_WORKSPACES
from .connection import DBConfig, connect

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@contextmanager
def _session(db_config: Mapping, *, with_database: bool = True) -> Iterator:
    conn = connect(DBConfig.from_mapping(db_config), with_database=with_database)
    try:
        cur = conn.cursor()
        yield cur
        conn.commit()
    finally:
        conn.close()


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from the file.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quotes; `-- ...` line comments are dropped."""
    buf: List[str] = []
    quote = ""
    escape = False
    i = 0

    while i < len(sql):
        ch = sql[i]
        if quote:
            buf.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == quote:
                quote = ""
            i += 1
            continue

        if sql.startswith("--", i):
            newline = sql.find("\n", i)
            i = len(sql) if newline == -1 else newline + 1
            continue

        if ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            i += 1
            continue

        buf.append(ch)
        i += 1

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: Mapping, path: PathLike) -> int:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    count = 0
    with _session(db_config) as cur:
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
    return count


def ensure_database_exists(db_config: Mapping) -> None:
    name = DBConfig.from_mapping(db_config).database
    with _session(db_config, with_database=False) as cur:
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")


def apply_schema(db_config: Mapping, *, schema_path: PathLike) -> None:
    ensure_database_exists(db_config)
    count = _run_script(db_config, schema_path)
    logger.debug("Applied %d schema statement(s) from %s", count, schema_path)


def apply_seed_sql(db_config: Mapping, *, seed_path: PathLike) -> None:
    count = _run_script(db_config, seed_path)
    logger.debug("Applied %d seed statement(s) from %s", count, seed_path)


def ensure_defaults(db_config: Mapping) -> None:
    """Insert the default workspaces and the settings row.

    Safe to run on every start; rows that already exist are left as they are.
    """
    with _session(db_config) as cur:
        for workspace_id, name in DEFAULT_WORKSPACES.items():
            cur.execute("INSERT IGNORE INTO workspaces (workspace_id, name) VALUES (%s, %s)", (workspace_id, name))
        cur.execute(
            "INSERT IGNORE INTO app_settings (settings_id, company_name, rig_name) VALUES ('default', %s, %s)",
            (DEFAULT_COMPANY_NAME, DEFAULT_RIG_NAME),
        )


def list_tables(db_config: Mapping) -> List[str]:
    with _session(db_config) as cur:
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
