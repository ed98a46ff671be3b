"""Schema bootstrap for the engine tables (`scripts/init_db.py`, AUTO_INIT_DB)."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

ENGINE_TABLES = (
    "employees",
    "attendance_records",
    "attendance_sessions",
    "leave_requests",
    "leave_balances",
    "holidays",
    "geofences",
    "geofence_employees",
)

# Quoted literals are matched whole so a ';' inside them never splits a statement.
_TOKEN = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|;|[^'\";]+", re.S)
_DATABASE_DIRECTIVE = re.compile(r"(?im)^\s*(?:CREATE\s+DATABASE|USE)\b[^;]*;\s*$")


def split_statements(sql: str) -> Iterator[str]:
    """Yield the statements of a schema file; full-line '--' comments and
    CREATE DATABASE / USE directives are dropped (the target comes from config)."""
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    body = _DATABASE_DIRECTIVE.sub("", body)

    current: list[str] = []
    for token in _TOKEN.findall(body):
        if token == ";":
            stmt = "".join(current).strip()
            current = []
            if stmt:
                yield stmt
        else:
            current.append(token)

    tail = "".join(current).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    return mysql.connector.connect(use_pure=True, **target.connect_kwargs(with_database=with_database))


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed and run every statement. Returns the statement count."""
    ensure_database_exists(db_config)
    statements = list(split_statements(Path(schema_path).read_text(encoding="utf-8")))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()

    logger.info("Applied %d schema statements from %s", len(statements), Path(schema_path).name)
    return len(statements)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def missing_tables(db_config: dict) -> list[str]:
    present = set(list_tables(db_config))
    return [t for t in ENGINE_TABLES if t not in present]
