from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "biometric_attendance"

# Quoted strings are kept whole so a ';' inside a literal never splits a statement.
_SQL_TOKEN = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|;|[^'\";]+|['\"]", re.S)
_CREATE_DB_OR_USE = re.compile(r"(?im)^\s*(?:CREATE\s+DATABASE\b|USE\b).*?;\s*$")


def _database_name(db_config: dict) -> str:
    return str(db_config.get("database") or DEFAULT_DATABASE)


def _server_connection(db_config: dict, *, with_database: bool = True):
    kwargs = {
        "host": str(db_config.get("host", "localhost")),
        "port": int(db_config.get("port", 3306)),
        "user": str(db_config.get("user", "root")),
        "password": str(db_config.get("password", "")),
        "connection_timeout": int(db_config.get("connect_timeout", 10)),
    }
    if with_database:
        kwargs["database"] = _database_name(db_config)
    return mysql.connector.connect(**kwargs)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quotes. Line comments are dropped."""
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    pending: list[str] = []
    for match in _SQL_TOKEN.finditer(body):
        token = match.group(0)
        if token != ";":
            pending.append(token)
            continue
        statement = "".join(pending).strip()
        pending.clear()
        if statement:
            yield statement

    tail = "".join(pending).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    conn = _server_connection(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{_database_name(db_config)}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Apply schema.sql to the configured database (CREATE TABLE IF NOT EXISTS, so idempotent).

    The script's own CREATE DATABASE / USE lines are ignored; the target is
    always the database named in the settings.
    """
    ensure_database_exists(db_config)
    sql = _CREATE_DB_OR_USE.sub("", Path(schema_path).read_text(encoding="utf-8"))

    conn = _server_connection(db_config)
    try:
        cur = conn.cursor()
        applied = 0
        for statement in iter_sql_statements(sql):
            cur.execute(statement)
            applied += 1
        conn.commit()
        logger.info("Applied %d schema statement(s) to %s", applied, _database_name(db_config))
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _server_connection(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
