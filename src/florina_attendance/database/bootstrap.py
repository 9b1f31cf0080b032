from __future__ import annotations

import uuid
from pathlib import Path
from typing import List, Optional

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig
from .mysql_base import db_cursor

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _statements(sql: str) -> List[str]:
    # schema.sql holds DDL only, no string literals.
    return [stmt.strip() for stmt in sql.split(";") if stmt.strip()]


def ensure_database_exists(db_config: dict) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Optional[str | Path] = None) -> None:
    ensure_database_exists(db_config)

    schema_path = Path(schema_path or SCHEMA_PATH)
    statements = _statements(schema_path.read_text(encoding="utf-8"))

    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config)), dictionary=False) as (_, cur):
        for stmt in statements:
            cur.execute(stmt)


def ensure_demo_employees(db_config: dict) -> None:
    """Seed one employee per credential form: absent, hashed, legacy plaintext."""

    demo = [
        ("001", "Ahmed", None),
        ("002", "Sara", generate_password_hash("secret")),
        ("003", "Omar", "mypass"),
    ]
    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config))) as (_, cur):
        for number, name, password_hash in demo:
            cur.execute(
                """
                INSERT INTO employees (id, employee_number, name, password_hash)
                VALUES (%s, %s, %s, %s) AS demo
                ON DUPLICATE KEY UPDATE name=demo.name, password_hash=demo.password_hash
                """,
                (str(uuid.uuid4()), number, name, password_hash),
            )


def list_tables(db_config: dict) -> list[str]:
    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config)), dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
