from __future__ import annotations

import logging
import re
import uuid
from contextlib import contextmanager
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConstraintViolation, ReferenceViolation, StoreUnavailable
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall, fetchone

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class Store(Protocol):
    """Table-oriented persistence used by the directory and the ledger.

    Every row carries an opaque string `id`. Implementations raise
    `ConstraintViolation` when a uniqueness constraint rejects a write,
    `ReferenceViolation` when a write points at a row that does not exist, and
    `StoreUnavailable` for any other failure.
    """

    def find_one(self, table: str, filters: Mapping[str, Any]) -> Optional[Row]:
        raise NotImplementedError

    def find_many(
        self,
        table: str,
        filters: Mapping[str, Any],
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        raise NotImplementedError

    def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        raise NotImplementedError

    def update(self, table: str, record_id: str, fields: Mapping[str, Any]) -> Optional[Row]:
        raise NotImplementedError

    def upsert(self, table: str, record: Mapping[str, Any], conflict_keys: Sequence[str]) -> Row:
        """Atomic insert-or-update keyed by `conflict_keys`."""

        raise NotImplementedError

    def delete(self, table: str, record_id: str) -> bool:
        raise NotImplementedError


def quote_identifier(name: str) -> str:
    if not _IDENTIFIER.match(name or ""):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return f"`{name}`"


def _where(filters: Mapping[str, Any]) -> tuple[str, list[Any]]:
    if not filters:
        return "", []
    clauses = [f"{quote_identifier(col)}=%s" for col in filters]
    return " WHERE " + " AND ".join(clauses), list(filters.values())


class MySQLStore(Store):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def _translate_errors(self, table: str):
        try:
            yield
        except mysql.connector.IntegrityError as exc:
            if exc.errno == errorcode.ER_DUP_ENTRY:
                raise ConstraintViolation(table, exc.msg or "") from exc
            if exc.errno == errorcode.ER_NO_REFERENCED_ROW_2:
                raise ReferenceViolation(table, exc.msg or "") from exc
            logger.error("Integrity error on %s: %s", table, exc)
            raise StoreUnavailable() from exc
        except mysql.connector.Error as exc:
            logger.error("Database error on %s: %s", table, exc)
            raise StoreUnavailable() from exc

    def find_one(self, table: str, filters: Mapping[str, Any]) -> Optional[Row]:
        where, params = _where(filters)
        sql = f"SELECT * FROM {quote_identifier(table)}{where} LIMIT 1"
        with self._translate_errors(table), db_cursor(self._conn_factory) as (_, cur):
            logger.debug("%s %s", sql, params)
            cur.execute(sql, tuple(params))
            return fetchone(cur)

    def find_many(
        self,
        table: str,
        filters: Mapping[str, Any],
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        where, params = _where(filters)
        sql = f"SELECT * FROM {quote_identifier(table)}{where}"
        if order_by:
            sql += f" ORDER BY {quote_identifier(order_by)} {'DESC' if descending else 'ASC'}"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with self._translate_errors(table), db_cursor(self._conn_factory) as (_, cur):
            logger.debug("%s %s", sql, params)
            cur.execute(sql, tuple(params))
            return fetchall(cur)

    def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        row = dict(record)
        row.setdefault("id", str(uuid.uuid4()))
        cols = ", ".join(quote_identifier(c) for c in row)
        marks = ", ".join(["%s"] * len(row))
        sql = f"INSERT INTO {quote_identifier(table)}({cols}) VALUES({marks})"

        with self._translate_errors(table), db_cursor(self._conn_factory) as (_, cur):
            logger.debug("%s", sql)
            cur.execute(sql, tuple(row.values()))
            cur.execute(f"SELECT * FROM {quote_identifier(table)} WHERE `id`=%s", (row["id"],))
            return fetchone(cur) or row

    def update(self, table: str, record_id: str, fields: Mapping[str, Any]) -> Optional[Row]:
        if not fields:
            return self.find_one(table, {"id": record_id})
        assignments = ", ".join(f"{quote_identifier(c)}=%s" for c in fields)
        sql = f"UPDATE {quote_identifier(table)} SET {assignments} WHERE `id`=%s"

        with self._translate_errors(table), db_cursor(self._conn_factory) as (_, cur):
            logger.debug("%s", sql)
            cur.execute(sql, (*fields.values(), record_id))
            cur.execute(f"SELECT * FROM {quote_identifier(table)} WHERE `id`=%s", (record_id,))
            return fetchone(cur)

    def upsert(self, table: str, record: Mapping[str, Any], conflict_keys: Sequence[str]) -> Row:
        row = dict(record)
        row.setdefault("id", str(uuid.uuid4()))
        missing = [k for k in conflict_keys if k not in row]
        if missing:
            raise ValueError(f"Upsert record lacks conflict keys: {missing}")

        cols = ", ".join(quote_identifier(c) for c in row)
        marks = ", ".join(["%s"] * len(row))
        # The unique index on conflict_keys turns the insert into an update.
        # Row alias syntax needs MySQL 8.0.19+.
        updates = ", ".join(
            f"{quote_identifier(c)}=incoming.{quote_identifier(c)}"
            for c in row
            if c != "id" and c not in conflict_keys
        )
        sql = (
            f"INSERT INTO {quote_identifier(table)}({cols}) VALUES({marks}) AS incoming "
            f"ON DUPLICATE KEY UPDATE {updates}"
        )
        where, params = _where({k: row[k] for k in conflict_keys})

        with self._translate_errors(table), db_cursor(self._conn_factory) as (_, cur):
            logger.debug("%s", sql)
            cur.execute(sql, tuple(row.values()))
            cur.execute(f"SELECT * FROM {quote_identifier(table)}{where} LIMIT 1", tuple(params))
            return fetchone(cur) or row

    def delete(self, table: str, record_id: str) -> bool:
        with self._translate_errors(table), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {quote_identifier(table)} WHERE `id`=%s", (record_id,))
            return cur.rowcount > 0
