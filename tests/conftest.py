from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

import pytest

from florina_attendance.container import build_container
from florina_attendance.core.exceptions import ConstraintViolation, ReferenceViolation, StoreUnavailable
from florina_attendance.employees.credentials import WerkzeugHasher


class InMemoryStore:
    """Store fake with the same unique keys and cascade as schema.sql.

    `foreign_keys=True` also enforces attendance.employee_id -> employees.id.
    """

    UNIQUE = {
        "employees": [("employee_number",)],
        "attendance": [("employee_id", "date")],
    }

    def __init__(self, *, foreign_keys: bool = False):
        self.foreign_keys = foreign_keys
        self.tables: dict[str, dict[str, dict]] = {"employees": {}, "attendance": {}}
        self.failing: set[str] = set()
        self.calls: list[str] = []

    def _enter(self, op: str) -> None:
        self.calls.append(op)
        if op in self.failing:
            raise StoreUnavailable()

    @staticmethod
    def _matches(row: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
        return all(row.get(k) == v for k, v in filters.items())

    def _check_unique(self, table: str, row: Mapping[str, Any]) -> None:
        for keys in self.UNIQUE.get(table, []):
            for other in self.tables[table].values():
                if other["id"] != row["id"] and all(other.get(k) == row.get(k) for k in keys):
                    raise ConstraintViolation(table, f"duplicate {keys}")

    def _check_reference(self, table: str, row: Mapping[str, Any]) -> None:
        if self.foreign_keys and table == "attendance" and row.get("employee_id") not in self.tables["employees"]:
            raise ReferenceViolation(table, "employee_id")

    def find_one(self, table: str, filters: Mapping[str, Any]) -> Optional[dict]:
        self._enter("find_one")
        for row in self.tables[table].values():
            if self._matches(row, filters):
                return dict(row)
        return None

    def find_many(self, table, filters, *, order_by=None, descending=False, limit=None):
        self._enter("find_many")
        rows = [dict(r) for r in self.tables[table].values() if self._matches(r, filters)]
        if order_by:
            rows.sort(key=lambda r: r[order_by], reverse=descending)
        return rows[:limit] if limit is not None else rows

    def insert(self, table: str, record: Mapping[str, Any]) -> dict:
        self._enter("insert")
        row = dict(record)
        row.setdefault("id", str(uuid.uuid4()))
        self._check_unique(table, row)
        self._check_reference(table, row)
        self.tables[table][row["id"]] = row
        return dict(row)

    def update(self, table: str, record_id: str, fields: Mapping[str, Any]) -> Optional[dict]:
        self._enter("update")
        current = self.tables[table].get(record_id)
        if current is None:
            return None
        row = {**current, **fields}
        self._check_unique(table, row)
        self.tables[table][record_id] = row
        return dict(row)

    def upsert(self, table: str, record: Mapping[str, Any], conflict_keys: Sequence[str]) -> dict:
        self._enter("upsert")
        self._check_reference(table, record)
        key = {k: record[k] for k in conflict_keys}
        for row in self.tables[table].values():
            if self._matches(row, key):
                row.update({k: v for k, v in record.items() if k != "id" and k not in conflict_keys})
                return dict(row)
        row = dict(record)
        row.setdefault("id", str(uuid.uuid4()))
        self.tables[table][row["id"]] = row
        return dict(row)

    def delete(self, table: str, record_id: str) -> bool:
        self._enter("delete")
        removed = self.tables[table].pop(record_id, None) is not None
        if removed and table == "employees":
            attendance = self.tables["attendance"]
            for rid in [rid for rid, r in attendance.items() if r["employee_id"] == record_id]:
                del attendance[rid]
        return removed

    def add_employee(self, number: str, name: str = "Employee", credential: Optional[str] = None) -> dict:
        return self.insert(
            "employees",
            {"employee_number": number, "name": name, "password_hash": credential, "last_login": None},
        )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def linked_store() -> InMemoryStore:
    return InMemoryStore(foreign_keys=True)


@pytest.fixture
def hasher() -> WerkzeugHasher:
    # Low iteration count keeps the suite fast.
    return WerkzeugHasher(iterations=1000)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 5, 1, 8, 0, 0)


@pytest.fixture
def container(store, hasher):
    return build_container(store=store, hasher=hasher)
