from __future__ import annotations

import logging
from typing import List, Optional

from ..common.datetime_utils import now_local
from ..core.constants import EMPLOYEES_TABLE
from ..core.exceptions import Conflict, ConstraintViolation, EmployeeNotFound, ValidationError
from ..database.store import Store
from .model import Employee

logger = logging.getLogger(__name__)

# Domain field -> column in the `employees` table.
_MUTABLE_COLUMNS = {
    "name": "name",
    "credential": "password_hash",
    "last_login": "last_login",
}


class EmployeeDirectory:
    """Registry of employees keyed by employee number.

    Uniqueness of `employee_number` is enforced by the store; `create` reports
    a rejected insert as `Conflict` even when a lookup just before said the
    number was free.
    """

    def __init__(self, store: Store):
        self._store = store

    def find_by_number(self, number: str) -> Optional[Employee]:
        row = self._store.find_one(EMPLOYEES_TABLE, {"employee_number": number})
        return Employee.from_row(row) if row else None

    def get(self, employee_id: str) -> Optional[Employee]:
        row = self._store.find_one(EMPLOYEES_TABLE, {"id": employee_id})
        return Employee.from_row(row) if row else None

    def list_all(self) -> List[Employee]:
        rows = self._store.find_many(EMPLOYEES_TABLE, {}, order_by="employee_number")
        return [Employee.from_row(r) for r in rows]

    def create(self, number: str, name: str, credential: Optional[str]) -> Employee:
        now = now_local()
        try:
            row = self._store.insert(
                EMPLOYEES_TABLE,
                {
                    "employee_number": number,
                    "name": name,
                    "password_hash": credential,
                    "created_at": now,
                    "updated_at": now,
                },
            )
        except ConstraintViolation as exc:
            raise Conflict(f"Employee number {number} is already taken") from exc

        logger.info("Created employee %s", number)
        return Employee.from_row(row)

    def update(self, employee_id: str, **fields) -> Employee:
        unknown = set(fields) - set(_MUTABLE_COLUMNS)
        if unknown:
            raise ValidationError(f"Fields cannot be changed: {', '.join(sorted(unknown))}")

        columns = {_MUTABLE_COLUMNS[k]: v for k, v in fields.items()}
        if set(fields) - {"last_login"}:
            columns["updated_at"] = now_local()
        row = self._store.update(EMPLOYEES_TABLE, employee_id, columns)
        if not row:
            raise EmployeeNotFound()
        return Employee.from_row(row)

    def delete(self, employee_id: str) -> None:
        if not self._store.delete(EMPLOYEES_TABLE, employee_id):
            raise EmployeeNotFound()
        logger.info("Deleted employee %s", employee_id)
