from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_PASSWORD, MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH
from ..core.exceptions import (
    Conflict,
    DuplicateEmployeeNumber,
    EmployeeNotFound,
    InvalidCredential,
    StoreUnavailable,
)
from .credentials import Hasher, StoredCredential, classify
from .directory import EmployeeDirectory
from .model import Employee

logger = logging.getLogger(__name__)


class CredentialVerifier:
    """Use case: authenticate an employee by number and password.

    Each call is independent: no lockout, no session. The only side effect is
    the best-effort `last_login` write (plus the optional legacy rehash).
    """

    def __init__(
        self,
        directory: EmployeeDirectory,
        hasher: Hasher,
        *,
        rehash_legacy: bool = False,
        hash_cost: Optional[int] = None,
    ):
        self._directory = directory
        self._hasher = hasher
        self._rehash_legacy = bool(rehash_legacy)
        self._hash_cost = hash_cost

    def authenticate(self, employee_number: str, password: str) -> Employee:
        number = require_non_empty(employee_number, "Employee number")

        employee = self._directory.find_by_number(number)
        if not employee:
            logger.info("Login attempt for unknown employee number %s", number)
            raise EmployeeNotFound()

        credential = classify(employee.credential, self._hasher)
        if not credential.verify(password):
            logger.info("Rejected login for employee %s (%s credential)", number, credential.kind)
            raise InvalidCredential()

        return self._record_login(employee, credential, password)

    def _record_login(self, employee: Employee, credential: StoredCredential, password: str) -> Employee:
        fields = {"last_login": now_local()}
        if self._rehash_legacy and credential.needs_upgrade:
            fields["credential"] = self._hasher.hash(password, self._hash_cost)

        try:
            return self._directory.update(employee.id, **fields)
        except (StoreUnavailable, EmployeeNotFound) as exc:
            logger.warning("Could not record login for employee %s: %s", employee.employee_number, exc)
            return employee


@dataclass(frozen=True)
class CredentialSummary:
    total: int
    with_credential: int
    without_credential: int


class EmployeeService:
    """Use case: manage the employee roster (admin)."""

    def __init__(self, directory: EmployeeDirectory, hasher: Hasher, *, hash_cost: Optional[int] = None):
        self._directory = directory
        self._hasher = hasher
        self._hash_cost = hash_cost

    def list_employees(self) -> List[Employee]:
        return self._directory.list_all()

    def credential_summary(self) -> CredentialSummary:
        employees = self._directory.list_all()
        with_credential = sum(1 for e in employees if e.has_credential)
        return CredentialSummary(
            total=len(employees),
            with_credential=with_credential,
            without_credential=len(employees) - with_credential,
        )

    def add_employee(self, *, employee_number: str, name: str) -> Employee:
        """Create an employee with the hashed default password."""

        number = require_non_empty(employee_number, "Employee number")
        name = require_min_length(require_non_empty(name, "Name"), "Name", MIN_NAME_LENGTH)

        if self._directory.find_by_number(number):
            raise DuplicateEmployeeNumber()

        credential = self._hasher.hash(DEFAULT_PASSWORD, self._hash_cost)
        try:
            return self._directory.create(number, name, credential)
        except Conflict as exc:
            raise DuplicateEmployeeNumber() from exc

    def rename(self, employee_id: str, name: str) -> Employee:
        name = require_min_length(require_non_empty(name, "Name"), "Name", MIN_NAME_LENGTH)
        return self._directory.update(employee_id, name=name)

    def reset_password(self, employee_id: str, new_password: str) -> Employee:
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
        credential = self._hasher.hash(new_password, self._hash_cost)
        employee = self._directory.update(employee_id, credential=credential)
        logger.info("Password reset for employee %s", employee.employee_number)
        return employee

    def remove(self, employee_id: str) -> None:
        self._directory.delete(employee_id)
