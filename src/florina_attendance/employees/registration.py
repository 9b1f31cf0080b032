from __future__ import annotations

import logging
import re
from typing import Optional

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MAX_PASSWORD_STRENGTH, MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import RegistrationState
from ..core.exceptions import Conflict, DuplicateEmployeeNumber, ValidationError, WorkflowStateError
from .credentials import Hasher
from .directory import EmployeeDirectory

logger = logging.getLogger(__name__)

_STRENGTH_CHECKS = (
    lambda p: len(p) >= MIN_PASSWORD_LENGTH,
    lambda p: re.search(r"[a-z]", p) is not None,
    lambda p: re.search(r"[A-Z]", p) is not None,
    lambda p: re.search(r"[0-9]", p) is not None,
    lambda p: re.search(r"[^a-zA-Z0-9]", p) is not None,
)

_STRENGTH_LABELS = {
    0: "Very weak",
    1: "Very weak",
    2: "Weak",
    3: "Medium",
    4: "Strong",
    5: "Very strong",
}


def password_strength(password: str) -> int:
    """Advisory score in [0, 5]; only the length minimum is ever enforced."""

    password = password or ""
    score = sum(1 for check in _STRENGTH_CHECKS if check(password))
    return min(score, MAX_PASSWORD_STRENGTH)


def strength_label(score: int) -> str:
    return _STRENGTH_LABELS.get(max(0, min(int(score), MAX_PASSWORD_STRENGTH)), "")


class RegistrationWorkflow:
    """Two-step self-service registration.

    INITIAL -> AWAITING_STEP1 -> AWAITING_STEP2 -> COMPLETED | CANCELLED

    Nothing reaches the directory before `submit`. The duplicate check in step 1
    is only there to give early feedback; the store's unique index decides, and
    a rejected insert is reported with the same `DuplicateEmployeeNumber`.
    """

    def __init__(self, directory: EmployeeDirectory, hasher: Hasher, *, hash_cost: Optional[int] = None):
        self._directory = directory
        self._hasher = hasher
        self._hash_cost = hash_cost
        self._state = RegistrationState.INITIAL
        self._employee_number: Optional[str] = None
        self._name: Optional[str] = None
        self._password: Optional[str] = None

    @property
    def state(self) -> RegistrationState:
        return self._state

    @property
    def employee_number(self) -> Optional[str]:
        return self._employee_number

    @property
    def name(self) -> Optional[str]:
        return self._name

    def _require_state(self, *allowed: RegistrationState) -> None:
        if self._state not in allowed:
            raise WorkflowStateError(f"Registration step not available in state {self._state.value}")

    def start(self) -> RegistrationState:
        self._require_state(RegistrationState.INITIAL)
        self._state = RegistrationState.AWAITING_STEP1
        return self._state

    def submit_step1(self, employee_number: str, name: str) -> RegistrationState:
        self._require_state(RegistrationState.AWAITING_STEP1)

        number = require_non_empty(employee_number, "Employee number")
        name = require_min_length(require_non_empty(name, "Name"), "Name", MIN_NAME_LENGTH)

        if self._directory.find_by_number(number):
            raise DuplicateEmployeeNumber()

        self._employee_number = number
        self._name = name
        self._state = RegistrationState.AWAITING_STEP2
        return self._state

    def submit_step2(self, password: str, confirm_password: str) -> int:
        self._require_state(RegistrationState.AWAITING_STEP2)

        if not password:
            raise ValidationError("Password is required", field="password")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if password != confirm_password:
            raise ValidationError("Passwords do not match", field="confirm_password")

        self._password = password
        return password_strength(password)

    def submit(self) -> str:
        """Persist the employee; returns the employee number to log in with."""

        self._require_state(RegistrationState.AWAITING_STEP2)
        if self._password is None:
            raise WorkflowStateError("Password step has not been completed")

        credential = self._hasher.hash(self._password, self._hash_cost)
        try:
            employee = self._directory.create(self._employee_number, self._name, credential)
        except Conflict as exc:
            self._password = None
            self._state = RegistrationState.AWAITING_STEP1
            raise DuplicateEmployeeNumber() from exc

        self._password = None
        self._state = RegistrationState.COMPLETED
        logger.info("Registered employee %s", employee.employee_number)
        return employee.employee_number

    def cancel(self) -> RegistrationState:
        self._require_state(RegistrationState.AWAITING_STEP1, RegistrationState.AWAITING_STEP2)
        self._employee_number = None
        self._name = None
        self._password = None
        self._state = RegistrationState.CANCELLED
        return self._state
