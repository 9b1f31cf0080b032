from __future__ import annotations

from enum import Enum

from .exceptions import ValidationError


class AttendanceStatus(str, Enum):
    """Daily attendance status.

    Values are the strings already stored in the `attendance` table.
    """

    PRESENT = "حضور"
    ABSENT = "غياب"

    @classmethod
    def parse(cls, value: str) -> "AttendanceStatus":
        if isinstance(value, cls):
            return value
        raw = (value or "").strip()
        aliases = {"present": cls.PRESENT, "absent": cls.ABSENT}
        if raw.lower() in aliases:
            return aliases[raw.lower()]
        try:
            return cls(raw)
        except ValueError:
            raise ValidationError("Unknown attendance status", field="status") from None

    @property
    def label(self) -> str:
        return "Present" if self is AttendanceStatus.PRESENT else "Absent"


class RegistrationState(str, Enum):
    """States of the self-service registration workflow."""

    INITIAL = "INITIAL"
    AWAITING_STEP1 = "AWAITING_STEP1"
    AWAITING_STEP2 = "AWAITING_STEP2"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
