from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid, before any store call is made."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class WorkflowStateError(ValidationError):
    """Raised when a registration step is called out of order."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class EmployeeNotFound(AuthenticationError):
    def __init__(self, message: str = "Employee number not found"):
        super().__init__(message)


class InvalidCredential(AuthenticationError):
    def __init__(self, message: str = "Incorrect password"):
        super().__init__(message)


class Conflict(DomainError):
    """Raised by the directory when the store rejects a duplicate key."""


class DuplicateEmployeeNumber(DomainError):
    def __init__(self, message: str = "Employee number already exists"):
        super().__init__(message)


class AttendanceAlreadyRecorded(DomainError):
    def __init__(self, message: str = "Attendance already recorded for today"):
        super().__init__(message)


class StoreUnavailable(DomainError):
    """Network or database failure, not further classified."""

    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message)


class ConstraintViolation(Exception):
    """Raised by a store when a uniqueness constraint rejects a write."""

    def __init__(self, table: str, detail: str = ""):
        super().__init__(f"Constraint violation on {table}: {detail}".rstrip(": "))
        self.table = table
        self.detail = detail


class ReferenceViolation(Exception):
    """Raised by a store when a write references a row that does not exist."""

    def __init__(self, table: str, detail: str = ""):
        super().__init__(f"Missing referenced row for {table}: {detail}".rstrip(": "))
        self.table = table
        self.detail = detail
