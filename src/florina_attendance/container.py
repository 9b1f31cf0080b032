from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.ledger import AttendanceLedger
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_HASH_ITERATIONS, DEFAULT_HISTORY_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .database.store import MySQLStore, Store
from .employees.credentials import Hasher, WerkzeugHasher
from .employees.directory import EmployeeDirectory
from .employees.registration import RegistrationWorkflow
from .employees.service import CredentialVerifier, EmployeeService


@dataclass(frozen=True)
class Container:
    store: Store
    hasher: Hasher

    directory: EmployeeDirectory
    ledger: AttendanceLedger

    credential_verifier: CredentialVerifier
    employee_service: EmployeeService
    attendance_service: AttendanceService

    def new_registration(self) -> RegistrationWorkflow:
        # One workflow per registration attempt; it holds that attempt's input.
        return RegistrationWorkflow(self.directory, self.hasher)


def build_container(
    *,
    db_config: Optional[dict] = None,
    store: Optional[Store] = None,
    hasher: Optional[Hasher] = None,
    settings: object = None,
) -> Container:
    if store is None:
        if db_config is None:
            raise ValueError("Either db_config or store is required")
        store = MySQLStore(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))

    iterations = int(getattr(settings, "PASSWORD_HASH_ITERATIONS", DEFAULT_HASH_ITERATIONS))
    hasher = hasher or WerkzeugHasher(iterations=iterations)

    directory = EmployeeDirectory(store)
    ledger = AttendanceLedger(
        store,
        first_submission_final=bool(getattr(settings, "ATTENDANCE_FIRST_SUBMISSION_FINAL", False)),
    )

    credential_verifier = CredentialVerifier(
        directory,
        hasher,
        rehash_legacy=bool(getattr(settings, "REHASH_LEGACY_CREDENTIALS", False)),
    )
    employee_service = EmployeeService(directory, hasher)
    attendance_service = AttendanceService(
        ledger,
        history_limit=int(getattr(settings, "HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT)),
    )

    return Container(
        store=store,
        hasher=hasher,
        directory=directory,
        ledger=ledger,
        credential_verifier=credential_verifier,
        employee_service=employee_service,
        attendance_service=attendance_service,
    )
