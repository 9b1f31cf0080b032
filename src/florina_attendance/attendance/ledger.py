from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import ATTENDANCE_TABLE, DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import AttendanceAlreadyRecorded, ConstraintViolation, EmployeeNotFound, ReferenceViolation
from ..database.store import Store
from .model import AttendanceRecord

logger = logging.getLogger(__name__)

CONFLICT_KEYS = ("employee_id", "date")


class AttendanceLedger:
    """One attendance status per employee per calendar day.

    Submissions are a single store upsert keyed by (employee_id, date), so two
    near-simultaneous submissions never produce two rows; the last write wins.
    With `first_submission_final` the earliest submission of the day is kept
    and later ones are rejected instead.
    """

    def __init__(self, store: Store, *, first_submission_final: bool = False):
        self._store = store
        self._first_submission_final = bool(first_submission_final)

    def submit_status(
        self,
        employee_id: str,
        status: AttendanceStatus,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        employee_id = require_non_empty("" if employee_id is None else str(employee_id), "Employee")
        status = AttendanceStatus.parse(status)
        now = now or now_local()
        today = now.date()

        record = {
            "employee_id": employee_id,
            "date": today,
            "status": status.value,
            "check_in_time": now,
        }
        try:
            if self._first_submission_final:
                row = self._store.insert(ATTENDANCE_TABLE, record)
            else:
                row = self._store.upsert(ATTENDANCE_TABLE, record, CONFLICT_KEYS)
        except ConstraintViolation as exc:
            raise AttendanceAlreadyRecorded() from exc
        except ReferenceViolation as exc:
            # the employee was deleted after logging in
            raise EmployeeNotFound() from exc
        logger.info("Attendance %s recorded for employee %s on %s", status.label, employee_id, today)
        return AttendanceRecord.from_row(row)

    def fetch_today(self, employee_id: str, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        today = (now or now_local()).date()
        row = self._store.find_one(ATTENDANCE_TABLE, {"employee_id": str(employee_id), "date": today})
        return AttendanceRecord.from_row(row) if row else None

    def fetch_recent(self, employee_id: str, limit: int = DEFAULT_HISTORY_LIMIT) -> List[AttendanceRecord]:
        limit = require_positive_int(limit, "limit")
        rows = self._store.find_many(
            ATTENDANCE_TABLE,
            {"employee_id": str(employee_id)},
            order_by="date",
            descending=True,
            limit=limit,
        )
        return [AttendanceRecord.from_row(r) for r in rows[:limit]]
