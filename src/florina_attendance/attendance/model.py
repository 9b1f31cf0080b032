from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: the single status entry of an employee for one day."""

    id: str
    employee_id: str
    date: date
    status: AttendanceStatus
    check_in_time: datetime

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AttendanceRecord":
        work_date = row["date"]
        if isinstance(work_date, datetime):
            work_date = work_date.date()
        return cls(
            id=str(row["id"]),
            employee_id=str(row["employee_id"]),
            date=work_date,
            status=AttendanceStatus(row["status"]),
            check_in_time=row["check_in_time"],
        )
