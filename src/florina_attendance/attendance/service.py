from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from .ledger import AttendanceLedger
from .model import AttendanceRecord


class AttendanceService:
    """Read models for the employee attendance screen."""

    def __init__(self, ledger: AttendanceLedger, *, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self._ledger = ledger
        self._history_limit = int(history_limit)

    def submit(self, employee_id: str, status: str, *, now: Optional[datetime] = None) -> dict:
        return self._to_ui(self._ledger.submit_status(employee_id, AttendanceStatus.parse(status), now=now))

    def get_today_ui(self, employee_id: str, *, now: Optional[datetime] = None) -> Optional[dict]:
        record = self._ledger.fetch_today(employee_id, now=now)
        return self._to_ui(record) if record else None

    def get_history_ui(self, employee_id: str, *, limit: Optional[int] = None) -> list[dict]:
        rows = self._ledger.fetch_recent(employee_id, limit or self._history_limit)
        return [self._to_ui(r) for r in rows]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "date": r.date.strftime("%Y-%m-%d"),
            "check_in": r.check_in_time.strftime("%H:%M:%S"),
            "recorded_at": r.check_in_time.isoformat(),
            "status": r.status.value,
            "label": r.status.label,
            "is_present": r.status is AttendanceStatus.PRESENT,
        }
