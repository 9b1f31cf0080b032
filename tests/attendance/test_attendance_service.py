from florina_attendance.attendance.ledger import AttendanceLedger
from florina_attendance.attendance.service import AttendanceService


def test_submit_and_today_view(store, fixed_now):
    service = AttendanceService(AttendanceLedger(store))

    row = service.submit("42", "present", now=fixed_now)

    assert row == {
        "date": "2024-05-01",
        "check_in": "08:00:00",
        "recorded_at": "2024-05-01T08:00:00",
        "status": "حضور",
        "label": "Present",
        "is_present": True,
    }
    assert service.get_today_ui("42", now=fixed_now) == row
    assert service.get_today_ui("7", now=fixed_now) is None


def test_history_uses_default_limit(store, fixed_now):
    from datetime import timedelta

    service = AttendanceService(AttendanceLedger(store), history_limit=3)
    for offset in range(5):
        service.submit("42", "absent", now=fixed_now - timedelta(days=offset))

    history = service.get_history_ui("42")
    assert [h["date"] for h in history] == ["2024-05-01", "2024-04-30", "2024-04-29"]
    assert all(h["is_present"] is False for h in history)
    assert len(service.get_history_ui("42", limit=5)) == 5
