import pytest

from florina_attendance.core.exceptions import Conflict, EmployeeNotFound, ValidationError
from florina_attendance.employees.directory import EmployeeDirectory


def test_create_and_find_by_number(store):
    directory = EmployeeDirectory(store)
    created = directory.create("001", "Ahmed", None)

    found = directory.find_by_number("001")
    assert found == created
    assert found.credential is None
    assert not found.has_credential
    assert directory.find_by_number("999") is None


def test_create_duplicate_number_raises_conflict(store):
    directory = EmployeeDirectory(store)
    directory.create("001", "Ahmed", None)

    with pytest.raises(Conflict):
        directory.create("001", "Someone else", None)

    numbers = [e.employee_number for e in directory.list_all()]
    assert numbers == ["001"]


def test_list_all_is_ordered_by_employee_number(store):
    directory = EmployeeDirectory(store)
    for number in ("010", "002", "005"):
        directory.create(number, f"Emp {number}", None)

    assert [e.employee_number for e in directory.list_all()] == ["002", "005", "010"]


def test_update_changes_name_and_keeps_number(store):
    directory = EmployeeDirectory(store)
    employee = directory.create("001", "Ahmed", None)

    updated = directory.update(employee.id, name="Ahmed Ali")

    assert updated.name == "Ahmed Ali"
    assert updated.employee_number == "001"
    assert updated.id == employee.id


def test_update_rejects_immutable_fields(store):
    directory = EmployeeDirectory(store)
    employee = directory.create("001", "Ahmed", None)

    with pytest.raises(ValidationError):
        directory.update(employee.id, employee_number="002")
    assert directory.get(employee.id).employee_number == "001"


def test_update_unknown_employee(store):
    with pytest.raises(EmployeeNotFound):
        EmployeeDirectory(store).update("missing", name="Nobody")


def test_delete_removes_employee_and_attendance(store):
    directory = EmployeeDirectory(store)
    employee = directory.create("001", "Ahmed", None)
    store.insert("attendance", {"employee_id": employee.id, "date": "2024-05-01", "status": "حضور"})

    directory.delete(employee.id)

    assert directory.get(employee.id) is None
    assert store.tables["attendance"] == {}
    with pytest.raises(EmployeeNotFound):
        directory.delete(employee.id)
