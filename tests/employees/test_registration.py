import pytest

from florina_attendance.core.enums import RegistrationState
from florina_attendance.core.exceptions import DuplicateEmployeeNumber, ValidationError, WorkflowStateError
from florina_attendance.employees.credentials import HashedCredential, classify
from florina_attendance.employees.directory import EmployeeDirectory
from florina_attendance.employees.registration import RegistrationWorkflow, password_strength, strength_label
from florina_attendance.employees.service import CredentialVerifier


@pytest.fixture
def workflow(store, hasher):
    wf = RegistrationWorkflow(EmployeeDirectory(store), hasher)
    wf.start()
    return wf


def test_full_registration_creates_hashed_employee(store, hasher, workflow):
    assert workflow.submit_step1(" 010 ", " Mona ") == RegistrationState.AWAITING_STEP2
    assert workflow.submit_step2("Secret1!", "Secret1!") == 5

    number = workflow.submit()

    assert number == "010"
    assert workflow.state == RegistrationState.COMPLETED
    row = store.find_one("employees", {"employee_number": "010"})
    assert row["name"] == "Mona"
    assert isinstance(classify(row["password_hash"], hasher), HashedCredential)
    assert CredentialVerifier(EmployeeDirectory(store), hasher).authenticate(number, "Secret1!").name == "Mona"


def test_step1_rejects_existing_number(store, workflow):
    store.add_employee("010", "Existing")

    with pytest.raises(DuplicateEmployeeNumber):
        workflow.submit_step1("010", "Mona")

    assert workflow.state == RegistrationState.AWAITING_STEP1


@pytest.mark.parametrize(
    "number, name",
    [("", "Mona"), ("   ", "Mona"), ("010", ""), ("010", "M"), ("010", " M ")],
)
def test_step1_validation(store, workflow, number, name):
    with pytest.raises(ValidationError):
        workflow.submit_step1(number, name)
    assert workflow.state == RegistrationState.AWAITING_STEP1
    assert store.calls == []


def test_step2_rejects_short_password(store, workflow):
    workflow.submit_step1("010", "Mona")

    with pytest.raises(ValidationError):
        workflow.submit_step2("abc", "abc")

    assert workflow.state == RegistrationState.AWAITING_STEP2
    with pytest.raises(WorkflowStateError):
        workflow.submit()
    assert store.tables["employees"] == {}


def test_step2_rejects_mismatched_confirmation(workflow):
    workflow.submit_step1("010", "Mona")

    with pytest.raises(ValidationError) as excinfo:
        workflow.submit_step2("secret1", "secret2")
    assert excinfo.value.field == "confirm_password"


def test_submit_maps_store_conflict_to_duplicate(store, workflow):
    workflow.submit_step1("010", "Mona")
    workflow.submit_step2("secret1", "secret1")
    # Another registration wins the race after the pre-check.
    store.add_employee("010", "Racer")

    with pytest.raises(DuplicateEmployeeNumber):
        workflow.submit()

    assert workflow.state == RegistrationState.AWAITING_STEP1
    assert [r["name"] for r in store.tables["employees"].values()] == ["Racer"]


def test_cancel_discards_input(store, workflow):
    workflow.submit_step1("010", "Mona")
    workflow.submit_step2("secret1", "secret1")

    assert workflow.cancel() == RegistrationState.CANCELLED
    assert workflow.employee_number is None
    assert workflow.name is None
    with pytest.raises(WorkflowStateError):
        workflow.submit()
    assert store.tables["employees"] == {}


def test_cancel_from_step1(workflow):
    assert workflow.cancel() == RegistrationState.CANCELLED


def test_steps_out_of_order(store, hasher):
    wf = RegistrationWorkflow(EmployeeDirectory(store), hasher)
    with pytest.raises(WorkflowStateError):
        wf.submit_step1("010", "Mona")
    wf.start()
    with pytest.raises(WorkflowStateError):
        wf.submit_step2("secret1", "secret1")
    with pytest.raises(WorkflowStateError):
        wf.start()


@pytest.mark.parametrize(
    "password, expected",
    [
        ("", 0),
        ("abc", 1),
        ("abcdef", 2),
        ("abcdeF", 3),
        ("abcdF1", 4),
        ("abcF1!", 5),
        ("ABC", 1),
        ("!!!!!!", 2),
    ],
)
def test_password_strength(password, expected):
    assert password_strength(password) == expected


def test_password_strength_is_monotonic_and_bounded():
    steps = ["aaaaaa", "aaaaaA", "aaaaA1", "aaaA1!"]
    scores = [password_strength(p) for p in steps]
    assert scores == sorted(scores)
    assert all(0 <= s <= 5 for s in scores)


def test_strength_labels():
    assert strength_label(0) == "Very weak"
    assert strength_label(3) == "Medium"
    assert strength_label(5) == "Very strong"
