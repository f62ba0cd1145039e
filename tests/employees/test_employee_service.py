from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from hr_portal.core.exceptions import InvalidDateError, NotFoundError, ValidationError
from hr_portal.employees.model import Employee
from hr_portal.employees.service import EmployeeService


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id: dict[str, Employee] = {e.employee_id: e for e in employees}

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda e: e.first_name)

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_user_id(self, user_id: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.user_id == user_id), None)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.email.lower() == email.lower()), None)

    def create(self, employee: Employee) -> str:
        self._by_id[employee.employee_id] = employee
        return employee.employee_id

    def update(self, employee_id: str, fields: dict) -> bool:
        if employee_id not in self._by_id:
            return False
        self._by_id[employee_id] = replace(self._by_id[employee_id], **fields)
        return True

    def delete(self, employee_id: str) -> bool:
        return self._by_id.pop(employee_id, None) is not None

    def mark_invited(self, employee_id: str, invited_at: datetime) -> bool:
        return self.update(employee_id, {"invited_at": invited_at})


def _alice(**overrides):
    data = dict(
        employee_id="e1",
        first_name="Alice",
        last_name="Martin",
        email="alice@example.com",
        position="HR Manager",
        job_entry_date=date(2018, 3, 12),
        birthday=date(1988, 7, 4),
    )
    data.update(overrides)
    return Employee(**data)


VALID = {
    "first_name": " Bruno ",
    "last_name": "Keller",
    "email": "bruno@example.com",
    "position": "Developer",
    "job_entry_date": "2021-09-01",
    "birthday": "1992-02-29",
    "department": "Engineering",
    "phone": "",
}


def test_create_employee_normalises_fields():
    repo = InMemoryEmployees()
    employee = EmployeeService(repo).create_employee(VALID)

    assert repo.get_by_id(employee.employee_id) == employee
    assert employee.first_name == "Bruno"
    assert employee.job_entry_date == date(2021, 9, 1)
    assert employee.birthday == date(1992, 2, 29)
    assert employee.department == "Engineering"
    assert employee.phone is None
    assert len(employee.employee_id) == 36


def test_create_employee_reports_missing_fields():
    data = dict(VALID)
    del data["position"]
    data["birthday"] = ""
    with pytest.raises(ValidationError, match="Missing required fields: position, birthday"):
        EmployeeService(InMemoryEmployees()).create_employee(data)


def test_create_employee_rejects_bad_email_and_duplicates():
    service = EmployeeService(InMemoryEmployees([_alice()]))
    with pytest.raises(ValidationError, match="valid email"):
        service.create_employee({**VALID, "email": "not-an-email"})
    with pytest.raises(ValidationError, match="already exists"):
        service.create_employee({**VALID, "email": "alice@example.com"})


def test_create_employee_rejects_bad_date():
    with pytest.raises(InvalidDateError):
        EmployeeService(InMemoryEmployees()).create_employee({**VALID, "birthday": "04/07/1988"})


def test_get_update_delete():
    repo = InMemoryEmployees([_alice()])
    service = EmployeeService(repo)

    updated = service.update_employee("e1", {"position": "Head of HR", "email": "alice@example.com"})
    assert updated.position == "Head of HR"

    with pytest.raises(ValidationError, match="Nothing to update"):
        service.update_employee("e1", {"unknown": "x"})

    service.delete_employee("e1")
    with pytest.raises(NotFoundError):
        service.get_employee("e1")
    with pytest.raises(NotFoundError):
        service.delete_employee("e1")


def test_list_subjects_uses_full_name():
    service = EmployeeService(InMemoryEmployees([_alice(), _alice(employee_id="e2", first_name="Bruno", email="b@x.io")]))
    assert [(s.subject_id, s.display_name) for s in service.list_subjects()] == [
        ("e1", "Alice Martin"),
        ("e2", "Bruno Martin"),
    ]


def test_set_avatar():
    repo = InMemoryEmployees([_alice()])
    employee = EmployeeService(repo).set_avatar("e1", "https://cdn.example.com/e1/avatar.png")
    assert employee.avatar_url == "https://cdn.example.com/e1/avatar.png"


def test_profile_lifecycle():
    repo = InMemoryEmployees()
    service = EmployeeService(repo)

    with pytest.raises(NotFoundError):
        service.get_profile("user-1")

    created = service.create_profile("user-1", VALID)
    assert service.get_profile("user-1") == created

    with pytest.raises(ValidationError, match="Profile already exists"):
        service.create_profile("user-1", {**VALID, "email": "other@example.com"})

    updated = service.update_profile("user-1", {"phone": "+49 30 1234", "position": "CEO", "last_name": "K."})
    assert updated.phone == "+49 30 1234"
    assert updated.last_name == "K."
    assert updated.position == "Developer"

    with pytest.raises(ValidationError, match="Nothing to update"):
        service.update_profile("user-1", {"email": "x@example.com"})
