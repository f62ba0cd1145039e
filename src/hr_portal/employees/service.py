from __future__ import annotations

import logging
import uuid
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_str, require_email, require_fields, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..timeline.model import Subject
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("first_name", "last_name", "email", "position", "job_entry_date", "birthday")
ADMIN_FIELDS = REQUIRED_FIELDS + ("department", "phone", "address")
# What an employee may change on their own profile.
SELF_SERVICE_FIELDS = ("first_name", "last_name", "phone", "address")


class EmployeeService:
    """Use case: employee directory (admin CRUD and self-service profile)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def _clean(self, data: Mapping[str, Any], allowed: Iterable[str], *, exclude_id: Optional[str] = None) -> dict:
        """Validate and normalise the allowed keys present in data."""
        out: dict = {}
        for key in allowed:
            if key not in data:
                continue
            value = data[key]
            if key in ("first_name", "last_name", "position"):
                out[key] = require_non_empty(value, key)
            elif key == "email":
                email = require_email(value)
                existing = self._employees.get_by_email(email)
                if existing and existing.employee_id != exclude_id:
                    raise ValidationError("An employee with this email already exists")
                out[key] = email
            elif key in ("job_entry_date", "birthday"):
                out[key] = parse_iso_date(require_non_empty(value, key))
            else:
                out[key] = optional_str(value)
        return out

    def _new_employee(self, fields: dict, *, user_id: Optional[str] = None) -> Employee:
        employee = Employee(
            employee_id=str(uuid.uuid4()),
            first_name=fields["first_name"],
            last_name=fields["last_name"],
            email=fields["email"],
            position=fields["position"],
            job_entry_date=fields["job_entry_date"],
            birthday=fields["birthday"],
            department=fields.get("department"),
            phone=fields.get("phone"),
            address=fields.get("address"),
            user_id=user_id,
        )
        self._employees.create(employee)
        return employee

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def list_subjects(self) -> list[Subject]:
        return [Subject(subject_id=e.employee_id, display_name=e.full_name) for e in self._employees.list_all()]

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(str(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create_employee(self, data: Mapping[str, Any]) -> Employee:
        require_fields(data, REQUIRED_FIELDS)
        employee = self._new_employee(self._clean(data, ADMIN_FIELDS))
        logger.info("Created employee %s (%s)", employee.employee_id, employee.email)
        return employee

    def update_employee(self, employee_id: str, data: Mapping[str, Any]) -> Employee:
        self.get_employee(employee_id)
        fields = self._clean(data, ADMIN_FIELDS, exclude_id=str(employee_id))
        if not fields:
            raise ValidationError("Nothing to update")
        if not self._employees.update(str(employee_id), fields):
            raise ValidationError("Failed to update employee")
        return self.get_employee(employee_id)

    def delete_employee(self, employee_id: str) -> None:
        if not self._employees.delete(str(employee_id)):
            raise NotFoundError("Employee not found")
        logger.info("Deleted employee %s", employee_id)

    def set_avatar(self, employee_id: str, avatar_url: str) -> Employee:
        self.get_employee(employee_id)
        if not self._employees.update(str(employee_id), {"avatar_url": avatar_url}):
            raise ValidationError("Failed to update avatar")
        return self.get_employee(employee_id)

    # Self-service, keyed by the identity provider's user id.
    def get_profile(self, user_id: str) -> Employee:
        employee = self._employees.get_by_user_id(str(user_id))
        if not employee:
            raise NotFoundError("No employee profile for this user")
        return employee

    def create_profile(self, user_id: str, data: Mapping[str, Any]) -> Employee:
        user_id = require_non_empty(user_id, "user_id")
        if self._employees.get_by_user_id(user_id):
            raise ValidationError("Profile already exists")
        require_fields(data, REQUIRED_FIELDS)
        return self._new_employee(self._clean(data, ADMIN_FIELDS), user_id=user_id)

    def update_profile(self, user_id: str, data: Mapping[str, Any]) -> Employee:
        employee = self.get_profile(user_id)
        fields = self._clean(data, SELF_SERVICE_FIELDS)
        if not fields:
            raise ValidationError("Nothing to update")
        if not self._employees.update(employee.employee_id, fields):
            raise ValidationError("Failed to update profile")
        return self.get_employee(employee.employee_id)
