from __future__ import annotations

import io
from datetime import date, datetime
from types import SimpleNamespace

import pytest
from flask import Flask

from hr_portal.core.constants import MAX_AVATAR_BYTES, MAX_REQUEST_BYTES
from hr_portal.core.enums import LeaveCategory, LeaveStatus
from hr_portal.core.exceptions import (
    ConfigurationError,
    EmailDeliveryError,
    InvalidDateError,
    NotFoundError,
    ValidationError,
)
from hr_portal.employees.model import Employee
from hr_portal.leave.model import TimeOffRequest
from hr_portal.main import create_app, register_routes
from hr_portal.notifications.service import NotificationReport
from hr_portal.timeline.grid import build_month_grid
from hr_portal.timeline.interval_index import IntervalIndex
from hr_portal.timeline.model import LeaveInterval, Subject

ADMIN = {"X-Admin-Key": "secret"}

ALICE = Employee(
    employee_id="e1",
    first_name="Alice",
    last_name="Martin",
    email="alice@example.com",
    position="HR Manager",
    job_entry_date=date(2018, 3, 12),
    birthday=date(1988, 7, 4),
)


class FakeEmployeeService:
    def __init__(self):
        self.created: list[dict] = []
        self.avatar: str | None = None

    def list_employees(self):
        return [ALICE]

    def get_employee(self, employee_id):
        if employee_id != "e1":
            raise NotFoundError("Employee not found")
        return ALICE

    def create_employee(self, data):
        if not data.get("email"):
            raise ValidationError("Missing required fields: email")
        self.created.append(dict(data))
        return ALICE

    def update_employee(self, employee_id, data):
        self.get_employee(employee_id)
        return ALICE

    def delete_employee(self, employee_id):
        self.get_employee(employee_id)

    def set_avatar(self, employee_id, url):
        self.avatar = url
        return ALICE

    def get_profile(self, user_id):
        raise NotFoundError("No employee profile for this user")

    def create_profile(self, user_id, data):
        return ALICE

    def update_profile(self, user_id, data):
        return ALICE


class FakeLeaveService:
    def __init__(self):
        self.submitted: list[dict] = []

    def list_requests(self, *, employee_id=None):
        return [{"id": 1, "employee_id": employee_id or "e1", "status": "pending"}]

    def submit(self, **kwargs):
        if kwargs["start_date"] > kwargs["end_date"]:
            raise InvalidDateError("Start date is after end date")
        self.submitted.append(kwargs)
        return 7

    def _request(self, status):
        return TimeOffRequest(
            request_id=7,
            employee_id="e1",
            request_type="vacation",
            start_date=date(2024, 3, 10),
            end_date=date(2024, 3, 14),
            days_requested=5,
            status=status,
            created_at=datetime(2024, 3, 1, 9, 0),
        )

    def approve(self, request_id):
        return self._request(LeaveStatus.APPROVED)

    def reject(self, request_id):
        raise ValidationError("Request has already been approved")


class FakeTimelineService:
    def __init__(self):
        self.calls: list[tuple[int, int]] = []

    def month_grid(self, *, year, month, today=None):
        self.calls.append((year, month))
        index = IntervalIndex([LeaveInterval("7", "e1", date(2024, 3, 10), date(2024, 3, 14), LeaveCategory.VACATION)])
        return build_month_grid(
            year=year, month=month, subjects=[Subject("e1", "Alice Martin")], index=index, today=date(2024, 3, 12)
        )


class FakeNotificationService:
    def __init__(self, error=None):
        self.error = error
        self.test_emails: list[tuple] = []

    def send_test_email(self, to_email, *, subject=None, message=None):
        if not to_email:
            raise ValidationError("toEmail is required")
        self.test_emails.append((to_email, subject, message))
        return to_email

    def run(self, today=None):
        if self.error:
            raise self.error
        return NotificationReport(today=date(2024, 7, 4), sent=0)


class FakeInvitations:
    def __init__(self, error=None):
        self.error = error

    def invite(self, employee_id, *, email=None, subject=None, message=None):
        if self.error:
            raise self.error
        return email or "alice@example.com"


class FakeStorage:
    def __init__(self):
        self.uploads: list[int] = []

    def upload_avatar(self, *, owner_id, stream, filename, content_type, size):
        self.uploads.append(size)
        if not content_type.startswith("image/"):
            raise ValidationError("Invalid file type: please select an image file")
        return f"https://cdn.example.com/{owner_id}/avatar.png"


def _container(**overrides):
    values = dict(
        admin_api_key="secret",
        employee_service=FakeEmployeeService(),
        leave_service=FakeLeaveService(),
        timeline_service=FakeTimelineService(),
        notification_service=FakeNotificationService(),
        invitation_service=FakeInvitations(),
        avatar_storage=FakeStorage(),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def _client(container):
    app = Flask(__name__)
    app.config["TESTING"] = True
    register_routes(app, container)
    return app.test_client()


@pytest.fixture
def container():
    return _container()


@pytest.fixture
def client(container):
    return _client(container)


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.get_json()["status"] == "ok"


def test_list_and_get_employees(client):
    assert client.get("/api/employees").get_json()["employees"][0]["id"] == "e1"

    res = client.get("/api/employees/e1")
    assert res.status_code == 200
    assert res.get_json()["employee"]["email"] == "alice@example.com"

    missing = client.get("/api/employees/zz")
    assert missing.status_code == 404
    assert missing.get_json() == {"success": False, "message": "Employee not found"}


def test_admin_key_required(client, container):
    payload = {"email": "x@example.com"}
    assert client.post("/api/employees", json=payload).status_code == 401
    assert client.post("/api/employees", json=payload, headers={"X-Admin-Key": "wrong"}).status_code == 401

    res = client.post("/api/employees", json=payload, headers=ADMIN)
    assert res.status_code == 201
    assert container.employee_service.created == [payload]


def test_admin_endpoints_fail_closed_without_configured_key():
    client = _client(_container(admin_api_key=""))
    res = client.delete("/api/employees/e1", headers={"X-Admin-Key": ""})
    assert res.status_code == 500


def test_validation_errors_map_to_400(client):
    res = client.post("/api/employees", json={}, headers=ADMIN)
    assert res.status_code == 400
    assert "email" in res.get_json()["message"]

    res = client.put("/api/employees/e1", data="not json", headers=ADMIN)
    assert res.status_code == 400


def test_update_and_delete_employee(client):
    assert client.put("/api/employees/e1", json={"position": "CEO"}, headers=ADMIN).status_code == 200
    assert client.delete("/api/employees/e1", headers=ADMIN).get_json()["message"] == "Employee deleted"
    assert client.delete("/api/employees/nope", headers=ADMIN).status_code == 404


def test_avatar_upload(client, container):
    res = client.post(
        "/api/employees/e1/avatar",
        data={"file": (io.BytesIO(b"\x89PNG"), "me.png", "image/png")},
        content_type="multipart/form-data",
    )
    assert res.status_code == 200
    assert res.get_json()["avatar_url"] == "https://cdn.example.com/e1/avatar.png"
    assert container.employee_service.avatar == "https://cdn.example.com/e1/avatar.png"

    res = client.post(
        "/api/employees/e1/avatar",
        data={"file": (io.BytesIO(b"%PDF"), "cv.pdf", "application/pdf")},
        content_type="multipart/form-data",
    )
    assert res.status_code == 400

    assert client.post("/api/employees/e1/avatar", data={}, content_type="multipart/form-data").status_code == 400


def test_invite(client):
    res = client.post("/api/employees/e1/invite", json={"email": "alice@home.org"}, headers=ADMIN)
    assert res.status_code == 200
    assert res.get_json()["message"] == "Invitation sent successfully to alice@home.org"


def test_invite_delivery_failure_is_502():
    client = _client(_container(invitation_service=FakeInvitations(EmailDeliveryError("domain not verified"))))
    res = client.post("/api/employees/e1/invite", headers=ADMIN)
    assert res.status_code == 502
    assert res.get_json()["message"] == "domain not verified"


def test_profile_routes(client):
    assert client.get("/api/profile/u1").status_code == 404
    assert client.post("/api/profile/u1", json={"first_name": "A"}).status_code == 201
    assert client.put("/api/profile/u1", json={"phone": "1"}).status_code == 200


def test_time_off_submit_and_list(client, container):
    body = {"employee_id": "e1", "request_type": "vacation", "start_date": "2024-03-10", "end_date": "2024-03-14"}
    res = client.post("/api/time-off", json=body)
    assert res.status_code == 201
    assert res.get_json()["id"] == 7
    assert container.leave_service.submitted[0]["reason"] is None

    inverted = dict(body, start_date="2024-03-20")
    assert client.post("/api/time-off", json=inverted).status_code == 400

    assert client.get("/api/time-off?employee_id=e2").get_json()["requests"][0]["employee_id"] == "e2"


def test_time_off_decisions(client):
    assert client.post("/api/time-off/7/approve").status_code == 401

    res = client.post("/api/time-off/7/approve", headers=ADMIN)
    assert res.status_code == 200
    assert res.get_json()["request"]["status"] == "approved"

    res = client.post("/api/time-off/7/reject", headers=ADMIN)
    assert res.status_code == 400


def test_timeline(client, container):
    res = client.get("/api/timeline?year=2024&month=3")
    assert res.status_code == 200
    data = res.get_json()
    assert container.timeline_service.calls == [(2024, 3)]
    assert data["success"] is True
    assert len(data["days"]) == 31
    assert data["rows"][0]["cells"][9] == {"id": "7", "category": "vacation", "color": "green"}

    assert client.get("/api/timeline?year=2024&month=abc").status_code == 400


def test_timeline_invalid_month():
    client = _client(_container())
    assert client.get("/api/timeline?year=2024&month=13").status_code == 400


def test_notifications_run(client):
    assert client.post("/api/notifications/run").status_code == 401

    res = client.post("/api/notifications/run", headers=ADMIN)
    assert res.status_code == 200
    assert res.get_json()["message"] == "Notifications check completed. Sent 0 notifications."


def test_notifications_misconfigured_and_unexpected_errors():
    client = _client(_container(notification_service=FakeNotificationService(ConfigurationError("RESEND_API_KEY is not configured"))))
    res = client.post("/api/notifications/run", headers=ADMIN)
    assert res.status_code == 500
    assert res.get_json()["message"] == "RESEND_API_KEY is not configured"

    client = _client(_container(notification_service=FakeNotificationService(RuntimeError("db down"))))
    res = client.post("/api/notifications/run", headers=ADMIN)
    assert res.status_code == 500
    assert res.get_json()["message"] == "Internal server error"


def test_send_test_email_route(client, container):
    payload = {"toEmail": "ops@example.com", "subject": "Ping"}
    assert client.post("/api/notifications/test-email", json=payload).status_code == 401

    res = client.post("/api/notifications/test-email", json=payload, headers=ADMIN)
    assert res.status_code == 200
    assert res.get_json() == {"success": True, "toEmail": "ops@example.com"}
    assert container.notification_service.test_emails == [("ops@example.com", "Ping", None)]

    res = client.post("/api/notifications/test-email", json={}, headers=ADMIN)
    assert res.status_code == 400
    assert res.get_json()["message"] == "toEmail is required"


def test_avatar_over_the_limit_is_rejected_before_upload(client, container):
    res = client.post(
        "/api/employees/e1/avatar",
        data={"file": (io.BytesIO(b"\0" * (MAX_AVATAR_BYTES + 1)), "big.png", "image/png")},
        content_type="multipart/form-data",
    )
    assert res.status_code == 400
    assert "too large" in res.get_json()["message"]
    assert container.avatar_storage.uploads == []


def test_app_caps_request_body_size(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setenv("AUTO_INIT_DB", "0")
    monkeypatch.setenv("AUTO_SEED_DB", "0")
    monkeypatch.setenv("RESEND_API_KEY", "")
    app = create_app()

    assert app.config["MAX_CONTENT_LENGTH"] == MAX_REQUEST_BYTES

    res = app.test_client().post(
        "/api/employees/e1/avatar",
        data={"file": (io.BytesIO(b"\0" * (MAX_REQUEST_BYTES + 1)), "big.png", "image/png")},
        content_type="multipart/form-data",
    )
    assert res.status_code == 413
