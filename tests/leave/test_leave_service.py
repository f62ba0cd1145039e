from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from hr_portal.core.enums import LeaveCategory, LeaveStatus
from hr_portal.core.exceptions import InvalidDateError, NotFoundError, ValidationError
from hr_portal.leave.model import TimeOffRequest
from hr_portal.leave.service import LeaveService, days_requested


class KnownEmployees:
    def __init__(self, *ids: str):
        self._ids = set(ids)

    def get_by_id(self, employee_id: str):
        return object() if employee_id in self._ids else None


class InMemoryRequests:
    def __init__(self):
        self._items: dict[int, TimeOffRequest] = {}
        self._id = 0

    def create(self, *, employee_id, request_type, start_date, end_date, days_requested, reason) -> int:
        self._id += 1
        self._items[self._id] = TimeOffRequest(
            request_id=self._id,
            employee_id=employee_id,
            request_type=request_type,
            start_date=start_date,
            end_date=end_date,
            days_requested=days_requested,
            status=LeaveStatus.PENDING,
            created_at=datetime(2024, 1, 1, 9, 0),
            reason=reason,
        )
        return self._id

    def get(self, *, request_id: int) -> Optional[TimeOffRequest]:
        return self._items.get(request_id)

    def list_requests(self, *, employee_id=None, limit=500):
        items = [r for r in self._items.values() if employee_id is None or r.employee_id == employee_id]
        return [r.to_dict() for r in reversed(items)][:limit]

    def decide(self, *, request_id: int, status: LeaveStatus) -> bool:
        req = self._items.get(request_id)
        if not req or req.status != LeaveStatus.PENDING:
            return False
        approved_at = datetime(2024, 1, 2, 10, 0) if status == LeaveStatus.APPROVED else None
        self._items[request_id] = replace(req, status=status, approved_at=approved_at)
        return True

    def list_approved_overlapping(self, *, range_start=None, range_end=None):
        return [
            r
            for r in self._items.values()
            if r.status == LeaveStatus.APPROVED
            and (range_end is None or r.start_date <= range_end)
            and (range_start is None or r.end_date >= range_start)
        ]


def _service():
    return LeaveService(InMemoryRequests(), KnownEmployees("e1", "e2"))


def test_days_requested():
    assert days_requested(date(2024, 3, 1), date(2024, 3, 1)) == 1
    assert days_requested(date(2024, 2, 28), date(2024, 3, 1)) == 3


def test_submit_creates_pending_request():
    service = _service()
    request_id = service.submit(
        employee_id="e1", request_type="Vacation", start_date="2024-03-10", end_date="2024-03-14", reason=" trip "
    )

    req = service.get(request_id)
    assert req.status == LeaveStatus.PENDING
    assert req.request_type == "vacation"
    assert req.days_requested == 5
    assert req.reason == "trip"


def test_submit_validation():
    service = _service()
    with pytest.raises(ValidationError):
        service.submit(employee_id="", request_type="sick", start_date="2024-03-01", end_date="2024-03-01")
    with pytest.raises(ValidationError, match="start_date and end_date are required"):
        service.submit(employee_id="e1", request_type="sick", start_date="2024-03-01", end_date=None)
    with pytest.raises(InvalidDateError):
        service.submit(employee_id="e1", request_type="sick", start_date="2024-03-05", end_date="2024-03-01")
    with pytest.raises(InvalidDateError):
        service.submit(employee_id="e1", request_type="sick", start_date="2024-03-aa", end_date="2024-03-01")
    with pytest.raises(ValidationError, match="Unknown employee"):
        service.submit(employee_id="ghost", request_type="sick", start_date="2024-03-01", end_date="2024-03-01")


def test_approve_is_terminal():
    service = _service()
    request_id = service.submit(employee_id="e1", request_type="sick", start_date="2024-03-01", end_date="2024-03-02")

    approved = service.approve(request_id)
    assert approved.status == LeaveStatus.APPROVED
    assert approved.approved_at is not None

    with pytest.raises(ValidationError, match="already been approved"):
        service.reject(request_id)


def test_reject_and_unknown_request():
    service = _service()
    request_id = service.submit(employee_id="e2", request_type="personal", start_date="2024-03-01", end_date="2024-03-01")

    rejected = service.reject(request_id)
    assert rejected.status == LeaveStatus.REJECTED
    assert rejected.approved_at is None

    with pytest.raises(NotFoundError):
        service.approve(999)


def test_approved_intervals_only_returns_approved_overlapping():
    service = _service()
    a = service.submit(employee_id="e1", request_type="vacation", start_date="2024-02-25", end_date="2024-03-05")
    service.submit(employee_id="e1", request_type="sick", start_date="2024-03-10", end_date="2024-03-11")
    c = service.submit(employee_id="e2", request_type="jury duty", start_date="2024-04-01", end_date="2024-04-02")
    service.approve(a)
    service.approve(c)

    intervals = service.approved_intervals(date(2024, 3, 1), date(2024, 3, 31))
    assert [(i.interval_id, i.subject_id, i.category) for i in intervals] == [("1", "e1", LeaveCategory.VACATION)]

    everything = service.approved_intervals()
    assert [i.category for i in everything] == [LeaveCategory.VACATION, LeaveCategory.OTHER]

    with pytest.raises(InvalidDateError):
        service.approved_intervals(date(2024, 3, 31), date(2024, 3, 1))


def test_list_requests_filters_by_employee():
    service = _service()
    service.submit(employee_id="e1", request_type="sick", start_date="2024-03-01", end_date="2024-03-01")
    service.submit(employee_id="e2", request_type="sick", start_date="2024-03-01", end_date="2024-03-01")

    assert [r["employee_id"] for r in service.list_requests()] == ["e2", "e1"]
    assert [r["employee_id"] for r in service.list_requests(employee_id="e2")] == ["e2"]
