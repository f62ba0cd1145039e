from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_date, require_range
from ..common.validators import optional_str, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..timeline.model import LeaveInterval
from .model import TimeOffRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def days_requested(start_date: date, end_date: date) -> int:
    """Calendar days in the inclusive range, at least one."""
    return max(1, (end_date - start_date).days + 1)


class LeaveService:
    """Use case: submit and decide time-off requests."""

    def __init__(self, requests: LeaveRepository, employees: EmployeeRepository):
        self._requests = requests
        self._employees = employees

    def submit(
        self,
        *,
        employee_id: Any,
        request_type: Any,
        start_date: Any,
        end_date: Any,
        reason: Any = None,
    ) -> int:
        employee_id = require_non_empty(employee_id, "employee_id")
        request_type = require_non_empty(request_type, "request_type").lower()
        if start_date in (None, "") or end_date in (None, ""):
            raise ValidationError("start_date and end_date are required")
        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date)
        require_range(start, end)

        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Unknown employee")

        request_id = self._requests.create(
            employee_id=employee_id,
            request_type=request_type,
            start_date=start,
            end_date=end,
            days_requested=days_requested(start, end),
            reason=optional_str(reason),
        )
        logger.info("Time-off request %s submitted for employee %s (%s..%s)", request_id, employee_id, start, end)
        return request_id

    def get(self, request_id: int) -> TimeOffRequest:
        req = self._requests.get(request_id=int(request_id))
        if not req:
            raise NotFoundError("Request not found")
        return req

    def _decide(self, request_id: int, status: LeaveStatus) -> TimeOffRequest:
        req = self.get(request_id)
        if req.status != LeaveStatus.PENDING:
            raise ValidationError(f"Request has already been {req.status.value}")
        if not self._requests.decide(request_id=int(request_id), status=status):
            raise ValidationError("Request has already been decided")
        logger.info("Time-off request %s %s", request_id, status.value)
        return self.get(request_id)

    def approve(self, request_id: int) -> TimeOffRequest:
        return self._decide(request_id, LeaveStatus.APPROVED)

    def reject(self, request_id: int) -> TimeOffRequest:
        return self._decide(request_id, LeaveStatus.REJECTED)

    def list_requests(self, *, employee_id: Optional[str] = None) -> Sequence[dict]:
        return self._requests.list_requests(employee_id=employee_id, limit=DEFAULT_LIST_LIMIT)

    def approved_intervals(
        self, range_start: Optional[date] = None, range_end: Optional[date] = None
    ) -> list[LeaveInterval]:
        """Approved requests overlapping the range, as timeline intervals."""
        if range_start is not None and range_end is not None:
            require_range(range_start, range_end)
        return [
            r.to_interval()
            for r in self._requests.list_approved_overlapping(range_start=range_start, range_end=range_end)
        ]
