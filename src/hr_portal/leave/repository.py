from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import TimeOffRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        employee_id: str,
        request_type: str,
        start_date: date,
        end_date: date,
        days_requested: int,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[TimeOffRequest]:
        raise NotImplementedError

    def list_requests(self, *, employee_id: Optional[str] = None, limit: int = 500) -> Sequence[dict]:
        """Return UI rows (joined with the employee name), newest first."""

        raise NotImplementedError

    def decide(self, *, request_id: int, status: LeaveStatus) -> bool:
        """Move a pending request to a terminal status. False if it was not pending."""

        raise NotImplementedError

    def list_approved_overlapping(
        self, *, range_start: Optional[date] = None, range_end: Optional[date] = None
    ) -> Sequence[TimeOffRequest]:
        raise NotImplementedError
