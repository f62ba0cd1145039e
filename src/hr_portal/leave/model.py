from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveCategory, LeaveStatus
from ..timeline.model import LeaveInterval


@dataclass(frozen=True)
class TimeOffRequest:
    request_id: int
    employee_id: str
    request_type: str
    start_date: date
    end_date: date
    days_requested: int
    status: LeaveStatus
    created_at: datetime
    reason: Optional[str] = None
    approved_at: Optional[datetime] = None

    def to_interval(self) -> LeaveInterval:
        return LeaveInterval(
            interval_id=str(self.request_id),
            subject_id=self.employee_id,
            start_date=self.start_date,
            end_date=self.end_date,
            category=LeaveCategory.from_raw(self.request_type),
            status=self.status,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "employee_id": self.employee_id,
            "request_type": self.request_type,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "days_requested": self.days_requested,
            "reason": self.reason,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "approved_at": self.approved_at.isoformat() if self.approved_at else None,
        }
