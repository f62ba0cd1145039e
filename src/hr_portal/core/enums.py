from __future__ import annotations

from enum import Enum


class LeaveStatus(str, Enum):
    """Approval workflow state of a time-off request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveCategory(str, Enum):
    """Kind of leave; drives the timeline colour."""

    VACATION = "vacation"
    SICK = "sick"
    PERSONAL = "personal"
    OTHER = "other"

    @classmethod
    def from_raw(cls, value: object) -> "LeaveCategory":
        """Map a stored request_type to a category, unknown values become OTHER."""
        if isinstance(value, LeaveCategory):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.OTHER


class AnniversaryKind(str, Enum):
    BIRTHDAY = "birthday"
    WORK_ANNIVERSARY = "work_anniversary"
