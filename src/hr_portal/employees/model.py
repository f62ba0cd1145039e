from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Directory entry of one employee.

    Note: plain data object, no DB access.
    """

    employee_id: str
    first_name: str
    last_name: str
    email: str
    position: str
    job_entry_date: Optional[date]
    birthday: Optional[date]
    department: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    avatar_url: Optional[str] = None
    user_id: Optional[str] = None
    invited_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "position": self.position,
            "department": self.department,
            "job_entry_date": self.job_entry_date.isoformat() if self.job_entry_date else None,
            "birthday": self.birthday.isoformat() if self.birthday else None,
            "phone": self.phone,
            "address": self.address,
            "avatar_url": self.avatar_url,
            "user_id": self.user_id,
            "invited_at": self.invited_at.isoformat() if self.invited_at else None,
        }
