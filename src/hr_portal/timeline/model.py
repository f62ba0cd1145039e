from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import LeaveCategory, LeaveStatus

CATEGORY_COLORS = {
    LeaveCategory.VACATION: "green",
    LeaveCategory.SICK: "red",
    LeaveCategory.PERSONAL: "blue",
    LeaveCategory.OTHER: "gray",
}


@dataclass(frozen=True)
class LeaveInterval:
    """An inclusive [start_date, end_date] leave period of one subject."""

    interval_id: str
    subject_id: str
    start_date: date
    end_date: date
    category: LeaveCategory = LeaveCategory.OTHER
    status: LeaveStatus = LeaveStatus.APPROVED

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, range_start: date, range_end: date) -> bool:
        return self.start_date <= range_end and self.end_date >= range_start

    @property
    def color(self) -> str:
        return CATEGORY_COLORS[self.category]

    def to_dict(self) -> dict:
        return {
            "id": self.interval_id,
            "subject_id": self.subject_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "category": self.category.value,
            "status": self.status.value,
            "color": self.color,
        }


@dataclass(frozen=True)
class Subject:
    subject_id: str
    display_name: str


@dataclass(frozen=True)
class GridDay:
    day: date
    is_weekend: bool
    is_today: bool

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "label": self.day.strftime("%d.%m"),
            "weekday": self.day.strftime("%a"),
            "is_weekend": self.is_weekend,
            "is_today": self.is_today,
        }


@dataclass(frozen=True)
class GridCell:
    subject_id: str
    day: date
    interval: Optional[LeaveInterval] = None

    @property
    def covered(self) -> bool:
        return self.interval is not None

    def to_dict(self) -> Optional[dict]:
        if self.interval is None:
            return None
        return {
            "id": self.interval.interval_id,
            "category": self.interval.category.value,
            "color": self.interval.color,
        }


@dataclass(frozen=True)
class GridRow:
    subject: Subject
    cells: tuple[GridCell, ...]


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    days: tuple[GridDay, ...]
    rows: tuple[GridRow, ...]
    intervals: tuple[LeaveInterval, ...] = field(default_factory=tuple)

    def cell(self, subject_id: str, day: date) -> GridCell:
        for row in self.rows:
            if row.subject.subject_id == subject_id:
                offset = (day - self.days[0].day).days
                if not 0 <= offset < len(row.cells):
                    raise KeyError(day)
                return row.cells[offset]
        raise KeyError(subject_id)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "title": self.days[0].day.strftime("%B %Y"),
            "days": [d.to_dict() for d in self.days],
            "rows": [
                {
                    "subject_id": row.subject.subject_id,
                    "name": row.subject.display_name,
                    "cells": [c.to_dict() for c in row.cells],
                }
                for row in self.rows
            ],
            "legend": {c.value: color for c, color in CATEGORY_COLORS.items() if c != LeaveCategory.OTHER},
            "has_leave": bool(self.intervals),
        }
