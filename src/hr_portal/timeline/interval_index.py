"""Point-in-interval and range-overlap queries over approved leave periods.

The index is built from a snapshot (rows fetched from the directory) and is
immutable afterwards, so one instance can be shared by concurrent readers.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Union

from ..common.datetime_utils import parse_iso_date, require_range
from ..core.enums import LeaveCategory, LeaveStatus
from ..core.exceptions import ValidationError
from .model import LeaveInterval

IntervalSource = Union[LeaveInterval, Mapping[str, Any]]


def _first(row: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in row and row[k] is not None:
            return row[k]
    return None


def interval_from_row(row: IntervalSource) -> LeaveInterval:
    """Build a LeaveInterval from a store row, validating its dates.

    Accepts both the time_off_requests column names (employee_id, request_type)
    and the timeline names (subject_id, category).
    """
    if isinstance(row, LeaveInterval):
        require_range(row.start_date, row.end_date)
        return row

    start = parse_iso_date(_first(row, "start_date"))
    end = parse_iso_date(_first(row, "end_date"))
    require_range(start, end)

    raw_status = _first(row, "status") or LeaveStatus.PENDING.value
    try:
        status = LeaveStatus(str(raw_status).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown leave status: {raw_status!r}")

    subject_id = _first(row, "subject_id", "employee_id")
    if subject_id is None:
        raise ValidationError("Leave interval without subject")

    return LeaveInterval(
        interval_id=str(_first(row, "interval_id", "request_id", "id") or ""),
        subject_id=str(subject_id),
        start_date=start,
        end_date=end,
        category=LeaveCategory.from_raw(_first(row, "category", "request_type")),
        status=status,
    )


class IntervalIndex:
    """Approved leave intervals grouped by subject, in source order."""

    def __init__(self, intervals: Iterable[LeaveInterval] = ()):
        self._approved: list[LeaveInterval] = [i for i in intervals if i.status == LeaveStatus.APPROVED]
        self._by_subject: dict[str, list[LeaveInterval]] = defaultdict(list)
        for interval in self._approved:
            self._by_subject[interval.subject_id].append(interval)

    @classmethod
    def from_records(cls, records: Iterable[IntervalSource]) -> "IntervalIndex":
        """Validate every record first; one bad record rejects the whole batch."""
        parsed = [interval_from_row(r) for r in records]
        return cls(parsed)

    def __len__(self) -> int:
        return len(self._approved)

    def __iter__(self):
        return iter(self._approved)

    def intervals_overlapping(self, range_start: date, range_end: date) -> list[LeaveInterval]:
        require_range(range_start, range_end)
        return [i for i in self._approved if i.overlaps(range_start, range_end)]

    def restricted_to(self, range_start: date, range_end: date) -> "IntervalIndex":
        """A smaller index holding only intervals overlapping the range."""
        return IntervalIndex(self.intervals_overlapping(range_start, range_end))

    def covering_interval(self, subject_id: str, day: date) -> Optional[LeaveInterval]:
        # Overlapping approved intervals for one subject are tolerated: first one wins.
        for interval in self._by_subject.get(str(subject_id), ()):
            if interval.covers(day):
                return interval
        return None
