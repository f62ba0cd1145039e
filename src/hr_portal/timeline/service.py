from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import month_bounds, today_local
from ..employees.service import EmployeeService
from ..leave.service import LeaveService
from .grid import build_month_grid
from .interval_index import IntervalIndex
from .model import MonthGrid

logger = logging.getLogger(__name__)


class TimelineService:
    """Use case: leave timeline of one calendar month."""

    def __init__(self, employees: EmployeeService, leave: LeaveService):
        self._employees = employees
        self._leave = leave

    def month_grid(self, *, year: int, month: int, today: Optional[date] = None) -> MonthGrid:
        month_start, month_end = month_bounds(year, month)

        # One snapshot of each collaborator per view.
        subjects = self._employees.list_subjects()
        intervals = self._leave.approved_intervals(month_start, month_end)
        index = IntervalIndex.from_records(intervals)

        grid = build_month_grid(
            year=year,
            month=month,
            subjects=subjects,
            index=index,
            today=today or today_local(),
        )
        logger.debug("Timeline %04d-%02d: %d employees, %d intervals", year, month, len(subjects), len(index))
        return grid
