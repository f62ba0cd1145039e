from __future__ import annotations

from datetime import date
from typing import Iterable

from ..common.datetime_utils import is_weekend, iter_days, month_bounds
from .interval_index import IntervalIndex
from .model import GridCell, GridDay, GridRow, MonthGrid, Subject


def _subject_sort_key(subject: Subject) -> tuple[str, str]:
    return (subject.display_name.casefold(), subject.subject_id)


def build_month_grid(
    *,
    year: int,
    month: int,
    subjects: Iterable[Subject],
    index: IntervalIndex,
    today: date,
) -> MonthGrid:
    """Coverage grid of a calendar month: one row per subject, one cell per day.

    The grid is total, uncovered cells carry interval=None. Weekend and today
    facets only depend on the date.
    """
    month_start, month_end = month_bounds(year, month)
    days = tuple(
        GridDay(day=d, is_weekend=is_weekend(d), is_today=(d == today))
        for d in iter_days(month_start, month_end)
    )

    month_index = index.restricted_to(month_start, month_end)

    rows = []
    for subject in sorted(subjects, key=_subject_sort_key):
        cells = tuple(
            GridCell(
                subject_id=subject.subject_id,
                day=d.day,
                interval=month_index.covering_interval(subject.subject_id, d.day),
            )
            for d in days
        )
        rows.append(GridRow(subject=subject, cells=cells))

    return MonthGrid(
        year=int(year),
        month=int(month),
        days=days,
        rows=tuple(rows),
        intervals=tuple(month_index),
    )
