"""Year-independent month/day matching for birthdays and work anniversaries."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Iterator, Mapping, Optional

from ..common.datetime_utils import parse_optional_date
from ..core.enums import AnniversaryKind
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AnniversaryRecord:
    subject_id: str
    kind: AnniversaryKind
    # Raw value from the directory; may be None or unparseable.
    anchor: Any = None

    @property
    def anchor_date(self) -> Optional[date]:
        return parse_optional_date(self.anchor)


@dataclass(frozen=True)
class AnniversaryMatch:
    record: AnniversaryRecord
    elapsed_years: int

    def __iter__(self) -> Iterator[Any]:
        yield self.record
        yield self.elapsed_years


@dataclass(frozen=True)
class MatchResult:
    matches: list[AnniversaryMatch] = field(default_factory=list)
    skipped: int = 0

    def of_kind(self, kind: AnniversaryKind) -> list[AnniversaryMatch]:
        return [m for m in self.matches if m.record.kind == kind]


def match_today(today: date, records: Iterable[AnniversaryRecord]) -> MatchResult:
    """Records whose anchor month/day equals today's.

    Feb 29 anchors only match on Feb 29. A negative elapsed_years (anchor in
    the future) is returned unchanged.
    """
    matches: list[AnniversaryMatch] = []
    skipped = 0
    for record in records:
        anchor = record.anchor_date
        if anchor is None:
            skipped += 1
            continue
        if (anchor.month, anchor.day) == (today.month, today.day):
            matches.append(AnniversaryMatch(record=record, elapsed_years=today.year - anchor.year))
    return MatchResult(matches=matches, skipped=skipped)


def records_from_employees(employees: Iterable[Any]) -> list[AnniversaryRecord]:
    """Birthday and work-anniversary records for every employee row.

    Accepts Employee objects or plain mappings with birthday / job_entry_date.
    """
    out: list[AnniversaryRecord] = []
    for e in employees:
        if isinstance(e, Mapping):
            subject_id = e.get("id")
            if subject_id is None:
                subject_id = e.get("employee_id")
            birthday, entry = e.get("birthday"), e.get("job_entry_date")
        else:
            subject_id, birthday, entry = e.employee_id, e.birthday, e.job_entry_date
        if subject_id is None:
            raise ValidationError("Employee row without id")
        out.append(AnniversaryRecord(subject_id=str(subject_id), kind=AnniversaryKind.BIRTHDAY, anchor=birthday))
        out.append(AnniversaryRecord(subject_id=str(subject_id), kind=AnniversaryKind.WORK_ANNIVERSARY, anchor=entry))
    return out
