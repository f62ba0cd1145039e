from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TimeOffRequest
from .repository import LeaveRepository


def _row_to_request(r: Dict[str, Any]) -> TimeOffRequest:
    return TimeOffRequest(
        request_id=int(r["request_id"]),
        employee_id=str(r["employee_id"]),
        request_type=r["request_type"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        days_requested=int(r["days_requested"]),
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        reason=r.get("reason"),
        approved_at=r.get("approved_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_off_requests(
                    employee_id, request_type, start_date, end_date, days_requested, reason, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    str(employee_id),
                    request_type,
                    start_date,
                    end_date,
                    int(days_requested),
                    reason,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[TimeOffRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, employee_id, request_type, start_date, end_date,
                       days_requested, reason, status, created_at, approved_at
                FROM time_off_requests
                WHERE request_id=%s
                """,
                (int(request_id),),
            )
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_requests(self, *, employee_id: Optional[str] = None, limit: int = 500) -> Sequence[dict]:
        clauses = ["1=1"]
        params: list[object] = []
        if employee_id is not None:
            clauses.append("r.employee_id=%s")
            params.append(str(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.request_id, r.employee_id, e.first_name, e.last_name,
                       r.request_type, r.start_date, r.end_date, r.days_requested,
                       r.reason, r.status, r.created_at, r.approved_at
                FROM time_off_requests r
                LEFT JOIN employees e ON e.employee_id = r.employee_id
                WHERE {where}
                ORDER BY r.created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            rows = fetchall(cur)
            out: list[dict] = []
            for r in rows:
                name = f"{r.get('first_name') or ''} {r.get('last_name') or ''}".strip()
                out.append(
                    {
                        "id": int(r["request_id"]),
                        "employee_id": str(r["employee_id"]),
                        "employee_name": name or None,
                        "request_type": r["request_type"],
                        "start_date": r["start_date"].strftime("%Y-%m-%d"),
                        "end_date": r["end_date"].strftime("%Y-%m-%d"),
                        "days_requested": int(r["days_requested"]),
                        "reason": r.get("reason") or "",
                        "status": r["status"],
                        "created_at": r["created_at"].strftime("%Y-%m-%d %H:%M"),
                        "approved_at": (r["approved_at"].strftime("%Y-%m-%d %H:%M") if r.get("approved_at") else None),
                    }
                )
            return out

    def decide(self, *, request_id: int, status: LeaveStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_off_requests
                SET status=%s, approved_at=IF(%s='approved', NOW(), NULL)
                WHERE request_id=%s AND status=%s
                """,
                (status.value, status.value, int(request_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def list_approved_overlapping(
        self, *, range_start: Optional[date] = None, range_end: Optional[date] = None
    ) -> Sequence[TimeOffRequest]:
        clauses = ["status=%s"]
        params: list[object] = [LeaveStatus.APPROVED.value]
        if range_end is not None:
            clauses.append("start_date <= %s")
            params.append(range_end)
        if range_start is not None:
            clauses.append("end_date >= %s")
            params.append(range_start)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT request_id, employee_id, request_type, start_date, end_date,
                       days_requested, reason, status, created_at, approved_at
                FROM time_off_requests
                WHERE {where}
                ORDER BY request_id ASC
                """,
                tuple(params),
            )
            return [_row_to_request(r) for r in fetchall(cur)]
