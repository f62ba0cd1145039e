from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = (
    "employee_id, first_name, last_name, email, position, department, "
    "job_entry_date, birthday, phone, address, avatar_url, user_id, invited_at, created_at"
)

# Columns callers may change through update().
_UPDATABLE = {
    "first_name",
    "last_name",
    "email",
    "position",
    "department",
    "job_entry_date",
    "birthday",
    "phone",
    "address",
    "avatar_url",
    "user_id",
}


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r["email"],
        position=r.get("position") or "",
        department=r.get("department"),
        job_entry_date=r.get("job_entry_date"),
        birthday=r.get("birthday"),
        phone=r.get("phone"),
        address=r.get("address"),
        avatar_url=r.get("avatar_url"),
        user_id=r.get("user_id"),
        invited_at=r.get("invited_at"),
        created_at=r.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_where(self, column: str, value: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY first_name ASC, last_name ASC")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._get_where("employee_id", str(employee_id))

    def get_by_user_id(self, user_id: str) -> Optional[Employee]:
        return self._get_where("user_id", str(user_id))

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._get_where("email", email)

    def create(self, employee: Employee) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    employee_id, first_name, last_name, email, position, department,
                    job_entry_date, birthday, phone, address, avatar_url, user_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee.employee_id,
                    employee.first_name,
                    employee.last_name,
                    employee.email,
                    employee.position,
                    employee.department,
                    employee.job_entry_date,
                    employee.birthday,
                    employee.phone,
                    employee.address,
                    employee.avatar_url,
                    employee.user_id,
                ),
            )
            return employee.employee_id

    def update(self, employee_id: str, fields: dict) -> bool:
        cols = [c for c in fields if c in _UPDATABLE]
        if not cols:
            return False
        assignments = ", ".join(f"{c}=%s" for c in cols)
        params = [fields[c] for c in cols] + [str(employee_id)]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE employees SET {assignments} WHERE employee_id=%s", tuple(params))
            # MySQL reports 0 affected rows when values are unchanged.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM employees WHERE employee_id=%s", (str(employee_id),))
            return fetchone(cur) is not None

    def delete(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (str(employee_id),))
            return cur.rowcount > 0

    def mark_invited(self, employee_id: str, invited_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET invited_at=%s WHERE employee_id=%s",
                (invited_at, str(employee_id)),
            )
            return cur.rowcount > 0
