from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.service import LeaveService
from .notifications.invitations import InvitationService
from .notifications.mailer import ResendMailer
from .notifications.service import NotificationService
from .storage.client import AvatarStorage
from .storage.config import S3Config
from .timeline.service import TimelineService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    leave_repo: MySQLLeaveRepository

    employee_service: EmployeeService
    leave_service: LeaveService
    timeline_service: TimelineService
    notification_service: NotificationService
    invitation_service: InvitationService
    avatar_storage: AvatarStorage

    admin_api_key: str = ""


def build_mailer(settings) -> Optional[ResendMailer]:
    api_key = getattr(settings, "RESEND_API_KEY", "")
    if not api_key:
        return None
    return ResendMailer(
        api_key=api_key,
        sender=getattr(settings, "NOTIFICATION_SENDER", "") or None,
        admin_cc=getattr(settings, "ADMIN_NOTIFICATION_EMAIL", "") or None,
    )


def build_container(*, db_config: dict, settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    leave_repo = MySQLLeaveRepository(conn)

    mailer = build_mailer(settings)

    employee_service = EmployeeService(employees_repo)
    leave_service = LeaveService(leave_repo, employees_repo)
    timeline_service = TimelineService(employee_service, leave_service)
    notification_service = NotificationService(
        employees_repo,
        mailer,
        throttle_seconds=float(getattr(settings, "NOTIFICATION_THROTTLE_SECONDS", 0.6)),
    )
    invitation_service = InvitationService(
        employee_service,
        employees_repo,
        mailer,
        site_url=getattr(settings, "SITE_URL", ""),
    )
    avatar_storage = AvatarStorage(S3Config.from_settings(getattr(settings, "S3_CONFIG", {})))

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        leave_repo=leave_repo,
        employee_service=employee_service,
        leave_service=leave_service,
        timeline_service=timeline_service,
        notification_service=notification_service,
        invitation_service=invitation_service,
        avatar_storage=avatar_storage,
        admin_api_key=getattr(settings, "ADMIN_API_KEY", ""),
    )
