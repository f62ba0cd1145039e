from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import now_local, today_local
from ..common.validators import optional_str, require_email
from ..core.constants import DEFAULT_THROTTLE_SECONDS, TEST_EMAIL_SUBJECT
from ..core.enums import AnniversaryKind
from ..core.exceptions import ConfigurationError, EmailDeliveryError
from ..employees.repository import EmployeeRepository
from .mailer import Mailer
from .matcher import AnniversaryMatch, match_today, records_from_employees
from .templates import anniversary_email, birthday_email, diagnostic_email

logger = logging.getLogger(__name__)


@dataclass
class NotificationReport:
    today: date
    birthday_details: list[dict] = field(default_factory=list)
    anniversary_details: list[dict] = field(default_factory=list)
    sent: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def birthdays(self) -> int:
        return len(self.birthday_details)

    @property
    def anniversaries(self) -> int:
        return len(self.anniversary_details)

    @property
    def message(self) -> str:
        return f"Notifications check completed. Sent {self.sent} notifications."

    def to_dict(self) -> dict:
        return {
            "success": True,
            "date": self.today.isoformat(),
            "message": self.message,
            "birthdays": self.birthdays,
            "anniversaries": self.anniversaries,
            "sent": self.sent,
            "failed": self.failed,
            "skipped": self.skipped,
            "birthdayDetails": self.birthday_details,
            "anniversaryDetails": self.anniversary_details,
        }


class NotificationService:
    """Daily birthday / work-anniversary emails.

    Each message is sent once; failures are logged and counted, not retried.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        mailer: Optional[Mailer],
        *,
        throttle_seconds: float = DEFAULT_THROTTLE_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._employees = employees
        self._mailer = mailer
        self._throttle_seconds = throttle_seconds
        self._sleep = sleep

    def run(self, today: Optional[date] = None) -> NotificationReport:
        if self._mailer is None:
            raise ConfigurationError("RESEND_API_KEY is not configured")

        today = today or today_local()
        logger.info("Checking birthdays and anniversaries for %s", today.strftime("%m-%d"))

        employees = {e.employee_id: e for e in self._employees.list_all()}
        result = match_today(today, records_from_employees(employees.values()))
        report = NotificationReport(today=today, skipped=result.skipped)
        if result.skipped:
            logger.warning("Skipped %d anniversary records without a valid date", result.skipped)

        birthdays = result.of_kind(AnniversaryKind.BIRTHDAY)
        anniversaries = result.of_kind(AnniversaryKind.WORK_ANNIVERSARY)
        logger.info("Found %d birthdays and %d anniversaries", len(birthdays), len(anniversaries))

        for match in birthdays + anniversaries:
            employee = employees[match.record.subject_id]
            detail = {"name": employee.full_name, "position": employee.position, "years": match.elapsed_years}
            if match.record.kind == AnniversaryKind.BIRTHDAY:
                report.birthday_details.append(detail)
            else:
                report.anniversary_details.append(detail)
            self._deliver(match, employee, report)

        logger.info(report.message)
        return report

    def _deliver(self, match: AnniversaryMatch, employee, report: NotificationReport) -> None:
        if match.record.kind == AnniversaryKind.BIRTHDAY:
            subject, html = birthday_email(full_name=employee.full_name)
        else:
            subject, html = anniversary_email(full_name=employee.full_name, years=match.elapsed_years)

        cc = [self._mailer.admin_cc] if getattr(self._mailer, "admin_cc", None) else None
        result = self._mailer.send(to=[employee.email], subject=subject, html=html, cc=cc)
        if result.ok:
            report.sent += 1
        else:
            report.failed += 1
            logger.warning("%s email for %s failed: %s", match.record.kind.value, employee.email, result.error)

        if self._throttle_seconds > 0:
            self._sleep(self._throttle_seconds)

    def send_test_email(
        self,
        to_email: Optional[str],
        *,
        subject: Optional[str] = None,
        message: Optional[str] = None,
    ) -> str:
        """Send one diagnostic message to check the email setup; returns the recipient."""
        if self._mailer is None:
            raise ConfigurationError("RESEND_API_KEY is not configured")
        to_email = require_email(to_email, "toEmail")

        cc = [self._mailer.admin_cc] if getattr(self._mailer, "admin_cc", None) else None
        result = self._mailer.send(
            to=[to_email],
            subject=optional_str(subject) or TEST_EMAIL_SUBJECT,
            html=diagnostic_email(sent_at=now_local(), message=optional_str(message)),
            cc=cc,
        )
        if not result.ok:
            raise EmailDeliveryError(result.error or "Failed to send test email")

        logger.info("Test email sent to %s (id=%s)", to_email, result.message_id)
        return to_email
