from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import INVITATION_SENDER
from ..core.exceptions import ConfigurationError, EmailDeliveryError
from ..employees.repository import EmployeeRepository
from ..employees.service import EmployeeService
from .mailer import Mailer
from .templates import default_invitation, invitation_email

logger = logging.getLogger(__name__)


class InvitationService:
    """Use case: invite an employee to create an account."""

    def __init__(
        self,
        employees: EmployeeService,
        employees_repo: EmployeeRepository,
        mailer: Optional[Mailer],
        *,
        site_url: str,
    ):
        self._employees = employees
        self._employees_repo = employees_repo
        self._mailer = mailer
        self._site_url = site_url

    def invite(
        self,
        employee_id: str,
        *,
        email: Optional[str] = None,
        subject: Optional[str] = None,
        message: Optional[str] = None,
    ) -> str:
        if self._mailer is None:
            raise ConfigurationError("RESEND_API_KEY is not configured")

        employee = self._employees.get_employee(employee_id)
        to_email = (email or "").strip() or employee.email
        default_subject, default_message = default_invitation(
            full_name=employee.full_name, email=to_email, site_url=self._site_url
        )

        logger.info("Sending invitation to %s at %s", employee.full_name, to_email)
        result = self._mailer.send(
            to=[to_email],
            subject=(subject or "").strip() or default_subject,
            html=invitation_email(message=(message or "").strip() or default_message, site_url=self._site_url),
            sender=INVITATION_SENDER,
        )
        if not result.ok:
            raise EmailDeliveryError(result.error or "Failed to send invitation")

        self._employees_repo.mark_invited(employee.employee_id, now_local())
        return to_email
