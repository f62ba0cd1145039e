"""Transactional email through Resend."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

import resend

from ..common.validators import is_valid_sender
from ..core.constants import DEFAULT_SENDER
from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryResult:
    ok: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class Mailer(Protocol):
    def send(
        self,
        *,
        to: Sequence[str],
        subject: str,
        html: str,
        sender: Optional[str] = None,
        cc: Optional[Sequence[str]] = None,
    ) -> DeliveryResult:
        raise NotImplementedError


class ResendMailer:
    """Mailer backed by the Resend API.

    Provider errors are returned as failed DeliveryResults, never raised, so
    one bad recipient does not stop a batch.
    """

    def __init__(self, *, api_key: str, sender: Optional[str] = None, admin_cc: Optional[str] = None):
        if not api_key:
            raise ConfigurationError("RESEND_API_KEY is not configured")
        self._api_key = api_key

        sender = sender or DEFAULT_SENDER
        if not is_valid_sender(sender):
            logger.warning("Sender %r invalid or contains non-ASCII characters, falling back to %s", sender, DEFAULT_SENDER)
            sender = DEFAULT_SENDER
        self.sender = sender

        if admin_cc and not is_valid_sender(admin_cc):
            logger.warning("Admin cc address %r has an invalid format, skipping cc", admin_cc)
            admin_cc = None
        self.admin_cc = admin_cc

    def _redact(self, text: str) -> str:
        return text.replace(self._api_key, "***REDACTED***") if self._api_key else text

    def send(
        self,
        *,
        to: Sequence[str],
        subject: str,
        html: str,
        sender: Optional[str] = None,
        cc: Optional[Sequence[str]] = None,
    ) -> DeliveryResult:
        params: dict = {
            "from": sender or self.sender,
            "to": list(to),
            "subject": subject,
            "html": html,
        }
        if cc:
            params["cc"] = list(cc)

        resend.api_key = self._api_key
        try:
            response = resend.Emails.send(params)
        except Exception as e:
            error = self._redact(str(e))
            logger.error("Email to %s failed: %s", ", ".join(to), error)
            return DeliveryResult(ok=False, error=error[:200])

        message_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
        if not message_id:
            logger.error("Unexpected response from email provider for %s: %r", ", ".join(to), response)
            return DeliveryResult(ok=False, error="Unexpected response from email provider")

        logger.info("Email %r sent to %s (id=%s)", subject, ", ".join(to), message_id)
        return DeliveryResult(ok=True, message_id=str(message_id))
