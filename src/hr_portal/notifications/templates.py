from __future__ import annotations

from datetime import datetime
from typing import Optional

from markupsafe import escape

from ..core.constants import SIGNATURE

_WRAPPER = '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">{body}</div>'


def birthday_email(*, full_name: str) -> tuple[str, str]:
    name = escape(full_name)
    subject = f"Happy Birthday, {full_name}!"
    body = (
        f"<p>Hi {name},</p>"
        "<p>Wishing you a very Happy Birthday and a wonderful year ahead!</p>"
        "<p>Thank you for being a valued part of our team. May this year bring you "
        "health, happiness and success.</p>"
        "<p>Enjoy your special day!</p>"
        f"<p>Best wishes,<br/>{SIGNATURE}</p>"
    )
    return subject, _WRAPPER.format(body=body)


def anniversary_email(*, full_name: str, years: int) -> tuple[str, str]:
    name = escape(full_name)
    subject = f"Happy Work Anniversary, {full_name}!"
    body = (
        f"<p>Hi {name},</p>"
        f"<p>Congratulations on your {int(years)}-year anniversary with us!</p>"
        "<p>We truly appreciate your hard work, dedication, and the positive impact "
        "you have made on our team.</p>"
        "<p>Here's to many more successful years together!</p>"
        f"<p>Best regards,<br/>{SIGNATURE}</p>"
    )
    return subject, _WRAPPER.format(body=body)


def default_invitation(*, full_name: str, email: str, site_url: str) -> tuple[str, str]:
    subject = f"Welcome to HR System - {full_name}"
    message = (
        f"Hello {full_name},\n"
        "\n"
        "You have been added to our HR Management System. "
        "Please create your account using the following information:\n"
        "\n"
        f"Email: {email}\n"
        "\n"
        "Once you create your account, you'll be able to:\n"
        "- Update your personal information\n"
        "- Request time off\n"
        "- View your employment details\n"
        "\n"
        "Please click the link below to get started:\n"
        f"{site_url.rstrip('/')}/auth\n"
        "\n"
        "Best regards,\n"
        "HR Team"
    )
    return subject, message


def invitation_email(*, message: str, site_url: str) -> str:
    paragraphs = "".join(f"<p>{escape(line)}</p>" for line in message.split("\n"))
    link = escape(f"{site_url.rstrip('/')}/auth")
    body = (
        '<h2 style="color: #2563eb;">Welcome to HR Management System</h2>'
        '<div style="background-color: #f3f4f6; padding: 20px; border-radius: 8px; margin: 20px 0;">'
        f"{paragraphs}"
        "</div>"
        '<div style="text-align: center; margin: 30px 0;">'
        f'<a href="{link}" style="background-color: #2563eb; color: white; padding: 12px 24px; '
        'text-decoration: none; border-radius: 6px; display: inline-block;">Create Your Account</a>'
        "</div>"
        '<p style="color: #6b7280; font-size: 14px;">If you have any questions, please contact the HR team.</p>'
    )
    return _WRAPPER.format(body=body)


def diagnostic_email(*, sent_at: datetime, message: Optional[str] = None) -> str:
    extra = f"<p>{escape(message)}</p>" if message else ""
    body = (
        '<h2 style="color: #2563eb;">Test Email</h2>'
        "<p>This is a test email sent via Resend from your HR app.</p>"
        "<p>If you received this, your email setup works!</p>"
        f"{extra}"
        "<hr />"
        f'<p style="color:#6b7280; font-size: 12px;">Sent at {sent_at.isoformat()}</p>'
    )
    return _WRAPPER.format(body=body)
