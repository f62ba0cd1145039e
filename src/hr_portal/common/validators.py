from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_NAME_EMAIL_RE = re.compile(r"^.+<\s*[^\s@]+@[^\s@]+\.[^\s@]+\s*>$")


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_fields(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    missing = [f for f in fields if data.get(f) is None or not str(data.get(f)).strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def is_valid_email(value: str) -> bool:
    return bool(value) and bool(_EMAIL_RE.match(value.strip()))


def is_valid_sender(value: str) -> bool:
    """Accept `addr@host.tld` or `Name <addr@host.tld>`, ASCII only."""
    if not value or not value.isascii():
        return False
    v = value.strip()
    return bool(_EMAIL_RE.match(v) or _NAME_EMAIL_RE.match(v))


def require_email(value: Any, field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name)
    if not is_valid_email(email):
        raise ValidationError(f"{field_name} is not a valid email address")
    return email


def optional_str(value: Any) -> str | None:
    v = (str(value) if value is not None else "").strip()
    return v or None
