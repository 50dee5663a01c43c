"""Field checks applied to user payloads before a record is built."""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from .errors import InvalidEmailError, InvalidNameError, MissingFieldsError

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_fields(payload: Mapping[str, object], fields: Iterable[str]) -> None:
    """Raise :class:`MissingFieldsError` if any field is absent or ``null``."""

    for field in fields:
        if payload.get(field) is None:
            raise MissingFieldsError()


def validate_name(name: object) -> str:
    """Return the trimmed name, rejecting non-strings and blank values."""

    if not isinstance(name, str):
        raise InvalidNameError()
    stripped = name.strip()
    if not stripped:
        raise InvalidNameError()
    return stripped


def validate_email(email: object) -> str:
    """Return the lowercased address when it looks like ``local@domain.tld``."""

    if not isinstance(email, str) or not _EMAIL_PATTERN.fullmatch(email):
        raise InvalidEmailError()
    return email.lower()


__all__ = ["require_fields", "validate_email", "validate_name"]
