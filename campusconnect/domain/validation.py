"""
Input normalization and validation shared by the account services.
"""

import re
from collections.abc import Iterable

from .exceptions import InvalidInput

MIN_PASSWORD_LENGTH = 6

# local@domain.tld with no whitespace; deliberately basic
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


def normalize_access_code(code: str) -> str:
    return code.strip().upper()


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def is_allowed_access_code(code: str | None, allowlist: Iterable[str]) -> bool:
    """
    Check a signup access code against the allowlist.

    Both sides are trimmed and uppercased, so "cit25 " matches "CIT25".
    Blank codes never match.
    """
    if not code or not code.strip():
        return False
    normalized = normalize_access_code(code)
    return any(normalized == normalize_access_code(allowed) for allowed in allowlist)


def require_fields(**fields: str | None) -> None:
    """Raise InvalidInput naming the first field that is missing or blank."""
    for name, value in fields.items():
        if value is None or not str(value).strip():
            raise InvalidInput(f"Please provide all fields: {name} is required")


def require_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
