"""
Domain models - The Account entity and its client-safe projections.

Account is the only persisted entity. AccountSummary is what leaves
the domain: it never carries the password hash or pending code fields.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class Role(str, Enum):
    """Account role. Not mutable through self-service paths."""

    STUDENT = "student"
    ADMIN = "admin"


class PendingAction(str, Enum):
    """
    Purpose of the outstanding pending code.

    An account holds at most one pending code at a time. The action
    tag travels with it, so a reset code can never satisfy a
    verification check and vice versa.
    """

    VERIFY = "verify"
    RESET = "reset"


class CodeCheck(Enum):
    """
    Result of an atomic check-and-clear of a pending code.

    Returned by the repository's consume_* operations.
    """

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ALREADY_VERIFIED = "already_verified"
    INVALID_CODE = "invalid_code"
    EXPIRED = "expired"


@dataclass
class Account:
    """Persisted account record."""

    id: str
    email: str
    password_hash: str
    name: str
    phone: str
    whatsapp: str
    access_code: str
    created_at: datetime
    updated_at: datetime
    role: Role = Role.STUDENT
    is_verified: bool = False
    pending_code: str | None = None
    pending_code_expires_at: datetime | None = None
    pending_action: PendingAction | None = None

    def check_pending_code(self, code: str, now: datetime, action: PendingAction) -> CodeCheck:
        """
        Compare a submitted code with the outstanding one.

        The code is checked before the expiry, so a wrong code reads as
        INVALID_CODE even after the window closes. A code issued for a
        different action never matches.
        """
        stored = (self.pending_code or "").strip()
        if not stored or self.pending_action != action:
            return CodeCheck.INVALID_CODE
        if not secrets.compare_digest(stored.encode(), code.strip().encode()):
            return CodeCheck.INVALID_CODE
        if self.pending_code_expires_at is None or now > self.pending_code_expires_at:
            return CodeCheck.EXPIRED
        return CodeCheck.SUCCESS

    def summary(self) -> "AccountSummary":
        return AccountSummary(
            id=self.id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            whatsapp=self.whatsapp,
            role=self.role,
            is_verified=self.is_verified,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


@dataclass(frozen=True)
class AccountSummary:
    """Non-sensitive account fields, safe to return to clients."""

    id: str
    name: str
    email: str
    phone: str
    whatsapp: str
    role: Role
    is_verified: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AuthenticatedSession:
    """A freshly issued session token and the account it belongs to."""

    token: str
    account: AccountSummary


@dataclass(frozen=True)
class VerificationRequired:
    """Login outcome for correct credentials on an unverified account."""

    email: str


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
