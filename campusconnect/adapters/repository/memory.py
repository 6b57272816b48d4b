"""
In-memory repository adapter - Implements AccountRepository protocol.

Backs tests and local runs without PostgreSQL. A single lock guards
every read-check-write, which gives the same atomicity the PostgreSQL
adapter gets from row locks.
"""

import threading
from dataclasses import replace
from datetime import datetime

from campusconnect.domain.models import Account, CodeCheck, PendingAction, utcnow
from campusconnect.domain.session import PROFILE_FIELDS


class InMemoryAccountRepository:
    """
    Implements AccountRepository protocol with a dict keyed by email.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Records are copied on the way in and out so callers never hold a
    live reference to stored state.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_email: dict[str, Account] = {}
        self._email_by_id: dict[str, str] = {}

    def create(self, account: Account) -> bool:
        with self._lock:
            if account.email in self._by_email:
                return False
            self._by_email[account.email] = replace(account)
            self._email_by_id[account.id] = account.email
            return True

    def get_by_email(self, email: str) -> Account | None:
        with self._lock:
            account = self._by_email.get(email)
            return replace(account) if account else None

    def get_by_id(self, account_id: str) -> Account | None:
        with self._lock:
            email = self._email_by_id.get(account_id)
            if email is None:
                return None
            return replace(self._by_email[email])

    def set_pending_code(
        self,
        email: str,
        code: str,
        expires_at: datetime,
        action: PendingAction,
        *,
        unverified_only: bool = False,
    ) -> bool:
        with self._lock:
            account = self._by_email.get(email)
            if account is None or (unverified_only and account.is_verified):
                return False
            account.pending_code = code
            account.pending_code_expires_at = expires_at
            account.pending_action = action
            account.updated_at = utcnow()
            return True

    def consume_verification_code(self, email: str, code: str, now: datetime) -> CodeCheck:
        with self._lock:
            account = self._by_email.get(email)
            if account is None:
                return CodeCheck.NOT_FOUND
            if account.is_verified:
                return CodeCheck.ALREADY_VERIFIED
            result = account.check_pending_code(code, now, PendingAction.VERIFY)
            if result == CodeCheck.SUCCESS:
                account.is_verified = True
                _clear_pending(account)
            return result

    def consume_reset_code(
        self, email: str, code: str, now: datetime, password_hash: str
    ) -> CodeCheck:
        with self._lock:
            account = self._by_email.get(email)
            if account is None:
                return CodeCheck.NOT_FOUND
            result = account.check_pending_code(code, now, PendingAction.RESET)
            if result == CodeCheck.SUCCESS:
                account.password_hash = password_hash
                _clear_pending(account)
            return result

    def update_profile(self, account_id: str, changes: dict[str, str]) -> Account | None:
        unknown = set(changes) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Not a profile field: {', '.join(sorted(unknown))}")
        with self._lock:
            email = self._email_by_id.get(account_id)
            if email is None:
                return None
            account = self._by_email[email]
            for key, value in changes.items():
                setattr(account, key, value)
            account.updated_at = utcnow()
            return replace(account)

    def delete(self, account_id: str) -> bool:
        """Remove an account. Not part of the port; used by tests."""
        with self._lock:
            email = self._email_by_id.pop(account_id, None)
            if email is None:
                return False
            del self._by_email[email]
            return True


def _clear_pending(account: Account) -> None:
    account.pending_code = None
    account.pending_code_expires_at = None
    account.pending_action = None
    account.updated_at = utcnow()
