"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from datetime import datetime
from typing import Protocol

from .models import Account, CodeCheck, PendingAction


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def create(self, account: Account) -> bool:
        """
        Atomically insert a new account.

        The full record, password hash included, is written in one
        statement. Uniqueness on the normalized email is enforced by
        the store, not by a prior lookup.

        Args:
            account: Fully populated account with normalized email

        Returns:
            True if created, False if the email is already registered
        """
        ...

    def get_by_email(self, email: str) -> Account | None:
        """Fetch an account by normalized email."""
        ...

    def get_by_id(self, account_id: str) -> Account | None:
        """Fetch an account by id."""
        ...

    def set_pending_code(
        self,
        email: str,
        code: str,
        expires_at: datetime,
        action: PendingAction,
        *,
        unverified_only: bool = False,
    ) -> bool:
        """
        Replace the account's pending code, expiry and action in one write.

        Any previous pending code stops being valid as soon as this
        returns.

        Args:
            email: Normalized email address
            code: Numeric one-time code
            expires_at: Absolute expiry (UTC)
            action: Purpose of the new code
            unverified_only: Only update if the account is not yet verified

        Returns:
            True if a row was updated, False otherwise
        """
        ...

    def consume_verification_code(self, email: str, code: str, now: datetime) -> CodeCheck:
        """
        Check a verification code and mark the account verified.

        Check and write happen atomically: of two concurrent calls with
        the same valid code, exactly one returns SUCCESS.

        Check order:
        1. NOT_FOUND: no account for email
        2. ALREADY_VERIFIED: account is verified
        3. INVALID_CODE: no pending verify code, or code mismatch
        4. EXPIRED: now is past the pending code's expiry

        On SUCCESS the pending code, expiry and action are cleared.
        """
        ...

    def consume_reset_code(
        self, email: str, code: str, now: datetime, password_hash: str
    ) -> CodeCheck:
        """
        Check a password reset code and store the new password hash.

        Same atomicity and check order as consume_verification_code,
        minus the ALREADY_VERIFIED step. Verification status is left
        unchanged.
        """
        ...

    def update_profile(self, account_id: str, changes: dict[str, str]) -> Account | None:
        """
        Update contact fields (name, phone, whatsapp) and return the new record.

        Returns:
            The updated account, or None if it no longer exists
        """
        ...


class Notifier(Protocol):
    """Port interface for outbound account emails."""

    def send_verification_code(self, email: str, name: str, code: str) -> None:
        """Send an email verification code."""
        ...

    def send_password_reset_code(self, email: str, name: str, code: str) -> None:
        """Send a password reset code."""
        ...


class TokenIssuer(Protocol):
    """Port interface for session token minting."""

    def issue(self, account_id: str) -> str:
        """Return a signed session token for the account."""
        ...
