"""
Verification domain service - email ownership proof via one-time code.

Account state with respect to verification:

    Unverified (pending verify code) --verify--> Verified (no pending code)

Verified is terminal for the is_verified flag; nothing reverts it.
The check-and-clear of the code is delegated to the repository, which
performs it atomically so a code can be redeemed at most once.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from .credentials import CodeGenerator
from .exceptions import AccountNotFound, AlreadyVerified, CodeExpired, InvalidCode
from .models import AuthenticatedSession, CodeCheck, PendingAction, utcnow
from .notifications import notify_quietly
from .ports import AccountRepository, Notifier, TokenIssuer
from .validation import normalize_email, require_fields


def raise_for_code_check(result: CodeCheck, email: str) -> None:
    """Translate a failed CodeCheck into its domain exception."""
    if result == CodeCheck.SUCCESS:
        return
    if result == CodeCheck.NOT_FOUND:
        raise AccountNotFound(email)
    if result == CodeCheck.ALREADY_VERIFIED:
        raise AlreadyVerified(email)
    if result == CodeCheck.EXPIRED:
        raise CodeExpired(email)
    raise InvalidCode(email)


@dataclass
class VerificationService:
    """Domain service for email verification and code resends."""

    repository: AccountRepository
    notifier: Notifier
    tokens: TokenIssuer
    code_generator: CodeGenerator = field(default_factory=CodeGenerator)
    code_ttl_seconds: int = 15 * 60
    clock: Callable[[], datetime] = utcnow

    def verify(self, email: str, code: str) -> AuthenticatedSession:
        """
        Redeem a verification code and open a session.

        Both the stored and the submitted code are compared trimmed.

        Raises:
            AccountNotFound: No account for email
            AlreadyVerified: Account was already verified
            InvalidCode: Wrong code, or no pending verification code
            CodeExpired: Code matched but is past its expiry
        """
        require_fields(email=email, code=code)
        normalized_email = normalize_email(email)

        result = self.repository.consume_verification_code(
            normalized_email, code.strip(), self.clock()
        )
        raise_for_code_check(result, normalized_email)

        account = self.repository.get_by_email(normalized_email)
        if account is None:
            raise AccountNotFound(normalized_email)
        return AuthenticatedSession(token=self.tokens.issue(account.id), account=account.summary())

    def resend_code(self, email: str) -> None:
        """
        Issue a fresh verification code, invalidating any earlier one.

        Raises:
            AccountNotFound: No account for email
            AlreadyVerified: Account was already verified
        """
        require_fields(email=email)
        normalized_email = normalize_email(email)

        account = self.repository.get_by_email(normalized_email)
        if account is None:
            raise AccountNotFound(normalized_email)
        if account.is_verified:
            raise AlreadyVerified(normalized_email)

        code = self.code_generator.generate()
        expires_at = self.clock() + timedelta(seconds=self.code_ttl_seconds)
        updated = self.repository.set_pending_code(
            normalized_email, code, expires_at, PendingAction.VERIFY, unverified_only=True
        )
        if not updated:
            # verified by a concurrent request between the read and the write
            raise AlreadyVerified(normalized_email)

        notify_quietly(self.notifier.send_verification_code, normalized_email, account.name, code)
