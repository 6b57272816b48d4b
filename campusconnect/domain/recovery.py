"""
Recovery domain service - password reset via one-time code.

A reset code occupies the same pending slot as a verification code,
tagged PendingAction.RESET. Requesting a reset replaces whatever code
was outstanding; verification status is never touched.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from .credentials import CodeGenerator, CredentialHasher
from .exceptions import AccountNotFound
from .models import PendingAction, utcnow
from .notifications import notify_quietly
from .ports import AccountRepository, Notifier
from .validation import normalize_email, require_fields, require_password
from .verification import raise_for_code_check


@dataclass
class RecoveryService:
    """Domain service for password reset requests and redemption."""

    repository: AccountRepository
    notifier: Notifier
    hasher: CredentialHasher = field(default_factory=CredentialHasher)
    code_generator: CodeGenerator = field(default_factory=CodeGenerator)
    code_ttl_seconds: int = 15 * 60
    clock: Callable[[], datetime] = utcnow

    def request_reset(self, email: str) -> str:
        """
        Issue a password reset code and email it.

        Returns:
            Normalized email address

        Raises:
            AccountNotFound: No account for email
        """
        require_fields(email=email)
        normalized_email = normalize_email(email)

        account = self.repository.get_by_email(normalized_email)
        if account is None:
            raise AccountNotFound(normalized_email)

        code = self.code_generator.generate()
        expires_at = self.clock() + timedelta(seconds=self.code_ttl_seconds)
        if not self.repository.set_pending_code(
            normalized_email, code, expires_at, PendingAction.RESET
        ):
            raise AccountNotFound(normalized_email)

        notify_quietly(self.notifier.send_password_reset_code, normalized_email, account.name, code)
        return normalized_email

    def reset_password(self, email: str, code: str, new_password: str) -> None:
        """
        Redeem a reset code and replace the password hash.

        The new password is hashed before the store is touched; the code
        check, hash write and code clear are one atomic store operation.

        Raises:
            InvalidInput: Missing field or new password shorter than 6
            AccountNotFound: No account for email
            InvalidCode: Wrong code, or no pending reset code
            CodeExpired: Code matched but is past its expiry
        """
        require_fields(email=email, code=code, new_password=new_password)
        require_password(new_password)
        normalized_email = normalize_email(email)

        password_hash = self.hasher.hash(new_password)
        result = self.repository.consume_reset_code(
            normalized_email, code.strip(), self.clock(), password_hash
        )
        raise_for_code_check(result, normalized_email)
