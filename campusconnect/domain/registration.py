"""
Registration domain service - access-code gated account creation.

Signup flow
===========

1. Validate required fields and the password length
2. Check the access code against the allowlist (trim + uppercase)
3. Hash the password explicitly, generate a verification code
4. Atomically create the account (unverified, pending verify code)
5. Dispatch the verification email without waiting on it

The store's unique email constraint decides duplicate signups, so two
concurrent registrations for the same address cannot both succeed.
"""

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from .credentials import CodeGenerator, CredentialHasher
from .exceptions import AccessCodeRejected, EmailAlreadyRegistered, InvalidInput
from .models import Account, PendingAction, utcnow
from .notifications import notify_quietly
from .ports import AccountRepository, Notifier
from .validation import (
    is_allowed_access_code,
    is_valid_email,
    normalize_access_code,
    normalize_email,
    require_fields,
    require_password,
)


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the signup flow: validation, access-code gate,
    password hashing, code generation, and account persistence.
    """

    repository: AccountRepository
    notifier: Notifier
    access_codes: tuple[str, ...]
    hasher: CredentialHasher = field(default_factory=CredentialHasher)
    code_generator: CodeGenerator = field(default_factory=CodeGenerator)
    code_ttl_seconds: int = 15 * 60
    clock: Callable[[], datetime] = utcnow

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        phone: str,
        access_code: str,
        whatsapp: str | None = None,
    ) -> str:
        """
        Register a new, unverified account and send its verification code.

        Args:
            name: Display name
            email: User's email address (will be normalized)
            password: Plaintext password, at least 6 characters
            phone: Contact phone number
            access_code: Campus access code from the allowlist
            whatsapp: Optional WhatsApp number

        Returns:
            Normalized email address

        Raises:
            InvalidInput: Missing/blank field, bad email, or short password
            AccessCodeRejected: Access code not on the allowlist
            EmailAlreadyRegistered: Email already has an account
        """
        require_fields(
            name=name, email=email, password=password, phone=phone, access_code=access_code
        )
        normalized_email = normalize_email(email)
        if not is_valid_email(normalized_email):
            raise InvalidInput("Please add a valid email")
        require_password(password)

        if not is_allowed_access_code(access_code, self.access_codes):
            raise AccessCodeRejected(access_code)

        password_hash = self.hasher.hash(password)
        code = self.code_generator.generate()
        now = self.clock()

        account = Account(
            id=str(uuid.uuid4()),
            email=normalized_email,
            password_hash=password_hash,
            name=name.strip(),
            phone=phone.strip(),
            whatsapp=(whatsapp or "").strip(),
            access_code=normalize_access_code(access_code),
            created_at=now,
            updated_at=now,
            pending_code=code,
            pending_code_expires_at=now + timedelta(seconds=self.code_ttl_seconds),
            pending_action=PendingAction.VERIFY,
        )

        if not self.repository.create(account):
            raise EmailAlreadyRegistered(normalized_email)

        notify_quietly(self.notifier.send_verification_code, normalized_email, account.name, code)
        return normalized_email
