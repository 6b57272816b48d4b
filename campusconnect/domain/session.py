"""
Session domain service - credential login and profile access.

Login is gated on verification: correct credentials on an unverified
account yield VerificationRequired and no token. Unknown email and
wrong password raise the same InvalidCredentials, and both paths run
one bcrypt comparison so timing does not separate them.
"""

from dataclasses import dataclass, field

from .credentials import CredentialHasher
from .exceptions import AccountNotFound, InvalidCredentials
from .models import AccountSummary, AuthenticatedSession, VerificationRequired
from .ports import AccountRepository, TokenIssuer
from .validation import normalize_email, require_fields

PROFILE_FIELDS = ("name", "phone", "whatsapp")


@dataclass
class SessionService:
    """Domain service for login and the authenticated profile."""

    repository: AccountRepository
    tokens: TokenIssuer
    hasher: CredentialHasher = field(default_factory=CredentialHasher)

    def login(self, email: str, password: str) -> AuthenticatedSession | VerificationRequired:
        """
        Authenticate with email and password.

        The returned summary is re-read by id after the password check,
        so it reflects profile updates that landed in between.

        Raises:
            InvalidInput: Missing email or password
            InvalidCredentials: Unknown email or wrong password
        """
        require_fields(email=email, password=password)
        normalized_email = normalize_email(email)

        account = self.repository.get_by_email(normalized_email)
        if account is None:
            self.hasher.check_unknown(password)
            raise InvalidCredentials()
        if not self.hasher.check(password, account.password_hash):
            raise InvalidCredentials()

        if not account.is_verified:
            return VerificationRequired(email=account.email)

        current = self.repository.get_by_id(account.id)
        if current is None:
            raise InvalidCredentials()
        return AuthenticatedSession(token=self.tokens.issue(current.id), account=current.summary())

    def profile(self, account_id: str) -> AccountSummary:
        account = self.repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFound(account_id)
        return account.summary()

    def update_profile(
        self,
        account_id: str,
        *,
        name: str | None = None,
        phone: str | None = None,
        whatsapp: str | None = None,
    ) -> AuthenticatedSession:
        """
        Update contact fields and issue a fresh session token.

        Blank name or phone keep their current value; whatsapp may be
        cleared with an empty string. Email and role are never changed here.

        Raises:
            AccountNotFound: Account no longer exists
        """
        changes: dict[str, str] = {}
        if name is not None and name.strip():
            changes["name"] = name.strip()
        if phone is not None and phone.strip():
            changes["phone"] = phone.strip()
        if whatsapp is not None:
            changes["whatsapp"] = whatsapp.strip()

        if changes:
            account = self.repository.update_profile(account_id, changes)
        else:
            account = self.repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFound(account_id)
        return AuthenticatedSession(token=self.tokens.issue(account.id), account=account.summary())
