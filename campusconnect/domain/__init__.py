"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account verification and credential
lifecycle: registration, email verification, login, and password
recovery. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .credentials import CodeGenerator, CredentialHasher
from .exceptions import (
    AccessCodeRejected,
    AccountError,
    AccountNotFound,
    AlreadyVerified,
    CodeExpired,
    EmailAlreadyRegistered,
    InvalidCode,
    InvalidCredentials,
    InvalidInput,
    Unauthorized,
)
from .models import (
    Account,
    AccountSummary,
    AuthenticatedSession,
    CodeCheck,
    PendingAction,
    Role,
    VerificationRequired,
)
from .ports import AccountRepository, Notifier, TokenIssuer
from .recovery import RecoveryService
from .registration import RegistrationService
from .session import SessionService
from .validation import is_allowed_access_code
from .verification import VerificationService

__all__ = [
    "AccessCodeRejected",
    "Account",
    "AccountError",
    "AccountNotFound",
    "AccountRepository",
    "AccountSummary",
    "AlreadyVerified",
    "AuthenticatedSession",
    "CodeCheck",
    "CodeExpired",
    "CodeGenerator",
    "CredentialHasher",
    "EmailAlreadyRegistered",
    "InvalidCode",
    "InvalidCredentials",
    "InvalidInput",
    "Notifier",
    "PendingAction",
    "RecoveryService",
    "RegistrationService",
    "Role",
    "SessionService",
    "TokenIssuer",
    "Unauthorized",
    "VerificationRequired",
    "VerificationService",
    "is_allowed_access_code",
]
