"""
Domain exceptions - Semantic error types for the account lifecycle.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
The API layer maps each one to a status code and client message.
"""


class AccountError(Exception):
    """Base class for account domain errors."""

    pass


class InvalidInput(AccountError):
    """A required field is missing, blank, or malformed."""

    pass


class AccessCodeRejected(AccountError):
    """Signup access code is not on the allowlist."""

    pass


class EmailAlreadyRegistered(AccountError):
    """An account with this email already exists."""

    pass


class AccountNotFound(AccountError):
    """No account matches the given email or id."""

    pass


class AlreadyVerified(AccountError):
    """Account email has already been verified."""

    pass


class InvalidCode(AccountError):
    """Submitted code does not match the outstanding pending code."""

    pass


class CodeExpired(AccountError):
    """Pending code matched but its expiry has passed."""

    pass


class InvalidCredentials(AccountError):
    """Unknown email or wrong password (deliberately indistinguishable)."""

    pass


class Unauthorized(AccountError):
    """Session token is missing, malformed, expired, or orphaned."""

    pass
