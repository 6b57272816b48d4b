"""
Shared fixtures for adversarial tests.

Provides fully wired domain services over the in-memory store so attacks
exercise the same code paths as the HTTP layer without a database.
"""

from datetime import timedelta

import pytest

from campusconnect.adapters.repository.memory import InMemoryAccountRepository
from campusconnect.adapters.tokens import JwtTokenIssuer
from campusconnect.domain.credentials import CredentialHasher
from campusconnect.domain.recovery import RecoveryService
from campusconnect.domain.registration import RegistrationService
from campusconnect.domain.session import SessionService
from campusconnect.domain.verification import VerificationService
from tests.factories import ACCESS_CODES, FrozenClock, make_account


@pytest.fixture
def registration(repository, notifier, hasher, clock) -> RegistrationService:
    return RegistrationService(
        repository=repository,
        notifier=notifier,
        access_codes=ACCESS_CODES,
        hasher=hasher,
        clock=clock,
    )


@pytest.fixture
def verification(repository, notifier, tokens, clock) -> VerificationService:
    return VerificationService(repository=repository, notifier=notifier, tokens=tokens, clock=clock)


@pytest.fixture
def recovery(repository, notifier, hasher, clock) -> RecoveryService:
    return RecoveryService(repository=repository, notifier=notifier, hasher=hasher, clock=clock)


@pytest.fixture
def session(repository, tokens, hasher) -> SessionService:
    return SessionService(repository=repository, tokens=tokens, hasher=hasher)


@pytest.fixture
def victim(
    repository: InMemoryAccountRepository, hasher: CredentialHasher, clock: FrozenClock
) -> str:
    """An unverified account with a known pending code; returns its email."""
    repository.create(
        make_account(hasher, code="424242", expires_at=clock.now + timedelta(minutes=15))
    )
    return "student@example.com"


@pytest.fixture
def tokens_for_other_secret() -> JwtTokenIssuer:
    return JwtTokenIssuer(secret="attacker-controlled-secret-of-decent-size", ttl_seconds=3600)
