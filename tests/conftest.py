"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory account store and a controllable clock
- A fast bcrypt hasher (minimum work factor)
- A FastAPI app wired to the in-memory store with a mocked notifier
"""

from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from campusconnect.adapters.repository.memory import InMemoryAccountRepository
from campusconnect.adapters.tokens import JwtTokenIssuer
from campusconnect.api.dependencies import configure_app_state
from campusconnect.api.errors import add_exception_handlers
from campusconnect.api.routes import router
from campusconnect.config.settings import Settings
from campusconnect.domain.credentials import CredentialHasher
from tests.factories import ACCESS_CODES, TEST_SECRET, FrozenClock


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture(scope="session")
def hasher() -> CredentialHasher:
    """bcrypt with the minimum cost factor to keep tests fast."""
    return CredentialHasher(rounds=4)


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def notifier() -> Mock:
    return Mock()


@pytest.fixture
def tokens() -> JwtTokenIssuer:
    return JwtTokenIssuer(secret=TEST_SECRET, ttl_seconds=3600)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        storage_backend="memory",
        bcrypt_cost=4,
        jwt_secret=TEST_SECRET,
        session_token_ttl_seconds=3600,
        access_codes=list(ACCESS_CODES),
    )


@pytest.fixture
def app(settings: Settings, repository: InMemoryAccountRepository, notifier: Mock) -> FastAPI:
    """Create test FastAPI application backed by the in-memory store."""
    test_app = FastAPI()
    test_app.include_router(router)
    add_exception_handlers(test_app)
    configure_app_state(test_app, settings, repository, notifier)
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client for the application."""
    return TestClient(app)
