"""
Adversarial tests for guessing and enumeration attacks.

Verifies that an attacker probing the API:
- Cannot tell unknown emails from wrong passwords at login
- Cannot verify with a code issued for a password reset (or vice versa)
- Cannot reuse a code after a fresh one was issued
- Cannot forge or replay tokens past their lifetime
"""

from datetime import timedelta
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from campusconnect.adapters.repository.memory import InMemoryAccountRepository
from campusconnect.adapters.tokens import JwtTokenIssuer
from campusconnect.domain.exceptions import CodeExpired, InvalidCode, InvalidCredentials
from campusconnect.domain.recovery import RecoveryService
from campusconnect.domain.session import SessionService
from campusconnect.domain.verification import VerificationService
from tests.factories import FrozenClock, make_account

pytestmark = pytest.mark.adversarial


class TestLoginEnumeration:
    def test_unknown_and_wrong_password_identical_responses(
        self,
        client: TestClient,
        repository: InMemoryAccountRepository,
        hasher,
    ) -> None:
        repository.create(make_account(hasher, verified=True, code=None))

        unknown = client.post(
            "/auth/login", json={"email": "ghost@example.com", "password": "password123"}
        )
        wrong = client.post(
            "/auth/login", json={"email": "student@example.com", "password": "guess"}
        )

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()

    def test_unverified_status_hidden_without_password(
        self, session: SessionService, victim: str
    ) -> None:
        with pytest.raises(InvalidCredentials):
            session.login(victim, "not-the-password")


class TestCodeGuessing:
    def test_wrong_guesses_leave_code_intact(
        self,
        verification: VerificationService,
        repository: InMemoryAccountRepository,
        victim: str,
    ) -> None:
        for guess in ("000000", "111111", "424241", "42424", "4242420"):
            with pytest.raises(InvalidCode):
                verification.verify(victim, guess)

        assert repository.get_by_email(victim).is_verified is False
        assert verification.verify(victim, "424242").account.is_verified

    def test_expired_code_rejected_even_if_correct(
        self, verification: VerificationService, clock: FrozenClock, victim: str
    ) -> None:
        clock.advance(hours=1)
        with pytest.raises(CodeExpired):
            verification.verify(victim, "424242")

    def test_reset_code_cannot_verify_email(
        self,
        verification: VerificationService,
        recovery: RecoveryService,
        notifier: Mock,
        victim: str,
    ) -> None:
        """Requesting a reset must not give a way to verify an email you cannot read."""
        recovery.request_reset(victim)
        reset_code = notifier.send_password_reset_code.call_args.args[2]

        with pytest.raises(InvalidCode):
            verification.verify(victim, reset_code)

    def test_verify_code_cannot_reset_password(
        self, recovery: RecoveryService, victim: str
    ) -> None:
        with pytest.raises(InvalidCode):
            recovery.reset_password(victim, "424242", "hijacked1")

    def test_old_reset_code_dead_after_new_request(
        self, recovery: RecoveryService, notifier: Mock, victim: str
    ) -> None:
        recovery.request_reset(victim)
        first = notifier.send_password_reset_code.call_args.args[2]
        recovery.request_reset(victim)
        second = notifier.send_password_reset_code.call_args.args[2]

        if first != second:
            with pytest.raises(InvalidCode):
                recovery.reset_password(victim, first, "hijacked1")


class TestTokenForgery:
    def test_token_signed_with_other_secret_rejected(
        self,
        client: TestClient,
        repository: InMemoryAccountRepository,
        hasher,
        tokens_for_other_secret: JwtTokenIssuer,
    ) -> None:
        repository.create(make_account(hasher, verified=True, code=None))
        forged = tokens_for_other_secret.issue("acc-1")

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {forged}"})

        assert response.status_code == 401

    def test_expired_token_rejected(
        self, client: TestClient, repository: InMemoryAccountRepository, hasher, app
    ) -> None:
        repository.create(make_account(hasher, verified=True, code=None))
        stale = app.state.token_issuer.issue("acc-1", ttl_seconds=-1)

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {stale}"})

        assert response.status_code == 401

    def test_token_for_unknown_subject_rejected(self, client: TestClient, app) -> None:
        token = app.state.token_issuer.issue("no-such-account")

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized, user not found"

    def test_profile_update_cannot_escalate_role(
        self, client: TestClient, repository: InMemoryAccountRepository, hasher, app
    ) -> None:
        repository.create(make_account(hasher, verified=True, code=None))
        token = app.state.token_issuer.issue("acc-1")

        client.put(
            "/auth/profile",
            json={"role": "admin", "isVerified": False, "email": "admin@example.com"},
            headers={"Authorization": f"Bearer {token}"},
        )

        account = repository.get_by_id("acc-1")
        assert account.role.value == "student"
        assert account.email == "student@example.com"
        assert account.is_verified is True


class TestSignupGate:
    @pytest.mark.parametrize("code", ["", "CIT24", "CIT25 OR 1=1", "cit25\x00", "TEST12345"])
    def test_access_code_variants_rejected(self, client: TestClient, code: str) -> None:
        response = client.post(
            "/auth/signup",
            json={
                "name": "Intruder",
                "email": "intruder@example.com",
                "password": "password123",
                "phone": "+923001234567",
                "accessCode": code,
            },
        )

        assert response.status_code in (400, 403)

    def test_expired_code_window_matches_ttl(
        self,
        verification: VerificationService,
        repository: InMemoryAccountRepository,
        clock: FrozenClock,
        notifier: Mock,
        victim: str,
    ) -> None:
        verification.resend_code(victim)
        code = notifier.send_verification_code.call_args.args[2]
        expires = repository.get_by_email(victim).pending_code_expires_at

        assert expires - clock.now == timedelta(minutes=15)
        clock.advance(minutes=15, seconds=1)
        with pytest.raises(CodeExpired):
            verification.verify(victim, code)
