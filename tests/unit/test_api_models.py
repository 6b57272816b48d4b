"""
Unit tests for API request/response models.

Tests Pydantic validation and camelCase wire names.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from campusconnect.api.models import (
    AccountResponse,
    ErrorResponse,
    LoginResponse,
    ProfileUpdateRequest,
    ResetPasswordRequest,
    SignupRequest,
    VerificationRequiredResponse,
    VerifyEmailRequest,
)
from campusconnect.domain.models import AccountSummary, Role

SIGNUP_BODY = {
    "name": "Ayesha Khan",
    "email": "ayesha@example.com",
    "password": "password123",
    "phone": "+923001234567",
    "accessCode": "CIT25",
}


class TestSignupRequest:
    """Tests for SignupRequest model."""

    def test_accepts_camel_case_body(self) -> None:
        request = SignupRequest.model_validate(SIGNUP_BODY)
        assert request.access_code == "CIT25"
        assert request.whatsapp is None

    def test_accepts_field_names(self) -> None:
        """populate_by_name lets Python callers use snake_case."""
        request = SignupRequest(
            name="Ayesha Khan",
            email="ayesha@example.com",
            password="password123",
            phone="+923001234567",
            access_code="AMC25",
        )
        assert request.access_code == "AMC25"

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SignupRequest.model_validate({**SIGNUP_BODY, "email": "not-an-email"})
        assert "email" in str(exc_info.value)

    @pytest.mark.parametrize("missing", ["name", "email", "password", "phone", "accessCode"])
    def test_missing_field_rejected(self, missing: str) -> None:
        body = {k: v for k, v in SIGNUP_BODY.items() if k != missing}
        with pytest.raises(ValidationError):
            SignupRequest.model_validate(body)

    def test_whatsapp_optional(self) -> None:
        request = SignupRequest.model_validate({**SIGNUP_BODY, "whatsapp": "+923009999999"})
        assert request.whatsapp == "+923009999999"


class TestOtherRequests:
    def test_verify_code_number_becomes_string(self) -> None:
        request = VerifyEmailRequest.model_validate({"email": "a@b.co", "code": 123456})
        assert request.code == "123456"

    def test_reset_code_number_becomes_string(self) -> None:
        request = ResetPasswordRequest.model_validate(
            {"email": "a@b.co", "code": 654321, "newPassword": "brandnew1"}
        )
        assert request.code == "654321"

    def test_reset_password_uses_new_password_alias(self) -> None:
        request = ResetPasswordRequest.model_validate(
            {"email": "a@b.co", "code": "123456", "newPassword": "brandnew1"}
        )
        assert request.new_password == "brandnew1"

    def test_profile_update_all_optional(self) -> None:
        request = ProfileUpdateRequest.model_validate({})
        assert request.name is None
        assert request.phone is None
        assert request.whatsapp is None


class TestResponses:
    def test_verification_required_dumps_camel_case(self) -> None:
        body = VerificationRequiredResponse(message="verify", email="a@b.co")
        assert body.model_dump(by_alias=True) == {
            "message": "verify",
            "requiresVerification": True,
            "email": "a@b.co",
        }

    def test_login_response_role_serializes_as_string(self) -> None:
        body = LoginResponse(
            id="acc-1",
            name="A",
            email="a@b.co",
            phone="1",
            whatsapp="",
            role=Role.STUDENT,
            token="t",
        )
        assert body.model_dump(mode="json")["role"] == "student"

    def test_account_response_from_summary(self) -> None:
        now = datetime.now(timezone.utc)
        summary = AccountSummary(
            id="acc-1",
            name="A",
            email="a@b.co",
            phone="1",
            whatsapp="",
            role=Role.STUDENT,
            is_verified=True,
            created_at=now,
            updated_at=now,
        )
        dumped = AccountResponse.from_summary(summary).model_dump(by_alias=True)

        assert dumped["isVerified"] is True
        assert dumped["createdAt"] == now
        assert "passwordHash" not in dumped

    def test_error_response(self) -> None:
        assert ErrorResponse(detail="nope", message="nope").model_dump() == {
            "detail": "nope",
            "message": "nope",
        }
