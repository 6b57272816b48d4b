"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Wire field names are camelCase (accessCode, newPassword, requiresVerification);
models are populated by their Python field names.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from campusconnect.domain.models import AccountSummary, Role


class CamelModel(BaseModel):
    """Base model serializing to and accepting camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupRequest(CamelModel):
    """Request model for account signup."""

    name: str
    email: EmailStr
    password: str = Field(..., description="Account password (min 6 characters)")
    phone: str
    whatsapp: str | None = None
    access_code: str = Field(..., description="Campus access code from the posters")


class SignupResponse(CamelModel):
    message: str
    email: str


class LoginRequest(CamelModel):
    email: str
    password: str


class LoginResponse(CamelModel):
    """Response model for a successful, verified login."""

    id: str
    name: str
    email: str
    phone: str
    whatsapp: str
    role: Role
    token: str


class VerificationRequiredResponse(CamelModel):
    """Response model for correct credentials on an unverified account."""

    message: str
    requires_verification: bool = True
    email: str


class VerifyEmailRequest(CamelModel):
    """Verification request; a code sent as a JSON number is accepted as its string form."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: str
    code: str = Field(..., description="6-digit verification code")


class VerifyEmailResponse(CamelModel):
    id: str
    name: str
    email: str
    token: str
    message: str


class EmailRequest(CamelModel):
    """Request model carrying only an email (resend code, forgot password)."""

    email: str


class MessageResponse(CamelModel):
    message: str


class ForgotPasswordResponse(CamelModel):
    message: str
    email: str


class ResetPasswordRequest(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: str
    code: str
    new_password: str = Field(..., description="New password (min 6 characters)")


class AccountResponse(CamelModel):
    """Account fields safe for clients: no password hash, no pending code."""

    id: str
    name: str
    email: str
    phone: str
    whatsapp: str
    role: Role
    is_verified: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_summary(cls, summary: AccountSummary) -> "AccountResponse":
        return cls(
            id=summary.id,
            name=summary.name,
            email=summary.email,
            phone=summary.phone,
            whatsapp=summary.whatsapp,
            role=summary.role,
            is_verified=summary.is_verified,
            created_at=summary.created_at,
            updated_at=summary.updated_at,
        )


class ProfileUpdateRequest(CamelModel):
    """Partial profile update; omitted fields are left unchanged."""

    name: str | None = None
    phone: str | None = None
    whatsapp: str | None = None


class ProfileUpdateResponse(CamelModel):
    message: str
    user: AccountResponse
    token: str


class ErrorResponse(BaseModel):
    """Standard error response model; message mirrors detail."""

    detail: str
    message: str
