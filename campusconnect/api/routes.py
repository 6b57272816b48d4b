"""
API routes - Account lifecycle endpoints.

This module defines the HTTP endpoints under /auth:
- POST /auth/signup           - Create an unverified account
- POST /auth/login            - Credential login (verification gated)
- POST /auth/verify-email     - Redeem a verification code
- POST /auth/resend-code      - Issue a fresh verification code
- POST /auth/forgot-password  - Issue a password reset code
- POST /auth/reset-password   - Redeem a reset code
- GET  /auth/me               - Current account (AuthGate)
- PUT  /auth/profile          - Update contact fields (AuthGate)

Handlers are plain functions so FastAPI runs them in its threadpool;
bcrypt and store calls block. Each handler converts the domain errors
it can raise into an HTTPException itself.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from campusconnect.api.auth import get_current_account
from campusconnect.api.dependencies import (
    get_recovery_service,
    get_registration_service,
    get_session_service,
    get_verification_service,
)
from campusconnect.api.models import (
    AccountResponse,
    EmailRequest,
    ErrorResponse,
    ForgotPasswordResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    ResetPasswordRequest,
    SignupRequest,
    SignupResponse,
    VerificationRequiredResponse,
    VerifyEmailRequest,
    VerifyEmailResponse,
)
from campusconnect.domain.exceptions import (
    AccessCodeRejected,
    AccountError,
    AccountNotFound,
    AlreadyVerified,
    CodeExpired,
    EmailAlreadyRegistered,
    InvalidCode,
    InvalidCredentials,
    InvalidInput,
)
from campusconnect.domain.models import AccountSummary, VerificationRequired
from campusconnect.domain.recovery import RecoveryService
from campusconnect.domain.registration import RegistrationService
from campusconnect.domain.session import SessionService
from campusconnect.domain.verification import VerificationService

router = APIRouter(prefix="/auth", tags=["auth"])

# Client-facing status and message per domain error. InvalidInput keeps
# its own message, which names the offending field.
_ERROR_RESPONSES: dict[type[AccountError], tuple[int, str | None]] = {
    InvalidInput: (status.HTTP_400_BAD_REQUEST, None),
    AccessCodeRejected: (
        status.HTTP_403_FORBIDDEN,
        "Invalid Campus Access Code. Check the posters on campus for the code!",
    ),
    EmailAlreadyRegistered: (status.HTTP_409_CONFLICT, "User already exists"),
    AccountNotFound: (status.HTTP_404_NOT_FOUND, "User not found"),
    AlreadyVerified: (status.HTTP_400_BAD_REQUEST, "Email already verified. Please login."),
    InvalidCode: (status.HTTP_400_BAD_REQUEST, "Invalid verification code"),
    CodeExpired: (
        status.HTTP_400_BAD_REQUEST,
        "Verification code has expired. Please request a new one.",
    ),
    InvalidCredentials: (status.HTTP_401_UNAUTHORIZED, "Invalid email or password"),
}


def _http_error(exc: AccountError) -> HTTPException:
    status_code, message = _ERROR_RESPONSES[type(exc)]
    return HTTPException(status_code=status_code, detail=message or str(exc))


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid field"},
        403: {"model": ErrorResponse, "description": "Access code not accepted"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
    summary="Register a new account",
    description="Create an unverified account. A 6-digit verification code "
    "is emailed to the address and expires in 15 minutes.",
)
def signup(
    request_data: SignupRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> SignupResponse:
    try:
        email = service.register(
            name=request_data.name,
            email=request_data.email,
            password=request_data.password,
            phone=request_data.phone,
            whatsapp=request_data.whatsapp,
            access_code=request_data.access_code,
        )
    except (InvalidInput, AccessCodeRejected, EmailAlreadyRegistered) as e:
        raise _http_error(e) from None
    return SignupResponse(message="Verification code sent to your email", email=email)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {
            "model": ErrorResponse,
            "description": "Invalid credentials, or email not yet verified",
        },
    },
    summary="Log in with email and password",
)
def login(
    request_data: LoginRequest,
    service: SessionService = Depends(get_session_service),
) -> LoginResponse | JSONResponse:
    """
    Authenticate and return a session token.

    Unverified accounts get 401 with requiresVerification=true and no token.
    """
    try:
        result = service.login(request_data.email, request_data.password)
    except (InvalidInput, InvalidCredentials) as e:
        raise _http_error(e) from None

    if isinstance(result, VerificationRequired):
        body = VerificationRequiredResponse(
            message="Please verify your email address first.", email=result.email
        )
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content=body.model_dump(by_alias=True)
        )

    account = result.account
    return LoginResponse(
        id=account.id,
        name=account.name,
        email=account.email,
        phone=account.phone,
        whatsapp=account.whatsapp,
        role=account.role,
        token=result.token,
    )


@router.post(
    "/verify-email",
    response_model=VerifyEmailResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid, expired, or already used code"},
        404: {"model": ErrorResponse, "description": "No account for email"},
    },
    summary="Verify email with the emailed code",
)
def verify_email(
    request_data: VerifyEmailRequest,
    service: VerificationService = Depends(get_verification_service),
) -> VerifyEmailResponse:
    try:
        session = service.verify(request_data.email, request_data.code)
    except (InvalidInput, AccountNotFound, AlreadyVerified, InvalidCode, CodeExpired) as e:
        raise _http_error(e) from None
    return VerifyEmailResponse(
        id=session.account.id,
        name=session.account.name,
        email=session.account.email,
        token=session.token,
        message="Email verified successfully!",
    )


@router.post(
    "/resend-code",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Already verified"},
        404: {"model": ErrorResponse, "description": "No account for email"},
    },
    summary="Send a new verification code",
)
def resend_code(
    request_data: EmailRequest,
    service: VerificationService = Depends(get_verification_service),
) -> MessageResponse:
    try:
        service.resend_code(request_data.email)
    except (InvalidInput, AccountNotFound, AlreadyVerified) as e:
        raise _http_error(e) from None
    return MessageResponse(message="New code sent to your email")


@router.post(
    "/forgot-password",
    response_model=ForgotPasswordResponse,
    responses={404: {"model": ErrorResponse, "description": "No account for email"}},
    summary="Request a password reset code",
)
def forgot_password(
    request_data: EmailRequest,
    service: RecoveryService = Depends(get_recovery_service),
) -> ForgotPasswordResponse:
    try:
        email = service.request_reset(request_data.email)
    except (InvalidInput, AccountNotFound) as e:
        raise _http_error(e) from None
    return ForgotPasswordResponse(message="Password reset code sent to your email", email=email)


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input, code, or expired code"},
        404: {"model": ErrorResponse, "description": "No account for email"},
    },
    summary="Reset password with the emailed code",
)
def reset_password(
    request_data: ResetPasswordRequest,
    service: RecoveryService = Depends(get_recovery_service),
) -> MessageResponse:
    try:
        service.reset_password(request_data.email, request_data.code, request_data.new_password)
    except (InvalidInput, AccountNotFound, InvalidCode, CodeExpired) as e:
        raise _http_error(e) from None
    return MessageResponse(message="Password reset successfully")


@router.get(
    "/me",
    response_model=AccountResponse,
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
    summary="Get the authenticated account",
)
def get_me(account: AccountSummary = Depends(get_current_account)) -> AccountResponse:
    return AccountResponse.from_summary(account)


@router.put(
    "/profile",
    response_model=ProfileUpdateResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        404: {"model": ErrorResponse, "description": "Account no longer exists"},
    },
    summary="Update contact details",
)
def update_profile(
    request_data: ProfileUpdateRequest,
    account: AccountSummary = Depends(get_current_account),
    service: SessionService = Depends(get_session_service),
) -> ProfileUpdateResponse:
    """Update name, phone and/or WhatsApp. Email and role cannot be changed."""
    try:
        session = service.update_profile(
            account.id,
            name=request_data.name,
            phone=request_data.phone,
            whatsapp=request_data.whatsapp,
        )
    except AccountNotFound as e:
        raise _http_error(e) from None
    return ProfileUpdateResponse(
        message="Profile updated and contact information synced.",
        user=AccountResponse.from_summary(session.account),
        token=session.token,
    )
