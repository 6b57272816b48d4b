"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting domain services
and infrastructure adapters into routes. Shared components live on
app.state, set once by configure_app_state() during lifespan startup;
services are cheap dataclasses built per request from them.
"""

from fastapi import FastAPI, Request

from campusconnect.adapters.tokens import JwtTokenIssuer
from campusconnect.config.settings import Settings
from campusconnect.domain.credentials import CodeGenerator, CredentialHasher
from campusconnect.domain.ports import AccountRepository, Notifier
from campusconnect.domain.recovery import RecoveryService
from campusconnect.domain.registration import RegistrationService
from campusconnect.domain.session import SessionService
from campusconnect.domain.verification import VerificationService


def configure_app_state(
    app: FastAPI,
    settings: Settings,
    repository: AccountRepository,
    notifier: Notifier,
) -> None:
    """Attach the store, notifier, hasher and token issuer to app.state."""
    app.state.settings = settings
    app.state.repository = repository
    app.state.notifier = notifier
    app.state.hasher = CredentialHasher(rounds=settings.bcrypt_cost)
    app.state.token_issuer = JwtTokenIssuer(
        secret=settings.jwt_secret.get_secret_value(),
        ttl_seconds=settings.session_token_ttl_seconds,
        algorithm=settings.jwt_algorithm,
    )


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_repository(request: Request) -> AccountRepository:
    return request.app.state.repository


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


def get_token_issuer(request: Request) -> JwtTokenIssuer:
    return request.app.state.token_issuer


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, notifier and hasher for the domain service.
    """
    settings = get_app_settings(request)
    return RegistrationService(
        repository=get_repository(request),
        notifier=get_notifier(request),
        access_codes=tuple(settings.access_codes),
        hasher=request.app.state.hasher,
        code_generator=CodeGenerator(settings.code_length),
        code_ttl_seconds=settings.code_ttl_seconds,
    )


def get_verification_service(request: Request) -> VerificationService:
    settings = get_app_settings(request)
    return VerificationService(
        repository=get_repository(request),
        notifier=get_notifier(request),
        tokens=get_token_issuer(request),
        code_generator=CodeGenerator(settings.code_length),
        code_ttl_seconds=settings.code_ttl_seconds,
    )


def get_recovery_service(request: Request) -> RecoveryService:
    settings = get_app_settings(request)
    return RecoveryService(
        repository=get_repository(request),
        notifier=get_notifier(request),
        hasher=request.app.state.hasher,
        code_generator=CodeGenerator(settings.code_length),
        code_ttl_seconds=settings.code_ttl_seconds,
    )


def get_session_service(request: Request) -> SessionService:
    return SessionService(
        repository=get_repository(request),
        tokens=get_token_issuer(request),
        hasher=request.app.state.hasher,
    )
