"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routes, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from campusconnect.adapters.repository.memory import InMemoryAccountRepository
from campusconnect.adapters.repository.postgres import PostgresAccountRepository, run_migrations
from campusconnect.adapters.smtp.background import BackgroundNotifier
from campusconnect.adapters.smtp.console import ConsoleEmailSender
from campusconnect.adapters.smtp.sender import SmtpEmailSender
from campusconnect.api.dependencies import configure_app_state
from campusconnect.api.errors import add_exception_handlers
from campusconnect.api.routes import router as auth_router
from campusconnect.config.settings import Settings, get_settings
from campusconnect.domain.ports import Notifier

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "auth",
        "description": "Account signup, email verification, login, and password recovery",
    },
]


def create_pool(settings: Settings) -> ConnectionPool:
    """
    Create the PostgreSQL connection pool.

    Checkout, connect and statement timeouts all come from settings so a
    slow database fails the request instead of hanging it.
    """
    return ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.store_timeout_seconds,
        kwargs={
            "connect_timeout": max(1, int(settings.store_timeout_seconds)),
            "options": f"-c statement_timeout={settings.statement_timeout_ms}",
        },
        open=True,
    )


def build_email_sender(settings: Settings) -> Notifier:
    """Pick the configured email transport."""
    if settings.email_backend == "smtp":
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.email_from,
            username=settings.smtp_username,
            password=settings.smtp_password.get_secret_value() if settings.smtp_password else None,
            use_tls=settings.smtp_use_tls,
            code_ttl_minutes=settings.code_ttl_seconds // 60,
        )
    return ConsoleEmailSender()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the account store (connection pool + migrations for postgres)
    - Starts the background notifier
    - Stops the notifier and closes the pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    logger.info("Starting application...")

    pool = None
    if settings.storage_backend == "postgres":
        logger.info("Connecting to database...")
        pool = create_pool(settings)

        logger.info("Running database migrations...")
        run_migrations(pool)
        repository = PostgresAccountRepository(pool)
    else:
        logger.warning("Using in-memory account store; data is lost on restart")
        repository = InMemoryAccountRepository()

    # Store pool in app state for the health check
    app.state.pool = pool

    notifier = BackgroundNotifier(build_email_sender(settings), max_workers=settings.notifier_workers)
    configure_app_state(app, settings, repository, notifier)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    # Pending sends are not awaited
    notifier.shutdown(wait=False)
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="campusconnect",
    description="CampusConnect Accounts API - Access-code gated signup, "
    "email verification, and session tokens",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.include_router(auth_router)
add_exception_handlers(app)


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    pool = getattr(request.app.state, "pool", None)
    if pool is not None:
        with pool.connection() as conn:
            conn.execute("SELECT 1")

    return {"status": "healthy"}
