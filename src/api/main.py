"""
FastAPI application factory and composition root.

This module creates the FastAPI application instance, wires
repository -> cache -> mail sender -> services, and configures
exception handlers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from psycopg_pool import ConnectionPool

from src.adapters.cache.memory import InMemoryCodeCache
from src.adapters.repository.memory import InMemoryAccountRepository
from src.adapters.repository.postgres import PostgresAccountRepository, run_migrations
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.api.errors import register_error_handlers
from src.api.v1 import router as v1_router
from src.config.logging_config import configure_logging
from src.config.settings import Settings, get_settings
from src.domain.account_info import GetAccountInfoService
from src.domain.authentication import AuthService
from src.domain.ports import AccountRepository, CodeCache, EmailSender
from src.domain.registration import RegistrationService
from src.domain.resend import ResendCodeService
from src.domain.validation import ValidateCodeService

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "accounts",
        "description": "Account registration and email code validation",
    },
    {
        "name": "auth",
        "description": "Credential authentication and token issuance",
    },
]


def build_email_sender(settings: Settings) -> EmailSender:
    if settings.mail_backend == "smtp":
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
        )
    return ConsoleEmailSender()


def wire_services(
    app: FastAPI,
    settings: Settings,
    repository: AccountRepository,
    cache: CodeCache,
    email_sender: EmailSender,
) -> None:
    """Build every domain service around the shared collaborators."""
    app.state.settings = settings
    app.state.repository = repository
    app.state.cache = cache
    app.state.registration_service = RegistrationService(
        repository=repository,
        email_sender=email_sender,
        cache=cache,
        mail_from=settings.mail_from,
        code_ttl_seconds=settings.code_ttl_seconds,
        code_digits=settings.code_digits,
        bcrypt_cost=settings.bcrypt_cost,
    )
    app.state.resend_service = ResendCodeService(
        repository=repository,
        email_sender=email_sender,
        cache=cache,
        mail_from=settings.mail_from,
        code_ttl_seconds=settings.code_ttl_seconds,
        code_digits=settings.code_digits,
    )
    app.state.validate_service = ValidateCodeService(repository=repository, cache=cache)
    app.state.auth_service = AuthService(
        repository=repository,
        token_secret=settings.token_secret,
        token_expires_in_seconds=settings.token_expires_in_seconds,
        token_algorithm=settings.token_algorithm,
    )
    app.state.account_info_service = GetAccountInfoService(repository=repository)


def create_app(
    settings: Settings | None = None,
    repository: AccountRepository | None = None,
    cache: CodeCache | None = None,
    email_sender: EmailSender | None = None,
) -> FastAPI:
    """
    Create the application.

    Collaborators passed in explicitly take precedence over the ones
    the settings would build (tests inject in-memory adapters this way).
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        FastAPI lifespan context manager.

        Manages application startup and shutdown:
        - Creates database connection pool and runs migrations (postgres backend)
        - Wires the services with one process-wide code cache
        - Closes connection pool on shutdown
        """
        logger.info("Starting application...")
        pool: ConnectionPool | None = None
        account_repository = repository

        if account_repository is None and settings.repository_backend == "postgres":
            logger.info("Connecting to database...")
            pool = ConnectionPool(
                conninfo=settings.database_url,
                min_size=settings.pool_min_size,
                max_size=settings.pool_max_size,
            )
            logger.info("Running database migrations...")
            run_migrations(pool)
            account_repository = PostgresAccountRepository(pool)
        elif account_repository is None:
            logger.info("Using in-memory account repository")
            account_repository = InMemoryAccountRepository()

        app.state.pool = pool
        wire_services(
            app,
            settings,
            account_repository,
            cache if cache is not None else InMemoryCodeCache(),
            email_sender if email_sender is not None else build_email_sender(settings),
        )
        logger.info("Application startup complete")

        yield

        logger.info("Shutting down application...")
        if pool is not None:
            pool.close()
            logger.info("Database connection pool closed")

    app = FastAPI(
        title="accounts",
        description="Account registration with email code validation and JWT authentication",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health")
    def health_check(request: Request) -> dict[str, str]:
        """
        Health check endpoint with database validation.

        Returns 200 OK if application and database (when used) are healthy.
        """
        pool = request.app.state.pool
        if pool is not None:
            with pool.connection() as conn:
                conn.execute("SELECT 1")
        return {"status": "healthy"}

    return app


def create_default_app() -> FastAPI:
    """Entry point for `uvicorn --factory src.api.main:create_default_app`."""
    settings = get_settings()
    configure_logging(settings.log_level)
    return create_app(settings)
