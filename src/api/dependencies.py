"""
FastAPI dependencies - Dependency injection factories.

Services are built once in the application lifespan (see main.py) and
kept on app.state. These Depends() factories hand them to the routes.
"""

import logging

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.config.settings import Settings
from src.domain.account_info import GetAccountInfoService
from src.domain.authentication import AuthService
from src.domain.credentials import decode_token
from src.domain.registration import RegistrationService
from src.domain.resend import ResendCodeService
from src.domain.validation import ValidateCodeService

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registration_service(request: Request) -> RegistrationService:
    return request.app.state.registration_service


def get_resend_service(request: Request) -> ResendCodeService:
    return request.app.state.resend_service


def get_validate_service(request: Request) -> ValidateCodeService:
    return request.app.state.validate_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_account_info_service(request: Request) -> GetAccountInfoService:
    return request.app.state.account_info_service


# Bearer security scheme for OpenAPI documentation
http_bearer = HTTPBearer(auto_error=False)


def get_current_account_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """
    Verify the bearer token and return its subject (the account id).

    Raises:
        HTTPException: 401 when the token is missing, malformed, tampered or expired
    """
    logger.info("Verifying access-token")
    if credentials is None:
        logger.warning("Missing access-token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_token(
            credentials.credentials,
            settings.token_secret,
            algorithm=settings.token_algorithm,
        )
    except jwt.InvalidTokenError as e:
        logger.warning("Rejected access-token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    return str(payload["sub"])
