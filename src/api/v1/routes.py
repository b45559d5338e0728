"""
API v1 routes.

Defines REST endpoints for account registration, email code validation,
code resend, authentication and account info. Handlers are plain `def`
so FastAPI runs them in its threadpool; bcrypt and storage calls never
block the event loop.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.api.dependencies import (
    get_account_info_service,
    get_auth_service,
    get_current_account_id,
    get_registration_service,
    get_resend_service,
    get_validate_service,
)
from src.api.errors import domain_error_response
from src.api.models import (
    AccountInfoResponse,
    AuthRequest,
    ConfirmRequest,
    ErrorResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResendRequest,
    TokenModel,
)
from src.domain.account_info import GetAccountInfoService
from src.domain.authentication import AuthService
from src.domain.registration import RegistrationService
from src.domain.resend import ResendCodeService
from src.domain.result import Failure
from src.domain.validation import ValidateCodeService

router = APIRouter()


@router.post(
    "/accounts/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_202_ACCEPTED,
    tags=["accounts"],
    responses={
        409: {"model": ErrorResponse, "description": "Account already exists"},
        422: {"description": "Validation error"},
    },
    summary="Register a new account",
    description="Create an account awaiting validation. "
    "A 6-digit verification code is sent to the provided email.",
)
def register(
    request_data: RegisterRequest,
    request: Request,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse | JSONResponse:
    result = service.register(
        name=request_data.name,
        email=request_data.email,
        phone=request_data.phone,
        password=request_data.password,
    )
    if isinstance(result, Failure):
        return domain_error_response(request, result.error)

    account = result.value
    return RegisterResponse(
        status=account.status.value,
        message=f"A verification code was sent to the email '{account.email}'. "
        "Please validate the code to confirm your registration.",
        url=f"{request.url}/confirm",
    )


@router.post(
    "/accounts/register/confirm",
    response_model=MessageResponse,
    tags=["accounts"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid code"},
        404: {"model": ErrorResponse, "description": "Account not found"},
        410: {"model": ErrorResponse, "description": "Code expired or email already validated"},
    },
    summary="Validate the emailed code",
)
def confirm(
    request_data: ConfirmRequest,
    request: Request,
    service: ValidateCodeService = Depends(get_validate_service),
) -> MessageResponse | JSONResponse:
    result = service.validate(request_data.email, request_data.code)
    if isinstance(result, Failure):
        return domain_error_response(request, result.error)
    return MessageResponse(message="Email validated")


@router.post(
    "/accounts/register/resend",
    response_model=MessageResponse,
    tags=["accounts"],
    responses={
        404: {"model": ErrorResponse, "description": "Account not found"},
        410: {"model": ErrorResponse, "description": "Email already validated"},
    },
    summary="Send the verification code again",
)
def resend(
    request_data: ResendRequest,
    request: Request,
    service: ResendCodeService = Depends(get_resend_service),
) -> MessageResponse | JSONResponse:
    result = service.resend(request_data.email)
    if isinstance(result, Failure):
        return domain_error_response(request, result.error)
    return MessageResponse(message=f"A verification code was sent to the email '{request_data.email}'.")


@router.post(
    "/auth",
    response_model=TokenModel,
    tags=["auth"],
    responses={
        401: {"model": ErrorResponse, "description": "Invalid email and/or password"},
        412: {"model": ErrorResponse, "description": "Email confirmation pending"},
    },
    summary="Authenticate and obtain an access token",
)
def authenticate(
    request_data: AuthRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> TokenModel | JSONResponse:
    result = service.authenticate(request_data.email, request_data.password)
    if isinstance(result, Failure):
        return domain_error_response(request, result.error)
    return TokenModel(token=result.value.token)


@router.get(
    "/accounts/me",
    response_model=AccountInfoResponse,
    tags=["accounts"],
    responses={
        401: {"description": "Missing, invalid or expired token"},
        404: {"model": ErrorResponse, "description": "Account not found"},
    },
    summary="Get the authenticated account",
)
def account_info(
    request: Request,
    account_id: str = Depends(get_current_account_id),
    service: GetAccountInfoService = Depends(get_account_info_service),
) -> AccountInfoResponse | JSONResponse:
    result = service.get(account_id)
    if isinstance(result, Failure):
        return domain_error_response(request, result.error)

    account = result.value
    return AccountInfoResponse(
        id=str(account.id),
        name=account.name,
        email=account.email,
        phone=account.phone,
        status=account.status.value,
    )
