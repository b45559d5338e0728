"""
Error responses - Domain errors and uncaught faults as HTTP bodies.

Domain errors come back from services as Failure values and are turned
into responses by the routes. HTTP errors raised by the framework or by
dependencies (bad bearer token, unknown route) keep the same body.
Anything else raised is an infrastructure fault: it is logged once here
and answered with a generic 500 body.
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.domain.errors import SERVER_ERROR_MESSAGE, SERVER_ERROR_STATUS, DomainError

logger = logging.getLogger(__name__)


def error_body(path: str, status_code: int, message: str) -> dict[str, str | int]:
    return {
        "path": path,
        "code": status_code,
        "error": HTTPStatus(status_code).phrase,
        "message": message,
    }


def domain_error_response(request: Request, error: DomainError) -> JSONResponse:
    """Map a domain error to its fixed HTTP status and error body."""
    logger.warning("Domain Error => %s", error)
    return JSONResponse(
        status_code=error.status_code,
        content=error_body(request.url.path, error.status_code, error.message),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register handlers so every error leaves the API in the same body shape."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        logger.warning("HTTP Error on %s => %s %s", request.url.path, exc.status_code, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request.url.path, exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Internal Error on %s => %s", request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=SERVER_ERROR_STATUS,
            content=error_body(request.url.path, SERVER_ERROR_STATUS, SERVER_ERROR_MESSAGE),
        )
