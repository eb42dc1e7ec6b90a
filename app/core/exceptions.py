"""
Application exceptions and their HTTP mapping.

Handlers and CRUD code raise these instead of building HTTP responses;
`register_exception_handlers` turns them into `{"detail": ...}` JSON bodies.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map directly onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Client supplied an invalid value (empty required field, unknown filter...)."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """No record matches the id for the calling owner."""
    status_code = status.HTTP_404_NOT_FOUND


class UnauthenticatedError(AppError):
    """Missing, invalid or expired credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the AppError handler to the application."""
    app.add_exception_handler(AppError, app_error_handler)
