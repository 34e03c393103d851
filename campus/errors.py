"""Portal error taxonomy and the FastAPI handlers that render it."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class PortalError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: Optional[dict[str, str]] = None

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthenticated(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidCredential(Unauthenticated):
    """A token was presented but failed signature or expiry checks."""

    status_code = status.HTTP_403_FORBIDDEN


class Forbidden(PortalError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidState(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST


class InternalStoreError(PortalError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def portal_error_handler(_: Request, exc: PortalError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Unhandled store error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=InternalStoreError.status_code,
        content={"detail": "Internal server error"},
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register the portal error handlers on an app."""

    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
