"""Failure kinds raised by the API and the single place they become HTTP responses."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Tuple

from fastapi.responses import JSONResponse

logger = logging.getLogger("product_api.errors")

GENERIC_MESSAGE = "Something went wrong!"


class ErrorKind(Enum):
    AUTHENTICATION = 401
    VALIDATION = 400
    NOT_FOUND = 404
    UNCLASSIFIED = 500

    @property
    def status_code(self) -> int:
        return self.value


class ApiError(Exception):
    """A classified failure: carries its kind and a message safe to show the caller."""

    kind = ErrorKind.UNCLASSIFIED

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class AuthenticationError(ApiError):
    kind = ErrorKind.AUTHENTICATION


class ValidationError(ApiError):
    kind = ErrorKind.VALIDATION


class NotFoundError(ApiError):
    kind = ErrorKind.NOT_FOUND


def classify(exc: BaseException) -> Tuple[ErrorKind, str]:
    """Return the kind and client-facing message for any exception."""
    if isinstance(exc, ApiError) and exc.kind is not ErrorKind.UNCLASSIFIED:
        return exc.kind, exc.message
    return ErrorKind.UNCLASSIFIED, GENERIC_MESSAGE


def error_response(exc: BaseException) -> JSONResponse:
    kind, message = classify(exc)
    if kind is ErrorKind.UNCLASSIFIED:
        logger.error("Unhandled error", exc_info=(type(exc), exc, exc.__traceback__))
    else:
        logger.warning("%s: %s", type(exc).__name__, exc.message)
    return JSONResponse(status_code=kind.status_code, content={"error": message})
