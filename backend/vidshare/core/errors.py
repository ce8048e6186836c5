"""Centralized error handling rendering the uniform JSON error envelope.

Every failure leaves the API as::

    {"status": <http code>, "message": "...", "success": false, "errors": [...]}

Internal details (tracebacks, database messages) are logged, never returned.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from vidshare.core.logger import ensure_request_id
from vidshare.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
    ServiceUnavailableError,
    UnauthorizedError,
    UploadFailedError,
)

log = logging.getLogger(__name__)


def error_body(status: int, message: str, errors: list[Any] | None = None) -> dict[str, Any]:
    """Build the error envelope dictionary."""
    return {
        "status": int(status),
        "message": message,
        "success": False,
        "errors": list(errors or []),
    }


def error_response(status: int, message: str, errors: list[Any] | None = None) -> Response:
    """Return a Flask JSON response carrying the error envelope."""
    resp = jsonify(error_body(status, message, errors))
    resp.status_code = int(status)
    return resp


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    errors : list | None, optional
        Optional structured details (e.g. validation messages).
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        errors: list[Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.errors = errors or []

    def to_response(self) -> Response:
        return error_response(self.status_code, self.message, self.errors)


# Domain conveniences
class InvalidInput(APIError):
    """400 when request data breaks a precondition."""

    def __init__(self, message: str = "Invalid input", errors: list[Any] | None = None) -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, errors=errors)


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED)


class Forbidden(APIError):
    """403 when authorization denies access."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN)


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND)


class Conflict(APIError):
    """409 for uniqueness collisions."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT)


class UploadFailed(APIError):
    """502 when the media relay could not store a file."""

    def __init__(self, message: str = "Upload failed") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_GATEWAY)


class ServiceUnavailable(APIError):
    """503 when a collaborator timed out."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(message, status_code=HTTPStatus.SERVICE_UNAVAILABLE)


def translate_service_error(exc: ServiceError) -> APIError:
    """
    Map a service-level error to its API-level counterpart.

    :param exc: Exception raised within a service.
    :returns: API error ready to be rendered.
    """
    if isinstance(exc, InvalidInputError):
        return InvalidInput(str(exc))
    if isinstance(exc, UnauthorizedError):
        return Unauthorized(str(exc))
    if isinstance(exc, AuthorizationError):
        return Forbidden(str(exc))
    if isinstance(exc, NotFoundError):
        return NotFound(str(exc))
    if isinstance(exc, ConflictError):
        return Conflict(str(exc))
    if isinstance(exc, UploadFailedError):
        return UploadFailed(str(exc))
    if isinstance(exc, ServiceUnavailableError):
        return ServiceUnavailable(str(exc))
    return APIError(str(exc), status_code=HTTPStatus.BAD_REQUEST)


def _log(err: APIError, *, exc_info: bool = False) -> None:
    # 4xx -> warning; 5xx -> error
    level = log.error if err.status_code >= 500 else log.warning
    level(
        "%s: status=%s msg=%s request_id=%s",
        type(err).__name__,
        err.status_code,
        err.message,
        ensure_request_id(),
        exc_info=exc_info,
    )


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees the error envelope for all handled errors.
    - 5xx are logged with ``exc_info`` for traceability; 4xx as warnings.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        _log(err)
        return err.to_response()

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        api_err = translate_service_error(err)
        _log(api_err)
        return api_err.to_response()

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        messages = err.messages if isinstance(err.messages, dict) else {"_schema": err.messages}
        details = [{"field": field, "messages": msgs} for field, msgs in messages.items()]
        api_err = InvalidInput("Validation failed", errors=details)
        _log(api_err)
        return api_err.to_response()

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        api_err = APIError(message, status_code=status)
        _log(api_err)
        return api_err.to_response()

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.error("IntegrityError: request_id=%s", ensure_request_id(), exc_info=True)
        return error_response(HTTPStatus.CONFLICT, "Resource conflict")

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        # Transient DB connectivity, pool exhaustion, deadlocks
        log.error("OperationalError: request_id=%s", ensure_request_id(), exc_info=True)
        return error_response(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("Unhandled exception: request_id=%s", ensure_request_id(), exc_info=True)
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Something went wrong")


__all__ = [
    "APIError",
    "Conflict",
    "Forbidden",
    "InvalidInput",
    "NotFound",
    "ServiceUnavailable",
    "Unauthorized",
    "UploadFailed",
    "error_body",
    "error_response",
    "init_app",
    "translate_service_error",
]
