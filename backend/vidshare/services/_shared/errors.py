"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between repositories, adapters and
application services. Translation into the HTTP envelope happens in
``vidshare/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Some dialects (PostgreSQL) include the constraint name in the message;
    SQLite reports the column instead, so callers may pass either.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint or column name to look for.
    :returns: True if the IntegrityError mentions it.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The error layer translates them into API errors at the boundary.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class InvalidInputError(ServiceError):
    """Raised when a use-case precondition on the input does not hold."""


class UnauthorizedError(ServiceError):
    """Raised when credentials or a token cannot be verified."""

    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message)


class InvalidTokenError(UnauthorizedError):
    """Raised when a verified token refers to a user that no longer exists."""

    def __init__(self, message: str = "Invalid refresh token") -> None:
        super().__init__(message)


class TokenReusedError(UnauthorizedError):
    """Raised when a refresh token is not the one currently stored for its user."""

    def __init__(self, message: str = "Refresh token is expired or used") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Raised when an authenticated actor may not touch a resource."""


class UploadFailedError(ServiceError):
    """Raised when the media relay did not return a usable URL."""


class ServiceUnavailableError(ServiceError):
    """Raised when a collaborator (media relay) timed out or is unreachable."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found.

    :param entity: Entity name (e.g., "User").
    :param key: Identifier or search key.
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique field collides with an existing record.

    :param entity: Entity name (e.g., "User").
    :param field: Colliding field name.
    :param value: Colliding value.
    """

    entity: str
    field: str
    value: str

    def __str__(self) -> str:
        return f"{self.entity} with {self.field} '{self.value}' already exists"
