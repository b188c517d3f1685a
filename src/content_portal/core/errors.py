"""Typed outcomes raised by the service layer.

Services never build HTTP responses themselves. They raise one of the
exceptions below and the exception handler installed in ``main`` renders it
as ``{"detail": ...}`` with the matching status code.
"""

from __future__ import annotations

from fastapi import status


class PortalError(RuntimeError):
    """Base exception for every expected, caller-facing failure.

    Attributes:
        detail: Human readable reason returned to the client.
        status_code: HTTP status the transport layer maps the error to.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class BadRequestError(PortalError):
    """Raised when the input is missing a required value or is inconsistent."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(PortalError):
    """Raised when credentials are missing or invalid."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(PortalError):
    """Raised when the actor is authenticated but not allowed to proceed."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(PortalError):
    """Raised when a referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(PortalError):
    """Raised when a write would break a uniqueness rule."""

    status_code = status.HTTP_409_CONFLICT
