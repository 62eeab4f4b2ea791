"""Application error taxonomy.

Services raise these; the handler registered in ``main.py`` renders them as
``{"message": ...}`` with the matching status code.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Malformed or invalid input (including token / refresh pairs)."""
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(BadRequestError):
    """A unique field (username, email, code) is already taken."""


class UnauthorizedError(AppError):
    """Bad credentials, deactivated account or missing bearer token."""
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppError):
    """Authenticated, but the role does not allow the operation."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    """Referenced entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class ConfigurationError(RuntimeError):
    """Fatal startup condition (e.g. signing key not configured)."""
