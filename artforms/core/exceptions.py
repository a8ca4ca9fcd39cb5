"""
Application error taxonomy.

Services raise these; the handlers registered in artforms.main render every
one of them as the common response envelope with ``success: false``.
"""
from typing import Optional


class AppError(Exception):
    """
    Base class for errors that map onto an HTTP status code
    """
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """
    Exception raised when one or more field constraints are violated

    ``errors`` is a list of ``{"field": ..., "message": ...}`` entries.
    """
    status_code = 400
    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[list[dict[str, str]]] = None,
    ):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(errors=[{"field": field, "message": message}])


class NotFoundError(AppError):
    """
    Exception raised when an id does not resolve, or resolves to something
    the caller does not own. The two cases are reported identically.
    """
    status_code = 404
    default_message = "Resource not found"


class SelfActionError(AppError):
    """
    Exception raised when a user tries to follow their own artist profile
    """
    status_code = 400
    default_message = "You cannot follow yourself"


class AuthError(AppError):
    """
    Exception raised when the bearer token is missing, invalid or expired
    """
    status_code = 401
    default_message = "Not authorized to access this route"


class ForbiddenError(AppError):
    """
    Exception raised when an authenticated user has the wrong user type
    """
    status_code = 403
    default_message = "You do not have permission to perform this action"


class ServerError(AppError):
    """
    Exception raised for unexpected failures. The message is generic; the
    underlying cause is logged, never returned to the client.
    """
    status_code = 500
    default_message = "Internal server error"
