"""
Application error taxonomy.

Services raise these; main.py maps each one to an HTTP status and the
standard `{success: false, message}` body.
"""

from typing import Any, List, Optional


class AppError(Exception):
    """Base class for every user-visible failure of a single request."""

    status_code: int = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(AppError):
    """Resource id did not resolve."""

    status_code = 404

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found")


class ForbiddenError(AppError):
    """Resource exists but the caller lacks rights on it."""

    status_code = 403


class InvalidStateError(AppError):
    """Operation is not allowed in the resource's current state."""

    status_code = 400


class ValidationError(AppError):
    """Malformed or missing input, including constraint violations."""

    status_code = 400

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        self.errors = errors or []
        super().__init__(message)


class UnauthenticatedError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = 401
