# bsg_helpdesk/core/errors.py
"""Custom exception classes for the application."""
from __future__ import annotations


class ConflictError(Exception):
    """Raised when a create/update would duplicate an existing row."""


class ApiError(Exception):
    """Raised by the API client when a remote call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FormValidationError(Exception):
    """Raised when a form is submitted with failing fields."""

    def __init__(self, errors: dict[str, str], message: str = "Validation failed") -> None:
        super().__init__(message)
        self.errors = errors


class NotFoundError(Exception):
    """Raised when a referenced row does not exist."""
