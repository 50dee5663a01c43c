"""Failure kinds raised by handlers and converted to JSON error responses."""

from __future__ import annotations

from typing import Dict

from fastapi import status


class UserServiceError(Exception):
    """Base class for failures that map directly to a client-facing response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"
    message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_response(self) -> Dict[str, str]:
        return {"error": self.error, "message": self.message}


class MissingFieldsError(UserServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Missing required fields"
    message = "Both name and email are required"


class InvalidNameError(UserServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid name"
    message = "Name must be a non-empty string"


class InvalidEmailError(UserServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid email"
    message = "Please provide a valid email address"


class InvalidBodyError(UserServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid request body"
    message = "Request body must be a JSON object"


class MissingUserIdError(UserServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Missing user ID"
    message = "User ID is required"


class DuplicateEmailError(UserServiceError):
    status_code = status.HTTP_409_CONFLICT
    error = "Email already exists"
    message = "A user with this email already exists"


class UserNotFoundError(UserServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "User not found"
    message = "No user found with the provided ID"


class RouteNotFoundError(UserServiceError):
    """Raised for any method and path combination without a registered handler."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"
    message = "The requested endpoint does not exist"


class InternalServerError(UserServiceError):
    """Generic failure; the underlying exception is only ever logged."""


__all__ = [
    "DuplicateEmailError",
    "InternalServerError",
    "InvalidBodyError",
    "InvalidEmailError",
    "InvalidNameError",
    "MissingFieldsError",
    "MissingUserIdError",
    "RouteNotFoundError",
    "UserNotFoundError",
    "UserServiceError",
]
