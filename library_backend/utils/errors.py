"""
Error taxonomy for Library API handlers

Each error carries the HTTP status code, error label and the message that is
safe to return to the caller. Handlers catch ApiError at their outer boundary
and turn it into an error response.
"""

from __future__ import annotations


class ApiError(Exception):
    """Base class for errors that map to an API Gateway error response."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """Missing or malformed request input (400)."""

    status_code = 400
    error = "Bad Request"


class NotFoundError(ApiError):
    """Point lookup miss (404)."""

    status_code = 404
    error = "Not Found"


class StorageError(ApiError):
    """
    Failure from the backing DynamoDB table (500).

    The message passed in is kept for logging only; the caller always sees
    the generic public message.
    """

    status_code = 500
    error = "Internal Server Error"
    public_message = "An internal error occurred"

    def __init__(self, message: str):
        super().__init__(message)
        self.detail = message
        self.message = self.public_message
