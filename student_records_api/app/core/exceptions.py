"""
Client‑facing error categories raised by the service layer.

Each error carries the HTTP status code and the message returned to
the caller in the ``{"error": ...}`` body.  Handlers registered in
``api.errors`` perform the translation, so route functions never build
error responses themselves.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors the API reports to clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """A required field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "All fields are required"


class ConflictError(ServiceError):
    """Another record already uses the requested email."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already exists"


class NotFoundError(ServiceError):
    """No record has the requested id."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Student not found"


class StorageError(ServiceError):
    """Any other failure talking to the database.

    The message is always the generic one; details go to the log.
    """
