"""
Error taxonomy for the public API.
Each error carries the HTTP status it maps to and the message shown to the caller.
"""
from fastapi import status


class SiteError(Exception):
    """Base class for errors rendered as {"error": message}."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SiteError):
    """Request is missing required fields or carries unusable values."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"


class StorageError(SiteError):
    """The remote store rejected a read or write; message comes from the store."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage error"


class ServerError(SiteError):
    """Unexpected failure. The caller only ever sees the generic message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"
