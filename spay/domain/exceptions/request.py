"""Request validation exceptions."""

from .base import SpayException


class InvalidRequestException(SpayException):
    """Raised when a request DTO fails validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_REQUEST",
        )
