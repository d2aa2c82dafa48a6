"""Bit-string codec exceptions."""

from .base import SpayException


class FormatError(SpayException):
    """Raised when a bit-string contains anything but binary digits."""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(
            message=message,
            code="BITSTRING_FORMAT_ERROR",
        )
        self.position = position
