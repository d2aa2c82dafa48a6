"""Cipher envelope exceptions."""

from .base import SpayException


class CipherInitError(SpayException):
    """Raised when the key or IV cannot initialise the block cipher."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="CIPHER_INIT_ERROR",
        )


class DecodeError(SpayException):
    """
    Raised when a payload is not valid base64 or not the expected JSON.

    When the payload came from an HTTP response the status code and raw
    body are kept for diagnostics.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: bytes = b"",
    ):
        super().__init__(
            message=message,
            code="DECODE_ERROR",
        )
        self.status_code = status_code
        self.body = body


class LengthError(SpayException):
    """Raised when a ciphertext is not a whole, non-empty number of blocks."""

    def __init__(self, message: str, length: int):
        super().__init__(
            message=message,
            code="CIPHERTEXT_LENGTH_ERROR",
        )
        self.length = length
