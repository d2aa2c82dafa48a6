"""Base SPay exception."""


class SpayException(Exception):
    """
    Base exception for all SPay client errors.

    Every error raised by the client carries a human readable message and
    a stable code callers can branch on.
    """

    def __init__(self, message: str, code: str = "SPAY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)
