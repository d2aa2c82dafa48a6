"""Application services (use cases)."""

from .spay_service import SpayService

__all__ = [
    "SpayService",
]
