"""Data Transfer Objects for application layer."""

from .transfer import InterBankTransferRequest, IntraBankTransferRequest

__all__ = [
    "InterBankTransferRequest",
    "IntraBankTransferRequest",
]
