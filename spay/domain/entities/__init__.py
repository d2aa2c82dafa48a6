"""Domain Entities - Gateway results and call descriptions."""

from .bank import Bank
from .enquiry import NameEnquiryResult
from .inflow import (
    AccountInflow,
    AccountInflowListing,
    InflowListing,
    InflowNotification,
)
from .operation import (
    ENQUIRY_SUCCESS_CODE,
    OPERATION_SUCCESSFUL,
    TRANSFER_SUCCESS,
    GatewayCall,
    RequestType,
    SuccessSentinel,
)
from .outcome import ClassifiedOutcome, Success
from .secret import BLOCK_SIZE, KEY_SIZE, SharedSecret
from .transfer import TransferResult

__all__ = [
    "Bank",
    "NameEnquiryResult",
    "AccountInflow",
    "AccountInflowListing",
    "InflowListing",
    "InflowNotification",
    "ENQUIRY_SUCCESS_CODE",
    "OPERATION_SUCCESSFUL",
    "TRANSFER_SUCCESS",
    "GatewayCall",
    "RequestType",
    "SuccessSentinel",
    "ClassifiedOutcome",
    "Success",
    "BLOCK_SIZE",
    "KEY_SIZE",
    "SharedSecret",
    "TransferResult",
]
