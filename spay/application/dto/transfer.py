"""Data transfer objects for transfer operations."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List


def _is_positive_amount(value) -> bool:
    try:
        return Decimal(str(value)) > 0
    except (InvalidOperation, ValueError):
        return False


@dataclass(frozen=True)
class InterBankTransferRequest:
    """
    Input data for a transfer to another bank.

    ``name_enquiry_session_id`` and ``name_enquiry_response`` come from the
    interbank name enquiry that must precede the transfer.
    """

    to_account: str
    amount: str
    destination_bank_code: str
    name_enquiry_session_id: str
    beneficiary_name: str = ""
    name_enquiry_response: str = ""
    payment_reference: str = ""
    reference: str = ""
    translocation: str = ""
    teller_id: str = ""
    remarks: str = ""

    def validate(self) -> List[str]:
        errors = []

        if not self.to_account or not self.to_account.strip():
            errors.append("to_account is required")

        if not self.destination_bank_code or not self.destination_bank_code.strip():
            errors.append("destination_bank_code is required")

        if not self.name_enquiry_session_id:
            errors.append("name_enquiry_session_id is required")

        if not _is_positive_amount(self.amount):
            errors.append("amount must be a positive number")

        return errors


@dataclass(frozen=True)
class IntraBankTransferRequest:
    """Input data for a transfer between two accounts of the same bank."""

    to_account: str
    amount: Decimal | float | str
    payment_reference: str = ""
    remarks: str = ""
    reference_id: str = ""
    translocation: str = ""
    teller_id: str = ""

    def validate(self) -> List[str]:
        errors = []

        if not self.to_account or not self.to_account.strip():
            errors.append("to_account is required")

        if not _is_positive_amount(self.amount):
            errors.append("amount must be a positive number")

        return errors
