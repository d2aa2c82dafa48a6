"""
Unit Tests for the Outcome Classifier and success sentinels.

These tests verify:
1. Non-2xx responses become transport or business errors
2. Recognised response codes map to their dedicated errors
3. 2xx payloads are handed on untouched
4. Sentinel mismatches become business errors carrying the embedded message
"""

import json

import pytest

from spay.domain.entities import (
    ENQUIRY_SUCCESS_CODE,
    OPERATION_SUCCESSFUL,
    TRANSFER_SUCCESS,
    Success,
)
from spay.domain.exceptions import (
    AccountNotAllowedError,
    BusinessError,
    DecodeError,
    ErrorCode,
    InsufficientFundsError,
    TransportError,
)
from spay.service.outcome import classify, decode_json_payload


def body(payload: dict) -> bytes:
    return json.dumps(payload).encode("utf-8")


# =============================================================================
# Non-2xx Responses
# =============================================================================

class TestErrorClassification:
    """Tests for classify on non-2xx responses."""

    def test_empty_body_is_transport_error(self):
        outcome = classify(503, b"")

        assert isinstance(outcome, TransportError)
        assert outcome.status_code == 503
        assert "503 Service Unavailable" in outcome.message

    def test_empty_body_uses_given_reason(self):
        outcome = classify(502, b"", "502 Upstream Gone")

        assert "502 Upstream Gone" in outcome.message

    def test_insufficient_funds_sentinel(self):
        outcome = classify(
            503,
            b'{"response":"x51","data":{"ResponseText":"Insufficient Funds"}}',
        )

        assert isinstance(outcome, InsufficientFundsError)
        assert outcome == InsufficientFundsError()
        assert outcome.matches(ErrorCode.INSUFFICIENT_FUNDS)
        assert outcome.error_code is ErrorCode.INSUFFICIENT_FUNDS
        assert outcome.status_code == 503

    def test_account_not_allowed_sentinel(self):
        outcome = classify(
            400,
            body({"response": "03x", "data": {"ResponseText": "nope", "status": 3}}),
        )

        assert isinstance(outcome, AccountNotAllowedError)
        assert outcome.response_text == "nope"
        assert outcome.status == 3

    def test_unrecognised_code_is_plain_business_error(self):
        outcome = classify(
            400,
            body({"message": "failed", "response": "99", "data": {"ResponseText": "Unknown"}}),
        )

        assert type(outcome) is BusinessError
        assert outcome.response_code == "99"
        assert outcome.error_code is None
        assert outcome.gateway_message == "failed"

    def test_debug_envelope_is_transport_error(self):
        outcome = classify(
            500,
            body({
                "Message": "An error has occurred.",
                "ExceptionMessage": "Object reference not set",
                "ExceptionType": "System.NullReferenceException",
                "StackTrace": "at Spay.Controller",
            }),
        )

        assert isinstance(outcome, TransportError)
        assert "System.NullReferenceException" in outcome.message

    def test_unparseable_error_body_is_decode_error(self):
        with pytest.raises(DecodeError) as exc_info:
            classify(500, b"<html>Bad Gateway</html>")

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == b"<html>Bad Gateway</html>"

    def test_non_object_error_body_is_decode_error(self):
        with pytest.raises(DecodeError):
            classify(500, b'["x51"]')

    def test_redirect_is_not_success(self):
        outcome = classify(302, b"")

        assert isinstance(outcome, TransportError)


# =============================================================================
# 2xx Responses
# =============================================================================

class TestSuccessClassification:
    """Tests for classify on 2xx responses."""

    @pytest.mark.parametrize("status_code", [200, 201, 299])
    def test_success_carries_payload(self, status_code: int):
        outcome = classify(status_code, b'{"response":"01"}')

        assert outcome == Success(status_code=status_code, payload=b'{"response":"01"}')

    def test_success_with_sentinel_mismatch_is_business_error(self):
        outcome = classify(200, body({"message": "Transfer failed", "response": "01"}))

        failure = TRANSFER_SUCCESS.check(decode_json_payload(outcome.payload))

        assert isinstance(failure, BusinessError)
        assert failure.response_code == "01"
        assert failure.response_text == "Transfer failed"
        assert "Transfer failed" in str(failure)


# =============================================================================
# Tolerant JSON Decoding
# =============================================================================

class TestDecodeJsonPayload:
    """Decrypted payloads keep their pad bytes."""

    def test_trailing_pad_bytes_are_ignored(self):
        assert decode_json_payload(b'{"response":"00"}\x07\x07\x07\x07\x07\x07\x07') == {
            "response": "00"
        }

    def test_leading_whitespace_is_ignored(self):
        assert decode_json_payload(b'  \n{"a":1}') == {"a": 1}

    def test_garbage_is_decode_error(self):
        with pytest.raises(DecodeError):
            decode_json_payload(b"\x04\x04\x04\x04")

    def test_invalid_utf8_is_decode_error(self):
        with pytest.raises(DecodeError):
            decode_json_payload(b"\xff\xfe{}")

    def test_array_is_decode_error(self):
        with pytest.raises(DecodeError):
            decode_json_payload(b"[1, 2]")


# =============================================================================
# Success Sentinels
# =============================================================================

class TestSuccessSentinels:
    """Tests for the per-endpoint success sentinels."""

    def test_transfer_success(self):
        assert TRANSFER_SUCCESS.check({"response": "00", "message": "ok"}) is None

    def test_transfer_insufficient_funds_in_success_body(self):
        failure = TRANSFER_SUCCESS.check({"response": "x51", "message": "Insufficient Funds"})

        assert isinstance(failure, InsufficientFundsError)

    def test_enquiry_status_code(self):
        assert ENQUIRY_SUCCESS_CODE.check({"data": {"status": "00"}}) is None

    def test_enquiry_failure_uses_response_text(self):
        failure = ENQUIRY_SUCCESS_CODE.check({
            "response": "07",
            "data": {"status": "07", "ResponseText": "Invalid Account"},
        })

        assert failure.response_code == "07"
        assert failure.response_text == "Invalid Account"
        assert failure.status == "07"

    def test_operation_successful(self):
        assert OPERATION_SUCCESSFUL.check({"data": {"status": "Successful"}}) is None

    def test_operation_failure_uses_nested_response(self):
        failure = OPERATION_SUCCESSFUL.check({
            "response": "96",
            "data": {"status": "Failed", "response": "System malfunction"},
        })

        assert failure.response_text == "System malfunction"

    def test_missing_data_is_a_failure(self):
        failure = OPERATION_SUCCESSFUL.check({"message": "no data"})

        assert failure is not None
        assert failure.status is None
        assert failure.response_text == "no data"

    def test_enquiry_failure_falls_back_to_response_code(self):
        failure = ENQUIRY_SUCCESS_CODE.check({"response": "25", "data": {"status": "25"}})

        assert failure.response_code == "25"
        assert failure.response_text == "25"

    def test_success_code_beside_failed_status_is_not_an_error_code(self):
        failure = OPERATION_SUCCESSFUL.check({
            "response": "00",
            "data": {"status": "Failed", "response": "Account is dormant"},
        })

        assert type(failure) is BusinessError
        assert failure.response_code == ""
        assert failure.status == "Failed"
        assert failure.response_text == "Account is dormant"
