"""
Outcome Classifier.

Decides, from the HTTP status and raw body alone, whether a gateway
exchange failed in transport, failed a business rule, or succeeded.
Endpoint-specific shapes are left to the caller's decoder.
"""

import json
from http import HTTPStatus
from typing import Any, Dict

from spay.domain.entities import ClassifiedOutcome, Success
from spay.domain.exceptions import (
    DecodeError,
    TransportError,
    business_error_for,
)

_DEBUG_FIELDS = ("ExceptionMessage", "ExceptionType", "StackTrace")


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code <= 299


def _reason(status_code: int) -> str:
    try:
        return f"{status_code} {HTTPStatus(status_code).phrase}"
    except ValueError:
        return str(status_code)


def decode_json_payload(body: bytes | str) -> Dict[str, Any]:
    """
    Decode a JSON object, ignoring anything after it.

    Decrypted responses still carry their pad bytes, so trailing non-JSON
    bytes are tolerated.

    Raises:
        DecodeError: If the body does not start with a JSON object
    """
    if isinstance(body, bytes):
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"json decoding: {e}", body=body) from e
    else:
        text = body

    try:
        payload, _ = json.JSONDecoder().raw_decode(text.lstrip())
    except json.JSONDecodeError as e:
        raise DecodeError(f"json decoding: {e}", body=text.encode("utf-8")) from e

    if not isinstance(payload, dict):
        raise DecodeError(
            f"json decoding: expected an object, got {type(payload).__name__}",
            body=text.encode("utf-8"),
        )
    return payload


def format_debug_error(payload: Dict[str, Any]) -> str:
    """Render the server's exception envelope."""
    return "message: {}, exception: {}, type: {}, stack: {}".format(
        payload.get("Message", ""),
        payload.get("ExceptionMessage", ""),
        payload.get("ExceptionType", ""),
        payload.get("StackTrace", ""),
    )


def classify(
    status_code: int,
    body: bytes,
    reason: str | None = None,
) -> ClassifiedOutcome:
    """
    Classify a raw gateway response.

    Args:
        status_code: HTTP status code
        body: Raw response body
        reason: Status line text; derived from the code when omitted

    Returns:
        ``Success`` for 2xx responses, otherwise a ``TransportError`` or a
        ``BusinessError`` (the recognised subclass when the response code
        is in the registry)

    Raises:
        DecodeError: If a non-2xx body is present but is not a JSON object
    """
    if is_success_status(status_code):
        return Success(status_code=status_code, payload=body)

    status_text = reason or _reason(status_code)

    if not body:
        return TransportError(
            message=f"empty response received: {status_text}",
            status_code=status_code,
        )

    try:
        payload = decode_json_payload(body)
    except DecodeError as e:
        raise DecodeError(
            f"could not decode error response: {e.message}",
            status_code=status_code,
            body=body,
        ) from e

    if "response" not in payload and any(f in payload for f in _DEBUG_FIELDS):
        return TransportError(
            message=format_debug_error(payload),
            status_code=status_code,
            body=body,
        )

    data = payload.get("data")
    if not isinstance(data, dict):
        data = {}

    response_code = payload.get("response")
    response_text = data.get("ResponseText")
    return business_error_for(
        response_code="" if response_code is None else str(response_code),
        response_text="" if response_text is None else str(response_text),
        message=payload.get("message") or "",
        status=data.get("status"),
        status_code=status_code,
    )
