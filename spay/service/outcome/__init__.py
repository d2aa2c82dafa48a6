"""
Response classification for gateway exchanges.
"""

from .classifier import (
    classify,
    decode_json_payload,
    format_debug_error,
    is_success_status,
)

__all__ = [
    "classify",
    "decode_json_payload",
    "format_debug_error",
    "is_success_status",
]
