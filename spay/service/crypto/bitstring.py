"""
Bit-String Codec.

Key material for the gateway is distributed as text made of binary digits
rather than raw bytes or hex. This module turns that text into bytes.
"""

from spay.domain.entities.secret import SharedSecret
from spay.domain.exceptions import FormatError

_BINARY_DIGITS = frozenset("01")


def parse_bitstring(bits: str) -> bytes:
    """
    Convert a big-endian string of binary digits to bytes.

    The string is consumed from its least-significant end in groups of
    eight digits; the leading group may be shorter and is parsed as-is.
    The result is always ``ceil(len(bits) / 8)`` bytes long.

    Args:
        bits: Text made only of '0' and '1'

    Returns:
        The decoded bytes, most significant first

    Raises:
        FormatError: If any character is not a binary digit
    """
    for position, char in enumerate(bits):
        if char not in _BINARY_DIGITS:
            raise FormatError(
                f"invalid binary digit {char!r} at position {position}",
                position=position,
            )

    out = bytearray()
    end = len(bits)
    while end > 0:
        start = max(end - 8, 0)
        out.insert(0, int(bits[start:end], 2))
        end = start
    return bytes(out)


def to_bitstring(data: bytes) -> str:
    """Render bytes as binary digits, eight per byte."""
    return "".join(format(byte, "08b") for byte in data)


def load_shared_secret(key_bits: str, iv_bits: str) -> SharedSecret:
    """
    Materialise the shared secret from configured bit-strings.

    Raises:
        FormatError: If either bit-string is malformed
        CipherInitError: If the key or IV has the wrong length
    """
    return SharedSecret(key=parse_bitstring(key_bits), iv=parse_bitstring(iv_bits))
