"""
Block Cipher Envelope.

Requests to the gateway travel as base64 text of a Triple-DES CBC
ciphertext. Plaintext is always padded with at least one byte, every pad
byte carrying the pad length. ``decrypt`` returns the full decrypted
buffer, pad bytes included.
"""

import base64
import binascii

from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives.ciphers import Cipher, modes

from spay.domain.entities.secret import BLOCK_SIZE, KEY_SIZE
from spay.domain.exceptions import CipherInitError, DecodeError, LengthError


def pad(data: bytes) -> bytes:
    """Pad to a whole number of blocks, adding a full block when aligned."""
    pad_length = BLOCK_SIZE - len(data) % BLOCK_SIZE
    return data + bytes([pad_length]) * pad_length


def _cipher(key: bytes, iv: bytes) -> Cipher:
    if len(key) != KEY_SIZE:
        raise CipherInitError(
            f"new tripledes cipher: invalid key size {len(key)}"
        )
    try:
        return Cipher(TripleDES(key), modes.CBC(iv))
    except ValueError as e:
        raise CipherInitError(f"new tripledes cipher: {e}") from e


def encrypt(plaintext: str | bytes, key: bytes, iv: bytes) -> str:
    """
    Pad, encrypt and base64-encode a plaintext.

    Args:
        plaintext: Text (UTF-8 encoded) or raw bytes
        key: 24-byte Triple-DES key
        iv: 8-byte initialisation vector

    Returns:
        Standard base64 of the ciphertext

    Raises:
        CipherInitError: If the key or IV is invalid
    """
    if isinstance(plaintext, str):
        plaintext = plaintext.encode("utf-8")

    encryptor = _cipher(key, iv).encryptor()
    ciphertext = encryptor.update(pad(plaintext)) + encryptor.finalize()
    return base64.b64encode(ciphertext).decode("ascii")


def decrypt(payload: str | bytes, key: bytes, iv: bytes) -> bytes:
    """
    Base64-decode and decrypt a ciphertext without removing padding.

    Raises:
        DecodeError: If the payload is not valid base64
        CipherInitError: If the key or IV is invalid
        LengthError: If the ciphertext is empty or not block aligned
    """
    if isinstance(payload, str):
        payload = payload.encode("ascii", errors="replace")

    try:
        ciphertext = base64.b64decode(payload.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"base64 decoding: {e}") from e

    cipher = _cipher(key, iv)

    if len(ciphertext) < BLOCK_SIZE:
        raise LengthError("ciphertext too short", length=len(ciphertext))
    if len(ciphertext) % BLOCK_SIZE != 0:
        raise LengthError(
            "ciphertext is not a multiple of the block size",
            length=len(ciphertext),
        )

    decryptor = cipher.decryptor()
    return decryptor.update(ciphertext) + decryptor.finalize()
