"""
Secure transport envelope: bit-string key material and Triple-DES CBC.
"""

from .bitstring import load_shared_secret, parse_bitstring, to_bitstring
from .envelope import pad, encrypt, decrypt

__all__ = [
    "load_shared_secret",
    "parse_bitstring",
    "to_bitstring",
    "pad",
    "encrypt",
    "decrypt",
]
