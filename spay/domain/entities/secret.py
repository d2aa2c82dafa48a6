"""Shared secret entity holding the Triple-DES key material."""

from dataclasses import dataclass, field

from spay.domain.exceptions import CipherInitError

BLOCK_SIZE = 8
KEY_SIZE = 24


@dataclass(frozen=True)
class SharedSecret:
    """
    Immutable key and initialisation vector shared with the gateway.

    The key is triple-length keying material (three 8-byte DES sub-keys)
    and the IV is exactly one cipher block. Neither value is rendered by
    ``repr``.
    """

    key: bytes = field(repr=False)
    iv: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if len(self.key) != KEY_SIZE:
            raise CipherInitError(
                f"invalid key size {len(self.key)}: expected {KEY_SIZE} bytes"
            )
        if len(self.iv) != BLOCK_SIZE:
            raise CipherInitError(
                f"invalid IV size {len(self.iv)}: expected {BLOCK_SIZE} bytes"
            )
