"""Fingerprint value type.

A fingerprint is an opaque 32-byte SHA-256 digest. Callers store ``hex()``
next to a lock record and later check a freshly computed fingerprint
against it with ``matches()``.
"""

import binascii
import hmac
from typing import Union

from solvehash.primitives.errors import FingerprintError

DIGEST_SIZE = 32


class Fingerprint:
    """Immutable digest of solve inputs with value equality."""

    __slots__ = ("_digest",)

    def __init__(self, digest: bytes):
        """Wrap a raw digest.

        Args:
            digest: Exactly 32 bytes.

        Raises:
            FingerprintError: If digest is not 32 bytes.
        """
        if not isinstance(digest, (bytes, bytearray, memoryview)):
            raise FingerprintError(
                f"Fingerprint must be bytes (got {type(digest).__name__})"
            )
        digest = bytes(digest)
        if len(digest) != DIGEST_SIZE:
            raise FingerprintError(
                f"Fingerprint must be {DIGEST_SIZE} bytes (got {len(digest)})"
            )
        object.__setattr__(self, "_digest", digest)

    def __setattr__(self, name, value):
        raise AttributeError("Fingerprint is immutable")

    @classmethod
    def from_bytes(cls, digest: bytes) -> "Fingerprint":
        return cls(digest)

    @classmethod
    def from_hex(cls, text: str) -> "Fingerprint":
        """Parse a stored hex digest.

        Raises:
            FingerprintError: If text is not valid hex of the right length.
        """
        try:
            digest = binascii.unhexlify(text.strip())
        except (binascii.Error, ValueError, AttributeError) as e:
            raise FingerprintError(f"Invalid fingerprint hex: {e}", cause=e)
        return cls(digest)

    @property
    def digest(self) -> bytes:
        return self._digest

    def hex(self) -> str:
        return self._digest.hex()

    def matches(self, stored: Union["Fingerprint", bytes, str, None]) -> bool:
        """Compare against a stored fingerprint.

        Args:
            stored: Fingerprint, raw digest bytes, or hex string. None (no
                stored fingerprint) never matches.

        Returns:
            True if the digests are byte-identical.

        Raises:
            FingerprintError: If stored is malformed.
        """
        if stored is None:
            return False
        if isinstance(stored, str):
            stored = Fingerprint.from_hex(stored)
        elif not isinstance(stored, Fingerprint):
            stored = Fingerprint(stored)
        return hmac.compare_digest(self._digest, stored._digest)

    def __bytes__(self) -> bytes:
        return self._digest

    def __len__(self) -> int:
        return DIGEST_SIZE

    def __eq__(self, other) -> bool:
        if isinstance(other, Fingerprint):
            return self._digest == other._digest
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._digest)

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Fingerprint({self.hex()[:16]}…)"
