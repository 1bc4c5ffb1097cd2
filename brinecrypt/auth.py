"""High-level secret-key message authentication (HMAC-SHA512-256)."""

from __future__ import annotations

import hmac

from .blake2b import CryptoError
from .crypto_auth import (
    CRYPTO_AUTH_BYTES,
    CRYPTO_AUTH_KEYBYTES,
    AuthState,
    crypto_auth,
    crypto_auth_keygen,
    crypto_auth_verify,
)

__all__ = ["Auth", "CRYPTO_AUTH_BYTES", "CRYPTO_AUTH_KEYBYTES"]


class Auth:
    """Secret-key authenticator with incremental and one-shot interfaces."""

    def __init__(self, key: bytes) -> None:
        self._state = AuthState(key)

    def update(self, data: bytes) -> None:
        """Absorb ``data`` into the authenticator."""
        self._state.update(data)

    def finalize(self) -> bytes:
        """Return the authentication code for everything absorbed."""
        return self._state.finalize()

    def verify(self, mac: bytes) -> None:
        """Finalize and raise CryptoError unless the code equals ``mac``."""
        computed = self.finalize()
        if not hmac.compare_digest(bytes(mac), computed):
            raise CryptoError("authentication codes do not match")

    @classmethod
    def compute(cls, key: bytes, data: bytes) -> bytes:
        """Return the authentication code for ``data`` under ``key``."""
        return crypto_auth(data, key)

    @classmethod
    def compute_and_verify(cls, mac: bytes, key: bytes, data: bytes) -> None:
        """Raise CryptoError unless ``mac`` authenticates ``data`` under ``key``."""
        crypto_auth_verify(mac, data, key)

    @classmethod
    def generate_key(cls) -> bytes:
        """Generate a random key suitable for this authenticator."""
        return crypto_auth_keygen()