"""Pure-Python BLAKE2b, Argon2, SHA-512, HMAC-SHA512-256, HChaCha20/HSalsa20 and key derivation."""

__version__ = "0.1.0"

__all__ = [
    "argon2",
    "auth",
    "blake2b",
    "core",
    "crypto_auth",
    "generichash",
    "hashing",
    "kdf",
]