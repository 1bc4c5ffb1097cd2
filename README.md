# brinecrypt

This package provides hashing, message authentication and key derivation
primitives written in plain Python. It depends only on the standard library.
The output matches the libsodium functions of the same names. Examples are
`crypto_generichash`, `crypto_auth` and `crypto_kdf_derive_from_key`.

## Modules

| Module | Contents |
| --- | --- |
| `brinecrypt.blake2b` | `Blake2bState`, `hash`, `longhash`, `CryptoError` |
| `brinecrypt.argon2` | `argon2_hash`, `Argon2Type` (`ARGON2I`, `ARGON2ID`), `ARGON2_VERSION_NUMBER` |
| `brinecrypt.hashing` | `crypto_hash_sha512`, `Sha512State` |
| `brinecrypt.crypto_auth` | `crypto_auth`, `crypto_auth_verify`, `crypto_auth_keygen`, `AuthState` (HMAC-SHA512-256) |
| `brinecrypt.auth` | `Auth`, a class-based interface to the same authenticator |
| `brinecrypt.core` | `crypto_core_hchacha20`, `crypto_core_hsalsa20` |
| `brinecrypt.generichash` | `crypto_generichash`, `crypto_generichash_keygen`, `GenericHashState` |
| `brinecrypt.kdf` | `crypto_kdf_keygen`, `crypto_kdf_derive_from_key` |

Every module reports invalid input by raising `brinecrypt.blake2b.CryptoError`.
This covers lengths and costs out of range, wrongly sized keys, salts or
contexts, failed verification, and finalizing a state a second time.

## Limits

- `Blake2bState(outlen=64, key=None, salt=None, personal=None)`:
  - `outlen` is 1–64 bytes.
  - `key` is at most 64 bytes.
  - `salt` and `personal` are exactly 16 bytes each.
  - `finalize(outlen=None)` can be called once.
- `longhash(data, outlen)` needs an `outlen` greater than 4.
- `argon2_hash(t_cost, m_cost, parallelism, password, salt, secret=None, ad=None, outlen=32, type_=Argon2Type.ARGON2ID)`:
  - `m_cost` is given in 1 KiB blocks and must be at least 8.
  - `t_cost` and `parallelism` must be at least 1.
  - `salt` is at least 8 bytes.
  - `outlen` is at least 16.
  - It returns the raw hash bytes.
- `crypto_generichash(data, outlen=32, key=None)` and `GenericHashState(key=None, outlen=32)`:
  - `outlen` is 16–64 bytes.
  - A key, if given, is 16–64 bytes.
- `crypto_auth`, `AuthState` and `Auth` take keys of exactly 32 bytes and
  produce 32-byte codes. Verification compares the codes in constant time.
- `crypto_kdf_derive_from_key(subkey_len, subkey_id, context, main_key)`:
  - `subkey_len` is 16–64.
  - `context` is exactly 8 bytes.
  - `main_key` is exactly 32 bytes.
  - `subkey_id` is an unsigned 64-bit integer.
- `crypto_core_hchacha20` and `crypto_core_hsalsa20` take:
  - a 16-byte input,
  - a 32-byte key,
  - an optional tuple of four 32-bit constants.

  They return 32 bytes.

## Installation

```
pip install brinecrypt
```

## Examples

Generic hashing:

```python
from brinecrypt.generichash import crypto_generichash, GenericHashState

digest = crypto_generichash(b"a string of bytes", 32, None)

state = GenericHashState(None, 32)
state.update(b"a string ")
state.update(b"of bytes")
assert state.finalize() == digest
```

Message authentication:

```python
from brinecrypt.auth import Auth

key = Auth.generate_key()
mac = Auth.compute(key, b"Data to authenticate")
Auth.compute_and_verify(mac, key, b"Data to authenticate")

verifier = Auth(key)
verifier.update(b"Data to ")
verifier.update(b"authenticate")
verifier.verify(mac)  # raises CryptoError if the codes differ
```

Key derivation:

```python
from brinecrypt.kdf import crypto_kdf_keygen, crypto_kdf_derive_from_key

main_key = crypto_kdf_keygen()
subkey = crypto_kdf_derive_from_key(32, 1, b"hello123", main_key)
```

Password hashing with Argon2id:

```python
from brinecrypt.argon2 import Argon2Type, argon2_hash

password = b"password"
digest = argon2_hash(3, 32, 4, password, b"saltsalt", None, None, 32, Argon2Type.ARGON2ID)
```

## What it does not do

- No encryption of any kind: secret-key or public-key boxes, stream ciphers
  and AEAD are not included. `core` provides only the HChaCha20 and HSalsa20
  key-derivation cores.
- No Curve25519 or other public-key operations.
- No encoded password-hash strings and no password verification helper.
  `argon2_hash` returns raw bytes.
- No command-line tool.

The code is pure Python and runs far slower than native implementations.
Argon2 with large memory costs is particularly slow.

## Running the tests

```
pip install -e ".[test]"
pytest
```