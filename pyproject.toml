[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brinecrypt"
version = "0.1.0"
description = "Pure-Python BLAKE2b, Argon2, HMAC-SHA512-256, HChaCha20/HSalsa20 and BLAKE2b key derivation"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "cryptography",
    "blake2b",
    "argon2",
    "hmac",
    "sha512",
    "hchacha20",
    "hsalsa20",
    "kdf",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["brinecrypt"]

[tool.hatch.build.targets.sdist]
include = ["brinecrypt", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
