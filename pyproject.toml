[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ksecp"
version = "0.1.0"
description = "Pure-Python secp256k1 arithmetic: ECDSA signing and verification, DER signatures, public key encoding and key tweaks"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "secp256k1",
    "ecdsa",
    "elliptic-curve",
    "cryptography",
    "signature",
    "rfc6979",
    "hmac",
    "sha256",
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
packages = ["ksecp"]

[tool.hatch.build.targets.sdist]
include = ["ksecp", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
