"""Pure-Python secp256k1: curve arithmetic, ECDSA primitives, key encoding and tweaks."""

__version__ = "0.1.0"

__all__ = [
    "curve",
    "ecdsa",
    "eckey",
    "ecmult_const",
    "ecmult_gen",
    "hashing",
    "testrand",
]