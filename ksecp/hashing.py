"""SHA-256, HMAC-SHA256 and the RFC 6979 HMAC-SHA256 generator."""

from __future__ import annotations

import hashlib
import hmac

_BLOCK_SIZE = 64
_DIGEST_SIZE = 32


class Sha256:
    """Incremental SHA-256 hash that can be finalized once."""

    def __init__(self) -> None:
        self._state = hashlib.sha256()
        self._finished = False

    def write(self, data: bytes) -> None:
        """Feed more bytes into the hash."""
        if self._finished:
            raise ValueError("hash already finalized")
        self._state.update(data)

    def finalize(self) -> bytes:
        """Return the 32-byte digest; the object cannot be used afterwards."""
        if self._finished:
            raise ValueError("hash already finalized")
        self._finished = True
        digest = self._state.digest()
        self._state = None
        return digest


class HmacSha256:
    """Incremental HMAC-SHA256 that can be finalized once."""

    def __init__(self, key: bytes) -> None:
        # Keys longer than one block are hashed first, as HMAC prescribes.
        self._mac = hmac.new(bytes(key), digestmod=hashlib.sha256)
        self._finished = False

    def write(self, data: bytes) -> None:
        """Feed more message bytes."""
        if self._finished:
            raise ValueError("HMAC already finalized")
        self._mac.update(data)

    def finalize(self) -> bytes:
        """Return the 32-byte MAC; the object cannot be used afterwards."""
        if self._finished:
            raise ValueError("HMAC already finalized")
        self._finished = True
        tag = self._mac.digest()
        self._mac = None
        return tag


def sha256(data: bytes) -> bytes:
    """Return the SHA-256 digest of ``data``."""
    hasher = Sha256()
    hasher.write(data)
    return hasher.finalize()


def hmac_sha256(key: bytes, data: bytes) -> bytes:
    """Return the HMAC-SHA256 of ``data`` under ``key``."""
    mac = HmacSha256(key)
    mac.write(data)
    return mac.finalize()


class Rfc6979HmacSha256:
    """The HMAC-SHA256 deterministic generator of RFC 6979, section 3.2."""

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        self._v = b"\x01" * _DIGEST_SIZE
        self._k = b"\x00" * _DIGEST_SIZE
        for marker in (b"\x00", b"\x01"):
            self._k = hmac_sha256(self._k, self._v + marker + key)
            self._v = hmac_sha256(self._k, self._v)
        self._retry = False

    def generate(self, outlen: int) -> bytes:
        """Return ``outlen`` pseudo-random bytes."""
        if outlen < 0:
            raise ValueError("output length must not be negative")
        if self._retry:
            self._k = hmac_sha256(self._k, self._v + b"\x00")
            self._v = hmac_sha256(self._k, self._v)
        chunks = []
        remaining = outlen
        while remaining > 0:
            self._v = hmac_sha256(self._k, self._v)
            now = min(remaining, _DIGEST_SIZE)
            chunks.append(self._v[:now])
            remaining -= now
        self._retry = True
        return b"".join(chunks)

    def finalize(self) -> None:
        """Wipe the generator state."""
        self._k = b"\x00" * _DIGEST_SIZE
        self._v = b"\x00" * _DIGEST_SIZE
        self._retry = False