# ksecp

A self-contained, pure-Python implementation of the arithmetic behind
secp256k1 ECDSA. It has no third-party dependencies.

Secret keys, nonces, messages and signature values are plain Python
integers below the group order. Public keys are `Point` objects.

## Installation

```
pip install ksecp
```

## Modules

| Module | Contents |
| --- | --- |
| `ksecp.hashing` | `Sha256`, `HmacSha256`, `Rfc6979HmacSha256`, `sha256`, `hmac_sha256` |
| `ksecp.curve` | `Point`, `GENERATOR`, `INFINITY`, `FIELD_P`, `ORDER`, `odd_multiples_table`, `ecmult_wnaf`, `EcmultContext` (computes `na*P + ng*G`) |
| `ksecp.ecmult_gen` | `EcmultGenContext` (blinded `n*G` from a 64x16 table) |
| `ksecp.ecmult_const` | `wnaf_const`, `ecmult_const` (`n*P` with a fixed sequence of steps) |
| `ksecp.ecdsa` | `sig_sign`, `sig_verify`, `sig_parse` and `sig_serialize` for DER, `SignatureError` |
| `ksecp.eckey` | `pubkey_parse`, `pubkey_serialize`, `privkey_tweak_add`, `pubkey_tweak_add`, `privkey_tweak_mul`, `pubkey_tweak_mul`, `EcKeyError` |
| `ksecp.testrand` | `TestRandom`, a seeded source of reproducible test data |

## Usage

### Contexts

There are two contexts.

- `EcmultGenContext` multiplies the generator. Signing and key derivation use it.
- `EcmultContext` computes `na*P + ng*G`. Verification and public-key tweaks use it.

Both must be built with `build()` before use, and both are slow to build. Build
each once and reuse it. Call `EcmultGenContext.blind(seed32)` with 32 random
bytes to refresh the blinding offset. `blind(None)` resets it. Both contexts
offer `clone()`, `clear()` and `is_built()`.

A context that has not been built raises `RuntimeError`.

### Signing and verifying

```python
from ksecp.curve import ORDER, EcmultContext
from ksecp.ecmult_gen import EcmultGenContext
from ksecp.ecdsa import sig_parse, sig_serialize, sig_sign, sig_verify
from ksecp.eckey import pubkey_parse, pubkey_serialize
from ksecp.hashing import Rfc6979HmacSha256, sha256

gen = EcmultGenContext()
gen.build()
ctx = EcmultContext()
ctx.build()

seckey = int.from_bytes(bytes(range(1, 33)), "big")
pubkey = gen.multiply(seckey)

msg32 = sha256(b"hello")
message = int.from_bytes(msg32, "big") % ORDER

rng = Rfc6979HmacSha256(seckey.to_bytes(32, "big") + msg32)
nonce = int.from_bytes(rng.generate(32), "big")  # draw again if 0 or >= ORDER

r, s, recid = sig_sign(gen, seckey, message, nonce)
der = sig_serialize(r, s)
assert sig_parse(der) == (r, s)
assert sig_verify(ctx, r, s, pubkey, message)

encoded = pubkey_serialize(pubkey, True)  # 33 bytes; False gives 65
assert pubkey_parse(encoded) == pubkey
```

Notes on signing and verification:

- `sig_sign` always returns `s` in lower-S form. It adjusts the recovery id
  `recid` (0 to 3) to match.
- `sig_verify` accepts high `s` values as well.
- `sig_parse` accepts only strict DER. A number in the encoding that is negative
  or not below the group order is returned as 0, and no verification accepts 0.

### Public keys and tweaks

`pubkey_parse` reads three encodings:

- compressed: 33 bytes, prefix `02` or `03`
- uncompressed: 65 bytes, prefix `04`
- hybrid: 65 bytes, prefix `06` or `07`

The tweak functions each return a new key:

- `privkey_tweak_add(key, tweak)` adds the tweak to a secret key, modulo the order.
- `privkey_tweak_mul(key, tweak)` multiplies a secret key by the tweak.
- `pubkey_tweak_add(ctx, point, tweak)` returns `point + tweak*G`.
- `pubkey_tweak_mul(ctx, point, tweak)` returns `tweak*point`.

### Errors

- A key that cannot be parsed raises `EcKeyError`.
- A tweak that would give a zero key or the point at infinity raises `EcKeyError`.
- A zero multiplicative tweak raises `EcKeyError`.
- A malformed DER signature raises `SignatureError`.
- A scalar outside `[0, ORDER)` raises `ValueError`.

`EcKeyError` and `SignatureError` are both subclasses of `ValueError`.

### Hashing

```python
from ksecp.hashing import Sha256, sha256, hmac_sha256

digest = sha256(b"abc")
assert digest.hex() == (
    "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
)

h = Sha256()
h.write(b"a")
h.write(b"bc")
assert h.finalize() == digest

mac = hmac_sha256(b"key", b"message")
```

`Rfc6979HmacSha256(key).generate(n)` yields the deterministic byte stream of
RFC 6979, section 3.2.

## What this package does not do

This package provides the curve arithmetic and the ECDSA primitives. It does not include:

- **No high-level byte-oriented API.** Nothing takes 32-byte secret keys and
  messages and chooses the nonce for you. The caller derives the nonce, for
  example with `Rfc6979HmacSha256`.
- **No compact encoding.** There is no 64-byte compact signature encoding and no
  separate lower-S normalization step.
- **No public key recovery.** There is no recovery of a public key from a
  signature, even though `sig_sign` returns a recovery id.
- **No key combination or negation helpers.** Public keys cannot be added
  together in one call, and secret or public keys cannot be negated in one call.
- **No command-line tool.** The package installs no commands and includes no
  benchmark command.

## Running the tests

```
pip install "ksecp[test]"
pytest
```