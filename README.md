# edconsensus

Ed25519 signing and verification with precisely specified validation rules,
so that every verifier agrees on which signatures are valid. This matters
wherever signatures decide shared state, such as in a blockchain.

Verification follows the ZIP215 rules:

* the encodings of the verification key `A` and of the signature's `R` must
  decode to points on the curve; non-canonical encodings are accepted;
* the signature's `s` must be a canonical scalar, less than the group order `l`;
* the cofactored equation `[8][s]B = [8]R + [8][k]A` must hold; the
  cofactorless equation is never used.

Because of these rules, batch verification always agrees with verifying each
signature on its own.

The package is pure Python and uses only the standard library.

## Modules

| Module                  | Contents                                                        |
|-------------------------|-----------------------------------------------------------------|
| `edconsensus.keys`      | `SigningKey`, `VerificationKey`, `VerificationKeyBytes`         |
| `edconsensus.signature` | `Signature`                                                     |
| `edconsensus.batch`     | `Item`, `Verifier` for batch verification                       |
| `edconsensus.errors`    | `Ed25519Error` and its subclasses                               |
| `edconsensus.curve`     | `EdwardsPoint`, point decoding and scalar helpers               |

## Signing and verifying

```python
import os

from edconsensus.errors import InvalidSignature
from edconsensus.keys import SigningKey

signing_key = SigningKey.from_bytes(os.urandom(32))
verification_key = signing_key.verification_key()

msg = b"ed25519 message"
signature = signing_key.sign(msg)

verification_key.verify(signature, msg)  # returns None when valid

try:
    verification_key.verify(signature, b"another message")
except InvalidSignature:
    print("rejected")
```

`SigningKey.generate(rng)` creates a key from 32 random bytes. `rng` may be
a callable that returns `n` bytes when called with `n`, an object with a
`randbytes` method (such as `random.Random`), or `None` to use the system's
secure source.

Signing is deterministic: the same seed and message always give the same
signature, as specified for Ed25519.

## Encodings

Every type converts to and from its fixed-length byte encoding, with
`from_bytes`, `to_bytes` and `bytes(...)`:

```python
from edconsensus.keys import SigningKey, VerificationKey, VerificationKeyBytes
from edconsensus.signature import Signature

seed = signing_key.to_bytes()                     # 32 bytes
vk_bytes = signing_key.verification_key_bytes()   # VerificationKeyBytes
key = VerificationKey.from_bytes(vk_bytes)        # or from the 32 raw bytes
sig = Signature.from_bytes(signature.to_bytes())  # 64 bytes: R then s
```

`VerificationKeyBytes` holds an encoded key without checking it; it is
hashable and ordered by its bytes, so it is cheap to store and compare.
`VerificationKey.from_bytes` decodes the point and raises
`MalformedPublicKey` if it is not on the curve; `to_bytes` returns the
encoding exactly as supplied, even when it is non-canonical. Verification
keys compare, hash and sort by their encoding. Any 32 bytes make a valid
signing key seed. Passing bytes of the wrong length to any `from_bytes`
raises `InvalidSliceLength`.

## Errors

All errors derive from `edconsensus.errors.Ed25519Error`, itself a
`ValueError`:

| Exception            | Meaning                                          |
|----------------------|--------------------------------------------------|
| `MalformedPublicKey` | a verification key does not decode to a point    |
| `InvalidSignature`   | signature verification failed                    |
| `InvalidSliceLength` | bytes of the wrong length were parsed            |
| `MalformedSecretKey` | a malformed secret key; no operation raises it, since every 32-byte seed is accepted |

## Batch verification

A batch checks whether *all* queued signatures are valid with a single
multiscalar multiplication. Signatures made with the same verification key
are coalesced into one term, so a batch from one key does much less work
than one from distinct keys.

```python
from edconsensus.batch import Item, Verifier

verifier = Verifier()
items = []
for msg in (b"first", b"second", b"third"):
    item = Item.create(signing_key.verification_key_bytes(), signing_key.sign(msg), msg)
    items.append(item)
    verifier.queue(item)

verifier.queue((signing_key.verification_key_bytes(), signing_key.sign(b"fourth"), b"fourth"))
assert len(verifier) == 4

verifier.verify()  # raises InvalidSignature if any signature is invalid
```

`Verifier.queue` takes an `Item` or a `(key bytes, signature, message)`
tuple. `Item.create` hashes the message into the challenge scalar `k` at
once, so an item does not keep the message. `Verifier.verify(rng)` draws a
random 128-bit weight per signature from `rng` (the same kinds of source as
`SigningKey.generate`) and raises `InvalidSignature` if any signature in the
batch is invalid; an empty batch passes. A batch says only that something
failed: to find which signature, call `Item.verify_single()` on each item,
which applies exactly the same rules as `VerificationKey.verify`.

## Curve arithmetic

`edconsensus.curve` exposes the arithmetic the keys are built on:
`EdwardsPoint` (addition, negation, scalar multiplication, `compress`,
`mul_by_cofactor`, `is_identity`, `is_small_order`, `is_torsion_free`),
`decompress` (returns `None` for bytes that are not a point),
`scalar_from_hash`, `scalar_from_canonical_bytes`, `clamp_scalar`,
`multiscalar_mul`, and the constants `BASEPOINT`, `IDENTITY`,
`EIGHT_TORSION`, `P` and `L`.

## What this package does not do

* It has no command-line tool and no key storage; keys and signatures are
  handled only as bytes in your own program.
* It offers no serialization format beyond the raw byte encodings above.
* Its arithmetic is plain Python integer arithmetic: it is slow, and it is
  not constant-time, so it does not protect secret keys against timing
  side channels.

## Running the tests

From a checkout of the package:

```
pip install -e ".[test]"
pytest
```