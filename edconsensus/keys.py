"""Ed25519 signing and verification keys."""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from .curve import (
    BASEPOINT,
    L,
    EdwardsPoint,
    clamp_scalar,
    decompress,
    multiscalar_mul,
    scalar_from_canonical_bytes,
    scalar_from_hash,
)
from .errors import InvalidSignature, InvalidSliceLength, MalformedPublicKey
from .signature import Signature

BytesLike = Union[bytes, bytearray, memoryview]
RandomSource = Callable[[int], bytes]


def _exact(data: BytesLike, size: int) -> bytes:
    data = bytes(data)
    if len(data) != size:
        raise InvalidSliceLength()
    return data


@dataclass(frozen=True, order=True)
class VerificationKeyBytes:
    """The 32-byte encoding of a verification key, not yet checked to be a point."""

    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _exact(self.data, 32))

    @classmethod
    def from_bytes(cls, data: BytesLike) -> VerificationKeyBytes:
        """Wrap a 32-byte encoding; raises InvalidSliceLength otherwise."""
        return cls(_exact(data, 32))

    def to_bytes(self) -> bytes:
        """Return the 32-byte encoding."""
        return self.data

    def __bytes__(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return f"VerificationKeyBytes({self.data.hex()})"


@dataclass(frozen=True, order=True)
class VerificationKey:
    """A valid Ed25519 verification key holding its decompressed point.

    Any encoding of a curve point is accepted, including non-canonical ones.
    """

    a_bytes: VerificationKeyBytes
    minus_a: EdwardsPoint = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        a_bytes = self.a_bytes
        if not isinstance(a_bytes, VerificationKeyBytes):
            a_bytes = VerificationKeyBytes.from_bytes(a_bytes)
            object.__setattr__(self, "a_bytes", a_bytes)
        point = decompress(a_bytes.data)
        if point is None:
            raise MalformedPublicKey()
        object.__setattr__(self, "minus_a", -point)

    @classmethod
    def from_bytes(
        cls, data: Union[BytesLike, VerificationKeyBytes]
    ) -> VerificationKey:
        """Decode a verification key from 32 bytes or a VerificationKeyBytes."""
        if isinstance(data, VerificationKeyBytes):
            return cls(data)
        return cls(VerificationKeyBytes.from_bytes(data))

    def to_bytes(self) -> bytes:
        """Return the 32-byte encoding, exactly as it was supplied."""
        return self.a_bytes.data

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __repr__(self) -> str:
        return f"VerificationKey({self.a_bytes.data.hex()})"

    def verify(self, signature: Signature, msg: bytes) -> None:
        """Check ``signature`` on ``msg`` under the ZIP215 rules.

        Raises InvalidSignature when the signature does not verify.
        """
        k = scalar_from_hash(signature.r_bytes, self.a_bytes.data, bytes(msg))
        self.verify_prehashed(signature, k)

    def verify_prehashed(self, signature: Signature, k: int) -> None:
        """Check a signature given the already computed challenge scalar ``k``."""
        s = scalar_from_canonical_bytes(signature.s_bytes)
        if s is None:
            raise InvalidSignature()
        r = decompress(signature.r_bytes)
        if r is None:
            raise InvalidSignature()
        # R' = [s]B - [k]A; accept when [8](R - R') is the identity.
        r_prime = multiscalar_mul([k, s], [self.minus_a, BASEPOINT])
        if not (r - r_prime).mul_by_cofactor().is_identity():
            raise InvalidSignature()


class SigningKey:
    """An Ed25519 signing key, also known as a secret key."""

    __slots__ = ("_seed", "_s", "_prefix", "_vk")

    def __init__(self, seed: BytesLike) -> None:
        seed = _exact(seed, 32)
        h = hashlib.sha512(seed).digest()
        self._seed = seed
        self._s = clamp_scalar(h[:32])
        self._prefix = h[32:]
        point = BASEPOINT * self._s
        self._vk = VerificationKey(VerificationKeyBytes(point.compress()))

    @classmethod
    def generate(cls, rng: Optional[object] = None) -> SigningKey:
        """Create a key from 32 random bytes.

        ``rng`` may be a callable returning n bytes, an object with a
        ``randbytes`` method, or None for the system's secure source.
        """
        if rng is None:
            seed = secrets.token_bytes(32)
        elif hasattr(rng, "randbytes"):
            seed = rng.randbytes(32)
        elif callable(rng):
            seed = rng(32)
        else:
            raise TypeError("rng must be callable or provide randbytes()")
        return cls(seed)

    @classmethod
    def from_bytes(cls, data: BytesLike) -> SigningKey:
        """Build a key from its 32-byte seed; raises InvalidSliceLength otherwise."""
        return cls(data)

    def to_bytes(self) -> bytes:
        """Return the 32-byte seed."""
        return self._seed

    def __bytes__(self) -> bytes:
        return self._seed

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SigningKey):
            return NotImplemented
        return secrets.compare_digest(self._seed, other._seed)

    def __hash__(self) -> int:
        return hash(self._vk)

    def __repr__(self) -> str:
        return f"SigningKey(vk={self._vk.a_bytes.data.hex()})"

    def verification_key(self) -> VerificationKey:
        """Return the verification key for this signing key."""
        return self._vk

    def verification_key_bytes(self) -> VerificationKeyBytes:
        """Return the encoded verification key for this signing key."""
        return self._vk.a_bytes

    def sign(self, msg: bytes) -> Signature:
        """Create a signature on ``msg``."""
        msg = bytes(msg)
        r = scalar_from_hash(self._prefix, msg)
        r_bytes = (BASEPOINT * r).compress()
        k = scalar_from_hash(r_bytes, self._vk.a_bytes.data, msg)
        s = (r + k * self._s) % L
        return Signature(r_bytes, s.to_bytes(32, "little"))