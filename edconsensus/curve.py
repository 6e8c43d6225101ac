"""Arithmetic on the twisted Edwards form of Curve25519 and its scalars."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from itertools import count
from typing import Iterable, Optional

from .errors import InvalidSliceLength

P = 2**255 - 19
"""The field prime."""

L = 2**252 + 27742317777372353535851937790883648493
"""The order of the prime-order subgroup."""

D = (-121665 * pow(121666, -1, P)) % P
_D2 = (2 * D) % P
_SQRT_M1 = pow(2, (P - 1) // 4, P)
_LOW_255 = (1 << 255) - 1


@dataclass(frozen=True, eq=False)
class EdwardsPoint:
    """A curve point in extended projective coordinates."""

    x: int
    y: int
    z: int
    t: int

    def __add__(self, other: EdwardsPoint) -> EdwardsPoint:
        if not isinstance(other, EdwardsPoint):
            return NotImplemented
        a = (self.y - self.x) * (other.y - other.x) % P
        b = (self.y + self.x) * (other.y + other.x) % P
        c = self.t * _D2 * other.t % P
        d = 2 * self.z * other.z % P
        e, f, g, h = b - a, d - c, d + c, b + a
        return EdwardsPoint(e * f % P, g * h % P, f * g % P, e * h % P)

    def __neg__(self) -> EdwardsPoint:
        return EdwardsPoint((-self.x) % P, self.y, self.z, (-self.t) % P)

    def __sub__(self, other: EdwardsPoint) -> EdwardsPoint:
        if not isinstance(other, EdwardsPoint):
            return NotImplemented
        return self + (-other)

    def double(self) -> EdwardsPoint:
        """Return twice this point."""
        a = self.x * self.x % P
        b = self.y * self.y % P
        c = 2 * self.z * self.z % P
        dd = -a
        e = ((self.x + self.y) ** 2 - a - b) % P
        g = (dd + b) % P
        f = (g - c) % P
        h = (dd - b) % P
        return EdwardsPoint(e * f % P, g * h % P, f * g % P, e * h % P)

    def __mul__(self, k: int) -> EdwardsPoint:
        if not isinstance(k, int):
            return NotImplemented
        if k < 0:
            return (-self) * (-k)
        result = IDENTITY
        for bit in bin(k)[2:]:
            result = result.double()
            if bit == "1":
                result = result + self
        return result

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EdwardsPoint):
            return NotImplemented
        return (self.x * other.z - other.x * self.z) % P == 0 and (
            self.y * other.z - other.y * self.z
        ) % P == 0

    def __hash__(self) -> int:
        return hash(self.compress())

    def __repr__(self) -> str:
        return f"EdwardsPoint({self.compress().hex()})"

    def compress(self) -> bytes:
        """Return the canonical 32-byte encoding of this point."""
        zinv = pow(self.z, -1, P)
        x = self.x * zinv % P
        y = self.y * zinv % P
        return (y | ((x & 1) << 255)).to_bytes(32, "little")

    def mul_by_cofactor(self) -> EdwardsPoint:
        """Return [8] times this point."""
        return self.double().double().double()

    def is_identity(self) -> bool:
        """Whether this is the neutral element."""
        return self.x % P == 0 and (self.y - self.z) % P == 0

    def is_small_order(self) -> bool:
        """Whether this point lies in the 8-torsion subgroup."""
        return self.mul_by_cofactor().is_identity()

    def is_torsion_free(self) -> bool:
        """Whether this point lies in the prime-order subgroup."""
        return (self * L).is_identity()


IDENTITY = EdwardsPoint(0, 1, 1, 0)


def _sqrt_ratio(u: int, v: int) -> Optional[int]:
    v3 = v * v % P * v % P
    v7 = v3 * v3 % P * v % P
    x = u * v3 % P * pow(u * v7 % P, (P - 5) // 8, P) % P
    check = v * x % P * x % P
    if check == u % P:
        return x
    if check == (-u) % P:
        return x * _SQRT_M1 % P
    return None


def _point_from_y(y: int, sign: int) -> Optional[EdwardsPoint]:
    yy = y * y % P
    x = _sqrt_ratio((yy - 1) % P, (D * yy + 1) % P)
    if x is None:
        return None
    if x & 1:
        x = P - x
    if sign:
        x = (-x) % P
    return EdwardsPoint(x, y, 1, x * y % P)


def _check_length(data: bytes, size: int) -> bytes:
    data = bytes(data)
    if len(data) != size:
        raise InvalidSliceLength()
    return data


def decompress(data: bytes) -> Optional[EdwardsPoint]:
    """Decode a 32-byte point encoding, accepting non-canonical encodings.

    Returns None when the bytes do not encode a point on the curve.
    """
    raw = int.from_bytes(_check_length(data, 32), "little")
    return _point_from_y((raw & _LOW_255) % P, raw >> 255)


BASEPOINT = _point_from_y(4 * pow(5, -1, P) % P, 0)


def _torsion_generator() -> EdwardsPoint:
    for y in count(2):
        candidate = _point_from_y(y, 0)
        if candidate is None:
            continue
        torsion = candidate * L
        if not torsion.double().double().is_identity():
            return torsion
    raise AssertionError("unreachable")


_T8 = _torsion_generator()
EIGHT_TORSION = tuple(_T8 * i for i in range(8))


def scalar_from_hash(*args: bytes) -> int:
    """Hash the concatenated chunks with SHA-512 and reduce modulo L."""
    digest = hashlib.sha512()
    for chunk in args:
        digest.update(chunk)
    return int.from_bytes(digest.digest(), "little") % L


def scalar_from_canonical_bytes(data: bytes) -> Optional[int]:
    """Decode a scalar, returning None unless it is less than L."""
    value = int.from_bytes(_check_length(data, 32), "little")
    return value if value < L else None


def clamp_scalar(data: bytes) -> int:
    """Apply Ed25519 clamping to 32 bytes and return the integer."""
    clamped = bytearray(_check_length(data, 32))
    clamped[0] &= 248
    clamped[31] &= 127
    clamped[31] |= 64
    return int.from_bytes(clamped, "little")


def multiscalar_mul(scalars: Iterable[int], points: Iterable[EdwardsPoint]) -> EdwardsPoint:
    """Compute the sum of scalar * point over paired inputs."""
    scalars = list(scalars)
    points = list(points)
    if len(scalars) != len(points):
        raise ValueError("scalars and points differ in length")
    pairs = [(k, pt) if k >= 0 else (-k, -pt) for k, pt in zip(scalars, points)]
    width = max((k.bit_length() for k, _ in pairs), default=0)
    acc = IDENTITY
    for bit in reversed(range(width)):
        acc = acc.double()
        for k, pt in pairs:
            if (k >> bit) & 1:
                acc = acc + pt
    return acc