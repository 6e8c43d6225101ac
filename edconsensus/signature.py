"""The Ed25519 signature type."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidSliceLength


@dataclass(frozen=True)
class Signature:
    """An Ed25519 signature: the encoded point R and the scalar s."""

    r_bytes: bytes
    s_bytes: bytes

    def __post_init__(self) -> None:
        r_bytes = bytes(self.r_bytes)
        s_bytes = bytes(self.s_bytes)
        if len(r_bytes) != 32 or len(s_bytes) != 32:
            raise InvalidSliceLength()
        object.__setattr__(self, "r_bytes", r_bytes)
        object.__setattr__(self, "s_bytes", s_bytes)

    @classmethod
    def from_bytes(cls, data: bytes) -> Signature:
        """Parse a 64-byte signature."""
        data = bytes(data)
        if len(data) != 64:
            raise InvalidSliceLength()
        return cls(data[:32], data[32:])

    def to_bytes(self) -> bytes:
        """Return the 64-byte encoding of the signature."""
        return self.r_bytes + self.s_bytes

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __repr__(self) -> str:
        return f"Signature(r_bytes={self.r_bytes.hex()!r}, s_bytes={self.s_bytes.hex()!r})"