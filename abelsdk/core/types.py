"""
Abelian SDK Byte Types

Immutable byte buffer shared by addresses, descriptors and keys.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union
import hashlib

BytesLike = Union[bytes, bytearray, memoryview, "Bytes"]


@dataclass(frozen=True, slots=True)
class Bytes:
    """
    Immutable byte sequence with hex/hash/summary helpers.

    Compares equal to plain ``bytes`` holding the same content.
    """
    data: bytes = b""

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self):
        return iter(self.data)

    def __getitem__(self, key):
        if isinstance(key, slice):
            return Bytes(self.data[key])
        return self.data[key]

    def __add__(self, other: BytesLike) -> Bytes:
        return Bytes(self.data + bytes(other))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Bytes):
            return self.data == other.data
        if isinstance(other, (bytes, bytearray)):
            return self.data == other
        return False

    def __hash__(self) -> int:
        return hash(self.data)

    def __lt__(self, other: BytesLike) -> bool:
        return self.data < bytes(other)

    def __le__(self, other: BytesLike) -> bool:
        return self.data <= bytes(other)

    def __gt__(self, other: BytesLike) -> bool:
        return self.data > bytes(other)

    def __ge__(self, other: BytesLike) -> bool:
        return self.data >= bytes(other)

    def __repr__(self) -> str:
        return f"Bytes({self.summary()})"

    def __str__(self) -> str:
        return self.hex()

    def hex(self) -> str:
        return self.data.hex()

    @classmethod
    def from_hex(cls, hex_string: str) -> Bytes:
        if hex_string.startswith(("0x", "0X")):
            hex_string = hex_string[2:]
        return cls(bytes.fromhex(hex_string))

    @classmethod
    def empty(cls) -> Bytes:
        return cls(b"")

    def sha256(self) -> Bytes:
        """SHA-256 digest of the content."""
        return Bytes(hashlib.sha256(self.data).digest())

    def reversed(self) -> Bytes:
        """Content in reverse byte order."""
        return Bytes(self.data[::-1])

    def summary(self, head: int = 4, tail: int = 4) -> str:
        """
        Short human-readable rendering: first ``head`` and last ``tail``
        bytes in hex plus the total length.
        """
        n = len(self.data)
        if n <= head + tail:
            return f"{self.data.hex()}({n})"
        left = self.data[:head].hex()
        right = self.data[n - tail:].hex() if tail else ""
        return f"{left}..{right}({n})"


def as_bytes(value: BytesLike) -> Bytes:
    """Wrap any bytes-like value, passing ``Bytes`` through unchanged."""
    if isinstance(value, Bytes):
        return value
    return Bytes(bytes(value))
