"""
Abelian SDK Hash Functions

SHA-256 for address fingerprints and hashes, SHA3-256 per NIST FIPS 202
for instance-address checksums.
"""

from __future__ import annotations
import hashlib
from typing import Union

from Crypto.Hash import SHA3_256

from abelsdk.core.types import Bytes


def sha256(data: Union[bytes, bytearray, memoryview, Bytes]) -> Bytes:
    """
    SHA-256 hash function.

    Args:
        data: Input data to hash

    Returns:
        Bytes: 32-byte digest
    """
    return Bytes(hashlib.sha256(bytes(data)).digest())


def sha3_256_raw(data: Union[bytes, bytearray, memoryview, Bytes]) -> bytes:
    """
    SHA3-256 hash function returning raw bytes.

    Args:
        data: Input data to hash

    Returns:
        bytes: 32-byte digest
    """
    hasher = SHA3_256.new()
    hasher.update(bytes(data))
    return hasher.digest()


def sha3_256(data: Union[bytes, bytearray, memoryview, Bytes]) -> Bytes:
    """SHA3-256 wrapped in Bytes."""
    return Bytes(sha3_256_raw(data))
