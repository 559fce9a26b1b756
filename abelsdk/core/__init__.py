"""
Abelian SDK Core Data Structures

Address, coin and transaction records live in their own submodules and
are imported from there.
"""

from abelsdk.core.types import Bytes, BytesLike, as_bytes

__all__ = [
    "Bytes",
    "BytesLike",
    "as_bytes",
]
