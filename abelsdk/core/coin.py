"""
Abelian SDK Coin Records
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from abelsdk.constants import NEUTRINO_PER_ABEL
from abelsdk.core.address import AbelAddress, ShortAbelAddress
from abelsdk.core.types import Bytes, as_bytes


@dataclass(frozen=True, order=True)
class CoinID:
    """
    Identifies one output of one transaction.

    Ordered and compared by (tx_hash, index).
    """
    tx_hash: Bytes
    index: int

    def __post_init__(self):
        object.__setattr__(self, "tx_hash", as_bytes(self.tx_hash))
        if self.index < 0 or self.index > 0xFF:
            raise ValueError(f"CoinID index must fit a uint8, got {self.index}")

    def __str__(self) -> str:
        return f"{self.tx_hash.hex()}:{self.index}"

    @classmethod
    def from_string(cls, value: str) -> CoinID:
        """Parse the ``<hex tx hash>:<index>`` form."""
        tx_hash, _, index = value.rpartition(":")
        if not tx_hash:
            raise ValueError(f"Invalid coin id: {value!r}")
        return cls(Bytes.from_hex(tx_hash), int(index))


@dataclass
class Coin:
    """An owned coin as tracked by a wallet."""
    id: CoinID
    owner_short_address: Optional[ShortAbelAddress] = None
    owner_address: Optional[AbelAddress] = None
    value: int = 0
    serial_number: Bytes = field(default_factory=Bytes)
    tx_vout_data: Bytes = field(default_factory=Bytes)
    block_hash: Bytes = field(default_factory=Bytes)
    block_height: int = 0

    def __repr__(self) -> str:
        return f"Coin({self.id}, value={self.value}, height={self.block_height})"

    @property
    def value_abel(self) -> float:
        return neutrino_to_abel(self.value)


# ==============================================================================
# Unit Conversion
# ==============================================================================

def neutrino_to_abel(neutrino_amount: int) -> float:
    """Convert Neutrino (smallest unit) to ABEL."""
    return neutrino_amount / NEUTRINO_PER_ABEL


def abel_to_neutrino(abel_amount: float) -> int:
    """Convert ABEL to Neutrino, truncating toward zero."""
    return int(abel_amount * NEUTRINO_PER_ABEL)
