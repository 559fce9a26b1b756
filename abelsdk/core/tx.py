"""
Abelian SDK Transaction Descriptors

Plain records describing what to spend, where to send it, and the ring
blocks a spend is drawn from, plus the unsigned and signed results of
transaction assembly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import logging

from abelsdk.constants import UNKNOWN_COIN_VALUE
from abelsdk.core.address import (
    AbelAddress,
    CoinAddress,
    ShortAbelAddress,
    decode_coin_address_from_txout_data,
)
from abelsdk.core.types import Bytes, as_bytes
from abelsdk.crypto.backend import CryptoBackend
from abelsdk.errors import AbelSDKError

logger = logging.getLogger(__name__)


@dataclass
class TxInDesc:
    """
    A spendable coin.

    ``coin_value`` is -1 when the value has not been decoded. ``height``
    is the block height the coin was created at, or None when unknown.
    """
    tx_out_data: Bytes
    coin_value: int = UNKNOWN_COIN_VALUE
    owner: Optional[ShortAbelAddress] = None
    height: Optional[int] = None
    tx_hash: Bytes = field(default_factory=Bytes)
    tx_out_index: int = 0
    coin_serial_number: Bytes = field(default_factory=Bytes)

    def __post_init__(self):
        self.tx_out_data = as_bytes(self.tx_out_data)
        self.tx_hash = as_bytes(self.tx_hash)
        self.coin_serial_number = as_bytes(self.coin_serial_number)

    def get_coin_address(self, backend: CryptoBackend) -> CoinAddress:
        return decode_coin_address_from_txout_data(self.tx_out_data, backend)

    def get_fingerprint(self, backend: CryptoBackend) -> Optional[Bytes]:
        """Fingerprint of the owning coin address, or None if it cannot be decoded."""
        try:
            return self.get_coin_address(backend).fingerprint
        except AbelSDKError as e:
            logger.debug(f"Cannot decode coin address of {self.tx_hash.hex()}:{self.tx_out_index}: {e}")
            return None


@dataclass
class TxOutDesc:
    """A requested output: recipient and value in Neutrino."""
    abel_address: AbelAddress
    coin_value: int


@dataclass
class TxBlockDesc:
    """Raw serialized block at a given height."""
    bin_data: Bytes
    height: int

    def __post_init__(self):
        self.bin_data = as_bytes(self.bin_data)

    def __repr__(self) -> str:
        return f"TxBlockDesc(height={self.height}, data={self.bin_data.summary()})"


@dataclass
class TxDesc:
    """Everything needed to build one transfer transaction."""
    tx_in_descs: List[TxInDesc]
    tx_out_descs: List[TxOutDesc]
    tx_fee: int
    tx_ring_block_descs: Dict[int, TxBlockDesc]
    tx_memo: Bytes = field(default_factory=Bytes)

    def __post_init__(self):
        self.tx_memo = as_bytes(self.tx_memo)

    @property
    def total_input_value(self) -> int:
        return sum(d.coin_value for d in self.tx_in_descs if d.coin_value >= 0)

    @property
    def total_output_value(self) -> int:
        return sum(d.coin_value for d in self.tx_out_descs)


@dataclass(frozen=True)
class UnsignedRawTx:
    """
    Backend transaction request plus the addresses that must sign it,
    in the same order as the inputs.
    """
    data: Bytes
    signers: Tuple[ShortAbelAddress, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "data", as_bytes(self.data))
        object.__setattr__(self, "signers", tuple(self.signers))

    def __repr__(self) -> str:
        return f"UnsignedRawTx({self.data.summary()}, signers={len(self.signers)})"


@dataclass(frozen=True)
class SignedRawTx:
    """
    Submittable transaction bytes and id.

    ``txid`` is in the byte order used by wallets, explorers and RPC.
    """
    data: Bytes
    txid: Bytes

    def __post_init__(self):
        object.__setattr__(self, "data", as_bytes(self.data))
        object.__setattr__(self, "txid", as_bytes(self.txid))

    def __repr__(self) -> str:
        return f"SignedRawTx(txid={self.txid.hex()}, size={len(self.data)})"


@dataclass
class TxSubmissionResult:
    """Outcome of broadcasting a signed transaction."""
    signed_raw_tx: SignedRawTx
    submission_time: int
    success: bool
    error: str = ""
