"""
Abelian SDK Crypto Backend Capability

The post-quantum ring-signature scheme (key generation, serial numbers,
proofs, transaction-request serialization) lives outside this package.
It is consumed through the ``CryptoBackend`` protocol defined here,
together with the plain data shapes passed across that boundary.

Backends signal failure by raising (normally ``BackendError``); callers
in this package never catch those exceptions.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from abelsdk.constants import (
    INSTANCE_ADDRESS_CHECKSUM_LENGTH,
    MAX_TXOUT_INDEX,
    TXID_SIZE,
)
from abelsdk.core.types import Bytes, BytesLike, as_bytes
from abelsdk.crypto.hash import sha3_256_raw
from abelsdk.errors import MalformedOutPointError


# ==============================================================================
# Wire Shapes
# ==============================================================================

@dataclass(frozen=True, slots=True)
class OutPoint:
    """
    Reference to one output of one transaction.

    SIZE: 33 bytes (txid: 32 bytes, index: 1 byte)
    """
    txid: Bytes
    index: int

    def __repr__(self) -> str:
        return f"OutPoint({self.txid.hex()}:{self.index})"

    @classmethod
    def from_txid_str(cls, txid: str, index: int) -> OutPoint:
        """
        Build an outpoint from a hex transaction id and an output index.

        Raises:
            MalformedOutPointError: If the id is not 32 hex-encoded bytes or
                the index does not fit a uint8
        """
        if not isinstance(index, int) or index < 0 or index > MAX_TXOUT_INDEX:
            raise MalformedOutPointError(txid, index, f"index must be in [0, {MAX_TXOUT_INDEX}]")
        try:
            raw = bytes.fromhex(txid)
        except (TypeError, ValueError) as e:
            raise MalformedOutPointError(txid, index, f"txid is not hex: {e}") from e
        if len(raw) != TXID_SIZE:
            raise MalformedOutPointError(txid, index, f"txid must be {TXID_SIZE} bytes, got {len(raw)}")
        return cls(txid=Bytes(raw), index=index)

    def serialize(self) -> bytes:
        """Serialize to bytes: txid || index."""
        return self.txid.data + bytes([self.index])


@dataclass(frozen=True, slots=True)
class TxRequestOutputDesc:
    """Destination crypto address paired with an unsigned 64-bit value."""
    crypto_address: Bytes
    value: int

    def __repr__(self) -> str:
        return f"TxRequestOutputDesc({self.crypto_address.summary()}, value={self.value})"


@dataclass(frozen=True, slots=True)
class CryptoKeyBundle:
    """
    Signing key material handed to the backend.

    Fields not needed by an operation are left as None (serial-number
    derivation only carries ``serial_no_secret_key``).
    """
    crypto_address: Optional[Bytes] = None
    spend_secret_key: Optional[Bytes] = None
    serial_no_secret_key: Optional[Bytes] = None
    view_secret_key: Optional[Bytes] = None

    def __repr__(self) -> str:
        # Never expose secret key data
        address = self.crypto_address.summary() if self.crypto_address else None
        return f"CryptoKeyBundle(crypto_address={address}, secrets=<redacted>)"


# ==============================================================================
# Backend Protocol
# ==============================================================================

@runtime_checkable
class CryptoBackend(Protocol):
    """Operations the SDK delegates to the ring-signature library."""

    def check_crypto_address(self, crypto_address: bytes) -> bool:
        ...

    def extract_coin_address_from_crypto_address(self, crypto_address: bytes) -> bytes:
        ...

    def extract_coin_address_from_serialized_txout(self, txout_data: bytes) -> bytes:
        ...

    def extract_coin_value_from_serialized_txout(
        self, txout_data: bytes, view_secret_key: bytearray
    ) -> int:
        """May clear ``view_secret_key`` in place."""
        ...

    def crypto_address_key_seed_gen(self) -> bytes:
        ...

    def crypto_address_key_gen(self, seed: bytes) -> Tuple[bytes, bytes, bytes, bytes]:
        """Return (crypto_address, spend_sk, serial_no_sk, view_sk)."""
        ...

    def build_transfer_tx_request_desc(
        self,
        outpoints: Sequence[OutPoint],
        serialized_blocks: Sequence[bytes],
        outputs: Sequence[TxRequestOutputDesc],
        fee: int,
        memo: bytes,
    ) -> bytes:
        ...

    def create_transfer_tx(
        self, tx_request: bytes, keys: Sequence[CryptoKeyBundle]
    ) -> Tuple[bytes, bytes]:
        """Return (serialized_tx, raw_txid) with the txid in backend byte order."""
        ...

    def generate_coin_serial_numbers(
        self,
        outpoints: Sequence[OutPoint],
        serialized_blocks: Sequence[bytes],
        keys: Sequence[CryptoKeyBundle],
    ) -> List[bytes]:
        ...


# ==============================================================================
# Instance Address Codec
# ==============================================================================

@runtime_checkable
class InstanceAddressCodec(Protocol):
    """Serializer + checksum for the payload of a human-facing address."""

    @property
    def checksum_length(self) -> int:
        ...

    def serialize(self, chain_id: int, crypto_address: BytesLike) -> bytes:
        ...

    def checksum(self, data: BytesLike) -> bytes:
        ...


class Sha3InstanceAddressCodec:
    """
    Default codec.

    SERIALIZATION: chain_id (1 byte) || crypto address
    CHECKSUM: SHA3-256 of the serialization, 32 bytes
    """

    @property
    def checksum_length(self) -> int:
        return INSTANCE_ADDRESS_CHECKSUM_LENGTH

    def serialize(self, chain_id: int, crypto_address: BytesLike) -> bytes:
        return bytes([chain_id & 0xFF]) + bytes(as_bytes(crypto_address))

    def checksum(self, data: BytesLike) -> bytes:
        return sha3_256_raw(data)[:INSTANCE_ADDRESS_CHECKSUM_LENGTH]


DEFAULT_CODEC: InstanceAddressCodec = Sha3InstanceAddressCodec()
