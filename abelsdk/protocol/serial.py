"""
Abelian SDK Coin Serial Numbers and Output Decoding

Serial numbers are the one-time spend markers of owned coins. They are
derived by the backend from the coin's outpoint, its ring blocks and
the owner's serial-number secret key.
"""

from __future__ import annotations
from typing import List, Mapping, Sequence
import logging

from abelsdk.core.address import decode_coin_address_from_txout_data
from abelsdk.core.coin import CoinID
from abelsdk.core.tx import TxBlockDesc
from abelsdk.core.types import Bytes, BytesLike, as_bytes
from abelsdk.crypto.backend import CryptoBackend, CryptoKeyBundle, OutPoint
from abelsdk.crypto.keys import CryptoKey
from abelsdk.errors import SerialNumberCountError
from abelsdk.protocol.ring import get_serialized_blocks_for_ring_group

logger = logging.getLogger(__name__)

__all__ = [
    "resolve_outpoint",
    "decode_coin_serial_numbers",
    "decode_coin_address_from_txout_data",
    "decode_value_from_txout_data",
]


def resolve_outpoint(tx_hash: BytesLike, index: int) -> OutPoint:
    """
    Outpoint for output ``index`` of transaction ``tx_hash``.

    Raises:
        MalformedOutPointError: If the pair cannot form an outpoint
    """
    return OutPoint.from_txid_str(as_bytes(tx_hash).hex(), index)


def decode_coin_serial_numbers(
    coin_ids: Sequence[CoinID],
    serial_no_secret_keys: Sequence[CryptoKey],
    ring_block_descs: Mapping[int, TxBlockDesc],
    backend: CryptoBackend,
) -> List[Bytes]:
    """
    Derive one serial number per coin.

    Args:
        coin_ids: Coins to resolve
        serial_no_secret_keys: Owner serial-number keys, one per coin
        ring_block_descs: Ring blocks keyed by height
        backend: Crypto backend

    Returns:
        Serial numbers, positionally aligned with ``coin_ids``

    Raises:
        MalformedOutPointError: If a coin id is malformed
        SerialNumberCountError: If keys or backend results do not line up
            with the coin ids
    """
    if len(serial_no_secret_keys) != len(coin_ids):
        raise SerialNumberCountError(len(serial_no_secret_keys), len(coin_ids))

    outpoints = [resolve_outpoint(coin_id.tx_hash, coin_id.index) for coin_id in coin_ids]
    serialized_blocks = get_serialized_blocks_for_ring_group(ring_block_descs)

    # Serial-number derivation needs no spend or view key material
    keys = [CryptoKeyBundle(serial_no_secret_key=key.data) for key in serial_no_secret_keys]

    serial_numbers = backend.generate_coin_serial_numbers(outpoints, serialized_blocks, keys)
    if len(serial_numbers) != len(coin_ids):
        raise SerialNumberCountError(len(serial_numbers), len(coin_ids))

    logger.debug(f"Derived {len(serial_numbers)} serial numbers")
    return [as_bytes(sn) for sn in serial_numbers]


def decode_value_from_txout_data(
    txout_data: BytesLike,
    view_secret_key: CryptoKey,
    backend: CryptoBackend,
) -> int:
    """
    Decode a coin's plaintext value with the owner's view key.

    The backend clears the key buffer it receives, so it is handed a
    private copy and ``view_secret_key`` is left untouched.
    """
    key_copy = view_secret_key.copy_buffer()
    return int(backend.extract_coin_value_from_serialized_txout(bytes(as_bytes(txout_data)), key_copy))
