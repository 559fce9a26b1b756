"""
Abelian SDK Test Fixtures
"""

import hashlib
import pytest
from typing import Dict, List

from abelsdk.constants import COIN_ADDRESS_LENGTH, CRYPTO_ADDRESS_LENGTH
from abelsdk.core.address import (
    AbelAddress,
    CoinAddress,
    ShortAbelAddress,
    get_short_abel_address,
    new_abel_address_from_crypto_address,
    new_coin_address,
)
from abelsdk.core.tx import TxBlockDesc, TxInDesc
from abelsdk.crypto.keys import CryptoKeysAndAddress, generate_crypto_keys_and_address
from abelsdk.errors import BackendError
from abelsdk.protocol.ring import get_ring_block_heights

TXOUT_MAGIC = b"TXOUT"


def expand(label: bytes, seed: bytes, size: int) -> bytes:
    """Deterministic byte expansion."""
    return hashlib.shake_256(label + seed).digest(size)


class FakeBackend:
    """
    Deterministic stand-in for the ring-signature library.

    Crypto address layout: coin address (9504) || public material (1192).
    Serialized txout layout: b"TXOUT" || coin address || value (8 bytes, big endian).

    Every delegated call is recorded in ``calls`` so tests can check
    exactly what crossed the boundary.
    """

    def __init__(self):
        self.calls: Dict[str, List[tuple]] = {}
        self.rejected_crypto_addresses = set()
        self.serial_number_count_override = None
        self.fail_build = False
        self._seed_counter = 0

    def _record(self, name: str, *args) -> None:
        self.calls.setdefault(name, []).append(args)

    def check_crypto_address(self, crypto_address: bytes) -> bool:
        self._record("check_crypto_address", crypto_address)
        return (
            len(crypto_address) == CRYPTO_ADDRESS_LENGTH
            and bytes(crypto_address) not in self.rejected_crypto_addresses
        )

    def extract_coin_address_from_crypto_address(self, crypto_address: bytes) -> bytes:
        self._record("extract_coin_address_from_crypto_address", crypto_address)
        if len(crypto_address) != CRYPTO_ADDRESS_LENGTH:
            raise BackendError("extract_coin_address_from_crypto_address", "bad length")
        return bytes(crypto_address[:COIN_ADDRESS_LENGTH])

    def extract_coin_address_from_serialized_txout(self, txout_data: bytes) -> bytes:
        self._record("extract_coin_address_from_serialized_txout", txout_data)
        if not txout_data.startswith(TXOUT_MAGIC):
            raise BackendError("extract_coin_address_from_serialized_txout", "not a txout")
        return txout_data[len(TXOUT_MAGIC):len(TXOUT_MAGIC) + COIN_ADDRESS_LENGTH]

    def extract_coin_value_from_serialized_txout(self, txout_data: bytes, view_secret_key: bytearray) -> int:
        self._record("extract_coin_value_from_serialized_txout", txout_data, view_secret_key)
        if not any(view_secret_key):
            raise BackendError("extract_coin_value_from_serialized_txout", "empty view key")
        value = int.from_bytes(txout_data[-8:], "big")
        # Mimics the real library wiping key material after use
        for i in range(len(view_secret_key)):
            view_secret_key[i] = 0
        return value

    def crypto_address_key_seed_gen(self) -> bytes:
        self._seed_counter += 1
        return expand(b"seed", self._seed_counter.to_bytes(4, "big"), 64)

    def crypto_address_key_gen(self, seed: bytes):
        self._record("crypto_address_key_gen", seed)
        crypto_address = (
            expand(b"coin", seed, COIN_ADDRESS_LENGTH)
            + expand(b"public", seed, CRYPTO_ADDRESS_LENGTH - COIN_ADDRESS_LENGTH)
        )
        return (
            crypto_address,
            expand(b"spend", seed, 32),
            expand(b"serial", seed, 32),
            expand(b"view", seed, 32),
        )

    def build_transfer_tx_request_desc(self, outpoints, serialized_blocks, outputs, fee, memo) -> bytes:
        self._record("build_transfer_tx_request_desc", outpoints, serialized_blocks, outputs, fee, memo)
        if self.fail_build:
            raise BackendError("build_transfer_tx_request_desc", "rejected by backend")
        h = hashlib.sha256()
        for op in outpoints:
            h.update(op.serialize())
        for block in serialized_blocks:
            h.update(block)
        for out in outputs:
            h.update(bytes(out.crypto_address) + out.value.to_bytes(8, "big"))
        h.update(fee.to_bytes(8, "big") + memo)
        return b"REQ" + h.digest()

    def create_transfer_tx(self, tx_request: bytes, keys):
        self._record("create_transfer_tx", tx_request, keys)
        tx = b"TX" + tx_request + b"".join(bytes(k.crypto_address)[:4] for k in keys)
        return tx, hashlib.sha256(tx).digest()

    def generate_coin_serial_numbers(self, outpoints, serialized_blocks, keys):
        self._record("generate_coin_serial_numbers", outpoints, serialized_blocks, keys)
        serials = [
            hashlib.sha256(op.serialize() + bytes(key.serial_no_secret_key)).digest()
            for op, key in zip(outpoints, keys)
        ]
        if self.serial_number_count_override is not None:
            serials = serials[:self.serial_number_count_override]
        return serials


class ShortChecksumCodec:
    """Codec with a 4-byte SHA-256 checksum, for tests that inject a non-default codec."""

    checksum_length = 4

    def serialize(self, chain_id: int, crypto_address) -> bytes:
        return bytes([chain_id & 0xFF]) + bytes(crypto_address)

    def checksum(self, data) -> bytes:
        return hashlib.sha256(bytes(data)).digest()[:4]


def make_txout(coin_address: CoinAddress, value: int) -> bytes:
    return TXOUT_MAGIC + bytes(coin_address.data) + value.to_bytes(8, "big")


def make_tx_hash(n: int) -> bytes:
    return hashlib.sha256(b"tx" + n.to_bytes(4, "big")).digest()


def make_ring_blocks(*heights: int) -> Dict[int, TxBlockDesc]:
    """Ring block descriptors covering the windows of all given heights."""
    descs = {}
    for height in heights:
        for h in get_ring_block_heights(height):
            descs[h] = TxBlockDesc(bin_data=b"BLOCK" + h.to_bytes(8, "big"), height=h)
    return descs


@pytest.fixture
def backend() -> FakeBackend:
    """Fresh fake backend."""
    return FakeBackend()


@pytest.fixture
def keys_a(backend) -> CryptoKeysAndAddress:
    return generate_crypto_keys_and_address(bytes(range(64)), backend)


@pytest.fixture
def keys_b(backend) -> CryptoKeysAndAddress:
    return generate_crypto_keys_and_address(bytes(range(64, 128)), backend)


@pytest.fixture
def abel_address_a(keys_a) -> AbelAddress:
    return new_abel_address_from_crypto_address(keys_a.crypto_address)


@pytest.fixture
def abel_address_b(keys_b) -> AbelAddress:
    return new_abel_address_from_crypto_address(keys_b.crypto_address)


@pytest.fixture
def short_address_a(abel_address_a) -> ShortAbelAddress:
    return get_short_abel_address(abel_address_a)


@pytest.fixture
def short_address_b(abel_address_b) -> ShortAbelAddress:
    return get_short_abel_address(abel_address_b)


@pytest.fixture
def coin_address_a(keys_a) -> CoinAddress:
    return new_coin_address(keys_a.crypto_address.data[:COIN_ADDRESS_LENGTH])


@pytest.fixture
def tx_in_a(keys_a, short_address_a) -> TxInDesc:
    """Coin owned by A, created at height 300."""
    coin_address = new_coin_address(keys_a.crypto_address.data[:COIN_ADDRESS_LENGTH])
    return TxInDesc(
        tx_out_data=make_txout(coin_address, 50_000_000),
        coin_value=50_000_000,
        owner=short_address_a,
        height=300,
        tx_hash=make_tx_hash(1),
        tx_out_index=0,
    )


@pytest.fixture
def tx_in_b(keys_b, short_address_b) -> TxInDesc:
    """Coin owned by B, created at height 301."""
    coin_address = new_coin_address(keys_b.crypto_address.data[:COIN_ADDRESS_LENGTH])
    return TxInDesc(
        tx_out_data=make_txout(coin_address, 30_000_000),
        coin_value=30_000_000,
        owner=short_address_b,
        height=301,
        tx_hash=make_tx_hash(2),
        tx_out_index=1,
    )
