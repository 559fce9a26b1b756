"""
Abelian SDK Key Material

Wrappers around backend key generation. Secret keys never appear in
repr output.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from abelsdk.core.address import CryptoAddress, new_crypto_address
from abelsdk.core.types import Bytes, BytesLike, as_bytes
from abelsdk.crypto.backend import CryptoBackend, CryptoKeyBundle

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CryptoKey:
    """
    Opaque secret key produced by the backend.

    NOTE: Never transmitted over network.
    """
    data: Bytes

    def __post_init__(self):
        object.__setattr__(self, "data", as_bytes(self.data))

    def __bytes__(self) -> bytes:
        return self.data.data

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"CryptoKey(len={len(self.data)}, data=<redacted>)"

    def copy_buffer(self) -> bytearray:
        """Fresh mutable copy for backend calls that clear their input."""
        return bytearray(self.data.data)


@dataclass(frozen=True, slots=True)
class CryptoKeysAndAddress:
    """Secret keys of one owner together with their crypto address."""
    spend_secret_key: CryptoKey
    serial_no_secret_key: CryptoKey
    view_secret_key: CryptoKey
    crypto_address: CryptoAddress

    def __repr__(self) -> str:
        return f"CryptoKeysAndAddress(crypto_address={self.crypto_address})"

    def to_signing_bundle(self) -> CryptoKeyBundle:
        return CryptoKeyBundle(
            crypto_address=self.crypto_address.data,
            spend_secret_key=self.spend_secret_key.data,
            serial_no_secret_key=self.serial_no_secret_key.data,
            view_secret_key=self.view_secret_key.data,
        )


def generate_safe_crypto_seed(backend: CryptoBackend) -> Bytes:
    """Generate a fresh key seed."""
    return Bytes(backend.crypto_address_key_seed_gen())


def generate_crypto_keys_and_address(seed: BytesLike, backend: CryptoBackend) -> CryptoKeysAndAddress:
    """
    Derive keys and crypto address from a seed.

    Raises whatever the backend raises; nothing is returned on failure.
    """
    crypto_address, spend_sk, serial_no_sk, view_sk = backend.crypto_address_key_gen(
        bytes(as_bytes(seed))
    )
    keys = CryptoKeysAndAddress(
        spend_secret_key=CryptoKey(spend_sk),
        serial_no_secret_key=CryptoKey(serial_no_sk),
        view_secret_key=CryptoKey(view_sk),
        crypto_address=new_crypto_address(crypto_address, backend),
    )
    logger.debug(f"Generated keys for {keys.crypto_address}")
    return keys
