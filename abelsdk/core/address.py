"""
Abelian SDK Address Hierarchy

Four layered address forms, from the innermost outwards:

    CoinAddress       9504 bytes   embedded in a CryptoAddress
    CryptoAddress    10696 bytes   produced by key generation
    AbelAddress      10729 bytes   chain id || crypto address || checksum
    ShortAbelAddress    66 bytes   0xAB || 0xE1+chain id || fingerprint || hash

All four share the same fields (data, type tag, fingerprint). Derivation
between layers and validation are plain functions; the classes only add
slicing accessors. The fingerprint of every layer is sha256 of the
embedded CoinAddress, so one owner can be correlated across forms.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Optional
import logging

from abelsdk.constants import (
    ABEL_ADDRESS_LENGTH,
    ABEL_ADDRESS_MAX_CHAIN_ID,
    COIN_ADDRESS_LENGTH,
    CRYPTO_ADDRESS_LENGTH,
    DEFAULT_CHAIN_ID,
    INSTANCE_ADDRESS_CHECKSUM_LENGTH,
    SHORT_ABEL_ADDRESS_CHAIN_BASE,
    SHORT_ABEL_ADDRESS_LENGTH,
    SHORT_ABEL_ADDRESS_MAGIC,
    SHORT_ABEL_ADDRESS_MAX_CHAIN_ID,
    SHORT_FINGERPRINT_END,
    SHORT_FINGERPRINT_START,
    SHORT_HASH_END,
)
from abelsdk.core.types import Bytes, BytesLike, as_bytes
from abelsdk.crypto.backend import DEFAULT_CODEC, CryptoBackend, InstanceAddressCodec
from abelsdk.errors import (
    AbelSDKError,
    ChainIDOutOfRangeError,
    ChecksumMismatchError,
    EmptyAddressDataError,
    InvalidAddressLengthError,
    InvalidAddressPrefixError,
    InvalidCryptoAddressError,
    MissingFingerprintError,
)

logger = logging.getLogger(__name__)


class AddressType(IntEnum):
    """Type tag carried by every address."""
    ANY = 0
    COIN = 1
    CRYPTO = 2
    ABEL = 3
    SHORT_ABEL = 4

    def __str__(self) -> str:
        return _ADDRESS_TYPE_NAMES.get(self, "UnknownAddress")


_ADDRESS_TYPE_NAMES = {
    AddressType.ANY: "AnyAddress",
    AddressType.COIN: "CoinAddress",
    AddressType.CRYPTO: "CryptoAddress",
    AddressType.ABEL: "AbelAddress",
    AddressType.SHORT_ABEL: "ShortAbelAddress",
}


def _as_int8(value: int) -> int:
    """Read an unsigned byte as a signed 8-bit integer."""
    value &= 0xFF
    return value - 0x100 if value > 0x7F else value


# ==============================================================================
# Address Types
# ==============================================================================

@dataclass(frozen=True)
class Address:
    """
    Common address fields.

    Immutable; compares by (data, type tag). The fingerprint is derived
    from the data and therefore left out of comparisons.
    """
    TYPE: ClassVar[AddressType] = AddressType.ANY

    data: Bytes
    fingerprint: Bytes = field(default_factory=Bytes, compare=False)
    address_type: AddressType = field(init=False, default=AddressType.ANY)

    def __post_init__(self):
        object.__setattr__(self, "data", as_bytes(self.data if self.data is not None else b""))
        object.__setattr__(
            self, "fingerprint", as_bytes(self.fingerprint if self.fingerprint is not None else b"")
        )
        object.__setattr__(self, "address_type", self.TYPE)

    def __str__(self) -> str:
        return f"{self.address_type}{{{self.data.summary(1, 8)}|fp:{self.fingerprint.summary(0, 2)}}}"

    def __repr__(self) -> str:
        return str(self)

    def __bytes__(self) -> bytes:
        return self.data.data

    @property
    def hash(self) -> Bytes:
        """SHA-256 of the address data."""
        return self.data.sha256()

    def hex(self) -> str:
        return self.data.hex()

    def validate(
        self,
        backend: Optional[CryptoBackend] = None,
        codec: InstanceAddressCodec = DEFAULT_CODEC,
    ) -> None:
        """Raise if this address violates its layout rules."""
        validate_address(self, backend, codec)


class CoinAddress(Address):
    TYPE = AddressType.COIN


class CryptoAddress(Address):
    TYPE = AddressType.CRYPTO


class AbelAddress(Address):
    """
    Human-facing address.

    SERIALIZATION: chain_id (1 byte) || crypto address || checksum
    """
    TYPE = AddressType.ABEL

    @property
    def chain_id(self) -> int:
        return _as_int8(self.data[0])

    def crypto_address_data(self, checksum_length: int = INSTANCE_ADDRESS_CHECKSUM_LENGTH) -> Bytes:
        return self.data[1:len(self.data) - checksum_length]

    def checksum(self, checksum_length: int = INSTANCE_ADDRESS_CHECKSUM_LENGTH) -> Bytes:
        return self.data[len(self.data) - checksum_length:]


class ShortAbelAddress(Address):
    """
    Fixed-size commitment to one AbelAddress. Identifies it but cannot
    be expanded back into it.

    SERIALIZATION: 0xAB || 0xE1+chain_id || fingerprint (32) || abel address hash (32)
    """
    TYPE = AddressType.SHORT_ABEL

    @property
    def chain_id(self) -> int:
        return _as_int8(self.data[1] - SHORT_ABEL_ADDRESS_CHAIN_BASE)

    @property
    def abel_address_hash(self) -> Bytes:
        return self.data[SHORT_FINGERPRINT_END:SHORT_HASH_END]


# ==============================================================================
# Construction and Derivation
# ==============================================================================

def new_coin_address(data: BytesLike) -> CoinAddress:
    """Wrap coin address bytes; fingerprint = sha256(data)."""
    data = as_bytes(data)
    return CoinAddress(data=data, fingerprint=data.sha256())


def get_coin_address(crypto_address: CryptoAddress, backend: CryptoBackend) -> CoinAddress:
    """
    Extract the coin address embedded in a crypto address.

    Backend failures propagate; no placeholder address is produced.
    """
    raw = backend.extract_coin_address_from_crypto_address(bytes(crypto_address.data))
    return new_coin_address(raw)


def new_crypto_address(data: BytesLike, backend: CryptoBackend) -> CryptoAddress:
    """Wrap crypto address bytes; fingerprint comes from the embedded coin address."""
    crypto_address = CryptoAddress(data=as_bytes(data))
    coin_address = get_coin_address(crypto_address, backend)
    return CryptoAddress(data=crypto_address.data, fingerprint=coin_address.fingerprint)


def new_abel_address(
    data: BytesLike,
    backend: CryptoBackend,
    codec: InstanceAddressCodec = DEFAULT_CODEC,
) -> AbelAddress:
    """Wrap abel address bytes; fingerprint comes from the embedded crypto address."""
    abel_address = AbelAddress(data=as_bytes(data))
    crypto_address = get_crypto_address(abel_address, backend, codec)
    return AbelAddress(data=abel_address.data, fingerprint=crypto_address.fingerprint)


def new_abel_address_from_crypto_address(
    crypto_address: CryptoAddress,
    chain_id: int = DEFAULT_CHAIN_ID,
    codec: InstanceAddressCodec = DEFAULT_CODEC,
) -> AbelAddress:
    """Build serialize(chain_id, crypto address) || checksum(serialization)."""
    serialized = codec.serialize(chain_id, crypto_address.data)
    checksum = codec.checksum(serialized)
    return AbelAddress(data=Bytes(serialized + checksum), fingerprint=crypto_address.fingerprint)


def get_crypto_address(
    abel_address: AbelAddress,
    backend: CryptoBackend,
    codec: InstanceAddressCodec = DEFAULT_CODEC,
) -> CryptoAddress:
    return new_crypto_address(abel_address.crypto_address_data(codec.checksum_length), backend)


def new_short_abel_address(data: BytesLike) -> ShortAbelAddress:
    """Wrap short address bytes; fingerprint = data[2:34]."""
    data = as_bytes(data)
    return ShortAbelAddress(data=data, fingerprint=data[SHORT_FINGERPRINT_START:SHORT_FINGERPRINT_END])


def make_short_abel_address(
    fingerprint: BytesLike,
    abel_address_hash: BytesLike,
    chain_id: int = DEFAULT_CHAIN_ID,
) -> ShortAbelAddress:
    prefix = bytes([SHORT_ABEL_ADDRESS_MAGIC, (SHORT_ABEL_ADDRESS_CHAIN_BASE + chain_id) & 0xFF])
    return new_short_abel_address(prefix + bytes(as_bytes(fingerprint)) + bytes(as_bytes(abel_address_hash)))


def get_short_abel_address(abel_address: AbelAddress) -> ShortAbelAddress:
    return make_short_abel_address(abel_address.fingerprint, abel_address.hash, abel_address.chain_id)


def decode_coin_address_from_txout_data(txout_data: BytesLike, backend: CryptoBackend) -> CoinAddress:
    """Extract the owner's coin address from a serialized transaction output."""
    raw = backend.extract_coin_address_from_serialized_txout(bytes(as_bytes(txout_data)))
    return new_coin_address(raw)


# ==============================================================================
# Validation
# ==============================================================================

def _validate_base(address: Address) -> None:
    if len(address.data) == 0:
        raise EmptyAddressDataError(str(address.address_type))
    if len(address.fingerprint) == 0:
        raise MissingFingerprintError(str(address.address_type))


def _validate_length(address: Address, expected: int) -> None:
    if len(address.data) != expected:
        raise InvalidAddressLengthError(str(address.address_type), len(address.data), expected)


def validate_coin_address(address: CoinAddress) -> None:
    _validate_base(address)
    _validate_length(address, COIN_ADDRESS_LENGTH)


def validate_crypto_address(address: CryptoAddress) -> None:
    _validate_base(address)
    _validate_length(address, CRYPTO_ADDRESS_LENGTH)


def validate_abel_address(
    address: AbelAddress,
    backend: CryptoBackend,
    codec: InstanceAddressCodec = DEFAULT_CODEC,
) -> None:
    """
    Validate an abel address. Checks run in order and the first failure
    is raised:

    1. data and fingerprint present
    2. exact length
    3. chain id in [0, 14]
    4. embedded crypto address passes the backend validity check
    5. checksum over chain id || crypto address matches
    """
    _validate_base(address)
    _validate_length(address, ABEL_ADDRESS_LENGTH)

    chain_id = address.chain_id
    if chain_id < 0 or chain_id > ABEL_ADDRESS_MAX_CHAIN_ID:
        raise ChainIDOutOfRangeError(str(address.address_type), chain_id, ABEL_ADDRESS_MAX_CHAIN_ID)

    crypto_data = address.crypto_address_data(codec.checksum_length)
    if not backend.check_crypto_address(bytes(crypto_data)):
        raise InvalidCryptoAddressError(str(address.address_type))

    expected = codec.checksum(codec.serialize(chain_id, crypto_data))
    if address.checksum(codec.checksum_length) != expected:
        raise ChecksumMismatchError(str(address.address_type))


def validate_short_abel_address(address: ShortAbelAddress) -> None:
    _validate_base(address)
    _validate_length(address, SHORT_ABEL_ADDRESS_LENGTH)

    if address.data[0] != SHORT_ABEL_ADDRESS_MAGIC:
        raise InvalidAddressPrefixError(str(address.address_type), address.data[0], SHORT_ABEL_ADDRESS_MAGIC)

    # Upstream accepts 0..15 here and 0..14 for AbelAddress
    chain_id = address.chain_id
    if chain_id < 0 or chain_id > SHORT_ABEL_ADDRESS_MAX_CHAIN_ID:
        raise ChainIDOutOfRangeError(str(address.address_type), chain_id, SHORT_ABEL_ADDRESS_MAX_CHAIN_ID)


def validate_address(
    address: Address,
    backend: Optional[CryptoBackend] = None,
    codec: InstanceAddressCodec = DEFAULT_CODEC,
) -> None:
    """Dispatch to the validator for the address's type tag."""
    if address.address_type == AddressType.COIN:
        validate_coin_address(address)
    elif address.address_type == AddressType.CRYPTO:
        validate_crypto_address(address)
    elif address.address_type == AddressType.ABEL:
        if backend is None:
            raise TypeError("AbelAddress validation requires a crypto backend")
        validate_abel_address(address, backend, codec)
    elif address.address_type == AddressType.SHORT_ABEL:
        validate_short_abel_address(address)
    else:
        _validate_base(address)


def is_valid_address(
    address: Address,
    backend: Optional[CryptoBackend] = None,
    codec: InstanceAddressCodec = DEFAULT_CODEC,
) -> bool:
    try:
        validate_address(address, backend, codec)
        return True
    except AbelSDKError as e:
        logger.debug(f"Address validation failed: {e}")
        return False
