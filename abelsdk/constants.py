"""
Abelian SDK Constants

All protocol constants defined here for single source of truth.
"""

from typing import Final

# ==============================================================================
# CHAIN IDENTIFIERS
# ==============================================================================

DEFAULT_CHAIN_ID: Final[int] = 0x00

# AbelAddress accepts 0..14, ShortAbelAddress accepts 0..15
ABEL_ADDRESS_MAX_CHAIN_ID: Final[int] = 14
SHORT_ABEL_ADDRESS_MAX_CHAIN_ID: Final[int] = 15

# ==============================================================================
# ADDRESS LAYOUT
# ==============================================================================

COIN_ADDRESS_LENGTH: Final[int] = 9504
CRYPTO_ADDRESS_LENGTH: Final[int] = 10696
ABEL_ADDRESS_LENGTH: Final[int] = 10729         # chain id || crypto address || checksum
SHORT_ABEL_ADDRESS_LENGTH: Final[int] = 66      # magic (2) || fingerprint (32) || hash (32)

SHORT_ABEL_ADDRESS_MAGIC: Final[int] = 0xAB
SHORT_ABEL_ADDRESS_CHAIN_BASE: Final[int] = 0xE1

FINGERPRINT_SIZE: Final[int] = 32
SHA256_OUTPUT_SIZE: Final[int] = 32
SHA3_256_OUTPUT_SIZE: Final[int] = 32
INSTANCE_ADDRESS_CHECKSUM_LENGTH: Final[int] = SHA3_256_OUTPUT_SIZE

# Slices of a short abel address
SHORT_FINGERPRINT_START: Final[int] = 2
SHORT_FINGERPRINT_END: Final[int] = SHORT_FINGERPRINT_START + FINGERPRINT_SIZE
SHORT_HASH_END: Final[int] = SHORT_FINGERPRINT_END + SHA256_OUTPUT_SIZE

# ==============================================================================
# TRANSACTIONS
# ==============================================================================

RING_GROUP_SIZE: Final[int] = 3                 # Blocks per ring window
TXID_SIZE: Final[int] = 32
MAX_TXOUT_INDEX: Final[int] = 0xFF              # Output index is a uint8
UNKNOWN_COIN_VALUE: Final[int] = -1

# Coin values are int64 internally and uint64 at the backend boundary
MAX_INT64: Final[int] = 2**63 - 1

# ==============================================================================
# CURRENCY UNITS
# ==============================================================================

NEUTRINO_PER_ABEL: Final[int] = 10_000_000
ESTIMATED_TX_FEE_ABEL: Final[float] = 0.1

# ==============================================================================
# RPC / ENVIRONMENT
# ==============================================================================

RPC_JSONRPC_VERSION: Final[str] = "1.0"
RPC_DEFAULT_ENDPOINT: Final[str] = "https://127.0.0.1:18665"
RPC_DEFAULT_TIMEOUT_SEC: Final[float] = 30.0

ENV_DEBUG: Final[str] = "ABELSDK_DEBUG"
ENV_RPC_ENDPOINT: Final[str] = "ABELSDK_RPC_ENDPOINT"
ENV_RPC_USERNAME: Final[str] = "ABELSDK_RPC_USERNAME"
ENV_RPC_PASSWORD: Final[str] = "ABELSDK_RPC_PASSWORD"
ENV_CHAIN_ID: Final[str] = "ABELSDK_CHAIN_ID"
DEBUG_TRUTHY_VALUES: Final[tuple] = ("true", "1", "on", "yes")

LOGGER_NAMESPACE: Final[str] = "abelsdk"
