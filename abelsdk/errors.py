"""
Abelian SDK Error Handling

All error codes and exception classes.
"""

from enum import IntEnum
from typing import Optional, Any


class ErrorCode(IntEnum):
    """SDK error codes."""

    # 1xxx - General errors
    UNKNOWN_ERROR = 1000
    INVALID_CONFIG = 1001

    # 2xxx - Reference errors
    MALFORMED_OUTPOINT = 2001

    # 3xxx - Backend errors
    BACKEND_FAILURE = 3001

    # 4xxx - Address format errors
    EMPTY_ADDRESS_DATA = 4001
    MISSING_FINGERPRINT = 4002
    INVALID_ADDRESS_LENGTH = 4003
    INVALID_ADDRESS_PREFIX = 4004
    CHECKSUM_MISMATCH = 4005
    INVALID_CRYPTO_ADDRESS = 4006

    # 5xxx - Range errors
    CHAIN_ID_OUT_OF_RANGE = 5001
    COIN_VALUE_OUT_OF_RANGE = 5002
    BLOCK_HEIGHT_OUT_OF_RANGE = 5003

    # 6xxx - Transaction assembly errors
    MISSING_RING_BLOCK = 6001
    SIGNER_MISMATCH = 6002
    SERIAL_NUMBER_COUNT = 6003

    # 7xxx - RPC errors
    RPC_FAILURE = 7001


class AbelSDKError(Exception):
    """Base exception for all SDK errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# ==============================================================================
# General Errors (1xxx)
# ==============================================================================

class ConfigError(AbelSDKError):
    def __init__(self, problems: list):
        super().__init__(
            ErrorCode.INVALID_CONFIG,
            "Invalid configuration: " + "; ".join(problems),
            {"problems": list(problems)}
        )


# ==============================================================================
# Reference Errors (2xxx)
# ==============================================================================

class MalformedOutPointError(AbelSDKError):
    def __init__(self, txid: str, index: int, reason: str):
        super().__init__(
            ErrorCode.MALFORMED_OUTPOINT,
            f"Cannot build outpoint {txid}:{index}: {reason}",
            {"txid": txid, "index": index}
        )


# ==============================================================================
# Backend Errors (3xxx)
# ==============================================================================

class BackendError(AbelSDKError):
    """Raised by crypto backends when a delegated operation fails."""

    def __init__(self, operation: str, reason: str = ""):
        msg = f"Backend operation failed: {operation}"
        if reason:
            msg += f" - {reason}"
        super().__init__(ErrorCode.BACKEND_FAILURE, msg, {"operation": operation})


# ==============================================================================
# Address Format Errors (4xxx)
# ==============================================================================

class AddressFormatError(AbelSDKError):
    """Base class for address layout violations."""
    pass


class EmptyAddressDataError(AddressFormatError):
    def __init__(self, address_type: str):
        super().__init__(
            ErrorCode.EMPTY_ADDRESS_DATA,
            f"{address_type} data is empty",
            {"address_type": address_type}
        )


class MissingFingerprintError(AddressFormatError):
    def __init__(self, address_type: str):
        super().__init__(
            ErrorCode.MISSING_FINGERPRINT,
            f"{address_type} fingerprint is empty",
            {"address_type": address_type}
        )


class InvalidAddressLengthError(AddressFormatError):
    def __init__(self, address_type: str, actual: int, expected: int):
        super().__init__(
            ErrorCode.INVALID_ADDRESS_LENGTH,
            f"{address_type} data length is {actual}, expected {expected}",
            {"address_type": address_type, "actual": actual, "expected": expected}
        )


class InvalidAddressPrefixError(AddressFormatError):
    def __init__(self, address_type: str, actual: int, expected: int):
        super().__init__(
            ErrorCode.INVALID_ADDRESS_PREFIX,
            f"{address_type} data is prefixed with {actual:#04x}, expected {expected:#04x}",
            {"address_type": address_type, "actual": actual, "expected": expected}
        )


class ChecksumMismatchError(AddressFormatError):
    def __init__(self, address_type: str):
        super().__init__(
            ErrorCode.CHECKSUM_MISMATCH,
            f"{address_type} checksum is not valid",
            {"address_type": address_type}
        )


class InvalidCryptoAddressError(AddressFormatError):
    def __init__(self, address_type: str):
        super().__init__(
            ErrorCode.INVALID_CRYPTO_ADDRESS,
            f"{address_type} crypto address is not cryptographically valid",
            {"address_type": address_type}
        )


# ==============================================================================
# Range Errors (5xxx)
# ==============================================================================

class RangeViolationError(AbelSDKError):
    """Base class for numeric range violations."""
    pass


class ChainIDOutOfRangeError(RangeViolationError):
    def __init__(self, address_type: str, chain_id: int, maximum: int):
        super().__init__(
            ErrorCode.CHAIN_ID_OUT_OF_RANGE,
            f"{address_type} chain id {chain_id} is not in range [0, {maximum}]",
            {"address_type": address_type, "chain_id": chain_id, "maximum": maximum}
        )


class CoinValueOutOfRangeError(RangeViolationError):
    def __init__(self, field: str, value: int):
        super().__init__(
            ErrorCode.COIN_VALUE_OUT_OF_RANGE,
            f"{field} {value} does not fit an unsigned 64-bit coin value",
            {"field": field, "value": value}
        )


class BlockHeightOutOfRangeError(RangeViolationError):
    def __init__(self, height: int):
        super().__init__(
            ErrorCode.BLOCK_HEIGHT_OUT_OF_RANGE,
            f"Block height {height} is negative",
            {"height": height}
        )


# ==============================================================================
# Transaction Assembly Errors (6xxx)
# ==============================================================================

class MissingRingBlockError(AbelSDKError):
    def __init__(self, missing: list):
        super().__init__(
            ErrorCode.MISSING_RING_BLOCK,
            f"Ring blocks missing for heights {missing}",
            {"missing": list(missing)}
        )


class SignerMismatchError(AbelSDKError):
    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(
            ErrorCode.SIGNER_MISMATCH,
            message,
            {"index": index} if index is not None else None
        )


class SerialNumberCountError(AbelSDKError):
    def __init__(self, actual: int, expected: int):
        super().__init__(
            ErrorCode.SERIAL_NUMBER_COUNT,
            f"Got {actual} serial number entries, expected {expected}",
            {"actual": actual, "expected": expected}
        )


# ==============================================================================
# RPC Errors (7xxx)
# ==============================================================================

class RPCError(AbelSDKError):
    def __init__(self, method: str, error: Any):
        super().__init__(
            ErrorCode.RPC_FAILURE,
            f"abec.{method}: {error}",
            {"method": method, "error": error}
        )
        self.method = method
        self.error = error
