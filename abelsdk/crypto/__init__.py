"""
Abelian SDK Cryptographic Interfaces
"""

from abelsdk.crypto.hash import sha256, sha3_256
from abelsdk.crypto.backend import (
    CryptoBackend,
    CryptoKeyBundle,
    InstanceAddressCodec,
    OutPoint,
    Sha3InstanceAddressCodec,
    TxRequestOutputDesc,
)

__all__ = [
    # Hash functions
    "sha256",
    "sha3_256",
    # Backend capability
    "CryptoBackend",
    "CryptoKeyBundle",
    "InstanceAddressCodec",
    "OutPoint",
    "Sha3InstanceAddressCodec",
    "TxRequestOutputDesc",
]
