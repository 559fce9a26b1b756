"""
Abelian SDK

Address hierarchy, ring grouping and transaction assembly for the
Abelian privacy ledger. Cryptography is supplied by an injected
CryptoBackend.
"""

__version__ = "0.3.0"
__author__ = "Abelian SDK"

from abelsdk.constants import DEFAULT_CHAIN_ID, NEUTRINO_PER_ABEL
from abelsdk.errors import AbelSDKError, ErrorCode

__all__ = [
    "DEFAULT_CHAIN_ID",
    "NEUTRINO_PER_ABEL",
    "AbelSDKError",
    "ErrorCode",
    "__version__",
]
