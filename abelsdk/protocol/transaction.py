"""
Abelian SDK Transaction Assembly

Two stages:
1. generate_unsigned_raw_tx: inputs, ring blocks and outputs become a
   backend transaction request plus the ordered list of signers
2. generate_signed_raw_tx: the request and the signers' key material
   become a submittable transaction and its id

The backend does all of the cryptography; this module only shapes and
checks what it is given.
"""

from __future__ import annotations
from typing import Sequence
import logging

from abelsdk.constants import MAX_INT64
from abelsdk.core.tx import SignedRawTx, TxDesc, UnsignedRawTx
from abelsdk.core.types import Bytes
from abelsdk.crypto.backend import DEFAULT_CODEC, CryptoBackend, InstanceAddressCodec, TxRequestOutputDesc
from abelsdk.crypto.keys import CryptoKeysAndAddress
from abelsdk.errors import CoinValueOutOfRangeError, SignerMismatchError
from abelsdk.protocol.ring import check_ring_blocks, get_serialized_blocks_for_ring_group
from abelsdk.protocol.serial import resolve_outpoint

logger = logging.getLogger(__name__)


def to_uint64(field: str, value: int) -> int:
    """
    Check that a Neutrino amount fits the backend's unsigned field.

    Amounts are signed 64-bit on the ledger side, so anything negative
    or above 2**63 - 1 is rejected rather than wrapped.

    Raises:
        CoinValueOutOfRangeError: If value is out of range
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise CoinValueOutOfRangeError(field, value)
    if value < 0 or value > MAX_INT64:
        raise CoinValueOutOfRangeError(field, value)
    return value


def generate_unsigned_raw_tx(
    tx_desc: TxDesc,
    backend: CryptoBackend,
    codec: InstanceAddressCodec = DEFAULT_CODEC,
) -> UnsignedRawTx:
    """
    Build the unsigned transaction request.

    Args:
        tx_desc: Inputs, outputs, fee, ring blocks and memo
        backend: Crypto backend
        codec: Codec the output addresses were built with; its checksum
            length decides where each crypto address ends

    Returns:
        UnsignedRawTx with signers in input order

    Raises:
        MalformedOutPointError: If an input's hash or index is malformed
        MissingRingBlockError: If a ring block for a known input height
            is absent
        CoinValueOutOfRangeError: If an output value or the fee is out of range
        Exception: Whatever the backend raises, unchanged
    """
    outpoints = [
        resolve_outpoint(tx_in.tx_hash, tx_in.tx_out_index)
        for tx_in in tx_desc.tx_in_descs
    ]

    known_heights = [tx_in.height for tx_in in tx_desc.tx_in_descs if tx_in.height is not None]
    check_ring_blocks(tx_desc.tx_ring_block_descs, known_heights)
    serialized_blocks = get_serialized_blocks_for_ring_group(tx_desc.tx_ring_block_descs)

    outputs = [
        TxRequestOutputDesc(
            crypto_address=tx_out.abel_address.crypto_address_data(codec.checksum_length),
            value=to_uint64(f"tx_out_descs[{i}].coin_value", tx_out.coin_value),
        )
        for i, tx_out in enumerate(tx_desc.tx_out_descs)
    ]
    fee = to_uint64("tx_fee", tx_desc.tx_fee)

    request = backend.build_transfer_tx_request_desc(
        outpoints, serialized_blocks, outputs, fee, bytes(tx_desc.tx_memo)
    )

    signers = [tx_in.owner for tx_in in tx_desc.tx_in_descs]
    logger.debug(
        f"Built tx request: {len(outpoints)} inputs, {len(outputs)} outputs, "
        f"{len(serialized_blocks)} ring blocks, fee={fee}"
    )
    return UnsignedRawTx(data=Bytes(request), signers=tuple(signers))


def _check_signers(unsigned_tx: UnsignedRawTx, signer_keys: Sequence[CryptoKeysAndAddress]) -> None:
    if len(signer_keys) != len(unsigned_tx.signers):
        raise SignerMismatchError(
            f"expected {len(unsigned_tx.signers)} signer keys, got {len(signer_keys)}"
        )

    for i, (signer, keys) in enumerate(zip(unsigned_tx.signers, signer_keys)):
        if signer is None:
            continue
        if keys.crypto_address.fingerprint != signer.fingerprint:
            raise SignerMismatchError(
                f"key fingerprint {keys.crypto_address.fingerprint.summary(0, 2)} "
                f"does not match signer {signer.fingerprint.summary(0, 2)}",
                index=i,
            )


def generate_signed_raw_tx(
    unsigned_tx: UnsignedRawTx,
    signer_keys: Sequence[CryptoKeysAndAddress],
    backend: CryptoBackend,
) -> SignedRawTx:
    """
    Sign an unsigned transaction request.

    Keys must be given in the same order as ``unsigned_tx.signers``.
    When the request carries no signer list the keys are passed through
    as given.

    Raises:
        SignerMismatchError: If keys do not line up with the signers
        Exception: Whatever the backend raises, unchanged
    """
    if unsigned_tx.signers:
        _check_signers(unsigned_tx, signer_keys)

    bundles = [keys.to_signing_bundle() for keys in signer_keys]
    tx_bytes, raw_txid = backend.create_transfer_tx(bytes(unsigned_tx.data), bundles)

    # Backend txid is in internal byte order
    txid = Bytes(raw_txid).reversed()
    logger.debug(f"Signed tx {txid.hex()} ({len(tx_bytes)} bytes)")
    return SignedRawTx(data=Bytes(tx_bytes), txid=txid)
