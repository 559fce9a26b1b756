"""
Abelian SDK Protocol Logic
"""

from abelsdk.protocol.ring import (
    get_ring_block_heights,
    get_serialized_blocks_for_ring_group,
)
from abelsdk.protocol.serial import (
    decode_coin_serial_numbers,
    decode_coin_address_from_txout_data,
    decode_value_from_txout_data,
)
from abelsdk.protocol.transaction import (
    generate_unsigned_raw_tx,
    generate_signed_raw_tx,
)

__all__ = [
    # Ring groups
    "get_ring_block_heights",
    "get_serialized_blocks_for_ring_group",
    # Serial numbers
    "decode_coin_serial_numbers",
    "decode_coin_address_from_txout_data",
    "decode_value_from_txout_data",
    # Transactions
    "generate_unsigned_raw_tx",
    "generate_signed_raw_tx",
]
