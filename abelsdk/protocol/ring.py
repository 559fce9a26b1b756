"""
Abelian SDK Ring Groups

Rings are fixed, non-overlapping windows of three consecutive blocks
aligned to multiples of three. Every coin created in a window is spent
with that whole window as its anonymity set.

The backend expects ring blocks in ascending height order; mapping
iteration order must never leak into what it receives.
"""

from __future__ import annotations
from typing import Iterable, List, Mapping
import logging

from abelsdk.constants import RING_GROUP_SIZE
from abelsdk.core.tx import TxBlockDesc
from abelsdk.errors import BlockHeightOutOfRangeError, MissingRingBlockError

logger = logging.getLogger(__name__)


def get_ring_block_heights(height: int) -> List[int]:
    """
    Heights of the ring window containing ``height``.

    Example: 300, 301 and 302 all map to [300, 301, 302].

    Raises:
        BlockHeightOutOfRangeError: If height is negative
    """
    if height < 0:
        raise BlockHeightOutOfRangeError(height)
    first = height - height % RING_GROUP_SIZE
    return [first + i for i in range(RING_GROUP_SIZE)]


def get_ring_group_heights(heights: Iterable[int]) -> List[int]:
    """Sorted union of the ring windows of several heights."""
    ring_heights = set()
    for height in heights:
        ring_heights.update(get_ring_block_heights(height))
    return sorted(ring_heights)


def check_ring_blocks(ring_block_descs: Mapping[int, TxBlockDesc], heights: Iterable[int]) -> None:
    """
    Require a block for every ring height of the given coin heights.

    Raises:
        MissingRingBlockError: Listing the absent heights
    """
    missing = [h for h in get_ring_group_heights(heights) if h not in ring_block_descs]
    if missing:
        raise MissingRingBlockError(missing)


def get_serialized_blocks_for_ring_group(ring_block_descs: Mapping[int, TxBlockDesc]) -> List[bytes]:
    """Raw block bytes sorted ascending by height."""
    heights = sorted(ring_block_descs)
    logger.debug(f"Ring group heights: {heights}")
    return [bytes(ring_block_descs[h].bin_data) for h in heights]
