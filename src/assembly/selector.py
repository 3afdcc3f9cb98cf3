"""
Exam Prep API - Block Selector
Randomized greedy fill of a per-exam question budget.
"""
import logging
import random
from typing import List, Sequence

from .models import Block, BlockSelection

logger = logging.getLogger(__name__)


def shuffled(items: Sequence, rng: random.Random) -> list:
    """Uniformly shuffled copy of items."""
    pool = list(items)
    rng.shuffle(pool)
    return pool


def select_blocks(
    blocks: Sequence[Block],
    target: int,
    rng: random.Random
) -> BlockSelection:
    """
    Choose whole blocks whose combined size stays within target.

    This is a randomized greedy fill, not an optimal packing: the blocks are
    shuffled, then walked once, and each block that still fits is taken.
    Blocks that do not fit are skipped and the walk continues.

    If nothing fit but the pool is not empty, the smallest block is taken
    anyway (first one in shuffled order on ties), so every exam with a
    positive target and any questions contributes something.

    Args:
        blocks: One exam's blocks
        target: Question budget for this exam
        rng: Random source owned by the caller

    Returns:
        BlockSelection with blocks in acceptance order
    """
    selection = BlockSelection()
    if target <= 0:
        return selection

    pool = shuffled(blocks, rng)

    for block in pool:
        if selection.total + block.size <= target:
            selection.blocks.append(block)
            selection.total += block.size

    if not selection.blocks and pool:
        smallest = min(pool, key=lambda b: b.size)
        selection.blocks.append(smallest)
        selection.total = smallest.size
        selection.fallback_used = True
        logger.debug(
            f"No block fits target {target}; taking smallest block of {smallest.size}"
        )

    return selection
