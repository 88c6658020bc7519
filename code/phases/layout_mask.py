"""Pre-block cells outside the configured dungeon shape."""

from __future__ import annotations

import logging
import math
from typing import Sequence, TYPE_CHECKING

from dungeon_cells import CellAttribute
from dungeon_config import DungeonLayout

if TYPE_CHECKING:
    from generation_context import GenerationContext

logger = logging.getLogger(__name__)


def mask_cells(context: GenerationContext, pattern: Sequence[Sequence[int]]) -> int:
    """Scale ``pattern`` over the grid (nearest neighbour); 0 entries block cells."""
    grid = context.grid
    total_rows = grid.n_rows + 1
    total_cols = grid.n_cols + 1
    pattern_rows = len(pattern)
    pattern_cols = len(pattern[0])
    blocked = 0
    for r in range(total_rows):
        sample_row = pattern[r * pattern_rows // total_rows]
        for c in range(total_cols):
            if sample_row[c * pattern_cols // total_cols] == 0:
                grid.add(r, c, CellAttribute.BLOCKED)
                blocked += 1
    return blocked


def round_mask(context: GenerationContext) -> int:
    """Block every cell farther from the centre than half the column count."""
    grid = context.grid
    center_r = grid.n_rows // 2
    center_c = grid.n_cols // 2
    blocked = 0
    for r in range(grid.n_rows + 1):
        for c in range(grid.n_cols + 1):
            d_r = r - center_r
            d_c = c - center_c
            if math.isqrt(d_r * d_r + d_c * d_c) > center_c:
                grid.add(r, c, CellAttribute.BLOCKED)
                blocked += 1
    return blocked


def run_layout_mask(context: GenerationContext) -> int:
    """Apply the configured layout; returns the number of blocked cells."""
    layout = context.config.dungeon_layout
    if layout is None:
        return 0
    if layout is DungeonLayout.ROUND:
        blocked = round_mask(context)
    else:
        blocked = mask_cells(context, layout.pattern)
    logger.debug("Layout %s blocked %d cells", layout.name, blocked)
    return blocked
