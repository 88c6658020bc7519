"""Dead-end collapse and final cleanup of blocked cells."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dungeon_cells import OPENSPACE, STAIRS, CellAttribute
from dungeon_geometry import Direction, cell_for_intersection

if TYPE_CHECKING:
    from dungeon_cells import DungeonGrid
    from generation_context import GenerationContext

logger = logging.getLogger(__name__)


def collapse(grid: DungeonGrid, r: int, c: int) -> int:
    """Retract the corridor ending at (r, c) one cell at a time; returns cells cleared."""
    cleared = 0
    while grid.in_bounds(r, c) and grid.has(r, c, OPENSPACE):
        for direction in Direction:
            check = direction.close_end
            if grid.matches(r, c, check):
                break
        else:
            return cleared

        for dr, dc in check.close:
            grid.reset(r + dr, c + dc)
            cleared += 1
        r += check.recurse[0]
        c += check.recurse[1]
    return cleared


def collapse_tunnels(context: GenerationContext, percent: int) -> int:
    """Collapse dead ends at ``percent`` of the eligible intersections (all at 100)."""
    if percent <= 0:
        return 0
    remove_all = percent >= 100
    grid = context.grid
    cleared = 0
    for i in range(context.n_i):
        for j in range(context.n_j):
            r, c = cell_for_intersection(i, j)
            if not grid.has(r, c, OPENSPACE) or grid.has(r, c, STAIRS):
                continue
            if remove_all or context.rng.randrange(100) < percent:
                cleared += collapse(grid, r, c)
    return cleared


def empty_blocks(context: GenerationContext) -> int:
    grid = context.grid
    emptied = 0
    for r in range(grid.n_rows + 1):
        for c in range(grid.n_cols + 1):
            if grid.has(r, c, CellAttribute.BLOCKED):
                grid.reset(r, c)
                emptied += 1
    return emptied


def run_dead_end_collapse(context: GenerationContext) -> int:
    cleared = collapse_tunnels(context, context.config.remove_deadends)
    logger.debug(
        "Collapsed %d dead-end cells at %d%%", cleared, context.config.remove_deadends
    )
    return cleared


def run_empty_blocks(context: GenerationContext) -> int:
    return empty_blocks(context)
