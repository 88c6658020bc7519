"""Stair placement at corridor dead ends."""

from __future__ import annotations

import logging
from typing import List, TYPE_CHECKING

from dungeon_cells import CellAttribute
from dungeon_geometry import Direction, cell_for_intersection
from dungeon_models import Stair, StairKind

if TYPE_CHECKING:
    from generation_context import GenerationContext

logger = logging.getLogger(__name__)


def stair_ends(context: GenerationContext) -> List[Stair]:
    """Every intersection that closes off a straight corridor run.

    The returned stairs carry a placeholder kind; the caller decides up or down.
    """
    grid = context.grid
    ends: List[Stair] = []
    for i in range(context.n_i):
        for j in range(context.n_j):
            r, c = cell_for_intersection(i, j)
            if not grid.is_exactly(r, c, CellAttribute.CORRIDOR):
                continue
            for direction in Direction:
                check = direction.stair_end
                if grid.matches(r, c, check):
                    next_r, next_c = check.next
                    ends.append(Stair(r, c, r + next_r, c + next_c, StairKind.DOWN))
                    break
    return ends


def place_stairs(context: GenerationContext) -> int:
    wanted = context.config.add_stairs
    if wanted <= 0:
        return 0

    candidates = stair_ends(context)
    for index in range(wanted):
        if not candidates:
            break
        end = context.rng.choice(candidates)
        candidates.remove(end)

        # One down and one up first, random after that.
        kind_roll = index if index < 2 else context.rng.randrange(2)
        kind = StairKind.DOWN if kind_roll == 0 else StairKind.UP

        context.grid.add(end.row, end.col, kind.attribute)
        context.grid.set_label(end.row, end.col, kind.label)
        context.stairs.append(Stair(end.row, end.col, end.next_row, end.next_col, kind))
    return len(context.stairs)


def run_stair_placement(context: GenerationContext) -> int:
    placed = place_stairs(context)
    if placed < context.config.add_stairs:
        logger.debug("Placed %d of %d requested stairs", placed, context.config.add_stairs)
    return placed
