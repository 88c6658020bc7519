"""Corridor carving: depth-first tunnels between intersections."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple, TYPE_CHECKING

from dungeon_cells import BLOCK_CORR, CellAttribute
from dungeon_geometry import CellPos, Direction, cell_for_intersection

if TYPE_CHECKING:
    from generation_context import GenerationContext

logger = logging.getLogger(__name__)

# (i, j, remaining directions) for one level of the tunnel walk.
TunnelFrame = Tuple[int, int, Iterator[Direction]]


class CorridorBuilder:
    """Carves corridors from every unvisited intersection."""

    def __init__(self, context: GenerationContext) -> None:
        self.context = context
        self.grid = context.grid
        self.rng = context.rng
        self.straightness = context.config.corridor_layout.straightness

    def corridors(self) -> int:
        """Start a tunnel at each interior intersection not already carved."""
        started = 0
        for i in range(1, self.context.n_i):
            for j in range(1, self.context.n_j):
                r, c = cell_for_intersection(i, j)
                if self.grid.has(r, c, CellAttribute.CORRIDOR):
                    continue
                self.tunnel(i, j)
                started += 1
        return started

    def tunnel(self, i: int, j: int, last_dir: Optional[Direction] = None) -> int:
        """Walk depth-first from (i, j), carving as it goes; returns the steps taken."""
        steps = 0
        stack: List[TunnelFrame] = [(i, j, iter(self.tunnel_dirs(last_dir)))]
        while stack:
            cur_i, cur_j, dirs = stack[-1]
            direction = next(dirs, None)
            if direction is None:
                stack.pop()
                continue
            if self.open_tunnel(cur_i, cur_j, direction):
                steps += 1
                next_i = cur_i + direction.dr
                next_j = cur_j + direction.dc
                stack.append((next_i, next_j, iter(self.tunnel_dirs(direction))))
        return steps

    def tunnel_dirs(self, last_dir: Optional[Direction]) -> List[Direction]:
        dirs = list(Direction)
        self.rng.shuffle(dirs)
        if last_dir is not None and self.rng.randrange(100) < self.straightness:
            dirs.remove(last_dir)
            dirs.insert(0, last_dir)
        return dirs

    def open_tunnel(self, i: int, j: int, direction: Direction) -> bool:
        this_cell = cell_for_intersection(i, j)
        next_cell = cell_for_intersection(i + direction.dr, j + direction.dc)
        mid_cell = CellPos(
            (this_cell.row + next_cell.row) // 2, (this_cell.col + next_cell.col) // 2
        )
        if not self.check_tunnel(mid_cell, next_cell):
            return False
        self.delve(this_cell, next_cell)
        return True

    def check_tunnel(self, mid_cell: CellPos, next_cell: CellPos) -> bool:
        if not self.grid.in_bounds(next_cell.row, next_cell.col):
            return False
        for r, c in _rect(mid_cell, next_cell):
            if self.grid.has(r, c, BLOCK_CORR):
                return False
        return True

    def delve(self, this_cell: CellPos, next_cell: CellPos) -> None:
        for r, c in _rect(this_cell, next_cell):
            self.grid.remove(r, c, CellAttribute.ENTRANCE)
            self.grid.add(r, c, CellAttribute.CORRIDOR)


def _rect(a: CellPos, b: CellPos) -> Iterator[Tuple[int, int]]:
    for r in range(min(a.row, b.row), max(a.row, b.row) + 1):
        for c in range(min(a.col, b.col), max(a.col, b.col) + 1):
            yield r, c


def run_corridors(context: GenerationContext) -> int:
    started = CorridorBuilder(context).corridors()
    logger.debug(
        "Started %d tunnels with %s corridors", started, context.config.corridor_layout.name.lower()
    )
    return started
