"""Geometry helpers: compass directions, cell positions, and tunnel check templates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

Offset = Tuple[int, int]


class Direction(Enum):
    """Cardinal directions with unit (row, col) deltas on the cell grid."""

    NORTH = (-1, 0)
    SOUTH = (1, 0)
    WEST = (0, -1)
    EAST = (0, 1)

    @property
    def dr(self) -> int:
        return self.value[0]

    @property
    def dc(self) -> int:
        return self.value[1]

    @property
    def delta(self) -> Offset:
        return self.value

    def opposite(self) -> Direction:
        return Direction.from_tuple((-self.dr, -self.dc))

    @property
    def close_end(self) -> CloseEnd:
        return CLOSE_ENDS[self]

    @property
    def stair_end(self) -> StairEnd:
        return STAIR_ENDS[self]

    @classmethod
    def from_tuple(cls, value: Offset) -> Direction:
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"Unsupported direction {value}") from exc


@dataclass(frozen=True, order=True)
class CellPos:
    """Integer (row, col) cell coordinate."""

    row: int
    col: int

    def __iter__(self):
        yield self.row
        yield self.col

    def step(self, direction: Direction, distance: int = 1) -> CellPos:
        return CellPos(self.row + direction.dr * distance, self.col + direction.dc * distance)

    def to_tuple(self) -> Tuple[int, int]:
        return self.row, self.col


def cell_for_intersection(i: int, j: int) -> CellPos:
    """Map half-grid intersection (i, j) to its full-grid cell."""
    return CellPos(i * 2 + 1, j * 2 + 1)


@dataclass(frozen=True)
class TunnelCheck:
    """Structural template matched around a corridor cell.

    ``corridor`` offsets must be pure corridor cells; ``walled`` offsets must not
    be open space (off-grid counts as walled); ``close`` offsets are blanked
    when a close-end template matches.
    """

    corridor: Tuple[Offset, ...]
    walled: Tuple[Offset, ...]
    close: Tuple[Offset, ...] = ()


@dataclass(frozen=True)
class CloseEnd(TunnelCheck):
    recurse: Offset = (0, 0)


@dataclass(frozen=True)
class StairEnd(TunnelCheck):
    next: Offset = (0, 0)


CLOSE_ENDS: Dict[Direction, CloseEnd] = {
    Direction.NORTH: CloseEnd(
        corridor=((0, 0),),
        walled=((0, -1), (1, -1), (1, 0), (1, 1), (0, 1)),
        close=((0, 0),),
        recurse=(-1, 0),
    ),
    Direction.SOUTH: CloseEnd(
        corridor=((0, 0),),
        walled=((0, -1), (-1, -1), (-1, 0), (-1, 1), (0, 1)),
        close=((0, 0),),
        recurse=(1, 0),
    ),
    Direction.WEST: CloseEnd(
        corridor=((0, 0),),
        walled=((-1, 0), (-1, 1), (0, 1), (1, 1), (1, 0)),
        close=((0, 0),),
        recurse=(0, -1),
    ),
    Direction.EAST: CloseEnd(
        corridor=((0, 0),),
        walled=((-1, 0), (-1, -1), (0, -1), (1, -1), (1, 0)),
        close=((0, 0),),
        recurse=(0, 1),
    ),
}

# A stair sits at the closed end of a straight three-cell corridor run; ``next``
# points back along the run.
STAIR_ENDS: Dict[Direction, StairEnd] = {
    Direction.NORTH: StairEnd(
        corridor=((0, 0), (1, 0), (2, 0)),
        walled=((1, -1), (0, -1), (-1, -1), (-1, 0), (-1, 1), (0, 1), (1, 1)),
        next=(1, 0),
    ),
    Direction.SOUTH: StairEnd(
        corridor=((0, 0), (-1, 0), (-2, 0)),
        walled=((-1, -1), (0, -1), (1, -1), (1, 0), (1, 1), (0, 1), (-1, 1)),
        next=(-1, 0),
    ),
    Direction.WEST: StairEnd(
        corridor=((0, 0), (0, 1), (0, 2)),
        walled=((-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1), (1, 0), (1, 1)),
        next=(0, 1),
    ),
    Direction.EAST: StairEnd(
        corridor=((0, 0), (0, -1), (0, -2)),
        walled=((-1, -1), (-1, 0), (-1, 1), (0, 1), (1, 1), (1, 0), (1, -1)),
        next=(0, -1),
    ),
}
