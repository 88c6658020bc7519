"""Cell attributes and the mutable grid that generation phases write into."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import List, Optional

from dungeon_geometry import TunnelCheck


class CellAttribute(IntFlag):
    """Per-cell flags. A cell holds any combination of them."""

    NOTHING = 0
    BLOCKED = 1 << 0
    ROOM = 1 << 1
    CORRIDOR = 1 << 2
    PERIMETER = 1 << 3
    ENTRANCE = 1 << 4
    ARCH = 1 << 5
    DOOR = 1 << 6
    LOCKED = 1 << 7
    TRAPPED = 1 << 8
    SECRET = 1 << 9
    PORTC = 1 << 10
    STAIR_DN = 1 << 11
    STAIR_UP = 1 << 12
    LABEL = 1 << 13

    def names(self) -> List[str]:
        return [member.name for member in CellAttribute if member and member in self]


OPENSPACE = CellAttribute.ROOM | CellAttribute.CORRIDOR
DOORSPACE = (
    CellAttribute.ARCH
    | CellAttribute.DOOR
    | CellAttribute.LOCKED
    | CellAttribute.TRAPPED
    | CellAttribute.SECRET
    | CellAttribute.PORTC
)
# Stripped from cells swallowed by a newly placed room.
ESPACE = CellAttribute.ENTRANCE | DOORSPACE | CellAttribute.LABEL
STAIRS = CellAttribute.STAIR_DN | CellAttribute.STAIR_UP

BLOCK_CORR = CellAttribute.BLOCKED | CellAttribute.PERIMETER | CellAttribute.CORRIDOR
BLOCK_DOOR = CellAttribute.BLOCKED | DOORSPACE


@dataclass(frozen=True)
class Cell:
    """Read-only view of one grid cell."""

    attributes: CellAttribute
    room_id: int = 0
    label: Optional[str] = None

    def has(self, attribute: CellAttribute) -> bool:
        return bool(self.attributes & attribute)


class DungeonGrid:
    """Flat, index-addressed storage of cell attributes, room ids and labels.

    The grid spans rows ``0..n_rows`` and columns ``0..n_cols`` inclusive.
    Indexing outside that extent is a programming error and trips an assert.
    """

    def __init__(self, n_rows: int, n_cols: int) -> None:
        self.n_rows = n_rows
        self.n_cols = n_cols
        self.width = n_cols + 1
        size = (n_rows + 1) * (n_cols + 1)
        self.attributes: List[CellAttribute] = [CellAttribute.NOTHING] * size
        self.room_ids: List[int] = [0] * size
        self.labels: List[Optional[str]] = [None] * size

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r <= self.n_rows and 0 <= c <= self.n_cols

    def _index(self, r: int, c: int) -> int:
        assert self.in_bounds(r, c), f"cell {(r, c)} outside {self.n_rows}x{self.n_cols} grid"
        return r * self.width + c

    def get(self, r: int, c: int) -> CellAttribute:
        return self.attributes[self._index(r, c)]

    def has(self, r: int, c: int, attribute: CellAttribute) -> bool:
        """True when the cell carries any of the flags in ``attribute``."""
        return bool(self.attributes[self._index(r, c)] & attribute)

    def is_exactly(self, r: int, c: int, attribute: CellAttribute) -> bool:
        return self.attributes[self._index(r, c)] == attribute

    def add(self, r: int, c: int, attribute: CellAttribute) -> None:
        idx = self._index(r, c)
        self.attributes[idx] |= attribute

    def remove(self, r: int, c: int, attribute: CellAttribute) -> None:
        idx = self._index(r, c)
        self.attributes[idx] &= ~attribute

    def room_id(self, r: int, c: int) -> int:
        return self.room_ids[self._index(r, c)]

    def set_room_id(self, r: int, c: int, room_id: int) -> None:
        self.room_ids[self._index(r, c)] = room_id

    def label(self, r: int, c: int) -> Optional[str]:
        return self.labels[self._index(r, c)]

    def set_label(self, r: int, c: int, label: str) -> None:
        idx = self._index(r, c)
        self.labels[idx] = label
        self.attributes[idx] |= CellAttribute.LABEL

    def reset(self, r: int, c: int) -> None:
        """Return a cell to its blank state."""
        idx = self._index(r, c)
        self.attributes[idx] = CellAttribute.NOTHING
        self.room_ids[idx] = 0
        self.labels[idx] = None

    def cell(self, r: int, c: int) -> Cell:
        idx = self._index(r, c)
        return Cell(self.attributes[idx], self.room_ids[idx], self.labels[idx])

    def matches(self, r: int, c: int, check: TunnelCheck) -> bool:
        """Test a tunnel check template anchored at (r, c)."""
        for dr, dc in check.corridor:
            rr, cc = r + dr, c + dc
            if not self.in_bounds(rr, cc) or not self.is_exactly(rr, cc, CellAttribute.CORRIDOR):
                return False
        for dr, dc in check.walled:
            rr, cc = r + dr, c + dc
            if self.in_bounds(rr, cc) and self.has(rr, cc, OPENSPACE):
                return False
        return True
