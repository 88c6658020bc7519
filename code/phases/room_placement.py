"""Room placement: carve room rectangles into the grid, packed or scattered."""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from dungeon_cells import CellAttribute, ESPACE
from dungeon_config import RoomLayout
from dungeon_constants import MAX_ROOMS
from dungeon_models import PlacedRoom, RoomPrototype

if TYPE_CHECKING:
    from generation_context import GenerationContext

logger = logging.getLogger(__name__)

ROOM_OR_ENTRANCE = CellAttribute.ROOM | CellAttribute.ENTRANCE


class RoomPlacer:
    """Shared routines implementing the room placement strategies."""

    def __init__(self, context: GenerationContext) -> None:
        self.context = context
        self.grid = context.grid
        self.rng = context.rng
        self.room_base = context.config.room_base
        self.room_radix = context.config.room_radix

    def place_rooms(self) -> int:
        before = len(self.context.rooms)
        if self.context.config.room_layout is RoomLayout.PACKED:
            self.pack_rooms()
        else:
            self.scatter_rooms()
        return len(self.context.rooms) - before

    def pack_rooms(self) -> None:
        """Try a room at every free intersection, thinning out the first row and column."""
        for i in range(self.context.n_i):
            r = i * 2 + 1
            for j in range(self.context.n_j):
                c = j * 2 + 1
                if self.grid.has(r, c, CellAttribute.ROOM):
                    continue
                if (i == 0 or j == 0) and self.rng.randrange(2) == 0:
                    continue
                self.place_room(RoomPrototype(i=i, j=j))

    def scatter_rooms(self) -> None:
        for _ in range(self.alloc_rooms()):
            self.place_room()

    def alloc_rooms(self) -> int:
        dungeon_area = self.context.n_cols * self.context.n_rows
        room_area = self.context.config.room_max * self.context.config.room_max
        return dungeon_area // room_area

    def _sample_span(self, anchor: Optional[int], n: int) -> int:
        if anchor is None:
            return self.rng.randrange(self.room_radix) + self.room_base
        # Keep the room inside the grid when its anchor is already fixed; a room
        # may end flush with the far edge.
        remaining = max(0, n - self.room_base - anchor)
        radix = min(remaining + 1, self.room_radix)
        return self.rng.randrange(max(radix, 1)) + self.room_base

    def select_room(self, proto: RoomPrototype) -> Optional[RoomPrototype]:
        """Fill in the missing fields of ``proto``; None when no anchor fits."""
        if proto.height is None:
            proto.height = self._sample_span(proto.i, self.context.n_i)
        if proto.width is None:
            proto.width = self._sample_span(proto.j, self.context.n_j)
        if proto.i is None:
            span = self.context.n_i - proto.height
            if span <= 0:
                return None
            proto.i = self.rng.randrange(span)
        if proto.j is None:
            span = self.context.n_j - proto.width
            if span <= 0:
                return None
            proto.j = self.rng.randrange(span)
        return proto

    def place_room(self, proto: Optional[RoomPrototype] = None) -> Optional[PlacedRoom]:
        if len(self.context.rooms) >= MAX_ROOMS:
            return None

        room = self.select_room(proto if proto is not None else RoomPrototype())
        if room is None:
            return None

        r1 = room.i * 2 + 1
        c1 = room.j * 2 + 1
        r2 = (room.i + room.height) * 2 - 1
        c2 = (room.j + room.width) * 2 - 1

        if r1 < 1 or r2 > self.context.max_row or c1 < 1 or c2 > self.context.max_col:
            return None
        if not self.is_area_clear(r1, c1, r2, c2):
            return None

        room_id = len(self.context.rooms) + 1
        for r in range(r1, r2 + 1):
            for c in range(c1, c2 + 1):
                if self.grid.has(r, c, CellAttribute.ENTRANCE):
                    self.grid.remove(r, c, ESPACE)
                self.grid.remove(r, c, CellAttribute.PERIMETER)
                self.grid.add(r, c, CellAttribute.ROOM)
                self.grid.set_room_id(r, c, room_id)

        for r in range(r1 - 1, r2 + 2):
            self._mark_perimeter(r, c1 - 1)
            self._mark_perimeter(r, c2 + 1)
        for c in range(c1 - 1, c2 + 2):
            self._mark_perimeter(r1 - 1, c)
            self._mark_perimeter(r2 + 1, c)

        placed = PlacedRoom(id=room_id, north=r1, south=r2, west=c1, east=c2)
        self.context.rooms.append(placed)
        return placed

    def _mark_perimeter(self, r: int, c: int) -> None:
        if not self.grid.has(r, c, ROOM_OR_ENTRANCE):
            self.grid.add(r, c, CellAttribute.PERIMETER)

    def is_area_clear(self, r1: int, c1: int, r2: int, c2: int) -> bool:
        """True when no cell in the rectangle is blocked or belongs to a room."""
        for r in range(r1, r2 + 1):
            for c in range(c1, c2 + 1):
                if self.grid.has(r, c, CellAttribute.BLOCKED | CellAttribute.ROOM):
                    return False
        return True

    def label_rooms(self) -> int:
        """Write each room's id across the middle of its centre row."""
        for room in self.context.rooms:
            label = str(room.id)
            label_r = (room.north + room.south) // 2
            label_c = (room.west + room.east - len(label)) // 2 + 1
            for offset, char in enumerate(label):
                # Ids wider than the room are clipped to its own cells.
                if room.west <= label_c + offset <= room.east:
                    self.grid.set_label(label_r, label_c + offset, char)
        return len(self.context.rooms)


def run_room_placement(context: GenerationContext) -> int:
    placed = RoomPlacer(context).place_rooms()
    logger.debug(
        "Placed %d rooms using %s layout", placed, context.config.room_layout.name.lower()
    )
    return placed


def run_label_rooms(context: GenerationContext) -> int:
    return RoomPlacer(context).label_rooms()
