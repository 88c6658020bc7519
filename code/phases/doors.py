"""Door resolution: open sills in room walls, then reconcile the tentative doors."""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, TYPE_CHECKING

from dungeon_cells import BLOCK_DOOR, DOORSPACE, OPENSPACE, CellAttribute
from dungeon_constants import (
    DOOR_TYPE_ROLL,
    DOOR_TYPE_THRESHOLDS,
    MIN_SILL_EDGE_DISTANCE,
    SILL_SPACING,
)
from dungeon_geometry import CellPos, Direction
from dungeon_models import Door, DoorType, PlacedRoom, Sill

if TYPE_CHECKING:
    from generation_context import GenerationContext

logger = logging.getLogger(__name__)

DoorMap = Dict[Direction, List[Door]]


class DoorBuilder:
    """Opens doors per room and later promotes the surviving ones."""

    def __init__(self, context: GenerationContext) -> None:
        self.context = context
        self.grid = context.grid
        self.rng = context.rng

    # ------------------------------------------------------------------
    # Opening phase
    # ------------------------------------------------------------------

    def open_rooms(self) -> int:
        return sum(self.open_room(room) for room in self.context.rooms)

    def open_room(self, room: PlacedRoom) -> int:
        sills = self.door_sills(room)
        if not sills:
            return 0

        opened = 0
        for sill in sills[: self.alloc_opens(room)]:
            door_r, door_c = sill.door
            if self.grid.has(door_r, door_c, DOORSPACE):
                continue

            if sill.out_id is not None:
                connect_key = (min(room.id, sill.out_id), max(room.id, sill.out_id))
                if connect_key in self.context.connects:
                    continue
                self.context.connects.add(connect_key)

            for x in range(3):
                r, c = sill.sill.step(sill.direction, x)
                self.grid.remove(r, c, CellAttribute.PERIMETER)
                self.grid.add(r, c, CellAttribute.ENTRANCE)

            door = Door(row=door_r, col=door_c, door_type=self.door_type(), out_id=sill.out_id)
            room.add_door(sill.direction, door)
            opened += 1
        return opened

    def alloc_opens(self, room: PlacedRoom) -> int:
        """How many sills to try: a random count scaled by the room's size."""
        room_h = (room.south - room.north) // 2 + 1
        room_w = (room.east - room.west) // 2 + 1
        linear_measure = math.isqrt(room_w * room_h)
        return linear_measure + self.rng.randrange(linear_measure)

    def door_type(self) -> DoorType:
        roll = self.rng.randrange(DOOR_TYPE_ROLL)
        for upper, door_type in DOOR_TYPE_THRESHOLDS:
            if roll < upper:
                return door_type
        raise AssertionError(f"Door roll {roll} outside thresholds")

    def door_sills(self, room: PlacedRoom) -> List[Sill]:
        """Collect the valid sills along every wall, in shuffled order."""
        sills: List[Sill] = []
        n_rows = self.context.n_rows
        n_cols = self.context.n_cols

        if room.north >= MIN_SILL_EDGE_DISTANCE:
            for c in range(room.west, room.east + 1, SILL_SPACING):
                self._add_sill(sills, room, room.north, c, Direction.NORTH)
        if room.south <= n_rows - MIN_SILL_EDGE_DISTANCE:
            for c in range(room.west, room.east + 1, SILL_SPACING):
                self._add_sill(sills, room, room.south, c, Direction.SOUTH)
        if room.west >= MIN_SILL_EDGE_DISTANCE:
            for r in range(room.north, room.south + 1, SILL_SPACING):
                self._add_sill(sills, room, r, room.west, Direction.WEST)
        if room.east <= n_cols - MIN_SILL_EDGE_DISTANCE:
            for r in range(room.north, room.south + 1, SILL_SPACING):
                self._add_sill(sills, room, r, room.east, Direction.EAST)

        self.rng.shuffle(sills)
        return sills

    def _add_sill(
        self, sills: List[Sill], room: PlacedRoom, sill_r: int, sill_c: int, direction: Direction
    ) -> None:
        sill = self.check_sill(room, sill_r, sill_c, direction)
        if sill is not None:
            sills.append(sill)

    def check_sill(
        self, room: PlacedRoom, sill_r: int, sill_c: int, direction: Direction
    ) -> Optional[Sill]:
        sill_pos = CellPos(sill_r, sill_c)
        door_pos = sill_pos.step(direction)
        if not self.grid.has(*door_pos, CellAttribute.PERIMETER):
            return None
        if self.grid.has(*door_pos, BLOCK_DOOR):
            return None

        out_pos = door_pos.step(direction)
        if self.grid.has(*out_pos, CellAttribute.BLOCKED):
            return None

        out_id: Optional[int] = None
        if self.grid.has(*out_pos, CellAttribute.ROOM):
            out_id = self.grid.room_id(*out_pos)
            if out_id == room.id:
                return None
        return Sill(sill=sill_pos, direction=direction, door=door_pos, out_id=out_id)

    # ------------------------------------------------------------------
    # Fix-up phase
    # ------------------------------------------------------------------

    def fix_doors(self) -> int:
        """Keep doors whose cells ended up open, then cross-register linked rooms.

        A cell is claimed by the first door that reaches it, so two rooms that
        both opened the same wall cell produce a single door.
        """
        claimed = bytearray(len(self.grid.attributes))
        kept_by_room: List[DoorMap] = []
        for room in self.context.rooms:
            kept: DoorMap = {}
            for direction in Direction:
                for door in room.doors.get(direction, ()):
                    idx = door.row * self.grid.width + door.col
                    if not self.grid.has(door.row, door.col, OPENSPACE) or claimed[idx]:
                        continue
                    claimed[idx] = 1
                    kept.setdefault(direction, []).append(door)
            kept_by_room.append(kept)

        final: List[DoorMap] = [
            {direction: list(doors) for direction, doors in kept.items()} for kept in kept_by_room
        ]
        for kept in kept_by_room:
            for direction in Direction:
                for door in kept.get(direction, ()):
                    self.grid.add(door.row, door.col, door.door_type.attribute)
                    self.context.doors.append(door)
                    if door.out_id is not None:
                        target = final[door.out_id - 1]
                        target.setdefault(direction.opposite(), []).append(door)

        for room, doors in zip(self.context.rooms, final):
            room.doors = {direction: doors[direction] for direction in Direction if direction in doors}
        return len(self.context.doors)


def run_open_rooms(context: GenerationContext) -> int:
    opened = DoorBuilder(context).open_rooms()
    logger.debug("Opened %d doors across %d rooms", opened, len(context.rooms))
    return opened


def run_fix_doors(context: GenerationContext) -> int:
    kept = DoorBuilder(context).fix_doors()
    logger.debug("Kept %d doors after reconciliation", kept)
    return kept
