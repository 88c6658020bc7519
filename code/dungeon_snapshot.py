"""Immutable result of a generation run, and its JSON-compatible form."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING

from dungeon_cells import Cell, CellAttribute
from dungeon_models import Door, Room, Stair

if TYPE_CHECKING:
    from generation_context import GenerationContext


@dataclass(frozen=True)
class DungeonSnapshot:
    """Read-only dungeon handed to renderers and analysis code.

    Cell data is stored row-major in flat tuples of ``(n_rows + 1) * (n_cols + 1)``
    entries.
    """

    seed: int
    n_rows: int
    n_cols: int
    attributes: Tuple[CellAttribute, ...]
    room_ids: Tuple[int, ...]
    labels: Tuple[Optional[str], ...]
    rooms: Tuple[Room, ...]
    doors: Tuple[Door, ...]
    stairs: Tuple[Stair, ...]

    @property
    def width(self) -> int:
        return self.n_cols + 1

    @property
    def height(self) -> int:
        return self.n_rows + 1

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r <= self.n_rows and 0 <= c <= self.n_cols

    def cell(self, r: int, c: int) -> Cell:
        assert self.in_bounds(r, c), f"cell {(r, c)} outside {self.n_rows}x{self.n_cols} grid"
        idx = r * self.width + c
        return Cell(self.attributes[idx], self.room_ids[idx], self.labels[idx])

    def rows(self) -> Iterator[Tuple[Cell, ...]]:
        for r in range(self.height):
            yield tuple(self.cell(r, c) for c in range(self.width))

    def room_by_id(self, room_id: int) -> Optional[Room]:
        if 1 <= room_id <= len(self.rooms):
            return self.rooms[room_id - 1]
        return None

    def to_dict(self) -> Dict[str, Any]:
        width = self.width

        def by_row(values: Tuple[Any, ...]) -> List[List[Any]]:
            return [list(values[r * width : (r + 1) * width]) for r in range(self.height)]

        return {
            "seed": self.seed,
            "n_rows": self.n_rows,
            "n_cols": self.n_cols,
            "cells": by_row(tuple(int(attr) for attr in self.attributes)),
            "room_ids": by_row(self.room_ids),
            "labels": by_row(self.labels),
            "rooms": [_room_to_dict(room) for room in self.rooms],
            "doors": [_door_to_dict(door) for door in self.doors],
            "stairs": [
                {
                    "row": stair.row,
                    "col": stair.col,
                    "next_row": stair.next_row,
                    "next_col": stair.next_col,
                    "kind": stair.kind.name,
                }
                for stair in self.stairs
            ],
        }


def _door_to_dict(door: Door) -> Dict[str, Any]:
    return {
        "row": door.row,
        "col": door.col,
        "type": door.door_type.name,
        "out_id": door.out_id,
    }


def _room_to_dict(room: Room) -> Dict[str, Any]:
    return {
        "id": room.id,
        "north": room.north,
        "south": room.south,
        "west": room.west,
        "east": room.east,
        "height": room.height,
        "width": room.width,
        "area": room.area,
        "doors": {
            direction.name: [_door_to_dict(door) for door in doors]
            for direction, doors in room.doors.items()
        },
    }


def freeze(context: GenerationContext, seed: int) -> DungeonSnapshot:
    """Copy the finished run out of ``context`` into a snapshot."""
    rooms = tuple(
        Room(
            id=room.id,
            north=room.north,
            south=room.south,
            west=room.west,
            east=room.east,
            doors=MappingProxyType(
                {direction: tuple(doors) for direction, doors in room.doors.items()}
            ),
        )
        for room in context.rooms
    )
    grid = context.grid
    return DungeonSnapshot(
        seed=seed,
        n_rows=grid.n_rows,
        n_cols=grid.n_cols,
        attributes=tuple(grid.attributes),
        room_ids=tuple(grid.room_ids),
        labels=tuple(grid.labels),
        rooms=rooms,
        doors=tuple(context.doors),
        stairs=tuple(context.stairs),
    )
