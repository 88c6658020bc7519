"""Core dataclasses used by the dungeon generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple

from dungeon_cells import CellAttribute
from dungeon_geometry import CellPos, Direction


class DoorType(Enum):
    """Door kinds, with the traits a renderer needs to draw them."""

    ARCH = "arch"
    OPEN = "open"
    LOCK = "lock"
    TRAP = "trap"
    SECRET = "secret"
    PORTC = "portc"

    @property
    def key(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _DOOR_DESCRIPTIONS[self]

    @property
    def attribute(self) -> CellAttribute:
        """Cell attribute stamped onto the door's cell once the door is final."""
        return _DOOR_ATTRIBUTES[self]

    # Every door kind has an arch; only some hang a leaf in it.
    @property
    def arch(self) -> bool:
        return True

    @property
    def door(self) -> bool:
        return self in (DoorType.OPEN, DoorType.LOCK, DoorType.TRAP)

    @property
    def lock(self) -> bool:
        return self is DoorType.LOCK

    @property
    def trap(self) -> bool:
        return self is DoorType.TRAP

    @property
    def secret(self) -> bool:
        return self is DoorType.SECRET

    @property
    def portc(self) -> bool:
        return self is DoorType.PORTC

    @property
    def wall(self) -> bool:
        return self is DoorType.SECRET


_DOOR_DESCRIPTIONS = {
    DoorType.ARCH: "Archway",
    DoorType.OPEN: "Unlocked Door",
    DoorType.LOCK: "Locked Door",
    DoorType.TRAP: "Trapped Door",
    DoorType.SECRET: "Secret Door",
    DoorType.PORTC: "Portcullis",
}

_DOOR_ATTRIBUTES = {
    DoorType.ARCH: CellAttribute.ARCH,
    DoorType.OPEN: CellAttribute.DOOR,
    DoorType.LOCK: CellAttribute.LOCKED,
    DoorType.TRAP: CellAttribute.TRAPPED,
    DoorType.SECRET: CellAttribute.SECRET,
    DoorType.PORTC: CellAttribute.PORTC,
}


class StairKind(Enum):
    UP = "up"
    DOWN = "down"

    @property
    def attribute(self) -> CellAttribute:
        return CellAttribute.STAIR_UP if self is StairKind.UP else CellAttribute.STAIR_DN

    @property
    def label(self) -> str:
        return "u" if self is StairKind.UP else "d"


@dataclass(frozen=True)
class Door:
    """A wall opening. ``out_id`` is the room on the far side, if any."""

    row: int
    col: int
    door_type: DoorType
    out_id: Optional[int] = None

    @property
    def pos(self) -> CellPos:
        return CellPos(self.row, self.col)


@dataclass(frozen=True)
class Sill:
    """Candidate door position along a room wall."""

    sill: CellPos
    direction: Direction
    door: CellPos
    out_id: Optional[int] = None


@dataclass
class RoomPrototype:
    """Partially specified room; missing fields are sampled at placement time."""

    i: Optional[int] = None
    j: Optional[int] = None
    height: Optional[int] = None
    width: Optional[int] = None


@dataclass(frozen=True)
class Stair:
    row: int
    col: int
    next_row: int
    next_col: int
    kind: StairKind


@dataclass
class PlacedRoom:
    """A room carved into the grid during generation.

    Bounds never change once placed. ``doors`` collects tentative doors per
    wall until the fix-up phase reconciles them.
    """

    id: int
    north: int
    south: int
    west: int
    east: int
    doors: Dict[Direction, List[Door]] = field(default_factory=dict)

    @property
    def height(self) -> int:
        return (self.south - self.north + 1) * 10

    @property
    def width(self) -> int:
        return (self.east - self.west + 1) * 10

    @property
    def area(self) -> int:
        return self.height * self.width

    def add_door(self, direction: Direction, door: Door) -> None:
        self.doors.setdefault(direction, []).append(door)


@dataclass(frozen=True)
class Room:
    """Immutable room record handed out in the final snapshot."""

    id: int
    north: int
    south: int
    west: int
    east: int
    doors: Mapping[Direction, Tuple[Door, ...]]

    def __hash__(self) -> int:
        # The door mapping is read-only but not hashable itself.
        doors = tuple((d, self.doors[d]) for d in Direction if d in self.doors)
        return hash((self.id, self.north, self.south, self.west, self.east, doors))

    @property
    def height(self) -> int:
        return (self.south - self.north + 1) * 10

    @property
    def width(self) -> int:
        return (self.east - self.west + 1) * 10

    @property
    def area(self) -> int:
        return self.height * self.width

    def all_doors(self) -> Tuple[Door, ...]:
        return tuple(door for direction in Direction for door in self.doors.get(direction, ()))
