"""Configuration container for the dungeon generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Type, TypeVar

E = TypeVar("E", bound=Enum)


class DungeonLayout(Enum):
    """Overall dungeon shape, applied as a mask before any room is placed."""

    BOX = ((1, 1, 1), (1, 0, 1), (1, 1, 1))
    CROSS = ((0, 1, 0), (1, 1, 1), (0, 1, 0))
    ROUND = ()

    @property
    def pattern(self) -> Tuple[Tuple[int, ...], ...]:
        return self.value


class RoomLayout(Enum):
    PACKED = "packed"
    SCATTERED = "scattered"


class CorridorLayout(Enum):
    """Corridor styles; the value is the percent chance a tunnel keeps its heading."""

    LABYRINTH = 0
    BENT = 50
    STRAIGHT = 100

    @property
    def straightness(self) -> int:
        return self.value


def _coerce_enum(enum_cls: Type[E], value, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls[value.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"DungeonConfig {field_name} has unknown value {value!r}") from exc
    raise ValueError(f"DungeonConfig {field_name} must be a {enum_cls.__name__}, got {value!r}")


@dataclass
class DungeonConfig:
    """Aggregates all tunable parameters for dungeon generation."""

    # Requested grid size; both are rounded down to an even number of cells.
    rows: int = 79
    cols: int = 79
    # None leaves every cell available.
    dungeon_layout: Optional[DungeonLayout] = None
    room_min: int = 3
    room_max: int = 12
    room_layout: RoomLayout = RoomLayout.PACKED
    corridor_layout: CorridorLayout = CorridorLayout.BENT
    # Percent chance that each dead end is collapsed; 100 removes them all.
    remove_deadends: int = 20
    add_stairs: int = 2
    random_seed: int | None = None
    collect_metrics: bool = False

    def __post_init__(self) -> None:
        self.rows = int(self.rows)
        self.cols = int(self.cols)
        self.room_min = int(self.room_min)
        self.room_max = int(self.room_max)
        self.remove_deadends = int(self.remove_deadends)
        self.add_stairs = int(self.add_stairs)

        if self.rows <= 0 or self.cols <= 0:
            raise ValueError("DungeonConfig rows and cols must be positive")
        if self.room_min < 1:
            raise ValueError("DungeonConfig room_min must be at least 1")
        if self.room_max < self.room_min:
            raise ValueError("DungeonConfig room_max must be >= room_min")
        if not (0 <= self.remove_deadends <= 100):
            raise ValueError("DungeonConfig remove_deadends must lie within [0, 100]")
        if self.add_stairs < 0:
            raise ValueError("DungeonConfig add_stairs cannot be negative")

        if self.dungeon_layout is not None:
            self.dungeon_layout = _coerce_enum(DungeonLayout, self.dungeon_layout, "dungeon_layout")
        self.room_layout = _coerce_enum(RoomLayout, self.room_layout, "room_layout")
        self.corridor_layout = _coerce_enum(CorridorLayout, self.corridor_layout, "corridor_layout")

    @property
    def n_i(self) -> int:
        """Number of half-grid intersections down the rows."""
        return self.rows // 2

    @property
    def n_j(self) -> int:
        return self.cols // 2

    @property
    def n_rows(self) -> int:
        """Effective row count after rounding down to even."""
        return self.n_i * 2

    @property
    def n_cols(self) -> int:
        return self.n_j * 2

    @property
    def room_base(self) -> int:
        return (self.room_min + 1) // 2

    @property
    def room_radix(self) -> int:
        return (self.room_max - self.room_min) // 2 + 1
