"""Context object holding the state of a single generation run."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Set, Tuple

from dungeon_cells import DungeonGrid
from dungeon_config import DungeonConfig
from dungeon_models import Door, PlacedRoom, Stair


@dataclass
class GenerationContext:
    """Encapsulates the grid, the random stream and the collections one run builds.

    Every phase receives the same context; nothing is shared between runs.
    """

    config: DungeonConfig
    rng: random.Random
    grid: DungeonGrid
    rooms: List[PlacedRoom] = field(default_factory=list)
    # Sorted room-id pairs that already have a door between them.
    connects: Set[Tuple[int, int]] = field(default_factory=set)
    doors: List[Door] = field(default_factory=list)
    stairs: List[Stair] = field(default_factory=list)

    @classmethod
    def create(cls, config: DungeonConfig, seed: int) -> GenerationContext:
        grid = DungeonGrid(config.n_rows, config.n_cols)
        return cls(config=config, rng=random.Random(seed), grid=grid)

    @property
    def n_i(self) -> int:
        return self.config.n_i

    @property
    def n_j(self) -> int:
        return self.config.n_j

    @property
    def n_rows(self) -> int:
        return self.grid.n_rows

    @property
    def n_cols(self) -> int:
        return self.grid.n_cols

    @property
    def max_row(self) -> int:
        return self.n_i * 2 - 1

    @property
    def max_col(self) -> int:
        return self.n_j * 2 - 1

