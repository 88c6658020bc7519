"""DungeonGenerator runs the generation phases in order and freezes the result."""

from __future__ import annotations

import logging
import random
from time import perf_counter
from typing import Callable, Optional

from dungeon_config import DungeonConfig
from dungeon_constants import MAX_AUTO_SEED
from dungeon_snapshot import DungeonSnapshot, freeze
from generation_context import GenerationContext
from metrics import GenerationMetrics
from phases import (
    run_corridors,
    run_dead_end_collapse,
    run_empty_blocks,
    run_fix_doors,
    run_label_rooms,
    run_layout_mask,
    run_open_rooms,
    run_room_placement,
    run_stair_placement,
)

logger = logging.getLogger(__name__)


class DungeonGenerator:
    """Manages the overall process of generating one dungeon level.

    A generator may be reused; each call to ``generate`` owns a fresh context
    and random stream, while metrics accumulate across calls.
    """

    def __init__(
        self, config: DungeonConfig, metrics: Optional[GenerationMetrics] = None
    ) -> None:
        self.config = config
        if metrics is None and config.collect_metrics:
            metrics = GenerationMetrics()
        self.metrics = metrics
        self.context: Optional[GenerationContext] = None

    def _run_phase(
        self,
        name: str,
        func: Callable[..., int],
        *args,
        **kwargs,
    ) -> int:
        if self.metrics is None:
            return func(*args, **kwargs)

        context = self.context
        assert context is not None
        rooms_before = len(context.rooms)
        doors_before = len(context.doors)
        stairs_before = len(context.stairs)
        start = perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            duration = perf_counter() - start
            self.metrics.record_phase_run(
                name,
                duration,
                len(context.rooms) - rooms_before,
                len(context.doors) - doors_before,
                len(context.stairs) - stairs_before,
            )

    def choose_seed(self) -> int:
        if self.config.random_seed is not None:
            return self.config.random_seed
        seed = random.randint(0, MAX_AUTO_SEED)
        logger.info("No random seed configured; using %d", seed)
        return seed

    def generate(self) -> DungeonSnapshot:
        """Generates the dungeon and returns an immutable snapshot of it."""
        seed = self.choose_seed()
        context = GenerationContext.create(self.config, seed)
        self.context = context

        self._run_phase("layout_mask", run_layout_mask, context)
        self._run_phase("room_placement", run_room_placement, context)
        self._run_phase("open_rooms", run_open_rooms, context)
        self._run_phase("label_rooms", run_label_rooms, context)
        self._run_phase("corridors", run_corridors, context)
        self._run_phase("stairs", run_stair_placement, context)
        if self.config.remove_deadends > 0:
            self._run_phase("dead_ends", run_dead_end_collapse, context)
        self._run_phase("fix_doors", run_fix_doors, context)
        self._run_phase("empty_blocks", run_empty_blocks, context)

        snapshot = freeze(context, seed)
        logger.info(
            "Generated %dx%d dungeon (seed %d): %d rooms, %d doors, %d stairs",
            snapshot.n_rows,
            snapshot.n_cols,
            seed,
            len(snapshot.rooms),
            len(snapshot.doors),
            len(snapshot.stairs),
        )
        return snapshot


def generate_dungeon(config: DungeonConfig) -> DungeonSnapshot:
    return DungeonGenerator(config).generate()
