import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
CODE_DIR = ROOT_DIR / "code"
if str(CODE_DIR) not in sys.path:
    sys.path.insert(0, str(CODE_DIR))

from dungeon_config import CorridorLayout, DungeonConfig, RoomLayout
from generation_context import GenerationContext


@pytest.fixture
def make_config() -> Callable[..., DungeonConfig]:
    def _make_config(**overrides) -> DungeonConfig:
        params = dict(
            rows=10,
            cols=10,
            room_min=3,
            room_max=5,
            room_layout=RoomLayout.PACKED,
            corridor_layout=CorridorLayout.STRAIGHT,
            remove_deadends=0,
            add_stairs=0,
            random_seed=42,
        )
        params.update(overrides)
        return DungeonConfig(**params)

    return _make_config


@pytest.fixture
def make_context(make_config) -> Callable[..., GenerationContext]:
    def _make_context(*, seed: int = 0, **overrides) -> GenerationContext:
        return GenerationContext.create(make_config(**overrides), seed)

    return _make_context


class FixedRandom:
    """Stand-in random stream that replays scripted randrange results."""

    def __init__(self, values):
        self.values = list(values)

    def randrange(self, n):
        value = self.values.pop(0)
        assert 0 <= value < n
        return value

    def shuffle(self, items):
        pass

    def choice(self, items):
        return items[0]


@pytest.fixture
def fixed_random() -> Callable[..., FixedRandom]:
    return FixedRandom
