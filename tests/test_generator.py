import json
import logging
from pathlib import Path

import pytest

from dungeon_cells import DOORSPACE, OPENSPACE, CellAttribute
from dungeon_config import DungeonConfig
from dungeon_geometry import Direction
from dungeon_generator import DungeonGenerator, generate_dungeon
from dungeon_models import StairKind

GOLDEN_DIR = Path(__file__).resolve().parent / "golden"
SEEDS = [0, 1, 7, 42, 1234]


def room_cells(room):
    return {
        (r, c)
        for r in range(room.north, room.south + 1)
        for c in range(room.west, room.east + 1)
    }


def test_same_seed_gives_identical_snapshots():
    config = DungeonConfig(rows=41, cols=41, random_seed=99)

    first = generate_dungeon(config)
    second = generate_dungeon(config)

    assert first.to_dict() == second.to_dict()
    assert first == second


def test_different_seeds_give_different_dungeons():
    first = generate_dungeon(DungeonConfig(rows=41, cols=41, random_seed=1))
    second = generate_dungeon(DungeonConfig(rows=41, cols=41, random_seed=2))

    assert first.to_dict() != second.to_dict()


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("room_layout", ["packed", "scattered"])
def test_rooms_are_disjoint_and_own_their_cells(seed, room_layout):
    snapshot = generate_dungeon(
        DungeonConfig(rows=51, cols=51, room_layout=room_layout, random_seed=seed)
    )

    seen = set()
    for room in snapshot.rooms:
        cells = room_cells(room)
        assert not cells & seen
        seen |= cells
        for r, c in cells:
            cell = snapshot.cell(r, c)
            assert cell.has(CellAttribute.ROOM)
            assert cell.room_id == room.id


@pytest.mark.parametrize("seed", SEEDS)
def test_doors_are_marked_and_reachable(seed):
    snapshot = generate_dungeon(DungeonConfig(rows=51, cols=51, random_seed=seed))

    assert snapshot.doors
    for door in snapshot.doors:
        cell = snapshot.cell(door.row, door.col)
        assert cell.has(DOORSPACE)
        assert cell.has(door.door_type.attribute)
        assert cell.has(OPENSPACE)
        neighbours = [
            snapshot.cell(door.row + direction.dr, door.col + direction.dc)
            for direction in Direction
        ]
        assert any(neighbour.has(OPENSPACE) for neighbour in neighbours)


@pytest.mark.parametrize("seed", SEEDS)
def test_linked_doors_are_listed_by_both_rooms(seed):
    snapshot = generate_dungeon(DungeonConfig(rows=51, cols=51, random_seed=seed))

    assert len(set(snapshot.doors)) == len(snapshot.doors)
    for door in snapshot.doors:
        listings = [
            (room.id, direction)
            for room in snapshot.rooms
            for direction, doors in room.doors.items()
            for listed in doors
            if listed == door
        ]
        if door.out_id is None:
            assert len(listings) == 1
            continue
        assert len(listings) == 2
        (room_a, dir_a), (room_b, dir_b) = listings
        assert room_a != room_b
        assert door.out_id in (room_a, room_b)
        assert dir_a.opposite() is dir_b


@pytest.mark.parametrize("seed", SEEDS)
def test_no_dead_ends_survive_full_removal(seed):
    snapshot = generate_dungeon(
        DungeonConfig(rows=41, cols=41, remove_deadends=100, random_seed=seed)
    )

    for r in range(snapshot.height):
        for c in range(snapshot.width):
            if snapshot.cell(r, c).attributes != CellAttribute.CORRIDOR:
                continue
            for direction in Direction:
                assert not _matches(snapshot, r, c, direction.close_end), (r, c, direction)


def _matches(snapshot, r, c, check):
    for dr, dc in check.corridor:
        if not snapshot.in_bounds(r + dr, c + dc):
            return False
        if snapshot.cell(r + dr, c + dc).attributes != CellAttribute.CORRIDOR:
            return False
    for dr, dc in check.walled:
        if snapshot.in_bounds(r + dr, c + dc) and snapshot.cell(r + dr, c + dc).has(OPENSPACE):
            return False
    return True


def test_first_stairs_go_down_then_up():
    placed = 0
    for seed in SEEDS:
        snapshot = generate_dungeon(DungeonConfig(random_seed=seed))
        kinds = [stair.kind for stair in snapshot.stairs]
        assert kinds == [StairKind.DOWN, StairKind.UP][: len(kinds)]
        for stair in snapshot.stairs:
            cell = snapshot.cell(stair.row, stair.col)
            assert cell.has(stair.kind.attribute)
            assert cell.label == stair.kind.label
        placed += len(kinds)
    assert placed > 0


@pytest.mark.parametrize("layout", ["box", "cross", "round"])
def test_masked_layouts_leave_no_blocked_cells(layout):
    snapshot = generate_dungeon(DungeonConfig(rows=41, cols=41, dungeon_layout=layout, random_seed=5))

    assert snapshot.rooms
    assert not any(attributes & CellAttribute.BLOCKED for attributes in snapshot.attributes)


@pytest.mark.parametrize("rows,cols", [(1, 1), (1, 20), (20, 1)])
def test_degenerate_grid_generates_without_rooms(rows, cols):
    snapshot = generate_dungeon(DungeonConfig(rows=rows, cols=cols, random_seed=3))

    assert snapshot.n_rows == rows // 2 * 2
    assert snapshot.n_cols == cols // 2 * 2
    assert snapshot.rooms == ()
    assert snapshot.doors == ()
    assert snapshot.stairs == ()


def test_unseeded_run_picks_and_logs_a_seed(caplog):
    with caplog.at_level(logging.INFO, logger="dungeon_generator"):
        snapshot = generate_dungeon(DungeonConfig(rows=21, cols=21))

    assert 0 <= snapshot.seed <= 1_000_000
    assert f"using {snapshot.seed}" in caplog.text
    assert generate_dungeon(DungeonConfig(rows=21, cols=21, random_seed=snapshot.seed)) == snapshot


def test_metrics_record_every_phase():
    generator = DungeonGenerator(
        DungeonConfig(rows=41, cols=41, random_seed=8, collect_metrics=True)
    )

    snapshot = generator.generate()

    phases = generator.metrics.snapshot()
    assert list(phases) == [
        "layout_mask",
        "room_placement",
        "open_rooms",
        "label_rooms",
        "corridors",
        "stairs",
        "dead_ends",
        "fix_doors",
        "empty_blocks",
    ]
    assert all(phase["invocations"] == 1 for phase in phases.values())
    assert phases["room_placement"]["total_rooms_added"] == len(snapshot.rooms)
    assert phases["fix_doors"]["total_doors_added"] == len(snapshot.doors)
    assert phases["stairs"]["total_stairs_added"] == len(snapshot.stairs)


def test_dead_end_phase_skipped_when_disabled():
    generator = DungeonGenerator(
        DungeonConfig(rows=21, cols=21, remove_deadends=0, random_seed=8, collect_metrics=True)
    )
    generator.generate()

    assert "dead_ends" not in generator.metrics.snapshot()


def test_metrics_off_by_default():
    generator = DungeonGenerator(DungeonConfig(rows=21, cols=21, random_seed=8))
    generator.generate()

    assert generator.metrics is None


def test_packed_10x10_seed42_matches_golden():
    config = DungeonConfig(
        rows=10,
        cols=10,
        dungeon_layout=None,
        room_min=3,
        room_max=5,
        room_layout="packed",
        corridor_layout="straight",
        remove_deadends=0,
        add_stairs=0,
        random_seed=42,
    )
    result = generate_dungeon(config).to_dict()
    assert generate_dungeon(config).to_dict() == result

    expected = json.loads((GOLDEN_DIR / "packed_10x10_seed42.json").read_text(encoding="utf-8"))
    assert json.loads(json.dumps(result)) == expected
    assert (len(result["rooms"]), len(result["doors"])) == (3, 4)
