from dungeon_cells import CellAttribute
from phases.layout_mask import run_layout_mask


def blocked_cells(context):
    grid = context.grid
    return {
        (r, c)
        for r in range(grid.n_rows + 1)
        for c in range(grid.n_cols + 1)
        if grid.has(r, c, CellAttribute.BLOCKED)
    }


def test_no_layout_leaves_grid_open(make_context):
    context = make_context(dungeon_layout=None)

    assert run_layout_mask(context) == 0
    assert not blocked_cells(context)


def test_box_layout_blocks_the_centre(make_context):
    context = make_context(dungeon_layout="box")

    assert run_layout_mask(context) == 16
    assert blocked_cells(context) == {(r, c) for r in range(4, 8) for c in range(4, 8)}


def test_cross_layout_blocks_the_corners(make_context):
    context = make_context(dungeon_layout="cross")
    band = list(range(0, 4)) + list(range(8, 11))

    assert run_layout_mask(context) == 49
    assert blocked_cells(context) == {(r, c) for r in band for c in band}


def test_round_layout_blocks_outside_the_circle(make_context):
    context = make_context(dungeon_layout="round")
    run_layout_mask(context)
    blocked = blocked_cells(context)

    assert (0, 0) in blocked
    assert (0, 1) in blocked
    assert (5, 0) not in blocked
    assert (0, 5) not in blocked
    assert (1, 1) not in blocked
    assert (5, 5) not in blocked
