from .layout_mask import run_layout_mask
from .room_placement import run_label_rooms, run_room_placement
from .doors import run_fix_doors, run_open_rooms
from .corridors import run_corridors
from .stairs import run_stair_placement
from .dead_ends import run_dead_end_collapse, run_empty_blocks

__all__ = [
    "run_layout_mask",
    "run_room_placement",
    "run_open_rooms",
    "run_label_rooms",
    "run_corridors",
    "run_stair_placement",
    "run_dead_end_collapse",
    "run_fix_doors",
    "run_empty_blocks",
]
