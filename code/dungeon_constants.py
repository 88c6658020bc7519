"""Shared constants for the dungeon generator."""

from __future__ import annotations

from dungeon_models import DoorType

MAX_ROOMS = 999  # Further placement attempts are ignored once this many rooms exist.

# Door kinds are drawn from randrange(DOOR_TYPE_ROLL) and mapped through these
# exclusive upper bounds, in order.
DOOR_TYPE_ROLL = 110
DOOR_TYPE_THRESHOLDS = (
    (15, DoorType.ARCH),
    (60, DoorType.OPEN),
    (75, DoorType.LOCK),
    (90, DoorType.TRAP),
    (100, DoorType.SECRET),
    (110, DoorType.PORTC),
)

# Sides closer than this to the dungeon edge never get doors.
MIN_SILL_EDGE_DISTANCE = 3
# Candidate sills are spaced this many cells apart along a wall.
SILL_SPACING = 2

# Upper bound used when picking a seed for unseeded runs.
MAX_AUTO_SEED = 1_000_000
