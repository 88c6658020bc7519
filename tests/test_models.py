import pytest

from dungeon_cells import DOORSPACE, CellAttribute
from dungeon_geometry import CellPos, Direction
from dungeon_models import Door, DoorType, PlacedRoom, StairKind


@pytest.mark.parametrize(
    "door_type,key,description,attribute",
    [
        (DoorType.ARCH, "arch", "Archway", CellAttribute.ARCH),
        (DoorType.OPEN, "open", "Unlocked Door", CellAttribute.DOOR),
        (DoorType.LOCK, "lock", "Locked Door", CellAttribute.LOCKED),
        (DoorType.TRAP, "trap", "Trapped Door", CellAttribute.TRAPPED),
        (DoorType.SECRET, "secret", "Secret Door", CellAttribute.SECRET),
        (DoorType.PORTC, "portc", "Portcullis", CellAttribute.PORTC),
    ],
)
def test_door_type_descriptions_and_cell_marks(door_type, key, description, attribute):
    assert door_type.key == key
    assert door_type.description == description
    assert door_type.attribute is attribute
    assert door_type.attribute in DOORSPACE
    assert door_type.arch


def test_door_type_traits():
    assert [t for t in DoorType if t.door] == [DoorType.OPEN, DoorType.LOCK, DoorType.TRAP]
    assert [t for t in DoorType if t.lock] == [DoorType.LOCK]
    assert [t for t in DoorType if t.trap] == [DoorType.TRAP]
    assert [t for t in DoorType if t.secret] == [DoorType.SECRET]
    assert [t for t in DoorType if t.wall] == [DoorType.SECRET]
    assert [t for t in DoorType if t.portc] == [DoorType.PORTC]


def test_stair_kinds_map_to_flags_and_labels():
    assert (StairKind.DOWN.attribute, StairKind.DOWN.label) == (CellAttribute.STAIR_DN, "d")
    assert (StairKind.UP.attribute, StairKind.UP.label) == (CellAttribute.STAIR_UP, "u")


def test_placed_room_dimensions_and_doors():
    room = PlacedRoom(id=1, north=3, south=7, west=5, east=5)
    door = Door(2, 5, DoorType.ARCH)

    room.add_door(Direction.NORTH, door)
    room.add_door(Direction.NORTH, Door(2, 7, DoorType.OPEN, out_id=2))

    assert (room.height, room.width, room.area) == (50, 10, 500)
    assert room.doors[Direction.NORTH][0] is door
    assert len(room.doors[Direction.NORTH]) == 2
    assert door.pos == CellPos(2, 5)
