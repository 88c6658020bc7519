"""Connectivity analysis of finished dungeons.

Nothing here feeds back into generation; it is used by the benchmark script and
by tests that want to reason about how rooms are reachable from one another.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Tuple

import networkx as nx

from dungeon_cells import OPENSPACE, CellAttribute
from dungeon_geometry import Direction
from dungeon_snapshot import DungeonSnapshot


@dataclass(frozen=True)
class DungeonStats:
    room_count: int
    door_count: int
    stair_count: int
    open_cells: int
    room_components: int
    largest_component_fraction: float
    cycle_count: int
    diameter: int


def is_corridor_cell(snapshot: DungeonSnapshot, r: int, c: int) -> bool:
    """Corridor cells outside any room; tunnels through rooms count as room."""
    attributes = snapshot.cell(r, c).attributes
    return bool(attributes & CellAttribute.CORRIDOR) and not attributes & CellAttribute.ROOM


def corridor_regions(snapshot: DungeonSnapshot) -> Dict[Tuple[int, int], int]:
    """Map every corridor cell to the index of its 4-connected region.

    Regions are numbered in order of their first cell in row-major order.
    """
    cells = nx.Graph()
    for r in range(snapshot.height):
        for c in range(snapshot.width):
            if not is_corridor_cell(snapshot, r, c):
                continue
            cells.add_node((r, c))
            for direction in (Direction.NORTH, Direction.WEST):
                nr, nc = r + direction.dr, c + direction.dc
                if snapshot.in_bounds(nr, nc) and is_corridor_cell(snapshot, nr, nc):
                    cells.add_edge((r, c), (nr, nc))

    components = sorted(nx.connected_components(cells), key=min)
    region_of: Dict[Tuple[int, int], int] = {}
    for index, component in enumerate(components):
        for cell in component:
            region_of[cell] = index
    return region_of


def build_connectivity_graph(snapshot: DungeonSnapshot) -> nx.Graph:
    """Rooms and corridor regions as nodes, joined wherever a door sits between them."""
    graph = nx.Graph()
    for room in snapshot.rooms:
        graph.add_node(("room", room.id))

    region_of = corridor_regions(snapshot)
    for region in set(region_of.values()):
        graph.add_node(("corridor", region))

    for door in snapshot.doors:
        region = region_of.get((door.row, door.col))
        if region is None:
            continue
        for direction in Direction:
            r, c = door.row + direction.dr, door.col + direction.dc
            if not snapshot.in_bounds(r, c):
                continue
            cell = snapshot.cell(r, c)
            if cell.has(CellAttribute.ROOM) and cell.room_id:
                graph.add_edge(("corridor", region), ("room", cell.room_id))
    return graph


def build_room_graph(snapshot: DungeonSnapshot) -> nx.Graph:
    """Room-only view: two rooms are linked when doors open both onto one corridor region."""
    connectivity = build_connectivity_graph(snapshot)
    graph = nx.Graph()
    for room in snapshot.rooms:
        graph.add_node(room.id)

    for node in connectivity.nodes:
        kind, _ = node
        if kind != "corridor":
            continue
        room_ids = sorted(room_id for _, room_id in connectivity.neighbors(node))
        for room_a, room_b in combinations(room_ids, 2):
            graph.add_edge(room_a, room_b)

    return graph


def analyze_dungeon(snapshot: DungeonSnapshot) -> DungeonStats:
    graph = build_room_graph(snapshot)
    total_rooms = len(snapshot.rooms)

    components = list(nx.connected_components(graph))
    largest_component_fraction = 0.0
    diameter = 0
    if components and total_rooms:
        largest = max(components, key=len)
        largest_component_fraction = len(largest) / total_rooms
        if len(largest) >= 2:
            diameter = int(nx.diameter(graph.subgraph(largest)))

    open_cells = sum(1 for attributes in snapshot.attributes if attributes & OPENSPACE)
    return DungeonStats(
        room_count=total_rooms,
        door_count=len(snapshot.doors),
        stair_count=len(snapshot.stairs),
        open_cells=open_cells,
        room_components=len(components),
        largest_component_fraction=largest_component_fraction,
        cycle_count=len(nx.cycle_basis(graph)),
        diameter=diameter,
    )
