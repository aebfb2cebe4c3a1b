# gallery/classifier.py
"""Exterior vs shared wall classification for rectangular room sets."""
import itertools
import logging
from typing import Dict, Iterator, Optional, Sequence, Tuple

import networkx as nx

from gallery.model import NORTH, OPPOSITE_WALL, SOUTH, WALL_ORDER, PlacementConfig, Room

logger = logging.getLogger(__name__)


def _half_extent_along(room: Room, wall: str) -> float:
    return room.half_width if wall in (NORTH, SOUTH) else room.half_length


def faces_neighbor(room: Room, wall: str, other: Room, tolerance: float) -> bool:
    """True if ``other``'s opposing wall lines up with ``room``'s ``wall``.

    The opposing walls must sit within ``tolerance`` of each other on the
    perpendicular axis, and the two rooms must overlap along the wall by more
    than ``tolerance``.
    """
    mine = room.wall_midpoint(wall)
    theirs = other.wall_midpoint(OPPOSITE_WALL[wall])
    # index of the coordinate perpendicular to the wall in (x, z)
    axis = 1 if wall in (NORTH, SOUTH) else 0
    perpendicular = abs(theirs[axis] - mine[axis])
    parallel = abs(theirs[1 - axis] - mine[1 - axis])
    reach = _half_extent_along(room, wall) + _half_extent_along(other, wall)
    return perpendicular < tolerance and parallel < reach - tolerance


def is_external_wall(room: Room, wall_id: str, rooms: Sequence[Room], wall_thickness: float) -> bool:
    """A wall is external when no other room in ``rooms`` shares it."""
    tolerance = wall_thickness * 2
    for other in rooms:
        if other.id == room.id:
            continue
        if faces_neighbor(room, wall_id, other, tolerance):
            return False
    return True


def classify_walls(room: Room, rooms: Sequence[Room], wall_thickness: float) -> Dict[str, bool]:
    return {wall: is_external_wall(room, wall, rooms, wall_thickness) for wall in WALL_ORDER}


def shared_walls(rooms: Sequence[Room], wall_thickness: float) -> Iterator[Tuple[Room, str, Room, str]]:
    """Yield ``(room_a, wall_a, room_b, wall_b)`` for each shared wall pair."""
    tolerance = wall_thickness * 2
    for a, b in itertools.combinations(rooms, 2):
        for wall in WALL_ORDER:
            if faces_neighbor(a, wall, b, tolerance):
                yield a, wall, b, OPPOSITE_WALL[wall]


def adjacency_graph(rooms: Sequence[Room], wall_thickness: float) -> nx.Graph:
    """Room graph with one edge per shared wall; ``door`` marks a walkable connection."""
    graph = nx.Graph()
    for room in rooms:
        graph.add_node(room.id, area=room.area)
    for a, wall_a, b, wall_b in shared_walls(rooms, wall_thickness):
        door = a.has_door(wall_a) or b.has_door(wall_b)
        graph.add_edge(a.id, b.id, walls=(wall_a, wall_b), door=door)
    return graph


def door_graph(rooms: Sequence[Room], wall_thickness: float) -> nx.Graph:
    """Subgraph of :func:`adjacency_graph` keeping only connections through a door."""
    graph = adjacency_graph(rooms, wall_thickness)
    walkable = nx.Graph()
    walkable.add_nodes_from(graph.nodes(data=True))
    walkable.add_edges_from((a, b, d) for a, b, d in graph.edges(data=True) if d["door"])
    return walkable


def central_room(rooms: Sequence[Room], config: PlacementConfig) -> Optional[str]:
    """Id of the room that gets the radial exhibit arrangement.

    The configured id wins; otherwise the best-connected room (first on ties).
    """
    if not rooms:
        return None
    if any(r.id == config.central_room_id for r in rooms):
        return config.central_room_id
    graph = adjacency_graph(rooms, config.wall_thickness)
    best = max(rooms, key=lambda r: graph.degree(r.id))
    logger.debug("No room named %r, using %r as central room", config.central_room_id, best.id)
    return best.id
