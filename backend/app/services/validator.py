from typing import Dict, Any, Tuple, List, Sequence
import itertools
import logging

import networkx as nx
from shapely.geometry import Point, box

from gallery.classifier import door_graph
from gallery.model import GalleryLayout, PlacementConfig, Room
from gallery.topologies import BoxTopology, GalleryTopology, RingTopology

logger = logging.getLogger(__name__)

def _footprint(position, size):
    x, _, z = position
    return box(x - size[0] / 2, z - size[2] / 2, x + size[0] / 2, z + size[2] / 2)

def validate_layout(layout: GalleryLayout, config: PlacementConfig) -> Tuple[bool, List[str]]:
    """Sanity checks on a computed layout. Issues are reported, never fixed."""
    errors: List[str] = []

    # 1) Every artwork shows up at most once
    seen = set()
    for index in layout.placed_indices:
        if index in seen:
            errors.append(f"Artwork {index} is placed more than once.")
        seen.add(index)

    # 2) Pieces on one wall must not overlap
    segments = {(w.room_id, w.wall_id): w for w in layout.walls}
    by_wall: Dict[Tuple[str, str], List[Any]] = {}
    for s in layout.wall_slots:
        by_wall.setdefault((s.room_id, s.wall_id), []).append(s)
    for (room_id, wall_id), slots in by_wall.items():
        for a, b in itertools.combinations(slots, 2):
            gap = Point(a.position[0], a.position[2]).distance(Point(b.position[0], b.position[2]))
            if gap < (a.size[0] + b.size[0]) / 2:
                errors.append(f"Artworks {a.artwork_index} and {b.artwork_index} overlap on {room_id}/{wall_id}.")

    # 3) Everything stays inside its zone; wall pieces may sit on the zone edge
    tolerance = config.wall_offset + config.wall_thickness
    for s in layout.wall_slots:
        zone = layout.zones.get(s.room_id)
        if zone is not None and zone.distance(Point(s.position[0], s.position[2])) > tolerance:
            errors.append(f"Artwork {s.artwork_index} is outside {s.room_id}.")
    for e in layout.exhibits:
        zone = layout.zones.get(e.room_id)
        if zone is not None and not zone.contains(Point(e.position[0], e.position[2])):
            errors.append(f"Exhibit {e.slot_id} is outside {e.room_id}.")

    # 4) Exhibit footprints must not overlap
    for a, b in itertools.combinations(layout.exhibits, 2):
        if _footprint(a.position, a.size).intersects(_footprint(b.position, b.size)):
            errors.append(f"Exhibits {a.slot_id} and {b.slot_id} overlap.")

    # 5) Doorways stay clear when door geometry is tracked
    if config.track_door_geometry:
        for s in layout.wall_slots:
            segment = segments.get((s.room_id, s.wall_id))
            if segment is None or not segment.openings:
                continue
            distance = segment.line.project(Point(s.position[0], s.position[2]))
            if segment.blocked(distance, s.size[0]):
                errors.append(f"Artwork {s.artwork_index} hangs in a doorway on {s.room_id}/{s.wall_id}.")

    return (len(errors) == 0, errors)

def _rooms_conflicts(rooms: Sequence[Room]) -> List[str]:
    errors: List[str] = []
    ids = [r.id for r in rooms]
    for dup in sorted({i for i in ids if ids.count(i) > 1}):
        errors.append(f'Room id "{dup}" is used more than once.')

    for r in rooms:
        if r.width <= 0 or r.length <= 0:
            errors.append(f'Room "{r.id}" has non-positive size.')
        for d in r.doors:
            if d.width > r.wall_length(d.wall):
                errors.append(f'Door on {r.id}/{d.wall} is wider than its wall.')

    for a, b in itertools.combinations(rooms, 2):
        if a.footprint.intersection(b.footprint).area > 1e-6:
            errors.append(f'Rooms "{a.id}" and "{b.id}" overlap.')
    return errors

def validate_topology_config(topology: GalleryTopology) -> Tuple[bool, List[str]]:
    """Feasibility checks on topology parameters before layout."""
    errors: List[str] = []
    if isinstance(topology, BoxTopology):
        errors.extend(_rooms_conflicts(topology.rooms))
    elif isinstance(topology, RingTopology):
        if topology.inner_radius >= topology.radius:
            errors.append("Inner ring radius must be smaller than the outer radius.")
    return (len(errors) == 0, errors)

def connectivity_warnings(rooms: Sequence[Room], wall_thickness: float) -> List[str]:
    """Rooms no door path reaches from the first room."""
    if len(rooms) < 2:
        return []
    graph = door_graph(rooms, wall_thickness)
    reachable = nx.node_connected_component(graph, rooms[0].id)
    return [f'Room "{r.id}" is not reachable through any door.' for r in rooms if r.id not in reachable]
