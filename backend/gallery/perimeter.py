# gallery/perimeter.py
"""Wall segments: the linear perimeter primitive every topology reduces to.

A segment runs from ``start`` to ``end`` in plan view ``(x, z)``. Distances
along it are measured from ``start``. ``inward`` is the unit normal pointing
into the space the artwork faces.
"""
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from shapely.geometry import LineString, Point, Polygon

from gallery.classifier import is_external_wall
from gallery.model import EAST, NORTH, SOUTH, WALL_ORDER, WEST, Euler3, PlacementConfig, Room, Size2, Vec2

logger = logging.getLogger(__name__)

CENTERED = "centered"   # symmetric block around the midpoint
SPREAD = "spread"       # t = (i+1)/(n+1) along the wall
STEPPED = "stepped"     # fixed increments from step_start

DEFAULT_PIECE_SIZE: Size2 = (6.0, 4.0)


def pieces_per_wall(usable_width: float, piece_width: float, spacing: float) -> int:
    """How many pieces fit on a wall; never less than one."""
    step = piece_width + spacing
    if step <= 0:
        return 1
    return max(1, math.floor(usable_width / step))


def centered_offsets(count: int, step: float) -> List[float]:
    """Offsets from the wall midpoint for ``count`` pieces centred as a block."""
    block = (count - 1) * step
    return [-block / 2 + i * step for i in range(count)]


def spread_fractions(count: int) -> List[float]:
    return [(i + 1) / (count + 1) for i in range(count)]


def facing_rotation(normal: Vec2) -> Euler3:
    """Y rotation that turns a panel's front (+Z) toward ``normal``."""
    return (0.0, math.atan2(normal[0], normal[1]), 0.0)


def inward_normal(start: Vec2, end: Vec2, interior: Vec2) -> Vec2:
    """Unit normal of the line start->end on the side of ``interior``."""
    dx, dz = end[0] - start[0], end[1] - start[1]
    length = math.hypot(dx, dz)
    if length == 0:
        return (0.0, 0.0)
    nx_, nz = -dz / length, dx / length
    mx, mz = (start[0] + end[0]) / 2, (start[1] + end[1]) / 2
    if (interior[0] - mx) * nx_ + (interior[1] - mz) * nz < 0:
        return (-nx_, -nz)
    return (nx_, nz)


@dataclass(frozen=True)
class DoorOpening:
    center: float           # distance from segment start
    width: float
    height: float = 12.0

    def overlaps(self, distance: float, piece_width: float) -> bool:
        return abs(distance - self.center) < self.width / 2 + piece_width / 2


@dataclass(frozen=True)
class WallSegment:
    wall_id: str
    room_id: str
    start: Vec2
    end: Vec2
    inward: Vec2
    external: bool = True
    openings: Tuple[DoorOpening, ...] = ()
    clearance: float = 0.0
    capacity: Optional[int] = None      # None: derive from length and spacing
    arrangement: str = CENTERED
    step_start: float = 0.0
    step: float = 0.0
    piece_size: Size2 = DEFAULT_PIECE_SIZE

    @property
    def length(self) -> float:
        return math.hypot(self.end[0] - self.start[0], self.end[1] - self.start[1])

    @property
    def usable_length(self) -> float:
        return self.length - self.clearance

    @property
    def direction(self) -> Vec2:
        length = self.length
        if length == 0:
            return (0.0, 0.0)
        return ((self.end[0] - self.start[0]) / length, (self.end[1] - self.start[1]) / length)

    @property
    def midpoint(self) -> Vec2:
        return ((self.start[0] + self.end[0]) / 2, (self.start[1] + self.end[1]) / 2)

    @property
    def line(self) -> LineString:
        return LineString([self.start, self.end])

    def point_at(self, distance: float) -> Vec2:
        dx, dz = self.direction
        return (self.start[0] + dx * distance, self.start[1] + dz * distance)

    def anchor(self, distance: float, wall_offset: float) -> Vec2:
        """Point ``distance`` along the wall, ``wall_offset`` off its surface."""
        x, z = self.point_at(distance)
        return (x + self.inward[0] * wall_offset, z + self.inward[1] * wall_offset)

    def slot_count(self, piece_width: float, spacing: float) -> int:
        if self.capacity is not None:
            return max(0, self.capacity)
        return pieces_per_wall(self.usable_length, piece_width, spacing)

    def offsets(self, piece_width: float, spacing: float) -> List[float]:
        """Slot distances from ``start`` in placement order."""
        count = self.slot_count(piece_width, spacing)
        if self.arrangement == SPREAD:
            return [self.length * t for t in spread_fractions(count)]
        if self.arrangement == STEPPED:
            return [self.step_start + i * self.step for i in range(count)]
        half = self.length / 2
        return [half + off for off in centered_offsets(count, piece_width + spacing)]

    def blocked(self, distance: float, piece_width: float) -> bool:
        return any(o.overlaps(distance, piece_width) for o in self.openings)

    def translated(self, dx: float, dz: float) -> "WallSegment":
        return replace(
            self,
            start=(self.start[0] + dx, self.start[1] + dz),
            end=(self.end[0] + dx, self.end[1] + dz),
        )


def room_wall(room: Room, wall: str, external: bool, config: PlacementConfig) -> WallSegment:
    """Segment for one wall of a rectangular room, measured from its minimum corner."""
    cx, cz = room.center
    hw, hl = room.half_width, room.half_length
    if wall == NORTH:
        start, end, inward = (cx - hw, cz - hl), (cx + hw, cz - hl), (0.0, 1.0)
    elif wall == EAST:
        start, end, inward = (cx + hw, cz - hl), (cx + hw, cz + hl), (-1.0, 0.0)
    elif wall == SOUTH:
        start, end, inward = (cx - hw, cz + hl), (cx + hw, cz + hl), (0.0, -1.0)
    elif wall == WEST:
        start, end, inward = (cx - hw, cz - hl), (cx - hw, cz + hl), (1.0, 0.0)
    else:
        raise KeyError(wall)

    length = room.wall_length(wall)
    doors = room.doors_on(wall)
    openings = tuple(DoorOpening(d.position * length, d.width, d.height) for d in doors)
    return WallSegment(
        wall_id=wall,
        room_id=room.id,
        start=start,
        end=end,
        inward=inward,
        external=external,
        openings=openings,
        clearance=config.door_clearance if doors else 0.0,
    )


def box_perimeter(rooms: Sequence[Room], config: PlacementConfig) -> List[WallSegment]:
    """All room walls in placement order: rooms as given, then north, east, south, west."""
    walls = []
    for room in rooms:
        for wall in WALL_ORDER:
            external = is_external_wall(room, wall, rooms, config.wall_thickness)
            walls.append(room_wall(room, wall, external, config))
        logger.debug("Room %s external walls: %s", room.id,
                     [w.wall_id for w in walls[-4:] if w.external])
    return walls


def arc_segment(wall_id: str, room_id: str, radius: float, angle: float, arc: float,
                facing_center: bool, capacity: int, piece_size: Size2) -> WallSegment:
    """Straight stand-in for one arc of a ring, tangent at ``angle``.

    The segment's midpoint lies on the circle, so a single centred piece sits
    exactly on the ring.
    """
    px, pz = radius * math.cos(angle), radius * math.sin(angle)
    tx, tz = -math.sin(angle), math.cos(angle)
    half_chord = radius * math.sin(arc / 2)
    sign = -1.0 if facing_center else 1.0
    return WallSegment(
        wall_id=wall_id,
        room_id=room_id,
        start=(px - tx * half_chord, pz - tz * half_chord),
        end=(px + tx * half_chord, pz + tz * half_chord),
        inward=(sign * math.cos(angle), sign * math.sin(angle)),
        capacity=capacity,
        piece_size=piece_size,
    )


def polygon_walls(vertices: Sequence[Vec2], room_id: str, capacity: int,
                  piece_size: Size2, prefix: str = "wall") -> List[WallSegment]:
    """Closed polygon perimeter, one segment per edge, normals toward the centroid."""
    centroid: Point = Polygon(vertices).centroid
    interior = (centroid.x, centroid.y)
    walls = []
    for i, start in enumerate(vertices):
        end = vertices[(i + 1) % len(vertices)]
        walls.append(WallSegment(
            wall_id=f"{prefix}-{i}",
            room_id=room_id,
            start=tuple(start),
            end=tuple(end),
            inward=inward_normal(start, end, interior),
            capacity=capacity,
            arrangement=SPREAD,
            piece_size=piece_size,
        ))
    return walls


class PerimeterProvider(ABC):
    """Anything that can describe its art-bearing walls as ordered segments."""

    @abstractmethod
    def perimeter(self, artwork_count: int) -> List[WallSegment]:
        """Ordered wall segments for a gallery holding ``artwork_count`` artworks."""
