# gallery/topologies.py
"""Per-shape gallery drivers.

Each topology turns its shape parameters into wall segments and exhibit
spots; distribution and cursor handling are shared through
:class:`~gallery.distributor.ArtworkDistributor`.
"""
import itertools
import logging
import math
from abc import abstractmethod
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Type

from shapely.affinity import rotate
from shapely.geometry import Point, Polygon, box
from shapely.geometry.base import BaseGeometry

from gallery.classifier import adjacency_graph, central_room
from gallery.distributor import ArtworkDistributor, SlotCandidate
from gallery.exhibits import (
    assign_spots,
    cross_spots,
    place_exhibits,
    polygon_spots,
    ring_spots,
)
from gallery.model import Door, ExhibitSlot, GalleryLayout, PlacementConfig, Point3, Room, Vec2
from gallery.perimeter import (
    STEPPED,
    PerimeterProvider,
    WallSegment,
    arc_segment,
    box_perimeter,
    polygon_walls,
)

logger = logging.getLogger(__name__)

SQRT3 = 1.732

DEFAULT_BOX_ROOMS: Tuple[Room, ...] = (
    Room("main", (0, 0, 0), (60, 60), (
        Door("north", 0.5, 7), Door("east", 0.5, 7), Door("south", 0.5, 7), Door("west", 0.5, 7),
    )),
    Room("north", (0, 0, -45), (60, 30), (Door("south", 0.5, 7),)),
    Room("east", (45, 0, 0), (30, 60), (Door("west", 0.5, 7),)),
    Room("south", (0, 0, 45), (60, 30), (Door("north", 0.5, 7),)),
    Room("west", (-45, 0, 0), (30, 60), (Door("east", 0.5, 7),)),
)


class GalleryTopology(PerimeterProvider):
    name = ""

    def __init__(self, placement: Optional[PlacementConfig] = None):
        self.placement = placement or PlacementConfig()

    @abstractmethod
    def zones(self) -> Dict[str, BaseGeometry]:
        """Floor areas keyed by room id, in plan view."""

    @abstractmethod
    def place_exhibits(self, tail: Sequence[Any], base_index: int) -> List[ExhibitSlot]:
        """Exhibits for the artworks left after the wall pass."""

    @abstractmethod
    def params(self) -> Dict[str, Any]:
        """Shape parameters, JSON-friendly."""

    def candidates(self, distributor: ArtworkDistributor, walls: Sequence[WallSegment]) -> Iterator[SlotCandidate]:
        return itertools.chain.from_iterable(distributor.candidates(w) for w in walls)

    def metadata(self) -> Dict[str, Any]:
        return {}

    def layout(self, artworks: Sequence[Any]) -> GalleryLayout:
        total = len(artworks)
        reserve = min(max(0, self.placement.exhibit_reserve), total)
        wall_pool = artworks[:total - reserve]

        distributor = ArtworkDistributor(self.placement)
        walls = self.perimeter(len(wall_pool))
        result = distributor.place(self.candidates(distributor, walls), wall_pool)

        exhibits = self.place_exhibits(artworks[result.cursor:], result.cursor)
        placed = {s.artwork_index for s in result.slots} | {e.artwork_index for e in exhibits}
        unplaced = [i for i in range(total) if i not in placed]
        if unplaced:
            logger.debug("%s: %d of %d artworks not placed", self.name, len(unplaced), total)
        logger.info("%s layout: %d wall slots, %d exhibits", self.name, len(result.slots), len(exhibits))

        return GalleryLayout(
            topology=self.name,
            wall_slots=result.slots,
            exhibits=exhibits,
            walls=list(walls),
            zones=self.zones(),
            cursor=result.cursor,
            discarded=result.discarded,
            unplaced=unplaced,
            artwork_count=total,
            metadata=self.metadata(),
        )


class BoxTopology(GalleryTopology):
    """Multi-room rectangular floor plan."""
    name = "box"

    def __init__(self, rooms: Optional[Iterable[Room]] = None, placement: Optional[PlacementConfig] = None):
        super().__init__(placement)
        self.rooms: Tuple[Room, ...] = tuple(DEFAULT_BOX_ROOMS if rooms is None else rooms)

    def perimeter(self, artwork_count: int) -> List[WallSegment]:
        return box_perimeter(self.rooms, self.placement)

    def zones(self) -> Dict[str, BaseGeometry]:
        return {r.id: r.footprint for r in self.rooms}

    def place_exhibits(self, tail: Sequence[Any], base_index: int) -> List[ExhibitSlot]:
        return place_exhibits(self.rooms, self.placement, tail, base_index)

    def params(self) -> Dict[str, Any]:
        return {"rooms": [r.to_dict() for r in self.rooms]}

    def metadata(self) -> Dict[str, Any]:
        graph = adjacency_graph(self.rooms, self.placement.wall_thickness)
        return {
            "central_room": central_room(self.rooms, self.placement),
            "adjacency": [(a, b, d["door"]) for a, b, d in graph.edges(data=True)],
        }


class RingTopology(GalleryTopology):
    """Concentric-ring hall: art on the outer ring facing in, then the inner ring facing out."""
    name = "circle"
    OUTER = "outer-ring"
    INNER = "inner-ring"

    def __init__(self, radius: float = 70.0, inner_radius: float = 35.0, segments: int = 24,
                 gap_every: int = 6, inner_limit: Optional[int] = None, pedestal_count: int = 8,
                 pedestal_ratio: float = 0.5, placement: Optional[PlacementConfig] = None):
        super().__init__(placement)
        self.radius = radius
        self.inner_radius = inner_radius
        self.segments = segments
        self.gap_every = gap_every
        self.inner_limit = segments // 2 if inner_limit is None else inner_limit
        self.pedestal_count = pedestal_count
        self.pedestal_ratio = pedestal_ratio

    def outer_ring(self) -> List[WallSegment]:
        arc = 2 * math.pi / self.segments
        walls = []
        for i in range(self.segments):
            gap = bool(self.gap_every) and i % self.gap_every == 0
            walls.append(arc_segment(f"outer-{i}", self.OUTER, self.radius, i * arc, arc,
                                     facing_center=True, capacity=0 if gap else 1,
                                     piece_size=(6.0, 4.0)))
        return walls

    def inner_ring(self, count: int) -> List[WallSegment]:
        """``count`` arcs, staggered half an arc from angle zero."""
        if count <= 0:
            return []
        arc = 2 * math.pi / count
        return [
            arc_segment(f"inner-{i}", self.INNER, self.inner_radius, i * arc + arc / 2, arc,
                        facing_center=False, capacity=1, piece_size=(5.0, 3.5))
            for i in range(count)
        ]

    def perimeter(self, artwork_count: int) -> List[WallSegment]:
        outer = self.outer_ring()
        outer_capacity = sum(w.capacity for w in outer)
        inner_count = min(max(0, artwork_count - outer_capacity), self.inner_limit)
        return outer + self.inner_ring(inner_count)

    def zones(self) -> Dict[str, BaseGeometry]:
        inner = Point(0, 0).buffer(self.inner_radius, 32)
        return {
            self.OUTER: Point(0, 0).buffer(self.radius, 32).difference(inner),
            self.INNER: inner,
        }

    def place_exhibits(self, tail: Sequence[Any], base_index: int) -> List[ExhibitSlot]:
        spots = ring_spots(self.inner_radius * self.pedestal_ratio, self.pedestal_count,
                           self.INNER, self.placement)
        return assign_spots(spots, tail, base_index)

    def params(self) -> Dict[str, Any]:
        return {
            "radius": self.radius,
            "inner_radius": self.inner_radius,
            "segments": self.segments,
            "gap_every": self.gap_every,
            "inner_limit": self.inner_limit,
            "pedestal_count": self.pedestal_count,
            "pedestal_ratio": self.pedestal_ratio,
        }

    def metadata(self) -> Dict[str, Any]:
        # Spin rates (rad/frame) for the renderer; slots are given in the rings' rest frame.
        return {"spin": {self.INNER: 0.0005, self.OUTER: -0.00025}}


class TriangleTopology(GalleryTopology):
    """Single triangular hall with art spread along its three walls."""
    name = "triangle"
    ROOM = "hall"

    def __init__(self, size: float = 70.0, max_per_wall: int = 3, pedestal_count: int = 6,
                 inner_scale: float = 0.6, placement: Optional[PlacementConfig] = None):
        super().__init__(placement)
        self.size = size
        self.max_per_wall = max_per_wall
        self.pedestal_count = pedestal_count
        self.inner_scale = inner_scale

    @property
    def vertices(self) -> List[Vec2]:
        s = self.size
        return [(-s, -s), (s, -s), (0.0, s * SQRT3)]

    def perimeter(self, artwork_count: int) -> List[WallSegment]:
        per_wall = min(self.max_per_wall, math.ceil(artwork_count / 3))
        return polygon_walls(self.vertices, self.ROOM, per_wall, piece_size=(7.0, 4.5))

    def zones(self) -> Dict[str, BaseGeometry]:
        return {self.ROOM: Polygon(self.vertices)}

    def place_exhibits(self, tail: Sequence[Any], base_index: int) -> List[ExhibitSlot]:
        k = self.size * self.inner_scale * 0.5
        inner = [(-k, -k), (k, -k), (0.0, k)]
        spots = polygon_spots(inner, self.pedestal_count, self.ROOM, self.placement)
        return assign_spots(spots, tail, base_index)

    def params(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "max_per_wall": self.max_per_wall,
            "pedestal_count": self.pedestal_count,
            "inner_scale": self.inner_scale,
        }


class CrossTopology(GalleryTopology):
    """Four arms crossing at the origin; art alternates between each arm's two walls."""
    name = "x"
    ARM_ANGLES = (math.pi / 4, 3 * math.pi / 4, 5 * math.pi / 4, 7 * math.pi / 4)

    def __init__(self, arm_length: float = 70.0, arm_width: float = 20.0, first_distance: float = 20.0,
                 step: float = 15.0, arm_exhibits: int = 1, placement: Optional[PlacementConfig] = None):
        super().__init__(placement)
        self.arm_length = arm_length
        self.arm_width = arm_width
        self.first_distance = first_distance
        self.step = step
        self.arm_exhibits = arm_exhibits

    @property
    def side_capacity(self) -> int:
        reach = self.arm_length - self.placement.piece_width / 2 - self.first_distance
        if reach < 0 or self.step <= 0:
            return 0
        return math.floor(reach / self.step) + 1

    def _side(self, arm: int, angle: float, side: int, capacity: int) -> WallSegment:
        """Wall on one side of an arm; ``side`` is -1 (left) or 1 (right)."""
        half = self.arm_width / 2
        perp = side * math.pi / 2 + angle
        px, pz = math.cos(perp) * half, math.sin(perp) * half
        dx, dz = math.cos(angle), math.sin(angle)
        return WallSegment(
            wall_id=f"arm-{arm}-{'left' if side < 0 else 'right'}",
            room_id=f"arm-{arm}",
            start=(px, pz),
            end=(px + dx * self.arm_length, pz + dz * self.arm_length),
            inward=(-math.cos(perp), -math.sin(perp)),
            capacity=capacity,
            arrangement=STEPPED,
            step_start=self.first_distance,
            step=self.step,
        )

    def perimeter(self, artwork_count: int) -> List[WallSegment]:
        per_arm = min(math.ceil(artwork_count / 4), 2 * self.side_capacity)
        walls = []
        for arm, angle in enumerate(self.ARM_ANGLES):
            walls.append(self._side(arm, angle, -1, math.ceil(per_arm / 2)))
            walls.append(self._side(arm, angle, 1, per_arm // 2))
        return walls

    def candidates(self, distributor: ArtworkDistributor, walls: Sequence[WallSegment]) -> Iterator[SlotCandidate]:
        # walls come in (left, right) pairs per arm; alternate left, right, left...
        for left, right in zip(walls[0::2], walls[1::2]):
            paired = itertools.zip_longest(distributor.candidates(left), distributor.candidates(right))
            for candidate in itertools.chain.from_iterable(paired):
                if candidate is not None:
                    yield candidate

    def zones(self) -> Dict[str, BaseGeometry]:
        half = self.arm_width / 2
        zones = {
            f"arm-{i}": rotate(box(0, -half, self.arm_length, half), angle, origin=(0, 0), use_radians=True)
            for i, angle in enumerate(self.ARM_ANGLES)
        }
        zones["center"] = Point(0, 0).buffer(half, 32)
        return zones

    def place_exhibits(self, tail: Sequence[Any], base_index: int) -> List[ExhibitSlot]:
        spots = cross_spots(self.ARM_ANGLES, self.arm_length, self.arm_exhibits, self.placement)
        return assign_spots(spots, tail, base_index)

    def params(self) -> Dict[str, Any]:
        return {
            "arm_length": self.arm_length,
            "arm_width": self.arm_width,
            "first_distance": self.first_distance,
            "step": self.step,
            "arm_exhibits": self.arm_exhibits,
        }


TOPOLOGIES: Dict[str, Type[GalleryTopology]] = {
    BoxTopology.name: BoxTopology,
    RingTopology.name: RingTopology,
    TriangleTopology.name: TriangleTopology,
    CrossTopology.name: CrossTopology,
}

GALLERY_ORDER = ("box", "circle", "triangle", "x")
GALLERY_ORIGINS: Dict[str, Point3] = {
    "box": (0.0, 0.0, 0.0),
    "circle": (150.0, 0.0, 150.0),
    "triangle": (-150.0, 0.0, 150.0),
    "x": (0.0, 0.0, -200.0),
}


def build_topology(name: str, params: Optional[Mapping[str, Any]] = None,
                   placement: Optional[PlacementConfig] = None) -> GalleryTopology:
    """Instantiate a registered topology; raises ``KeyError`` for unknown names."""
    cls = TOPOLOGIES[name]
    params = dict(params or {})
    if cls is BoxTopology and params.get("rooms") is not None:
        params["rooms"] = [r if isinstance(r, Room) else Room.from_dict(r) for r in params["rooms"]]
    return cls(placement=placement, **params)


def split_round_robin(artwork_count: int, names: Sequence[str]) -> Dict[str, List[int]]:
    """Artwork indices per gallery, dealt out ``index % len(names)``."""
    buckets: Dict[str, List[int]] = {name: [] for name in names}
    if not names:
        return buckets
    for i in range(artwork_count):
        buckets[names[i % len(names)]].append(i)
    return buckets


def compose_galleries(artworks: Sequence[Any],
                      topologies: Optional[Mapping[str, GalleryTopology]] = None) -> Dict[str, GalleryLayout]:
    """Lay out every gallery with its share of ``artworks``, moved to its world origin.

    Artwork indices in the returned layouts refer to ``artworks``.
    """
    if topologies is None:
        topologies = {name: TOPOLOGIES[name]() for name in GALLERY_ORDER}
    names = [n for n in GALLERY_ORDER if n in topologies]
    buckets = split_round_robin(len(artworks), names)
    layouts = {}
    for name in names:
        indices = buckets[name]
        local = topologies[name].layout([artworks[i] for i in indices])
        layouts[name] = local.reindexed(indices).translated(GALLERY_ORIGINS[name])
    return layouts
