# gallery/model.py
"""Static gallery description and the placement records the layout engine emits.

Coordinates follow the rendering convention: right-handed, Y up, north is -Z.
Plan-view helpers work on ``(x, z)`` pairs, which map onto shapely's ``(x, y)``.
"""
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Sequence, Tuple

from shapely.affinity import translate
from shapely.geometry import Polygon, box
from shapely.geometry.base import BaseGeometry

if TYPE_CHECKING:
    from gallery.perimeter import WallSegment

Vec2 = Tuple[float, float]
Point3 = Tuple[float, float, float]
Euler3 = Tuple[float, float, float]
Size2 = Tuple[float, float]
Size3 = Tuple[float, float, float]

NORTH, EAST, SOUTH, WEST = "north", "east", "south", "west"
WALL_ORDER = (NORTH, EAST, SOUTH, WEST)
OPPOSITE_WALL = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}

DEFAULT_DOOR_WIDTH = 7.0
DEFAULT_DOOR_HEIGHT = 12.0


def artwork_key(artwork: Any) -> str:
    """Stable identifier of an artwork record: ``id`` attribute or key, else its string form."""
    if isinstance(artwork, Mapping) and "id" in artwork:
        return str(artwork["id"])
    ident = getattr(artwork, "id", None)
    if ident is not None:
        return str(ident)
    return str(artwork)


@dataclass(frozen=True)
class Door:
    """A doorway on one wall of a room. ``position`` is 0-1 from the wall's minimum corner."""
    wall: str
    position: float = 0.5
    width: float = DEFAULT_DOOR_WIDTH
    height: float = DEFAULT_DOOR_HEIGHT

    def to_dict(self) -> Dict[str, Any]:
        return {"wall": self.wall, "position": self.position, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Room:
    id: str
    position: Point3
    size: Size2                    # width (x), length (z)
    doors: Tuple[Door, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "position", tuple(float(v) for v in self.position))
        object.__setattr__(self, "size", tuple(float(v) for v in self.size))
        object.__setattr__(self, "doors", tuple(self.doors))

    @property
    def width(self) -> float:
        return self.size[0]

    @property
    def length(self) -> float:
        return self.size[1]

    @property
    def half_width(self) -> float:
        return self.size[0] / 2

    @property
    def half_length(self) -> float:
        return self.size[1] / 2

    @property
    def center(self) -> Vec2:
        return (self.position[0], self.position[2])

    @property
    def area(self) -> float:
        return self.size[0] * self.size[1]

    @property
    def footprint(self) -> Polygon:
        cx, cz = self.center
        return box(cx - self.half_width, cz - self.half_length, cx + self.half_width, cz + self.half_length)

    def wall_length(self, wall: str) -> float:
        return self.width if wall in (NORTH, SOUTH) else self.length

    def wall_midpoint(self, wall: str) -> Vec2:
        cx, cz = self.center
        if wall == NORTH:
            return (cx, cz - self.half_length)
        if wall == SOUTH:
            return (cx, cz + self.half_length)
        if wall == EAST:
            return (cx + self.half_width, cz)
        if wall == WEST:
            return (cx - self.half_width, cz)
        raise KeyError(wall)

    def doors_on(self, wall: str) -> List[Door]:
        return [d for d in self.doors if d.wall == wall]

    def has_door(self, wall: str) -> bool:
        return any(d.wall == wall for d in self.doors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "position": list(self.position),
            "size": list(self.size),
            "doors": [d.to_dict() for d in self.doors],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Room":
        doors = tuple(Door(**d) for d in data.get("doors", ()))
        return cls(id=str(data["id"]), position=tuple(data.get("position", (0, 0, 0))),
                   size=tuple(data["size"]), doors=doors)


@dataclass(frozen=True)
class PlacementConfig:
    """Engine tunables shared by every topology."""
    wall_height: float = 20.0
    wall_thickness: float = 0.5
    spacing: float = 6.0
    wall_offset: float = 0.3          # distance from wall surface
    piece_width: float = 6.0
    door_clearance: float = 10.0
    track_door_geometry: bool = False
    central_room_id: str = "main"
    exhibit_margin: float = 5.0
    exhibit_height: float = 1.0
    min_exhibit_room: float = 20.0
    area_per_exhibit: float = 300.0
    max_exhibits_per_room: int = 5
    exhibit_reserve: int = 0          # trailing artworks held back for exhibits

    @property
    def art_height(self) -> float:
        return self.wall_height / 2


@dataclass(frozen=True)
class PlacementSlot:
    """One wall artwork placement."""
    artwork_index: int
    artwork: Any
    position: Point3
    rotation: Euler3
    wall_id: str
    room_id: str
    size: Size2 = (6.0, 4.0)

    @property
    def artwork_id(self) -> str:
        return artwork_key(self.artwork)


@dataclass(frozen=True)
class ExhibitSlot:
    """One freestanding exhibit object placement."""
    artwork_index: int
    artwork: Any
    position: Point3
    size: Size3
    exhibit_type: str
    room_id: str
    slot_id: str

    @property
    def artwork_id(self) -> str:
        return artwork_key(self.artwork)


def _shift(point: Point3, offset: Point3) -> Point3:
    return (point[0] + offset[0], point[1] + offset[1], point[2] + offset[2])


@dataclass
class GalleryLayout:
    """Everything one layout computation produced for a topology."""
    topology: str
    wall_slots: List[PlacementSlot]
    exhibits: List[ExhibitSlot]
    walls: List["WallSegment"]
    zones: Dict[str, BaseGeometry]
    cursor: int
    discarded: List[int]
    unplaced: List[int]
    artwork_count: int
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def placed_indices(self) -> List[int]:
        return [s.artwork_index for s in self.wall_slots] + [e.artwork_index for e in self.exhibits]

    def translated(self, offset: Point3) -> "GalleryLayout":
        """Copy of the layout moved by ``offset`` in world space."""
        dx, dz = offset[0], offset[2]
        return replace(
            self,
            wall_slots=[replace(s, position=_shift(s.position, offset)) for s in self.wall_slots],
            exhibits=[replace(e, position=_shift(e.position, offset)) for e in self.exhibits],
            walls=[w.translated(dx, dz) for w in self.walls],
            zones={k: translate(g, xoff=dx, yoff=dz) for k, g in self.zones.items()},
            metadata={**self.metadata, "origin": tuple(offset)},
        )

    def reindexed(self, index_map: Sequence[int]) -> "GalleryLayout":
        """Copy with artwork indices mapped through ``index_map`` (local -> caller index)."""
        return replace(
            self,
            wall_slots=[replace(s, artwork_index=index_map[s.artwork_index]) for s in self.wall_slots],
            exhibits=[replace(e, artwork_index=index_map[e.artwork_index]) for e in self.exhibits],
            discarded=[index_map[i] for i in self.discarded],
            unplaced=[index_map[i] for i in self.unplaced],
        )

    def summary(self) -> Dict[str, int]:
        return {
            "wall_slots": len(self.wall_slots),
            "exhibits": len(self.exhibits),
            "discarded": len(self.discarded),
            "unplaced": len(self.unplaced),
        }
