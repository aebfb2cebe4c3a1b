# gallery/exhibits.py
"""Freestanding exhibit placement inside room interiors.

Strategies produce *spots* (where an object could stand); :func:`assign_spots`
then hands the artwork tail out to them in order.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple

from gallery.classifier import central_room
from gallery.model import ExhibitSlot, PlacementConfig, Point3, Room, Size3, Vec2

logger = logging.getLogger(__name__)

SCULPTURE = "sculpture"
INTERACTIVE = "interactive"
PEDESTAL = "pedestal"

TypeRule = Tuple[Callable[[int], bool], str]

# Evaluated top to bottom; the first matching predicate picks the variant.
RADIAL_TYPE_RULES: Tuple[TypeRule, ...] = (
    (lambda i: i % 2 == 0, SCULPTURE),
    (lambda i: i % 3 == 0, INTERACTIVE),
    (lambda i: True, PEDESTAL),
)
LINEAR_TYPE_RULES: Tuple[TypeRule, ...] = (
    (lambda i: i % 3 == 0, INTERACTIVE),
    (lambda i: i % 2 == 0, SCULPTURE),
    (lambda i: True, PEDESTAL),
)

RADIAL_SIZE: Size3 = (3.0, 3.0, 3.0)
STANDARD_SIZE: Size3 = (3.0, 4.0, 3.0)
CENTERPIECE_SIZE: Size3 = (5.0, 6.0, 5.0)


def exhibit_type(i: int, rules: Sequence[TypeRule]) -> str:
    for predicate, variant in rules:
        if predicate(i):
            return variant
    return rules[-1][1]


def exhibit_count(area: float, config: PlacementConfig) -> int:
    """Objects a room of ``area`` gets: floor(area / 300) clamped to 1..5."""
    return min(config.max_exhibits_per_room, max(1, math.floor(area / config.area_per_exhibit)))


@dataclass(frozen=True)
class ExhibitSpot:
    position: Point3
    size: Size3
    exhibit_type: str
    room_id: str
    slot_id: str


def assign_spots(spots: Sequence[ExhibitSpot], tail: Sequence[Any], base_index: int = 0,
                 offset: int = 0) -> List[ExhibitSlot]:
    """Pair spots with ``tail[offset:]`` in order; stops when either runs out."""
    slots = []
    for i, spot in enumerate(spots):
        k = offset + i
        if k >= len(tail):
            break
        slots.append(ExhibitSlot(
            artwork_index=base_index + k,
            artwork=tail[k],
            position=spot.position,
            size=spot.size,
            exhibit_type=spot.exhibit_type,
            room_id=spot.room_id,
            slot_id=spot.slot_id,
        ))
    return slots


def radial_spots(room: Room, count: int, config: PlacementConfig) -> List[ExhibitSpot]:
    """Ring of objects around the room centre."""
    cx, cz = room.center
    half_width = room.half_width - config.exhibit_margin
    half_length = room.half_length - config.exhibit_margin
    radius = min(half_width, half_length) * 0.6
    spots = []
    for i in range(count):
        angle = (i / count) * math.pi * 2
        spots.append(ExhibitSpot(
            position=(cx + math.cos(angle) * radius, config.exhibit_height, cz + math.sin(angle) * radius),
            size=RADIAL_SIZE,
            exhibit_type=exhibit_type(i, RADIAL_TYPE_RULES),
            room_id=room.id,
            slot_id=f"{room.id}-{i}",
        ))
    return spots


def linear_spots(room: Room, count: int, config: PlacementConfig) -> List[ExhibitSpot]:
    """Row of objects along the room's longer axis, evenly spaced between margins."""
    cx, cz = room.center
    margin = config.exhibit_margin
    is_wide = room.width > room.length
    spots = []
    for i in range(count):
        if is_wide:
            x = cx - (room.half_width - margin) + (i + 1) * (room.width - 2 * margin) / (count + 1)
            z = cz
        else:
            x = cx
            z = cz - (room.half_length - margin) + (i + 1) * (room.length - 2 * margin) / (count + 1)
        spots.append(ExhibitSpot(
            position=(x, config.exhibit_height, z),
            size=STANDARD_SIZE,
            exhibit_type=exhibit_type(i, LINEAR_TYPE_RULES),
            room_id=room.id,
            slot_id=f"{room.id}-{i}",
        ))
    return spots


def place_exhibits(rooms: Sequence[Room], config: PlacementConfig, artwork_tail: Sequence[Any],
                   base_index: int = 0) -> List[ExhibitSlot]:
    """Exhibits for a rectangular room set.

    Each qualifying room takes a contiguous slice of ``artwork_tail`` sized to
    its exhibit count; rooms too small for exhibits are skipped and take none.
    ``base_index`` is the tail's position in the full artwork array.
    """
    if not artwork_tail:
        return []
    central = central_room(rooms, config)
    slots: List[ExhibitSlot] = []
    consumed = 0
    for room in rooms:
        if room.width < config.min_exhibit_room or room.length < config.min_exhibit_room:
            logger.debug("Room %s too small for exhibits", room.id)
            continue
        count = exhibit_count(room.area, config)
        if room.id == central:
            spots = radial_spots(room, count, config)
        else:
            spots = linear_spots(room, count, config)
        slots.extend(assign_spots(spots, artwork_tail, base_index, consumed))
        consumed += count
    return slots


def ring_spots(radius: float, count: int, room_id: str, config: PlacementConfig,
               center: Vec2 = (0.0, 0.0)) -> List[ExhibitSpot]:
    """Pedestals evenly spaced on a circle."""
    spots = []
    for i in range(count):
        angle = (i / count) * math.pi * 2
        spots.append(ExhibitSpot(
            position=(center[0] + radius * math.cos(angle), config.exhibit_height,
                      center[1] + radius * math.sin(angle)),
            size=STANDARD_SIZE,
            exhibit_type=exhibit_type(i, LINEAR_TYPE_RULES),
            room_id=room_id,
            slot_id=f"{room_id}-{i}",
        ))
    return spots


def polygon_spots(vertices: Sequence[Vec2], count: int, room_id: str, config: PlacementConfig,
                  vertex_inset: float = 0.8) -> List[ExhibitSpot]:
    """Pedestals on a polygon: first at the (inset) vertices, then along the edges."""
    n = len(vertices)
    spots = []
    for i in range(count):
        if i < n:
            vx, vz = vertices[i]
            x, z = vx * vertex_inset, vz * vertex_inset
        else:
            edge = i % n
            (sx, sz), (ex, ez) = vertices[edge], vertices[(edge + 1) % n]
            t = 0.33 if i % 2 == 0 else 0.66
            x, z = sx + (ex - sx) * t, sz + (ez - sz) * t
        spots.append(ExhibitSpot(
            position=(x, config.exhibit_height, z),
            size=STANDARD_SIZE,
            exhibit_type=exhibit_type(i, LINEAR_TYPE_RULES),
            room_id=room_id,
            slot_id=f"{room_id}-{i}",
        ))
    return spots


def cross_spots(arm_angles: Sequence[float], arm_length: float, per_arm: int,
                config: PlacementConfig) -> List[ExhibitSpot]:
    """A centrepiece at the crossing, then pedestals on each arm's centre line."""
    spots = [ExhibitSpot(
        position=(0.0, config.exhibit_height, 0.0),
        size=CENTERPIECE_SIZE,
        exhibit_type=INTERACTIVE,
        room_id="center",
        slot_id="central",
    )]
    for k in range(per_arm):
        distance = arm_length * (k + 1) / (per_arm + 1)
        for arm, angle in enumerate(arm_angles):
            spots.append(ExhibitSpot(
                position=(math.cos(angle) * distance, config.exhibit_height, math.sin(angle) * distance),
                size=STANDARD_SIZE,
                exhibit_type=exhibit_type(arm, LINEAR_TYPE_RULES),
                room_id=f"arm-{arm}",
                slot_id=f"arm-{arm}-{k}",
            ))
    return spots
