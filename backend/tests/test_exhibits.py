"""Tests for freestanding exhibit placement."""
import math

from gallery.exhibits import (
    INTERACTIVE,
    LINEAR_TYPE_RULES,
    PEDESTAL,
    RADIAL_TYPE_RULES,
    SCULPTURE,
    exhibit_count,
    exhibit_type,
    linear_spots,
    place_exhibits,
    polygon_spots,
    radial_spots,
    ring_spots,
)
from gallery.model import PlacementConfig, Room


def _tail(n, start=0):
    return [{"id": f"art-{i}"} for i in range(start, start + n)]


def test_exhibit_count_is_clamped():
    config = PlacementConfig()
    assert exhibit_count(100, config) == 1
    assert exhibit_count(400, config) == 1
    assert exhibit_count(900, config) == 3
    assert exhibit_count(3600, config) == 5


def test_type_cycles():
    assert [exhibit_type(i, RADIAL_TYPE_RULES) for i in range(5)] == [
        SCULPTURE, PEDESTAL, SCULPTURE, INTERACTIVE, SCULPTURE,
    ]
    assert [exhibit_type(i, LINEAR_TYPE_RULES) for i in range(5)] == [
        INTERACTIVE, PEDESTAL, SCULPTURE, INTERACTIVE, SCULPTURE,
    ]


def test_radial_spots_sit_on_circle_inside_margins():
    room = Room("main", (10, 0, 20), (60, 40))
    spots = radial_spots(room, 4, PlacementConfig())
    # 0.6 * min(30 - 5, 20 - 5)
    for s in spots:
        assert math.isclose(math.hypot(s.position[0] - 10, s.position[2] - 20), 9.0)
        assert s.position[1] == 1.0
        assert s.size == (3.0, 3.0, 3.0)
    assert [s.slot_id for s in spots] == ["main-0", "main-1", "main-2", "main-3"]


def test_linear_spots_follow_the_longer_axis():
    wide = Room("north", (0, 0, -45), (60, 30))
    spots = linear_spots(wide, 5, PlacementConfig())
    step = 50 / 6
    for i, s in enumerate(spots):
        assert math.isclose(s.position[0], -25 + (i + 1) * step)
        assert s.position[2] == -45
        assert s.size == (3.0, 4.0, 3.0)

    tall = Room("east", (45, 0, 0), (30, 60))
    spots = linear_spots(tall, 2, PlacementConfig())
    assert all(s.position[0] == 45 for s in spots)
    assert math.isclose(spots[0].position[2], -25 + 50 / 3)


def test_small_rooms_are_skipped_and_take_nothing():
    rooms = [
        Room("closet", (0, 0, 0), (10, 30)),
        Room("main", (40, 0, 0), (30, 30)),
    ]
    slots = place_exhibits(rooms, PlacementConfig(), _tail(3))
    assert [s.room_id for s in slots] == ["main", "main", "main"]
    assert [s.artwork_index for s in slots] == [0, 1, 2]


def test_rooms_take_contiguous_slices_of_the_tail():
    rooms = [
        Room("main", (0, 0, 0), (60, 60)),
        Room("north", (0, 0, -45), (60, 30)),
    ]
    slots = place_exhibits(rooms, PlacementConfig(), _tail(7, start=12), base_index=12)
    assert [s.room_id for s in slots] == ["main"] * 5 + ["north"] * 2
    assert [s.artwork_index for s in slots] == list(range(12, 19))
    assert slots[0].artwork_id == "art-12"
    # main is the central room and gets the radial arrangement
    assert slots[0].size == (3.0, 3.0, 3.0)
    assert slots[5].size == (3.0, 4.0, 3.0)


def test_empty_tail_places_nothing():
    assert place_exhibits([Room("main", (0, 0, 0), (60, 60))], PlacementConfig(), []) == []


def test_ring_spots():
    spots = ring_spots(17.5, 8, "inner-ring", PlacementConfig())
    assert len(spots) == 8
    assert all(math.isclose(math.hypot(s.position[0], s.position[2]), 17.5) for s in spots)
    assert spots[0].position == (17.5, 1.0, 0.0)


def test_polygon_spots_use_vertices_then_edges():
    vertices = [(-20.0, -20.0), (20.0, -20.0), (0.0, 20.0)]
    spots = polygon_spots(vertices, 5, "hall", PlacementConfig())
    assert spots[0].position == (-16.0, 1.0, -16.0)
    assert spots[2].position == (0.0, 1.0, 16.0)
    # fourth spot: first edge at t = 0.66
    assert math.isclose(spots[3].position[0], -20 + 40 * 0.66)
    assert math.isclose(spots[3].position[2], -20)
