"""Tests for wall artwork distribution."""
import math

from gallery.distributor import ArtworkDistributor, distribute
from gallery.model import Door, PlacementConfig, Room
from gallery.perimeter import box_perimeter, facing_rotation, pieces_per_wall
from gallery.topologies import BoxTopology


def _artworks(n):
    return [{"id": f"art-{i}"} for i in range(n)]


def _single_room():
    return [Room("main", (0, 0, 0), (60, 60), (Door("north", 0.5, 7),))]


def test_pieces_per_wall_never_below_one():
    assert pieces_per_wall(60, 6, 6) == 5
    assert pieces_per_wall(50, 6, 6) == 4
    assert pieces_per_wall(0, 6, 6) == 1
    assert pieces_per_wall(-2, 6, 6) == 1
    assert pieces_per_wall(10, 0, 0) == 1


def test_door_clearance_scenario_gives_nineteen_wall_slots():
    slots = distribute(_single_room(), PlacementConfig(), _artworks(20))
    per_wall = {}
    for s in slots:
        per_wall[s.wall_id] = per_wall.get(s.wall_id, 0) + 1
    assert per_wall == {"north": 4, "east": 5, "south": 5, "west": 5}
    assert [s.artwork_index for s in slots] == list(range(19))


def test_twentieth_artwork_becomes_central_exhibit():
    layout = BoxTopology(_single_room()).layout(_artworks(20))
    assert len(layout.wall_slots) == 19
    assert len(layout.exhibits) == 1
    exhibit = layout.exhibits[0]
    assert exhibit.artwork_index == 19
    assert exhibit.artwork_id == "art-19"
    assert exhibit.room_id == "main"
    assert exhibit.position == (15.0, 1.0, 0.0)
    assert layout.unplaced == []


def test_slots_are_centred_and_offset_from_the_wall():
    slots = distribute(_single_room(), PlacementConfig(), _artworks(4))
    xs = [s.position[0] for s in slots]
    assert xs == [-18.0, -6.0, 6.0, 18.0]
    for s in slots:
        assert math.isclose(s.position[2], -29.7)
        assert s.position[1] == 10.0
        assert s.rotation == (0.0, 0.0, 0.0)


def test_facing_points_into_the_room():
    assert facing_rotation((0.0, 1.0))[1] == 0.0
    assert math.isclose(facing_rotation((-1.0, 0.0))[1], -math.pi / 2)
    assert math.isclose(facing_rotation((0.0, -1.0))[1], math.pi)
    assert math.isclose(facing_rotation((1.0, 0.0))[1], math.pi / 2)

    slots = distribute(_single_room(), PlacementConfig(), _artworks(19))
    east = [s for s in slots if s.wall_id == "east"]
    assert all(math.isclose(s.position[0], 29.7) for s in east)
    assert all(math.isclose(s.rotation[1], -math.pi / 2) for s in east)


def test_truncates_when_artworks_run_out():
    slots = distribute(_single_room(), PlacementConfig(), _artworks(10))
    assert [s.wall_id for s in slots] == ["north"] * 4 + ["east"] * 5 + ["south"]
    assert not any(s.wall_id == "west" for s in slots)


def test_empty_artwork_list():
    assert distribute(_single_room(), PlacementConfig(), []) == []
    layout = BoxTopology(_single_room()).layout([])
    assert layout.wall_slots == []
    assert layout.exhibits == []


def test_no_rooms():
    assert distribute([], PlacementConfig(), _artworks(5)) == []


def test_internal_walls_receive_nothing():
    rooms = [
        Room("a", (0, 0, 0), (30, 30), (Door("east"),)),
        Room("b", (30, 0, 0), (30, 30), (Door("west"),)),
    ]
    slots = distribute(rooms, PlacementConfig(), _artworks(50))
    assert not any(s.room_id == "a" and s.wall_id == "east" for s in slots)
    assert not any(s.room_id == "b" and s.wall_id == "west" for s in slots)


def test_doorway_slots_are_discarded_but_consume_artworks():
    config = PlacementConfig(track_door_geometry=True)
    distributor = ArtworkDistributor(config)
    result = distributor.distribute(box_perimeter(_single_room(), config), _artworks(20))
    assert result.discarded == [1, 2]
    assert result.cursor == 19
    assert len(result.slots) == 17
    placed = [s.artwork_index for s in result.slots]
    assert 1 not in placed and 2 not in placed
    assert placed[:3] == [0, 3, 4]


def test_tiny_wall_with_door_still_gets_one_slot():
    rooms = [Room("closet", (0, 0, 0), (8, 8), (Door("north", 0.5, 3),))]
    slots = distribute(rooms, PlacementConfig(), _artworks(10))
    assert sum(1 for s in slots if s.wall_id == "north") == 1


def test_distribution_is_deterministic():
    first = distribute(_single_room(), PlacementConfig(), _artworks(20))
    second = distribute(_single_room(), PlacementConfig(), _artworks(20))
    assert first == second


def test_resumes_from_start_index():
    distributor = ArtworkDistributor()
    result = distributor.distribute(box_perimeter(_single_room(), PlacementConfig()), _artworks(20), start=15)
    assert [s.artwork_index for s in result.slots] == [15, 16, 17, 18, 19]
    assert result.cursor == 20


def test_exhibit_reserve_holds_back_the_tail():
    topology = BoxTopology(_single_room(), PlacementConfig(exhibit_reserve=3))
    layout = topology.layout(_artworks(10))
    assert [s.artwork_index for s in layout.wall_slots] == list(range(7))
    assert [e.artwork_index for e in layout.exhibits] == [7, 8, 9]
