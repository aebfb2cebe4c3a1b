"""Tests for wall classification and the room adjacency graph."""
from gallery.classifier import (
    adjacency_graph,
    central_room,
    classify_walls,
    door_graph,
    is_external_wall,
    shared_walls,
)
from gallery.model import Door, PlacementConfig, Room
from gallery.topologies import DEFAULT_BOX_ROOMS


def _pair():
    a = Room("a", (0, 0, 0), (30, 30), (Door("east"),))
    b = Room("b", (30, 0, 0), (30, 30))
    return [a, b]


def test_single_room_all_walls_external():
    room = Room("solo", (0, 0, 0), (40, 20))
    assert classify_walls(room, [room], 0.5) == {
        "north": True, "east": True, "south": True, "west": True,
    }


def test_touching_rooms_share_one_wall():
    a, b = _pair()
    assert not is_external_wall(a, "east", [a, b], 0.5)
    assert not is_external_wall(b, "west", [a, b], 0.5)
    assert is_external_wall(a, "west", [a, b], 0.5)
    assert is_external_wall(b, "north", [a, b], 0.5)


def test_gap_wider_than_tolerance_keeps_walls_external():
    a = Room("a", (0, 0, 0), (30, 30))
    b = Room("b", (32, 0, 0), (30, 30))
    assert is_external_wall(a, "east", [a, b], 0.5)


def test_corner_contact_is_not_a_shared_wall():
    # north room and east room of the default plan only meet at a corner
    rooms = list(DEFAULT_BOX_ROOMS)
    north = next(r for r in rooms if r.id == "north")
    assert is_external_wall(north, "east", rooms, 0.5)
    assert not is_external_wall(north, "south", rooms, 0.5)


def test_default_plan_main_room_is_fully_enclosed():
    rooms = list(DEFAULT_BOX_ROOMS)
    main = rooms[0]
    assert not any(classify_walls(main, rooms, 0.5).values())


def test_shared_walls_yields_each_pair_once():
    pairs = list(shared_walls(list(DEFAULT_BOX_ROOMS), 0.5))
    assert len(pairs) == 4
    assert {(a.id, b.id) for a, _, b, _ in pairs} == {
        ("main", "north"), ("main", "east"), ("main", "south"), ("main", "west"),
    }


def test_adjacency_graph_marks_doors():
    graph = adjacency_graph(_pair(), 0.5)
    assert graph.has_edge("a", "b")
    assert graph.edges["a", "b"]["door"] is True
    assert graph.nodes["a"]["area"] == 900


def test_door_graph_drops_doorless_connections():
    a = Room("a", (0, 0, 0), (30, 30))
    b = Room("b", (30, 0, 0), (30, 30))
    assert adjacency_graph([a, b], 0.5).has_edge("a", "b")
    assert not door_graph([a, b], 0.5).has_edge("a", "b")


def test_central_room_prefers_configured_id():
    assert central_room(list(DEFAULT_BOX_ROOMS), PlacementConfig()) == "main"


def test_central_room_falls_back_to_best_connected():
    rooms = list(DEFAULT_BOX_ROOMS)[1:] + [DEFAULT_BOX_ROOMS[0]]
    config = PlacementConfig(central_room_id="lobby")
    assert central_room(rooms, config) == "main"
    assert central_room([], config) is None
