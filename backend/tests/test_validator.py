"""Tests for layout and configuration validation."""
from dataclasses import replace

from app.services.validator import connectivity_warnings, validate_layout, validate_topology_config
from gallery.model import Door, PlacementConfig, Room
from gallery.topologies import BoxTopology, CrossTopology, RingTopology, TriangleTopology


def _artworks(n):
    return [{"id": f"art-{i}"} for i in range(n)]


def test_generated_layouts_pass_validation():
    for topology in (BoxTopology(), RingTopology(), TriangleTopology(), CrossTopology()):
        layout = topology.layout(_artworks(60))
        ok, errors = validate_layout(layout, topology.placement)
        assert ok, f"{topology.name}: {errors}"


def test_tracked_doors_layout_passes_validation():
    config = PlacementConfig(track_door_geometry=True)
    rooms = [Room("main", (0, 0, 0), (60, 60), (Door("north", 0.5, 7),))]
    layout = BoxTopology(rooms, config).layout(_artworks(20))
    ok, errors = validate_layout(layout, config)
    assert ok, errors


def test_repeated_artwork_is_reported():
    topology = BoxTopology([Room("main", (0, 0, 0), (60, 60))])
    layout = topology.layout(_artworks(21))
    duplicate = replace(layout.exhibits[0], artwork_index=0)
    layout = replace(layout, exhibits=layout.exhibits + [duplicate])
    ok, errors = validate_layout(layout, topology.placement)
    assert not ok
    assert any("more than once" in e for e in errors)


def test_piece_outside_zone_is_reported():
    topology = TriangleTopology()
    layout = topology.layout(_artworks(3))
    stray = replace(layout.wall_slots[0], position=(500.0, 10.0, 500.0))
    layout = replace(layout, wall_slots=[stray] + layout.wall_slots[1:])
    ok, errors = validate_layout(layout, topology.placement)
    assert not ok
    assert any("outside" in e for e in errors)


def test_default_topologies_are_feasible():
    for topology in (BoxTopology(), RingTopology(), TriangleTopology(), CrossTopology()):
        assert validate_topology_config(topology) == (True, [])


def test_room_conflicts():
    rooms = [
        Room("a", (0, 0, 0), (30, 30), (Door("north", 0.5, 40),)),
        Room("a", (10, 0, 0), (30, 30)),
    ]
    ok, errors = validate_topology_config(BoxTopology(rooms))
    assert not ok
    assert any("more than once" in e for e in errors)
    assert any("overlap" in e for e in errors)
    assert any("wider than its wall" in e for e in errors)


def test_ring_radii_conflict():
    ok, errors = validate_topology_config(RingTopology(radius=30, inner_radius=35))
    assert not ok
    assert len(errors) == 1


def test_connectivity_warnings():
    rooms = [
        Room("a", (0, 0, 0), (30, 30), (Door("east"),)),
        Room("b", (30, 0, 0), (30, 30)),
        Room("c", (0, 0, 30), (30, 30)),
    ]
    warnings = connectivity_warnings(rooms, 0.5)
    assert warnings == ['Room "c" is not reachable through any door.']
    assert connectivity_warnings(rooms[:1], 0.5) == []
