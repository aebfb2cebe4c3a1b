"""Tests for the HTTP surface."""
from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def _artworks(n):
    return [{"id": f"art-{i}", "title": f"Piece {i}"} for i in range(n)]


def _single_room():
    return {"rooms": [{"id": "main", "size": [60, 60], "doors": [{"wall": "north", "position": 0.5, "width": 7}]}]}


def test_health():
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_topologies():
    res = client.get("/topologies")
    assert res.status_code == 200
    assert [t["name"] for t in res.json()] == ["box", "circle", "triangle", "x"]


def test_box_layout():
    res = client.post("/gallery-layout", json={"topology": "box", "box": _single_room(), "artworks": _artworks(20)})
    assert res.status_code == 200
    body = res.json()
    assert len(body["wall_slots"]) == 19
    assert body["exhibits"][0]["artwork_index"] == 19
    assert body["exhibits"][0]["artwork_id"] == "art-19"
    assert body["warnings"] == []
    assert body["svg"] is None


def test_ring_layout_with_svg():
    res = client.post("/gallery-layout", json={
        "topology": "circle",
        "artworks": _artworks(30),
        "render": {"svg": True},
    })
    assert res.status_code == 200
    body = res.json()
    assert len(body["wall_slots"]) == 30
    assert body["svg"].startswith("<svg")


def test_unknown_topology():
    res = client.post("/gallery-layout", json={"topology": "hexagon", "artworks": []})
    assert res.status_code == 404


def test_conflicting_rooms():
    rooms = {"rooms": [{"id": "a", "size": [30, 30]}, {"id": "a", "position": [5, 0, 0], "size": [30, 30]}]}
    res = client.post("/gallery-layout", json={"topology": "box", "box": rooms, "artworks": _artworks(3)})
    assert res.status_code == 422
    detail = res.json()["detail"]
    assert detail["conflicts"]
    assert detail["suggestions"]


def test_malformed_request():
    res = client.post("/gallery-layout", json={"topology": "circle", "circle": {"radius": -1}})
    assert res.status_code == 422


def test_all_galleries():
    res = client.post("/gallery-layout/all", json={"artworks": _artworks(8)})
    assert res.status_code == 200
    body = res.json()
    assert list(body["galleries"]) == ["box", "circle", "triangle", "x"]
    indices = sorted(
        s["artwork_index"]
        for g in body["galleries"].values()
        for s in g["wall_slots"] + g["exhibits"]
    )
    assert indices == list(range(8))
    assert body["unplaced"] == []


def test_layouts_are_cached_for_the_app_lifetime():
    with TestClient(app) as scoped:
        payload = {"topology": "triangle", "artworks": _artworks(9)}
        first = scoped.post("/gallery-layout", json=payload)
        second = scoped.post("/gallery-layout", json=payload)
        assert first.json() == second.json()
        cache = app.state.layout_cache
        assert cache.hits == 1
        assert cache.misses == 1
    assert cache.disposed
