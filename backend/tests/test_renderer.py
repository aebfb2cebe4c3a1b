"""Tests for SVG and PNG plan rendering."""
import base64

from app.services.renderer import RenderOptions, render_png_base64, render_svg
from gallery.model import Door, Room
from gallery.topologies import BoxTopology, RingTopology


def _artworks(n):
    return [{"id": f"art-{i}"} for i in range(n)]


def test_svg_plan():
    layout = BoxTopology().layout(_artworks(40))
    svg = render_svg(layout)
    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    # shared walls are dashed
    assert "stroke-dasharray" in svg
    assert ">main<" not in svg


def test_svg_labels_are_opt_in():
    layout = BoxTopology([Room("main", (0, 0, 0), (60, 60), (Door("north"),))]).layout(_artworks(20))
    svg = render_svg(layout, RenderOptions(show_labels=True))
    assert ">main<" in svg
    assert ">19<" in svg


def test_svg_of_empty_layout():
    svg = render_svg(BoxTopology([]).layout([]))
    assert svg.startswith("<svg")


def test_png_is_base64_encoded():
    layout = RingTopology().layout(_artworks(30))
    data = base64.b64decode(render_png_base64(layout, RenderOptions(show_labels=True)))
    assert data[:4] == b"\x89PNG"
