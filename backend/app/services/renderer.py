# Matplotlib → SVG/PNG output of gallery plans
import io
import base64
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from shapely.geometry import Polygon
from shapely.ops import unary_union

from gallery.model import GalleryLayout
from gallery.perimeter import WallSegment

logger = logging.getLogger(__name__)

# Minimal colour palette for gallery plans
DEFAULT_COLORS = {
    "floor": "#f8f9fa",
    "wall": "#111111",
    "internal": "#9a9a9a",
    "door": "#ffffff",
    "artwork": "#c0392b",
    "sculpture": "#b9e6a4",
    "interactive": "#9bd3f0",
    "pedestal": "#f5c16c",
    "other": "#e5e5e5",
}

TARGET_SVG_WIDTH = 600


@dataclass(frozen=True)
class RenderOptions:
    show_labels: bool = False
    padding: int = 20
    target_width: int = TARGET_SVG_WIDTH
    title: Optional[str] = None


def _color_for(exhibit_type: str) -> str:
    return DEFAULT_COLORS.get(exhibit_type, DEFAULT_COLORS["other"])


def _bounds(layout: GalleryLayout) -> Tuple[float, float, float, float]:
    geoms = list(layout.zones.values()) + [w.line for w in layout.walls]
    if not geoms:
        return (-1.0, -1.0, 1.0, 1.0)
    return unary_union(geoms).bounds


def _door_spans(wall: WallSegment) -> List[Tuple[Tuple[float, float], Tuple[float, float]]]:
    spans = []
    for o in wall.openings:
        spans.append((wall.point_at(o.center - o.width / 2), wall.point_at(o.center + o.width / 2)))
    return spans


def _outlines(geom) -> List[List[Tuple[float, float]]]:
    if isinstance(geom, Polygon):
        return [list(geom.exterior.coords)] + [list(i.coords) for i in geom.interiors]
    if hasattr(geom, "geoms"):
        out = []
        for g in geom.geoms:
            out.extend(_outlines(g))
        return out
    return []


def render_svg(layout: GalleryLayout, options: Optional[RenderOptions] = None) -> str:
    """Top-down plan: floor zones, walls, doorways, wall pieces with facing ticks, exhibits."""
    options = options or RenderOptions()
    padding = options.padding
    minx, minz, maxx, maxz = _bounds(layout)
    W, H = max(maxx - minx, 1e-6), max(maxz - minz, 1e-6)

    # --- Scaling Logic ---
    scale = options.target_width / W
    width_px = int(options.target_width + padding * 2)
    height_px = int(H * scale + padding * 2)

    def px(x: float, z: float) -> Tuple[float, float]:
        return (padding + (x - minx) * scale, padding + (z - minz) * scale)

    svg = []
    svg.append(f'<svg xmlns="http://www.w3.org/2000/svg" width="{width_px}" height="{height_px}" viewBox="0 0 {width_px} {height_px}">')
    svg.append('''<style>
        .label { font-family: Inter, system-ui, sans-serif; font-size: 10px; fill: #111; text-anchor: middle; dominant-baseline: middle; }
        .room-label { font-size: 13px; font-weight: 500; opacity: 0.6; }
    </style>''')
    svg.append(f'<rect x="0" y="0" width="{width_px}" height="{height_px}" fill="#ffffff" />')

    # --- Zones ---
    for zone_id, geom in layout.zones.items():
        for ring in _outlines(geom):
            points = " ".join(f"{x:.2f},{y:.2f}" for x, y in (px(*c) for c in ring))
            svg.append(f'<polygon points="{points}" fill="{DEFAULT_COLORS["floor"]}" stroke="none"/>')
        if options.show_labels:
            c = geom.representative_point()
            x, y = px(c.x, c.y)
            svg.append(f'<text x="{x:.2f}" y="{y:.2f}" class="label room-label">{zone_id}</text>')

    # --- Walls and doorways ---
    for wall in layout.walls:
        (x1, y1), (x2, y2) = px(*wall.start), px(*wall.end)
        if wall.external:
            svg.append(f'<line x1="{x1:.2f}" y1="{y1:.2f}" x2="{x2:.2f}" y2="{y2:.2f}" stroke="{DEFAULT_COLORS["wall"]}" stroke-width="2"/>')
        else:
            svg.append(f'<line x1="{x1:.2f}" y1="{y1:.2f}" x2="{x2:.2f}" y2="{y2:.2f}" stroke="{DEFAULT_COLORS["internal"]}" stroke-width="1.5" stroke-dasharray="4 3"/>')
        for a, b in _door_spans(wall):
            (ax, ay), (bx, by) = px(*a), px(*b)
            svg.append(f'<line x1="{ax:.2f}" y1="{ay:.2f}" x2="{bx:.2f}" y2="{by:.2f}" stroke="{DEFAULT_COLORS["door"]}" stroke-width="4"/>')

    # --- Wall pieces ---
    segments = {(w.room_id, w.wall_id): w for w in layout.walls}
    for s in layout.wall_slots:
        wall = segments.get((s.room_id, s.wall_id))
        x, y = px(s.position[0], s.position[2])
        if wall is not None:
            dx, dz = wall.direction
            half = s.size[0] / 2 * scale
            svg.append(f'<line x1="{x - dx * half:.2f}" y1="{y - dz * half:.2f}" x2="{x + dx * half:.2f}" y2="{y + dz * half:.2f}" stroke="{DEFAULT_COLORS["artwork"]}" stroke-width="3"/>')
            nx_, nz = wall.inward
            tick = max(3.0, scale)
            svg.append(f'<line x1="{x:.2f}" y1="{y:.2f}" x2="{x + nx_ * tick:.2f}" y2="{y + nz * tick:.2f}" stroke="{DEFAULT_COLORS["artwork"]}" stroke-width="1"/>')
        if options.show_labels:
            svg.append(f'<text x="{x:.2f}" y="{y - 6:.2f}" class="label">{s.artwork_index}</text>')

    # --- Exhibits ---
    for e in layout.exhibits:
        w, h = e.size[0] * scale, e.size[2] * scale
        x, y = px(e.position[0], e.position[2])
        svg.append(f'<rect x="{x - w / 2:.2f}" y="{y - h / 2:.2f}" width="{w:.2f}" height="{h:.2f}" fill="{_color_for(e.exhibit_type)}" stroke="#333" stroke-width="1" rx="2" ry="2"/>')
        if options.show_labels:
            svg.append(f'<text x="{x:.2f}" y="{y:.2f}" class="label">{e.artwork_index}</text>')

    svg.append("</svg>")
    return "".join(svg)


def render_png_base64(layout: GalleryLayout, options: Optional[RenderOptions] = None) -> str:
    """Same plan through matplotlib, returned as base64 PNG."""
    options = options or RenderOptions()
    minx, minz, maxx, maxz = _bounds(layout)
    fig, ax = plt.subplots(figsize=(max(8, (maxx - minx) / 20), max(8, (maxz - minz) / 20)))

    for zone_id, geom in layout.zones.items():
        for ring in _outlines(geom):
            ax.add_patch(mpatches.Polygon(ring, facecolor=DEFAULT_COLORS["floor"], edgecolor="none", zorder=1))
        if options.show_labels:
            c = geom.representative_point()
            ax.text(c.x, c.y, zone_id, ha="center", va="center", fontsize=8, alpha=0.6)

    for wall in layout.walls:
        xs, zs = zip(wall.start, wall.end)
        if wall.external:
            ax.plot(xs, zs, color=DEFAULT_COLORS["wall"], linewidth=2, zorder=3)
        else:
            ax.plot(xs, zs, color=DEFAULT_COLORS["internal"], linewidth=1.2, linestyle="--", zorder=3)
        for a, b in _door_spans(wall):
            ax.plot([a[0], b[0]], [a[1], b[1]], color=DEFAULT_COLORS["door"], linewidth=3.5, zorder=4)

    segments = {(w.room_id, w.wall_id): w for w in layout.walls}
    for s in layout.wall_slots:
        wall = segments.get((s.room_id, s.wall_id))
        x, z = s.position[0], s.position[2]
        if wall is not None:
            dx, dz = wall.direction
            half = s.size[0] / 2
            ax.plot([x - dx * half, x + dx * half], [z - dz * half, z + dz * half],
                    color=DEFAULT_COLORS["artwork"], linewidth=2.5, zorder=5)
        if options.show_labels:
            ax.text(x, z, str(s.artwork_index), fontsize=6, ha="center", va="bottom", zorder=6)

    for e in layout.exhibits:
        w, h = e.size[0], e.size[2]
        ax.add_patch(mpatches.Rectangle((e.position[0] - w / 2, e.position[2] - h / 2), w, h,
                                        facecolor=_color_for(e.exhibit_type), edgecolor="#333",
                                        linewidth=0.8, zorder=5))
        if options.show_labels:
            ax.text(e.position[0], e.position[2], str(e.artwork_index), fontsize=6,
                    ha="center", va="center", zorder=6)

    ax.set_xlim(minx - 2, maxx + 2)
    ax.set_ylim(minz - 2, maxz + 2)
    ax.set_aspect("equal")
    ax.axis("off")
    ax.set_title(options.title or f"{layout.topology} gallery", fontsize=14, fontweight="bold")
    # north (-Z) at the top
    ax.invert_yaxis()

    buf = io.BytesIO()
    plt.savefig(buf, format='png', bbox_inches='tight')
    plt.close(fig)
    buf.seek(0)
    return base64.b64encode(buf.getvalue()).decode('utf-8')
