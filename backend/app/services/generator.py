# app/services/generator.py
import logging
from typing import Dict, Any, List, Optional, Tuple

from app.config import Config
from app.models.requests import CompositeLayoutRequest, GalleryLayoutRequest, PlacementIn, RenderOptionsIn
from app.models.responses import ExhibitOut, LayoutResponse, WallSlotOut
from app.services.cache import LayoutCache, layout_key
from app.services.renderer import RenderOptions, render_png_base64, render_svg
from app.services.validator import connectivity_warnings, validate_layout, validate_topology_config
from gallery.model import GalleryLayout, PlacementConfig
from gallery.topologies import GALLERY_ORDER, BoxTopology, GalleryTopology, build_topology, compose_galleries

logger = logging.getLogger(__name__)

SUGGESTIONS = [
    "Give every room a unique id",
    "Move rooms so their footprints only touch at shared walls",
    "Narrow doors to fit their walls",
    "Keep the inner ring radius below the outer radius",
]


def placement_config(placement: Optional[PlacementIn]) -> PlacementConfig:
    if placement is None:
        return PlacementConfig()
    return PlacementConfig(**placement.model_dump())


def render_options(render: Optional[RenderOptionsIn], title: Optional[str] = None) -> RenderOptions:
    show_labels = Config.DEBUG
    if render is not None and render.show_labels is not None:
        show_labels = render.show_labels
    return RenderOptions(show_labels=show_labels, title=title)


def _conflict(errors: List[str]) -> Dict[str, Any]:
    return {"error": "Gallery configuration is not feasible", "conflicts": errors, "suggestions": SUGGESTIONS}


def _warnings(topology: GalleryTopology, layout: GalleryLayout) -> List[str]:
    _, warnings = validate_layout(layout, topology.placement)
    if isinstance(topology, BoxTopology):
        warnings.extend(connectivity_warnings(topology.rooms, topology.placement.wall_thickness))
    for w in warnings:
        logger.warning("%s layout: %s", layout.topology, w)
    return warnings


def layout_response(layout: GalleryLayout, warnings: List[str], render: Optional[RenderOptionsIn] = None) -> LayoutResponse:
    wall_slots = [
        WallSlotOut(
            artwork_index=s.artwork_index,
            artwork_id=s.artwork_id,
            position=s.position,
            rotation=s.rotation,
            size=s.size,
            wall_id=s.wall_id,
            room_id=s.room_id,
        )
        for s in layout.wall_slots
    ]
    exhibits = [
        ExhibitOut(
            artwork_index=e.artwork_index,
            artwork_id=e.artwork_id,
            position=e.position,
            size=e.size,
            exhibit_type=e.exhibit_type,
            room_id=e.room_id,
            slot_id=e.slot_id,
        )
        for e in layout.exhibits
    ]
    svg = image_base64 = None
    if render is not None:
        options = render_options(render, title=f"{layout.topology} gallery")
        if render.svg:
            svg = render_svg(layout, options)
        if render.png:
            image_base64 = render_png_base64(layout, options)
    return LayoutResponse(
        topology=layout.topology,
        wall_slots=wall_slots,
        exhibits=exhibits,
        discarded=layout.discarded,
        unplaced=layout.unplaced,
        warnings=warnings,
        metadata=layout.metadata,
        svg=svg,
        image_base64=image_base64,
    )


def generate_gallery_layout(req: GalleryLayoutRequest, cache: Optional[LayoutCache] = None) -> Tuple[Dict[str, Any], Optional[LayoutResponse]]:
    """Lay out one gallery. ``result`` carries ``error`` when the configuration is not feasible.

    Raises ``KeyError`` for an unknown topology name.
    """
    placement = placement_config(req.placement)
    params = req.topology_params()
    topology = build_topology(req.topology, params, placement)

    ok, errors = validate_topology_config(topology)
    if not ok:
        return _conflict(errors), None

    artworks = [a.model_dump() for a in req.artworks]
    if cache is not None:
        key = layout_key(req.topology, params, placement, artworks)
        layout = cache.get_or_compute(key, lambda: topology.layout(artworks))
    else:
        layout = topology.layout(artworks)

    return {"topology": req.topology, "summary": layout.summary()}, layout_response(layout, _warnings(topology, layout), req.render)


def generate_all_galleries(req: CompositeLayoutRequest, cache: Optional[LayoutCache] = None) -> Tuple[Dict[str, Any], Optional[Dict[str, LayoutResponse]]]:
    """Deal the artworks over every gallery and lay each out at its world origin."""
    placement = placement_config(req.placement)
    topologies: Dict[str, GalleryTopology] = {}
    params_by_name: Dict[str, Dict[str, Any]] = {}
    errors: List[str] = []
    for name in GALLERY_ORDER:
        section = getattr(req, name)
        params = section.model_dump(exclude_none=True) if section is not None else {}
        topology = build_topology(name, params, placement)
        ok, errs = validate_topology_config(topology)
        errors.extend(f"{name}: {e}" for e in errs)
        topologies[name] = topology
        params_by_name[name] = params
    if errors:
        return _conflict(errors), None

    artworks = [a.model_dump() for a in req.artworks]

    def compute() -> Dict[str, GalleryLayout]:
        return compose_galleries(artworks, topologies)

    if cache is not None:
        key = layout_key("all", params_by_name, placement, artworks)
        layouts = cache.get_or_compute(key, compute)
    else:
        layouts = compute()

    galleries = {
        name: layout_response(layout, _warnings(topologies[name], layout), req.render)
        for name, layout in layouts.items()
    }
    return {"summary": {name: layout.summary() for name, layout in layouts.items()}}, galleries
