# app/routes/layout.py

from fastapi import APIRouter, HTTPException, Request
from typing import List
from app.models.requests import CompositeLayoutRequest, GalleryLayoutRequest
from app.models.responses import CompositeLayoutResponse, ConflictResponse, LayoutResponse, TopologyInfo
from app.services.generator import generate_all_galleries, generate_gallery_layout
from gallery.topologies import GALLERY_ORDER, TOPOLOGIES
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/topologies", response_model=List[TopologyInfo])
def list_topologies():
    return [TopologyInfo(name=name, params=TOPOLOGIES[name]().params()) for name in GALLERY_ORDER]


# Only the success model is declared here. Errors are raised as HTTPException.
@router.post("/gallery-layout", response_model=LayoutResponse)
def gallery_layout(req: GalleryLayoutRequest, request: Request):
    if req.topology not in TOPOLOGIES:
        raise HTTPException(status_code=404, detail=f"Unknown topology '{req.topology}'. Expected one of: {', '.join(GALLERY_ORDER)}.")
    try:
        result, response = generate_gallery_layout(req, getattr(request.app.state, "layout_cache", None))

        if "error" in result:
            raise HTTPException(status_code=422, detail=ConflictResponse(**result).model_dump())

        logger.info("Laid out %d artworks in %s gallery: %s", len(req.artworks), req.topology, result["summary"])
        return response

    except HTTPException:
        # Re-raise HTTPException so FastAPI can handle it
        raise
    except Exception as e:
        logger.exception("Layout of %s gallery failed", req.topology)
        raise HTTPException(status_code=500, detail=f"An internal server error occurred: {str(e)}")


@router.post("/gallery-layout/all", response_model=CompositeLayoutResponse)
def all_galleries(req: CompositeLayoutRequest, request: Request):
    try:
        result, galleries = generate_all_galleries(req, getattr(request.app.state, "layout_cache", None))

        if "error" in result:
            raise HTTPException(status_code=422, detail=ConflictResponse(**result).model_dump())

        unplaced = sorted(i for g in galleries.values() for i in g.unplaced)
        logger.info("Laid out %d artworks over %d galleries", len(req.artworks), len(galleries))
        return CompositeLayoutResponse(galleries=galleries, unplaced=unplaced)

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Composite gallery layout failed")
        raise HTTPException(status_code=500, detail=f"An internal server error occurred: {str(e)}")
