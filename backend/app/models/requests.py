# app/models/requests.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List, Literal, Tuple

WallName = Literal["north", "east", "south", "west"]

class DoorIn(BaseModel):
    wall: WallName
    position: float = Field(0.5, ge=0.0, le=1.0)
    width: float = Field(7.0, gt=0)
    height: float = Field(12.0, gt=0)

class RoomIn(BaseModel):
    id: str
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    size: Tuple[float, float]
    doors: List[DoorIn] = []

class BoxIn(BaseModel):
    rooms: Optional[List[RoomIn]] = None  # None: the default five-room plan

class CircleIn(BaseModel):
    radius: float = Field(70.0, gt=0)
    inner_radius: float = Field(35.0, gt=0)
    segments: int = Field(24, ge=1)
    gap_every: int = Field(6, ge=0)
    inner_limit: Optional[int] = Field(None, ge=0)
    pedestal_count: int = Field(8, ge=0)
    pedestal_ratio: float = Field(0.5, gt=0, le=1.0)

class TriangleIn(BaseModel):
    size: float = Field(70.0, gt=0)
    max_per_wall: int = Field(3, ge=0)
    pedestal_count: int = Field(6, ge=0)
    inner_scale: float = Field(0.6, gt=0, lt=1.0)

class CrossIn(BaseModel):
    arm_length: float = Field(70.0, gt=0)
    arm_width: float = Field(20.0, gt=0)
    first_distance: float = Field(20.0, ge=0)
    step: float = Field(15.0, gt=0)
    arm_exhibits: int = Field(1, ge=0)

class PlacementIn(BaseModel):
    wall_height: float = Field(20.0, gt=0)
    wall_thickness: float = Field(0.5, gt=0)
    spacing: float = Field(6.0, ge=0)
    wall_offset: float = 0.3
    piece_width: float = Field(6.0, gt=0)
    door_clearance: float = Field(10.0, ge=0)
    track_door_geometry: bool = False
    central_room_id: str = "main"
    exhibit_margin: float = Field(5.0, ge=0)
    exhibit_height: float = 1.0
    min_exhibit_room: float = Field(20.0, ge=0)
    area_per_exhibit: float = Field(300.0, gt=0)
    max_exhibits_per_room: int = Field(5, ge=1)
    exhibit_reserve: int = Field(0, ge=0)

class ArtworkIn(BaseModel):
    # Opaque to the engine; anything beyond id is passed through untouched.
    model_config = ConfigDict(extra="allow")
    id: str
    title: Optional[str] = None

class RenderOptionsIn(BaseModel):
    svg: bool = False
    png: bool = False
    show_labels: Optional[bool] = None  # None: follow GALLERY_DEBUG

class GalleryLayoutRequest(BaseModel):
    topology: str
    box: Optional[BoxIn] = None
    circle: Optional[CircleIn] = None
    triangle: Optional[TriangleIn] = None
    x: Optional[CrossIn] = None
    placement: Optional[PlacementIn] = None
    artworks: List[ArtworkIn] = []
    render: Optional[RenderOptionsIn] = None

    def topology_params(self) -> Dict[str, Any]:
        section = getattr(self, self.topology, None) if self.topology in ("box", "circle", "triangle", "x") else None
        if section is None:
            return {}
        return section.model_dump(exclude_none=True)

class CompositeLayoutRequest(BaseModel):
    box: Optional[BoxIn] = None
    circle: Optional[CircleIn] = None
    triangle: Optional[TriangleIn] = None
    x: Optional[CrossIn] = None
    placement: Optional[PlacementIn] = None
    artworks: List[ArtworkIn] = []
    render: Optional[RenderOptionsIn] = None
