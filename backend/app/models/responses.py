from pydantic import BaseModel
from typing import List, Dict, Any, Optional, Tuple

class WallSlotOut(BaseModel):
    artwork_index: int
    artwork_id: str
    position: Tuple[float, float, float]
    rotation: Tuple[float, float, float]
    size: Tuple[float, float]
    wall_id: str
    room_id: str

class ExhibitOut(BaseModel):
    artwork_index: int
    artwork_id: str
    position: Tuple[float, float, float]
    size: Tuple[float, float, float]
    exhibit_type: str
    room_id: str
    slot_id: str

class LayoutResponse(BaseModel):
    topology: str
    wall_slots: List[WallSlotOut]
    exhibits: List[ExhibitOut]
    discarded: List[int] = []
    unplaced: List[int] = []
    warnings: List[str] = []
    metadata: Dict[str, Any] = {}
    svg: Optional[str] = None
    image_base64: Optional[str] = None

class CompositeLayoutResponse(BaseModel):
    galleries: Dict[str, LayoutResponse]
    unplaced: List[int] = []

class TopologyInfo(BaseModel):
    name: str
    params: Dict[str, Any]

class ConflictResponse(BaseModel):
    error: str
    conflicts: List[str]
    suggestions: List[str]
