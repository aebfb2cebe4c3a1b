# gallery/distributor.py
"""Artwork distribution over wall segments.

One cursor walks the artwork array in order. Every candidate slot consumes
the artwork under the cursor; slots that land in a doorway (only when door
geometry is tracked) are dropped but still consume it. Once the array is
exhausted the remaining walls simply stay empty.
"""
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Optional, Sequence

from gallery.model import PlacementConfig, PlacementSlot, Room
from gallery.perimeter import WallSegment, box_perimeter, facing_rotation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotCandidate:
    segment: WallSegment
    distance: float
    blocked: bool = False


@dataclass
class DistributionResult:
    slots: List[PlacementSlot] = field(default_factory=list)
    cursor: int = 0
    discarded: List[int] = field(default_factory=list)   # consumed at a doorway, never shown


class ArtworkDistributor:
    def __init__(self, config: Optional[PlacementConfig] = None):
        self.config = config or PlacementConfig()

    def candidates(self, segment: WallSegment) -> Iterator[SlotCandidate]:
        if not segment.external:
            return
        piece_width = self.config.piece_width
        track = self.config.track_door_geometry
        for distance in segment.offsets(piece_width, self.config.spacing):
            yield SlotCandidate(segment, distance, track and segment.blocked(distance, piece_width))

    def place(self, candidates: Iterable[SlotCandidate], artworks: Sequence[Any],
              start: int = 0) -> DistributionResult:
        result = DistributionResult(cursor=start)
        total = len(artworks)
        for candidate in candidates:
            if result.cursor >= total:
                logger.debug("Artworks exhausted at %s/%s", candidate.segment.room_id,
                             candidate.segment.wall_id)
                break
            if candidate.blocked:
                logger.debug("Artwork %d falls in a doorway on %s/%s, skipped", result.cursor,
                             candidate.segment.room_id, candidate.segment.wall_id)
                result.discarded.append(result.cursor)
                result.cursor += 1
                continue
            result.slots.append(self._slot(candidate, result.cursor, artworks[result.cursor]))
            result.cursor += 1
        return result

    def distribute(self, segments: Iterable[WallSegment], artworks: Sequence[Any],
                   start: int = 0) -> DistributionResult:
        candidates = itertools.chain.from_iterable(self.candidates(s) for s in segments)
        return self.place(candidates, artworks, start)

    def _slot(self, candidate: SlotCandidate, index: int, artwork: Any) -> PlacementSlot:
        segment = candidate.segment
        x, z = segment.anchor(candidate.distance, self.config.wall_offset)
        return PlacementSlot(
            artwork_index=index,
            artwork=artwork,
            position=(x, self.config.art_height, z),
            rotation=facing_rotation(segment.inward),
            wall_id=segment.wall_id,
            room_id=segment.room_id,
            size=segment.piece_size,
        )


def distribute(rooms: Sequence[Room], config: PlacementConfig, artworks: Sequence[Any]) -> List[PlacementSlot]:
    """Wall art for a rectangular room set, external walls only."""
    segments = box_perimeter(rooms, config)
    return ArtworkDistributor(config).distribute(segments, artworks).slots
