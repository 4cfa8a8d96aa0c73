# app/timeline/layout.py
"""
Timeline Layout Engine
-----------------------
Places every celebrity on a vertical timeline by score and fans out
near-collisions.

Position:
    usable_vh = page_vh − top_vh − bottom_vh
    top_vh(score) = top_vh + effective_score × usable_vh

    effective_score clamps to [0, 1]; missing or non-numeric scores use 0.5.

Collision stagger (greedy, O(n log n)):
    sort by position (stable, ties keep input order), toggle = −1
    for each entity after the first:
        gap to the previous sorted entity ≤ threshold → toggle = −toggle,
                                                        stagger = toggle × stagger_px
        otherwise                                     → toggle = −1, stagger = 0

Only the immediately preceding neighbour is compared, so three or more
entities inside one threshold window can still overlap.
"""
import structlog
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from app.models.timeline import PositionedCelebrity
from app.scoring.utils import effective_score

logger = structlog.get_logger(__name__)

LIGHT_HALF_TEXT = "#000"
DARK_HALF_TEXT = "#fff"


class ScoredEntity(Protocol):
    id: str
    score: Any


@dataclass(frozen=True)
class TimelineGeometry:
    """Vertical layout of the page, in vh unless noted."""
    page_vh: float = 200.0
    top_vh: float = 15.0
    bottom_vh: float = 15.0
    collision_threshold_vh: float = 2.0
    stagger_px: float = 10.0
    avatar_size_px: int = 72

    def __post_init__(self):
        if self.usable_vh <= 0:
            raise ValueError(
                f"Timeline margins leave no usable range: page={self.page_vh}, "
                f"top={self.top_vh}, bottom={self.bottom_vh}"
            )

    @property
    def usable_vh(self) -> float:
        return self.page_vh - self.top_vh - self.bottom_vh

    @classmethod
    def from_settings(cls, settings) -> "TimelineGeometry":
        return cls(
            page_vh=settings.TIMELINE_PAGE_VH,
            top_vh=settings.TIMELINE_TOP_VH,
            bottom_vh=settings.TIMELINE_BOTTOM_VH,
            collision_threshold_vh=settings.COLLISION_THRESHOLD_VH,
            stagger_px=settings.STAGGER_PX,
            avatar_size_px=settings.AVATAR_SIZE_PX,
        )


def compute_position(score: Any, top_margin: float, usable_range: float) -> float:
    """Linear interpolation of the effective score along the usable range."""
    return top_margin + effective_score(score) * usable_range


def resolve_collisions(
    entities: Sequence[ScoredEntity],
    geometry: TimelineGeometry,
) -> Dict[str, float]:
    """
    Args:
        entities: Full entity list for one render pass, any order.
        geometry: Timeline geometry (margins, threshold, stagger magnitude).

    Returns:
        Mapping of entity id → lateral stagger in px. Every id is present.
    """
    offsets = [
        compute_position(e.score, geometry.top_vh, geometry.usable_vh)
        for e in entities
    ]
    # sorted() is stable, so equal offsets keep input order
    order = sorted(range(len(entities)), key=lambda i: offsets[i])

    staggers: Dict[str, float] = {}
    toggle = -1
    previous: Optional[float] = None
    for i in order:
        offset = offsets[i]
        if previous is not None and offset - previous <= geometry.collision_threshold_vh:
            toggle = -toggle
            staggers[entities[i].id] = toggle * geometry.stagger_px
        else:
            toggle = -1
            staggers[entities[i].id] = 0.0
        previous = offset

    return staggers


def text_color_for(score: float) -> str:
    """Dark caption on the light upper half, light caption on the dark lower half."""
    return LIGHT_HALF_TEXT if score <= 0.5 else DARK_HALF_TEXT


def layout_entities(
    entities: Sequence[Any],
    geometry: TimelineGeometry,
    viewport_height_px: Optional[float] = None,
) -> List[PositionedCelebrity]:
    """
    Position every celebrity record. Output order follows input order.

    top_px is filled only when viewport_height_px is given.
    """
    staggers = resolve_collisions(entities, geometry)

    positioned: List[PositionedCelebrity] = []
    for e in entities:
        score = effective_score(e.score)
        top_vh = compute_position(score, geometry.top_vh, geometry.usable_vh)
        positioned.append(
            PositionedCelebrity(
                id=e.id,
                name=e.name,
                reason=e.reason,
                image_url=e.image_url,
                score=score,
                count=e.count,
                top_vh=top_vh,
                top_px=(
                    top_vh / 100.0 * viewport_height_px
                    if viewport_height_px is not None
                    else None
                ),
                stagger_px=staggers[e.id],
                text_color=text_color_for(score),
                score_label=f"{score:.2f}",
            )
        )

    logger.debug(
        "timeline_laid_out",
        entities=len(positioned),
        staggered=sum(1 for p in positioned if p.stagger_px != 0),
        viewport_height_px=viewport_height_px,
    )
    return positioned
