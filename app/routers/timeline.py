"""
routers/timeline.py - Timeline layout endpoints

Endpoints:
  GET  /api/v1/timeline            - Positioned celebrities for one render pass
  POST /api/v1/timeline/hit-test   - Which celebrity the pointer is hovering

Both endpoints recompute the layout from the current celebrity list on every
call; positions are never stored.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.config import settings
from app.core.dependencies import get_celebrity_repository, get_timeline_geometry
from app.models.timeline import (
    HitTestRequest,
    HitTestResponse,
    TimelineGeometryResponse,
    TimelineResponse,
)
from app.repositories.base import CelebrityStore
from app.routers.celebrities import ErrorResponse, load_celebrities
from app.timeline.hover import pixel_positions, resolve_hover
from app.timeline.layout import TimelineGeometry, layout_entities

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/timeline", tags=["Timeline"])


def geometry_response(geometry: TimelineGeometry) -> TimelineGeometryResponse:
    return TimelineGeometryResponse(
        page_vh=geometry.page_vh,
        top_vh=geometry.top_vh,
        bottom_vh=geometry.bottom_vh,
        usable_vh=geometry.usable_vh,
        collision_threshold_vh=geometry.collision_threshold_vh,
        stagger_px=geometry.stagger_px,
        avatar_size_px=geometry.avatar_size_px,
    )


@router.get(
    "",
    response_model=TimelineResponse,
    responses={503: {"model": ErrorResponse, "description": "Celebrity store unavailable"}},
    summary="Timeline layout",
    description=(
        "Positions every celebrity by score (0 = top, 1 = bottom) and staggers "
        "near-collisions. Pass viewport_height to also get pixel offsets."
    ),
)
def get_timeline(
    viewport_height: Optional[float] = Query(
        default=None, gt=0, description="Viewport height in px"
    ),
    store: CelebrityStore = Depends(get_celebrity_repository),
    geometry: TimelineGeometry = Depends(get_timeline_geometry),
) -> TimelineResponse:
    celebrities = load_celebrities(store)
    items = layout_entities(celebrities.items, geometry, viewport_height_px=viewport_height)
    return TimelineResponse(
        geometry=geometry_response(geometry),
        viewport_height_px=viewport_height,
        items=items,
        total=len(items),
    )


@router.post(
    "/hit-test",
    response_model=HitTestResponse,
    responses={503: {"model": ErrorResponse, "description": "Celebrity store unavailable"}},
    summary="Resolve hovered celebrity",
    description=(
        "Returns the celebrity nearest the pointer within the hover threshold. "
        "While the pointer is over the detail panel or a vote modal is open, "
        "the current hover is kept."
    ),
)
def hit_test_timeline(
    request: HitTestRequest,
    store: CelebrityStore = Depends(get_celebrity_repository),
    geometry: TimelineGeometry = Depends(get_timeline_geometry),
) -> HitTestResponse:
    celebrities = load_celebrities(store)
    items = layout_entities(celebrities.items, geometry)
    active_id, suppressed = resolve_hover(
        request.pointer_x,
        request.pointer_y,
        request.viewport_width,
        pixel_positions(items, request.viewport_height),
        threshold_px=settings.HOVER_THRESHOLD_PX,
        detail_band_px=settings.DETAIL_BAND_PX,
        modal_open=request.modal_open,
        current_id=request.current_id,
    )
    return HitTestResponse(active_id=active_id, suppressed=suppressed)
