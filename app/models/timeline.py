from pydantic import BaseModel, Field
from typing import Optional


class PositionedCelebrity(BaseModel):
    """
    A celebrity placed on the timeline for one render pass. Never persisted.
    """

    id: str
    name: str
    reason: str
    image_url: str
    score: float = Field(..., ge=0, le=1, description="Effective (clamped) score used for layout")
    count: int

    top_vh: float = Field(..., description="Vertical offset in viewport-height units")
    top_px: Optional[float] = Field(
        default=None,
        description="Vertical offset in pixels; set when the viewport height is known"
    )
    stagger_px: float = Field(default=0.0, description="Lateral offset resolving near-collisions")

    text_color: str = Field(..., description="Caption color for the half of the page the pin sits in")
    score_label: str = Field(..., description="Score formatted for display")


class TimelineGeometryResponse(BaseModel):
    page_vh: float
    top_vh: float
    bottom_vh: float
    usable_vh: float
    collision_threshold_vh: float
    stagger_px: float
    avatar_size_px: int


class TimelineResponse(BaseModel):
    geometry: TimelineGeometryResponse
    viewport_height_px: Optional[float] = None
    items: list[PositionedCelebrity]
    total: int


class HitTestRequest(BaseModel):
    """
    Pointer state from the render surface.

    pointer_y is absolute (page) pixels, pointer_x is viewport pixels.
    """

    pointer_x: float = Field(..., allow_inf_nan=False)
    pointer_y: float = Field(..., allow_inf_nan=False)
    viewport_width: float = Field(..., gt=0, allow_inf_nan=False)
    viewport_height: float = Field(..., gt=0, allow_inf_nan=False)
    modal_open: bool = False
    current_id: Optional[str] = Field(
        default=None,
        description="Currently active celebrity; kept when hit testing is suppressed"
    )


class HitTestResponse(BaseModel):
    active_id: Optional[str] = None
    suppressed: bool = False
