# app/timeline/hover.py
"""
Hover Hit Testing
------------------
Decides which celebrity is "active" (enlarged avatar + detail panel) as the
pointer moves along the timeline.

    hit_test: nearest pin by absolute y, accepted within threshold_px.
              Equal distances resolve to the first pin in list order.

Hit testing is suppressed, freezing the current hover, while
    - the pointer is right of axis_x + detail_band_px (the detail panel), or
    - a vote modal is open.
"""
from typing import Iterable, List, Optional, Sequence, Tuple

from app.models.timeline import PositionedCelebrity

PinPosition = Tuple[str, float]


def vh_to_px(vh: float, viewport_height_px: float) -> float:
    """Convert viewport-height units to absolute pixels."""
    return vh / 100.0 * viewport_height_px


def pixel_positions(
    items: Sequence[PositionedCelebrity],
    viewport_height_px: float,
) -> List[PinPosition]:
    """(id, y_px) for every positioned celebrity, in list order."""
    return [(item.id, vh_to_px(item.top_vh, viewport_height_px)) for item in items]


def hit_test(
    pointer_y: float,
    positions: Iterable[PinPosition],
    threshold_px: float,
) -> Optional[str]:
    """Id of the pin nearest pointer_y if it lies within threshold_px, else None."""
    best_id: Optional[str] = None
    best_distance: Optional[float] = None
    for pin_id, y in positions:
        distance = abs(y - pointer_y)
        # strict < keeps the first pin on ties
        if best_distance is None or distance < best_distance:
            best_id, best_distance = pin_id, distance

    if best_distance is None or best_distance > threshold_px:
        return None
    return best_id


def is_hover_suppressed(
    pointer_x: float,
    viewport_width: float,
    detail_band_px: float,
    modal_open: bool = False,
) -> bool:
    """True while the pointer is over the detail panel side or a vote modal is open."""
    if modal_open:
        return True
    axis_x = viewport_width / 2.0
    return pointer_x > axis_x + detail_band_px


def resolve_hover(
    pointer_x: float,
    pointer_y: float,
    viewport_width: float,
    positions: Iterable[PinPosition],
    threshold_px: float,
    detail_band_px: float,
    modal_open: bool = False,
    current_id: Optional[str] = None,
) -> Tuple[Optional[str], bool]:
    """
    Returns:
        (active_id, suppressed). When suppressed, active_id is current_id.
    """
    if is_hover_suppressed(pointer_x, viewport_width, detail_band_px, modal_open):
        return current_id, True
    return hit_test(pointer_y, positions, threshold_px), False


class HoverTracker:
    """Stateful hover for an in-process render surface."""

    def __init__(self, threshold_px: float, detail_band_px: float):
        self.threshold_px = threshold_px
        self.detail_band_px = detail_band_px
        self.active_id: Optional[str] = None
        self.modal_open = False
        self._positions: List[PinPosition] = []
        self._viewport_width = 0.0

    def update_layout(
        self,
        items: Sequence[PositionedCelebrity],
        viewport_width: float,
        viewport_height: float,
    ) -> None:
        """Call on every entity-list change or viewport resize."""
        self._positions = pixel_positions(items, viewport_height)
        self._viewport_width = viewport_width
        known = {pin_id for pin_id, _ in self._positions}
        if self.active_id not in known:
            self.active_id = None

    def pointer_move(self, pointer_x: float, pointer_y: float) -> Optional[str]:
        self.active_id, _ = resolve_hover(
            pointer_x,
            pointer_y,
            self._viewport_width,
            self._positions,
            self.threshold_px,
            self.detail_band_px,
            modal_open=self.modal_open,
            current_id=self.active_id,
        )
        return self.active_id

    def pointer_leave(self) -> None:
        self.active_id = None

    def open_vote_modal(self) -> None:
        self.modal_open = True

    def close_vote_modal(self) -> None:
        self.modal_open = False
