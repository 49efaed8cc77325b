from __future__ import annotations

from domain.models import BoundingCorners, Segment


def classify_segment(x1: float, y1: float, x2: float, y2: float) -> Segment:
    """Return the segment of (x2, y2) relative to (x1, y1).

    Rules are checked in order and the first match wins, so points sharing an
    axis resolve to the earlier segment.
    """
    if x1 <= x2 and y2 <= y1:
        return Segment.TOP_RIGHT
    if x1 <= x2 and y1 <= y2:
        return Segment.BOTTOM_RIGHT
    if x2 <= x1 and y2 >= y1:
        return Segment.BOTTOM_LEFT
    return Segment.TOP_LEFT


def classify_corners(corners: BoundingCorners) -> Segment:
    return classify_segment(corners.sx, corners.sy, corners.tx, corners.ty)
