from __future__ import annotations

from domain.models import AnchorPosition, BoundingCorners


def derive_corners(
    source: AnchorPosition, target: AnchorPosition, width: float, height: float
) -> BoundingCorners:
    left_to_right = source.abs_x < target.abs_x
    top_to_bottom = source.abs_y < target.abs_y
    return BoundingCorners(
        sx=0 if left_to_right else width,
        sy=0 if top_to_bottom else height,
        tx=width if left_to_right else 0,
        ty=height if top_to_bottom else 0,
    )


def _shift(value: float, proportion: float, margin: float) -> float:
    # Only anchors sitting exactly on a face edge move; anything else passes through.
    if proportion == 0:
        return value - margin
    if proportion == 1:
        return value + margin
    return value


def adjust_for_margin(
    corners: BoundingCorners,
    source: AnchorPosition,
    target: AnchorPosition,
    margin: float,
) -> BoundingCorners:
    return BoundingCorners(
        sx=_shift(corners.sx, source.prop_x, margin),
        sy=_shift(corners.sy, source.prop_y, margin),
        tx=_shift(corners.tx, target.prop_x, margin),
        ty=_shift(corners.ty, target.prop_y, margin),
    )
