from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Literal

from domain.models import AnchorPosition, FaceAlignment, Point, Segment

logger = logging.getLogger(__name__)

Signs = tuple[int, int]


def _at_edge(value: float, edge: int) -> bool:
    return value <= 0 if edge == 0 else value >= 1


@dataclass(frozen=True)
class FaceRule:
    """Both anchors sit on the given extreme edges of one proportional axis."""

    axis: Literal["x", "y"]
    source_edge: int
    target_edge: int

    def matches(self, source: AnchorPosition, target: AnchorPosition) -> bool:
        if self.axis == "x":
            return _at_edge(source.prop_x, self.source_edge) and _at_edge(
                target.prop_x, self.target_edge
            )
        return _at_edge(source.prop_y, self.source_edge) and _at_edge(
            target.prop_y, self.target_edge
        )


# Checked in order per segment; the first matching rule decides the alignment.
ALIGNMENT_RULES: Mapping[Segment, tuple[tuple[FaceAlignment, FaceRule], ...]] = {
    Segment.TOP_RIGHT: (
        (FaceAlignment.PARALLEL_Y, FaceRule("y", 0, 1)),
        (FaceAlignment.PARALLEL_X, FaceRule("x", 1, 0)),
    ),
    Segment.BOTTOM_RIGHT: (
        (FaceAlignment.PARALLEL_Y, FaceRule("y", 1, 0)),
        (FaceAlignment.PARALLEL_X, FaceRule("x", 1, 0)),
    ),
    Segment.BOTTOM_LEFT: (
        (FaceAlignment.PARALLEL_Y, FaceRule("y", 1, 0)),
        (FaceAlignment.PARALLEL_X, FaceRule("x", 0, 1)),
    ),
    Segment.TOP_LEFT: (
        (FaceAlignment.PARALLEL_Y, FaceRule("y", 0, 1)),
        (FaceAlignment.PARALLEL_X, FaceRule("x", 0, 1)),
    ),
}


def _along_x(source: AnchorPosition) -> Signs:
    return (-1 if source.prop_x < 0.5 else 1, 0)


def _along_y(source: AnchorPosition) -> Signs:
    return (0, -1 if source.prop_y < 0.5 else 1)


def _diagonal(signs: Signs) -> Callable[[AnchorPosition], Signs]:
    return lambda _source: signs


OFFSET_RULES: Mapping[tuple[Segment, FaceAlignment], Callable[[AnchorPosition], Signs]] = {
    (Segment.TOP_RIGHT, FaceAlignment.PARALLEL_Y): _along_x,
    (Segment.TOP_RIGHT, FaceAlignment.PARALLEL_X): _along_y,
    (Segment.TOP_RIGHT, FaceAlignment.NONE): _diagonal((-1, -1)),
    (Segment.BOTTOM_RIGHT, FaceAlignment.PARALLEL_Y): _along_x,
    (Segment.BOTTOM_RIGHT, FaceAlignment.PARALLEL_X): _along_y,
    (Segment.BOTTOM_RIGHT, FaceAlignment.NONE): _diagonal((1, -1)),
    (Segment.BOTTOM_LEFT, FaceAlignment.PARALLEL_Y): _along_x,
    (Segment.BOTTOM_LEFT, FaceAlignment.PARALLEL_X): _along_y,
    (Segment.BOTTOM_LEFT, FaceAlignment.NONE): _diagonal((-1, -1)),
    (Segment.TOP_LEFT, FaceAlignment.PARALLEL_Y): _along_x,
    (Segment.TOP_LEFT, FaceAlignment.PARALLEL_X): _along_y,
    (Segment.TOP_LEFT, FaceAlignment.NONE): _diagonal((1, -1)),
}


def match_alignment(
    segment: Segment, source: AnchorPosition, target: AnchorPosition
) -> FaceAlignment:
    for alignment, rule in ALIGNMENT_RULES[segment]:
        if rule.matches(source, target):
            return alignment
    return FaceAlignment.NONE


def _offset(value: float, sign: int, delta: float) -> float:
    if sign == 0:
        return value
    return value + sign * delta


def solve_control_point(
    midpoint: Point,
    segment: Segment,
    source: AnchorPosition,
    target: AnchorPosition,
    dx: float,
    dy: float,
    distance: float,
    proximity_limit: float,
) -> Point:
    """Pick the quadratic control point for a connector.

    Anchors closer than ``proximity_limit`` get the midpoint, which draws a
    straight line. Otherwise the control point is the midpoint moved by ``dx``
    and/or ``dy``: along one axis when both anchors sit on opposite extreme
    faces, diagonally otherwise. ``source`` and ``target`` are only consulted
    for their proportional face positions.
    """
    if distance <= proximity_limit:
        logger.debug(
            "Distance %.2f within proximity limit %.2f, using midpoint.", distance, proximity_limit
        )
        return midpoint

    alignment = match_alignment(segment, source, target)
    sign_x, sign_y = OFFSET_RULES[(segment, alignment)](source)
    logger.debug(
        "Segment %s matched alignment %s, offset signs (%d, %d).",
        segment.name,
        alignment.value,
        sign_x,
        sign_y,
    )
    return Point(_offset(midpoint.x, sign_x, dx), _offset(midpoint.y, sign_y, dy))
