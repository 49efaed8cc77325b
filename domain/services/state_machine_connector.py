from __future__ import annotations

import logging
import math

from domain.models import (
    CONNECTOR_TYPE,
    AnchorPosition,
    ConnectorConfig,
    CurveDescriptor,
    Point,
)
from domain.ports.painting import SegmentSink
from domain.services.control_point_solver import solve_control_point
from domain.services.margin_adjustment import adjust_for_margin, derive_corners
from domain.services.segment_classifier import classify_corners

logger = logging.getLogger(__name__)


def compute_curve(
    source: AnchorPosition,
    target: AnchorPosition,
    width: float,
    height: float,
    config: ConnectorConfig | None = None,
) -> CurveDescriptor:
    config = config or ConnectorConfig()
    corners = adjust_for_margin(
        derive_corners(source, target, width, height), source, target, config.margin
    )
    midpoint = corners.midpoint()
    segment = classify_corners(corners)
    distance = math.sqrt((corners.tx - corners.sx) ** 2 + (corners.ty - corners.sy) ** 2)
    logger.debug(
        "Curve corners (%s, %s) -> (%s, %s), segment %s, distance %.2f.",
        corners.sx,
        corners.sy,
        corners.tx,
        corners.ty,
        segment.name,
        distance,
    )
    control_point = solve_control_point(
        midpoint,
        segment,
        source,
        target,
        config.curviness,
        config.curviness,
        distance,
        config.proximity_limit,
    )
    return CurveDescriptor.quadratic(corners, control_point)


class StateMachineConnector:
    """Quadratic Bezier connector with a single control point per draw."""

    type = CONNECTOR_TYPE

    def __init__(self, config: ConnectorConfig | None = None, sink: SegmentSink | None = None) -> None:
        self.config = config or ConnectorConfig()
        self.sink = sink
        self._control_point: Point | None = None

    @property
    def curviness(self) -> float:
        return self.config.curviness

    @property
    def margin(self) -> float:
        return self.config.margin

    @property
    def proximity_limit(self) -> float:
        return self.config.proximity_limit

    @property
    def clockwise(self) -> bool:
        # Accepted for compatibility; control point selection ignores it.
        return self.config.clockwise

    @property
    def last_control_point(self) -> Point | None:
        return self._control_point

    def compute(
        self,
        source: AnchorPosition,
        target: AnchorPosition,
        width: float,
        height: float,
    ) -> CurveDescriptor:
        descriptor = compute_curve(source, target, width, height, self.config)
        self._control_point = descriptor.control_point
        if self.sink is not None:
            self.sink.add_segment(descriptor)
        return descriptor
