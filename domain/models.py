from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from enum import Enum, IntEnum
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, Field, ValidationInfo, field_validator

CONNECTOR_TYPE = "StateMachine"

DEFAULT_CURVINESS = 10.0
DEFAULT_MARGIN = 5.0
DEFAULT_PROXIMITY_LIMIT = 80.0
ORIENTATION_CLOCKWISE = "clockwise"
ORIENTATION_COUNTERCLOCKWISE = "counterclockwise"


def _normalize_orientation(value: object) -> str:
    return str(value).strip().lower() if value else ORIENTATION_COUNTERCLOCKWISE


Orientation = Annotated[
    Literal["clockwise", "counterclockwise"], BeforeValidator(_normalize_orientation)
]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class AnchorPosition:
    abs_x: float
    abs_y: float
    prop_x: float  # 0 is the left edge, 1 the right edge
    prop_y: float  # 0 is the top edge, 1 the bottom edge

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> AnchorPosition:
        abs_x, abs_y, prop_x, prop_y = values
        return cls(float(abs_x), float(abs_y), float(prop_x), float(prop_y))


@dataclass(frozen=True)
class BoundingCorners:
    sx: float
    sy: float
    tx: float
    ty: float

    def midpoint(self) -> Point:
        return Point((self.sx + self.tx) / 2, (self.sy + self.ty) / 2)


class Segment(IntEnum):
    """Where the target corner lies relative to the source corner."""

    TOP_RIGHT = 1
    BOTTOM_RIGHT = 2
    BOTTOM_LEFT = 3
    TOP_LEFT = 4


class FaceAlignment(str, Enum):
    # Anchors on opposite horizontal faces; the control point moves along x.
    PARALLEL_Y = "parallel_y"
    # Anchors on opposite vertical faces; the control point moves along y.
    PARALLEL_X = "parallel_x"
    NONE = "none"


@dataclass(frozen=True)
class CurveDescriptor:
    """Quadratic Bezier segment handed to the painting pipeline.

    Endpoint 1 is the target corner and endpoint 2 the source corner; both
    control handles hold the same point.
    """

    x1: float
    y1: float
    x2: float
    y2: float
    cp1x: float
    cp1y: float
    cp2x: float
    cp2y: float

    @classmethod
    def quadratic(cls, corners: BoundingCorners, control_point: Point) -> CurveDescriptor:
        return cls(
            x1=corners.tx,
            y1=corners.ty,
            x2=corners.sx,
            y2=corners.sy,
            cp1x=control_point.x,
            cp1y=control_point.y,
            cp2x=control_point.x,
            cp2y=control_point.y,
        )

    @property
    def control_point(self) -> Point:
        return Point(self.cp1x, self.cp1y)

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


class ConnectorConfig(BaseModel):
    curviness: float = DEFAULT_CURVINESS
    margin: float = DEFAULT_MARGIN
    proximity_limit: float = DEFAULT_PROXIMITY_LIMIT
    orientation: Orientation = ORIENTATION_COUNTERCLOCKWISE

    @field_validator("curviness", "margin", "proximity_limit", mode="before")
    @classmethod
    def default_when_unset(cls, value: object, info: ValidationInfo) -> object:
        # Zero and NaN count as unset, so they resolve to the field default.
        if value is None or value == 0 or (isinstance(value, float) and math.isnan(value)):
            return cls.model_fields[info.field_name].default
        return value

    @property
    def clockwise(self) -> bool:
        return self.orientation == ORIENTATION_CLOCKWISE


class ConnectorRequest(BaseModel):
    source: List[float] = Field(..., min_length=4, max_length=4)
    target: List[float] = Field(..., min_length=4, max_length=4)
    box_width: float
    box_height: float
    config: Optional[ConnectorConfig] = None

    def source_anchor(self) -> AnchorPosition:
        return AnchorPosition.from_sequence(self.source)

    def target_anchor(self) -> AnchorPosition:
        return AnchorPosition.from_sequence(self.target)

    def resolve_config(self, fallback: ConnectorConfig) -> ConnectorConfig:
        if self.config is None:
            return fallback
        return fallback.model_copy(update=self.config.model_dump(exclude_unset=True))
