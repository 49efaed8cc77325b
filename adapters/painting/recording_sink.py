from __future__ import annotations

from dataclasses import dataclass, field

from domain.models import CurveDescriptor
from domain.ports.painting import SegmentSink


@dataclass
class RecordingSegmentSink(SegmentSink):
    segments: list[CurveDescriptor] = field(default_factory=list)

    def add_segment(self, descriptor: CurveDescriptor) -> None:
        self.segments.append(descriptor)

    def to_payload(self) -> list[dict[str, float]]:
        return [segment.to_dict() for segment in self.segments]

    def clear(self) -> None:
        self.segments.clear()
