from __future__ import annotations

from typing import Protocol

from domain.models import CurveDescriptor


class SegmentSink(Protocol):
    def add_segment(self, descriptor: CurveDescriptor) -> None: ...
