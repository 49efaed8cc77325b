from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import ConnectorRequest, CurveDescriptor


class ConnectorRequestRepository(Protocol):
    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, ConnectorRequest]]: ...

    def load_by_path(self, path: Path) -> ConnectorRequest: ...

    def save_descriptors(self, descriptors: Sequence[CurveDescriptor], path: Path) -> None: ...
