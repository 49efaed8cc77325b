from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import orjson

from domain.models import ConnectorRequest, CurveDescriptor
from domain.ports.repositories import ConnectorRequestRepository

DESCRIPTOR_SUFFIX = ".curve.json"


def strip_line_comments(content: str) -> str:
    """Drop ``//`` comments that start outside of JSON strings."""
    result_lines: list[str] = []
    for line in content.splitlines():
        in_string = False
        escaped = False
        cut = len(line)
        for idx, char in enumerate(line):
            if escaped:
                escaped = False
                continue
            if char == "\\" and in_string:
                escaped = True
                continue
            if char == '"':
                in_string = not in_string
            elif not in_string and line.startswith("//", idx):
                cut = idx
                break
        result_lines.append(line[:cut])
    return "\n".join(result_lines)


def dump_json_bytes(payload: Any) -> bytes:
    try:
        return orjson.dumps(payload, option=orjson.OPT_INDENT_2)
    except TypeError:
        return json.dumps(payload, ensure_ascii=True, indent=2).encode("utf-8")


class FileSystemRequestRepository(ConnectorRequestRepository):
    def load_all_with_paths(self, directory: Path) -> list[tuple[Path, ConnectorRequest]]:
        return [(path, self.load_by_path(path)) for path in sorted(self._iter_paths(directory))]

    def load_by_path(self, path: Path) -> ConnectorRequest:
        text = path.read_text(encoding="utf-8")
        payload = orjson.loads(strip_line_comments(text))
        return ConnectorRequest.model_validate(payload)

    def save_descriptors(self, descriptors: Sequence[CurveDescriptor], path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(f"{path.suffix}.tmp")
        tmp_path.write_bytes(dump_json_bytes([descriptor.to_dict() for descriptor in descriptors]))
        tmp_path.replace(path)

    def _iter_paths(self, directory: Path) -> Iterable[Path]:
        for path in directory.glob("*.json"):
            # Skip descriptors written by a previous batch into the same directory.
            if not path.name.endswith(DESCRIPTOR_SUFFIX):
                yield path
