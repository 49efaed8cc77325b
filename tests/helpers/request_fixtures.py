from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from adapters.filesystem.request_repository import FileSystemRequestRepository
from domain.models import ConnectorRequest


@lru_cache(maxsize=1)
def repo_root() -> Path:
    for parent in Path(__file__).resolve().parents:
        if (parent / "pyproject.toml").exists():
            return parent
    raise RuntimeError("Repository root not found")


def request_examples_dir() -> Path:
    return repo_root() / "examples" / "requests"


def load_request_fixture(name: str) -> ConnectorRequest:
    return FileSystemRequestRepository().load_by_path(request_examples_dir() / name)
