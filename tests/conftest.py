from __future__ import annotations

import os
from collections.abc import Callable, Generator

import pytest

from app.config import AppSettings, ConnectorSettings
from domain.models import AnchorPosition, ConnectorConfig


def _clear_connector_env() -> None:
    for key in list(os.environ):
        if key.startswith("CONNECTOR_"):
            os.environ.pop(key, None)


_clear_connector_env()


@pytest.fixture(autouse=True)
def clear_connector_env() -> Generator[None, None, None]:
    _clear_connector_env()
    yield
    _clear_connector_env()


@pytest.fixture
def connector_config() -> ConnectorConfig:
    return ConnectorConfig(curviness=10, margin=5, proximity_limit=80)


@pytest.fixture
def connector_config_factory(
    connector_config: ConnectorConfig,
) -> Callable[..., ConnectorConfig]:
    def _factory(**overrides: object) -> ConnectorConfig:
        return connector_config.model_copy(update=overrides)

    return _factory


@pytest.fixture
def top_left_anchor() -> AnchorPosition:
    return AnchorPosition(0, 0, 0, 0)


@pytest.fixture
def bottom_right_anchor() -> AnchorPosition:
    return AnchorPosition(200, 100, 1, 1)


@pytest.fixture
def connector_settings() -> ConnectorSettings:
    return ConnectorSettings(
        curviness=10,
        margin=5,
        proximity_limit=80,
        orientation="counterclockwise",
        log_level="WARNING",
    )


@pytest.fixture
def app_settings_factory(
    connector_settings: ConnectorSettings,
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(connector=connector_settings.model_copy(update=overrides))

    return _factory
