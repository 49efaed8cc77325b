from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from domain.models import (
    DEFAULT_CURVINESS,
    DEFAULT_MARGIN,
    DEFAULT_PROXIMITY_LIMIT,
    ORIENTATION_COUNTERCLOCKWISE,
    ConnectorConfig,
    Orientation,
)

DEFAULT_CONFIG_PATH = Path("config/connector/app.yaml")


class ConnectorSettings(BaseModel):
    curviness: float = DEFAULT_CURVINESS
    margin: float = DEFAULT_MARGIN
    proximity_limit: float = DEFAULT_PROXIMITY_LIMIT
    orientation: Orientation = ORIENTATION_COUNTERCLOCKWISE
    log_level: str = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        level = str(value or "WARNING").strip().upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"connector.log_level must be a logging level name, got {value!r}"
            raise ValueError(msg)
        return level

    def to_connector_config(self) -> ConnectorConfig:
        return ConnectorConfig(
            curviness=self.curviness,
            margin=self.margin,
            proximity_limit=self.proximity_limit,
            orientation=self.orientation,
        )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CONNECTOR_", env_nested_delimiter="__")

    connector: ConnectorSettings = ConnectorSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def resolve_config_path(config_path: Path | None = None) -> Path | None:
    """Pick the YAML file: explicit argument, then CONNECTOR_CONFIG_PATH, then the default."""
    if config_path is None:
        env_path = os.getenv("CONNECTOR_CONFIG_PATH")
        if env_path:
            config_path = Path(env_path)
        elif DEFAULT_CONFIG_PATH.exists():
            return DEFAULT_CONFIG_PATH
        else:
            return None
    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)
    return config_path


@contextmanager
def _yaml_source(path: Path | None) -> Iterator[None]:
    previous = AppSettings._yaml_path
    AppSettings._yaml_path = path
    try:
        yield
    finally:
        AppSettings._yaml_path = previous


def load_settings(config_path: Path | None = None) -> AppSettings:
    with _yaml_source(resolve_config_path(config_path)):
        return AppSettings()
