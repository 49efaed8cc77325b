from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config import AppSettings, ConnectorSettings, load_settings, resolve_config_path


def test_yaml_file_sets_connector_options(tmp_path: Path) -> None:
    config_path = tmp_path / "app.yaml"
    config_path.write_text(
        "connector:\n  curviness: 20\n  orientation: Clockwise\n  log_level: debug\n",
        encoding="utf-8",
    )

    settings = load_settings(config_path)

    assert settings.connector.curviness == 20
    assert settings.connector.margin == 5
    assert settings.connector.orientation == "clockwise"
    assert settings.connector.log_level == "DEBUG"


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "app.yaml"
    config_path.write_text("connector:\n  margin: 3\n", encoding="utf-8")
    monkeypatch.setenv("CONNECTOR_CONNECTOR__MARGIN", "9")

    settings = load_settings(config_path)

    assert settings.connector.margin == 9


def test_config_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "custom.yaml"
    config_path.write_text("connector:\n  proximity_limit: 120\n", encoding="utf-8")
    monkeypatch.setenv("CONNECTOR_CONFIG_PATH", str(config_path))

    assert load_settings().connector.proximity_limit == 120


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.yaml")


def test_yaml_path_is_reset_after_load(tmp_path: Path) -> None:
    config_path = tmp_path / "app.yaml"
    config_path.write_text("connector:\n  curviness: 30\n", encoding="utf-8")

    load_settings(config_path)

    assert AppSettings._yaml_path is None


def test_invalid_log_level_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ConnectorSettings(log_level="chatty")


def test_settings_build_domain_config(app_settings_factory: Callable[..., AppSettings]) -> None:
    settings = app_settings_factory(curviness=15, orientation="clockwise")

    config = settings.connector.to_connector_config()

    assert config.curviness == 15
    assert config.margin == 5
    assert config.clockwise is True


def test_missing_env_config_path_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONNECTOR_CONFIG_PATH", str(tmp_path / "missing.yaml"))

    with pytest.raises(FileNotFoundError):
        resolve_config_path()


def test_explicit_config_path_wins_over_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("connector:\n  margin: 2\n", encoding="utf-8")
    monkeypatch.setenv("CONNECTOR_CONFIG_PATH", str(tmp_path / "missing.yaml"))

    assert resolve_config_path(explicit) == explicit
    assert load_settings(explicit).connector.margin == 2


def test_yaml_path_is_reset_when_loading_fails(tmp_path: Path) -> None:
    config_path = tmp_path / "app.yaml"
    config_path.write_text("connector:\n  orientation: sideways\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_settings(config_path)

    assert AppSettings._yaml_path is None
