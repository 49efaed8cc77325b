from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import orjson
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.filesystem.request_repository import (
    DESCRIPTOR_SUFFIX,
    FileSystemRequestRepository,
    dump_json_bytes,
)
from adapters.painting.recording_sink import RecordingSegmentSink
from app.config import AppSettings, load_settings
from domain.models import AnchorPosition, ConnectorConfig
from domain.services.state_machine_connector import StateMachineConnector

app = typer.Typer(no_args_is_help=True)
console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=settings.connector.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_settings_or_exit(config_path: Path | None) -> AppSettings:
    try:
        settings = load_settings(config_path)
    except (FileNotFoundError, ValidationError) as exc:
        console.print(f"[red]Invalid configuration:[/] {exc}")
        raise typer.Exit(code=1) from exc
    _configure_logging(settings)
    return settings


def _parse_anchor(raw: str, name: str) -> AnchorPosition:
    parts = [part.strip() for part in raw.split(",")]
    try:
        values = [float(part) for part in parts]
    except ValueError as exc:
        raise typer.BadParameter(f"{name} must be four comma-separated numbers") from exc
    if len(values) != 4:
        raise typer.BadParameter(f"{name} must be four comma-separated numbers")
    return AnchorPosition.from_sequence(values)


@app.command("curve")
def curve(
    source: str = typer.Option(..., help="Source anchor as absX,absY,propX,propY."),
    target: str = typer.Option(..., help="Target anchor as absX,absY,propX,propY."),
    width: float = typer.Option(..., help="Width of the connector box."),
    height: float = typer.Option(..., help="Height of the connector box."),
    curviness: Optional[float] = typer.Option(None, help="Control point offset in pixels."),
    margin: Optional[float] = typer.Option(None, help="Outset for anchors on a face edge."),
    proximity_limit: Optional[float] = typer.Option(
        None, help="Distance under which the connector is drawn straight.",
    ),
    orientation: Optional[str] = typer.Option(None, help="clockwise or counterclockwise."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    settings = _load_settings_or_exit(config_path)
    overrides = {
        key: value
        for key, value in {
            "curviness": curviness,
            "margin": margin,
            "proximity_limit": proximity_limit,
            "orientation": orientation,
        }.items()
        if value is not None
    }
    try:
        config = ConnectorConfig.model_validate(
            {**settings.connector.to_connector_config().model_dump(), **overrides}
        )
    except ValidationError as exc:
        console.print(f"[red]Invalid connector options:[/] {exc}")
        raise typer.Exit(code=1) from exc

    connector = StateMachineConnector(config)
    descriptor = connector.compute(
        _parse_anchor(source, "source"), _parse_anchor(target, "target"), width, height
    )
    typer.echo(dump_json_bytes(descriptor.to_dict()).decode("utf-8"))


@app.command("batch")
def batch(
    input_dir: Path = typer.Argument(..., help="Directory with connector request JSON files."),
    output_dir: Path = typer.Argument(..., help="Directory to write curve descriptor files."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    settings = _load_settings_or_exit(config_path)
    base_config = settings.connector.to_connector_config()
    repository = FileSystemRequestRepository()

    try:
        pairs = repository.load_all_with_paths(input_dir)
    except (ValidationError, orjson.JSONDecodeError) as exc:
        console.print(f"[red]Invalid connector request:[/] {exc}")
        raise typer.Exit(code=1) from exc
    if not pairs:
        console.print(f"[yellow]No connector requests found in {input_dir}[/]")
        raise typer.Exit(code=0)

    output_dir.mkdir(parents=True, exist_ok=True)
    for path, request in pairs:
        sink = RecordingSegmentSink()
        connector = StateMachineConnector(request.resolve_config(base_config), sink=sink)
        connector.compute(
            request.source_anchor(), request.target_anchor(), request.box_width, request.box_height
        )
        logger.info("Control point for %s: %s", path.name, connector.last_control_point)
        target_path = output_dir / f"{path.stem}{DESCRIPTOR_SUFFIX}"
        repository.save_descriptors(sink.segments, target_path)
        console.print(f"[green]Wrote[/] {target_path}")


@app.command("validate")
def validate(input_path: Path = typer.Argument(..., help="Connector request file to validate.")) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)

    try:
        FileSystemRequestRepository().load_by_path(input_path)
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Valid connector request:[/] {input_path}")


if __name__ == "__main__":
    app()
