"""CLI interface for wave-editor."""

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .config import Settings, load_settings
from .constants import DEFAULT_DURATION, DEFAULT_EVENT_TYPE, DEFAULT_PIXELS_PER_SECOND
from .errors import WaveEditorError
from .log import get_logger, setup_logging
from .model import Timeline
from .output import resolve_output_provider
from .registry import EnemyTypeRegistry, EventTypeRegistry, JsonFileRegistryStore
from .session import EditorSession
from .viewport import CoordinateEngine, tick_interval

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
log = get_logger(__name__)

app = typer.Typer(help="Author timed enemy-wave configurations.")
enemy_app = typer.Typer(help="Manage the persisted enemy type registry.")
app.add_typer(enemy_app, name="enemy")


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


@contextmanager
def _cli_errors() -> Iterator[None]:
    try:
        yield
    except (CLIError, WaveEditorError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    store: Optional[Path] = typer.Option(
        None,
        "--store",
        help="Enemy registry store file (overrides WAVE_EDITOR_STORE)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Author timed enemy-wave configurations."""
    settings = load_settings()
    if store is not None:
        settings = Settings(store_path=store, log_level=settings.log_level)
    setup_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@app.command()
def new(
    path: Path = typer.Argument(..., help="Timeline file to create"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Wave name"),
    duration: float = typer.Option(DEFAULT_DURATION, "--duration", "-d", help="Duration in seconds"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Create a timeline with one empty track."""
    with _cli_errors():
        if path.exists() and not force:
            raise CLIError(f"File '{path}' already exists (use --force to overwrite)")
        session = EditorSession()
        if name:
            session.timeline.name = name
        session.set_duration(duration)
        _save_timeline(session.timeline, path)
        console.print(f"[green]✓[/green] Timeline saved to {path}")


@app.command()
def show(path: Path = typer.Argument(..., help="Timeline file")) -> None:
    """Print tracks and events."""
    with _cli_errors():
        timeline = _load_timeline(path)
        console.print(
            f"[bold]{timeline.name}[/bold]  duration {timeline.duration:g}s  "
            f"(ticks every {tick_interval(timeline.duration)}s)"
        )
        for track in timeline.tracks:
            table = Table(title=f"{track.name} [dim]{track.id}[/dim]", title_justify="left")
            table.add_column("Time", justify="right")
            table.add_column("Type")
            table.add_column("Fields")
            table.add_column("Id", style="dim")
            for event in track.events:
                fields = ", ".join(f"{key}={value}" for key, value in event.custom_data.items())
                table.add_row(f"{event.time:.2f}s", event.type, fields, event.id)
            console.print(table)


@app.command("add-track")
def add_track(
    path: Path = typer.Argument(..., help="Timeline file"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Track name"),
) -> None:
    """Append a track."""
    with _cli_errors():
        session = EditorSession(_load_timeline(path))
        track = session.add_track(name)
        _save_timeline(session.timeline, path)
        console.print(f"[green]✓[/green] Added track '{track.name}' ({track.id})")


@app.command("remove-track")
def remove_track(
    path: Path = typer.Argument(..., help="Timeline file"),
    track_id: str = typer.Argument(..., help="Track id"),
) -> None:
    """Remove a track and all of its events."""
    with _cli_errors():
        session = EditorSession(_load_timeline(path))
        if not session.remove_track(track_id):
            raise CLIError(f"Track '{track_id}' not found")
        _save_timeline(session.timeline, path)
        console.print(f"[green]✓[/green] Removed track {track_id}")


@app.command("set-duration")
def set_duration(
    path: Path = typer.Argument(..., help="Timeline file"),
    seconds: float = typer.Argument(..., help="New duration in seconds"),
) -> None:
    """Change the timeline duration (never below the minimum)."""
    with _cli_errors():
        session = EditorSession(_load_timeline(path))
        duration = session.set_duration(seconds)
        _save_timeline(session.timeline, path)
        console.print(f"[green]✓[/green] Duration set to {duration:g}s")


@app.command("add-event")
def add_event(
    path: Path = typer.Argument(..., help="Timeline file"),
    track_id: str = typer.Argument(..., help="Track id"),
    time: Optional[float] = typer.Option(None, "--time", "-t", help="Event time in seconds"),
    pixel: Optional[float] = typer.Option(None, "--pixel", help="Viewport x position of a click"),
    zoom: float = typer.Option(DEFAULT_PIXELS_PER_SECOND, "--zoom", help="Pixels per second for --pixel"),
    scroll: float = typer.Option(0.0, "--scroll", help="Horizontal scroll offset for --pixel"),
    event_type: str = typer.Option(DEFAULT_EVENT_TYPE, "--type", help="Event type id"),
    no_snap: bool = typer.Option(False, "--no-snap", help="Do not snap the time to the grid"),
    values: List[str] = typer.Option([], "--set", help="Field value as key=value (repeatable)"),
    types_file: Optional[Path] = typer.Option(None, "--types", help="JSON file of extra event types"),
) -> None:
    """Place an event on a track; the time is snapped and clamped to the timeline."""
    with _cli_errors():
        if (time is None) == (pixel is None):
            raise CLIError("Specify exactly one of --time or --pixel")
        engine = CoordinateEngine(pixels_per_second=zoom, snap_to_grid=not no_snap)
        engine.scroll_x = scroll
        session = EditorSession(
            _load_timeline(path),
            event_types=_event_types(types_file),
            engine=engine,
        )
        session.require_track(track_id)
        fields = _parse_values(values)
        _check_fields(session, event_type, fields)

        if pixel is not None:
            event = session.place_event_at_pixel(track_id, pixel, event_type)
        else:
            event = session.place_event(track_id, time, event_type)
        if fields:
            session.edit_event(event.id, fields=fields)

        _save_timeline(session.timeline, path)
        console.print(f"[green]✓[/green] Added {event.type} event at {event.time:.2f}s ({event.id})")


@app.command("edit-event")
def edit_event(
    path: Path = typer.Argument(..., help="Timeline file"),
    event_id: str = typer.Argument(..., help="Event id"),
    time: Optional[float] = typer.Option(None, "--time", "-t", help="New time in seconds"),
    event_type: Optional[str] = typer.Option(None, "--type", help="New event type (resets fields)"),
    values: List[str] = typer.Option([], "--set", help="Field value as key=value (repeatable)"),
    types_file: Optional[Path] = typer.Option(None, "--types", help="JSON file of extra event types"),
) -> None:
    """Change an event's time, type, or field values."""
    with _cli_errors():
        session = EditorSession(_load_timeline(path), event_types=_event_types(types_file))
        if event_type is not None:
            _check_fields(session, event_type, {})
            session.change_event_type(event_id, event_type)
        _, event = session.require_event(event_id)
        fields = _parse_values(values)
        _check_fields(session, event.type, fields)
        try:
            event = session.edit_event(event_id, time=time, fields=fields)
        except ValueError as e:
            raise CLIError(str(e))
        _save_timeline(session.timeline, path)
        console.print(f"[green]✓[/green] Updated event {event.id} at {event.time:.2f}s")


@app.command("remove-event")
def remove_event(
    path: Path = typer.Argument(..., help="Timeline file"),
    event_id: str = typer.Argument(..., help="Event id"),
) -> None:
    """Delete an event."""
    with _cli_errors():
        session = EditorSession(_load_timeline(path))
        if not session.remove_event(event_id):
            raise CLIError(f"Event '{event_id}' not found")
        _save_timeline(session.timeline, path)
        console.print(f"[green]✓[/green] Removed event {event_id}")


@app.command("export-wave")
def export_wave(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Timeline file"),
    out: Path = typer.Argument(..., help="Wave configuration file to write"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Export even if enemy types are incomplete"),
) -> None:
    """Write the engine wave configuration (spawn events sorted by time)."""
    with _cli_errors():
        session = EditorSession(_load_timeline(path), enemy_types=_enemy_registry(ctx))

        def confirm(warnings: list[str]) -> bool:
            console.print("[yellow]Warning:[/yellow] some enemy types are incomplete:")
            for warning in warnings:
                console.print(f"  • {warning}")
            return yes or typer.confirm("Export anyway?", default=False)

        wave = session.export_wave(confirm)
        if wave is None:
            console.print("Export cancelled")
            return

        provider = resolve_output_provider("wave", str(out))
        try:
            provider.write(provider.encode(wave))
        except OSError as e:
            raise CLIError(f"Failed to save file '{out}': {e}")
        console.print(
            f"[green]✓[/green] Wave '{wave.wave_name}' with {len(wave.spawn_events)} spawn events saved to {out}"
        )


@app.command("event-types")
def event_types(
    types_file: Optional[Path] = typer.Option(None, "--types", help="JSON file of extra event types"),
) -> None:
    """List available event types and their fields."""
    with _cli_errors():
        table = Table(title="Event types", title_justify="left")
        table.add_column("Id")
        table.add_column("Name")
        table.add_column("Color")
        table.add_column("Fields")
        for event_type in _event_types(types_file).get_all():
            fields = ", ".join(
                f"{spec.name}: {spec.kind.value} = {spec.default!r}" for spec in event_type.fields
            )
            table.add_row(event_type.id, event_type.name, event_type.color, fields)
        console.print(table)


@enemy_app.command("add")
def enemy_add(
    ctx: typer.Context,
    enemy_id: str = typer.Argument(..., help="Enemy type id"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Display name"),
    icon: Optional[str] = typer.Option(None, "--icon", help="Short symbol or image data URL"),
    scene_path: str = typer.Option("", "--scene-path", help="Engine scene path"),
    uid: str = typer.Option("", "--uid", help="Engine resource uid"),
) -> None:
    """Register or replace an enemy type."""
    with _cli_errors():
        registry = _enemy_registry(ctx)
        entry = registry.register(
            enemy_id, {"name": name, "icon": icon, "scenePath": scene_path, "uid": uid}
        )
        console.print(f"[green]✓[/green] Saved enemy type '{entry.name}' ({entry.id})")
        for warning in registry.validate(enemy_id).warnings:
            console.print(f"[yellow]Warning:[/yellow] {warning}")


@enemy_app.command("list")
def enemy_list(ctx: typer.Context) -> None:
    """List registered enemy types."""
    with _cli_errors():
        registry = _enemy_registry(ctx)
        table = Table(title="Enemy types", title_justify="left")
        table.add_column("Id")
        table.add_column("Name")
        table.add_column("Icon")
        table.add_column("Scene path")
        table.add_column("UID")
        table.add_column("Valid")
        for enemy in registry.get_all():
            valid = registry.validate(enemy.id).valid
            icon = enemy.icon if len(enemy.icon) <= 8 else "(image)"
            table.add_row(
                enemy.id, enemy.name, icon, enemy.scene_path, enemy.uid,
                "[green]yes[/green]" if valid else "[yellow]no[/yellow]",
            )
        console.print(table)


@enemy_app.command("remove")
def enemy_remove(
    ctx: typer.Context,
    enemy_id: str = typer.Argument(..., help="Enemy type id"),
) -> None:
    """Remove an enemy type."""
    with _cli_errors():
        if not _enemy_registry(ctx).remove(enemy_id):
            raise CLIError(f"Enemy type '{enemy_id}' not found")
        console.print(f"[green]✓[/green] Removed enemy type {enemy_id}")


@enemy_app.command("validate")
def enemy_validate(ctx: typer.Context) -> None:
    """Check every enemy type for engine cross-reference fields."""
    with _cli_errors():
        result = _enemy_registry(ctx).validate_all()
        if result.valid:
            console.print("[green]✓[/green] All enemy types are complete")
            return
        for warning in result.warnings:
            console.print(f"[yellow]Warning:[/yellow] {warning}")


def _load_timeline(path: Path) -> Timeline:
    """Load a timeline file, failing with a user-facing error."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise CLIError(f"File '{path}' not found")
    except OSError as e:
        raise CLIError(f"Cannot read '{path}': {e}")
    timeline = Timeline.import_json(text)
    if timeline is None:
        raise CLIError(f"'{path}' is not a valid timeline file")
    return timeline


def _save_timeline(timeline: Timeline, path: Path) -> None:
    provider = resolve_output_provider("timeline", str(path))
    try:
        provider.write(provider.encode(timeline))
    except OSError as e:
        raise CLIError(f"Failed to save file '{path}': {e}")


def _enemy_registry(ctx: typer.Context) -> EnemyTypeRegistry:
    settings: Settings = ctx.obj if isinstance(ctx.obj, Settings) else load_settings()
    log.debug("Using enemy registry store %s", settings.store_path)
    return EnemyTypeRegistry(JsonFileRegistryStore(settings.store_path))


def _event_types(types_file: Path | None) -> EventTypeRegistry:
    registry = EventTypeRegistry()
    if types_file is not None:
        registry.load_definitions(types_file)
    return registry


def _parse_values(values: list[str]) -> dict[str, str]:
    fields = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise CLIError(f"Invalid --set value '{item}' (expected key=value)")
        fields[key.strip()] = value
    return fields


def _check_fields(session: EditorSession, event_type: str, fields: dict[str, str]) -> None:
    type_config = session.event_types.get(event_type)
    if type_config.id != event_type:
        raise CLIError(f"Unknown event type '{event_type}'")
    for name, raw in fields.items():
        spec = type_config.get_field(name)
        if spec is None:
            raise CLIError(f"Event type '{event_type}' has no field '{name}'")
        try:
            spec.coerce(raw)
        except ValueError as e:
            raise CLIError(str(e))


if __name__ == "__main__":
    app()
