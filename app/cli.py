from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from adapters.filesystem.event_repository import (
    FileSystemEventSource,
    FileSystemWeekLayoutWriter,
)
from app.config import AppSettings, load_settings
from app.layout_wiring import build_layout_engine, build_week_builder
from domain.models import CalendarEvent, DayLayout
from domain.services.event_validation import ensure_well_formed
from domain.services.time_grid import start_of_week

app = typer.Typer(no_args_is_help=True)
console = Console()


def _parse_day(value: Optional[str]) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        console.print(f"[red]Invalid date:[/] {value}")
        raise typer.Exit(code=1) from exc


def _load_events(input_path: Path, settings: AppSettings) -> list[CalendarEvent]:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)
    try:
        events = FileSystemEventSource().load_all(input_path)
        return ensure_well_formed(events, drop_invalid=settings.grid.drop_invalid_events)
    except ValueError as exc:
        console.print(f"[red]Invalid events:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _render_day(layout: DayLayout) -> Table:
    table = Table(title=f"{layout.day.isoformat()} ({layout.day.strftime('%a')})")
    table.add_column("id", justify="right")
    table.add_column("title")
    table.add_column("time")
    table.add_column("top", justify="right")
    table.add_column("height", justify="right")
    table.add_column("left", justify="right")
    table.add_column("width", justify="right")
    for placement in layout.placements:
        event = placement.event
        table.add_row(
            str(event.id),
            event.title,
            f"{event.start:%H:%M}-{event.end:%H:%M}",
            f"{placement.top:.1f}",
            f"{placement.height:.1f}",
            f"{placement.left:.3f}",
            f"{placement.width:.3f}",
        )
    return table


@app.command("layout-week")
def layout_week(
    input_path: Path = typer.Argument(..., help="JSON file with calendar events."),
    day: Optional[str] = typer.Option(None, "--date", help="Any date inside the week (YYYY-MM-DD)."),
    output: Optional[Path] = typer.Option(None, help="Write the week layout as JSON here."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    settings = load_settings(config)
    events = _load_events(input_path, settings)
    builder = build_week_builder(settings)
    layout = builder.build(events, _parse_day(day), now=datetime.now())

    if output is not None:
        FileSystemWeekLayoutWriter().save(layout, output)
        console.print(f"[green]Wrote[/] {output}")
        return
    for day_layout in layout.days:
        if day_layout.placements:
            console.print(_render_day(day_layout))
    if not layout.placements():
        console.print(f"[yellow]No events in week of {layout.week_start.isoformat()}[/]")


@app.command("layout-day")
def layout_day(
    input_path: Path = typer.Argument(..., help="JSON file with calendar events."),
    day: Optional[str] = typer.Option(None, "--date", help="Day to lay out (YYYY-MM-DD)."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    settings = load_settings(config)
    events = _load_events(input_path, settings)
    target = _parse_day(day)
    # Input order is kept as-is for a single day.
    day_events = [event for event in events if event.start.date() == target]
    placements = build_layout_engine(settings).build_day(day_events)
    layout = DayLayout(
        day=target,
        day_index=(target - start_of_week(target, settings.grid.first_weekday)).days,
        placements=placements,
    )
    console.print(_render_day(layout))


@app.command("validate")
def validate(
    input_path: Path = typer.Argument(..., help="JSON file with calendar events."),
) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)
    try:
        events = FileSystemEventSource().load_all(input_path)
        ensure_well_formed(events)
    except ValueError as exc:
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Valid events file:[/] {input_path} ({len(events)} events)")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8080, help="Port to listen on."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    from app.web_main import create_app

    web_app = create_app(load_settings(config))
    uvicorn.run(web_app, host=host, port=port)


if __name__ == "__main__":
    app()
