from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def format_location(location: Dict[str, Any] | None) -> str:
    if not location:
        return "(unknown)"
    return f"({location.get('x')}, {location.get('y')})"


def render_sensor(payload: Dict[str, Any]) -> None:
    echo_heading(f"Sensor {payload.get('name')}")
    typer.echo(f"location: {format_location(payload.get('location'))}")
    tags = payload.get("tags") or []
    if tags:
        typer.echo("tags:")
        for tag in tags:
            typer.echo(f"  - {tag}")
    else:
        typer.echo("tags: none")


def render_sensor_table(sensors: Iterable[Dict[str, Any]]) -> None:
    rows = list(sensors)
    echo_heading(f"Sensors ({len(rows)})")
    if not rows:
        typer.echo("No sensors registered.")
        return
    for sensor in rows:
        tags = ", ".join(sensor.get("tags") or []) or "-"
        typer.echo(
            f"  - {sensor.get('name')} at {format_location(sensor.get('location'))} [{tags}]"
        )


def render_message(payload: Dict[str, Any]) -> None:
    if payload.get("error"):
        typer.secho(payload["error"], fg=typer.colors.YELLOW)
    else:
        typer.secho(payload.get("success") or "ok", fg=typer.colors.GREEN)
