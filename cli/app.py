from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_message, render_sensor, render_sensor_table


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the sensor registry service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Registry API base URL (defaults to API_BASE_URL env or http://localhost:8080).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each HTTP request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List every registered sensor."""
    state = _get_state(ctx)
    render_sensor_table(state.client.list_sensors())


@app.command("get")
def get_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Sensor name."),
) -> None:
    """Show a single sensor."""
    state = _get_state(ctx)
    render_sensor(state.client.get_sensor(name))


@app.command("create")
def create_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Sensor name."),
    x: float = typer.Option(..., "--x", help="X coordinate."),
    y: float = typer.Option(..., "--y", help="Y coordinate."),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag; repeat for several."),
) -> None:
    """Register a new sensor."""
    state = _get_state(ctx)
    payload = state.client.create_sensor(name, tag or [], x, y)
    typer.secho(f"Sensor created. name={payload.get('name')}", fg=typer.colors.GREEN)
    render_sensor(payload)


@app.command("update")
def update_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Sensor name."),
    x: float = typer.Option(..., "--x", help="New X coordinate."),
    y: float = typer.Option(..., "--y", help="New Y coordinate."),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Replacement tag; repeat for several."),
) -> None:
    """Replace the tags and location of a sensor."""
    state = _get_state(ctx)
    render_message(state.client.update_sensor(name, tag or [], x, y))


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Sensor name."),
) -> None:
    """Delete every sensor with the given name."""
    state = _get_state(ctx)
    render_message(state.client.delete_sensor(name))


@app.command("nearest")
def nearest_command(
    ctx: typer.Context,
    x: float = typer.Option(..., "--x", help="X coordinate of the query point."),
    y: float = typer.Option(..., "--y", help="Y coordinate of the query point."),
) -> None:
    """Find the sensor closest to a point."""
    state = _get_state(ctx)
    render_sensor(state.client.nearest_sensor(x, y))
