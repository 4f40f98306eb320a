from __future__ import annotations

import logging
from importlib import metadata

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from castaway.adventure.game import Game
from castaway.adventure.loader import load_world
from castaway.adventure.models import GameState
from castaway.core.config import CastawayConfig, resolve_config
from castaway.core.errors import LoadError


app = typer.Typer(add_completion=False, help="Castaway: a small text adventure engine")
console = Console(highlight=False)
err_console = Console(stderr=True)


def _get_version() -> str:
    try:
        return metadata.version("castaway")
    except metadata.PackageNotFoundError:
        return "0.0.0+local"


def _configure_logging(cfg: CastawayConfig) -> None:
    level = getattr(logging, cfg.log_level, logging.WARNING)
    if cfg.log_file:
        logging.basicConfig(
            filename=cfg.log_file,
            level=level,
            format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            force=True,
        )
    else:
        logging.basicConfig(
            level=level,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
            force=True,
        )


def _get_env(config: str | None):
    try:
        cfg = resolve_config(config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        err_console.print(f"❌ Bad config: {e}", markup=False)
        raise typer.Exit(code=2)
    _configure_logging(cfg)
    return cfg


def _load(world_path: str):
    try:
        return load_world(world_path)
    except LoadError as e:
        err_console.print(f"❌ [bold red]Could not load world[/bold red]: {e}")
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the Castaway version and exit.",
        is_eager=True,
    ),
):
    if version:
        console.print(_get_version())
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


@app.command("play")
def play(
    world: str | None = typer.Option(None, "--world", "-w", help="World file (JSON or YAML)"),
    config: str | None = typer.Option(None, "--config", help="Path to castaway.yaml"),
    transcript: str | None = typer.Option(None, "--transcript", help="Append a JSON-lines transcript here"),
):
    cfg = _get_env(config)
    state = GameState.new(_load(world or cfg.world_path))

    game = Game(
        state,
        read_line=input,
        write=lambda message: console.print(message, markup=False, soft_wrap=True),
        transcript_path=transcript or cfg.transcript_path,
    )
    game.run()


@app.command("check")
def check(
    world: str = typer.Argument(..., help="World file to validate"),
):
    world_data = _load(world)
    locked = sum(1 for room in world_data.rooms.values() for path in room.paths.values() if path.is_locked)
    items = sum(len(room.items) for room in world_data.rooms.values())
    console.print(
        f"✅ {world}: {len(world_data.rooms)} rooms, {items} items, {locked} locked paths, "
        f"starting in room {world_data.starting_room}",
        soft_wrap=True,
    )


@app.command("rooms")
def rooms(
    world: str | None = typer.Argument(None, help="World file (defaults to the configured world)"),
    config: str | None = typer.Option(None, "--config", help="Path to castaway.yaml"),
):
    cfg = _get_env(config)
    world_data = _load(world or cfg.world_path)

    table = Table(title="Castaway Rooms")
    table.add_column("ID", justify="right")
    table.add_column("Exits")
    table.add_column("Items")
    for room_id, room in world_data.rooms.items():
        exits = ", ".join(
            f"{direction} -> {path.room_id}" + (" (locked)" if path.is_locked else "")
            for direction, path in sorted(room.paths.items())
        )
        items = ", ".join(item.name for item in room.items)
        marker = " *" if room_id == world_data.starting_room else ""
        table.add_row(f"{room_id}{marker}", exits or "-", items or "-")

    console.print(table)
