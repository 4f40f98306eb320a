from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from castaway.adventure.models import Connection, Item, Room, UseEffect, World
from castaway.core.errors import LoadError


log = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def _is_room_id(value: Any) -> bool:
    return isinstance(value, (int, str)) and not isinstance(value, bool)


def _read_file(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_load(f)
            return json.load(f)
    except OSError as e:
        raise LoadError(f"cannot read world file {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise LoadError(f"world file {path} is not well-formed: {e}") from e


def read_source(source: str | Path | Mapping[str, Any]) -> Any:
    """Turn a path, a JSON document string or a parsed mapping into raw world data."""
    if isinstance(source, Mapping):
        return source
    if isinstance(source, Path):
        return _read_file(source)
    if source.lstrip().startswith("{"):
        try:
            return json.loads(source)
        except json.JSONDecodeError as e:
            raise LoadError(f"world document is not well-formed: {e}") from e
    return _read_file(Path(source))


def _validate_items(room_id: Any, items: Any) -> None:
    if not isinstance(items, list):
        raise LoadError(f"items of room {room_id} must be a list")
    for item in items:
        if not isinstance(item, Mapping):
            raise LoadError(f"item in room {room_id} must be a mapping")
        for key in ("name", "description"):
            if not isinstance(item.get(key), str):
                raise LoadError(f"item in room {room_id} is missing {key}")
        effects = item.get("useEffects")
        if effects is None:
            continue
        if not isinstance(effects, Mapping):
            raise LoadError(f"useEffects of {item['name']} must be a mapping")
        for effect in effects.values():
            if not isinstance(effect, Mapping):
                raise LoadError(f"use effect of {item['name']} must be a mapping")
            if not isinstance(effect.get("action"), str) or not isinstance(effect.get("message"), str):
                raise LoadError(f"use effect of {item['name']} needs action and message")


def validate_world(world_data: Any) -> None:
    if not isinstance(world_data, Mapping):
        raise LoadError("world document must be a mapping")

    rooms = world_data.get("rooms")
    if not isinstance(rooms, list):
        raise LoadError("rooms must be a list")

    room_ids: set[Any] = set()
    for room in rooms:
        if not isinstance(room, Mapping):
            raise LoadError("room must be a mapping")
        room_id = room.get("id")
        if not _is_room_id(room_id):
            raise LoadError("room is missing id")
        if room_id in room_ids:
            raise LoadError(f"duplicate room id {room_id}")
        room_ids.add(room_id)
        if not isinstance(room.get("description"), str):
            raise LoadError(f"room {room_id} is missing description")

    start_room = world_data.get("startingRoom")
    if not _is_room_id(start_room) or start_room not in room_ids:
        raise LoadError(f"startingRoom {start_room!r} does not exist")

    for room in rooms:
        room_id = room["id"]
        paths = room.get("paths", {})
        if not isinstance(paths, Mapping):
            raise LoadError(f"paths of room {room_id} must be a mapping")
        for direction, path in paths.items():
            if not isinstance(path, Mapping):
                raise LoadError(f"path {direction} in room {room_id} must be a mapping")
            target = path.get("roomID")
            if not _is_room_id(target) or target not in room_ids:
                raise LoadError(f"path {direction} in room {room_id} points to unknown room {target}")
            if not isinstance(path.get("isLocked", False), bool):
                raise LoadError(f"isLocked of path {direction} in room {room_id} must be a boolean")

        _validate_items(room_id, room.get("items", []))


def parse_world(world_data: Mapping[str, Any]) -> World:
    validate_world(world_data)
    known = {str(room["id"]) for room in world_data["rooms"]}

    rooms: dict[Any, Room] = {}
    for room in world_data["rooms"]:
        items: list[Item] = []
        for item in room.get("items", []):
            effects = {
                str(key): UseEffect(action=effect["action"], message=effect["message"])
                for key, effect in (item.get("useEffects") or {}).items()
            }
            for key in effects:
                if key not in known:
                    log.warning("item %r has a use effect for unknown room %s", item["name"], key)
            items.append(Item(name=item["name"], description=item["description"], use_effects=effects))

        paths = {
            direction: Connection(room_id=path["roomID"], is_locked=bool(path.get("isLocked", False)))
            for direction, path in room.get("paths", {}).items()
        }
        rooms[room["id"]] = Room(
            room_id=room["id"],
            description=room["description"],
            paths=paths,
            items=items,
        )

    return World(starting_room=world_data["startingRoom"], rooms=rooms)


def load_world(source: str | Path | Mapping[str, Any]) -> World:
    world = parse_world(read_source(source))
    log.info("loaded world with %d rooms, starting in room %s", len(world.rooms), world.starting_room)
    return world
