from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from castaway.adventure.models import EffectAction, GameState, Item, PlayerState, RoomId, UseEffect, World


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DescriptionView:
    description: str
    item_names: list[str]
    exits: list[str]


@dataclass(frozen=True)
class NoSuchExit:
    direction: str


@dataclass(frozen=True)
class Blocked:
    direction: str


@dataclass(frozen=True)
class Moved:
    room_id: RoomId


MoveResult = Union[NoSuchExit, Blocked, Moved]


@dataclass(frozen=True)
class Taken:
    item: Item


@dataclass(frozen=True)
class NotFound:
    item_name: str


TakeResult = Union[Taken, NotFound]


@dataclass(frozen=True)
class NotInInventory:
    item_name: str


@dataclass(frozen=True)
class NoEffectHere:
    item_name: str


@dataclass(frozen=True)
class Applied:
    message: str
    finished: bool = False
    unknown_action: bool = False


UseResult = Union[NotInInventory, NoEffectHere, Applied]


def find_item(items: list[Item], name: str) -> int | None:
    """Index of the item called ``name``; an exact match wins over a case-insensitive one."""
    for index, item in enumerate(items):
        if item.name == name:
            return index
    wanted = name.casefold()
    for index, item in enumerate(items):
        if item.name.casefold() == wanted:
            return index
    return None


def describe(world: World, room_id: RoomId) -> DescriptionView | None:
    room = world.rooms.get(room_id)
    if room is None:
        return None
    return DescriptionView(
        description=room.description,
        item_names=[item.name for item in room.items],
        exits=sorted(room.paths),
    )


def move(state: GameState, direction: str) -> MoveResult:
    room = state.current_room
    path = room.paths.get(direction)
    if path is None:
        return NoSuchExit(direction)
    if path.is_locked:
        return Blocked(direction)

    log.debug("moving %s from room %s to room %s", direction, room.room_id, path.room_id)
    state.player.current_room = path.room_id
    return Moved(path.room_id)


def take_item(world: World, room_id: RoomId, item_name: str) -> TakeResult:
    room = world.rooms.get(room_id)
    if room is None:
        return NotFound(item_name)
    index = find_item(room.items, item_name)
    if index is None:
        return NotFound(item_name)

    item = room.items.pop(index)
    log.debug("took %r from room %s", item.name, room_id)
    return Taken(item)


def first_locked_direction(world: World, room_id: RoomId) -> str | None:
    """The exit an unlock effect opens: the first locked direction in lexicographic order.

    Effects do not name the exit they open, so this rule decides which one it is
    when a room has several locked exits.
    """
    room = world.rooms.get(room_id)
    if room is None:
        return None
    for direction in sorted(room.paths):
        if room.paths[direction].is_locked:
            return direction
    return None


def unlock_connection(world: World, room_id: RoomId, direction: str) -> None:
    room = world.rooms.get(room_id)
    if room is None:
        return
    path = room.paths.get(direction)
    if path is None or not path.is_locked:
        return
    path.is_locked = False
    log.debug("unlocked %s in room %s", direction, room_id)


def inventory(player: PlayerState) -> tuple[Item, ...]:
    return tuple(player.inventory)


def pick_up(state: GameState, item_name: str) -> TakeResult:
    result = take_item(state.world, state.player.current_room, item_name)
    if isinstance(result, Taken):
        state.player.inventory.append(result.item)
    return result


def _unlock_door(state: GameState, effect: UseEffect) -> Applied:
    room_id = state.player.current_room
    direction = first_locked_direction(state.world, room_id)
    if direction is not None:
        unlock_connection(state.world, room_id, direction)
    return Applied(effect.message)


def _end_game(state: GameState, effect: UseEffect) -> Applied:
    return Applied(effect.message, finished=True)


def _unknown(state: GameState, effect: UseEffect) -> Applied:
    log.warning("unknown effect action %r in room %s", effect.action, state.player.current_room)
    return Applied(effect.message, unknown_action=True)


EFFECT_HANDLERS: dict[EffectAction, Callable[[GameState, UseEffect], Applied]] = {
    EffectAction.UNLOCK_DOOR: _unlock_door,
    EffectAction.ESCAPE_ISLAND: _end_game,
    EffectAction.WIN: _end_game,
    EffectAction.UNKNOWN: _unknown,
}


def use_item(state: GameState, item_name: str) -> UseResult:
    index = find_item(state.player.inventory, item_name)
    if index is None:
        return NotInInventory(item_name)

    item = state.player.inventory[index]
    effect = item.effect_in(state.player.current_room)
    if effect is None:
        return NoEffectHere(item_name)

    return EFFECT_HANDLERS[effect.kind](state, effect)
