from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


RoomId = Union[int, str]


class EffectAction(Enum):
    UNLOCK_DOOR = "unlockDoor"
    ESCAPE_ISLAND = "escapeIsland"
    WIN = "win"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: str) -> EffectAction:
        for action in cls:
            if action is not cls.UNKNOWN and action.value == tag:
                return action
        return cls.UNKNOWN

    @property
    def ends_game(self) -> bool:
        return self in (EffectAction.ESCAPE_ISLAND, EffectAction.WIN)


@dataclass(frozen=True)
class UseEffect:
    action: str
    message: str

    @property
    def kind(self) -> EffectAction:
        return EffectAction.from_tag(self.action)


@dataclass(frozen=True)
class Item:
    name: str
    description: str
    # keyed by room id as a string, the way the world file stores it
    use_effects: dict[str, UseEffect] = field(default_factory=dict)

    def effect_in(self, room_id: RoomId) -> UseEffect | None:
        return self.use_effects.get(str(room_id))


@dataclass
class Connection:
    room_id: RoomId
    is_locked: bool = False


@dataclass
class Room:
    room_id: RoomId
    description: str
    paths: dict[str, Connection] = field(default_factory=dict)
    items: list[Item] = field(default_factory=list)


@dataclass
class World:
    starting_room: RoomId
    rooms: dict[RoomId, Room]


@dataclass
class PlayerState:
    current_room: RoomId
    inventory: list[Item] = field(default_factory=list)


@dataclass
class GameState:
    world: World
    player: PlayerState

    @classmethod
    def new(cls, world: World) -> GameState:
        return cls(world=world, player=PlayerState(current_room=world.starting_room))

    @property
    def current_room(self) -> Room:
        return self.world.rooms[self.player.current_room]
