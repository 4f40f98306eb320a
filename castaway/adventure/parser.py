from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Look:
    pass


@dataclass(frozen=True)
class Go:
    direction: str


@dataclass(frozen=True)
class PickUp:
    item_name: str


@dataclass(frozen=True)
class Use:
    item_name: str


@dataclass(frozen=True)
class ShowInventory:
    pass


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class MalformedCommand:
    message: str


@dataclass(frozen=True)
class Unrecognized:
    text: str = ""


Command = Union[Look, Go, PickUp, Use, ShowInventory, Exit, MalformedCommand, Unrecognized]


def parse(line: str) -> Command:
    tokens = line.lower().split()
    if not tokens:
        return Unrecognized(line)

    head, *rest = tokens

    if head == "look":
        return Look()

    if head == "go":
        if not rest:
            return MalformedCommand("Go where?")
        return Go(rest[0])

    if head == "pick":
        if len(rest) >= 2 and rest[0] == "up":
            return PickUp(" ".join(rest[1:]))
        return Unrecognized(line)

    if head == "use":
        if rest:
            return Use(" ".join(rest))
        return Unrecognized(line)

    if head == "inventory":
        return ShowInventory()

    if head == "exit":
        return Exit()

    return Unrecognized(line)
