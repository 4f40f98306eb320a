from __future__ import annotations

from castaway.adventure.engine import (
    Applied,
    Blocked,
    DescriptionView,
    MoveResult,
    NoSuchExit,
    TakeResult,
    Taken,
    UseResult,
)
from castaway.adventure.models import Item


UNKNOWN_LOCATION = "You find yourself in an unknown location."
PROMPT = "What would you like to do?"
EMPTY_INPUT = "Please provide a valid command."
NOT_UNDERSTOOD = "I don't understand."
UNEXPECTED_ACTION = "Unexpected action."


def render_room(view: DescriptionView | None) -> str:
    if view is None:
        return UNKNOWN_LOCATION
    lines: list[str] = [view.description]
    for name in view.item_names:
        lines.append(f"There's a {name} here.")
    if view.exits:
        lines.append(f"You can go: {', '.join(view.exits)}.")
    else:
        lines.append("There are no obvious exits from this room.")
    return "\n".join(lines)


def render_arrival(view: DescriptionView | None) -> str:
    if view is None:
        return UNKNOWN_LOCATION
    return view.description


def render_move(result: MoveResult) -> str | None:
    """Message for a failed move; a successful one is answered by the arrival text."""
    if isinstance(result, NoSuchExit):
        return "You can't go that way."
    if isinstance(result, Blocked):
        return "The way is blocked by a locked door."
    return None


def render_take(result: TakeResult) -> str:
    if isinstance(result, Taken):
        return f"You picked up the {result.item.name}."
    return f"There's no {result.item_name} here."


def render_use(result: UseResult) -> list[str]:
    if isinstance(result, Applied):
        if result.unknown_action:
            return [UNEXPECTED_ACTION, result.message]
        return [result.message]
    return [f"You don't have a {result.item_name} in your inventory or it doesn't have any effect here."]


def render_inventory(items: tuple[Item, ...]) -> str:
    if not items:
        return "Your inventory is empty."
    lines = ["Inventory:"]
    for item in items:
        lines.append(f"- {item.name}: {item.description}")
    return "\n".join(lines)
