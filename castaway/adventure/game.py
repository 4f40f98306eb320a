from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable

from castaway.adventure import engine
from castaway.adventure.models import GameState
from castaway.adventure.parser import (
    Command,
    Exit,
    Go,
    Look,
    MalformedCommand,
    PickUp,
    ShowInventory,
    Unrecognized,
    Use,
    parse,
)
from castaway.adventure.render import (
    EMPTY_INPUT,
    NOT_UNDERSTOOD,
    PROMPT,
    render_arrival,
    render_inventory,
    render_move,
    render_room,
    render_take,
    render_use,
)
from castaway.core.audit import append_audit


log = logging.getLogger(__name__)


class GameStatus(Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass
class Outcome:
    messages: list[str] = field(default_factory=list)
    finished: bool = False


def execute(state: GameState, command: Command) -> Outcome:
    if isinstance(command, Look):
        view = engine.describe(state.world, state.player.current_room)
        return Outcome([render_room(view)])

    if isinstance(command, Go):
        result = engine.move(state, command.direction)
        failure = render_move(result)
        if failure is not None:
            return Outcome([failure])
        return Outcome([render_arrival(engine.describe(state.world, result.room_id))])

    if isinstance(command, PickUp):
        return Outcome([render_take(engine.pick_up(state, command.item_name))])

    if isinstance(command, Use):
        result = engine.use_item(state, command.item_name)
        finished = isinstance(result, engine.Applied) and result.finished
        return Outcome(render_use(result), finished=finished)

    if isinstance(command, ShowInventory):
        return Outcome([render_inventory(engine.inventory(state.player))])

    if isinstance(command, Exit):
        return Outcome(finished=True)

    if isinstance(command, MalformedCommand):
        return Outcome([command.message])

    if isinstance(command, Unrecognized):
        return Outcome([NOT_UNDERSTOOD])

    raise TypeError(f"unhandled command {command!r}")


class Game:
    """Read-eval loop over a single GameState.

    ``read_line`` returns the next line of input and raises EOFError when input
    is exhausted; ``write`` displays one message.
    """

    def __init__(
        self,
        state: GameState,
        read_line: Callable[[], str],
        write: Callable[[str], None],
        transcript_path: str | Path | None = None,
    ):
        self.state = state
        self.read_line = read_line
        self.write = write
        self.transcript_path = transcript_path
        self.status = GameStatus.RUNNING

    @property
    def running(self) -> bool:
        return self.status is GameStatus.RUNNING

    def start(self) -> None:
        self.write(render_arrival(engine.describe(self.state.world, self.state.player.current_room)))

    def step(self, line: str) -> Outcome:
        text = line.strip()
        if not text:
            outcome = Outcome([EMPTY_INPUT])
        else:
            command = parse(text)
            log.debug("parsed %r as %r", text, command)
            outcome = execute(self.state, command)

        for message in outcome.messages:
            self.write(message)

        if self.transcript_path and text:
            try:
                append_audit(
                    {
                        "event": "command",
                        "command": text,
                        "room": self.state.player.current_room,
                        "output": outcome.messages,
                    },
                    self.transcript_path,
                )
            except OSError as e:
                log.warning("could not write transcript %s: %s", self.transcript_path, e)

        if outcome.finished:
            self.status = GameStatus.TERMINATED
        return outcome

    def run(self) -> GameStatus:
        self.start()
        while self.running:
            self.write(PROMPT)
            try:
                line = self.read_line()
            except EOFError:
                log.info("input closed, ending game")
                self.status = GameStatus.TERMINATED
                break
            self.step(line)
        return self.status
