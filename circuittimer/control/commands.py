"""Commands delivered to the orchestrator from outside the tick loop.

A host may have more than one place a workout can be controlled from
(in-window buttons, a tray menu, a lock-screen control in another
process).  Whatever the channel, it ends up as a :class:`CommandSource`
the orchestrator drains on its own thread, so commands never race the
state machine.

Usage::

    source = QueuedCommandSource()
    orchestrator.attach_command_source(source)
    source.push(Command.TOGGLE_PAUSE)   # applied on the next observe()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from enum import Enum


class Command(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    TOGGLE_PAUSE = "toggle_pause"
    STOP = "stop"


class CommandSource(ABC):
    """Anything the orchestrator can poll for pending commands."""

    @abstractmethod
    def poll(self) -> list[Command]:
        """Return (and consume) the commands received since the last poll."""


class QueuedCommandSource(CommandSource):
    """In-process FIFO of commands."""

    def __init__(self) -> None:
        self._pending: deque[Command] = deque()

    def push(self, command: Command) -> None:
        self._pending.append(command)

    def poll(self) -> list[Command]:
        drained = list(self._pending)
        self._pending.clear()
        return drained

    def __len__(self) -> int:
        return len(self._pending)
