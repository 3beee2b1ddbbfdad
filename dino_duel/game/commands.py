"""
Abstract input commands.

Hosts translate their input devices (keyboard, touch buttons, agents)
into press/release edges of these commands.
"""

from enum import IntEnum
from typing import Set


class Command(IntEnum):
    """Commands consumed by the simulation core."""
    MOVE_UP = 0
    MOVE_DOWN = 1
    FIRE = 2
    PAUSE_TOGGLE = 3
    SKIP = 4
    QUIT = 5


class CommandSet:
    """Tracks which commands are currently held down."""

    def __init__(self) -> None:
        self._held: Set[Command] = set()

    def press(self, command: Command) -> bool:
        """Mark a command held. Returns True if this was a fresh press."""
        fresh = command not in self._held
        self._held.add(command)
        return fresh

    def release(self, command: Command) -> bool:
        """Mark a command released. Returns True if it had been held."""
        if command in self._held:
            self._held.discard(command)
            return True
        return False

    def is_held(self, command: Command) -> bool:
        return command in self._held

    def clear(self) -> None:
        self._held.clear()

    @property
    def vertical(self) -> int:
        """Vertical intent: -1 up, 1 down, 0 neutral. Up wins when both are held."""
        if Command.MOVE_UP in self._held:
            return -1
        if Command.MOVE_DOWN in self._held:
            return 1
        return 0
