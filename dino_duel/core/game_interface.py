"""
Abstract game interface for Dino Duel.

The simulation core implements GameInterface; hosts (the pygame loop,
the agent environment, tests) drive it through commands and ticks.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, List


@dataclass
class GameMetadata:
    """Metadata describing a game."""

    name: str                           # Display name (e.g., "Dino Duel")
    id: str                             # Unique identifier (e.g., "dino_duel")
    description: str                    # Brief description for UI
    version: str = "1.0.0"              # Game version
    min_players: int = 1                # Minimum players
    max_players: int = 1                # Maximum players
    supports_human: bool = True         # Can humans play?
    commands: List[str] = field(default_factory=list)


class GameInterface(ABC):
    """
    Abstract base class for the simulation core.

    The game handles rules and state management. Input arrives as
    press/release edges of abstract commands; time advances one tick
    per call to step().
    """

    @classmethod
    @abstractmethod
    def get_metadata(cls) -> GameMetadata:
        """
        Return metadata about this game.

        Returns:
            GameMetadata describing the game
        """
        pass

    @abstractmethod
    def reset(self) -> Dict[str, Any]:
        """
        Return the game to the idle menu state.

        Returns:
            Game state dictionary
        """
        pass

    @abstractmethod
    def handle_command(self, command: Any, pressed: bool) -> None:
        """
        Feed one input edge into the game.

        Args:
            command: The command whose state changed
            pressed: True for a press edge, False for a release edge
        """
        pass

    @abstractmethod
    def step(self) -> Dict[str, Any]:
        """
        Advance the simulation by one tick.

        Returns:
            Game state dictionary after the tick
        """
        pass

    @abstractmethod
    def get_state(self) -> Dict[str, Any]:
        """
        Get the current game state for rendering.

        Returns:
            Dictionary containing all state needed for rendering
        """
        pass

    # Optional recording support
    def start_recording(self) -> None:
        """Start recording game frames for replay."""
        pass

    def stop_recording(self) -> List[Dict[str, Any]]:
        """
        Stop recording and return recorded frames.

        Returns:
            List of frame dictionaries
        """
        return []
