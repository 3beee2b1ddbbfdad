"""
Core abstractions for Dino Duel.

Provides the abstract interfaces the simulation, agent environment,
and presentation layer implement.
"""

from .game_interface import GameInterface, GameMetadata
from .env_interface import EnvInterface
from .renderer_interface import RendererInterface

__all__ = [
    'GameInterface',
    'GameMetadata',
    'EnvInterface',
    'RendererInterface',
]
