"""
Dino Duel game module.

The simulation core (game, campaign, entities, collision, clock) has no
pygame dependency; the renderer is imported on demand by hosts.
"""

from .campaign import Campaign, Phase, ResultCode, RoundOutcome, DefeatReason
from .clock import ManualClock, SystemClock, RoundTimer, Scheduler
from .commands import Command, CommandSet
from .config import DinoDuelConfig
from .entities import Entity, Player, Enemy, Projectile
from .game import DinoDuelGame
from .progress import ProgressStore

__all__ = [
    "DinoDuelGame",
    "DinoDuelConfig",
    "Campaign",
    "Phase",
    "ResultCode",
    "RoundOutcome",
    "DefeatReason",
    "ManualClock",
    "SystemClock",
    "RoundTimer",
    "Scheduler",
    "Command",
    "CommandSet",
    "Entity",
    "Player",
    "Enemy",
    "Projectile",
    "ProgressStore",
]
