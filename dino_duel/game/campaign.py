"""
Round and level progression.

The campaign tracks where the player is (level, round), which phase the
game is in, and decides how a round ends. It does not own entities or
timers that fire callbacks; DinoDuelGame drives it once per tick.

Phases:
    IDLE -> BRIEFING -> ROUND_ACTIVE -> ROUND_TRANSITION -> ROUND_ACTIVE ...
                                     -> LEVEL_VICTORY -> IDLE
                                     -> DEFEAT -> ROUND_ACTIVE (restart) | IDLE
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Any, List, Optional

from .clock import RoundTimer
from .entities import Player, Enemy, Projectile
from .levels import MAX_LEVELS, RoundSetup, rounds_for_level
from .progress import ProgressStore


class Phase(IntEnum):
    """Top-level game phase."""
    IDLE = 0
    BRIEFING = 1
    ROUND_ACTIVE = 2
    ROUND_TRANSITION = 3
    LEVEL_VICTORY = 4
    DEFEAT = 5


class ResultCode(str, Enum):
    """Terminal result shown by the presentation layer."""
    DEFEAT = "DEFEAT"
    ROUND_COMPLETE = "ROUND_COMPLETE"
    LEVEL_COMPLETE = "LEVEL_COMPLETE"
    VICTORY = "VICTORY"


class DefeatReason(str, Enum):
    HP_DEPLETED = "DEFEAT"
    OUT_OF_BULLETS = "OUT OF BULLETS"
    TIME_UP = "TIME'S UP"


@dataclass(frozen=True)
class RoundOutcome:
    """How a round ended, with display text."""
    result: ResultCode
    title: str
    subtitle: str = ""
    reason: Optional[DefeatReason] = None

    @classmethod
    def defeat(cls, reason: DefeatReason) -> "RoundOutcome":
        subtitle = "" if reason is DefeatReason.HP_DEPLETED else reason.value
        return cls(ResultCode.DEFEAT, "DEFEAT", subtitle, reason)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.value,
            "title": self.title,
            "subtitle": self.subtitle,
        }


class Campaign:
    """Level/round bookkeeping and end-of-round rules."""

    def __init__(self, progress: Optional[ProgressStore] = None, max_levels: int = MAX_LEVELS):
        self.progress = progress or ProgressStore(max_levels=max_levels)
        self.max_levels = max_levels
        self.level = 1
        self.round_number = 1
        self.phase = Phase.IDLE
        self.paused = False
        self.outcome: Optional[RoundOutcome] = None
        self.timer = RoundTimer()

    @property
    def unlocked_levels(self) -> int:
        return self.progress.unlocked_levels

    @property
    def rounds_in_level(self) -> int:
        return rounds_for_level(self.level)

    @property
    def running(self) -> bool:
        """True while the simulation should advance entity state."""
        return self.phase == Phase.ROUND_ACTIVE and not self.paused

    @property
    def round_label(self) -> str:
        total = self.rounds_in_level
        return f"LVL {self.level} - ROUND {min(self.round_number, total)}/{total}"

    def level_unlocked(self, level: int) -> bool:
        return 1 <= level <= self.unlocked_levels

    def select_level(self, level: int) -> None:
        """Choose the level to play from the menu."""
        if not 1 <= level <= self.max_levels:
            raise ValueError(f"level must be in 1..{self.max_levels}, got {level}")
        if not self.level_unlocked(level):
            raise ValueError(f"level {level} is locked (unlocked up to {self.unlocked_levels})")
        self.level = level
        self.round_number = 1
        self.outcome = None

    def round_setup(self) -> RoundSetup:
        return RoundSetup.for_round(self.level, self.round_number)

    def begin_round(self, now: float) -> RoundSetup:
        """Start the round clock. The caller enables ticking afterwards."""
        setup = self.round_setup()
        self.timer.start(now, setup.time_limit)
        self.outcome = None
        self.paused = False
        return setup

    def check_round_end(
        self,
        player: Player,
        enemy: Enemy,
        projectiles: List[Projectile],
        now: float,
    ) -> Optional[RoundOutcome]:
        """
        Apply the end-of-round rules in priority order.

        Returns:
            The outcome if the round is over, else None
        """
        if player.hp <= 0:
            return RoundOutcome.defeat(DefeatReason.HP_DEPLETED)

        beams_in_flight = any(p.is_player and not p.marked_for_deletion for p in projectiles)
        if player.beams_remaining == 0 and enemy.hp > 0 and not beams_in_flight:
            return RoundOutcome.defeat(DefeatReason.OUT_OF_BULLETS)

        if self.timer.expired(now) and enemy.hp > 0:
            return RoundOutcome.defeat(DefeatReason.TIME_UP)

        if enemy.hp <= 0:
            return self._advance_round()

        return None

    def _advance_round(self) -> RoundOutcome:
        """Count a round win and work out whether the level is done."""
        self.round_number += 1
        if self.round_number <= self.rounds_in_level:
            return RoundOutcome(ResultCode.ROUND_COMPLETE, f"ROUND {self.round_number}", "Get Ready!")

        if self.level < self.max_levels:
            self.progress.unlock(self.level + 1)
            return RoundOutcome(ResultCode.LEVEL_COMPLETE, "LEVEL COMPLETE", f"Level {self.level + 1} Unlocked!")
        return RoundOutcome(ResultCode.VICTORY, "VICTORY", "ALL LEVELS COMPLETED!")

    def phase_for(self, outcome: RoundOutcome) -> Phase:
        if outcome.result is ResultCode.DEFEAT:
            return Phase.DEFEAT
        if outcome.result is ResultCode.ROUND_COMPLETE:
            return Phase.ROUND_TRANSITION
        return Phase.LEVEL_VICTORY

    def toggle_pause(self, now: float) -> bool:
        """
        Pause or resume an active round. Ignored in every other phase.

        Returns:
            True if the pause state changed
        """
        if self.phase != Phase.ROUND_ACTIVE:
            return False
        self.paused = not self.paused
        if self.paused:
            self.timer.pause(now)
        else:
            self.timer.resume(now)
        return True

    def reset_progress(self) -> None:
        """Relock every level but 1. The level being played is left alone."""
        self.progress.reset()
