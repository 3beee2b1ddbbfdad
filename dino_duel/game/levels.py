"""
Level tables and per-round difficulty scaling.

Levels 1-5 trade hero durability and ammunition for longer rounds
against a tougher, faster dino.
"""

from dataclasses import dataclass

MAX_LEVELS = 5

# Indexed by level - 1
_ROUNDS = (3, 3, 4, 5, 5)
_HERO_HEARTS = (5, 4, 3, 2, 2)
_ENEMY_HEARTS = (7, 7, 6, 5, 5)
_BEAMS = (12, 12, 8, 5, 5)

MIN_ROUND_SECONDS = 10
ROUND_TIME_STEP = 3


def _check_level(level: int) -> int:
    if not 1 <= level <= MAX_LEVELS:
        raise ValueError(f"level must be in 1..{MAX_LEVELS}, got {level}")
    return level - 1


def rounds_for_level(level: int) -> int:
    """Number of rounds that make up a level."""
    return _ROUNDS[_check_level(level)]


def hero_hearts(level: int) -> int:
    return _HERO_HEARTS[_check_level(level)]


def enemy_hearts(level: int) -> int:
    return _ENEMY_HEARTS[_check_level(level)]


def beams_for_level(level: int) -> int:
    return _BEAMS[_check_level(level)]


def difficulty_multiplier(level: int, round_number: int) -> float:
    """Enemy speed scalar: +0.5 per level, +0.2 per round within the level."""
    return 1 + (level - 1) * 0.5 + (round_number - 1) * 0.2


def base_round_seconds(level: int) -> int:
    _check_level(level)
    if level <= 3:
        return 18
    if level == 4:
        return 25
    return 30


def round_time_limit(level: int, round_number: int) -> int:
    """Seconds allowed for a round; shrinks each round down to a floor."""
    return max(MIN_ROUND_SECONDS, base_round_seconds(level) - (round_number - 1) * ROUND_TIME_STEP)


@dataclass(frozen=True)
class RoundSetup:
    """Everything needed to build a fresh round."""
    level: int
    round_number: int
    rounds_in_level: int
    hero_hp: int
    beams: int
    enemy_hp: int
    speed_multiplier: float
    time_limit: int

    @classmethod
    def for_round(cls, level: int, round_number: int) -> "RoundSetup":
        enemy_hp = enemy_hearts(level)
        if round_number >= 3:
            enemy_hp = 5 + (round_number - 2)
        return cls(
            level=level,
            round_number=round_number,
            rounds_in_level=rounds_for_level(level),
            hero_hp=hero_hearts(level),
            beams=beams_for_level(level),
            enemy_hp=enemy_hp,
            speed_multiplier=difficulty_multiplier(level, round_number),
            time_limit=round_time_limit(level, round_number),
        )
