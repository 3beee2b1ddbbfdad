"""
Axis-aligned bounding-box collision between beams and combatants.
"""

from dataclasses import dataclass
from typing import List, Protocol

from .entities import Entity, Projectile


class Box(Protocol):
    x: float
    y: float
    width: float
    height: float


@dataclass
class CollisionReport:
    """Hits landed during one collision pass."""
    enemy_hits: int = 0
    player_hits: int = 0


def rect_intersect(a: Box, b: Box) -> bool:
    """True iff the boxes overlap on both axes (touching edges count)."""
    return not (
        b.x > a.x + a.width
        or b.x + b.width < a.x
        or b.y > a.y + a.height
        or b.y + b.height < a.y
    )


def resolve_collisions(projectiles: List[Projectile], player: Entity, enemy: Entity) -> CollisionReport:
    """
    Test every live beam against the opposing combatant.

    Hero beams only hit the dino and dino beams only hit the hero; beams
    never hit each other. A hit costs the target one hit point and retires
    the beam immediately so it cannot land twice.
    """
    report = CollisionReport()
    for proj in projectiles:
        if proj.marked_for_deletion:
            continue
        if proj.is_player:
            if rect_intersect(proj, enemy):
                enemy.take_hit()
                proj.marked_for_deletion = True
                report.enemy_hits += 1
        elif rect_intersect(proj, player):
            player.take_hit()
            proj.marked_for_deletion = True
            report.player_hits += 1
    return report


def compact_projectiles(projectiles: List[Projectile]) -> None:
    """Drop retired beams in place, keeping survivors in spawn order."""
    projectiles[:] = [p for p in projectiles if not p.marked_for_deletion]
