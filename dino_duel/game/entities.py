"""
Dino Duel entities: the hero, the dino, and the beams they fire.

Positions are top-left corners of axis-aligned bounding boxes, in
play-field pixels. Velocities are pixels per tick.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple
import math
import random

from .commands import Command, CommandSet
from .config import DinoDuelConfig
from .levels import RoundSetup

# Default firing direction when the aim vector is degenerate: toward the hero's side
DEFAULT_AIM: Tuple[float, float] = (-1.0, 0.0)


@dataclass
class Entity:
    """Shared positional and hit-point record."""
    x: float
    y: float
    width: int
    height: int
    speed: float
    hp: int
    max_hp: int
    vx: float = 0.0
    vy: float = 0.0

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def take_hit(self, damage: int = 1) -> None:
        """Lose hit points, never dropping below zero."""
        self.hp = max(0, self.hp - damage)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "hp": self.hp,
            "max_hp": self.max_hp,
        }


@dataclass
class Projectile:
    """A beam fired by the hero or the dino."""
    x: float
    y: float
    vx: float
    vy: float
    is_player: bool
    width: int = 30
    height: int = 10
    marked_for_deletion: bool = False

    def update(self, field_width: float, field_height: float, margin: float) -> None:
        """Move one tick; flag for removal once well outside the play field."""
        self.x += self.vx
        self.y += self.vy
        if (
            self.x < -margin
            or self.x > field_width + margin
            or self.y < -margin
            or self.y > field_height + margin
        ):
            self.marked_for_deletion = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "is_player": self.is_player,
        }


@dataclass
class Player(Entity):
    """The hero. Moves vertically only and fires a limited supply of beams."""
    min_y: float = 120.0
    max_y: float = 291.0
    can_shoot: bool = True
    shoot_cooldown: int = 0
    shooting_animation: int = 0
    beams_remaining: int = 0

    @classmethod
    def spawn(
        cls,
        config: DinoDuelConfig,
        setup: RoundSetup,
        rng: random.Random,
        y: Optional[float] = None,
    ) -> "Player":
        """Create a fresh hero for a round at a random height unless given one."""
        if y is None:
            y = rng.uniform(config.player_min_y, config.player_max_y)
        return cls(
            x=config.player_x,
            y=y,
            width=config.player_width,
            height=config.player_height,
            speed=config.player_speed,
            hp=setup.hero_hp,
            max_hp=setup.hero_hp,
            min_y=config.player_min_y,
            max_y=config.player_max_y,
            beams_remaining=setup.beams,
        )

    def release_trigger(self) -> None:
        """Re-arm firing; called on the FIRE release edge."""
        self.can_shoot = True

    def update(self, commands: CommandSet, config: DinoDuelConfig) -> Optional[Projectile]:
        """
        Advance the hero one tick.

        A held FIRE produces one beam per press-release cycle: firing
        clears can_shoot and only release_trigger() sets it again.

        Args:
            commands: Currently held commands
            config: Game configuration

        Returns:
            The beam fired this tick, if any
        """
        self.vy = commands.vertical * self.speed
        self.y += self.vy
        self.y = max(self.min_y, min(self.max_y, self.y))

        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1
        if self.shooting_animation > 0:
            self.shooting_animation -= 1

        fire_held = commands.is_held(Command.FIRE)
        if not (fire_held and self.can_shoot and self.shoot_cooldown == 0 and self.beams_remaining > 0):
            return None

        self.can_shoot = False
        self.shoot_cooldown = config.player_shoot_cooldown
        self.shooting_animation = config.shooting_pose_frames
        self.beams_remaining -= 1
        return Projectile(
            x=self.x + self.width,
            y=self.y + config.player_muzzle_offset_y,
            vx=config.player_beam_speed,
            vy=0.0,
            is_player=True,
            width=config.projectile_width,
            height=config.projectile_height,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "beams_remaining": self.beams_remaining,
            "shooting": self.shooting_animation > 0,
        })
        return data


@dataclass
class Enemy(Entity):
    """
    The dino. Wanders randomly inside its arena rectangle, bouncing off the
    edges, and periodically spits a beam aimed at the hero's center.
    """
    min_x: float = 450.0
    max_x: float = 700.0
    min_y: float = 120.0
    max_y: float = 275.0
    shoot_timer: int = 0
    direction_change_timer: int = 0
    next_direction_change: float = 60.0

    @classmethod
    def spawn(
        cls,
        config: DinoDuelConfig,
        setup: RoundSetup,
        rng: random.Random,
        x: Optional[float] = None,
        y: Optional[float] = None,
    ) -> "Enemy":
        """Create a fresh dino scaled to the round's difficulty."""
        if x is None:
            x = rng.uniform(config.enemy_min_x, config.enemy_max_x)
        if y is None:
            y = rng.uniform(config.enemy_min_y, config.enemy_max_y)
        return cls(
            x=x,
            y=y,
            width=config.enemy_width,
            height=config.enemy_height,
            speed=config.enemy_speed * setup.speed_multiplier,
            hp=setup.enemy_hp,
            max_hp=setup.enemy_hp,
            vx=0.0,
            vy=config.enemy_initial_vy,
            min_x=config.enemy_min_x,
            max_x=config.enemy_max_x,
            min_y=config.enemy_min_y,
            max_y=config.enemy_max_y,
            shoot_timer=-config.enemy_first_shot_delay,
            next_direction_change=cls._draw_interval(config, rng),
        )

    @staticmethod
    def _draw_interval(config: DinoDuelConfig, rng: random.Random) -> float:
        return rng.uniform(config.direction_change_min, config.direction_change_max)

    def update(self, target: Entity, config: DinoDuelConfig, rng: random.Random) -> Optional[Projectile]:
        """
        Advance the dino one tick.

        Args:
            target: Entity to aim at
            config: Game configuration
            rng: Random source for wandering

        Returns:
            The beam fired this tick, if any
        """
        self.direction_change_timer += 1
        if self.direction_change_timer >= self.next_direction_change:
            self.vx = rng.uniform(-1.0, 1.0) * self.speed * config.enemy_vx_factor
            self.vy = rng.uniform(-1.0, 1.0) * self.speed * config.enemy_vy_factor
            self.direction_change_timer = 0
            self.next_direction_change = self._draw_interval(config, rng)

        self.x += self.vx
        self.y += self.vy
        self._bounce()

        self.shoot_timer += 1
        if self.shoot_timer <= config.enemy_fire_interval:
            return None

        self.shoot_timer = 0
        start_x = self.x
        start_y = self.y + config.enemy_mouth_offset_y
        target_x, target_y = target.center
        dir_x, dir_y = aim_direction(start_x, start_y, target_x, target_y)
        return Projectile(
            x=start_x,
            y=start_y,
            vx=dir_x * config.enemy_beam_speed,
            vy=dir_y * config.enemy_beam_speed,
            is_player=False,
            width=config.projectile_width,
            height=config.projectile_height,
        )

    def _bounce(self) -> None:
        """Clamp to the arena and point the velocity back inside."""
        if self.y <= self.min_y:
            self.y = self.min_y
            self.vy = abs(self.vy)
        elif self.y >= self.max_y:
            self.y = self.max_y
            self.vy = -abs(self.vy)

        if self.x <= self.min_x:
            self.x = self.min_x
            self.vx = abs(self.vx)
        elif self.x >= self.max_x:
            self.x = self.max_x
            self.vx = -abs(self.vx)


def aim_direction(from_x: float, from_y: float, to_x: float, to_y: float) -> Tuple[float, float]:
    """Unit vector from one point to another; DEFAULT_AIM when they coincide."""
    dx = to_x - from_x
    dy = to_y - from_y
    distance = math.hypot(dx, dy)
    if distance == 0:
        return DEFAULT_AIM
    return dx / distance, dy / distance
