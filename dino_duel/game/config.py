"""
Dino Duel game configuration.
"""

from dataclasses import dataclass, fields
from typing import Dict, Any


@dataclass
class DinoDuelConfig:
    """Configuration for the Dino Duel simulation."""

    # Play field
    width: int = 800
    height: int = 450
    fps: int = 60
    offscreen_margin: float = 50.0  # Projectiles die this far outside the field

    # Hero settings (hero moves vertically only)
    player_x: float = 150.0
    player_width: int = 64
    player_height: int = 64
    player_speed: float = 3.5
    player_min_y: float = 120.0
    player_max_y: float = 291.0  # Floor at 355 minus sprite height
    player_shoot_cooldown: int = 30  # ~0.5 s at 60 fps
    player_beam_speed: float = 10.0
    player_muzzle_offset_y: float = 24.0
    shooting_pose_frames: int = 5

    # Dino settings
    enemy_width: int = 80
    enemy_height: int = 80
    enemy_speed: float = 2.5
    enemy_min_x: float = 450.0
    enemy_max_x: float = 700.0
    enemy_min_y: float = 120.0
    enemy_max_y: float = 275.0
    enemy_initial_vy: float = 1.5
    enemy_vx_factor: float = 0.96  # vx drawn from +/- factor * speed
    enemy_vy_factor: float = 1.25
    direction_change_min: int = 60   # 1 s
    direction_change_max: int = 180  # 3 s
    enemy_fire_interval: int = 150
    enemy_first_shot_delay: int = 60
    enemy_beam_speed: float = 8.0
    enemy_mouth_offset_y: float = 20.0

    # Projectiles
    projectile_width: int = 30
    projectile_height: int = 10

    # Deferred transitions (milliseconds)
    round_transition_delay_ms: int = 2000
    level_victory_delay_ms: int = 3000
    briefing_delay_ms: int = 6000  # 0 starts the level immediately

    # Rewards (agent environment only)
    reward_enemy_hit: float = 1.0
    reward_player_hit: float = -1.0
    reward_round_win: float = 10.0
    reward_defeat: float = -10.0
    reward_step_penalty: float = -0.001

    @property
    def tick_ms(self) -> float:
        """Wall-clock duration of one tick at the nominal frame rate."""
        return 1000.0 / self.fps

    def get_reward_config(self) -> Dict[str, float]:
        """Get reward configuration dictionary."""
        return {
            "enemy_hit": self.reward_enemy_hit,
            "player_hit": self.reward_player_hit,
            "round_win": self.reward_round_win,
            "defeat": self.reward_defeat,
            "step_penalty": self.reward_step_penalty,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        data = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if not f.name.startswith("reward_")
        }
        data["rewards"] = self.get_reward_config()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DinoDuelConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        for key, value in (data.get("rewards") or {}).items():
            name = f"reward_{key}"
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)
