"""
Dino Duel Environment - Gym-like wrapper implementing EnvInterface.
Provides a 14-dimensional observation vector so agents can play the hero.
"""

import numpy as np
from typing import Tuple, Dict, Any, List, Optional

from ..core.env_interface import EnvInterface
from .campaign import Phase, ResultCode
from .clock import ManualClock
from .commands import Command
from .config import DinoDuelConfig
from .game import DinoDuelGame
from .levels import MAX_LEVELS, round_time_limit
from .progress import ProgressStore

ACTION_NAMES = ["Stay", "Up", "Down", "Fire", "Up+Fire", "Down+Fire"]
_MOVES = (0, -1, 1, 0, -1, 1)
_FIRES = (False, False, False, True, True, True)


class DinoDuelEnv(EnvInterface):
    """
    Gym-like environment wrapper for Dino Duel implementing EnvInterface.

    One episode is one round at a fixed level and round number. The game
    runs on a ManualClock that advances exactly one tick per step, so
    episodes are deterministic for a given seed and independent of wall
    time. Each fire action is a full press-release cycle of FIRE.
    """

    def __init__(
        self,
        level: int = 1,
        round_number: int = 1,
        config: Optional[DinoDuelConfig] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the environment.

        Args:
            level: Level the episodes are played at
            round_number: Round within the level
            config: Optional DinoDuelConfig object
            seed: Optional random seed
        """
        self.config = config or DinoDuelConfig()
        self.level = level
        self.round_number = round_number
        self.clock = ManualClock()
        self._seed = seed
        self.game = self._make_game()
        self._reward_config = self.config.get_reward_config()

    def _make_game(self) -> DinoDuelGame:
        progress = ProgressStore(max_levels=MAX_LEVELS)
        # Every level is playable for agents
        progress.unlock(MAX_LEVELS)
        return DinoDuelGame(
            config=self.config,
            progress=progress,
            clock=self.clock,
            seed=self._seed,
            verbose=False,
        )

    @property
    def state_size(self) -> int:
        """Get the observation size (14 features)."""
        return 14

    @property
    def action_size(self) -> int:
        """Get the action size (stay/up/down, each with or without fire)."""
        return len(ACTION_NAMES)

    def seed(self, seed: Optional[int] = None) -> None:
        self._seed = seed
        self.game = self._make_game()

    def reset(self, record: bool = False) -> np.ndarray:
        """
        Start a fresh round and return the first observation.

        Args:
            record: If True, start recording for replay

        Returns:
            Initial observation as numpy array
        """
        game = self.game
        game.reset()
        game.commands.clear()
        game.campaign.select_level(self.level)
        game.campaign.round_number = self.round_number
        game.start_round()
        if record:
            game.start_recording()
        return self._get_state()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, Dict[str, Any]]:
        """
        Execute action and return results.

        Args:
            action: 0-5, see ACTION_NAMES

        Returns:
            Tuple of (next_state, reward, done, info)
        """
        if not 0 <= action < self.action_size:
            raise ValueError(f"action must be in 0..{self.action_size - 1}, got {action}")

        game = self.game
        self._set_vertical(_MOVES[action])
        if _FIRES[action]:
            game.handle_command(Command.FIRE, True)

        self.clock.advance(self.config.tick_ms)
        game.step()

        if _FIRES[action]:
            game.handle_command(Command.FIRE, False)

        rewards = self._reward_config
        collisions = game.last_collisions
        reward = rewards["step_penalty"]
        reward += collisions.enemy_hits * rewards["enemy_hit"]
        reward += collisions.player_hits * rewards["player_hit"]

        done = game.phase != Phase.ROUND_ACTIVE
        outcome = game.outcome
        if done and outcome is not None:
            if outcome.result is ResultCode.DEFEAT:
                reward += rewards["defeat"]
            else:
                reward += rewards["round_win"]

        info = {
            "enemy_hp": game.enemy.hp,
            "player_hp": game.player.hp,
            "beams_remaining": game.player.beams_remaining,
            "result": outcome.result.value if outcome else None,
            "reason": outcome.subtitle if outcome else None,
        }
        return self._get_state(), reward, done, info

    def _set_vertical(self, move: int) -> None:
        game = self.game
        game.handle_command(Command.MOVE_UP, move < 0)
        game.handle_command(Command.MOVE_DOWN, move > 0)

    def _get_state(self) -> np.ndarray:
        """
        Get the observation vector.

        Features:
        [0]:     Hero Y within its movement range (0-1)
        [1]:     Hero hp ratio (0-1)
        [2]:     Beams remaining ratio (0-1)
        [3]:     Shot ready (trigger armed, cooldown done, ammo left) (0/1)
        [4]:     Dino X within its arena (0-1)
        [5]:     Dino Y within its arena (0-1)
        [6]:     Dino vertical velocity (-1 to 1)
        [7]:     Dino hp ratio (0-1)
        [8]:     Vertical offset dino center minus hero center (-1 to 1)
        [9]:     Nearest incoming beam X distance (0-1, 1 = none)
        [10]:    Nearest incoming beam Y offset from hero center (-1 to 1)
        [11]:    Hero beams in flight (0/1)
        [12]:    Time remaining ratio (0-1)
        [13]:    Dino fire timer progress (0-1)

        Returns:
            Observation as numpy array of shape (14,)
        """
        game = self.game
        config = self.config
        player = game.player
        enemy = game.enemy

        player_span = max(1.0, config.player_max_y - config.player_min_y)
        enemy_span_x = max(1.0, config.enemy_max_x - config.enemy_min_x)
        enemy_span_y = max(1.0, config.enemy_max_y - config.enemy_min_y)
        speed_cap = max(1e-6, enemy.speed * config.enemy_vy_factor)
        _, player_cy = player.center
        _, enemy_cy = enemy.center

        incoming = [p for p in game.projectiles if not p.is_player and p.x + p.width >= player.x]
        if incoming:
            nearest = min(incoming, key=lambda p: p.x - player.x)
            beam_dx = (nearest.x - player.x) / config.width
            beam_dy = (nearest.y + nearest.height / 2 - player_cy) / config.height
        else:
            beam_dx, beam_dy = 1.0, 0.0

        time_limit = round_time_limit(game.campaign.level, game.campaign.round_number)
        ready = player.can_shoot and player.shoot_cooldown == 0 and player.beams_remaining > 0

        state = np.array([
            (player.y - config.player_min_y) / player_span,
            player.hp / player.max_hp if player.max_hp else 0.0,
            player.beams_remaining / max(1, self._starting_beams()),
            1.0 if ready else 0.0,
            (enemy.x - config.enemy_min_x) / enemy_span_x,
            (enemy.y - config.enemy_min_y) / enemy_span_y,
            enemy.vy / speed_cap,
            enemy.hp / enemy.max_hp if enemy.max_hp else 0.0,
            (enemy_cy - player_cy) / config.height,
            beam_dx,
            beam_dy,
            1.0 if any(p.is_player for p in game.projectiles) else 0.0,
            game.seconds_remaining() / time_limit,
            max(0.0, enemy.shoot_timer) / config.enemy_fire_interval,
        ], dtype=np.float32)
        return np.clip(state, -1.0, 1.0)

    def _starting_beams(self) -> int:
        return self.game.campaign.round_setup().beams

    def get_game_state(self) -> Dict[str, Any]:
        """Get raw game state for visualization."""
        return self.game.get_state()

    def get_replay(self) -> List[Dict[str, Any]]:
        """Get recorded frames."""
        return self.game.stop_recording()
