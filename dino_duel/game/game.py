"""
Dino Duel Game Core - Pure simulation implementing GameInterface.

One DinoDuelGame is the whole simulation context: entities, beams,
campaign progress, the round clock, and pending deferred transitions.
The host loop owns it, feeds it command edges, and calls step() once per
frame. Rendering reads get_state() and never touches the game.
"""

from collections import deque
from typing import Deque, Dict, Any, List, Optional
import random

from ..core.game_interface import GameInterface, GameMetadata
from .campaign import Campaign, Phase, ResultCode, RoundOutcome
from .clock import ScheduledEvent, Scheduler, SystemClock
from .collision import CollisionReport, compact_projectiles, resolve_collisions
from .commands import Command, CommandSet
from .config import DinoDuelConfig
from .entities import Enemy, Player, Projectile
from .progress import ProgressStore

LOW_TIME_SECONDS = 5


class DinoDuelGame(GameInterface):
    """
    Core Dino Duel game logic implementing GameInterface.

    The hero holds the left edge of the arena and can only move up and
    down. The dino wanders the right side and spits aimed beams. Beat the
    dino before the clock, your hearts, or your beams run out.

    Tick order: deferred events, hero, dino, beams, collisions, compaction,
    end-of-round rules.
    """

    @classmethod
    def get_metadata(cls) -> GameMetadata:
        """Return metadata about Dino Duel."""
        return GameMetadata(
            name="Dino Duel",
            id="dino_duel",
            description="Trade beams with a wandering dino across timed rounds",
            version="1.0.0",
            min_players=1,
            max_players=1,
            supports_human=True,
            commands=[c.name for c in Command],
        )

    def __init__(
        self,
        config: Optional[DinoDuelConfig] = None,
        progress: Optional[ProgressStore] = None,
        clock=None,
        seed: Optional[int] = None,
        verbose: bool = True,
        history_size: int = 50,
    ):
        """
        Initialize the game in the idle (menu) phase.

        Args:
            config: Game configuration (defaults if omitted)
            progress: Unlock persistence (in-memory if omitted)
            clock: Object with now() in milliseconds (SystemClock if omitted)
            seed: Optional seed for the game's random source
            verbose: Print event messages as well as keeping them
            history_size: Number of event messages kept in event_log
        """
        self.config = config or DinoDuelConfig()
        self.clock = clock or SystemClock()
        self.rng = random.Random(seed)
        self.verbose = verbose

        self.campaign = Campaign(progress)
        self.scheduler = Scheduler()
        self.commands = CommandSet()

        setup = self.campaign.round_setup()
        self.player: Player = Player.spawn(self.config, setup, self.rng)
        self.enemy: Enemy = Enemy.spawn(self.config, setup, self.rng)
        self.projectiles: List[Projectile] = []
        self.last_collisions = CollisionReport()
        self.frame_count: int = 0
        self._pending: Optional[ScheduledEvent] = None

        self.event_log: Deque[str] = deque(maxlen=history_size)

        # For replay recording
        self.history: List[Dict[str, Any]] = []
        self.recording: bool = False

    # ------------------------------------------------------------------
    # Convenience views

    @property
    def phase(self) -> Phase:
        return self.campaign.phase

    @property
    def paused(self) -> bool:
        return self.campaign.paused

    @property
    def running(self) -> bool:
        return self.campaign.running

    @property
    def outcome(self) -> Optional[RoundOutcome]:
        return self.campaign.outcome

    @property
    def pending_event(self) -> Optional[ScheduledEvent]:
        if self._pending is None or self._pending.cancelled:
            return None
        return self._pending

    def log(self, message: str) -> None:
        self.event_log.append(message)
        if self.verbose:
            print(f"[Game] {message}")

    # ------------------------------------------------------------------
    # Host-facing operations

    def reset(self) -> Dict[str, Any]:
        """Return to the menu, dropping any round in progress."""
        self.quit_to_menu()
        self.projectiles = []
        self.frame_count = 0
        self.history = []
        if self.recording:
            self._record_frame()
        return self.get_state()

    def start_level(self, level: int) -> None:
        """
        Begin a level from the menu.

        Shows the briefing for briefing_delay_ms first (skippable); with a
        zero delay the first round starts immediately.

        Raises:
            ValueError: level is out of range or still locked
        """
        self.campaign.select_level(level)
        self._cancel_pending()
        self.campaign.paused = False
        if self.config.briefing_delay_ms > 0:
            self.campaign.phase = Phase.BRIEFING
            self._schedule(self.config.briefing_delay_ms, "briefing", self.restart_level)
            self.log(f"Level {level} briefing")
        else:
            self.restart_level()

    def restart_level(self) -> None:
        """Replay the current level from round 1."""
        self._cancel_pending()
        self.campaign.round_number = 1
        self.start_round()
        self.log(f"Level reset. Starting Level {self.campaign.level} Round 1")

    def start_round(self) -> None:
        """
        Build a fresh round for the current level and round number.

        Ticking is re-enabled only after every entity, the beam list, and
        the round clock have been reset.
        """
        self._pending = None
        self.campaign.phase = Phase.IDLE
        setup = self.campaign.round_setup()

        self.player = Player.spawn(self.config, setup, self.rng)
        # A FIRE still held from the press that started this round must be released first
        self.player.can_shoot = not self.commands.is_held(Command.FIRE)
        self.enemy = Enemy.spawn(self.config, setup, self.rng)
        self.projectiles = []
        self.last_collisions = CollisionReport()

        self.campaign.begin_round(self.clock.now())
        self.log(f"Starting Round {setup.round_number} - Timer: {setup.time_limit}s")
        self.campaign.phase = Phase.ROUND_ACTIVE

    def toggle_pause(self) -> bool:
        """Pause or resume an active round. Returns True if the state changed."""
        changed = self.campaign.toggle_pause(self.clock.now())
        if changed:
            self.log("Game Paused" if self.paused else "Game Resumed")
        return changed

    def skip(self) -> bool:
        """Fire the pending deferred transition now. Returns False if none is pending."""
        event = self.pending_event
        if event is None:
            return False
        self.log(f"Skipped {event.name}")
        return self.scheduler.fire_now(event)

    def quit_to_menu(self) -> None:
        """Abandon whatever is happening and show the level menu."""
        cancelled = self.scheduler.cancel_all()
        self._pending = None
        self.campaign.paused = False
        self.campaign.outcome = None
        self.campaign.phase = Phase.IDLE
        if cancelled:
            self.log(f"Returned to menu ({cancelled} pending transition cancelled)")

    def continue_after_result(self) -> bool:
        """Restart after a defeat, or leave a level victory for the menu."""
        if self.phase == Phase.DEFEAT:
            self.restart_level()
            return True
        if self.phase == Phase.LEVEL_VICTORY:
            self.quit_to_menu()
            return True
        return False

    def reset_progress(self) -> None:
        self.campaign.reset_progress()
        self.log("Progress reset")

    def handle_command(self, command: Command, pressed: bool) -> None:
        """
        Feed one input edge.

        FIRE acts on edges: releasing it re-arms the hero's trigger, and
        pressing it after a defeat or level victory continues.
        """
        if not pressed:
            self.commands.release(command)
            if command == Command.FIRE:
                self.player.release_trigger()
            return

        fresh = self.commands.press(command)
        if not fresh:
            return
        if command == Command.PAUSE_TOGGLE:
            self.toggle_pause()
        elif command == Command.SKIP:
            self.skip()
        elif command == Command.QUIT:
            self.quit_to_menu()
        elif command == Command.FIRE and self.phase in (Phase.DEFEAT, Phase.LEVEL_VICTORY):
            self.continue_after_result()

    # ------------------------------------------------------------------
    # Simulation

    def step(self) -> Dict[str, Any]:
        """
        Execute one tick.

        Returns:
            Game state after the tick
        """
        now = self.clock.now()
        self.scheduler.run_due(now)

        if self.running:
            self._update(now)

        self.frame_count += 1
        if self.recording:
            self._record_frame()
        return self.get_state()

    def _update(self, now: float) -> None:
        config = self.config

        beam = self.player.update(self.commands, config)
        if beam is not None:
            self.projectiles.append(beam)

        beam = self.enemy.update(self.player, config, self.rng)
        if beam is not None:
            self.projectiles.append(beam)

        for proj in self.projectiles:
            proj.update(config.width, config.height, config.offscreen_margin)

        self.last_collisions = resolve_collisions(self.projectiles, self.player, self.enemy)
        if self.last_collisions.enemy_hits:
            self.log(f"Hit Dino! Hits remaining: {self.enemy.hp}")
        if self.last_collisions.player_hits:
            self.log(f"Hit Player! Hearts: {self.player.hp}")
        compact_projectiles(self.projectiles)

        outcome = self.campaign.check_round_end(self.player, self.enemy, self.projectiles, now)
        if outcome is not None:
            self._end_round(outcome, now)

    def _end_round(self, outcome: RoundOutcome, now: float) -> None:
        """Stop ticking and queue whatever follows this outcome."""
        campaign = self.campaign
        campaign.timer.pause(now)
        campaign.outcome = outcome
        campaign.phase = campaign.phase_for(outcome)

        if outcome.result is ResultCode.DEFEAT:
            self.log(f"{outcome.title} {outcome.subtitle}".strip())
        elif outcome.result is ResultCode.ROUND_COMPLETE:
            self.log(f"Dino Defeated - next up {outcome.title}")
            self._schedule(self.config.round_transition_delay_ms, "round_transition", self.start_round)
        else:
            self.log(f"{outcome.title}: {outcome.subtitle}")
            self._schedule(self.config.level_victory_delay_ms, "return_to_menu", self.quit_to_menu)

    def _schedule(self, delay_ms: float, name: str, callback) -> None:
        self._pending = self.scheduler.schedule(self.clock.now(), delay_ms, name, callback)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self.scheduler.cancel(self._pending)
            self._pending = None

    # ------------------------------------------------------------------
    # State for presentation

    def seconds_remaining(self) -> int:
        return self.campaign.timer.seconds_remaining(self.clock.now())

    def get_state(self) -> Dict[str, Any]:
        """Get current game state for rendering or agents."""
        campaign = self.campaign
        seconds_left = self.seconds_remaining()
        pending = self.pending_event
        return {
            "phase": campaign.phase.name,
            "paused": campaign.paused,
            "player": self.player.to_dict(),
            "enemy": self.enemy.to_dict(),
            "projectiles": [p.to_dict() for p in self.projectiles],
            "beams_remaining": self.player.beams_remaining,
            "enemy_hp_pct": max(0.0, self.enemy.hp / self.enemy.max_hp * 100) if self.enemy.max_hp else 0.0,
            "seconds_remaining": seconds_left,
            "low_time": seconds_left <= LOW_TIME_SECONDS,
            "level": campaign.level,
            "round": campaign.round_number,
            "rounds_in_level": campaign.rounds_in_level,
            "round_label": campaign.round_label,
            "unlocked_levels": campaign.unlocked_levels,
            "max_levels": campaign.max_levels,
            "outcome": campaign.outcome.to_dict() if campaign.outcome else None,
            "pending": pending.name if pending else None,
            "frame": self.frame_count,
            "width": self.config.width,
            "height": self.config.height,
        }

    def start_recording(self) -> None:
        """Start recording game history for replay."""
        self.recording = True
        self.history = []
        self._record_frame()

    def stop_recording(self) -> List[Dict[str, Any]]:
        """Stop recording and return the history."""
        self.recording = False
        return self.history

    def _record_frame(self) -> None:
        self.history.append(self.get_state())


