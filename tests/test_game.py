"""
Tests for the simulation tick and round/level progression.
Scenarios drive DinoDuelGame on a manual clock.
"""

import random

import pytest


def enemy_beam_on_player(game):
    from dino_duel.game.entities import Projectile

    player = game.player
    return Projectile(x=player.x + 10, y=player.y + 20, vx=0, vy=0, is_player=False)


def player_beam_on_enemy(game):
    from dino_duel.game.entities import Projectile

    enemy = game.enemy
    return Projectile(x=enemy.x + 20, y=enemy.y + 30, vx=0, vy=0, is_player=True)


def silence_enemy(game):
    """Keep the dino from firing for the rest of the test."""
    game.enemy.shoot_timer = -1_000_000


def press(game, command):
    game.handle_command(command, True)
    game.handle_command(command, False)


class TestMetadata:
    """Tests for the GameInterface surface."""

    def test_metadata(self):
        """Test game metadata."""
        from dino_duel.game.game import DinoDuelGame

        metadata = DinoDuelGame.get_metadata()

        assert metadata.id == "dino_duel"
        assert metadata.supports_human is True
        assert "FIRE" in metadata.commands

    def test_starts_idle(self, game):
        """Test a new game waits at the menu and does not tick."""
        from dino_duel.game.campaign import Phase

        state = game.step()

        assert game.phase == Phase.IDLE
        assert state["phase"] == "IDLE"
        assert not game.running


class TestRoundStart:
    """Tests for level start and round initialization."""

    def test_start_level_without_briefing(self, game):
        """Test a zero briefing delay starts round 1 immediately."""
        from dino_duel.game.campaign import Phase

        game.start_level(4)
        state = game.get_state()

        assert game.phase == Phase.ROUND_ACTIVE
        assert state["round_label"] == "LVL 4 - ROUND 1/5"
        assert state["seconds_remaining"] == 25
        assert state["player"]["hp"] == 2
        assert state["beams_remaining"] == 5
        assert state["projectiles"] == []

    def test_level4_round2_countdown(self, game, tick):
        """Test the level 4 round 2 countdown starts at 22 seconds."""
        game.start_level(4)
        game.campaign.round_number = 2
        game.start_round()

        assert game.seconds_remaining() == 22
        assert tick()["seconds_remaining"] == 22

    def test_briefing_then_round(self, config, manual_clock):
        """Test the level briefing waits its delay before round 1."""
        from dino_duel.game.campaign import Phase
        from dino_duel.game.config import DinoDuelConfig
        from dino_duel.game.game import DinoDuelGame

        game = DinoDuelGame(config=DinoDuelConfig(briefing_delay_ms=6000), clock=manual_clock, verbose=False)
        game.start_level(1)
        assert game.phase == Phase.BRIEFING
        assert game.get_state()["pending"] == "briefing"

        manual_clock.advance(5999)
        game.step()
        assert game.phase == Phase.BRIEFING

        manual_clock.advance(1)
        game.step()
        assert game.phase == Phase.ROUND_ACTIVE

    def test_skip_briefing(self, manual_clock):
        """Test SKIP starts the level at once and cancels the briefing timer."""
        from dino_duel.game.campaign import Phase
        from dino_duel.game.commands import Command
        from dino_duel.game.config import DinoDuelConfig
        from dino_duel.game.game import DinoDuelGame

        game = DinoDuelGame(config=DinoDuelConfig(briefing_delay_ms=6000), clock=manual_clock, verbose=False)
        game.start_level(1)
        press(game, Command.SKIP)

        assert game.phase == Phase.ROUND_ACTIVE
        assert game.pending_event is None
        assert game.scheduler.pending() == []

    def test_locked_level_rejected(self, config, manual_clock):
        """Test starting a locked level raises ValueError."""
        from dino_duel.game.game import DinoDuelGame

        game = DinoDuelGame(config=config, clock=manual_clock, verbose=False)

        with pytest.raises(ValueError):
            game.start_level(2)
        with pytest.raises(ValueError):
            game.start_level(9)


class TestFiring:
    """Tests for FIRE edge handling through the game."""

    def test_held_fire_one_shot_per_press(self, game, tick):
        """Test holding FIRE fires once; each release-press cycle fires again."""
        from dino_duel.game.commands import Command

        game.start_level(1)
        silence_enemy(game)

        game.handle_command(Command.FIRE, True)
        tick(100)
        assert game.player.beams_remaining == 11

        game.handle_command(Command.FIRE, False)
        game.handle_command(Command.FIRE, True)
        tick(1)
        assert game.player.beams_remaining == 10

    def test_spawned_beam_travels(self, game, tick):
        """Test the hero's beam moves right each tick."""
        from dino_duel.game.commands import Command

        game.start_level(1)
        silence_enemy(game)

        game.handle_command(Command.FIRE, True)
        tick()
        beam = game.projectiles[0]
        x_before = beam.x
        tick()

        assert beam.x == x_before + game.config.player_beam_speed


class TestDefeat:
    """Tests for the defeat rules and their priority."""

    def test_last_heart_lost(self, game, tick):
        """Test hp 1 plus one hit is DEFEAT that tick and ticking halts."""
        from dino_duel.game.campaign import Phase, ResultCode

        game.start_level(1)
        silence_enemy(game)
        game.player.hp = 1
        game.projectiles.append(enemy_beam_on_player(game))

        tick()

        assert game.player.hp == 0
        assert game.phase == Phase.DEFEAT
        assert game.outcome.result is ResultCode.DEFEAT
        assert game.outcome.title == "DEFEAT"
        assert not game.running

        frozen = (game.enemy.x, game.enemy.y, game.frame_count)
        tick(30)
        assert (game.enemy.x, game.enemy.y) == frozen[:2]

    def test_out_of_bullets(self, game, tick):
        """Test no beams left, dino alive, nothing in flight is OUT OF BULLETS."""
        from dino_duel.game.campaign import DefeatReason, Phase

        game.start_level(1)
        silence_enemy(game)
        game.player.beams_remaining = 0
        game.enemy.hp = 3

        tick()

        assert game.phase == Phase.DEFEAT
        assert game.outcome.reason is DefeatReason.OUT_OF_BULLETS
        assert game.outcome.subtitle == "OUT OF BULLETS"

    def test_last_beam_in_flight_keeps_round_alive(self, game, tick):
        """Test the round continues while the final beam is still flying."""
        from dino_duel.game.campaign import Phase
        from dino_duel.game.entities import Projectile

        game.start_level(1)
        silence_enemy(game)
        game.player.beams_remaining = 0
        game.projectiles.append(Projectile(x=250, y=100, vx=10, vy=0, is_player=True))

        tick()
        assert game.phase == Phase.ROUND_ACTIVE

        # It flies off the field and is retired
        tick(80)
        assert game.phase == Phase.DEFEAT
        assert game.outcome.subtitle == "OUT OF BULLETS"

    def test_time_up(self, game, tick, manual_clock):
        """Test reaching the deadline with the dino alive is TIME'S UP."""
        from dino_duel.game.campaign import DefeatReason, Phase

        game.start_level(1)
        silence_enemy(game)
        manual_clock.advance(18_000)

        tick()

        assert game.phase == Phase.DEFEAT
        assert game.outcome.reason is DefeatReason.TIME_UP
        assert game.outcome.subtitle == "TIME'S UP"

    def test_hp_defeat_beats_time_up(self, game, tick, manual_clock):
        """Test losing the last heart wins over the timer in the same tick."""
        from dino_duel.game.campaign import DefeatReason

        game.start_level(1)
        silence_enemy(game)
        game.player.hp = 1
        game.projectiles.append(enemy_beam_on_player(game))
        manual_clock.advance(18_000)

        tick()

        assert game.outcome.reason is DefeatReason.HP_DEPLETED

    def test_fire_restarts_after_defeat(self, game, tick):
        """Test pressing FIRE after a defeat restarts the level without firing."""
        from dino_duel.game.campaign import Phase
        from dino_duel.game.commands import Command

        game.start_level(2)
        game.campaign.round_number = 2
        game.start_round()
        silence_enemy(game)
        game.player.beams_remaining = 0
        tick()
        assert game.phase == Phase.DEFEAT

        game.handle_command(Command.FIRE, True)
        assert game.phase == Phase.ROUND_ACTIVE
        assert game.campaign.round_number == 1
        assert game.player.beams_remaining == 12

        silence_enemy(game)
        tick(5)
        assert game.player.beams_remaining == 12

        game.handle_command(Command.FIRE, False)
        game.handle_command(Command.FIRE, True)
        tick()
        assert game.player.beams_remaining == 11


class TestRoundWin:
    """Tests for round and level victories."""

    def test_round_transition(self, game, tick, manual_clock):
        """Test beating the dino mid-level queues the next round after 2 s."""
        from dino_duel.game.campaign import Phase, ResultCode

        game.start_level(1)
        silence_enemy(game)
        game.enemy.hp = 1
        game.projectiles.append(player_beam_on_enemy(game))

        tick()

        assert game.enemy.hp == 0
        assert game.phase == Phase.ROUND_TRANSITION
        assert game.outcome.result is ResultCode.ROUND_COMPLETE
        assert game.outcome.title == "ROUND 2"
        assert game.campaign.round_number == 2
        assert game.get_state()["pending"] == "round_transition"

        manual_clock.advance(1900)
        tick()
        assert game.phase == Phase.ROUND_TRANSITION

        manual_clock.advance(100)
        tick()
        assert game.phase == Phase.ROUND_ACTIVE
        assert game.enemy.hp == game.enemy.max_hp == 7
        assert game.projectiles == [] or all(not p.is_player for p in game.projectiles)
        assert game.outcome is None

    def test_skip_round_transition(self, game, tick):
        """Test SKIP starts the next round immediately."""
        from dino_duel.game.campaign import Phase
        from dino_duel.game.commands import Command

        game.start_level(1)
        silence_enemy(game)
        game.enemy.hp = 1
        game.projectiles.append(player_beam_on_enemy(game))
        tick()

        press(game, Command.SKIP)

        assert game.phase == Phase.ROUND_ACTIVE
        assert game.campaign.round_number == 2
        assert game.seconds_remaining() == 15

    def test_final_round_is_level_victory(self, config, manual_clock):
        """Test winning round 3 of a 3-round level is a level victory that unlocks level 2."""
        from dino_duel.game.campaign import Phase, ResultCode
        from dino_duel.game.game import DinoDuelGame
        from dino_duel.game.progress import ProgressStore

        progress = ProgressStore()
        game = DinoDuelGame(config=config, progress=progress, clock=manual_clock, verbose=False)
        game.start_level(1)
        game.campaign.round_number = 3
        game.start_round()
        silence_enemy(game)
        game.enemy.hp = 1
        game.projectiles.append(player_beam_on_enemy(game))

        manual_clock.advance(config.tick_ms)
        game.step()

        assert game.phase == Phase.LEVEL_VICTORY
        assert game.outcome.result is ResultCode.LEVEL_COMPLETE
        assert game.outcome.subtitle == "Level 2 Unlocked!"
        assert progress.unlocked_levels == 2

        manual_clock.advance(config.level_victory_delay_ms)
        game.step()
        assert game.phase == Phase.IDLE

    def test_last_level_is_campaign_victory(self, game, tick):
        """Test clearing level 5 is the overall VICTORY."""
        from dino_duel.game.campaign import Phase, ResultCode

        game.start_level(5)
        game.campaign.round_number = 5
        game.start_round()
        silence_enemy(game)
        game.enemy.hp = 1
        game.projectiles.append(player_beam_on_enemy(game))

        tick()

        assert game.phase == Phase.LEVEL_VICTORY
        assert game.outcome.result is ResultCode.VICTORY
        assert game.outcome.subtitle == "ALL LEVELS COMPLETED!"
        assert game.campaign.unlocked_levels == 5

    def test_replay_does_not_relock(self, game, tick):
        """Test replaying an early level never lowers the unlocked level."""
        game.start_level(1)
        game.campaign.round_number = 3
        game.start_round()
        silence_enemy(game)
        game.enemy.hp = 1
        game.projectiles.append(player_beam_on_enemy(game))

        tick()

        assert game.campaign.unlocked_levels == 5

    def test_fire_leaves_victory_for_menu(self, game, tick):
        """Test FIRE during a level victory returns to the menu right away."""
        from dino_duel.game.campaign import Phase
        from dino_duel.game.commands import Command

        game.start_level(2)
        game.campaign.round_number = 3
        game.start_round()
        silence_enemy(game)
        game.enemy.hp = 1
        game.projectiles.append(player_beam_on_enemy(game))
        tick()

        press(game, Command.FIRE)

        assert game.phase == Phase.IDLE
        assert game.scheduler.pending() == []


class TestPauseAndQuit:
    """Tests for pausing and leaving rounds."""

    def test_pause_freezes_simulation_and_clock(self, game, tick, manual_clock):
        """Test a long pause changes neither entity state nor seconds remaining."""
        from dino_duel.game.commands import Command

        game.start_level(1)
        tick(30)
        press(game, Command.PAUSE_TOGGLE)
        assert game.paused

        before = game.get_state()
        manual_clock.advance(10_000)
        tick(60)
        during = game.get_state()
        assert (during["enemy"]["x"], during["enemy"]["y"]) == (before["enemy"]["x"], before["enemy"]["y"])
        assert during["seconds_remaining"] == before["seconds_remaining"]

        press(game, Command.PAUSE_TOGGLE)
        assert not game.paused
        after = tick()
        assert abs(after["seconds_remaining"] - before["seconds_remaining"]) <= 1

    def test_no_pause_during_transition(self, game, tick):
        """Test pause is refused between rounds."""
        from dino_duel.game.campaign import Phase

        game.start_level(1)
        silence_enemy(game)
        game.enemy.hp = 1
        game.projectiles.append(player_beam_on_enemy(game))
        tick()
        assert game.phase == Phase.ROUND_TRANSITION

        assert game.toggle_pause() is False
        assert not game.paused

    def test_quit_cancels_pending_transition(self, game, tick, manual_clock):
        """Test quitting mid-transition stops the stale round from starting."""
        from dino_duel.game.campaign import Phase
        from dino_duel.game.commands import Command

        game.start_level(1)
        silence_enemy(game)
        game.enemy.hp = 1
        game.projectiles.append(player_beam_on_enemy(game))
        tick()

        press(game, Command.QUIT)
        manual_clock.advance(10_000)
        tick()

        assert game.phase == Phase.IDLE
        assert game.pending_event is None

    def test_quit_while_paused(self, game, tick):
        """Test quitting clears the pause flag."""
        from dino_duel.game.campaign import Phase

        game.start_level(1)
        game.toggle_pause()
        game.quit_to_menu()

        assert game.phase == Phase.IDLE
        assert not game.paused


class TestInvariants:
    """Long-running checks over random play."""

    def test_hp_bounds_over_random_play(self, game, tick):
        """Test hp stays within [0, max_hp] for every tick of random play."""
        from dino_duel.game.campaign import Phase
        from dino_duel.game.commands import Command

        rng = random.Random(99)
        game.start_level(5)
        for _ in range(3000):
            command = rng.choice([Command.MOVE_UP, Command.MOVE_DOWN, Command.FIRE])
            game.handle_command(command, rng.random() < 0.5)
            tick()
            for entity in (game.player, game.enemy):
                assert 0 <= entity.hp <= entity.max_hp
            assert game.player.beams_remaining >= 0
            if game.phase == Phase.DEFEAT:
                game.restart_level()
            elif game.phase != Phase.ROUND_ACTIVE:
                game.skip()

    def test_retired_beams_removed_same_tick(self, game, tick):
        """Test a beam that lands a hit is gone before the next tick spawns anything."""
        game.start_level(1)
        silence_enemy(game)
        beam = player_beam_on_enemy(game)
        game.projectiles.append(beam)

        tick()

        assert beam.marked_for_deletion
        assert beam not in game.projectiles
        assert game.enemy.hp == game.enemy.max_hp - 1


class TestLoggingAndRecording:
    """Tests for event history and replay capture."""

    def test_event_log_bounded(self, config, manual_clock):
        """Test the event history keeps only the newest messages."""
        from dino_duel.game.game import DinoDuelGame

        game = DinoDuelGame(config=config, clock=manual_clock, verbose=False, history_size=3)
        for _ in range(5):
            game.start_level(1)

        assert len(game.event_log) == 3
        assert "Level reset" in game.event_log[-1]

    def test_verbose_prints_tagged_lines(self, config, manual_clock, capsys):
        """Test verbose games print [Game] tagged messages."""
        from dino_duel.game.game import DinoDuelGame

        game = DinoDuelGame(config=config, clock=manual_clock, verbose=True)
        game.start_level(1)

        assert "[Game] Starting Round 1" in capsys.readouterr().out

    def test_recording(self, game, tick):
        """Test recording captures one frame per tick plus the start frame."""
        game.start_level(1)
        game.start_recording()
        tick(10)

        history = game.stop_recording()

        assert len(history) == 11
        assert history[-1]["frame"] == game.frame_count
